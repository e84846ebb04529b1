# -*- coding: utf-8 -*-
"""
Raw PCM helpers for the Gemini TTS narration.

The TTS model returns headerless 16-bit little-endian mono PCM at 24 kHz.
We decode it into a float32 buffer for the preview clock, and wrap it in a
WAV container for downloads and the browser player.
"""
import base64
import binascii
import io
import wave
from dataclasses import dataclass, field

import numpy as np

SAMPLE_RATE = 24000
CHANNELS = 1
SAMPLE_WIDTH = 2  # bytes (int16)


class DecodeError(ValueError):
    """Narration payload is not valid base64 PCM."""


@dataclass
class PcmBuffer:
    samples: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.float32))
    sample_rate: int = SAMPLE_RATE
    channels: int = CHANNELS

    @property
    def frame_count(self) -> int:
        return len(self.samples) // self.channels

    @property
    def duration(self) -> float:
        """Seconds of audio."""
        return self.frame_count / float(self.sample_rate)


def pcm_bytes_from_base64(b64: str) -> bytes:
    try:
        raw = base64.b64decode(b64, validate=True)
    except (binascii.Error, ValueError, TypeError) as e:
        raise DecodeError(f"malformed base64 audio payload: {e}") from e
    if len(raw) % SAMPLE_WIDTH:
        raise DecodeError(f"odd PCM byte length ({len(raw)}), expected 16-bit samples")
    return raw


def decode_pcm_base64(b64: str) -> PcmBuffer:
    """base64 int16 LE mono PCM → float32 samples in [-1.0, 1.0)."""
    raw = pcm_bytes_from_base64(b64)
    samples = np.frombuffer(raw, dtype="<i2").astype(np.float32) / 32768.0
    return PcmBuffer(samples=samples)


def float_samples_to_pcm(samples) -> bytes:
    """Inverse of decode: float samples → int16 LE bytes (clipped)."""
    ints = np.clip(np.round(np.asarray(samples, dtype=np.float64) * 32768.0), -32768, 32767)
    return ints.astype("<i2").tobytes()


def pcm_to_wav_bytes(pcm: bytes, channels: int = CHANNELS, rate: int = SAMPLE_RATE,
                     sample_width: int = SAMPLE_WIDTH) -> bytes:
    mem = io.BytesIO()
    with wave.open(mem, "wb") as wf:
        wf.setnchannels(channels)
        wf.setsampwidth(sample_width)
        wf.setframerate(rate)
        wf.writeframes(pcm)
    return mem.getvalue()


def narration_wav_bytes(b64: str) -> bytes:
    return pcm_to_wav_bytes(pcm_bytes_from_base64(b64))
