import base64
import io
import struct
import wave

import numpy as np
import pytest

from core.pcm_audio import (
    SAMPLE_RATE, DecodeError, decode_pcm_base64, float_samples_to_pcm, narration_wav_bytes,
)


def _b64_pcm(values) -> str:
    return base64.b64encode(struct.pack(f"<{len(values)}h", *values)).decode("ascii")


def test_decode_normalizes_int16_to_unit_range() -> None:
    buf = decode_pcm_base64(_b64_pcm([0, 16384, -16384, 32767, -32768]))

    assert list(buf.samples) == pytest.approx([0.0, 0.5, -0.5, 32767 / 32768.0, -1.0])
    assert buf.channels == 1
    assert buf.sample_rate == SAMPLE_RATE
    assert all(-1.0 <= s <= 1.0 for s in buf.samples)


def test_decode_reencode_roundtrips_within_one_lsb() -> None:
    values = [-32768, -12345, -1, 0, 1, 7, 255, 256, 12345, 32767]
    raw = struct.pack(f"<{len(values)}h", *values)

    back = float_samples_to_pcm(decode_pcm_base64(base64.b64encode(raw).decode()).samples)
    back_values = struct.unpack(f"<{len(values)}h", back)

    assert len(back) == len(raw)
    assert all(abs(a - b) <= 1 for a, b in zip(values, back_values))


def test_frame_count_and_duration() -> None:
    buf = decode_pcm_base64(_b64_pcm([0] * SAMPLE_RATE))

    assert buf.frame_count == SAMPLE_RATE
    assert buf.duration == pytest.approx(1.0)


def test_empty_payload_is_zero_length_buffer() -> None:
    buf = decode_pcm_base64("")

    assert buf.frame_count == 0
    assert buf.duration == 0.0


def test_malformed_base64_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_pcm_base64("not base64!!")


def test_odd_byte_length_raises_decode_error() -> None:
    with pytest.raises(DecodeError):
        decode_pcm_base64(base64.b64encode(b"\x01\x02\x03").decode())


def test_narration_wav_bytes_wraps_pcm_in_riff_container() -> None:
    wav_bytes = narration_wav_bytes(_b64_pcm([1, 2, 3, 4]))

    assert wav_bytes[:4] == b"RIFF"
    with wave.open(io.BytesIO(wav_bytes), "rb") as wf:
        assert wf.getnchannels() == 1
        assert wf.getsampwidth() == 2
        assert wf.getframerate() == SAMPLE_RATE
        assert wf.getnframes() == 4


def test_decode_yields_float32_ndarray() -> None:
    buf = decode_pcm_base64(_b64_pcm([100, -100]))

    assert isinstance(buf.samples, np.ndarray)
    assert buf.samples.dtype == np.float32


def test_float_samples_to_pcm_clips_out_of_range() -> None:
    raw = float_samples_to_pcm(np.array([1.5, -2.0, 0.25], dtype=np.float32))

    assert struct.unpack("<3h", raw) == (32767, -32768, 8192)
