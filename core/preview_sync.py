# -*- coding: utf-8 -*-
"""
Live preview: subtitle + image slideshow synced to the narration clock.

Subtitle timing is a fixed split of the narration length (hook 20%, body 60%,
conclusion 20%) and images are spread evenly. The TTS response carries no
word timestamps, so there is nothing finer to sync against.
"""
import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Callable, Optional

from core.data_models import GeneratedContent, Segment
from core.pcm_audio import PcmBuffer, decode_pcm_base64
from core.playback import AudioPlayer, ClockPlayer, LoopTicker, TickHandle

logger = logging.getLogger(__name__)

HOOK_END = 0.2
BODY_END = 0.8
TICK_INTERVAL = 0.1  # seconds


def select_segment(elapsed: float, duration: float) -> Segment:
    if elapsed < duration * HOOK_END:
        return Segment.HOOK
    if elapsed < duration * BODY_END:
        return Segment.BODY
    return Segment.CONCLUSION


def select_image_index(elapsed: float, duration: float, image_count: int) -> int:
    if image_count < 1 or duration <= 0:
        return 0
    idx = math.floor((elapsed / duration) * image_count)
    return max(0, min(idx, image_count - 1))


@dataclass(frozen=True)
class PreviewState:
    playing: bool = False
    subtitle: str = ""
    image_index: int = 0
    segment: Optional[Segment] = None


@dataclass
class PlaybackSession:
    start_time: float
    duration: float
    player: AudioPlayer
    tick: Optional[TickHandle] = None
    segment: Optional[Segment] = None
    image_index: int = 0


class PreviewSynchronizer:
    """
    Stopped → Playing → Stopped.

    ``toggle()`` is the play button: it starts a session when stopped and
    stops the running one otherwise. Explicit stop, natural end of audio and
    the tick observing ``elapsed >= duration`` all go through ``_teardown``,
    which is idempotent per session.
    """

    def __init__(
        self,
        content: GeneratedContent,
        buffer: PcmBuffer,
        player_factory: Callable[[], AudioPlayer],
        ticker,
        on_update: Optional[Callable[[PreviewState], None]] = None,
        interval: float = TICK_INTERVAL,
    ):
        self.content = content
        self.buffer = buffer
        self.interval = interval
        self._player_factory = player_factory
        self._ticker = ticker
        self._on_update = on_update
        self._session: Optional[PlaybackSession] = None
        self.state = PreviewState()

    @property
    def is_playing(self) -> bool:
        return self._session is not None

    @property
    def progress(self) -> float:
        """Fraction of the running session elapsed, 0.0 when stopped."""
        session = self._session
        if session is None or session.duration <= 0:
            return 0.0
        elapsed = session.player.now() - session.start_time
        return max(0.0, min(1.0, elapsed / session.duration))

    def toggle(self) -> bool:
        """Returns True if a session is running afterwards."""
        if self._session is not None:
            self.stop()
            return False
        return self.start()

    def start(self) -> bool:
        if self._session is not None:
            return False
        if not self.content.audio:
            logger.info("preview skipped: bundle has no narration audio")
            return False

        player = self._player_factory()
        session = PlaybackSession(
            start_time=player.now(),
            duration=self.buffer.duration,
            player=player,
        )
        self._session = session
        self._set_state(PreviewState(playing=True))

        player.start(self.buffer, lambda: self._teardown(session, "ended"))
        tick = self._ticker.every(self.interval, lambda: self._tick(session))
        if self._session is session:
            session.tick = tick
        else:
            # player reported completion synchronously
            tick.cancel()
        return self._session is session

    def stop(self) -> bool:
        session = self._session
        if session is None:
            return False
        return self._teardown(session, "stopped")

    def _tick(self, session: PlaybackSession) -> None:
        if self._session is not session:
            return
        elapsed = session.player.now() - session.start_time
        if elapsed >= session.duration:
            self._teardown(session, "elapsed")
            return

        session.segment = select_segment(elapsed, session.duration)
        image_count = len(self.content.images)
        if image_count:
            session.image_index = select_image_index(elapsed, session.duration, image_count)
        self._set_state(PreviewState(
            playing=True,
            subtitle=self.content.script.segment_text(session.segment),
            image_index=session.image_index,
            segment=session.segment,
        ))

    def _teardown(self, session: PlaybackSession, reason: str) -> bool:
        if self._session is not session:
            return False
        self._session = None
        if session.tick is not None:
            session.tick.cancel()
        session.player.stop()
        logger.debug("preview stopped (%s)", reason)
        self._set_state(PreviewState())
        return True

    def _set_state(self, state: PreviewState) -> None:
        if state == self.state:
            return
        self.state = state
        if self._on_update is not None:
            self._on_update(state)


async def play_preview(
    content: GeneratedContent,
    render: Optional[Callable[[PreviewState], None]] = None,
    interval: float = TICK_INTERVAL,
    on_progress: Optional[Callable[[float], None]] = None,
) -> PreviewSynchronizer:
    """
    Run one preview session on the current loop until it ends.

    ``render`` and ``on_progress`` are called from this coroutine (not from
    loop callbacks) so that exceptions raised by the UI layer propagate to
    the caller. ``on_progress`` runs on every iteration, even when the frame
    is unchanged.
    """
    buffer = decode_pcm_base64(content.audio) if content.audio else PcmBuffer()
    loop = asyncio.get_running_loop()
    sync = PreviewSynchronizer(
        content,
        buffer,
        player_factory=lambda: ClockPlayer(loop),
        ticker=LoopTicker(loop),
        interval=interval,
    )
    try:
        sync.start()
        while sync.is_playing:
            if render:
                render(sync.state)
            if on_progress:
                on_progress(sync.progress)
            await asyncio.sleep(interval)
    finally:
        sync.stop()
    if render:
        render(sync.state)
    return sync
