# -*- coding: utf-8 -*-
"""
Scheduling + audio-clock primitives for the live preview.

Everything runs on one asyncio loop: ticks and the "ended" notification are
plain loop callbacks, never threads.
"""
import asyncio
import logging
from typing import Callable, Optional, Protocol

from core.pcm_audio import PcmBuffer

logger = logging.getLogger(__name__)


class TickHandle:
    """Returned by ``LoopTicker.every``; ``cancel()`` guarantees no further callbacks."""

    def __init__(self):
        self.cancelled = False
        self._timer: Optional[asyncio.TimerHandle] = None

    def cancel(self) -> None:
        self.cancelled = True
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


class LoopTicker:
    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def every(self, interval: float, callback: Callable[[], None]) -> TickHandle:
        loop = self._loop or asyncio.get_running_loop()
        handle = TickHandle()

        def _fire():
            handle._timer = None
            if handle.cancelled:
                return
            callback()
            # callback may have cancelled us (session teardown)
            if not handle.cancelled:
                handle._timer = loop.call_later(interval, _fire)

        handle._timer = loop.call_later(interval, _fire)
        return handle


class AudioPlayer(Protocol):
    def now(self) -> float: ...

    def start(self, buffer: PcmBuffer, on_ended: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class ClockPlayer:
    """
    Audio clock for one playback session.

    Real sound is rendered by the browser (st.audio autoplay); this object
    mirrors its timeline on the loop's monotonic clock and reports natural
    completion after ``buffer.duration`` seconds.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop or asyncio.get_running_loop()
        self._ended: Optional[asyncio.TimerHandle] = None
        self.playing = False

    def now(self) -> float:
        return self._loop.time()

    def start(self, buffer: PcmBuffer, on_ended: Callable[[], None]) -> None:
        if self.playing:
            raise RuntimeError("ClockPlayer already started; create a new player per session")
        self.playing = True

        def _done():
            self._ended = None
            self.playing = False
            on_ended()

        self._ended = self._loop.call_later(max(0.0, buffer.duration), _done)
        logger.debug("playback started (%.2fs)", buffer.duration)

    def stop(self) -> None:
        if self._ended is not None:
            self._ended.cancel()
            self._ended = None
        self.playing = False
