"""
Single-slot debounce timer on the asyncio event loop.
"""

import asyncio
from typing import Callable, Optional


class DebounceTimer:
    """
    Holds at most one scheduled callback.

    Arming replaces (and cancels) whatever was scheduled before, so only the
    last call within the delay window ever fires.
    """

    def __init__(self, delay: float):
        """
        Args:
            delay: Seconds to wait after the last arm() before firing
        """
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, callback: Callable[[], None]) -> None:
        """Schedule callback after the delay, dropping any earlier schedule"""
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, callback)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, callback: Callable[[], None]) -> None:
        self._handle = None
        callback()
