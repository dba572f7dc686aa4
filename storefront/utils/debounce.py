"""Debounce helper for rapidly changing input such as search text"""

import asyncio
import logging
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class Debouncer:
    """
    Runs only the last of a burst of calls, `delay` seconds after it.

    Must be used from inside a running event loop.
    """

    def __init__(self, delay: float = 0.4):
        self.delay = delay
        self._handle: Optional[asyncio.TimerHandle] = None
        self._pending: Optional[tuple[Callable[..., Any], tuple]] = None
        self._settled = asyncio.Event()
        self._settled.set()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def call(self, fn: Callable[..., Any], *args: Any) -> None:
        """Schedule fn(*args), replacing any call still waiting"""
        self.cancel()
        self._pending = (fn, args)
        self._settled.clear()
        if self.delay <= 0:
            self.flush()
            return
        self._handle = asyncio.get_running_loop().call_later(self.delay, self.flush)

    def flush(self) -> None:
        """Run the waiting call now"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self._pending is None:
            return
        fn, args = self._pending
        self._pending = None
        try:
            fn(*args)
        finally:
            self._settled.set()

    def cancel(self) -> None:
        """Drop the waiting call"""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._pending = None
        self._settled.set()

    async def wait(self) -> None:
        """Wait until no call is waiting, including calls made meanwhile"""
        while self._pending is not None:
            await self._settled.wait()
