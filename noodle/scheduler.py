"""Cancellable periodic timer on the asyncio event loop."""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class IntervalScheduler:
    """Calls `callback` every `interval_ms` until cancelled.

    At most one timer is live: scheduling again cancels the previous one.
    The callback runs synchronously inside the task, so a tick always
    completes before anything else on the loop gets to run.
    """

    def __init__(self):
        self.task: Optional[asyncio.Task] = None
        self.interval_ms: Optional[int] = None

    @property
    def active(self) -> bool:
        return self.task is not None and not self.task.done()

    def schedule(self, interval_ms: int, callback: Callable[[], None]):
        self.cancel()
        self.interval_ms = interval_ms
        logger.debug("Ticking every %d ms", interval_ms)
        self.task = asyncio.get_running_loop().create_task(self._run(interval_ms, callback))

    def cancel(self):
        if self.task is not None:
            self.task.cancel()
            self.task = None

    async def _run(self, interval_ms: int, callback: Callable[[], None]):
        while True:
            await asyncio.sleep(interval_ms / 1000)
            try:
                callback()
            except Exception:
                # Keep ticking so the timer still matches the game's running flag.
                logger.exception("Tick callback failed")
