"""
Two-phase reset of a "current record" holder.

The front end starts closing a form, plays its closing animation and
then completes the transition. If it never completes, the reset happens
after a fallback delay.
"""

import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)

CLOSE_FALLBACK_MS = 120


class CloseTransition:
    """Handle returned by begin_close(); complete() resets at most once."""

    def __init__(self, reset: Callable[[], None], fallback_ms: int = CLOSE_FALLBACK_MS):
        self._reset = reset
        self._done = False
        self._timer: Optional[asyncio.TimerHandle] = None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = None
        if loop is not None:
            self._timer = loop.call_later(fallback_ms / 1000, self._fallback)
        else:
            logger.debug("No running event loop; close waits for complete()")

    @property
    def done(self) -> bool:
        return self._done

    def complete(self) -> None:
        if self._done:
            return
        self._done = True
        if self._timer is not None:
            self._timer.cancel()
        self._reset()

    def cancel(self) -> None:
        """Drop the transition without resetting; newer state has replaced it."""
        if self._done:
            return
        self._done = True
        if self._timer is not None:
            self._timer.cancel()

    def _fallback(self) -> None:
        if not self._done:
            logger.debug("Close transition not completed; resetting after fallback delay")
        self.complete()
