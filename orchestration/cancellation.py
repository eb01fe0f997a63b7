"""Cancellation checks for a convergence run."""

import asyncio
from typing import Optional

from core.domain.exceptions import CancellationError


class CancellationGuard:
    """
    Observes a caller's cancel event and deadline.

    `deadline` is an absolute time on the running loop's clock
    (`asyncio.get_running_loop().time()`).
    """

    def __init__(
        self,
        cancel_event: Optional[asyncio.Event] = None,
        deadline: Optional[float] = None,
    ) -> None:
        self.cancel_event = cancel_event
        self.deadline = deadline

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return self.deadline - asyncio.get_running_loop().time()

    def check(self) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise CancellationError("run cancelled by caller")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise CancellationError("run deadline exceeded")

    async def wait(self, delay: float, sleep=asyncio.sleep) -> None:
        """Wait up to `delay` seconds, aborting early on cancel or deadline.

        A deadline that falls inside the delay ends the run once it passes.
        """
        self.check()
        timeout = delay
        cut_short = False
        remaining = self.remaining()
        if remaining is not None and remaining <= delay:
            timeout, cut_short = remaining, True

        if timeout > 0:
            if self.cancel_event is None:
                await sleep(timeout)
            else:
                try:
                    await asyncio.wait_for(self.cancel_event.wait(), timeout=timeout)
                except asyncio.TimeoutError:
                    pass

        self.check()
        if cut_short:
            raise CancellationError("run deadline exceeded")
