"""Settle delay used between replenishing and re-reading a pool."""

from __future__ import annotations

import asyncio
import logging

log = logging.getLogger(__name__)


class FixedSettleDelay:
    """Sleeps a fixed number of seconds every round."""

    def __init__(self, seconds: float = 2.0) -> None:
        self._seconds = seconds

    async def wait(self, round_no: int) -> None:
        if self._seconds <= 0:
            return
        log.debug("Waiting %.1fs for new codes (round %d)", self._seconds, round_no)
        await asyncio.sleep(self._seconds)
