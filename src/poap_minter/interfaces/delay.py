"""SettleDelay protocol - pause while the vendor provisions new codes."""

from __future__ import annotations

from typing import Protocol


class SettleDelay(Protocol):
    """Waits for asynchronously provisioned codes to become visible."""

    async def wait(self, round_no: int) -> None:
        """Pause before re-reading the pool in the given round."""
        ...
