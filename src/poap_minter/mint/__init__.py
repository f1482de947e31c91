"""Claim orchestration, ownership recovery and result presentation."""

from poap_minter.mint.delay import FixedSettleDelay
from poap_minter.mint.mapping import EventMapping, parse_category
from poap_minter.mint.orchestrator import ClaimOrchestrator
from poap_minter.mint.presenter import MintPresenter
from poap_minter.mint.recovery import OwnershipRecovery
from poap_minter.mint.service import MintService, is_valid_address

__all__ = [
    "FixedSettleDelay",
    "EventMapping", "parse_category",
    "ClaimOrchestrator",
    "MintPresenter",
    "OwnershipRecovery",
    "MintService", "is_valid_address",
]
