"""Mint service - the single inbound operation: mint(category, address)."""

from __future__ import annotations

import logging
import re

from poap_minter.errors import (
    PoapMinterError,
    PoolExhaustedError,
    RecoveryInconsistencyError,
    ValidationError,
    VendorError,
)
from poap_minter.mint.mapping import EventMapping, parse_category
from poap_minter.mint.orchestrator import ClaimOrchestrator
from poap_minter.mint.presenter import MintPresenter
from poap_minter.mint.recovery import OwnershipRecovery
from poap_minter.models.config import PersonalityCategory
from poap_minter.models.records import MintResult, MintSuccess

log = logging.getLogger(__name__)

_ADDRESS_RE = re.compile(r"0x[a-fA-F0-9]{40}")


def is_valid_address(address: object) -> bool:
    """``0x`` followed by exactly 40 hex digits."""
    return isinstance(address, str) and _ADDRESS_RE.fullmatch(address) is not None


class MintService:
    """Mints the POAP of a quiz result to a wallet address.

    Validation and configuration errors fail fast, before any vendor call.
    Failures that mean "this address already has it" go through
    OwnershipRecovery; if that finds nothing (or fails) the original
    error is what the caller sees.
    """

    def __init__(
        self,
        mapping: EventMapping,
        orchestrator: ClaimOrchestrator,
        recovery: OwnershipRecovery,
        presenter: MintPresenter | None = None,
    ) -> None:
        self._mapping = mapping
        self._orchestrator = orchestrator
        self._recovery = recovery
        self._presenter = presenter or MintPresenter()

    async def mint(self, category: str | PersonalityCategory, address: str) -> MintResult:
        try:
            if not is_valid_address(address):
                raise ValidationError("Invalid wallet address format")
            personality = parse_category(category)
        except ValidationError as exc:
            log.info("Rejected mint request: %s", exc)
            return self._presenter.present_error(exc)

        log.info("Mint requested: %s -> %s", personality.value, address)
        try:
            binding = self._mapping.resolve(personality)
            record = await self._orchestrator.claim(
                binding.event_id, binding.secret_code, address,
            )
        except (VendorError, PoolExhaustedError) as exc:
            if _is_already_claimed(exc):
                recovered = await self._try_recover(personality, address)
                if recovered is not None:
                    return recovered
            log.error("POAP minting error: %s", exc)
            return self._presenter.present_error(exc)
        except PoapMinterError as exc:
            log.error("POAP minting error: %s", exc)
            return self._presenter.present_error(exc)
        except Exception as exc:
            log.error("Unexpected minting error: %s", exc, exc_info=True)
            return self._presenter.present_error(exc)

        return self._presenter.present_claim(record)

    async def _try_recover(
        self, personality: PersonalityCategory, address: str
    ) -> MintSuccess | None:
        try:
            return await self._recovery.recover(personality, address)
        except RecoveryInconsistencyError as exc:
            log.error("Ownership recovery inconsistent: %s", exc)
        except Exception as exc:
            log.warning(
                "Failed to scan for existing POAP, returning original error: %s", exc,
            )
        return None


def _is_already_claimed(exc: Exception) -> bool:
    if isinstance(exc, VendorError):
        return exc.is_already_claimed
    if isinstance(exc, PoolExhaustedError):
        return exc.last_rejection is not None
    return False
