"""Mint result presenter - stable result shapes for callers."""

from __future__ import annotations

import logging
from dataclasses import asdict

from poap_minter.errors import (
    ConfigurationError,
    PoapMinterError,
    PoolExhaustedError,
    ValidationError,
    VendorError,
)
from poap_minter.models.poap import ClaimRecord, EventSummary, TokenDetails
from poap_minter.models.records import ErrorClass, MintFailure, MintResult, MintSuccess

log = logging.getLogger(__name__)

_GENERIC_FAILURE = "Failed to mint POAP"


class MintPresenter:
    """Turns claim records, recovered tokens and errors into MintResults."""

    def present_claim(self, record: ClaimRecord) -> MintSuccess:
        return MintSuccess(
            token_id=record.id,
            event_id=record.event_id,
            claimed_date=record.claimed_date or record.created_date,
            event=record.event,
            already_owned=False,
            qr_hash=record.qr_hash,
        )

    def present_recovered(
        self,
        token: TokenDetails,
        event: EventSummary | None,
        claimed_date: str,
        event_id: int,
    ) -> MintSuccess:
        return MintSuccess(
            token_id=token.id,
            event_id=token.event.id if token.event else event_id,
            claimed_date=claimed_date,
            event=event,
            already_owned=True,
            message="You already have this POAP!",
        )

    def present_error(self, exc: Exception) -> MintFailure:
        if isinstance(exc, ValidationError):
            error_class = ErrorClass.VALIDATION
        elif isinstance(exc, PoolExhaustedError):
            error_class = ErrorClass.POOL_EXHAUSTED
        elif isinstance(exc, ConfigurationError):
            error_class = ErrorClass.CONFIGURATION
        else:
            error_class = ErrorClass.INTERNAL

        if isinstance(exc, VendorError):
            log.info("Vendor failure classified as %s", exc.kind.value)
        if isinstance(exc, PoapMinterError):
            message = str(exc) or _GENERIC_FAILURE
        else:
            # Internals stay in the log
            log.debug("Hiding unexpected %s from caller: %s", type(exc).__name__, exc)
            message = _GENERIC_FAILURE
        return MintFailure(error_message=message, error_class=error_class)

    def to_response(self, result: MintResult) -> tuple[dict, int]:
        """JSON body and HTTP status for the mint endpoint."""
        if isinstance(result, MintFailure):
            return {"error": result.error_message}, result.http_status

        body = {
            "success": True,
            "message": result.message,
            "tokenId": result.token_id,
            "eventId": result.event_id,
            "claimedDate": result.claimed_date,
            "event": asdict(result.event) if result.event else None,
            "alreadyOwned": result.already_owned,
        }
        if result.qr_hash:
            body["qrHash"] = result.qr_hash
        return body, 200
