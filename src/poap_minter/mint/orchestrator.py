"""Claim orchestrator - finds, verifies and redeems a QR code from an event pool."""

from __future__ import annotations

import logging

from poap_minter.errors import PoolExhaustedError, VendorError, VendorErrorKind
from poap_minter.interfaces.delay import SettleDelay
from poap_minter.interfaces.vendor import PoapVendor
from poap_minter.models.poap import ClaimCode, ClaimRecord

log = logging.getLogger(__name__)


class ClaimOrchestrator:
    """Drives one claim against a shared, replenishable pool of QR codes.

    Each round:
    1. Reads the pool and keeps codes not marked claimed (the listing
       can be stale, so the flag is re-checked per code)
    2. Walks candidates in listing order: status check, then redeem
    3. Skips codes lost to concurrent claimants; aborts on any other error

    The first round replenishes only when the pool reads empty; every later
    round replenishes first. After ``claim_rounds`` rounds without a
    redemption the pool is reported exhausted.

    There is no local locking: the vendor's redeem endpoint is the only
    arbiter between racing claimants.
    """

    def __init__(
        self,
        vendor: PoapVendor,
        delay: SettleDelay,
        claim_rounds: int = 2,
        requested_codes: int = 25,
    ) -> None:
        self._vendor = vendor
        self._delay = delay
        self._claim_rounds = max(claim_rounds, 1)
        self._requested_codes = requested_codes

    async def claim(self, event_id: int, secret_code: str, address: str) -> ClaimRecord:
        """Redeem one unclaimed code of ``event_id`` for ``address``.

        Returns the winning code's full claim record. Raises
        PoolExhaustedError when every round ends without a redemption, or
        VendorError for any failure that is not a lost race.
        """
        last_rejection: VendorError | None = None

        for round_no in range(1, self._claim_rounds + 1):
            if round_no == 1:
                candidates = await self._fetch_candidates(event_id, secret_code)
                if not candidates:
                    log.info("Pool for event %d is empty, replenishing", event_id)
                    candidates = await self._replenish(event_id, secret_code, round_no)
            else:
                log.info(
                    "All candidates for event %d taken, replenishing (round %d/%d)",
                    event_id, round_no, self._claim_rounds,
                )
                candidates = await self._replenish(event_id, secret_code, round_no)

            qr_hash, rejection = await self._attempt(candidates, address)
            if rejection is not None:
                last_rejection = rejection
            if qr_hash is not None:
                record = await self._vendor.check_code_status(qr_hash)
                log.info(
                    "Claimed event %d for %s with QR %s (round %d)",
                    event_id, address, qr_hash, round_no,
                )
                return record

        log.warning(
            "Pool for event %d exhausted after %d rounds", event_id, self._claim_rounds,
        )
        raise PoolExhaustedError(last_rejection=last_rejection)

    async def _fetch_candidates(self, event_id: int, secret_code: str) -> list[ClaimCode]:
        codes = await self._vendor.list_codes(event_id, secret_code)
        unclaimed = [code for code in codes if not code.claimed]
        log.debug(
            "Event %d pool: %d codes, %d unclaimed", event_id, len(codes), len(unclaimed),
        )
        return unclaimed

    async def _replenish(self, event_id: int, secret_code: str, round_no: int) -> list[ClaimCode]:
        await self._vendor.request_more_codes(event_id, self._requested_codes)
        await self._delay.wait(round_no)
        return await self._fetch_candidates(event_id, secret_code)

    async def _attempt(
        self, candidates: list[ClaimCode], address: str
    ) -> tuple[str | None, VendorError | None]:
        """Try candidates in order.

        Returns (winning qr_hash or None, last redeem rejection or None).
        """
        rejection: VendorError | None = None
        for code in candidates:
            try:
                status = await self._vendor.check_code_status(code.qr_hash)
            except VendorError as exc:
                if exc.kind is VendorErrorKind.CODE_CLAIMED:
                    log.debug("QR %s already claimed (status check)", code.qr_hash)
                    continue
                raise

            if status.claimed:
                log.debug("QR %s already claimed, skipping", code.qr_hash)
                continue

            try:
                await self._vendor.redeem_code(code.qr_hash, address)
            except VendorError as exc:
                if exc.kind is VendorErrorKind.CODE_CLAIMED:
                    log.warning("Lost race for QR %s: %s", code.qr_hash, exc.message)
                    rejection = exc
                    continue
                log.error("Redeem of QR %s aborted: %s", code.qr_hash, exc.message)
                raise
            return code.qr_hash, rejection

        return None, rejection
