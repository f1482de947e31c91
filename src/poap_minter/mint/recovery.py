"""Ownership recovery - turn "already minted" failures into the owned POAP."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from poap_minter.errors import RecoveryInconsistencyError, VendorError
from poap_minter.interfaces.vendor import PoapVendor
from poap_minter.mint.mapping import EventMapping
from poap_minter.mint.presenter import MintPresenter
from poap_minter.models.config import PersonalityCategory
from poap_minter.models.records import MintSuccess

log = logging.getLogger(__name__)


class OwnershipRecovery:
    """Looks up the POAP an address already holds for a category's event."""

    def __init__(
        self,
        vendor: PoapVendor,
        mapping: EventMapping,
        presenter: MintPresenter | None = None,
    ) -> None:
        self._vendor = vendor
        self._mapping = mapping
        self._presenter = presenter or MintPresenter()

    async def recover(self, category: PersonalityCategory, address: str) -> MintSuccess | None:
        """Return the owned POAP as an ``already_owned`` success, or None.

        Raises RecoveryInconsistencyError when the vendor has a record for
        the address but no token id. Vendor errors propagate.
        """
        event_id = self._mapping.resolve(category).event_id

        token = await self._vendor.scan_address_for_event(address, event_id)
        if token is None:
            log.info("No existing POAP for %s on event %d", address, event_id)
            return None

        if token.id is None:
            raise RecoveryInconsistencyError(
                f"Found existing POAP for {address} on event {event_id} "
                "but token ID is unavailable"
            )

        claimed_date = token.created
        if not claimed_date:
            try:
                claimed_date = (await self._vendor.get_token(token.id)).created
            except VendorError as exc:
                log.warning("Could not fetch created date of token %d: %s", token.id, exc)
            if not claimed_date:
                claimed_date = datetime.now(timezone.utc).isoformat()

        event = await self._vendor.get_event(event_id)
        log.info("Recovered existing POAP %d for %s (event %d)", token.id, address, event_id)
        return self._presenter.present_recovered(
            token, event.summary(), claimed_date, event_id,
        )
