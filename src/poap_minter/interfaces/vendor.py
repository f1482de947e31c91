"""PoapVendor protocol - credentialed operations against the POAP API."""

from __future__ import annotations

from typing import Protocol

from poap_minter.models.poap import (
    ClaimCode,
    ClaimRecord,
    Credential,
    EventDetails,
    TokenDetails,
)


class PoapVendor(Protocol):
    """Access to the POAP vendor.

    Failures raise VendorError with a VendorErrorKind, never a raw
    transport exception.
    """

    async def get_credential(self) -> Credential:
        """Cached bearer credential, refreshed when expired."""
        ...

    async def list_codes(self, event_id: int, secret_code: str) -> list[ClaimCode]:
        """Point-in-time snapshot of an event's QR code pool."""
        ...

    async def check_code_status(self, qr_hash: str) -> ClaimRecord:
        """Authoritative claim status of a single QR hash."""
        ...

    async def redeem_code(self, qr_hash: str, address: str) -> ClaimRecord:
        """Claim a QR hash for an address."""
        ...

    async def request_more_codes(self, event_id: int, requested_codes: int = 25) -> None:
        """Ask the vendor to grow the pool. Provisioning is asynchronous."""
        ...

    async def get_event(self, event_id: int) -> EventDetails:
        ...

    async def get_token(self, token_id: int) -> TokenDetails:
        ...

    async def scan_address_for_event(self, address: str, event_id: int) -> TokenDetails | None:
        """POAP already held by an address for an event, if any."""
        ...
