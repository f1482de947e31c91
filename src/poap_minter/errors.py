"""Error taxonomy and the translation of vendor error wording into kinds."""

from __future__ import annotations

from enum import Enum


class VendorErrorKind(str, Enum):
    """What a failed vendor call means for the claim flow."""

    CODE_CLAIMED = "code_claimed"  # someone redeemed this QR hash first
    ALREADY_MINTED = "already_minted"  # the address already holds this event's POAP
    NOT_FOUND = "not_found"
    TRANSPORT = "transport"


# Known vendor phrasings, matched case-insensitively as substrings.
# Wording is not part of the vendor contract; keep every match here.
_CODE_CLAIMED_PHRASES = ("already claimed",)
_ALREADY_MINTED_PHRASES = (
    "already minted",
    "user already has",
    "already have",
    "drop",
)


def classify_vendor_message(message: str, status_code: int | None = None) -> VendorErrorKind:
    """Map a vendor error message (and HTTP status) to a VendorErrorKind."""
    text = (message or "").lower()
    if any(phrase in text for phrase in _CODE_CLAIMED_PHRASES):
        return VendorErrorKind.CODE_CLAIMED
    if any(phrase in text for phrase in _ALREADY_MINTED_PHRASES):
        return VendorErrorKind.ALREADY_MINTED
    if status_code == 404:
        return VendorErrorKind.NOT_FOUND
    return VendorErrorKind.TRANSPORT


class PoapMinterError(Exception):
    """Base class for all minter errors."""


class ValidationError(PoapMinterError):
    """Malformed address or unknown personality category."""


class ConfigurationError(PoapMinterError):
    """Vendor credentials or the event mapping are incomplete."""


class VendorError(PoapMinterError):
    """A vendor call failed. ``kind`` drives the claim flow."""

    def __init__(
        self,
        message: str,
        kind: VendorErrorKind = VendorErrorKind.TRANSPORT,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.status_code = status_code

    @classmethod
    def from_message(cls, message: str, status_code: int | None = None) -> VendorError:
        return cls(message, classify_vendor_message(message, status_code), status_code)

    @property
    def is_already_claimed(self) -> bool:
        """True for both race losses and address-level duplicates."""
        return self.kind in (VendorErrorKind.CODE_CLAIMED, VendorErrorKind.ALREADY_MINTED)


class PoolExhaustedError(PoapMinterError):
    """No unclaimed code could be redeemed, even after replenishing."""

    def __init__(
        self,
        message: str = "All POAPs are claimed. Please try again later.",
        last_rejection: VendorError | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.last_rejection = last_rejection


class RecoveryInconsistencyError(PoapMinterError):
    """The vendor reports an owned POAP but gives no usable token id."""
