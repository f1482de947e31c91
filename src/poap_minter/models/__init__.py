"""Data models for the poap_minter service."""

from poap_minter.models.config import (
    ClaimConfig,
    EventBinding,
    MinterConfig,
    PersonalityCategory,
    PLACEHOLDER,
)
from poap_minter.models.poap import (
    ClaimCode,
    ClaimRecord,
    Credential,
    EventDetails,
    EventSummary,
    TokenDetails,
)
from poap_minter.models.records import ErrorClass, MintFailure, MintResult, MintSuccess

__all__ = [
    "ClaimConfig", "EventBinding", "MinterConfig", "PersonalityCategory", "PLACEHOLDER",
    "ClaimCode", "ClaimRecord", "Credential", "EventDetails", "EventSummary", "TokenDetails",
    "ErrorClass", "MintFailure", "MintResult", "MintSuccess",
]
