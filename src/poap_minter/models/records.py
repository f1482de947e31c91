"""Mint operation results handed back to callers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from poap_minter.models.poap import EventSummary


class ErrorClass(str, Enum):
    """Coarse failure classification exposed to callers."""

    VALIDATION = "validation"
    POOL_EXHAUSTED = "pool_exhausted"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS = {
    ErrorClass.VALIDATION: 400,
    ErrorClass.POOL_EXHAUSTED: 404,
    ErrorClass.CONFIGURATION: 500,
    ErrorClass.INTERNAL: 500,
}


@dataclass
class MintSuccess:
    """A POAP now held by the requested address."""

    token_id: int | None
    event_id: int | None
    claimed_date: str | None
    event: EventSummary | None = None
    already_owned: bool = False
    qr_hash: str | None = None
    message: str = "POAP minted successfully!"


@dataclass
class MintFailure:
    """Terminal failure of a mint request."""

    error_message: str
    error_class: ErrorClass = ErrorClass.INTERNAL

    @property
    def http_status(self) -> int:
        return self.error_class.http_status


MintResult = Union[MintSuccess, MintFailure]
