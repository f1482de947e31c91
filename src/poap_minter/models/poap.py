"""POAP vendor data shapes, parsed from the vendor's JSON responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _int_or_none(value: Any) -> int | None:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Credential:
    """Bearer token for the vendor API. ``expires_at`` is epoch seconds."""

    token: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


@dataclass
class ClaimCode:
    """One entry of an event's pool snapshot. ``claimed`` may be stale."""

    qr_hash: str
    claimed: bool = False

    @classmethod
    def from_api(cls, data: dict) -> ClaimCode:
        return cls(qr_hash=str(data.get("qr_hash", "")), claimed=bool(data.get("claimed", False)))


@dataclass
class EventSummary:
    """Display metadata of a POAP drop."""

    id: int
    fancy_id: str = ""
    name: str = ""
    description: str = ""
    image_url: str = ""
    year: int | None = None
    start_date: str = ""
    end_date: str = ""

    @classmethod
    def from_api(cls, data: dict) -> EventSummary:
        return cls(
            id=int(data["id"]),
            fancy_id=data.get("fancy_id") or "",
            name=data.get("name") or "",
            description=data.get("description") or "",
            image_url=data.get("image_url") or "",
            year=_int_or_none(data.get("year")),
            start_date=data.get("start_date") or "",
            end_date=data.get("end_date") or "",
        )


@dataclass
class EventDetails(EventSummary):
    """Full event record from ``GET /events/id/{id}``."""

    city: str = ""
    country: str = ""
    event_url: str = ""
    expiry_date: str = ""
    created_date: str = ""
    timezone: str = ""
    virtual_event: bool = False
    private_event: bool = False

    @classmethod
    def from_api(cls, data: dict) -> EventDetails:
        summary = EventSummary.from_api(data)
        return cls(
            id=summary.id,
            fancy_id=summary.fancy_id,
            name=summary.name,
            description=summary.description,
            image_url=summary.image_url,
            year=summary.year,
            start_date=summary.start_date,
            end_date=summary.end_date,
            city=data.get("city") or "",
            country=data.get("country") or "",
            event_url=data.get("event_url") or "",
            expiry_date=data.get("expiry_date") or "",
            created_date=data.get("created_date") or "",
            timezone=data.get("timezone") or "",
            virtual_event=bool(data.get("virtual_event", False)),
            private_event=bool(data.get("private_event", False)),
        )

    def summary(self) -> EventSummary:
        return EventSummary(
            id=self.id,
            fancy_id=self.fancy_id,
            name=self.name,
            description=self.description,
            image_url=self.image_url,
            year=self.year,
            start_date=self.start_date,
            end_date=self.end_date,
        )


@dataclass
class ClaimRecord:
    """Vendor claim record for one QR hash (status check or redemption)."""

    id: int | None
    qr_hash: str
    event_id: int | None = None
    beneficiary: str | None = None
    claimed: bool = False
    claimed_date: str | None = None
    created_date: str | None = None
    tx_hash: str | None = None
    event: EventSummary | None = None

    @classmethod
    def from_api(cls, data: dict) -> ClaimRecord:
        event = data.get("event")
        return cls(
            id=_int_or_none(data.get("id")),
            qr_hash=str(data.get("qr_hash", "")),
            event_id=_int_or_none(data.get("event_id")),
            beneficiary=data.get("beneficiary"),
            claimed=bool(data.get("claimed", False)),
            claimed_date=data.get("claimed_date"),
            created_date=data.get("created_date"),
            tx_hash=data.get("tx_hash"),
            event=EventSummary.from_api(event) if isinstance(event, dict) and "id" in event else None,
        )


@dataclass
class TokenDetails:
    """A minted POAP. ``id`` can be missing in scan responses."""

    id: int | None
    owner: str = ""
    created: str | None = None
    event: EventSummary | None = None

    @classmethod
    def from_api(cls, data: dict) -> TokenDetails:
        token_id = _int_or_none(data.get("id"))
        if token_id is None:
            # Scan responses have used both spellings
            token_id = _int_or_none(data.get("tokenId", data.get("token_id")))
        event = data.get("event")
        return cls(
            id=token_id,
            owner=data.get("owner") or "",
            created=data.get("created"),
            event=EventSummary.from_api(event) if isinstance(event, dict) and "id" in event else None,
        )
