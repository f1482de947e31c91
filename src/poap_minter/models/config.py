"""Configuration models for the minter."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

PLACEHOLDER = "build-time-placeholder"


class PersonalityCategory(str, Enum):
    """Quiz outcome. Each category is bound to exactly one POAP event."""

    MINI_APP_MAXI = "mini app maxi"
    VERIFIED_HUMAN = "verified human"
    IMPACT_REGEN = "impact regen"
    L2_BELIEVER = "L2 believer"
    STABLECOIN_SAVVY = "stablecoin savvy"

    @property
    def key(self) -> str:
        """Config/env key, e.g. ``mini_app_maxi``."""
        return self.name.lower()


@dataclass
class EventBinding:
    """Event id and pool secret for one personality category."""

    event_id: int = 0
    secret_code: str = ""

    def is_configured(self) -> bool:
        return self.event_id > 0 and bool(self.secret_code) and self.secret_code != PLACEHOLDER


@dataclass
class ClaimConfig:
    """Claim orchestration tuning."""

    claim_rounds: int = 2  # attempt passes over the pool, replenishing between them
    settle_delay: float = 2.0  # seconds to wait after requesting more codes
    requested_codes: int = 25  # codes asked for per replenishment


def _default_events() -> dict[PersonalityCategory, EventBinding]:
    return {category: EventBinding() for category in PersonalityCategory}


@dataclass
class MinterConfig:
    """Complete minter configuration."""

    # POAP vendor
    api_base: str = "https://api.poap.tech"
    auth_base: str = "https://auth.accounts.poap.xyz"
    audience: str = "https://api.poap.tech"
    api_key: str = ""
    client_id: str = ""
    client_secret: str = ""
    request_timeout: float = 30.0  # seconds
    token_safety_margin: int = 60  # seconds shaved off credential lifetime

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "info"

    claim: ClaimConfig = field(default_factory=ClaimConfig)
    events: dict[PersonalityCategory, EventBinding] = field(default_factory=_default_events)

    def missing_values(self) -> list[str]:
        """Names of settings that are absent or still placeholders."""
        missing = []
        for name in ("api_key", "client_id", "client_secret"):
            value = getattr(self, name)
            if not value or value == PLACEHOLDER:
                missing.append(name)
        for category in PersonalityCategory:
            binding = self.events.get(category, EventBinding())
            if binding.event_id <= 0:
                missing.append(f"events.{category.key}.event_id")
            if not binding.secret_code or binding.secret_code == PLACEHOLDER:
                missing.append(f"events.{category.key}.secret_code")
        return missing
