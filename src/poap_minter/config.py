"""Configuration loading: TOML file + environment variables."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from poap_minter.models.config import (
    ClaimConfig,
    EventBinding,
    MinterConfig,
    PersonalityCategory,
)


def load_config(
    config_path: str | Path | None = None,
    env_prefix: str = "POAP_",
) -> MinterConfig:
    """Load minter configuration from a TOML file and env vars.

    Priority (highest wins):
        1. Environment variables (POAP_API_KEY, POAP_EVENT_ID_<CATEGORY>, etc.)
        2. TOML config file
        3. Defaults from MinterConfig
    """
    raw: dict = {}
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            with open(p, "rb") as f:
                raw = tomllib.load(f)

    cfg = MinterConfig()

    # ── POAP section ───────────────────────────────────────
    poap = raw.get("poap", {})
    if v := poap.get("api_base"):
        cfg.api_base = str(v)
    if v := poap.get("auth_base"):
        cfg.auth_base = str(v)
    if v := poap.get("audience"):
        cfg.audience = str(v)
    if v := poap.get("api_key"):
        cfg.api_key = str(v)
    if v := poap.get("client_id"):
        cfg.client_id = str(v)
    if v := poap.get("client_secret"):
        cfg.client_secret = str(v)
    if v := poap.get("request_timeout"):
        cfg.request_timeout = float(v)
    if v := poap.get("token_safety_margin"):
        cfg.token_safety_margin = int(v)

    # ── Server section ─────────────────────────────────────
    server = raw.get("server", {})
    if v := server.get("host"):
        cfg.host = str(v)
    if v := server.get("port"):
        cfg.port = int(v)
    if v := server.get("log_level"):
        cfg.log_level = str(v)

    # ── Claim section ──────────────────────────────────────
    claim_raw = raw.get("claim", {})
    cfg.claim = ClaimConfig(
        claim_rounds=int(claim_raw.get("claim_rounds", 2)),
        settle_delay=float(claim_raw.get("settle_delay", 2.0)),
        requested_codes=int(claim_raw.get("requested_codes", 25)),
    )

    # ── Events section: [events.mini_app_maxi] etc. ────────
    events_raw = raw.get("events", {})
    for category in PersonalityCategory:
        entry = events_raw.get(category.key, {})
        cfg.events[category] = EventBinding(
            event_id=int(entry.get("event_id", 0)),
            secret_code=str(entry.get("secret_code", "")),
        )

    # ── Environment variable overrides (highest priority) ──
    if v := os.environ.get(f"{env_prefix}API_KEY"):
        cfg.api_key = v
    if v := os.environ.get(f"{env_prefix}CLIENT_ID"):
        cfg.client_id = v
    if v := os.environ.get(f"{env_prefix}CLIENT_SECRET"):
        cfg.client_secret = v
    if v := os.environ.get(f"{env_prefix}API_BASE"):
        cfg.api_base = v
    if v := os.environ.get(f"{env_prefix}AUTH_BASE"):
        cfg.auth_base = v
    if v := os.environ.get(f"{env_prefix}SETTLE_DELAY"):
        cfg.claim.settle_delay = float(v)
    if v := os.environ.get(f"{env_prefix}CLAIM_ROUNDS"):
        cfg.claim.claim_rounds = int(v)

    for category in PersonalityCategory:
        binding = cfg.events[category]
        if v := os.environ.get(f"{env_prefix}EVENT_ID_{category.name}"):
            binding.event_id = _parse_event_id(v)
        if v := os.environ.get(f"{env_prefix}SECRET_CODE_{category.name}"):
            binding.secret_code = v

    return cfg


def _parse_event_id(value: str) -> int:
    """Event ids from the environment; anything non-numeric counts as unset."""
    try:
        return int(value)
    except ValueError:
        return 0
