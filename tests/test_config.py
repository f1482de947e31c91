"""Configuration loading and the personality → event mapping."""

from __future__ import annotations

import os

import pytest

from poap_minter.config import load_config
from poap_minter.errors import ConfigurationError, ValidationError
from poap_minter.mint.mapping import EventMapping, parse_category
from poap_minter.models.config import (
    EventBinding,
    MinterConfig,
    PersonalityCategory,
)

from tests.conftest import EVENT_IDS, make_test_config

CONFIG_TOML = """
[poap]
api_key = "toml-key"
client_id = "toml-client"
client_secret = "toml-secret"
request_timeout = 12

[claim]
claim_rounds = 3
settle_delay = 0.5
requested_codes = 10

[server]
port = 9090

[events.mini_app_maxi]
event_id = 201
secret_code = "maxi-secret"

[events.l2_believer]
event_id = 204
secret_code = "l2-secret"
"""


@pytest.fixture
def clean_env(monkeypatch):
    for name in list(os.environ):
        if name.startswith("POAP_"):
            monkeypatch.delenv(name)
    return monkeypatch


def test_defaults_without_file(clean_env):
    cfg = load_config(None)

    assert cfg.api_base == "https://api.poap.tech"
    assert cfg.claim.claim_rounds == 2
    assert cfg.claim.settle_delay == 2.0
    assert cfg.claim.requested_codes == 25
    assert set(cfg.events) == set(PersonalityCategory)
    assert "api_key" in cfg.missing_values()


def test_toml_file_loaded(tmp_path, clean_env):
    path = tmp_path / "minter.toml"
    path.write_text(CONFIG_TOML)

    cfg = load_config(path)

    assert cfg.api_key == "toml-key"
    assert cfg.request_timeout == 12.0
    assert cfg.claim.claim_rounds == 3
    assert cfg.claim.settle_delay == 0.5
    assert cfg.claim.requested_codes == 10
    assert cfg.port == 9090
    assert cfg.events[PersonalityCategory.MINI_APP_MAXI] == EventBinding(201, "maxi-secret")
    assert cfg.events[PersonalityCategory.L2_BELIEVER].event_id == 204
    assert cfg.events[PersonalityCategory.IMPACT_REGEN].event_id == 0


def test_env_overrides_toml(tmp_path, clean_env):
    path = tmp_path / "minter.toml"
    path.write_text(CONFIG_TOML)
    clean_env.setenv("POAP_API_KEY", "env-key")
    clean_env.setenv("POAP_EVENT_ID_MINI_APP_MAXI", "301")
    clean_env.setenv("POAP_SECRET_CODE_IMPACT_REGEN", "regen-secret")
    clean_env.setenv("POAP_EVENT_ID_IMPACT_REGEN", "303")
    clean_env.setenv("POAP_SETTLE_DELAY", "0")

    cfg = load_config(path)

    assert cfg.api_key == "env-key"
    assert cfg.events[PersonalityCategory.MINI_APP_MAXI] == EventBinding(301, "maxi-secret")
    assert cfg.events[PersonalityCategory.IMPACT_REGEN] == EventBinding(303, "regen-secret")
    assert cfg.claim.settle_delay == 0.0


def test_non_numeric_event_id_counts_as_unset(clean_env):
    clean_env.setenv("POAP_EVENT_ID_VERIFIED_HUMAN", "not-a-number")

    cfg = load_config(None)

    assert cfg.events[PersonalityCategory.VERIFIED_HUMAN].event_id == 0
    assert "events.verified_human.event_id" in cfg.missing_values()


def test_placeholders_count_as_missing():
    cfg = make_test_config(api_key="build-time-placeholder")
    cfg.events[PersonalityCategory.STABLECOIN_SAVVY] = EventBinding(105, "build-time-placeholder")

    missing = cfg.missing_values()

    assert missing == ["api_key", "events.stablecoin_savvy.secret_code"]


def test_complete_config_has_nothing_missing(test_config):
    assert test_config.missing_values() == []


# ── Mapping ──────────────────────────────────────────────────────


def test_mapping_resolves_every_category(test_config):
    mapping = EventMapping.from_config(test_config)

    resolved = {c: mapping.resolve(c).event_id for c in mapping.categories()}

    assert resolved == EVENT_IDS
    assert len(set(resolved.values())) == len(PersonalityCategory)


def test_mapping_rejects_shared_event():
    events = {
        PersonalityCategory.MINI_APP_MAXI: EventBinding(101, "a"),
        PersonalityCategory.IMPACT_REGEN: EventBinding(101, "b"),
    }
    with pytest.raises(ConfigurationError):
        EventMapping(events)


def test_mapping_unconfigured_category():
    mapping = EventMapping.from_config(MinterConfig())

    with pytest.raises(ConfigurationError, match="POAP_EVENT_ID_IMPACT_REGEN"):
        mapping.resolve(PersonalityCategory.IMPACT_REGEN)


def test_parse_category():
    assert parse_category("L2 believer") is PersonalityCategory.L2_BELIEVER
    assert parse_category(PersonalityCategory.IMPACT_REGEN) is PersonalityCategory.IMPACT_REGEN
    with pytest.raises(ValidationError):
        parse_category("degen")
