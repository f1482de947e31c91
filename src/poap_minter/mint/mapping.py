"""Personality category -> POAP event mapping."""

from __future__ import annotations

from poap_minter.errors import ConfigurationError, ValidationError
from poap_minter.models.config import EventBinding, MinterConfig, PersonalityCategory


def parse_category(value: str | PersonalityCategory) -> PersonalityCategory:
    """Turn a quiz result string into a PersonalityCategory."""
    if isinstance(value, PersonalityCategory):
        return value
    try:
        return PersonalityCategory(value)
    except ValueError:
        raise ValidationError("Invalid personality type") from None


class EventMapping:
    """Resolves each personality category to its event id and pool secret.

    Distinct categories must map to distinct events.
    """

    def __init__(self, bindings: dict[PersonalityCategory, EventBinding]) -> None:
        seen: dict[int, PersonalityCategory] = {}
        for category, binding in bindings.items():
            if binding.event_id <= 0:
                continue
            other = seen.get(binding.event_id)
            if other is not None:
                raise ConfigurationError(
                    f"Event {binding.event_id} is bound to both "
                    f"'{other.value}' and '{category.value}'"
                )
            seen[binding.event_id] = category
        self._bindings = dict(bindings)

    @classmethod
    def from_config(cls, cfg: MinterConfig) -> EventMapping:
        return cls(cfg.events)

    def categories(self) -> list[PersonalityCategory]:
        return list(PersonalityCategory)

    def resolve(self, category: PersonalityCategory) -> EventBinding:
        binding = self._bindings.get(category)
        if binding is None or not binding.is_configured():
            raise ConfigurationError(
                f"POAP event for '{category.value}' is not configured "
                f"(set POAP_EVENT_ID_{category.name} and POAP_SECRET_CODE_{category.name})"
            )
        return binding
