"""Evohome zone controller configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import voluptuous as vol

from homeassistant.const import CONF_NAME
from homeassistant.exceptions import HomeAssistantError
from homeassistant.helpers import config_validation as cv

from .const import (
    CONF_COMPACT,
    CONF_ENTITY,
    CONF_SHOW_ACCENT_BAR,
    CONF_SHOW_HVAC_TOGGLE,
    CONF_TEMP_PILLS,
    STUB_ENTITY_ID,
)

ZONE_CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(
            CONF_ENTITY, msg="You must define an entity (climate.xxx)"
        ): cv.entity_id,
        vol.Optional(CONF_NAME): vol.Any(None, cv.string),
        vol.Optional(CONF_SHOW_HVAC_TOGGLE, default=True): cv.boolean,
        vol.Optional(CONF_SHOW_ACCENT_BAR, default=True): cv.boolean,
        vol.Optional(CONF_TEMP_PILLS, default=False): cv.boolean,
        vol.Optional(CONF_COMPACT, default=False): cv.boolean,
    },
    extra=vol.ALLOW_EXTRA,
)


class ZoneConfigError(HomeAssistantError):
    """Raised when a zone controller is configured incorrectly."""


@dataclass(frozen=True)
class ZoneConfig:
    """Validated, static controller configuration."""

    entity_id: str
    name: str | None = None
    show_hvac_toggle: bool = True
    show_accent_bar: bool = True
    temp_pills: bool = False
    compact: bool = False

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> ZoneConfig:
        """Validate *raw* and build a ZoneConfig; raises ZoneConfigError."""
        if not isinstance(raw, Mapping):
            raise ZoneConfigError("Invalid zone configuration: expected a mapping")
        try:
            data = ZONE_CONFIG_SCHEMA(dict(raw))
        except vol.Invalid as err:
            raise ZoneConfigError(f"Invalid zone configuration: {err}") from err
        return cls(
            entity_id=data[CONF_ENTITY],
            name=data.get(CONF_NAME) or None,
            show_hvac_toggle=data[CONF_SHOW_HVAC_TOGGLE],
            show_accent_bar=data[CONF_SHOW_ACCENT_BAR],
            temp_pills=data[CONF_TEMP_PILLS],
            compact=data[CONF_COMPACT],
        )


def stub_config() -> dict[str, Any]:
    """Minimal example configuration."""
    return {CONF_ENTITY: STUB_ENTITY_ID}
