"""Outbound command sink for Evohome zone commands."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from homeassistant.components.climate.const import ATTR_HVAC_MODE, HVACMode
from homeassistant.const import ATTR_ENTITY_ID
from homeassistant.core import HomeAssistant

from .const import ATTR_DURATION, ATTR_HOURS, ATTR_MINUTES, ATTR_SETPOINT
from .zone_model import ZoneCommand

_LOGGER = logging.getLogger(__name__)


class ZoneCommandSink(Protocol):
    """Carries zone commands to the remote control service.

    Each coroutine completes when the command is accepted and raises when it
    is rejected.
    """

    async def async_set_override(
        self,
        entity_id: str,
        setpoint: float,
        duration: tuple[int, int] | None = None,
    ) -> None:
        """Set an override; *duration* is (hours, minutes), None for permanent."""

    async def async_clear_override(self, entity_id: str) -> None:
        """Return the zone to its schedule."""

    async def async_set_run_mode(self, entity_id: str, hvac_mode: HVACMode) -> None:
        """Switch the zone between heat and off."""


class ServiceCommandSink:
    """ZoneCommandSink backed by Home Assistant service calls."""

    def __init__(self, hass: HomeAssistant) -> None:
        self.hass = hass

    async def async_set_override(
        self,
        entity_id: str,
        setpoint: float,
        duration: tuple[int, int] | None = None,
    ) -> None:
        payload: dict[str, Any] = {
            ATTR_ENTITY_ID: entity_id,
            ATTR_SETPOINT: setpoint,
        }
        if duration is None:
            command = ZoneCommand.PERMANENT_OVERRIDE
        else:
            command = ZoneCommand.TEMPORARY_OVERRIDE
            hours, minutes = duration
            payload[ATTR_DURATION] = {ATTR_HOURS: hours, ATTR_MINUTES: minutes}
        await self._async_call(command, payload)

    async def async_clear_override(self, entity_id: str) -> None:
        await self._async_call(
            ZoneCommand.CLEAR_OVERRIDE, {ATTR_ENTITY_ID: entity_id}
        )

    async def async_set_run_mode(self, entity_id: str, hvac_mode: HVACMode) -> None:
        await self._async_call(
            ZoneCommand.SET_RUN_MODE,
            {ATTR_ENTITY_ID: entity_id, ATTR_HVAC_MODE: hvac_mode},
        )

    async def _async_call(self, command: ZoneCommand, payload: dict[str, Any]) -> None:
        _LOGGER.debug(
            "Calling %s.%s for %s: %r",
            command.service_domain,
            command.service_name,
            command.label,
            payload,
        )
        await self.hass.services.async_call(
            command.service_domain,
            command.service_name,
            payload,
            blocking=True,
        )
