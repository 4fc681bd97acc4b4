"""Shared fixtures for evohome_zone tests."""

from __future__ import annotations

import copy
from typing import Any
from unittest.mock import AsyncMock

import pytest

from homeassistant.components.climate.const import HVACMode
from homeassistant.core import HomeAssistant, State

from custom_components.evohome_zone.zone_commands import ServiceCommandSink
from custom_components.evohome_zone.zone_config import ZoneConfig
from custom_components.evohome_zone.zone_controller import ZoneController

ZONE_ENTITY = "climate.living_room"

# ── Default zone attributes ────────────────────────────────────────────

DEFAULT_ZONE_ATTRS: dict[str, Any] = {
    "friendly_name": "Living Room",
    "current_temperature": 20.0,
    "temperature": 21.0,
    "min_temp": 5.0,
    "max_temp": 35.0,
    "status": {
        "setpoints": {
            "this_sp_from": "2026-02-27T10:00:00+00:00",
            "this_sp_temp": 21.0,
            "next_sp_from": "2026-02-27T11:00:00+00:00",
            "next_sp_temp": 19.0,
        },
        "setpoint_status": {
            "setpoint_mode": "FollowSchedule",
            "target_heat_temperature": 21.0,
            "until": None,
        },
        "temperature_status": {
            "temperature": 20.0,
            "is_available": True,
        },
        "activeFaults": [],
    },
}


def make_zone_attributes(
    setpoint_mode: str | None = "FollowSchedule",
    target_heat_temperature: float | None = 21.0,
    until: str | None = None,
    **attr_overrides: Any,
) -> dict[str, Any]:
    """Build zone attributes with the setpoint status replaced."""
    attrs = copy.deepcopy(DEFAULT_ZONE_ATTRS)
    setpoint_status = attrs["status"]["setpoint_status"]
    setpoint_status["setpoint_mode"] = setpoint_mode
    setpoint_status["target_heat_temperature"] = target_heat_temperature
    setpoint_status["until"] = until
    attrs.update(attr_overrides)
    return attrs


def make_zone_state(
    state: str = HVACMode.HEAT,
    setpoint_mode: str | None = "FollowSchedule",
    target_heat_temperature: float | None = 21.0,
    until: str | None = None,
    **attr_overrides: Any,
) -> State:
    """Create a zone State object like the evohome climate entity reports."""
    return State(
        ZONE_ENTITY,
        state,
        make_zone_attributes(
            setpoint_mode=setpoint_mode,
            target_heat_temperature=target_heat_temperature,
            until=until,
            **attr_overrides,
        ),
    )


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def zone_config() -> ZoneConfig:
    return ZoneConfig(entity_id=ZONE_ENTITY)


@pytest.fixture
def sink() -> AsyncMock:
    """Command sink whose calls all succeed."""
    return AsyncMock(spec=ServiceCommandSink)


@pytest.fixture
def make_controller(hass: HomeAssistant, zone_config: ZoneConfig, sink: AsyncMock):
    """Factory fixture: build an unstarted ZoneController.

    Every controller built is stopped on teardown so no deadline timer lingers.
    """
    created: list[ZoneController] = []

    def _make(**overrides: Any) -> ZoneController:
        kwargs: dict[str, Any] = {
            "hass": hass,
            "config": zone_config,
            "sink": sink,
            "listener": None,
        }
        kwargs.update(overrides)
        controller = ZoneController(**kwargs)
        created.append(controller)
        return controller

    yield _make

    for controller in created:
        controller.async_stop()


@pytest.fixture
def controller(make_controller) -> ZoneController:
    """Controller that has seen the default schedule-mode zone state."""
    ctrl = make_controller()
    ctrl.async_handle_snapshot(make_zone_state())
    return ctrl
