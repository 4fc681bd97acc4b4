"""Shared Evohome zone model/types/helpers."""

from __future__ import annotations

import datetime
import math
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, StrEnum
from typing import Any

from homeassistant.components.climate.const import (
    ATTR_CURRENT_TEMPERATURE,
    ATTR_MAX_TEMP,
    ATTR_MIN_TEMP,
    ATTR_PRESET_MODE,
    DOMAIN as CLIMATE_DOMAIN,
    SERVICE_SET_HVAC_MODE,
    HVACMode,
)
from homeassistant.const import ATTR_FRIENDLY_NAME, ATTR_TEMPERATURE
from homeassistant.core import State
from homeassistant.util import dt as dt_util

from .const import (
    ATTR_ACTIVE_FAULTS,
    ATTR_FAULT_TYPE,
    ATTR_SETPOINT_STATUS,
    ATTR_SETPOINTS,
    ATTR_STATUS,
    ATTR_TEMPERATURE_STATUS,
    DEFAULT_MAX_TEMP,
    DEFAULT_MIN_TEMP,
    DEFAULT_ZONE_NAME,
    EVOHOME_DOMAIN,
    SERVICE_CLEAR_ZONE_OVERRIDE,
    SERVICE_SET_ZONE_OVERRIDE,
)


class SetpointMode(StrEnum):
    """Setpoint modes reported by an Evohome zone."""

    FOLLOW_SCHEDULE = "FollowSchedule"
    TEMPORARY_OVERRIDE = "TemporaryOverride"
    PERMANENT_OVERRIDE = "PermanentOverride"


OVERRIDE_MODES: frozenset[SetpointMode] = frozenset({
    SetpointMode.TEMPORARY_OVERRIDE,
    SetpointMode.PERMANENT_OVERRIDE,
})


class ZoneCommand(Enum):
    """Outbound zone commands and the setpoint mode each one should produce."""

    # fmt: off
    #                      domain            service                       expected_mode                        label
    TEMPORARY_OVERRIDE = (EVOHOME_DOMAIN,  SERVICE_SET_ZONE_OVERRIDE,    SetpointMode.TEMPORARY_OVERRIDE,     "Temporary override")
    PERMANENT_OVERRIDE = (EVOHOME_DOMAIN,  SERVICE_SET_ZONE_OVERRIDE,    SetpointMode.PERMANENT_OVERRIDE,     "Permanent override")
    CLEAR_OVERRIDE     = (EVOHOME_DOMAIN,  SERVICE_CLEAR_ZONE_OVERRIDE,  SetpointMode.FOLLOW_SCHEDULE,        "Cancel override")
    SET_RUN_MODE       = (CLIMATE_DOMAIN,  SERVICE_SET_HVAC_MODE,        None,                                "HVAC toggle")
    # fmt: on

    def __init__(
        self,
        service_domain: str,
        service_name: str,
        expected_mode: SetpointMode | None,
        label: str,
    ) -> None:
        self.service_domain = service_domain
        self.service_name = service_name
        self.expected_mode = expected_mode
        self.label = label


@dataclass(frozen=True)
class ZoneFault:
    """A single active fault reported for the zone."""

    fault_type: str | None


@dataclass(frozen=True)
class ZoneStatus:
    """Normalized projection of a zone's Home Assistant state."""

    friendly_name: str
    current_temperature: float | None
    target_temperature: float | None
    preset_mode: str | None
    hvac_mode: str
    min_temp: float
    max_temp: float
    this_sp_from: datetime.datetime | None
    this_sp_temp: float | None
    next_sp_from: datetime.datetime | None
    next_sp_temp: float | None
    setpoint_mode: SetpointMode
    target_heat_temperature: float | None
    override_until: datetime.datetime | None
    sensor_temperature: float | None
    sensor_available: bool
    active_faults: tuple[ZoneFault, ...]

    @property
    def is_override(self) -> bool:
        """Return True when a manual override is active."""
        return self.setpoint_mode in OVERRIDE_MODES

    @property
    def is_off(self) -> bool:
        return self.hvac_mode == HVACMode.OFF


def project_status(state: State, name_override: str | None = None) -> ZoneStatus:
    """Project a raw zone state into a ZoneStatus.

    Never raises: every field falls back to a defined default so a partially
    populated or malformed state still yields a usable projection.
    """
    attrs = state.attributes
    status = _as_mapping(attrs.get(ATTR_STATUS))
    setpoints = _as_mapping(status.get(ATTR_SETPOINTS))
    setpoint_status = _as_mapping(status.get(ATTR_SETPOINT_STATUS))
    temperature_status = _as_mapping(status.get(ATTR_TEMPERATURE_STATUS))

    min_temp = _coerce_temperature(attrs.get(ATTR_MIN_TEMP))
    max_temp = _coerce_temperature(attrs.get(ATTR_MAX_TEMP))

    return ZoneStatus(
        friendly_name=(
            name_override or attrs.get(ATTR_FRIENDLY_NAME) or DEFAULT_ZONE_NAME
        ),
        current_temperature=_coerce_temperature(attrs.get(ATTR_CURRENT_TEMPERATURE)),
        target_temperature=_coerce_temperature(attrs.get(ATTR_TEMPERATURE)),
        preset_mode=attrs.get(ATTR_PRESET_MODE),
        hvac_mode=state.state,
        min_temp=min_temp if min_temp is not None else DEFAULT_MIN_TEMP,
        max_temp=max_temp if max_temp is not None else DEFAULT_MAX_TEMP,
        this_sp_from=_coerce_datetime(setpoints.get("this_sp_from")),
        this_sp_temp=_coerce_temperature(setpoints.get("this_sp_temp")),
        next_sp_from=_coerce_datetime(setpoints.get("next_sp_from")),
        next_sp_temp=_coerce_temperature(setpoints.get("next_sp_temp")),
        setpoint_mode=_coerce_setpoint_mode(setpoint_status.get("setpoint_mode")),
        target_heat_temperature=_coerce_temperature(
            setpoint_status.get("target_heat_temperature")
        ),
        override_until=_coerce_datetime(setpoint_status.get("until")),
        sensor_temperature=_coerce_temperature(temperature_status.get("temperature")),
        sensor_available=temperature_status.get("is_available") is not False,
        active_faults=tuple(
            ZoneFault(fault_type=fault.get(ATTR_FAULT_TYPE))
            for fault in _as_list(status.get(ATTR_ACTIVE_FAULTS))
            if isinstance(fault, Mapping)
        ),
    )


def effective_target(status: ZoneStatus) -> float | None:
    """Return the temperature the zone is actually aiming for."""
    if status.is_override:
        if status.target_heat_temperature is not None:
            return status.target_heat_temperature
        return status.target_temperature
    if status.this_sp_temp is not None:
        return status.this_sp_temp
    return status.target_temperature


def _as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def _coerce_setpoint_mode(value: Any) -> SetpointMode:
    if value is None:
        return SetpointMode.FOLLOW_SCHEDULE
    try:
        return SetpointMode(value)
    except ValueError:
        return SetpointMode.FOLLOW_SCHEDULE


def _coerce_temperature(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _coerce_datetime(value: Any) -> datetime.datetime | None:
    if isinstance(value, datetime.datetime):
        return dt_util.as_utc(value)
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = dt_util.parse_datetime(value)
    except ValueError:
        return None
    return dt_util.as_utc(parsed) if parsed is not None else None
