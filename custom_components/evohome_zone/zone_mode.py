"""Override/schedule read model for an Evohome zone."""

from __future__ import annotations

from enum import StrEnum

from .zone_model import SetpointMode, ZoneStatus


class ZoneMode(StrEnum):
    """Operating mode shown for a zone."""

    OFF = "off"
    SCHEDULE = "schedule"
    TEMPORARY_OVERRIDE = "temporary_override"
    PERMANENT_OVERRIDE = "permanent_override"

    @property
    def is_override(self) -> bool:
        return self in (ZoneMode.TEMPORARY_OVERRIDE, ZoneMode.PERMANENT_OVERRIDE)

    @property
    def badge(self) -> str:
        """Short label for the mode badge."""
        return _BADGES[self]


class ZoneAction(StrEnum):
    """Commit actions offered to the user."""

    OVERRIDE = "override"
    PERMANENT = "permanent"
    BACK_TO_SCHEDULE = "back_to_schedule"
    UPDATE_OVERRIDE = "update_override"


_BADGES: dict[ZoneMode, str] = {
    ZoneMode.OFF: "Off",
    ZoneMode.SCHEDULE: "Schedule",
    ZoneMode.TEMPORARY_OVERRIDE: "Override",
    ZoneMode.PERMANENT_OVERRIDE: "Permanent",
}

_SETPOINT_TO_ZONE_MODE: dict[SetpointMode, ZoneMode] = {
    SetpointMode.TEMPORARY_OVERRIDE: ZoneMode.TEMPORARY_OVERRIDE,
    SetpointMode.PERMANENT_OVERRIDE: ZoneMode.PERMANENT_OVERRIDE,
}


def derive_zone_mode(status: ZoneStatus) -> ZoneMode:
    """Derive the zone mode shown on the badge from a projected status."""
    if status.is_off:
        return ZoneMode.OFF
    return derive_control_mode(status)


def derive_control_mode(status: ZoneStatus) -> ZoneMode:
    """Derive the mode that decides the controls.

    Only the setpoint mode counts: a zone switched off while an override is
    active still offers Back-to-Schedule.
    """
    return _SETPOINT_TO_ZONE_MODE.get(status.setpoint_mode, ZoneMode.SCHEDULE)


def legal_actions(mode: ZoneMode, dirty: bool) -> tuple[ZoneAction, ...]:
    """Return the commit actions visible for *mode* and the draft state.

    The off state offers the same actions as the schedule: the badge says
    "Off" but a staged edit can still be committed as an override.
    """
    if mode.is_override:
        if dirty:
            return (ZoneAction.BACK_TO_SCHEDULE, ZoneAction.UPDATE_OVERRIDE)
        return (ZoneAction.BACK_TO_SCHEDULE,)
    if dirty:
        return (ZoneAction.OVERRIDE, ZoneAction.PERMANENT)
    return ()


def controls_visible(mode: ZoneMode, dirty: bool) -> bool:
    """Return True when the controls panel is expanded."""
    return dirty or mode.is_override
