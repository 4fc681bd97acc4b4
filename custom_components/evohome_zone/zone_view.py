"""View-model handed to the zone renderer."""

from __future__ import annotations

import datetime
from dataclasses import dataclass, field

from homeassistant.const import UnitOfTemperature
from homeassistant.util import dt as dt_util

from .const import (
    CARD_SIZE_COMPACT,
    CARD_SIZE_FULL,
    CUSTOM_MINUTES_STEP,
    DURATION_PRESETS,
    FAULT_FALLBACK_TEXT,
)
from .zone_config import ZoneConfig
from .zone_draft import Draft
from .zone_format import (
    format_duration,
    format_end_time,
    format_next_switch,
    format_setpoint,
    format_temperature,
    format_time_remaining,
    format_until,
)
from .zone_mode import (
    ZoneAction,
    ZoneMode,
    controls_visible,
    derive_control_mode,
    derive_zone_mode,
    legal_actions,
)
from .zone_model import SetpointMode, ZoneStatus, effective_target


@dataclass(frozen=True)
class DurationOption:
    """A selectable duration choice."""

    value: int
    label: str
    selected: bool = False


@dataclass(frozen=True)
class ZoneView:
    """Everything the renderer needs to draw one zone."""

    entity_id: str
    found: bool
    name: str = ""
    mode: ZoneMode | None = None
    badge: str = ""
    setpoint_mode: SetpointMode | None = None
    current_temperature: float | None = None
    current_temperature_text: str = ""
    effective_target: float | None = None
    display_target: float | None = None
    display_target_text: str = ""
    scheduled_setpoint_text: str = ""
    next_switch_text: str = ""
    next_setpoint_text: str = ""
    override_target_text: str | None = None
    remaining_text: str | None = None
    until_text: str | None = None
    faults: tuple[str, ...] = ()
    sensor_available: bool = True
    controls_visible: bool = False
    show_duration: bool = False
    actions: tuple[ZoneAction, ...] = ()
    duration_minutes: int = 0
    duration_presets: tuple[DurationOption, ...] = ()
    custom_duration_visible: bool = False
    custom_hours: tuple[DurationOption, ...] = field(default=(), repr=False)
    custom_minutes: tuple[DurationOption, ...] = field(default=(), repr=False)
    duration_text: str = ""
    duration_end_text: str = ""
    hvac_toggle_label: str | None = None
    loading: bool = False
    compact: bool = False
    card_size: int = CARD_SIZE_FULL
    show_accent_bar: bool = True
    temp_pills: bool = False


def build_not_found_view(config: ZoneConfig, loading: bool = False) -> ZoneView:
    """View for a configured entity that has no state (yet)."""
    return ZoneView(
        entity_id=config.entity_id,
        found=False,
        loading=loading,
        show_accent_bar=config.show_accent_bar,
        temp_pills=config.temp_pills,
    )


def build_zone_view(
    config: ZoneConfig,
    status: ZoneStatus,
    draft: Draft,
    *,
    loading: bool = False,
    expanded: bool = False,
    now: datetime.datetime | None = None,
) -> ZoneView:
    """Compose the view for *status* with the staged *draft* applied."""
    now = now or dt_util.now()
    mode = derive_zone_mode(status)
    control_mode = derive_control_mode(status)
    target = effective_target(status)
    display_target = (
        draft.staged_temperature if draft.staged_temperature is not None else target
    )

    override_target_text = remaining_text = until_text = None
    if status.is_override:
        override_target_text = (
            format_setpoint(status.target_heat_temperature, UnitOfTemperature.CELSIUS)
            if status.target_heat_temperature is not None
            else ""
        )
        if status.setpoint_mode is SetpointMode.TEMPORARY_OVERRIDE:
            remaining_text = format_time_remaining(status.override_until, now)
            until_text = format_until(status.override_until, now)
        else:
            remaining_text = "Permanent"

    presets = tuple(
        DurationOption(
            value=minutes,
            label=label,
            selected=(
                draft.duration_minutes == minutes and not draft.custom_duration_visible
            ),
        )
        for minutes, label in DURATION_PRESETS
    )
    is_preset = any(option.selected for option in presets)

    compact = config.compact and not expanded and not draft.dirty and not loading

    hvac_toggle_label = None
    if config.show_hvac_toggle:
        hvac_toggle_label = "Turn on" if status.is_off else "Turn off"

    return ZoneView(
        entity_id=config.entity_id,
        found=True,
        name=status.friendly_name,
        mode=mode,
        badge=mode.badge,
        setpoint_mode=status.setpoint_mode,
        current_temperature=status.current_temperature,
        current_temperature_text=format_temperature(status.current_temperature),
        effective_target=target,
        display_target=display_target,
        display_target_text=format_temperature(display_target),
        scheduled_setpoint_text=format_setpoint(status.this_sp_temp),
        next_switch_text=format_next_switch(status.next_sp_from, now),
        next_setpoint_text=format_setpoint(status.next_sp_temp),
        override_target_text=override_target_text,
        remaining_text=remaining_text,
        until_text=until_text,
        faults=tuple(
            fault.fault_type or FAULT_FALLBACK_TEXT for fault in status.active_faults
        ),
        sensor_available=status.sensor_available,
        controls_visible=controls_visible(control_mode, draft.dirty),
        show_duration=draft.dirty,
        actions=legal_actions(control_mode, draft.dirty),
        duration_minutes=draft.duration_minutes,
        duration_presets=presets,
        custom_duration_visible=draft.custom_duration_visible or not is_preset,
        custom_hours=_hour_options(draft.duration_minutes),
        custom_minutes=_minute_options(draft.duration_minutes),
        duration_text=format_duration(draft.duration_minutes),
        duration_end_text=format_end_time(draft.duration_minutes, now),
        hvac_toggle_label=hvac_toggle_label,
        loading=loading,
        compact=compact,
        card_size=CARD_SIZE_COMPACT if compact else CARD_SIZE_FULL,
        show_accent_bar=config.show_accent_bar,
        temp_pills=config.temp_pills,
    )


def _hour_options(duration_minutes: int) -> tuple[DurationOption, ...]:
    current = duration_minutes // 60
    return tuple(
        DurationOption(value=hour, label=str(hour), selected=hour == current)
        for hour in range(24)
    )


def _minute_options(duration_minutes: int) -> tuple[DurationOption, ...]:
    current = duration_minutes % 60
    return tuple(
        DurationOption(
            value=minute,
            label=f"{minute:02d}",
            selected=minute <= current < minute + CUSTOM_MINUTES_STEP,
        )
        for minute in range(0, 60, CUSTOM_MINUTES_STEP)
    )
