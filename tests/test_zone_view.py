"""Tests for the renderer view-model and its text formatting."""

from __future__ import annotations

import datetime

import pytest

from homeassistant.core import State
from homeassistant.util import dt as dt_util

from custom_components.evohome_zone.const import PLACEHOLDER
from custom_components.evohome_zone.zone_config import ZoneConfig
from custom_components.evohome_zone.zone_draft import Draft
from custom_components.evohome_zone.zone_format import (
    format_date,
    format_duration,
    format_end_time,
    format_next_switch,
    format_setpoint,
    format_temperature,
    format_time,
    format_time_remaining,
    format_until,
)
from custom_components.evohome_zone.zone_mode import ZoneAction, ZoneMode
from custom_components.evohome_zone.zone_model import project_status
from custom_components.evohome_zone.zone_view import (
    build_not_found_view,
    build_zone_view,
)

from .conftest import ZONE_ENTITY, make_zone_state

NOW = datetime.datetime(2026, 2, 27, 10, 0, tzinfo=dt_util.UTC)
CONFIG = ZoneConfig(entity_id=ZONE_ENTITY)


@pytest.fixture(autouse=True)
def utc_time_zone():
    """Pin local time to UTC so clock texts are deterministic."""
    original = dt_util.DEFAULT_TIME_ZONE
    dt_util.set_default_time_zone(dt_util.UTC)
    yield
    dt_util.set_default_time_zone(original)


# ── zone_format ───────────────────────────────────────────────────────


class TestFormatting:
    """Text helpers."""

    def test_temperature(self) -> None:
        assert format_temperature(20) == "20.0"
        assert format_temperature(19.25) == "19.2"
        assert format_temperature(None) == PLACEHOLDER

    def test_setpoint(self) -> None:
        assert format_setpoint(21.0) == "21°"
        assert format_setpoint(21.5, "°C") == "21.5°C"
        assert format_setpoint(None) == PLACEHOLDER

    def test_time(self) -> None:
        assert format_time(NOW + datetime.timedelta(minutes=5)) == "10:05"
        assert format_time(None) == PLACEHOLDER

    def test_date(self) -> None:
        assert format_date(NOW + datetime.timedelta(hours=3), NOW) == "today"
        assert format_date(NOW + datetime.timedelta(days=1), NOW) == "tomorrow"
        assert format_date(datetime.datetime(2026, 3, 2, 7, 0, tzinfo=dt_util.UTC), NOW) == "Mon 2 Mar"
        assert format_date(None, NOW) == ""

    def test_next_switch(self) -> None:
        assert format_next_switch(NOW + datetime.timedelta(hours=1), NOW) == "11:00"
        assert (
            format_next_switch(NOW + datetime.timedelta(hours=21), NOW)
            == "tomorrow 07:00"
        )

    def test_until(self) -> None:
        assert format_until(NOW + datetime.timedelta(hours=2, minutes=30), NOW) == "Until 12:30"
        assert (
            format_until(NOW + datetime.timedelta(hours=21), NOW)
            == "Until 07:00 tomorrow"
        )
        assert format_until(None, NOW) is None

    @pytest.mark.parametrize(
        ("delta", "expected"),
        [
            (datetime.timedelta(hours=2, minutes=5, seconds=30), "2h 5m remaining"),
            (datetime.timedelta(minutes=5), "5m remaining"),
            (datetime.timedelta(seconds=20), "0m remaining"),
            (datetime.timedelta(0), "expired"),
            (datetime.timedelta(minutes=-3), "expired"),
        ],
    )
    def test_time_remaining(self, delta: datetime.timedelta, expected: str) -> None:
        assert format_time_remaining(NOW + delta, NOW) == expected

    def test_time_remaining_without_expiry(self) -> None:
        assert format_time_remaining(None, NOW) is None

    def test_duration(self) -> None:
        assert format_duration(125) == "2h 5m"
        assert format_duration(45) == "0h 45m"

    def test_end_time(self) -> None:
        assert format_end_time(90, NOW) == "11:30"


# ── zone_view ─────────────────────────────────────────────────────────


class TestBuildZoneView:
    """View composition."""

    def test_schedule_view(self) -> None:
        view = build_zone_view(CONFIG, project_status(make_zone_state()), Draft(), now=NOW)
        assert view.found
        assert view.mode is ZoneMode.SCHEDULE
        assert view.badge == "Schedule"
        assert view.current_temperature_text == "20.0"
        assert view.display_target_text == "21.0"
        assert view.scheduled_setpoint_text == "21°"
        assert view.next_switch_text == "11:00"
        assert view.next_setpoint_text == "19°"
        assert view.override_target_text is None
        assert view.remaining_text is None
        assert view.actions == ()
        assert not view.controls_visible
        assert view.hvac_toggle_label == "Turn off"

    def test_staged_temperature_is_displayed(self) -> None:
        draft = Draft(staged_temperature=22.5, dirty=True)
        view = build_zone_view(CONFIG, project_status(make_zone_state()), draft, now=NOW)
        assert view.display_target == 22.5
        assert view.effective_target == 21.0
        assert view.show_duration

    def test_temporary_override_view(self) -> None:
        status = project_status(
            make_zone_state(
                setpoint_mode="TemporaryOverride",
                target_heat_temperature=23.5,
                until="2026-02-27T12:05:00Z",
            )
        )
        view = build_zone_view(CONFIG, status, Draft(), now=NOW)
        assert view.badge == "Override"
        assert view.override_target_text == "23.5°C"
        assert view.remaining_text == "2h 5m remaining"
        assert view.until_text == "Until 12:05"
        assert view.actions == (ZoneAction.BACK_TO_SCHEDULE,)
        assert view.controls_visible

    def test_permanent_override_view(self) -> None:
        status = project_status(
            make_zone_state(setpoint_mode="PermanentOverride", target_heat_temperature=18.0)
        )
        view = build_zone_view(CONFIG, status, Draft(dirty=True), now=NOW)
        assert view.badge == "Permanent"
        assert view.remaining_text == "Permanent"
        assert view.until_text is None
        assert view.actions == (ZoneAction.BACK_TO_SCHEDULE, ZoneAction.UPDATE_OVERRIDE)

    def test_off_zone_with_override_keeps_controls(self) -> None:
        status = project_status(
            make_zone_state(
                state="off",
                setpoint_mode="TemporaryOverride",
                target_heat_temperature=22.0,
                until="2026-02-27T12:05:00Z",
            )
        )
        view = build_zone_view(CONFIG, status, Draft(), now=NOW)
        assert view.mode is ZoneMode.OFF
        assert view.badge == "Off"
        assert view.override_target_text == "22°C"
        assert view.actions == (ZoneAction.BACK_TO_SCHEDULE,)
        assert view.controls_visible
        assert view.hvac_toggle_label == "Turn on"

    def test_faults(self) -> None:
        state = make_zone_state()
        attrs = dict(state.attributes)
        attrs["status"] = {
            **attrs["status"],
            "activeFaults": [{"faultType": "<b>Battery</b>"}, {}],
        }
        view = build_zone_view(
            CONFIG, project_status(State(ZONE_ENTITY, "heat", attrs)), Draft(), now=NOW
        )
        assert view.faults == ("<b>Battery</b>", "Fault detected")

    def test_default_duration_is_preset(self) -> None:
        view = build_zone_view(CONFIG, project_status(make_zone_state()), Draft(), now=NOW)
        assert [option.selected for option in view.duration_presets] == [
            False,
            True,
            False,
            False,
        ]
        assert not view.custom_duration_visible
        assert view.duration_text == "1h 0m"
        assert view.duration_end_text == "11:00"

    def test_custom_duration_options(self) -> None:
        draft = Draft(duration_minutes=127, dirty=True)
        view = build_zone_view(CONFIG, project_status(make_zone_state()), draft, now=NOW)
        assert view.custom_duration_visible
        assert not any(option.selected for option in view.duration_presets)
        assert [o.value for o in view.custom_hours if o.selected] == [2]
        assert [o.label for o in view.custom_minutes if o.selected] == ["05"]
        assert len(view.custom_hours) == 24
        assert len(view.custom_minutes) == 12

    def test_explicit_custom_deselects_presets(self) -> None:
        draft = Draft(custom_duration_visible=True)
        view = build_zone_view(CONFIG, project_status(make_zone_state()), draft, now=NOW)
        assert view.custom_duration_visible
        assert not any(option.selected for option in view.duration_presets)

    def test_presentation_flags(self) -> None:
        config = ZoneConfig(
            entity_id=ZONE_ENTITY,
            show_hvac_toggle=False,
            show_accent_bar=False,
            temp_pills=True,
        )
        view = build_zone_view(config, project_status(make_zone_state()), Draft(), now=NOW)
        assert view.hvac_toggle_label is None
        assert not view.show_accent_bar
        assert view.temp_pills

    def test_loading_disables_compact(self) -> None:
        config = ZoneConfig(entity_id=ZONE_ENTITY, compact=True)
        status = project_status(make_zone_state())
        assert build_zone_view(config, status, Draft(), now=NOW).compact
        view = build_zone_view(config, status, Draft(), loading=True, now=NOW)
        assert not view.compact
        assert view.card_size == 4


class TestNotFoundView:
    """The entity-absent view."""

    def test_not_found(self) -> None:
        view = build_not_found_view(CONFIG)
        assert not view.found
        assert view.entity_id == ZONE_ENTITY
        assert view.actions == ()
        assert not view.loading
