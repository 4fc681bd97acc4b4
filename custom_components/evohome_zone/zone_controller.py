"""Evohome zone controller: reconciles pushed zone state with local edits."""

from __future__ import annotations

import datetime
import functools
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import Any

from homeassistant.components.climate.const import HVACMode
from homeassistant.core import Event, EventStateChangedData, HomeAssistant, State, callback
from homeassistant.helpers.event import (
    async_track_state_change_event,
    async_track_time_interval,
)

from .command_gate import CommandGate
from .const import MAX_DURATION_MINUTES, MIN_DURATION_MINUTES, REFRESH_INTERVAL
from .zone_commands import ServiceCommandSink, ZoneCommandSink
from .zone_config import ZoneConfig
from .zone_draft import Draft, DraftStore
from .zone_model import (
    SetpointMode,
    ZoneCommand,
    ZoneStatus,
    effective_target,
    project_status,
)
from .zone_view import ZoneView, build_not_found_view, build_zone_view

_LOGGER = logging.getLogger(__name__)


class ZoneIntent(StrEnum):
    """User intents accepted by the controller."""

    ADJUST_TEMPERATURE = "adjust_temperature"
    SET_DURATION_PRESET = "set_duration_preset"
    SET_DURATION_HOURS = "set_duration_hours"
    SET_DURATION_MINUTES = "set_duration_minutes"
    TOGGLE_CUSTOM_DURATION = "toggle_custom_duration"
    TOGGLE_EXPANDED = "toggle_expanded"
    APPLY_OVERRIDE = "apply_override"
    APPLY_PERMANENT_OVERRIDE = "apply_permanent_override"
    CANCEL_OVERRIDE = "cancel_override"
    TOGGLE_HVAC = "toggle_hvac"


_INTENTS_WITH_VALUE: frozenset[ZoneIntent] = frozenset({
    ZoneIntent.ADJUST_TEMPERATURE,
    ZoneIntent.SET_DURATION_PRESET,
    ZoneIntent.SET_DURATION_HOURS,
    ZoneIntent.SET_DURATION_MINUTES,
})


class ZoneController:
    """Owns the draft and command window for one Evohome zone."""

    def __init__(
        self,
        hass: HomeAssistant,
        config: ZoneConfig,
        sink: ZoneCommandSink | None = None,
        listener: Callable[[ZoneView], None] | None = None,
    ) -> None:
        self.hass = hass
        self._config = config
        self._sink: ZoneCommandSink = sink or ServiceCommandSink(hass)
        self._listener = listener
        self._draft = DraftStore()
        self._gate = CommandGate(hass, on_change=self._async_gate_changed)
        self._state: State | None = None
        self._status: ZoneStatus | None = None
        self._expanded = False
        self._view = build_not_found_view(config)
        self._unsub_listeners: list[Callable[[], None]] = []

    @property
    def config(self) -> ZoneConfig:
        return self._config

    @property
    def entity_id(self) -> str:
        return self._config.entity_id

    @property
    def draft(self) -> Draft:
        return self._draft.draft

    @property
    def gate(self) -> CommandGate:
        return self._gate

    @property
    def status(self) -> ZoneStatus | None:
        return self._status

    @property
    def loading(self) -> bool:
        return self._gate.active

    @property
    def view(self) -> ZoneView:
        return self._view

    # ---- Lifecycle ----

    @callback
    def async_start(self) -> ZoneView:
        """Subscribe to zone state and render the current snapshot."""
        self._async_subscribe()
        return self.async_handle_snapshot(self.hass.states.get(self.entity_id))

    @callback
    def async_stop(self) -> None:
        """Cancel timers and listeners; an in-flight send is left to finish."""
        self._gate.cancel()
        while self._unsub_listeners:
            unsubscribe = self._unsub_listeners.pop()
            unsubscribe()

    @callback
    def async_set_config(self, config: ZoneConfig) -> ZoneView:
        """Apply a new configuration, discarding the draft and any pending command."""
        subscribed = bool(self._unsub_listeners)
        if subscribed:
            self.async_stop()
        else:
            self._gate.cancel()
        self._config = config
        self._draft.reset()
        self._expanded = False
        self._state = None
        self._status = None
        if subscribed:
            return self.async_start()
        return self.async_handle_snapshot(self.hass.states.get(self.entity_id))

    @callback
    def _async_subscribe(self) -> None:
        self._unsub_listeners.append(
            async_track_state_change_event(
                self.hass,
                [self.entity_id],
                self._async_handle_state_event,
            )
        )
        self._unsub_listeners.append(
            async_track_time_interval(
                self.hass,
                self._async_refresh_tick,
                datetime.timedelta(seconds=REFRESH_INTERVAL),
            )
        )

    @callback
    def _async_handle_state_event(self, event: Event[EventStateChangedData]) -> None:
        self.async_handle_snapshot(event.data.get("new_state"))

    @callback
    def _async_refresh_tick(self, _now: datetime.datetime) -> None:
        """Refresh the remaining-time text of a temporary override."""
        if (
            self._status is not None
            and self._status.setpoint_mode is SetpointMode.TEMPORARY_OVERRIDE
            and self._status.override_until is not None
        ):
            self._async_refresh()

    # ---- Inbound zone state ----

    @callback
    def async_handle_snapshot(self, state: State | None) -> ZoneView:
        """Merge a pushed zone state with the local draft and command window."""
        self._state = state
        if state is None:
            self._status = None
            if self._gate.active:
                _LOGGER.debug(
                    "%s disappeared while a command was pending", self.entity_id
                )
                self._gate.cancel()
            return self._async_refresh()

        status = project_status(state, self._config.name)
        if status != self._status:
            if self._gate.active:
                if self._gate.reconcile(status):
                    self._async_command_confirmed()
            elif not self._draft.dirty:
                # Drops a stale staged value only; an in-progress edit is always dirty.
                self._draft.clear_staged_temperature()
        self._status = status
        return self._async_refresh()

    @callback
    def _async_command_confirmed(self) -> None:
        # A draft staged while the command was in flight is a new edit; keep it.
        if self._draft.dirty:
            return
        self._draft.reset()
        _LOGGER.debug("Draft cleared after confirmation for %s", self.entity_id)

    @callback
    def _async_gate_changed(self) -> None:
        self._async_refresh()

    # ---- User intents ----

    @callback
    def async_handle_intent(self, intent: ZoneIntent | str, value: Any = None) -> ZoneView:
        """Dispatch a user intent to its handler."""
        intent = ZoneIntent(intent)
        handler = getattr(self, intent.value)
        if intent in _INTENTS_WITH_VALUE:
            return handler(value)
        return handler()

    @callback
    def adjust_temperature(self, delta: float) -> ZoneView:
        status = self._status
        if status is None:
            _LOGGER.warning(
                "Cannot adjust temperature: %s not found", self.entity_id
            )
            return self._view
        self._draft.adjust_temperature(
            effective_target(status), float(delta), status.min_temp, status.max_temp
        )
        return self._async_refresh()

    @callback
    def set_duration_preset(self, minutes: Any) -> ZoneView:
        self._draft.set_duration_preset(_coerce_int(minutes))
        return self._async_refresh()

    @callback
    def set_duration_hours(self, hours: Any) -> ZoneView:
        self._draft.set_duration_hours(_coerce_int(hours))
        return self._async_refresh()

    @callback
    def set_duration_minutes(self, minutes: Any) -> ZoneView:
        self._draft.set_duration_minutes(_coerce_int(minutes))
        return self._async_refresh()

    @callback
    def toggle_custom_duration(self) -> ZoneView:
        self._draft.toggle_custom_duration()
        return self._async_refresh()

    @callback
    def toggle_expanded(self) -> ZoneView:
        self._expanded = not self._expanded
        return self._async_refresh()

    @callback
    def apply_override(self) -> ZoneView:
        """Commit the staged edit as a temporary override."""
        setpoint = self._commit_setpoint()
        if setpoint is None:
            return self._view
        total = min(
            MAX_DURATION_MINUTES,
            max(MIN_DURATION_MINUTES, self._draft.duration_minutes),
        )
        duration = divmod(total, 60)
        return self._async_issue(
            ZoneCommand.TEMPORARY_OVERRIDE,
            functools.partial(
                self._sink.async_set_override, self.entity_id, setpoint, duration
            ),
            clear_draft=True,
        )

    @callback
    def apply_permanent_override(self) -> ZoneView:
        """Commit the staged edit as a permanent override."""
        setpoint = self._commit_setpoint()
        if setpoint is None:
            return self._view
        return self._async_issue(
            ZoneCommand.PERMANENT_OVERRIDE,
            functools.partial(
                self._sink.async_set_override, self.entity_id, setpoint, None
            ),
            clear_draft=True,
        )

    @callback
    def cancel_override(self) -> ZoneView:
        """Return the zone to its schedule."""
        return self._async_issue(
            ZoneCommand.CLEAR_OVERRIDE,
            functools.partial(self._sink.async_clear_override, self.entity_id),
            clear_draft=True,
        )

    @callback
    def toggle_hvac(self) -> ZoneView:
        """Switch the zone between heat and off."""
        status = self._status
        if status is None:
            _LOGGER.warning("Cannot toggle HVAC: %s not found", self.entity_id)
            return self._view
        new_mode = HVACMode.OFF if status.hvac_mode == HVACMode.HEAT else HVACMode.HEAT
        return self._async_issue(
            ZoneCommand.SET_RUN_MODE,
            functools.partial(self._sink.async_set_run_mode, self.entity_id, new_mode),
            clear_draft=False,
            confirm=lambda observed: observed.hvac_mode == new_mode,
        )

    @callback
    def _commit_setpoint(self) -> float | None:
        status = self._status
        if status is None:
            _LOGGER.warning("Cannot set override: %s not found", self.entity_id)
            return None
        staged = self._draft.staged_temperature
        setpoint = staged if staged is not None else effective_target(status)
        if setpoint is None:
            _LOGGER.warning(
                "Cannot set override: no target temperature for %s", self.entity_id
            )
        return setpoint

    @callback
    def _async_issue(
        self,
        command: ZoneCommand,
        send: Callable[[], Awaitable[None]],
        *,
        clear_draft: bool,
        confirm: Callable[[ZoneStatus], bool] | None = None,
    ) -> ZoneView:
        """Hand *send* to the command gate, optionally clearing the draft first.

        Only a draft this call cleared is restored on rejection; otherwise the
        draft belongs to the user and a rejection leaves it alone.
        """
        rollback: Callable[[], None] | None = None
        if clear_draft:
            rollback = functools.partial(self._draft.restore, self._draft.draft)
            self._draft.clear_staged()

        self._gate.issue_command(
            command.expected_mode,
            send,
            label=f"{command.label} for {self.entity_id}",
            rollback=rollback,
            confirm=confirm,
        )
        return self._async_refresh()

    # ---- View ----

    @callback
    def _async_refresh(self) -> ZoneView:
        if self._status is None:
            view = build_not_found_view(self._config, loading=self._gate.active)
        else:
            view = build_zone_view(
                self._config,
                self._status,
                self._draft.draft,
                loading=self._gate.active,
                expanded=self._expanded,
            )
        self._view = view
        if self._listener is not None:
            self._listener(view)
        return view


def _coerce_int(value: Any) -> int:
    """Parse a user-supplied number; anything unparseable counts as 0."""
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
