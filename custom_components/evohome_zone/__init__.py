"""Evohome zone controller.

Reconciles pushed zone state with the user's staged edit and drives
override commands for a single Evohome zone. Implementation is split across:
- zone_model.py (state projection + command table)
- zone_mode.py (override/schedule read model)
- zone_draft.py (staged edits)
- command_gate.py (optimistic command window)
- zone_controller.py (orchestration)
- zone_view.py / zone_format.py (view-model for the renderer)
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from homeassistant.core import HomeAssistant, callback

from .command_gate import CommandGate, CommandWindow
from .zone_commands import ServiceCommandSink, ZoneCommandSink
from .zone_config import ZONE_CONFIG_SCHEMA, ZoneConfig, ZoneConfigError, stub_config
from .zone_controller import ZoneController, ZoneIntent
from .zone_draft import Draft, DraftStore
from .zone_mode import (
    ZoneAction,
    ZoneMode,
    derive_control_mode,
    derive_zone_mode,
    legal_actions,
)
from .zone_model import (
    SetpointMode,
    ZoneCommand,
    ZoneFault,
    ZoneStatus,
    effective_target,
    project_status,
)
from .zone_view import DurationOption, ZoneView


@callback
def async_create_zone_controller(
    hass: HomeAssistant,
    raw_config: Mapping[str, Any],
    sink: ZoneCommandSink | None = None,
    listener: Callable[[ZoneView], None] | None = None,
) -> ZoneController:
    """Validate *raw_config*, then build and start a zone controller.

    Raises ZoneConfigError before anything is created when the configuration
    is invalid.
    """
    config = ZoneConfig.from_dict(raw_config)
    controller = ZoneController(hass, config, sink=sink, listener=listener)
    controller.async_start()
    return controller


__all__ = [
    "ZONE_CONFIG_SCHEMA",
    "CommandGate",
    "CommandWindow",
    "Draft",
    "DraftStore",
    "DurationOption",
    "ServiceCommandSink",
    "SetpointMode",
    "ZoneAction",
    "ZoneCommand",
    "ZoneCommandSink",
    "ZoneConfig",
    "ZoneConfigError",
    "ZoneController",
    "ZoneFault",
    "ZoneIntent",
    "ZoneMode",
    "ZoneStatus",
    "ZoneView",
    "async_create_zone_controller",
    "derive_control_mode",
    "derive_zone_mode",
    "effective_target",
    "legal_actions",
    "project_status",
    "stub_config",
]
