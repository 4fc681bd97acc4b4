"""Constants for the Evohome zone controller."""

from __future__ import annotations

from typing import Final

EVOHOME_DOMAIN: Final = "evohome"

CONF_ENTITY: Final = "entity"
CONF_SHOW_HVAC_TOGGLE: Final = "show_hvac_toggle"
CONF_SHOW_ACCENT_BAR: Final = "show_accent_bar"
CONF_TEMP_PILLS: Final = "temp_pills"
CONF_COMPACT: Final = "compact"

DEFAULT_ZONE_NAME: Final = "Zone"
STUB_ENTITY_ID: Final = "climate.living_room"

SERVICE_SET_ZONE_OVERRIDE: Final = "set_zone_override"
SERVICE_CLEAR_ZONE_OVERRIDE: Final = "clear_zone_override"

ATTR_SETPOINT: Final = "setpoint"
ATTR_DURATION: Final = "duration"
ATTR_HOURS: Final = "hours"
ATTR_MINUTES: Final = "minutes"
ATTR_STATUS: Final = "status"
ATTR_SETPOINTS: Final = "setpoints"
ATTR_SETPOINT_STATUS: Final = "setpoint_status"
ATTR_TEMPERATURE_STATUS: Final = "temperature_status"
ATTR_ACTIVE_FAULTS: Final = "activeFaults"
ATTR_FAULT_TYPE: Final = "faultType"

DEFAULT_MIN_TEMP: Final = 5.0
DEFAULT_MAX_TEMP: Final = 35.0
TEMPERATURE_STEP: Final = 0.5

DEFAULT_DURATION_MINUTES: Final = 60
MIN_DURATION_MINUTES: Final = 1
# One minute short of 24h so an override is never ambiguous with "no override".
MAX_DURATION_MINUTES: Final = 1439
DURATION_PRESETS: Final = ((30, "30m"), (60, "1h"), (120, "2h"), (180, "3h"))
CUSTOM_MINUTES_STEP: Final = 5

COMMAND_TIMEOUT: Final = 30.0  # Seconds before an unconfirmed command window closes
REFRESH_INTERVAL: Final = 30.0  # Seconds between remaining-time refreshes

PLACEHOLDER: Final = "—"
DEGREE: Final = "°"
FAULT_FALLBACK_TEXT: Final = "Fault detected"

CARD_SIZE_COMPACT: Final = 2
CARD_SIZE_FULL: Final = 4
