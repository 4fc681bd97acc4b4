"""Human-readable text for zone values."""

from __future__ import annotations

import datetime

from homeassistant.util import dt as dt_util

from .const import DEGREE, PLACEHOLDER


def format_temperature(value: float | None) -> str:
    """Format a temperature to one decimal, or the placeholder when missing."""
    if value is None:
        return PLACEHOLDER
    return f"{value:.1f}"


def format_setpoint(value: float | None, unit: str = DEGREE) -> str:
    """Format a setpoint the short way ("21°", "21.5°C")."""
    if value is None:
        return PLACEHOLDER
    return f"{value:g}{unit}"


def format_time(value: datetime.datetime | None) -> str:
    if value is None:
        return PLACEHOLDER
    return dt_util.as_local(value).strftime("%H:%M")


def format_date(
    value: datetime.datetime | None, now: datetime.datetime | None = None
) -> str:
    """Return "today", "tomorrow" or a short date such as "Mon 3 Feb"."""
    if value is None:
        return ""
    local = dt_util.as_local(value).date()
    today = dt_util.as_local(now or dt_util.now()).date()
    if local == today:
        return "today"
    if local == today + datetime.timedelta(days=1):
        return "tomorrow"
    return f"{local:%a} {local.day} {local:%b}"


def format_next_switch(
    value: datetime.datetime | None, now: datetime.datetime | None = None
) -> str:
    """Label for the next scheduled switchpoint; the date is omitted for today."""
    time_text = format_time(value)
    date_text = format_date(value, now)
    if date_text and date_text != "today":
        return f"{date_text} {time_text}"
    return time_text


def format_until(
    value: datetime.datetime | None, now: datetime.datetime | None = None
) -> str | None:
    if value is None:
        return None
    label = f"Until {format_time(value)}"
    date_text = format_date(value, now)
    if date_text and date_text != "today":
        label = f"{label} {date_text}"
    return label


def format_time_remaining(
    until: datetime.datetime | None, now: datetime.datetime | None = None
) -> str | None:
    """Return "2h 5m remaining", "5m remaining" or "expired"."""
    if until is None:
        return None
    remaining = until - (now or dt_util.utcnow())
    if remaining <= datetime.timedelta(0):
        return "expired"
    total_minutes = int(remaining.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m remaining"
    return f"{minutes}m remaining"


def format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


def format_end_time(minutes: int, now: datetime.datetime | None = None) -> str:
    """Clock time at which an override of *minutes* started now would end."""
    end = (now or dt_util.now()) + datetime.timedelta(minutes=minutes)
    return format_time(end)
