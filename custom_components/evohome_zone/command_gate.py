"""Optimistic command window for Evohome zone commands."""

from __future__ import annotations

import datetime
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.event import async_call_later

from .const import COMMAND_TIMEOUT
from .zone_model import SetpointMode, ZoneStatus

_LOGGER = logging.getLogger(__name__)


@dataclass(eq=False)
class CommandWindow:
    """An in-flight command whose outcome is not yet known.

    Compared by identity: a late outcome only applies to the exact window it
    was issued for.
    """

    label: str
    expected_mode: SetpointMode | None
    deadline: float
    confirm: Callable[[ZoneStatus], bool] | None = None
    rollback: Callable[[], None] | None = None

    def is_expired(self, now: float | None = None) -> bool:
        if now is None:
            now = time.monotonic()
        return now >= self.deadline


class CommandGate:
    """Coordinates one optimistic command at a time.

    A window is closed by exactly one of: a matching status (confirmation),
    a rejected send (rollback), or the deadline (indeterminate outcome).
    Anything arriving for a window that is already closed is ignored.
    """

    def __init__(
        self,
        hass: HomeAssistant,
        on_change: Callable[[], None] | None = None,
        timeout: float = COMMAND_TIMEOUT,
    ) -> None:
        self.hass = hass
        self._on_change = on_change
        self._timeout = timeout
        self._window: CommandWindow | None = None
        self._deadline_unsub: Callable[[], None] | None = None
        self.last_error: Exception | None = None

    @property
    def active(self) -> bool:
        return self._window is not None

    @property
    def window(self) -> CommandWindow | None:
        return self._window

    @property
    def expected_mode(self) -> SetpointMode | None:
        return self._window.expected_mode if self._window else None

    def issue_command(
        self,
        expected_mode: SetpointMode | None,
        send: Callable[[], Awaitable[None]],
        *,
        label: str = "command",
        rollback: Callable[[], None] | None = None,
        confirm: Callable[[ZoneStatus], bool] | None = None,
    ) -> None:
        """Open a window for *expected_mode* and start *send*.

        Any open window is superseded: its timer is cancelled and its late
        outcome will be ignored.
        """
        if self._window is not None:
            _LOGGER.debug(
                "%s supersedes pending %s", label, self._window.label
            )
        self._cancel_deadline()

        window = CommandWindow(
            label=label,
            expected_mode=expected_mode,
            deadline=time.monotonic() + self._timeout,
            confirm=confirm,
            rollback=rollback,
        )
        self._window = window

        @callback
        def _deadline_reached(_now: datetime.datetime) -> None:
            self._deadline_unsub = None
            self._async_expire(window)

        self._deadline_unsub = async_call_later(
            self.hass, self._timeout, _deadline_reached
        )
        _LOGGER.debug(
            "%s issued (expected_mode=%s timeout=%ss)",
            label,
            expected_mode,
            self._timeout,
        )
        self.hass.async_create_task(self._async_send(window, send))

    def reconcile(self, status: ZoneStatus) -> bool:
        """Return True and close the window if *status* confirms the command."""
        window = self._window
        if window is None:
            return False
        if window.is_expired():
            # Deadline passed but the timer has not fired yet.
            self._close()
            _LOGGER.debug("%s expired before a matching zone state", window.label)
            return False

        if window.confirm is not None:
            matched = window.confirm(status)
        elif window.expected_mode is None:
            matched = True
        else:
            matched = status.setpoint_mode == window.expected_mode

        if not matched:
            _LOGGER.debug(
                "%s still pending (expected_mode=%s observed=%s)",
                window.label,
                window.expected_mode,
                status.setpoint_mode,
            )
            return False

        self._close()
        _LOGGER.debug("%s confirmed by zone state", window.label)
        return True

    def cancel(self) -> None:
        """Force-close any open window without touching the draft."""
        if self._window is not None:
            _LOGGER.debug("%s cancelled", self._window.label)
        self._close()

    async def _async_send(
        self, window: CommandWindow, send: Callable[[], Awaitable[None]]
    ) -> None:
        try:
            await send()
        except Exception as err:
            self._async_reject(window, err)
            return
        _LOGGER.debug("%s accepted; waiting for zone state", window.label)

    @callback
    def _async_reject(self, window: CommandWindow, err: Exception) -> None:
        if self._window is not window:
            _LOGGER.debug(
                "Ignoring late failure of %s (window already closed): %s",
                window.label,
                err,
            )
            return
        self.last_error = err
        self._close()
        if window.rollback is not None:
            window.rollback()
        _LOGGER.error("%s failed: %s", window.label, err)
        self._notify()

    @callback
    def _async_expire(self, window: CommandWindow) -> None:
        if self._window is not window:
            return
        self._close()
        _LOGGER.debug(
            "%s not confirmed within %ss; outcome unknown", window.label, self._timeout
        )
        self._notify()

    def _close(self) -> None:
        self._window = None
        self._cancel_deadline()

    def _cancel_deadline(self) -> None:
        if self._deadline_unsub:
            self._deadline_unsub()
            self._deadline_unsub = None

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
