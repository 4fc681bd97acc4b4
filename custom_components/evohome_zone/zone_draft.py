"""Locally staged, not yet committed zone edits."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace

from .const import (
    DEFAULT_DURATION_MINUTES,
    MAX_DURATION_MINUTES,
    MIN_DURATION_MINUTES,
    TEMPERATURE_STEP,
)

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Draft:
    """Snapshot of the user's uncommitted edit."""

    staged_temperature: float | None = None
    duration_minutes: int = DEFAULT_DURATION_MINUTES
    custom_duration_visible: bool = False
    dirty: bool = False


class DraftStore:
    """Holds the staged edit; mutated only by user input handlers."""

    def __init__(self) -> None:
        self._draft = Draft()

    @property
    def draft(self) -> Draft:
        return self._draft

    @property
    def staged_temperature(self) -> float | None:
        return self._draft.staged_temperature

    @property
    def duration_minutes(self) -> int:
        return self._draft.duration_minutes

    @property
    def custom_duration_visible(self) -> bool:
        return self._draft.custom_duration_visible

    @property
    def dirty(self) -> bool:
        return self._draft.dirty

    def adjust_temperature(
        self,
        effective_target: float | None,
        delta: float,
        min_temp: float,
        max_temp: float,
    ) -> float | None:
        """Step the staged temperature by *delta* from the staged or effective value."""
        base = self._draft.staged_temperature
        if base is None:
            base = effective_target
        if base is None:
            _LOGGER.debug("No staged or effective target to adjust; ignoring")
            return None
        staged = _round_to_step(min(max_temp, max(min_temp, base + delta)))
        # Rounding up can step past an off-grid upper bound.
        if staged > max_temp:
            staged -= TEMPERATURE_STEP
        elif staged < min_temp:
            staged += TEMPERATURE_STEP
        self._draft = replace(self._draft, staged_temperature=staged, dirty=True)
        return staged

    def set_duration_preset(self, minutes: int) -> None:
        self._draft = replace(
            self._draft,
            duration_minutes=_clamp_duration(minutes),
            custom_duration_visible=False,
            dirty=True,
        )

    def set_duration_hours(self, hours: int) -> None:
        """Set the hour part of the duration, keeping the minutes."""
        minutes = self._draft.duration_minutes % 60
        self._draft = replace(
            self._draft,
            duration_minutes=_clamp_duration(hours * 60 + minutes),
            dirty=True,
        )

    def set_duration_minutes(self, minutes: int) -> None:
        """Set the minute part of the duration, keeping the hours."""
        hours = self._draft.duration_minutes // 60
        self._draft = replace(
            self._draft,
            duration_minutes=_clamp_duration(hours * 60 + minutes),
            dirty=True,
        )

    def toggle_custom_duration(self) -> None:
        self._draft = replace(
            self._draft,
            custom_duration_visible=not self._draft.custom_duration_visible,
        )

    def clear_staged(self) -> None:
        """Drop the staged temperature and the dirty flag, keeping the duration."""
        self._draft = replace(self._draft, staged_temperature=None, dirty=False)

    def clear_staged_temperature(self) -> None:
        self._draft = replace(self._draft, staged_temperature=None)

    def restore(self, draft: Draft) -> None:
        """Put back a draft captured earlier (rollback after a rejection)."""
        self._draft = draft

    def reset(self) -> None:
        self._draft = Draft()


def _round_to_step(value: float) -> float:
    return math.floor(value / TEMPERATURE_STEP + 0.5) * TEMPERATURE_STEP


def _clamp_duration(minutes: int) -> int:
    return min(MAX_DURATION_MINUTES, max(MIN_DURATION_MINUTES, int(minutes)))
