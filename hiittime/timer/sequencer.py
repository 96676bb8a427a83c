"""Workout phase sequencer for HIITTime.

Phases
------
IDLE       Nothing configured yet (or the run was reset).
LEAD_IN    Countdown before the first work phase.
WORKING    Work interval counting down.
RESTING    Rest interval counting down.
COMPLETE   Every repetition has been worked and rested.

Transitions
-----------
IDLE → LEAD_IN | WORKING              (start; lead-in of 0 skips LEAD_IN)
LEAD_IN → WORKING                     (lead-in consumed)
WORKING → RESTING                     (work consumed, one repetition used)
RESTING → WORKING | COMPLETE          (rest consumed)
Any → IDLE                            (reset)

The sequencer owns no timer.  The host calls ``tick()`` once per second
and stops calling it when it tears the run down.  Pausing is a flag, not
a phase, so resuming always lands back in the phase that was paused.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from PyQt6.QtCore import QObject, pyqtSignal


logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    IDLE = "idle"
    LEAD_IN = "lead_in"
    WORKING = "working"
    RESTING = "resting"
    COMPLETE = "complete"


class TickEvent(Enum):
    NO_OP = "no_op"
    TICKED = "ticked"
    PHASE_ADVANCED = "phase_advanced"
    COMPLETED = "completed"


# ── constants ─────────────────────────────────────────────────────────────

CUE_WINDOW_SECONDS = 3  # cue on the ticks leaving 2, 1 and 0 seconds

_ACTIVE_PHASES = (Phase.LEAD_IN, Phase.WORKING, Phase.RESTING)


# ── errors / values ───────────────────────────────────────────────────────


class InvalidConfig(ValueError):
    """Raised by ``start`` when work, rest or repetitions is not positive."""


@dataclass(frozen=True)
class SessionConfig:
    """Everything needed to run one workout.  Durations are seconds."""

    lead_in_seconds: int = 0
    work_seconds: int = 0
    rest_seconds: int = 0
    repetitions: int = 0
    cue_enabled: bool = True

    def validate(self) -> None:
        """Raise ``InvalidConfig`` unless this config can start a run."""
        problems = [
            name
            for name in ("work_seconds", "rest_seconds", "repetitions")
            if getattr(self, name) <= 0
        ]
        if self.lead_in_seconds < 0:
            problems.append("lead_in_seconds")
        if problems:
            raise InvalidConfig(
                "cannot start workout, non-positive: " + ", ".join(problems)
            )

    @property
    def total_seconds(self) -> int:
        """Ticks from start to COMPLETE (final rest included)."""
        return self.lead_in_seconds + self.repetitions * (
            self.work_seconds + self.rest_seconds
        )


@dataclass(frozen=True)
class SequencerState:
    """Read-only copy of the sequencer's countdown state."""

    phase: Phase = Phase.IDLE
    remaining_seconds: int = 0
    repetitions_remaining: int = 0
    paused: bool = False


@dataclass(frozen=True)
class TickResult:
    """Outcome of one ``tick()``: what happened, where we are, and
    whether a boundary cue should be played."""

    event: TickEvent
    phase: Phase
    cue: bool = False


class SessionConfigBuilder:
    """Collects a ``SessionConfig`` one screen at a time.

    The configuration flow asks for work, then rest, then lead-in, then
    repetitions.  Each step returns the builder so a flow can pass one
    handle along and call ``build()`` at the end::

        config = (
            SessionConfigBuilder()
            .work(40).rest(20).lead_in(5).repetitions(8)
            .build()
        )
    """

    def __init__(self, base: SessionConfig | None = None) -> None:
        self._config = base or SessionConfig()

    def work(self, seconds: int) -> SessionConfigBuilder:
        self._config = replace(self._config, work_seconds=seconds)
        return self

    def rest(self, seconds: int) -> SessionConfigBuilder:
        self._config = replace(self._config, rest_seconds=seconds)
        return self

    def lead_in(self, seconds: int) -> SessionConfigBuilder:
        self._config = replace(self._config, lead_in_seconds=seconds)
        return self

    def repetitions(self, count: int) -> SessionConfigBuilder:
        self._config = replace(self._config, repetitions=count)
        return self

    def cues(self, enabled: bool) -> SessionConfigBuilder:
        self._config = replace(self._config, cue_enabled=enabled)
        return self

    @property
    def ready(self) -> bool:
        """True once the collected values would pass ``validate()``."""
        try:
            self._config.validate()
        except InvalidConfig:
            return False
        return True

    def build(self) -> SessionConfig:
        return self._config


# ── sequencer ─────────────────────────────────────────────────────────────


class PhaseSequencer(QObject):
    """Lead-in / work / rest state machine advanced by external ticks.

    Signals
    -------
    ticked(remaining_seconds: int)
        Emitted for every tick that is not a no-op.
    phase_changed(new_phase: Phase)
        Emitted on start, on every phase transition, and on reset.
    cue()
        Emitted on each tick inside the last three seconds of a phase,
        while cues are enabled.
    completed()
        Emitted once when the run reaches COMPLETE.
    pause_changed(paused: bool)
    cue_toggled(enabled: bool)
    """

    ticked = pyqtSignal(int)
    phase_changed = pyqtSignal(object)
    cue = pyqtSignal()
    completed = pyqtSignal()
    pause_changed = pyqtSignal(bool)
    cue_toggled = pyqtSignal(bool)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)

        self._config: SessionConfig | None = None
        self._cue_enabled: bool = True

        self._phase: Phase = Phase.IDLE
        self._remaining: int = 0
        self._reps_remaining: int = 0
        self._paused: bool = False

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def remaining_seconds(self) -> int:
        """Seconds left in the current phase."""
        return self._remaining

    @property
    def repetitions_remaining(self) -> int:
        """Work phases not yet finished (the current one included)."""
        return self._reps_remaining

    @property
    def paused(self) -> bool:
        return self._paused

    @property
    def cue_enabled(self) -> bool:
        return self._cue_enabled

    @property
    def config(self) -> SessionConfig | None:
        return self._config

    @property
    def is_active(self) -> bool:
        """True from start until COMPLETE or reset, paused or not."""
        return self._phase in _ACTIVE_PHASES

    @property
    def completed_repetitions(self) -> int:
        if self._config is None:
            return 0
        return self._config.repetitions - self._reps_remaining

    @property
    def current_repetition(self) -> int:
        """1-based repetition being worked or rested (0 when not running)."""
        if self._config is None or not self.is_active:
            return 0
        if self._phase == Phase.RESTING:
            return self.completed_repetitions
        return self.completed_repetitions + 1

    def snapshot(self) -> SequencerState:
        return SequencerState(
            phase=self._phase,
            remaining_seconds=self._remaining,
            repetitions_remaining=self._reps_remaining,
            paused=self._paused,
        )

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self, config: SessionConfig) -> None:
        """Begin a new run.  Raises ``InvalidConfig`` and changes nothing
        if work, rest or repetitions is not positive."""
        try:
            config.validate()
        except InvalidConfig as exc:
            logger.warning("Start rejected: %s", exc)
            raise

        self._config = config
        self._cue_enabled = config.cue_enabled
        self._reps_remaining = config.repetitions
        self._clear_pause()
        logger.info(
            "Starting workout: lead-in %ss, work %ss, rest %ss, %d reps",
            config.lead_in_seconds,
            config.work_seconds,
            config.rest_seconds,
            config.repetitions,
        )
        if config.lead_in_seconds > 0:
            self._enter(Phase.LEAD_IN, config.lead_in_seconds)
        else:
            self._enter(Phase.WORKING, config.work_seconds)

    def pause(self) -> None:
        self._set_paused(True)

    def resume(self) -> None:
        self._set_paused(False)

    def toggle_pause(self) -> None:
        self._set_paused(not self._paused)

    def toggle_cue(self) -> None:
        """Flip boundary cues on or off; applies from the next tick."""
        self.set_cue_enabled(not self._cue_enabled)

    def set_cue_enabled(self, enabled: bool) -> None:
        if enabled == self._cue_enabled:
            return
        self._cue_enabled = enabled
        logger.debug("Cues %s", "enabled" if enabled else "disabled")
        self.cue_toggled.emit(enabled)

    def reset(self) -> None:
        """Abandon the run and return to IDLE."""
        self._remaining = 0
        self._reps_remaining = 0
        self._clear_pause()
        if self._phase != Phase.IDLE:
            logger.info("Workout reset from %s", self._phase.value)
        self._set_phase(Phase.IDLE)

    # ══════════════════════════════════════════════════════════════════
    #  TICK
    # ══════════════════════════════════════════════════════════════════

    def tick(self) -> TickResult:
        """Advance one second.  Safe to call in any state."""
        if self._paused or self._phase not in _ACTIVE_PHASES:
            return TickResult(TickEvent.NO_OP, self._phase)

        self._remaining -= 1
        cue = self._cue_enabled and self._remaining < CUE_WINDOW_SECONDS
        logger.debug("%s: %ss left", self._phase.value, self._remaining)

        self.ticked.emit(self._remaining)
        if cue:
            self.cue.emit()

        if self._remaining > 0:
            return TickResult(TickEvent.TICKED, self._phase, cue)

        self._advance()
        if self._phase == Phase.COMPLETE:
            logger.info("Workout complete")
            self.completed.emit()
            return TickResult(TickEvent.COMPLETED, self._phase, cue)
        return TickResult(TickEvent.PHASE_ADVANCED, self._phase, cue)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _advance(self) -> None:
        """Leave the phase whose time has just run out."""
        config = self._config
        if self._phase == Phase.LEAD_IN:
            self._enter(Phase.WORKING, config.work_seconds)
        elif self._phase == Phase.WORKING:
            if self._reps_remaining > 0:
                self._reps_remaining -= 1
                self._enter(Phase.RESTING, config.rest_seconds)
            else:
                self._enter(Phase.COMPLETE, 0)
        elif self._phase == Phase.RESTING:
            if self._reps_remaining > 0:
                self._enter(Phase.WORKING, config.work_seconds)
            else:
                self._enter(Phase.COMPLETE, 0)

    def _enter(self, phase: Phase, seconds: int) -> None:
        self._remaining = seconds
        logger.info(
            "Entering %s (%ss, %d reps left)",
            phase.value, seconds, self._reps_remaining,
        )
        self._set_phase(phase)

    def _set_phase(self, new_phase: Phase) -> None:
        self._phase = new_phase
        self.phase_changed.emit(new_phase)

    def _clear_pause(self) -> None:
        if self._paused:
            self._paused = False
            self.pause_changed.emit(False)

    def _set_paused(self, paused: bool) -> None:
        if not self.is_active or paused == self._paused:
            return
        self._paused = paused
        logger.info("Workout %s", "paused" if paused else "resumed")
        self.pause_changed.emit(paused)
