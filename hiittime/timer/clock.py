"""Qt tick source that drives a ``PhaseSequencer`` once per second."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer

from .sequencer import Phase, PhaseSequencer, TickResult


logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TickDriver(QObject):
    """Owns the ``QTimer`` the sequencer deliberately does not.

    The driver stops itself when the run completes or is reset, so a
    dismissed workout never receives stray ticks.
    """

    def __init__(
        self,
        sequencer: PhaseSequencer,
        parent: QObject | None = None,
        *,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._sequencer = sequencer
        self._last_result: TickResult | None = None

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

        sequencer.phase_changed.connect(self._on_phase_changed)

    @property
    def running(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    @property
    def last_result(self) -> TickResult | None:
        return self._last_result

    def start(self) -> None:
        if not self._sequencer.is_active:
            logger.debug("Tick driver not started: sequencer is %s",
                         self._sequencer.phase.value)
            return
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()

    def _on_timeout(self) -> None:
        self._last_result = self._sequencer.tick()

    def _on_phase_changed(self, phase: Phase) -> None:
        if phase in (Phase.IDLE, Phase.COMPLETE) and self._qt_timer.isActive():
            logger.debug("Tick driver stopping on %s", phase.value)
            self._qt_timer.stop()
