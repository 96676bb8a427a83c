"""Tests for the QTimer-backed tick driver."""

from hiittime.timer.clock import TickDriver, TICK_INTERVAL_MS
from hiittime.timer.sequencer import Phase, SessionConfig, TickEvent


def _short_config() -> SessionConfig:
    return SessionConfig(
        lead_in_seconds=0, work_seconds=2, rest_seconds=1, repetitions=1,
    )


class TestTickDriver:

    def test_default_interval_is_one_second(self, sequencer):
        driver = TickDriver(sequencer)
        assert driver.interval_ms == TICK_INTERVAL_MS == 1000

    def test_does_not_start_while_idle(self, sequencer):
        driver = TickDriver(sequencer)
        driver.start()
        assert driver.running is False

    def test_starts_for_active_run(self, sequencer):
        driver = TickDriver(sequencer)
        sequencer.start(_short_config())
        driver.start()
        assert driver.running is True
        driver.stop()
        assert driver.running is False

    def test_timeout_ticks_sequencer(self, sequencer):
        driver = TickDriver(sequencer)
        sequencer.start(_short_config())
        driver._on_timeout()
        assert sequencer.remaining_seconds == 1
        assert driver.last_result.event == TickEvent.TICKED

    def test_stops_on_completion(self, sequencer):
        driver = TickDriver(sequencer)
        sequencer.start(_short_config())
        driver.start()
        for _ in range(3):
            driver._on_timeout()
        assert sequencer.phase == Phase.COMPLETE
        assert driver.last_result.event == TickEvent.COMPLETED
        assert driver.running is False

    def test_stops_on_reset(self, sequencer):
        driver = TickDriver(sequencer)
        sequencer.start(_short_config())
        driver.start()
        sequencer.reset()
        assert driver.running is False

    def test_keeps_running_across_pause(self, sequencer):
        driver = TickDriver(sequencer)
        sequencer.start(_short_config())
        driver.start()
        sequencer.pause()
        driver._on_timeout()
        assert driver.running is True
        assert driver.last_result.event == TickEvent.NO_OP
        driver.stop()
