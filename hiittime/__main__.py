"""Run a workout from the command line: python -m hiittime.

Values not given on the command line come from the saved settings.
"""

from __future__ import annotations

import argparse
import logging
import signal
import sys
from dataclasses import replace

from PyQt6.QtWidgets import QApplication

from .audio.sounds import SoundManager
from .settings import load_settings, save_settings
from .timer.clock import TickDriver
from .timer.sequencer import InvalidConfig, Phase, PhaseSequencer


logger = logging.getLogger("hiittime")

_PHASE_LABELS = {
    Phase.LEAD_IN: "Get ready",
    Phase.WORKING: "Workout",
    Phase.RESTING: "Rest",
}


def _fmt_time(seconds: int) -> str:
    m, s = divmod(max(0, seconds), 60)
    return f"{m}:{s:02d}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hiittime", description="Interval workout timer.",
    )
    parser.add_argument("-w", "--work", type=int, help="work seconds")
    parser.add_argument("-r", "--rest", type=int, help="rest seconds")
    parser.add_argument("-c", "--countdown", type=int, help="lead-in seconds")
    parser.add_argument("-n", "--reps", type=int, help="repetitions")
    parser.add_argument(
        "--sound", action=argparse.BooleanOptionalAction, default=None,
        help="play countdown and phase beeps",
    )
    parser.add_argument(
        "--save", action="store_true", help="remember these values",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    settings = load_settings()
    config = settings.to_session_config()
    overrides = {
        "work_seconds": args.work,
        "rest_seconds": args.rest,
        "lead_in_seconds": args.countdown,
        "repetitions": args.reps,
        "cue_enabled": args.sound,
    }
    config = replace(config, **{k: v for k, v in overrides.items() if v is not None})
    try:
        config.validate()
    except InvalidConfig as exc:
        print(f"hiittime: {exc}", file=sys.stderr)
        return 2

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("HIITTime")

    sequencer = PhaseSequencer()
    driver = TickDriver(sequencer)
    sounds = SoundManager()
    sounds.set_volume(settings.sound_volume)
    sounds.connect_sequencer(sequencer)

    def on_tick(remaining: int) -> None:
        label = _PHASE_LABELS.get(sequencer.phase)
        if label is not None and remaining > 0:
            print(f"{label}: {_fmt_time(remaining)}", flush=True)

    def on_phase(phase: Phase) -> None:
        label = _PHASE_LABELS.get(phase)
        if label is None:
            return
        rep = sequencer.current_repetition
        suffix = f" ({rep}/{config.repetitions})" if rep else ""
        print(f"{label}{suffix}: {_fmt_time(sequencer.remaining_seconds)}", flush=True)

    sequencer.ticked.connect(on_tick)
    sequencer.phase_changed.connect(on_phase)
    sequencer.completed.connect(lambda: print("Done", flush=True))
    sequencer.completed.connect(app.quit)

    sequencer.start(config)
    if args.save:
        settings.remember(config)
        save_settings(settings)

    # Ctrl-C ends the run between ticks
    signal.signal(signal.SIGINT, lambda *_: (sequencer.reset(), app.quit()))

    driver.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
