"""Shared test helpers for HIITTime."""

from hiittime.timer.sequencer import Phase, PhaseSequencer


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_to_completion(seq: PhaseSequencer, limit: int = 10_000) -> list[tuple[Phase, int]]:
    """Tick until COMPLETE, returning the (phase, remaining) seen before
    each tick.  Fails loudly rather than looping forever."""
    seen: list[tuple[Phase, int]] = []
    for _ in range(limit):
        if seq.phase == Phase.COMPLETE:
            return seen
        seen.append((seq.phase, seq.remaining_seconds))
        seq.tick()
    raise AssertionError(f"sequencer did not complete within {limit} ticks")
