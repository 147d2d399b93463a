"""Shared test helpers for Ascent."""

from ascent.timer.engine import TimerEngine
from ascent.timer.state import Lifecycle


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


class RecordingCuePlayer:
    """CuePlayer that logs every call as ``(method, name)``."""

    def __init__(self):
        self.calls: list[tuple[str, str | None]] = []

    def play(self, name):
        self.calls.append(("play", name))

    def stop(self, name):
        self.calls.append(("stop", name))

    def stop_all(self):
        self.calls.append(("stop_all", None))

    def plays(self, name=None):
        return [n for m, n in self.calls if m == "play" and (name is None or n == name)]

    def clear(self):
        self.calls.clear()


class BrokenCuePlayer:
    """Every call raises, like a machine with no audio output."""

    def play(self, name):
        raise RuntimeError("no audio device")

    def stop(self, name):
        raise RuntimeError("no audio device")

    def stop_all(self):
        raise RuntimeError("no audio device")


def run_ticks(engine: TimerEngine, n: int) -> None:
    for _ in range(n):
        engine._on_tick()


def ticks_until_finished(engine: TimerEngine, limit: int = 100_000) -> int:
    count = 0
    while engine.lifecycle is Lifecycle.RUNNING and count < limit:
        engine._on_tick()
        count += 1
    return count
