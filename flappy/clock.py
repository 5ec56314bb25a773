# clock.py
from flappy.config import TICKS_PER_SECOND, MAX_DT_MS_PER_FRAME


class SimulationClock:
    """Stały krok symulacji niezależny od FPS okna.

    ``advance(dt_ms)`` zbiera czas tylko gdy zegar chodzi i zwraca liczbę
    pełnych ticków do wykonania. ``stop()`` wyrzuca niepełną resztę, więc po
    wznowieniu nie ma nadrabiania.
    """

    def __init__(self, ticks_per_second: int = TICKS_PER_SECOND, max_dt_ms: int = MAX_DT_MS_PER_FRAME):
        self.tick_ms = 1000.0 / max(1, int(ticks_per_second))
        self.max_dt_ms = max(0, int(max_dt_ms))
        self._running = False
        self._acc_ms = 0.0

    def start(self):
        if not self._running:
            self._running = True
            self._acc_ms = 0.0

    def stop(self):
        self._running = False
        self._acc_ms = 0.0

    def is_running(self) -> bool:
        return self._running

    def advance(self, dt_ms: float) -> int:
        if not self._running:
            return 0

        self._acc_ms += min(max(0.0, float(dt_ms)), self.max_dt_ms)
        due = int(self._acc_ms // self.tick_ms)
        self._acc_ms -= due * self.tick_ms
        return due
