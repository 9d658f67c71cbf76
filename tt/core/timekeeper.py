import time
from PySide6.QtCore import QObject, Qt, QTimer, Signal
from tt.common.logger import log
from tt.services.haptics import Haptics, HapticKind
from tt.util.timefmt import format_display, format_spoken

# The single stopwatch of the app. Elapsed time is always derived from a fixed monotonic anchor, so the 10ms tick
# only refreshes observers and timer jitter never accumulates into the displayed value.
class Timekeeper(QObject):

    elapsed_changed = Signal(float)
    running_changed = Signal(bool)

    def __init__(self, haptics: Haptics | None = None, tick_interval_ms=10, clock=time.monotonic, parent=None):
        super().__init__(parent)
        self.elapsed = 0.0
        self.running = False
        self._anchor = None  # monotonic time at which elapsed was zero, only set while running
        self._clock = clock
        self._haptics = haptics if haptics is not None else Haptics()

        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.setInterval(tick_interval_ms)
        self._timer.timeout.connect(self.tick)

        log.debug(f"Initialized timekeeper with a {tick_interval_ms}ms tick")

    # Live elapsed time, computed from the anchor while running.
    @property
    def current_elapsed(self):
        if self.running and self._anchor is not None:
            return max(0.0, self._clock() - self._anchor)
        return self.elapsed

    @property
    def ticking(self):
        return self._timer.isActive()

    # Start, stop and reset. start() and stop() are no-ops when already in the requested state.
    def start(self):
        if self.running:
            return
        self._anchor = self._clock() - self.elapsed
        self.running = True
        self._timer.start()
        self._haptics.pulse(HapticKind.START)
        log.debug(f"Started timekeeper at elapsed {self.elapsed:.2f} (anchor {self._anchor})")
        self.running_changed.emit(True)
    def stop(self):
        if not self.running:
            return
        self._timer.stop()
        self.elapsed = self.current_elapsed
        self.running = False
        self._anchor = None
        log.debug(f"Stopped timekeeper at elapsed {self.elapsed:.2f}")
        self.running_changed.emit(False)
        self.elapsed_changed.emit(self.elapsed)
    def reset(self):
        self.stop()
        self.elapsed = 0.0
        self.elapsed_changed.emit(self.elapsed)
        # Two pulses in a row, so a reset feels different from a start
        self._haptics.pulse(HapticKind.NOTIFICATION)
        self._haptics.pulse(HapticKind.NOTIFICATION)
        log.debug("Reset timekeeper to 0.0")

    # Timer target, recomputes elapsed from the anchor and republishes it.
    def tick(self):
        if not self.running:
            return
        self.elapsed = self.current_elapsed
        self.elapsed_changed.emit(self.elapsed)

    def formatted_display(self):
        return format_display(self.elapsed)

    def formatted_spoken(self):
        return format_spoken(self.elapsed)
