"""Rotary input accumulator.

Raw rotary samples arrive in bursts while the user turns the control. Deltas
are summed until input goes quiet for the debounce window, then the total is
judged once: a large enough turn in either direction asks for the elapsed time
to be read aloud.
"""

from PySide6.QtCore import QObject, QTimer, Signal

from tt.common.logger import log

DEFAULT_DEBOUNCE_MS = 500
DEFAULT_THRESHOLD = 24.0


class RotaryAccumulator(QObject):
    """Debounced accumulator over absolute rotary positions.

    ``triggered`` is emitted (and ``on_trigger`` called, when given) at most
    once per flush.
    """

    triggered = Signal()

    def __init__(self, on_trigger=None, threshold=DEFAULT_THRESHOLD,
                 debounce_ms=DEFAULT_DEBOUNCE_MS, parent=None):
        super().__init__(parent)
        self.threshold = float(threshold)
        self.last_position = 0.0
        self.cumulative_delta = 0.0

        # A single-shot timer restarted on every sample is the one pending flush.
        self._flush_timer = QTimer(self)
        self._flush_timer.setSingleShot(True)
        self._flush_timer.setInterval(debounce_ms)
        self._flush_timer.timeout.connect(self.flush)

        if on_trigger is not None:
            self.triggered.connect(on_trigger)

    @property
    def pending(self):
        return self._flush_timer.isActive()

    def on_sample(self, position):
        position = float(position)
        delta = position - self.last_position
        self.last_position = position
        self.cumulative_delta += delta
        # QTimer.start() on an active timer restarts it
        self._flush_timer.start()

    def flush(self):
        """Judge the accumulated rotation, then start over from zero."""
        self._flush_timer.stop()
        total = self.cumulative_delta
        self.cumulative_delta = 0.0
        if abs(total) >= self.threshold:
            log.debug(f"Rotary turn of {total:.2f} crossed threshold {self.threshold}")
            self.triggered.emit()

    def cancel(self):
        """Drop any pending flush without judging it."""
        if self._flush_timer.isActive():
            self._flush_timer.stop()
            log.debug(f"Cancelled pending rotary flush with {self.cumulative_delta:.2f} accumulated")
