"""Press-and-hold / double-tap recognizer for the time display."""

import time

from PySide6.QtCore import QObject, QTimer, Signal


class GestureRecognizer(QObject):
    """Turns raw press/release/double-click calls into stopwatch gestures.

    - ``long_press`` fires while still held, once the press reaches
      ``long_press_ms``.
    - ``short_press`` fires on release when the press lasted at least
      ``short_press_ms`` and the long press did not already fire.
    - ``double_tap`` fires on every double click.
    """

    short_press = Signal()
    long_press = Signal()
    double_tap = Signal()

    def __init__(self, short_press_ms=200, long_press_ms=1000, clock=time.monotonic, parent=None):
        super().__init__(parent)
        self.short_press_ms = short_press_ms
        self._clock = clock
        self._pressed_at = None
        self._long_fired = False

        self._long_timer = QTimer(self)
        self._long_timer.setSingleShot(True)
        self._long_timer.setInterval(long_press_ms)
        self._long_timer.timeout.connect(self._on_long_timeout)

    @property
    def pressed(self):
        return self._pressed_at is not None

    def press(self):
        if self.pressed:
            return
        self._pressed_at = self._clock()
        self._long_fired = False
        self._long_timer.start()

    def release(self):
        if not self.pressed:
            return
        held_ms = (self._clock() - self._pressed_at) * 1000
        self._long_timer.stop()
        self._pressed_at = None
        if not self._long_fired and held_ms >= self.short_press_ms:
            self.short_press.emit()

    def double_click(self):
        self.double_tap.emit()

    def cancel(self):
        self._long_timer.stop()
        self._pressed_at = None

    def _on_long_timeout(self):
        if not self.pressed:
            return
        self._long_fired = True
        self.long_press.emit()
