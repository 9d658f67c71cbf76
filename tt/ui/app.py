import sys
from PySide6.QtCore import Qt
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication, QLabel, QMainWindow, QVBoxLayout, QWidget
from tt.common.logger import log, enable_console
from tt.core import config
from tt.core.rotary import RotaryAccumulator
from tt.core.timekeeper import Timekeeper
from tt.services.haptics import Haptics
from tt.services.keepalive import KeepAlive
from tt.services.speech import AudioOutput, Speaker
from tt.ui.gestures import GestureRecognizer

WHITE = "#FFFFFF"
GREEN = "#34C759"
RED = "#FF3B30"

# One mouse wheel detent, in QWheelEvent angle-delta units.
WHEEL_NOTCH = 120


# Colour of the time readout: white at zero, green while running, red when stopped part-way.
def text_color(elapsed, running):
    if elapsed == 0:
        return WHITE
    if running:
        return GREEN
    return RED


# ---------------------------------------------------------------------------
# Main window
# ---------------------------------------------------------------------------

# The single stopwatch screen. Hold to start, hold longer to reset, double click to stop and hear the time,
# scroll to hear the time without stopping.
class StopwatchWindow(QMainWindow):

    def __init__(self, settings=None, timekeeper=None, speaker=None, haptics=None,
                 audio=None, keep_alive=None):
        super().__init__()
        self.setWindowTitle("TimeTap")

        # -- Settings --
        s = settings if settings is not None else config.load_settings()
        self.settings = s

        # -- Collaborators --
        self.haptics = haptics if haptics is not None else Haptics(enabled=s["haptics_enabled"])
        self.audio = audio if audio is not None else AudioOutput()
        self.keep_alive = keep_alive if keep_alive is not None else KeepAlive(s["keep_alive_minutes"])
        self.speaker = speaker if speaker is not None else Speaker(s["voice_language"], s["speech_rate"], parent=self)

        # -- Core --
        self.timekeeper = timekeeper if timekeeper is not None else Timekeeper(
            self.haptics, tick_interval_ms=s["tick_interval_ms"], parent=self)
        self.timekeeper.elapsed_changed.connect(self._update_display)
        self.timekeeper.running_changed.connect(self._update_display)

        self.rotary = RotaryAccumulator(
            on_trigger=self.announce,
            threshold=s["rotary_threshold"],
            debounce_ms=s["rotary_debounce_ms"],
            parent=self,
        )
        self._crown_position = 0.0

        # -- Gestures --
        self.gestures = GestureRecognizer(s["short_press_ms"], s["long_press_ms"], parent=self)
        self.gestures.short_press.connect(self._on_short_press)
        self.gestures.long_press.connect(self._on_long_press)
        self.gestures.double_tap.connect(self._on_double_tap)

        # -- Build UI --
        central = QWidget()
        central.setObjectName("stopwatchBg")
        central.setStyleSheet("#stopwatchBg { background-color: #000000; }")
        self.setCentralWidget(central)
        lay = QVBoxLayout(central)
        lay.setContentsMargins(12, 12, 12, 12)

        font = QFont(s["font"], 50)
        font.setWeight(QFont.Weight.Medium)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.time_label = QLabel()
        self.time_label.setFont(font)
        self.time_label.setAlignment(Qt.AlignCenter)
        self.time_label.setAttribute(Qt.WA_TransparentForMouseEvents)
        lay.addWidget(self.time_label)

        self._update_display()

    # ------------------------------------------------------------------ #
    #  Display                                                             #
    # ------------------------------------------------------------------ #

    def _update_display(self, *_):
        tk = self.timekeeper
        self.time_label.setText(tk.formatted_display())
        self.time_label.setStyleSheet(f"color: {text_color(tk.elapsed, tk.running)};")

    # ------------------------------------------------------------------ #
    #  Actions                                                             #
    # ------------------------------------------------------------------ #

    def announce(self):
        self.speaker.speak(self.timekeeper.formatted_spoken())

    def _on_short_press(self):
        if not self.timekeeper.running:
            self.timekeeper.start()

    def _on_long_press(self):
        self.timekeeper.reset()

    def _on_double_tap(self):
        if self.timekeeper.running:
            self.timekeeper.stop()
            self.announce()

    # ------------------------------------------------------------------ #
    #  Input events                                                        #
    # ------------------------------------------------------------------ #

    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.gestures.press()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.gestures.release()
        super().mouseReleaseEvent(event)

    # QWidget's default double-click handler re-enters mousePressEvent, so the second click must not reach it or
    # releasing it would start the stopwatch again.
    def mouseDoubleClickEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.gestures.cancel()
            self.gestures.double_click()
            event.accept()
            return
        super().mouseDoubleClickEvent(event)

    def wheelEvent(self, event):
        steps = event.angleDelta().y() / WHEEL_NOTCH
        if steps:
            self.rotate_by(steps * self.settings["wheel_units_per_notch"])
        event.accept()

    # Advances the virtual crown by `units` and feeds its new absolute position to the accumulator.
    def rotate_by(self, units):
        self._crown_position += units
        self.rotary.on_sample(self._crown_position)

    # ------------------------------------------------------------------ #
    #  View lifecycle                                                      #
    # ------------------------------------------------------------------ #

    def showEvent(self, event):
        self.audio.activate()
        self.keep_alive.acquire()
        super().showEvent(event)

    def hideEvent(self, event):
        self.keep_alive.release()
        self.rotary.cancel()
        self.gestures.cancel()
        super().hideEvent(event)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main():
    app = QApplication(sys.argv)
    settings = config.load_settings()
    if settings["console_log"]:
        enable_console()
    window = StopwatchWindow(settings)
    window.resize(360, 200)
    window.show()
    log.info("Stopwatch window shown")
    sys.exit(app.exec())
