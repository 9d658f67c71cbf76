from PySide6.QtCore import QLocale
from PySide6.QtMultimedia import QMediaDevices
from PySide6.QtTextToSpeech import QTextToSpeech
from tt.common.logger import log

# Makes sure there is somewhere for speech to go. A failure is logged and otherwise ignored, the stopwatch keeps
# working and announcements may simply be inaudible.
class AudioOutput:

    def __init__(self):
        self.active = False

    def activate(self):
        device = QMediaDevices.defaultAudioOutput()
        if device.isNull():
            log.warning("Failed to set up audio output: no default audio output device")
            self.active = False
            return False
        log.info(f"Audio output ready on '{device.description()}'")
        self.active = True
        return True

# Thin wrapper over QTextToSpeech that reads announcements in the configured locale.
class Speaker:

    def __init__(self, language="en-US", rate=0.0, parent=None):
        self._engine = QTextToSpeech(parent)
        self._engine.setLocale(QLocale(language.replace("-", "_")))
        self._engine.setRate(max(-1.0, min(1.0, float(rate))))
        self._engine.stateChanged.connect(self._on_state_changed)
        log.debug(f"Initialized speech engine '{self._engine.engine()}' for locale {language}")

    def speak(self, text):
        log.info(f"Announcing '{text}'")
        self._engine.say(text)

    def _on_state_changed(self, state):
        if state == QTextToSpeech.State.Error:
            log.error(f"Speech engine error: {self._engine.errorString()}")
