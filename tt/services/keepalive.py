"""Keep-alive session held while the stopwatch is on screen.

A session runs for at most ``max_minutes`` (0 means no limit), warns shortly
before it runs out, and is never restarted once invalid; ``KeepAlive`` hands
out a fresh one instead. Session notifications are logging hooks only.
"""

from enum import Enum

from PySide6.QtCore import QObject, QTimer, Signal

from tt.common.logger import log

EXPIRY_WARNING_MS = 30 * 1000


class SessionState(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    INVALID = "invalid"


class ExtendedSession(QObject):

    started = Signal()
    will_expire = Signal()
    invalidated = Signal(str, str)  # reason, error message ("" when none)

    def __init__(self, max_minutes=0, parent=None):
        super().__init__(parent)
        self.state = SessionState.NOT_STARTED
        self._max_ms = max(0, int(max_minutes)) * 60 * 1000

        self._expiry_timer = QTimer(self)
        self._expiry_timer.setSingleShot(True)
        self._expiry_timer.timeout.connect(self._on_expired)

        self._warning_timer = QTimer(self)
        self._warning_timer.setSingleShot(True)
        self._warning_timer.timeout.connect(self.will_expire)

    def start(self):
        if self.state is not SessionState.NOT_STARTED:
            return
        self.state = SessionState.RUNNING
        if self._max_ms:
            self._expiry_timer.start(self._max_ms)
            self._warning_timer.start(max(0, self._max_ms - EXPIRY_WARNING_MS))
        self.started.emit()

    def invalidate(self, reason="released", error=""):
        if self.state is not SessionState.RUNNING:
            return
        self._expiry_timer.stop()
        self._warning_timer.stop()
        self.state = SessionState.INVALID
        self.invalidated.emit(reason, error)

    def _on_expired(self):
        self.invalidate("expired")


class KeepAlive:
    """Acquire on appear, release on disappear."""

    def __init__(self, max_minutes=0):
        self.max_minutes = max_minutes
        self.session = None

    def acquire(self):
        if self.session is None or self.session.state is SessionState.INVALID:
            self.session = ExtendedSession(self.max_minutes)
            self.session.started.connect(self._on_started)
            self.session.will_expire.connect(self._on_will_expire)
            self.session.invalidated.connect(self._on_invalidated)
            self.session.start()

    def release(self):
        if self.session is not None and self.session.state is SessionState.RUNNING:
            self.session.invalidate()
        self.session = None

    # -- Session notifications --

    def _on_started(self):
        log.info("Extended runtime session started.")

    def _on_will_expire(self):
        log.info("Extended runtime session will expire soon.")

    def _on_invalidated(self, reason, error):
        if error:
            log.warning(f"Extended runtime session invalidated with error: {error}")
        else:
            log.info(f"Extended runtime session invalidated with reason: {reason}")
