"""Haptic feedback collaborator.

Desktop hosts have no taptic engine, so a pulse is rendered as the platform
alert beep when haptics are enabled and is always logged.
"""

from enum import Enum

from PySide6.QtWidgets import QApplication

from tt.common.logger import log


class HapticKind(Enum):
    START = "start"
    NOTIFICATION = "notification"


class Haptics:

    def __init__(self, enabled=True):
        self.enabled = enabled

    def pulse(self, kind: HapticKind):
        log.debug(f"Haptic pulse '{kind.value}' (enabled={self.enabled})")
        if self.enabled and QApplication.instance() is not None:
            QApplication.beep()
