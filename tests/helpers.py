"""Deterministic stand-ins for the clock and the platform collaborators."""


class DeterministicClock:
    """Monotonic clock stub that only moves when told to."""

    def __init__(self, start=1000.0):
        self._now = start

    def advance(self, delta):
        self._now += delta

    def __call__(self):
        return self._now


class RecordingHaptics:

    def __init__(self):
        self.pulses = []

    def pulse(self, kind):
        self.pulses.append(kind.value)


class RecordingSpeaker:

    def __init__(self):
        self.spoken = []

    def speak(self, text):
        self.spoken.append(text)


class FakeAudio:

    def __init__(self, works=True):
        self.works = works
        self.activations = 0

    def activate(self):
        self.activations += 1
        return self.works
