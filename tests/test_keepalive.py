"""Tests for the keep-alive session lifecycle in tt.services.keepalive."""

import unittest


class TestExtendedSession(unittest.TestCase):

    def test_start_and_invalidate(self):
        from tt.services.keepalive import ExtendedSession, SessionState
        session = ExtendedSession()
        events = []
        session.started.connect(lambda: events.append("started"))
        session.invalidated.connect(lambda reason, error: events.append(reason))

        self.assertIs(session.state, SessionState.NOT_STARTED)
        session.start()
        self.assertIs(session.state, SessionState.RUNNING)
        session.invalidate()
        self.assertIs(session.state, SessionState.INVALID)
        self.assertEqual(events, ["started", "released"])

    def test_invalid_session_never_restarts(self):
        from tt.services.keepalive import ExtendedSession, SessionState
        session = ExtendedSession()
        session.start()
        session.invalidate()
        session.start()
        self.assertIs(session.state, SessionState.INVALID)

    def test_invalidate_before_start_is_noop(self):
        from tt.services.keepalive import ExtendedSession, SessionState
        session = ExtendedSession()
        session.invalidate()
        self.assertIs(session.state, SessionState.NOT_STARTED)

    def test_expiry_warns_then_invalidates(self):
        from PySide6.QtTest import QTest
        from tt.services import keepalive

        session = keepalive.ExtendedSession()
        # Shrink the limit to something a test can wait for
        session._max_ms = 120
        events = []
        session.will_expire.connect(lambda: events.append("will_expire"))
        session.invalidated.connect(lambda reason, error: events.append(reason))
        session.start()
        QTest.qWait(400)
        self.assertEqual(events, ["will_expire", "expired"])
        self.assertIs(session.state, keepalive.SessionState.INVALID)


class TestKeepAlive(unittest.TestCase):

    def test_acquire_starts_a_session(self):
        from tt.services.keepalive import KeepAlive, SessionState
        ka = KeepAlive()
        ka.acquire()
        self.assertIs(ka.session.state, SessionState.RUNNING)

    def test_acquire_twice_keeps_running_session(self):
        from tt.services.keepalive import KeepAlive
        ka = KeepAlive()
        ka.acquire()
        first = ka.session
        ka.acquire()
        self.assertIs(ka.session, first)

    def test_acquire_replaces_invalid_session(self):
        from tt.services.keepalive import KeepAlive, SessionState
        ka = KeepAlive()
        ka.acquire()
        first = ka.session
        first.invalidate("expired")
        ka.acquire()
        self.assertIsNot(ka.session, first)
        self.assertIs(ka.session.state, SessionState.RUNNING)

    def test_release_invalidates_and_drops(self):
        from tt.services.keepalive import KeepAlive, SessionState
        ka = KeepAlive()
        ka.acquire()
        session = ka.session
        ka.release()
        self.assertIsNone(ka.session)
        self.assertIs(session.state, SessionState.INVALID)

    def test_release_without_session_is_safe(self):
        from tt.services.keepalive import KeepAlive
        ka = KeepAlive()
        ka.release()
        self.assertIsNone(ka.session)


if __name__ == "__main__":
    unittest.main()
