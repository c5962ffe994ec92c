import uuid

import pytest

from bitbinder.services.recording_sessions import (
    RecordingClock,
    RecordingInProgressError,
    RecordingSessionRegistry,
)


class FakeTime:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


def test_clock_excludes_paused_time():
    t = FakeTime()
    clock = RecordingClock(now=t)
    clock.start()
    t.now += 10
    clock.pause()
    assert clock.is_paused
    t.now += 50
    assert clock.elapsed_seconds == pytest.approx(10)
    clock.resume()
    t.now += 5
    assert clock.elapsed_seconds == pytest.approx(15)
    assert clock.stop() == pytest.approx(15)
    assert not clock.is_recording and not clock.is_paused


def test_pause_and_resume_are_noops_in_wrong_state():
    t = FakeTime()
    clock = RecordingClock(now=t)
    clock.pause()
    assert not clock.is_paused
    clock.start()
    clock.resume()
    assert not clock.is_paused
    t.now += 3
    clock.pause()
    clock.pause()
    t.now += 3
    assert clock.elapsed_seconds == pytest.approx(3)


def test_registry_one_session_per_user():
    t = FakeTime()
    registry = RecordingSessionRegistry(clock_factory=lambda: RecordingClock(now=t))
    user, set_list = uuid.uuid4(), uuid.uuid4()
    registry.start(user, set_list, "Friday")
    with pytest.raises(RecordingInProgressError):
        registry.start(user, uuid.uuid4(), "Other")
    # another user is independent
    registry.start(uuid.uuid4(), set_list, "Friday")

    t.now += 42
    status = registry.get(user).status()
    assert status["elapsed_seconds"] == 42
    assert status["elapsed_display"] == "00:42"

    assert registry.finish(user, uuid.uuid4()) is None
    assert registry.finish(user, set_list) == pytest.approx(42)
    assert registry.get(user) is None


def test_registry_cancel():
    registry = RecordingSessionRegistry()
    user = uuid.uuid4()
    assert registry.cancel(user) is None
    registry.start(user, uuid.uuid4(), "Set")
    assert registry.cancel(user) is not None
    assert registry.get(user) is None
