"""Tests for observability/ — performance tracker and analytics sink."""

import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest
import requests

from mano.core.config import AnalyticsSettings
from mano.observability.analytics import AnalyticsClient
from mano.observability.performance import (
    COMPLETION_COMPLETE,
    COMPLETION_START,
    CONTEXT_COMPLETE,
    PERFORMANCE_EVENT,
    PIPELINE_START,
    PerformanceTracker,
)


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def advance(self, ms):
        self.now += ms

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker(clock):
    return PerformanceTracker(user_id="u1", request_id="r1", clock=clock)


class TestPerformanceTracker:
    def test_start_checkpoint(self, tracker):
        assert tracker.checkpoint_names() == [PIPELINE_START]

    def test_duration_between_checkpoints(self, tracker, clock):
        clock.advance(50)
        tracker.record(CONTEXT_COMPLETE)
        assert tracker.duration(PIPELINE_START, CONTEXT_COMPLETE) == 50

    def test_duration_to_now(self, tracker, clock):
        clock.advance(30)
        tracker.record(COMPLETION_START)
        clock.advance(20)
        assert tracker.duration(COMPLETION_START) == 20

    def test_missing_checkpoint_uses_start(self, tracker, clock):
        clock.advance(40)
        tracker.record(CONTEXT_COMPLETE)
        assert tracker.duration("never_recorded", CONTEXT_COMPLETE) == 40
        # never raises on an unknown end either
        tracker.duration(CONTEXT_COMPLETE, "never_recorded")

    def test_rerecord_overwrites(self, tracker, clock):
        clock.advance(10)
        tracker.record(COMPLETION_START)
        clock.advance(100)
        tracker.record(COMPLETION_START)
        clock.advance(5)
        tracker.record(COMPLETION_COMPLETE)
        assert tracker.duration(COMPLETION_START, COMPLETION_COMPLETE) == 5

    def test_finish_reports(self, clock):
        reporter = MagicMock()
        tracker = PerformanceTracker(user_id="u1", request_id="r1", reporter=reporter, clock=clock)
        clock.advance(10)
        tracker.record(COMPLETION_START)
        clock.advance(25)
        tracker.record(COMPLETION_COMPLETE)

        data = tracker.finish({"suggestion_count": 2, "request_id": "override"})
        tracker.pending.result(timeout=5)

        reporter.assert_called_once_with("u1", PERFORMANCE_EVENT, data)
        assert data["total_duration_ms"] == 35
        assert data["completion_duration_ms"] == 25
        for key in ("context_build_duration_ms", "composition_duration_ms", "extraction_duration_ms"):
            assert key in data
        assert data["suggestion_count"] == 2
        assert data["request_id"] == "override"

    def test_reporter_failure_is_swallowed(self, clock):
        reporter = MagicMock(side_effect=RuntimeError("analytics down"))
        tracker = PerformanceTracker(reporter=reporter, clock=clock)
        data = tracker.finish()
        assert "total_duration_ms" in data
        assert tracker.pending.result(timeout=5) is None
        reporter.assert_called_once()

    def test_finish_does_not_wait_for_reporter(self, clock):
        release = threading.Event()
        delivered = threading.Event()

        def slow_reporter(user_id, event, data):
            release.wait(timeout=5)
            delivered.set()

        with ThreadPoolExecutor(max_workers=1) as executor:
            tracker = PerformanceTracker(reporter=slow_reporter, clock=clock, executor=executor)
            data = tracker.finish()
            assert data["request_id"] == ""
            assert not delivered.is_set()
            release.set()
        assert delivered.is_set()

    def test_finish_without_reporter(self, tracker):
        assert tracker.finish()["request_id"] == "r1"
        assert tracker.pending is None


@pytest.fixture
def settings():
    return AnalyticsSettings(api_key="phc_test", host="https://posthog.example", timeout=1.0)


class TestAnalyticsClient:
    def test_disabled_without_key(self):
        session = MagicMock()
        client = AnalyticsClient(AnalyticsSettings(api_key=""), session=session)
        assert not client.is_enabled
        assert client.track("u1", "event") is False
        session.post.assert_not_called()

    def test_track_posts_capture(self, settings):
        session = MagicMock()
        session.post.return_value = MagicMock(status_code=200)
        client = AnalyticsClient(settings, session=session)

        assert client.track("u1", "chat_turn", {"approach": "urgent"}) is True

        args, kwargs = session.post.call_args
        assert args[0] == "https://posthog.example/capture/"
        body = kwargs["json"]
        assert body["api_key"] == "phc_test"
        assert body["event"] == "chat_turn"
        assert body["distinct_id"] == "u1"
        assert body["properties"]["approach"] == "urgent"
        assert body["properties"]["environment"] == "edge_function"
        assert "timestamp" in body["properties"]
        assert kwargs["timeout"] == 1.0

    def test_network_error_never_raises(self, settings):
        session = MagicMock()
        session.post.side_effect = requests.exceptions.ConnectionError("no route")
        client = AnalyticsClient(settings, session=session)
        assert client.track("u1", "event") is False

    def test_rejected_capture(self, settings):
        session = MagicMock()
        session.post.return_value = MagicMock(status_code=500, text="boom")
        client = AnalyticsClient(settings, session=session)
        assert client.track("u1", "event") is False

    def test_usable_as_reporter(self, settings, clock):
        session = MagicMock()
        session.post.return_value = MagicMock(status_code=200)
        client = AnalyticsClient(settings, session=session)
        tracker = PerformanceTracker(user_id="u9", reporter=client, clock=clock)
        tracker.finish()
        tracker.pending.result(timeout=5)
        body = session.post.call_args.kwargs["json"]
        assert body["event"] == PERFORMANCE_EVENT
        assert body["distinct_id"] == "u9"


class TestAnalyticsSettings:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("POSTHOG_KEY", " phc_env ")
        monkeypatch.setenv("POSTHOG_HOST", "https://us.posthog.com/")
        monkeypatch.setenv("MANO_ANALYTICS_TIMEOUT", "2.5")
        settings = AnalyticsSettings.from_env(read_dotenv=False)
        assert settings.enabled
        assert settings.api_key == "phc_env"
        assert settings.host == "https://us.posthog.com"
        assert settings.timeout == 2.5

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("POSTHOG_KEY", raising=False)
        monkeypatch.delenv("POSTHOG_HOST", raising=False)
        monkeypatch.setenv("MANO_ANALYTICS_TIMEOUT", "not-a-number")
        settings = AnalyticsSettings.from_env(read_dotenv=False)
        assert not settings.enabled
        assert settings.host == "https://eu.posthog.com"
        assert settings.timeout == 3.0
