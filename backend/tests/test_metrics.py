"""Tests for metrics helpers."""
from __future__ import annotations

from typing import Any, Dict

import pytest

from groove.observability import metrics
from groove.observability import tracing


class _DummyTrace:
    def __init__(self, name: str, metadata: Dict[str, Any]):
        self.name = name
        self.metadata = metadata
        self.updates: list[Dict[str, Any]] = []
        self.ended = False

    def update(self, **kwargs) -> None:
        self.updates.append(kwargs)

    def end(self) -> None:
        self.ended = True


class _DummyClient:
    def __init__(self):
        self.traces: list[_DummyTrace] = []

    def trace(self, name: str, metadata: Dict[str, Any] | None = None):
        trace = _DummyTrace(name, metadata or {})
        self.traces.append(trace)
        return trace


def test_log_metric_closes_trace(monkeypatch) -> None:
    dummy_client = _DummyClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: dummy_client)

    metrics.log_metric("calendar.feed.events", 31, metadata={"user_id": "u-1"})

    assert dummy_client.traces, "Metric call should record a trace"
    recorded = dummy_client.traces[0]
    assert recorded.name == "metric:calendar.feed.events"
    assert recorded.metadata["value"] == 31
    assert recorded.metadata["user_id"] == "u-1"
    assert recorded.ended is True


def test_log_metric_is_noop_without_client(monkeypatch) -> None:
    monkeypatch.setattr(tracing, "get_opik_client", lambda: None)

    metrics.log_metric("habit.create.success", 1)


def test_trace_records_error_and_reraises(monkeypatch) -> None:
    dummy_client = _DummyClient()
    monkeypatch.setattr(tracing, "get_opik_client", lambda: dummy_client)

    with pytest.raises(RuntimeError):
        with tracing.trace("calendar.feed", metadata={"route": "/calendar/feed", "skipped": None}, request_id="r-1"):
            raise RuntimeError("boom")

    recorded = dummy_client.traces[0]
    assert recorded.metadata == {"route": "/calendar/feed", "request_id": "r-1"}
    assert recorded.updates[0]["error_info"]["exception_type"] == "RuntimeError"
    assert recorded.ended is True
