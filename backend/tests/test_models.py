"""Unit tests for the request/response models."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from campaign_chat.core.models import ChartPayload, ChartPoint, ChatRequest, ChatResponse


def _points(n: int) -> list[ChartPoint]:
    return [ChartPoint(x=f"p{i}", y=i, label=f"p{i}") for i in range(n)]


class TestChartPayload:
    def test_point_limit(self):
        """More than twenty points is rejected."""
        ChartPayload(kind="bar", points=_points(20))
        with pytest.raises(ValidationError):
            ChartPayload(kind="bar", points=_points(21))

    def test_labels_must_match_points(self):
        """labels, when present, has one entry per point."""
        ChartPayload(kind="pie", points=_points(2), labels=["p0", "p1"])
        with pytest.raises(ValidationError):
            ChartPayload(kind="pie", points=_points(2), labels=["p0"])

    def test_kind_is_a_fixed_tag(self):
        """Only line, bar and pie are accepted."""
        with pytest.raises(ValidationError):
            ChartPayload(kind="scatter", points=[])


class TestChatResponseSerialization:
    def test_error_shape(self):
        """Errors serialize with an empty message, an error, and no chart."""
        data = ChatResponse(error="boom").model_dump(mode="json")
        assert data == {"message": "", "error": "boom"}

    def test_round_trip_without_chart(self):
        """A response without a chart stays without one."""
        original = ChatResponse(message="hi")
        parsed = ChatResponse.model_validate_json(original.model_dump_json())
        assert "chart" not in json.loads(original.model_dump_json())
        assert parsed.chart is None
        assert parsed == original

    def test_round_trip_with_chart(self):
        """Charts survive serialization with numeric values intact."""
        chart = ChartPayload(
            kind="bar",
            points=[ChartPoint(x="A", y=1.5, label="A"), ChartPoint(x=3, y=2, label="3")],
            labels=["A", "3"],
        )
        original = ChatResponse(message="ok", chart=chart)
        raw = json.loads(original.model_dump_json())
        assert raw["chart"]["points"][0]["y"] == 1.5
        assert raw["chart"]["points"][1]["x"] == 3
        assert raw["error"] is None

        parsed = ChatResponse.model_validate(raw)
        assert parsed.chart is not None
        assert parsed.chart.points[1].x == 3
        assert isinstance(parsed.chart.points[1].y, int)
        assert parsed == original


class TestChatRequest:
    def test_history_is_optional(self):
        """A bare message is a valid request."""
        request = ChatRequest.model_validate({"message": "roi"})
        assert request.history == []

    def test_accepts_ui_history_key(self):
        """The UI's conversationHistory key populates history."""
        request = ChatRequest.model_validate({
            "message": "roi",
            "conversationHistory": [
                {"id": "1", "role": "user", "content": "hi", "timestamp": "2024-01-01T00:00:00Z"},
                {"role": "assistant", "content": "hello",
                 "chartData": {"kind": "pie", "points": [{"x": "Email", "y": 2}]}},
            ],
        })
        assert [turn.role for turn in request.history] == ["user", "assistant"]
        assert request.history[1].chart.kind == "pie"
        assert request.history[1].id

    def test_missing_message_parses(self):
        """Absent and null messages parse; the endpoint rejects them."""
        assert ChatRequest.model_validate({}).message is None
        assert ChatRequest.model_validate({"message": None}).message is None

    def test_accepts_client_chart_shape(self):
        """History charts in the browser client's {type, data} shape validate."""
        request = ChatRequest.model_validate({
            "message": "roi",
            "conversationHistory": [{
                "id": "2",
                "role": "assistant",
                "content": "Average ROI: 46.67%",
                "timestamp": "2024-01-01T00:00:05.000Z",
                "chartData": {
                    "type": "bar",
                    "data": [{"x": "A", "y": 1, "label": "A"}],
                    "labels": ["A"],
                },
            }],
        })
        chart = request.history[0].chart
        assert chart.kind == "bar"
        assert [p.x for p in chart.points] == ["A"]
