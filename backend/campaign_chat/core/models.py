from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Literal
from uuid import uuid4

from pydantic import AliasChoices, BaseModel, Field, model_serializer, model_validator

# Chart readability limit shared by the projector and the payload model
MAX_CHART_POINTS = 20


class ChartPoint(BaseModel):
    x: str | int | float
    y: int | float
    label: str | None = None


class ChartPayload(BaseModel):
    # The browser client sends charts back as {type, data, labels}
    kind: Literal["line", "bar", "pie"] = Field(validation_alias=AliasChoices("kind", "type"))
    points: list[ChartPoint] = Field(
        default_factory=list,
        max_length=MAX_CHART_POINTS,
        validation_alias=AliasChoices("points", "data"),
    )
    labels: list[str] | None = None

    @model_validator(mode="after")
    def _labels_match_points(self) -> ChartPayload:
        if self.labels is not None and len(self.labels) != len(self.points):
            raise ValueError(
                f"labels has {len(self.labels)} entries but points has {len(self.points)}"
            )
        return self


class ChatTurn(BaseModel):
    id: str = Field(default_factory=lambda: uuid4().hex)
    role: Literal["user", "assistant"]
    content: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    chart: ChartPayload | None = Field(
        default=None, validation_alias=AliasChoices("chart", "chartData")
    )


class ChatRequest(BaseModel):
    message: str | None = None
    # Accepted for the UI contract; not used for classification.
    history: list[ChatTurn] = Field(
        default_factory=list,
        validation_alias=AliasChoices("history", "conversationHistory"),
    )


class ChatResponse(BaseModel):
    message: str = ""
    chart: ChartPayload | None = None
    error: str | None = None

    @model_serializer(mode="wrap")
    def _omit_missing_chart(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if self.chart is None:
            data.pop("chart", None)
        return data
