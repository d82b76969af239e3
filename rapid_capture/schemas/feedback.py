"""Pydantic schemas for post-attempt feedback."""
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field

from rapid_capture.schemas.scenario import ThreatLevel


class Feedback(BaseModel):
    """Explanation shown after an attempt. Accepts snake_case or camelCase keys."""

    feedback: str = Field(min_length=1)
    tips: list[str] = Field(default_factory=list)
    threat_level: ThreatLevel = Field(validation_alias=AliasChoices("threat_level", "threatLevel"))
    real_world_impact: str = Field(
        default="",
        validation_alias=AliasChoices("real_world_impact", "realWorldImpact"),
    )
    source: Literal["service", "fallback"] = "service"


class ScenarioSummary(BaseModel):
    """What the feedback service is told about a scenario."""

    id: str
    title: str
    type: str
    difficulty: str


class FeedbackOutSchema(BaseModel):
    scenario_id: str
    status: Literal["pending", "ready"]
    feedback: Feedback | None = None
