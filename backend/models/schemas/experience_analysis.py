"""Candidate seniority analysis."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ExperienceLevel = Literal["intern", "entry", "mid", "senior", "lead", "principal"]


class ExperienceAnalysis(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    level: ExperienceLevel = "entry"
    years_of_experience: int | None = Field(default=None, alias="yearsOfExperience")
    confidence: float = 0.3  # 0-1
    signals: list[str] = []  # human-readable evidence for the decision
