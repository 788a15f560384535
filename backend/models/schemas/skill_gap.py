"""Taxonomy skill extraction and resume-vs-job gap."""

from pydantic import BaseModel, ConfigDict, Field


class SkillAnalysis(BaseModel):
    """Skills found in a text, in taxonomy display casing."""
    model_config = ConfigDict(populate_by_name=True)

    found: list[str] = []
    by_category: dict[str, list[str]] = Field(default_factory=dict, alias="byCategory")
    total_count: int = Field(default=0, alias="totalCount")


class SkillGap(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    missing: list[str] = []  # job skills absent from the resume
    matching: list[str] = []  # job skills present in the resume
    extra: list[str] = []  # resume skills the job does not ask for
    match_percentage: float = Field(default=0.0, alias="matchPercentage")  # 0-100
