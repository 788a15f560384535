"""Section-aware scoring inputs and outputs."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SectionName = Literal["experience", "skills", "education"]
ScoringStrategy = Literal["weighted", "blended", "fallback"]


class SectionEmbeddings(BaseModel):
    """Embeddings of resume sections; None when the section was too short to embed."""
    experience: list[float] | None = None
    skills: list[float] | None = None
    education: list[float] | None = None


class SectionScores(BaseModel):
    experience: float = 0.0
    skills: float = 0.0
    education: float = 0.0


class WeightedScoreResult(BaseModel):
    """Blended section score plus the strategy used to reach it.

    Strategy:
        weighted - renormalized weighted sum over available sections
        blended  - 70% global + 30% weighted (thin section coverage)
        fallback - global score unchanged (no usable sections)
    """
    model_config = ConfigDict(populate_by_name=True)

    final_score: float = Field(default=0.0, alias="finalScore")
    section_scores: SectionScores = Field(default_factory=SectionScores, alias="sectionScores")
    strategy: ScoringStrategy = "fallback"
    available_sections: list[SectionName] = Field(default_factory=list, alias="availableSections")
