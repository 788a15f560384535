from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from models.schemas.experience_analysis import ExperienceAnalysis
from models.schemas.section_scoring import SectionName, SectionScores, ScoringStrategy
from models.schemas.skill_gap import SkillAnalysis


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class JobAnalysis(_CamelModel):
    missing_skills: list[str] = Field(default_factory=list, alias="missingSkills")
    matched_skills: list[str] = Field(default_factory=list, alias="matchedSkills")
    extra_skills: list[str] = Field(default_factory=list, alias="extraSkills")
    match_percentage: float = Field(default=0.0, alias="matchPercentage")
    section_scores: SectionScores = Field(default_factory=SectionScores, alias="sectionScores")
    scoring_strategy: ScoringStrategy = Field(default="fallback", alias="scoringStrategy")
    available_sections: list[SectionName] = Field(default_factory=list, alias="availableSections")
    level_match: float = Field(default=0.8, alias="levelMatch")
    candidate_level: str = Field(default="entry", alias="candidateLevel")


class RankedJob(_CamelModel):
    id: str
    title: str = ""
    company: str = ""
    description: str = ""
    skills: list[str] | None = None
    level: str | None = None
    category: str | None = None
    original_url: str | None = Field(default=None, alias="originalUrl")
    score: float = 0.0  # ensemble score, the ranking key
    semantic_score: float = Field(default=0.0, alias="semanticScore")  # raw cosine
    analysis: JobAnalysis = Field(default_factory=JobAnalysis)


class PlotPoint(_CamelModel):
    x: float = 0.0
    y: float = 0.0


class JobPlotPoint(PlotPoint):
    id: str
    title: str = ""
    company: str = ""
    score: float = 0.0
    is_top_match: bool = Field(default=False, alias="isTopMatch")


class MarketMap(_CamelModel):
    """2-D projection of the resume and the plotted jobs."""
    user: PlotPoint = Field(default_factory=PlotPoint)
    jobs: list[JobPlotPoint] = []


class Suggestion(_CamelModel):
    category: Literal["skills", "experience", "education", "format", "content"]
    severity: Literal["critical", "warning", "tip"]
    title: str
    message: str
    example: str | None = None


class ResumeFeedback(_CamelModel):
    overall_score: int = Field(default=50, alias="overallScore")  # 0-100
    grade: Literal["A", "B", "C", "D", "F"] = "C"
    suggestions: list[Suggestion] = []
    strengths: list[str] = []
    summary: str = ""


class RecommendResponse(_CamelModel):
    success: bool = True
    matches: list[RankedJob] = []
    visualization: MarketMap = Field(default_factory=MarketMap)
    experience: ExperienceAnalysis = Field(default_factory=ExperienceAnalysis)
    skills: SkillAnalysis = Field(default_factory=SkillAnalysis)
    feedback: ResumeFeedback = Field(default_factory=ResumeFeedback)
    resume_preview: str = Field(default="", alias="resumePreview")
    jobs_considered: int = Field(default=0, alias="jobsConsidered")
    jobs_after_quality_filter: int = Field(default=0, alias="jobsAfterQualityFilter")
