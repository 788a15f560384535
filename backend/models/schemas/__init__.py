"""Per-request domain contracts for the matching core."""

from models.schemas.experience_analysis import ExperienceAnalysis, ExperienceLevel
from models.schemas.job_record import JobMatch, JobRecord
from models.schemas.quality_score import QualityBreakdown, QualityScore
from models.schemas.section_scoring import SectionEmbeddings, SectionScores, WeightedScoreResult
from models.schemas.skill_gap import SkillAnalysis, SkillGap

__all__ = [
    "ExperienceAnalysis",
    "ExperienceLevel",
    "JobMatch",
    "JobRecord",
    "QualityBreakdown",
    "QualityScore",
    "SectionEmbeddings",
    "SectionScores",
    "WeightedScoreResult",
    "SkillAnalysis",
    "SkillGap",
]
