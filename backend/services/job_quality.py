"""Job posting quality scoring.

Low-information postings (short blurbs, no skills, no company) rank well
on embeddings alone but make poor recommendations, so they are filtered
out before enrichment.

Each dimension is tiered: the highest tier reached sets the value,
tiers are not summed.
"""

import re
from collections.abc import Iterable
from typing import TypeVar

from models.schemas.job_record import JobMatch, JobRecord
from models.schemas.quality_score import QualityBreakdown, QualityScore

QUALITY_THRESHOLD = 0.4

# (minimum words, score)
_DESCRIPTION_TIERS = [(100, 0.15), (200, 0.25), (350, 0.30)]
# (minimum skills, score)
_SKILLS_TIERS = [(3, 0.15), (5, 0.25)]

SENIORITY_SCORE = 0.15
COMPANY_SCORE = 0.10
SPECIFICITY_PER_MATCH = 0.05
SPECIFICITY_CAP = 0.20

_SENIORITY_RE = re.compile(
    r"\b(?:junior|mid|senior|lead|principal|staff|entry|intern|associate)\b",
    re.IGNORECASE,
)

_SPECIFICITY_PATTERNS: list[re.Pattern] = [
    re.compile(r"\d+\s*years?", re.IGNORECASE),  # years of experience
    re.compile(r"\$[\d,]+"),  # salary
    re.compile(r"remote|hybrid|on-?site", re.IGNORECASE),  # work arrangement
    re.compile(r"bachelor|master|phd|degree", re.IGNORECASE),  # education
    re.compile(r"team of \d+", re.IGNORECASE),  # team size
]

JobT = TypeVar("JobT", JobRecord, JobMatch)


def _tier(value: int, tiers: list[tuple[int, float]]) -> float:
    score = 0.0
    for minimum, tier_score in tiers:
        if value >= minimum:
            score = tier_score
    return score


def score_job_quality(job: JobRecord | JobMatch) -> QualityScore:
    """Score how detailed and parseable a job posting is (0-1)."""
    description = job.description or ""
    word_count = len(description.split())
    skill_count = len(job.skills or [])

    has_seniority = bool(job.level) or bool(_SENIORITY_RE.search(job.title or ""))

    company = job.company or ""
    has_company = len(company) > 2 and company.lower() != "unknown"

    specificity_hits = sum(1 for p in _SPECIFICITY_PATTERNS if p.search(description))

    breakdown = QualityBreakdown(
        description_length=_tier(word_count, _DESCRIPTION_TIERS),
        has_skills_list=_tier(skill_count, _SKILLS_TIERS),
        has_seniority=SENIORITY_SCORE if has_seniority else 0.0,
        has_company=COMPANY_SCORE if has_company else 0.0,
        specificity=min(specificity_hits * SPECIFICITY_PER_MATCH, SPECIFICITY_CAP),
    )
    score = round(breakdown.total(), 10)

    return QualityScore(
        score=score,
        breakdown=breakdown,
        is_valid=score >= QUALITY_THRESHOLD,
    )


def filter_high_quality_jobs(
    jobs: Iterable[JobT],
    threshold: float = QUALITY_THRESHOLD,
) -> list[JobT]:
    """Keep jobs scoring at least threshold, best quality first."""
    scored = [(job, score_job_quality(job)) for job in jobs]
    kept = [pair for pair in scored if pair[1].score >= threshold]
    kept.sort(key=lambda pair: pair[1].score, reverse=True)
    return [job for job, _ in kept]


def annotate_jobs_with_quality(jobs: Iterable[JobT]) -> list[tuple[JobT, QualityScore]]:
    return [(job, score_job_quality(job)) for job in jobs]
