"""Section-aware weighted scoring and the final ensemble score.

Strategy for compute_weighted_score():
1. All sections available: 0.5*experience + 0.3*skills + 0.2*education
2. Some sections available: same weights renormalized over those sections
3. Available weight below 0.3: 70% global score + 30% section score
4. No sections (or no job embedding): global score unchanged
"""

import logging
import math
from collections.abc import Sequence

from models.schemas.section_scoring import (
    SectionEmbeddings,
    SectionName,
    SectionScores,
    WeightedScoreResult,
)
from services.similarity import cosine_similarity

logger = logging.getLogger(__name__)

SECTION_WEIGHTS: dict[SectionName, float] = {
    "experience": 0.5,
    "skills": 0.3,
    "education": 0.2,
}

# Compared against the raw, not renormalized, available weight
MIN_SECTION_COVERAGE = 0.3
BLEND_GLOBAL_WEIGHT = 0.7
BLEND_SECTION_WEIGHT = 0.3

ENSEMBLE_WEIGHTS = {
    "semantic": 0.55,
    "skills": 0.30,
    "level_bonus": 0.15,
}
LEVEL_MATCH_BONUS = 1.0
LEVEL_MISMATCH_BONUS = 0.5


def compute_weighted_score(
    section_embeddings: SectionEmbeddings,
    job_embedding: Sequence[float] | None,
    global_score: float,
) -> WeightedScoreResult:
    """Score a job against whichever resume sections could be embedded."""
    if job_embedding is None or len(job_embedding) == 0:
        return WeightedScoreResult(final_score=global_score, strategy="fallback")

    available: list[SectionName] = []
    scores = SectionScores()

    for name in SECTION_WEIGHTS:
        embedding = getattr(section_embeddings, name)
        if embedding is None or len(embedding) == 0:
            continue
        similarity = cosine_similarity(embedding, job_embedding)
        if math.isnan(similarity):
            logger.debug("Section %s has no usable similarity, scoring 0", name)
            similarity = 0.0
        setattr(scores, name, similarity)
        available.append(name)

    if not available:
        return WeightedScoreResult(
            final_score=global_score,
            section_scores=scores,
            strategy="fallback",
        )

    available_weight = sum(SECTION_WEIGHTS[name] for name in available)
    weighted = sum(
        getattr(scores, name) * (SECTION_WEIGHTS[name] / available_weight)
        for name in available
    )

    if available_weight < MIN_SECTION_COVERAGE:
        return WeightedScoreResult(
            final_score=BLEND_GLOBAL_WEIGHT * global_score + BLEND_SECTION_WEIGHT * weighted,
            section_scores=scores,
            strategy="blended",
            available_sections=available,
        )

    return WeightedScoreResult(
        final_score=weighted,
        section_scores=scores,
        strategy="weighted",
        available_sections=available,
    )


def compute_ensemble_score(
    weighted_result: WeightedScoreResult,
    skill_match_percentage: float,
    level_match: bool = True,
) -> float:
    """Blend semantic, skill-overlap and level-alignment signals.

    skill_match_percentage is 0-100. level_match is the caller's
    thresholded level compatibility; a mismatch earns half the bonus.
    """
    level_bonus = LEVEL_MATCH_BONUS if level_match else LEVEL_MISMATCH_BONUS
    return (
        ENSEMBLE_WEIGHTS["semantic"] * weighted_result.final_score
        + ENSEMBLE_WEIGHTS["skills"] * (skill_match_percentage / 100)
        + ENSEMBLE_WEIGHTS["level_bonus"] * level_bonus
    )
