"""Orchestrator: resume -> ranked, explained job matches + market map.

Pipeline:
1. Section extraction, experience level and skill detection
2. Whole-resume and per-section embeddings
3. Rank the corpus by cosine similarity (wide pool)
4. Drop low-quality postings, keep rank order (plotted pool)
5. Enrich the top matches: skill gap, section scoring, level fit
6. Ensemble score and re-sort the enriched matches
7. PCA projection of resume + plotted jobs
8. Resume feedback against the skills top matches ask for
"""

import logging
import math
from collections import Counter

import numpy as np

from config import settings
from models.responses import (
    JobAnalysis,
    JobPlotPoint,
    MarketMap,
    PlotPoint,
    RankedJob,
    RecommendResponse,
)
from models.schemas.experience_analysis import ExperienceAnalysis
from models.schemas.job_record import JobMatch, JobRecord
from models.schemas.section_scoring import SectionEmbeddings
from models.schemas.skill_gap import SkillAnalysis
from services.document_parser import clean_text
from services.embeddings import TextEmbedder
from services.experience_level import detect_experience_level, match_experience_level
from services.job_corpus import JobCorpus
from services.job_quality import score_job_quality
from services.pca import compute_pca
from services.resume_feedback import generate_resume_feedback
from services.section_parser import extract_resume_sections
from services.similarity import rank_jobs
from services.skill_extractor import SkillTaxonomy, analyze_gap, extract_skills
from services.weighted_scoring import compute_ensemble_score, compute_weighted_score

logger = logging.getLogger(__name__)

# Level compatibility at or above this earns the full ensemble level bonus
LEVEL_MATCH_THRESHOLD = 0.8
PREVIEW_CHARS = 200
IN_DEMAND_SKILLS = 10


def recommend(
    resume_text: str,
    corpus: JobCorpus,
    taxonomy: SkillTaxonomy,
    embedder: TextEmbedder,
    rng: np.random.Generator | None = None,
) -> RecommendResponse:
    """Run the full matching pipeline for one resume."""
    # --- Layer 1: Resume structure ---
    sections = extract_resume_sections(resume_text)
    experience = detect_experience_level(resume_text)
    resume_skills = extract_skills(resume_text, taxonomy)
    cleaned = clean_text(resume_text)

    # --- Layer 2: Embeddings ---
    resume_embedding = embedder.embed(cleaned)
    section_embeddings = embedder.embed_sections(sections)

    # --- Layer 3: Wide ranking ---
    ranked = rank_jobs(resume_embedding, corpus.jobs, top_k=settings.rank_pool_size)

    # --- Layer 4: Quality filter, rank order preserved ---
    survivors = [job for job in ranked if score_job_quality(job).is_valid]
    plotted = survivors[:settings.plot_pool_size]
    top = plotted[:settings.detail_pool_size]
    logger.info(
        "Ranked %d jobs, %d passed quality filter, plotting %d, enriching %d",
        len(ranked), len(survivors), len(plotted), len(top),
    )

    # --- Layers 5-6: Enrichment and ensemble re-ranking ---
    matches = [
        _enrich_match(match, corpus.get(match.id), resume_skills, section_embeddings, experience, taxonomy)
        for match in top
    ]
    matches.sort(key=lambda m: m.score, reverse=True)

    # --- Layer 7: Market map ---
    visualization = build_market_map(resume_embedding, plotted, corpus, rng=rng)

    # --- Layer 8: Feedback ---
    feedback = generate_resume_feedback(
        resume_text,
        sections,
        resume_skills,
        experience,
        top_job_skills=_in_demand_skills(matches),
    )

    preview = cleaned[:PREVIEW_CHARS] + ("..." if len(cleaned) > PREVIEW_CHARS else "")

    return RecommendResponse(
        matches=matches,
        visualization=visualization,
        experience=experience,
        skills=resume_skills,
        feedback=feedback,
        resume_preview=preview,
        jobs_considered=len(ranked),
        jobs_after_quality_filter=len(survivors),
    )


def _job_skills(job: JobMatch, taxonomy: SkillTaxonomy) -> list[str]:
    """The job's own skills list, or skills found in its title and description."""
    if job.skills:
        return list(job.skills)
    return extract_skills(f"{job.title} {job.description}", taxonomy).found


def _enrich_match(
    match: JobMatch,
    record: JobRecord | None,
    resume_skills: SkillAnalysis,
    section_embeddings: SectionEmbeddings,
    experience: ExperienceAnalysis,
    taxonomy: SkillTaxonomy,
) -> RankedJob:
    global_score = 0.0 if math.isnan(match.score) else match.score
    job_embedding = record.embedding if record is not None else []

    gap = analyze_gap(resume_skills.found, _job_skills(match, taxonomy))
    weighted = compute_weighted_score(section_embeddings, job_embedding, global_score)
    level_score = match_experience_level(experience.level, match.level)
    final_score = compute_ensemble_score(
        weighted,
        gap.match_percentage,
        level_score >= LEVEL_MATCH_THRESHOLD,
    )

    return RankedJob(
        id=match.id,
        title=match.title,
        company=match.company,
        description=match.description,
        skills=match.skills,
        level=match.level,
        category=match.category,
        original_url=match.original_url,
        score=final_score,
        semantic_score=global_score,
        analysis=JobAnalysis(
            missing_skills=gap.missing,
            matched_skills=gap.matching,
            extra_skills=gap.extra,
            match_percentage=gap.match_percentage,
            section_scores=weighted.section_scores,
            scoring_strategy=weighted.strategy,
            available_sections=weighted.available_sections,
            level_match=level_score,
            candidate_level=experience.level,
        ),
    )


def build_market_map(
    resume_embedding: list[float],
    plotted: list[JobMatch],
    corpus: JobCorpus,
    rng: np.random.Generator | None = None,
) -> MarketMap:
    """Project the resume and plotted jobs to 2-D; row 0 is the resume.

    The first detail_pool_size plotted jobs (by rank) are flagged as top matches.
    """
    plotted = [job for job in plotted if corpus.get(job.id) is not None]
    if not plotted:
        return MarketMap()

    matrix = [resume_embedding] + [corpus.get(job.id).embedding for job in plotted]
    coordinates = compute_pca(matrix, rng=rng)

    user = coordinates[0]
    return MarketMap(
        user=PlotPoint(x=user.x, y=user.y),
        jobs=[
            JobPlotPoint(
                id=job.id,
                title=job.title,
                company=job.company,
                x=point.x,
                y=point.y,
                score=job.score,
                is_top_match=index < settings.detail_pool_size,
            )
            for index, (job, point) in enumerate(zip(plotted, coordinates[1:]))
        ],
    )


def _in_demand_skills(matches: list[RankedJob]) -> list[str]:
    """Skills the top matches ask for most often."""
    counts: Counter[str] = Counter()
    for match in matches:
        counts.update(match.analysis.matched_skills + match.analysis.missing_skills)
    return [skill for skill, _ in counts.most_common(IN_DEMAND_SKILLS)]
