import numpy as np
import pytest

from models.schemas.section_scoring import SectionEmbeddings, WeightedScoreResult
from services.similarity import cosine_similarity
from services.weighted_scoring import compute_ensemble_score, compute_weighted_score

rng = np.random.default_rng(3)
JOB = rng.normal(size=384).tolist()
EXP = rng.normal(size=384).tolist()
SKILLS = rng.normal(size=384).tolist()
EDU = rng.normal(size=384).tolist()


class TestComputeWeightedScore:
    def test_all_sections_weighted(self):
        result = compute_weighted_score(
            SectionEmbeddings(experience=EXP, skills=SKILLS, education=EDU), JOB, 0.5
        )
        expected = (
            0.5 * cosine_similarity(EXP, JOB)
            + 0.3 * cosine_similarity(SKILLS, JOB)
            + 0.2 * cosine_similarity(EDU, JOB)
        )
        assert result.strategy == "weighted"
        assert result.final_score == pytest.approx(expected)
        assert result.available_sections == ["experience", "skills", "education"]
        assert result.section_scores.skills == pytest.approx(cosine_similarity(SKILLS, JOB))

    def test_no_sections_falls_back_to_global(self):
        result = compute_weighted_score(SectionEmbeddings(), JOB, 0.75)
        assert result.strategy == "fallback"
        assert result.final_score == 0.75
        assert result.available_sections == []

    def test_empty_section_lists_count_as_missing(self):
        result = compute_weighted_score(SectionEmbeddings(experience=[], skills=[]), JOB, 0.42)
        assert result.strategy == "fallback"
        assert result.final_score == 0.42

    def test_education_only_blends_with_global(self):
        result = compute_weighted_score(SectionEmbeddings(education=EDU), JOB, 0.6)
        assert result.strategy == "blended"
        assert result.final_score == pytest.approx(0.7 * 0.6 + 0.3 * cosine_similarity(EDU, JOB))
        assert result.available_sections == ["education"]

    def test_partial_sections_renormalize(self):
        result = compute_weighted_score(SectionEmbeddings(experience=EXP, education=EDU), JOB, 0.1)
        expected = (0.5 / 0.7) * cosine_similarity(EXP, JOB) + (0.2 / 0.7) * cosine_similarity(EDU, JOB)
        assert result.strategy == "weighted"
        assert result.final_score == pytest.approx(expected)

    def test_skills_only_is_enough_coverage(self):
        # 0.3 is not below the 0.3 threshold
        result = compute_weighted_score(SectionEmbeddings(skills=SKILLS), JOB, 0.9)
        assert result.strategy == "weighted"
        assert result.final_score == pytest.approx(cosine_similarity(SKILLS, JOB))

    def test_empty_job_embedding_falls_back(self):
        result = compute_weighted_score(
            SectionEmbeddings(experience=EXP, skills=SKILLS, education=EDU), [], 0.6
        )
        assert result.strategy == "fallback"
        assert result.final_score == 0.6
        assert result.section_scores.experience == 0.0

    def test_zero_section_vector_scores_zero_not_nan(self):
        result = compute_weighted_score(SectionEmbeddings(experience=[0.0] * 384), JOB, 0.5)
        assert result.strategy == "weighted"
        assert result.final_score == 0.0

    def test_serializes_with_camel_case_keys(self):
        result = compute_weighted_score(SectionEmbeddings(skills=SKILLS), JOB, 0.9)
        data = result.model_dump(by_alias=True)
        assert set(data) == {"finalScore", "sectionScores", "strategy", "availableSections"}


class TestComputeEnsembleScore:
    def test_formula(self):
        weighted = WeightedScoreResult(final_score=0.8, strategy="weighted")
        score = compute_ensemble_score(weighted, 50.0, True)
        assert score == pytest.approx(0.55 * 0.8 + 0.30 * 0.5 + 0.15 * 1.0)

    def test_level_mismatch_earns_half_bonus(self):
        weighted = WeightedScoreResult(final_score=0.8)
        assert compute_ensemble_score(weighted, 50.0, False) == pytest.approx(0.55 * 0.8 + 0.15 + 0.075)

    def test_monotonic_in_semantic_score(self):
        scores = [
            compute_ensemble_score(WeightedScoreResult(final_score=s), 40.0, True)
            for s in (-0.2, 0.0, 0.3, 0.6, 0.9)
        ]
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_monotonic_in_skill_match(self):
        weighted = WeightedScoreResult(final_score=0.5)
        scores = [compute_ensemble_score(weighted, p, False) for p in (0, 25, 50, 75, 100)]
        assert scores == sorted(scores)
        assert len(set(scores)) == len(scores)

    def test_monotonic_in_level_match(self):
        weighted = WeightedScoreResult(final_score=0.5)
        assert compute_ensemble_score(weighted, 60, True) > compute_ensemble_score(weighted, 60, False)

    def test_level_match_defaults_to_true(self):
        weighted = WeightedScoreResult(final_score=0.5)
        assert compute_ensemble_score(weighted, 60) == compute_ensemble_score(weighted, 60, True)


class TestArrayInputs:
    def test_numpy_job_embedding(self):
        result = compute_weighted_score(
            SectionEmbeddings(experience=EXP, skills=SKILLS, education=EDU), np.asarray(JOB), 0.5
        )
        assert result.strategy == "weighted"
        assert result.final_score == pytest.approx(
            compute_weighted_score(
                SectionEmbeddings(experience=EXP, skills=SKILLS, education=EDU), JOB, 0.5
            ).final_score
        )

    def test_empty_numpy_job_embedding_falls_back(self):
        result = compute_weighted_score(SectionEmbeddings(skills=SKILLS), np.array([]), 0.35)
        assert result.strategy == "fallback"
        assert result.final_score == 0.35
