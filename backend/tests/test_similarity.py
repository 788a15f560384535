import math

import numpy as np
import pytest

from models.schemas.job_record import JobRecord
from services.similarity import cosine_similarity, rank_jobs


def _job(job_id: str, embedding: list[float]) -> JobRecord:
    return JobRecord(id=job_id, title=f"Job {job_id}", company="Acme", embedding=embedding)


def test_cosine_similarity_identical():
    v = [0.3, -1.2, 4.0, 0.5]
    assert cosine_similarity(v, v) == pytest.approx(1.0)


def test_cosine_similarity_opposite():
    v = [0.3, -1.2, 4.0, 0.5]
    assert cosine_similarity(v, [-x for x in v]) == pytest.approx(-1.0)


def test_cosine_similarity_symmetric():
    rng = np.random.default_rng(7)
    a, b = rng.normal(size=384), rng.normal(size=384)
    assert cosine_similarity(a, b) == pytest.approx(cosine_similarity(b, a))


def test_cosine_similarity_orthogonal():
    assert cosine_similarity([1.0, 0.0], [0.0, 5.0]) == pytest.approx(0.0)


def test_cosine_similarity_ignores_magnitude():
    assert cosine_similarity([1.0, 2.0], [10.0, 20.0]) == pytest.approx(1.0)


def test_cosine_similarity_zero_vector_is_nan():
    assert math.isnan(cosine_similarity([0.0, 0.0, 0.0], [1.0, 2.0, 3.0]))


def test_cosine_similarity_length_mismatch_is_nan():
    assert math.isnan(cosine_similarity([1.0, 2.0], [1.0, 2.0, 3.0]))


class TestRankJobs:
    def setup_method(self):
        rng = np.random.default_rng(42)
        self.query = rng.normal(size=16).tolist()
        self.jobs = [_job(f"job_{i}", rng.normal(size=16).tolist()) for i in range(12)]

    def test_sorted_descending(self):
        ranked = rank_jobs(self.query, self.jobs, top_k=12)
        scores = [m.score for m in ranked]
        assert scores == sorted(scores, reverse=True)

    def test_length_is_min_of_top_k_and_jobs(self):
        assert len(rank_jobs(self.query, self.jobs, top_k=5)) == 5
        assert len(rank_jobs(self.query, self.jobs, top_k=50)) == 12
        assert rank_jobs(self.query, [], top_k=5) == []

    def test_scores_equal_cosine_similarity(self):
        by_id = {job.id: job for job in self.jobs}
        for match in rank_jobs(self.query, self.jobs, top_k=12):
            expected = cosine_similarity(self.query, by_id[match.id].embedding)
            assert match.score == pytest.approx(expected)

    def test_output_has_no_embedding(self):
        match = rank_jobs(self.query, self.jobs, top_k=1)[0]
        assert "embedding" not in match.model_dump()
        assert match.title.startswith("Job ")

    def test_ties_keep_input_order(self):
        jobs = [_job("a", [1.0, 0.0]), _job("b", [2.0, 0.0]), _job("c", [0.0, 1.0]), _job("d", [3.0, 0.0])]
        ranked = rank_jobs([1.0, 0.0], jobs, top_k=4)
        assert [m.id for m in ranked] == ["a", "b", "d", "c"]

    def test_excludes_mismatched_dimensions(self):
        jobs = self.jobs + [_job("short", [1.0, 2.0])]
        ranked = rank_jobs(self.query, jobs, top_k=100)
        assert "short" not in {m.id for m in ranked}
        assert len(ranked) == 12

    def test_zero_vector_job_scores_zero(self):
        jobs = [_job("zero", [0.0] * 16), _job("neg", [-x for x in self.query])]
        ranked = rank_jobs(self.query, jobs, top_k=2)
        assert [m.id for m in ranked] == ["zero", "neg"]
        assert ranked[0].score == 0.0
