"""Cosine similarity and embedding-based job ranking."""

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from models.schemas.job_record import JobMatch, JobRecord

logger = logging.getLogger(__name__)


def cosine_similarity(vec_a: Sequence[float], vec_b: Sequence[float]) -> float:
    """dot(a, b) / (|a| * |b|).

    Returns NaN when the lengths differ or either vector is all zeros;
    callers treat NaN as "no signal".
    """
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    if a.shape != b.shape:
        return float("nan")
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.dot(a, b) / (np.linalg.norm(a) * np.linalg.norm(b)))


def _similarities(query: np.ndarray, matrix: np.ndarray) -> np.ndarray:
    """Row-wise cosine similarity of matrix against query, NaN replaced by 0."""
    with np.errstate(divide="ignore", invalid="ignore"):
        scores = (matrix @ query) / (np.linalg.norm(matrix, axis=1) * np.linalg.norm(query))
    return np.where(np.isnan(scores), 0.0, scores)


def rank_jobs(
    resume_embedding: Sequence[float],
    jobs: Iterable[JobRecord],
    top_k: int = 10,
) -> list[JobMatch]:
    """Rank jobs by cosine similarity to the resume embedding.

    Jobs whose embedding length differs from the query are excluded.
    Equal scores keep their input order. Returned matches carry no
    embedding; look the record up by id when the vector is needed.
    """
    query = np.asarray(resume_embedding, dtype=np.float64)
    candidates = [job for job in jobs if len(job.embedding) == query.shape[0]]
    if not candidates or top_k <= 0:
        return []

    matrix = np.asarray([job.embedding for job in candidates], dtype=np.float64)
    scores = _similarities(query, matrix)
    order = np.argsort(-scores, kind="stable")[:top_k]

    return [
        JobMatch(
            **candidates[i].model_dump(exclude={"embedding"}),
            score=float(scores[i]),
        )
        for i in order
    ]
