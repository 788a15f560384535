"""Static job corpus, loaded once per process and shared read-only.

Follows the lazy global-singleton pattern: loaded on first use,
clear() resets it for tests.
"""

import json
import logging
from collections.abc import Iterator
from pathlib import Path

from pydantic import ValidationError

from config import settings
from models.schemas.job_record import JobRecord

logger = logging.getLogger(__name__)


class JobCorpus:
    """Immutable collection of job records with id lookup."""

    def __init__(self, jobs: list[JobRecord] | tuple[JobRecord, ...] = ()) -> None:
        self._jobs: tuple[JobRecord, ...] = tuple(jobs)
        self._by_id: dict[str, JobRecord] = {job.id: job for job in self._jobs}

    @property
    def jobs(self) -> tuple[JobRecord, ...]:
        return self._jobs

    def get(self, job_id: str) -> JobRecord | None:
        return self._by_id.get(job_id)

    def __len__(self) -> int:
        return len(self._jobs)

    def __iter__(self) -> Iterator[JobRecord]:
        return iter(self._jobs)


def parse_job_records(raw_jobs: list[dict], dimension: int) -> JobCorpus:
    """Validate raw records, dropping malformed ones and wrong-size embeddings."""
    jobs: list[JobRecord] = []
    invalid = 0
    wrong_dimension = 0
    seen_ids: set[str] = set()

    for index, raw in enumerate(raw_jobs):
        try:
            job = JobRecord.model_validate(raw)
        except ValidationError as e:
            invalid += 1
            logger.warning("Skipping job #%d: %s", index, e.errors()[0].get("msg", "invalid record"))
            continue
        if len(job.embedding) != dimension:
            wrong_dimension += 1
            continue
        if job.id in seen_ids:
            logger.warning("Skipping duplicate job id %s", job.id)
            continue
        seen_ids.add(job.id)
        jobs.append(job)

    if wrong_dimension:
        logger.warning("Dropped %d jobs whose embedding is not %d-dim", wrong_dimension, dimension)
    if invalid:
        logger.warning("Dropped %d invalid job records", invalid)
    return JobCorpus(jobs)


def load_job_corpus(path: str | Path, dimension: int) -> JobCorpus:
    path = Path(path)
    if not path.exists():
        logger.warning("Job corpus %s not found, serving an empty corpus", path)
        return JobCorpus()

    with open(path, encoding="utf-8") as f:
        raw_jobs = json.load(f)
    corpus = parse_job_records(raw_jobs, dimension)
    logger.info("Loaded %d jobs from %s", len(corpus), path)
    return corpus


_corpus: JobCorpus | None = None


def get_job_corpus() -> JobCorpus:
    """Get the process-wide corpus, loading it on first access."""
    global _corpus
    if _corpus is None:
        _corpus = load_job_corpus(
            settings.resolve_path(settings.jobs_data_path),
            settings.embedding_dimension,
        )
    return _corpus


def clear() -> None:
    """Forget the loaded corpus. Useful for testing."""
    global _corpus
    _corpus = None
