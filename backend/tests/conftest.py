"""Shared test configuration, pytest markers and fixtures."""

import zlib

import numpy as np
import pytest

from models.schemas.job_record import JobRecord
from services.embeddings import TextEmbedder
from services.job_corpus import JobCorpus
from services.skill_extractor import SkillTaxonomy

DIM = 384


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: loads the real sentence-transformers model (slow)"
    )


class HashingEmbedder(TextEmbedder):
    """Deterministic bag-of-words embedder: each word bumps one hashed dimension."""

    def __init__(self, dimension: int = DIM) -> None:
        super().__init__(model_name="hashing", dimension=dimension, chunk_words=256, chunk_overlap=32, cache_size=16)
        self.calls = 0

    def _encode(self, text: str) -> list[float]:
        self.calls += 1
        vector = np.zeros(self.dimension)
        for word in text.lower().split():
            word = word.strip(".,!?:;()")
            if word:
                vector[zlib.crc32(word.encode()) % self.dimension] += 1.0
        return vector.tolist()


TAXONOMY = {
    "categories": {
        "languages": ["Python", "JavaScript", "Java", "C++", "SQL"],
        "frontend": ["React", "CSS"],
        "backend": ["Django", "FastAPI", ".NET"],
        "cloud": ["AWS", "Docker", "Kubernetes"],
        "data": ["PostgreSQL", "Pandas", "Machine Learning"],
    }
}

FILLER = (
    "You will collaborate with product managers and designers to ship reliable features, "
    "review code, write documentation and improve our delivery practices every sprint. "
)


def long_description(topic: str, words: int = 380) -> str:
    """A description of at least `words` words with concrete details."""
    base = (
        f"We are hiring an engineer to work on {topic}. Requires 5 years of experience, "
        "salary $120,000 to $150,000, remote friendly, bachelor degree preferred, team of 6. "
    )
    text = base
    while len(text.split()) < words:
        text += FILLER
    return text


@pytest.fixture
def embedder() -> HashingEmbedder:
    return HashingEmbedder()


@pytest.fixture
def taxonomy() -> SkillTaxonomy:
    return SkillTaxonomy.from_dict(TAXONOMY)


def make_job(embedder: TextEmbedder, job_id: str, title: str, topic: str, **kwargs) -> JobRecord:
    fields = {
        "company": "Acme Corp",
        "description": long_description(topic),
        "skills": ["Python", "Django", "PostgreSQL", "Docker", "AWS"],
        "level": "Senior",
        "category": "Engineering",
    }
    fields.update(kwargs)
    text = f"{title}. {topic}"
    return JobRecord(id=job_id, title=title, embedding=embedder.embed(text), **fields)


@pytest.fixture
def corpus(embedder) -> JobCorpus:
    jobs = [
        make_job(embedder, "job_001", "Senior Python Engineer", "python django postgresql backend services"),
        make_job(embedder, "job_002", "Backend Developer", "python fastapi docker aws microservices",
                 skills=["Python", "FastAPI", "Docker", "AWS", "Kubernetes"], level="Mid-level"),
        make_job(embedder, "job_003", "Frontend Engineer", "javascript react css user interfaces",
                 skills=["JavaScript", "React", "CSS"], level="Junior"),
        make_job(embedder, "job_004", "Data Scientist", "python pandas machine learning models",
                 skills=["Python", "Pandas", "Machine Learning", "SQL"], level=None),
        # Low quality: short description, no skills, unknown company
        make_job(embedder, "job_005", "Python Dev", "python django postgresql backend services",
                 description="Python role.", skills=[], company="Unknown", level=None),
        make_job(embedder, "job_006", "Principal Architect", "java kubernetes distributed systems",
                 skills=["Java", "Kubernetes", "AWS"], level="Principal"),
    ]
    return JobCorpus(jobs)


@pytest.fixture(autouse=True)
def _disable_rate_limit():
    from api.router import limiter
    limiter.enabled = False
    yield
    limiter.enabled = True
