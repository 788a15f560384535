"""Shared dependencies for API routes."""

from services.embeddings import TextEmbedder, get_embedder
from services.job_corpus import JobCorpus, get_job_corpus
from services.skill_extractor import SkillTaxonomy, get_taxonomy


def get_corpus() -> JobCorpus:
    return get_job_corpus()


def get_skill_taxonomy() -> SkillTaxonomy:
    return get_taxonomy()


def get_text_embedder() -> TextEmbedder:
    return get_embedder()
