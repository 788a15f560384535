"""Sentence-transformer embeddings for resumes and resume sections.

Long texts are split into overlapping word windows, encoded in a single
batch and averaged element-wise into one vector per text.
"""

import logging
import threading
from collections import OrderedDict
from functools import lru_cache

import numpy as np

from config import settings
from models.schemas.section_scoring import SectionEmbeddings
from services.section_parser import ResumeSections

logger = logging.getLogger(__name__)


class EmbeddingUnavailableError(RuntimeError):
    """The embedding model could not be loaded or failed to encode."""


def chunk_text(text: str, chunk_words: int = 256, overlap: int = 32) -> list[str]:
    """Split text into windows of chunk_words words sharing `overlap` words."""
    words = text.split()
    if len(words) <= chunk_words:
        return [" ".join(words)] if words else []
    step = max(1, chunk_words - overlap)
    chunks = []
    for start in range(0, len(words), step):
        chunks.append(" ".join(words[start:start + chunk_words]))
        if start + chunk_words >= len(words):
            break
    return chunks


class TextEmbedder:
    """Lazy-loading wrapper around a SentenceTransformer model with an LRU memo."""

    def __init__(
        self,
        model_name: str | None = None,
        dimension: int | None = None,
        chunk_words: int | None = None,
        chunk_overlap: int | None = None,
        cache_size: int | None = None,
    ) -> None:
        self.model_name = model_name or settings.embedding_model
        self.dimension = dimension or settings.embedding_dimension
        self.chunk_words = chunk_words or settings.embedding_chunk_words
        self.chunk_overlap = settings.embedding_chunk_overlap if chunk_overlap is None else chunk_overlap
        self.cache_size = settings.embedding_cache_size if cache_size is None else cache_size
        self._model = None
        self._cache: OrderedDict[str, tuple[float, ...]] = OrderedDict()
        # Requests run in a threadpool and share the memo
        self._cache_lock = threading.Lock()

    def _get_model(self):
        if self._model is None:
            try:
                from sentence_transformers import SentenceTransformer

                self._model = SentenceTransformer(self.model_name)
                logger.info("Embedding model %s loaded", self.model_name)
            except Exception as e:
                logger.error("Failed to load embedding model %s: %s", self.model_name, e)
                raise EmbeddingUnavailableError(str(e)) from e
        return self._model

    def _encode(self, text: str) -> list[float]:
        chunks = chunk_text(text, self.chunk_words, self.chunk_overlap)
        if not chunks:
            return [0.0] * self.dimension

        model = self._get_model()
        try:
            vectors = model.encode(chunks, convert_to_numpy=True)
        except Exception as e:
            logger.error("Embedding failed: %s", e)
            raise EmbeddingUnavailableError(str(e)) from e

        vector = np.asarray(vectors, dtype=np.float64).mean(axis=0)
        if vector.shape[0] != self.dimension:
            raise EmbeddingUnavailableError(
                f"{self.model_name} produced {vector.shape[0]}-dim vectors, expected {self.dimension}"
            )
        return vector.tolist()

    def embed(self, text: str) -> list[float]:
        """Embed text, reusing the vector for recently seen texts."""
        with self._cache_lock:
            cached = self._cache.get(text)
            if cached is not None:
                self._cache.move_to_end(text)
        if cached is not None:
            logger.debug("Embedding cache hit")
            return list(cached)

        vector = self._encode(text)
        if self.cache_size > 0:
            with self._cache_lock:
                self._cache[text] = tuple(vector)
                self._cache.move_to_end(text)
                while len(self._cache) > self.cache_size:
                    self._cache.popitem(last=False)
        return vector

    def embed_sections(self, sections: ResumeSections) -> SectionEmbeddings:
        """Embed each resume section that was long enough to keep."""
        return SectionEmbeddings(
            experience=self.embed(sections.experience) if sections.experience else None,
            skills=self.embed(sections.skills) if sections.skills else None,
            education=self.embed(sections.education) if sections.education else None,
        )

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()


@lru_cache(maxsize=1)
def get_embedder() -> TextEmbedder:
    return TextEmbedder()
