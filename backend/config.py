import os
from pathlib import Path

from pydantic_settings import BaseSettings

BACKEND_DIR = Path(__file__).resolve().parent


def _parse_cors_origins() -> list[str] | None:
    """Parse CORS_ORIGINS env var as comma-separated string or JSON list."""
    raw = os.environ.get("CORS_ORIGINS")
    if not raw:
        return None
    if raw.startswith("["):
        import json
        return json.loads(raw)
    return [o.strip() for o in raw.split(",") if o.strip()]


class Settings(BaseSettings):
    max_upload_size_mb: int = 5
    max_resume_chars: int = 50000
    rate_limit: str = "10/minute"
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]
    debug: bool = False
    log_level: str = "INFO"

    # Embedding model (all-MiniLM-L6-v2 produces 384-dim vectors)
    embedding_model: str = "sentence-transformers/all-MiniLM-L6-v2"
    embedding_dimension: int = 384
    embedding_chunk_words: int = 256
    embedding_chunk_overlap: int = 32
    embedding_cache_size: int = 200

    # Static data, relative paths resolve against backend/
    jobs_data_path: str = "data/jobs_with_embeddings.json"
    taxonomy_path: str = "data/skills_taxonomy.json"

    # Three-stage narrowing: rank pool -> plotted jobs -> enriched top matches
    rank_pool_size: int = 100
    plot_pool_size: int = 50
    detail_pool_size: int = 10

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "protected_namespaces": ("settings_",)}

    def resolve_path(self, raw: str) -> Path:
        path = Path(raw)
        return path if path.is_absolute() else BACKEND_DIR / path


_cors_override = _parse_cors_origins()
settings = Settings(**{"cors_origins": _cors_override} if _cors_override else {})
