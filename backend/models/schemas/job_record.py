"""Job posting records from the static corpus."""

from pydantic import BaseModel, ConfigDict, Field


class JobRecord(BaseModel):
    """A single job posting as loaded from the embedded corpus.

    Read-only for the lifetime of the process; the embedding is the
    384-dim vector of "{title}. {description}".
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    title: str = ""
    company: str = ""
    description: str = ""
    skills: list[str] | None = None
    level: str | None = None
    category: str | None = None
    embedding: list[float] = []
    posted_date: str | None = Field(default=None, alias="postedDate")
    original_url: str | None = Field(default=None, alias="originalUrl")


class JobMatch(BaseModel):
    """A ranked job without its embedding."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    company: str = ""
    description: str = ""
    skills: list[str] | None = None
    level: str | None = None
    category: str | None = None
    posted_date: str | None = Field(default=None, alias="postedDate")
    original_url: str | None = Field(default=None, alias="originalUrl")
    score: float = 0.0
