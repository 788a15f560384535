"""Build the embedded job corpus from a raw job dataset.

Reads scraped postings (positionName, company, description, url and
optional skills/level/category/postedDate), embeds "{title}. {description}"
with the configured sentence-transformers model and writes the corpus
JSON the API loads at startup.

Usage (from backend/):
    python generate_embeddings.py data/jobs_dataset.json [--output data/jobs_with_embeddings.json] [--limit 50]
"""

import argparse
import json
import logging
from collections import Counter
from pathlib import Path

from config import settings
from services.embeddings import TextEmbedder
from services.skill_extractor import extract_skills, get_taxonomy

logger = logging.getLogger(__name__)


def to_job_record(raw: dict, index: int) -> dict | None:
    """Map a raw dataset row onto the corpus schema; None if unusable."""
    title = raw.get("positionName") or raw.get("title")
    description = raw.get("description")
    if not title or not description:
        return None
    return {
        "id": f"job_{index + 1:03d}",
        "title": title,
        "company": raw.get("company") or "",
        "description": description,
        "skills": raw.get("skills") or None,
        "level": raw.get("level"),
        "category": raw.get("category"),
        "postedDate": raw.get("postedDate"),
        "originalUrl": raw.get("url"),
    }


def main(source: str, output: str, limit: int | None = None) -> None:
    with open(source, encoding="utf-8") as f:
        raw_jobs = json.load(f)
    if limit:
        raw_jobs = raw_jobs[:limit]
    logger.info("Embedding %d jobs with %s", len(raw_jobs), settings.embedding_model)

    embedder = TextEmbedder(cache_size=0)
    taxonomy = get_taxonomy()
    skill_counts: Counter[str] = Counter()
    jobs: list[dict] = []
    skipped = 0

    for index, raw in enumerate(raw_jobs):
        job = to_job_record(raw, index)
        if job is None:
            logger.warning("Job #%d missing title or description, skipped", index)
            skipped += 1
            continue
        job["embedding"] = embedder.embed(f"{job['title']}. {job['description']}")
        jobs.append(job)

        found = extract_skills(f"{job['title']} {job['description']}", taxonomy).found
        skill_counts.update(found)
        logger.info("[%d/%d] %s (%d taxonomy skills)", index + 1, len(raw_jobs), job["title"], len(found))

    Path(output).parent.mkdir(parents=True, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(jobs, f, indent=2)

    logger.info("Wrote %d jobs to %s (%d skipped)", len(jobs), output, skipped)
    if skill_counts:
        top = ", ".join(f"{skill} ({n})" for skill, n in skill_counts.most_common(10))
        logger.info("Most common taxonomy skills: %s", top)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    parser = argparse.ArgumentParser(description="Generate job corpus embeddings")
    parser.add_argument("source", help="Raw job dataset JSON")
    parser.add_argument("--output", default=str(settings.resolve_path(settings.jobs_data_path)))
    parser.add_argument("--limit", type=int, default=None)
    args = parser.parse_args()
    main(args.source, args.output, args.limit)
