"""Taxonomy-based skill extraction and resume-vs-job skill gap.

The taxonomy is loaded once per process into an immutable SkillTaxonomy
and passed to callers explicitly.
"""

import json
import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from config import settings
from models.schemas.skill_gap import SkillAnalysis, SkillGap

logger = logging.getLogger(__name__)

# Word boundaries do not work around "+", "#" and a leading "."
_RELAXED_MATCH_SKILLS = frozenset({"c++", "c#", ".net"})


@dataclass(frozen=True)
class SkillTaxonomy:
    """Skill vocabulary grouped by category.

    skill_to_category and canonical_names are both keyed by the
    lowercased skill name; canonical_names gives the display casing.
    """
    categories: tuple[str, ...]
    skill_to_category: Mapping[str, str]
    canonical_names: Mapping[str, str]
    patterns: Mapping[str, re.Pattern] = field(repr=False, compare=False)

    @classmethod
    def from_dict(cls, data: dict) -> "SkillTaxonomy":
        skill_to_category: dict[str, str] = {}
        canonical_names: dict[str, str] = {}
        for category, skills in data.get("categories", {}).items():
            for skill in skills:
                normalized = skill.lower()
                if normalized in skill_to_category:
                    logger.warning(
                        "Skill %r listed under %s and %s; keeping %s",
                        skill, skill_to_category[normalized], category, category,
                    )
                skill_to_category[normalized] = category
                canonical_names[normalized] = skill
        return cls(
            categories=tuple(data.get("categories", {}).keys()),
            skill_to_category=skill_to_category,
            canonical_names=canonical_names,
            patterns={s: _skill_pattern(s) for s in skill_to_category},
        )

    @property
    def skills(self) -> frozenset[str]:
        return frozenset(self.skill_to_category)

    def __len__(self) -> int:
        return len(self.skill_to_category)


def _skill_pattern(skill: str) -> re.Pattern:
    escaped = re.escape(skill)
    if skill in _RELAXED_MATCH_SKILLS:
        return re.compile(escaped, re.IGNORECASE)
    return re.compile(rf"\b{escaped}\b", re.IGNORECASE)


def load_taxonomy(path: str | Path) -> SkillTaxonomy:
    with open(path, encoding="utf-8") as f:
        taxonomy = SkillTaxonomy.from_dict(json.load(f))
    logger.info("Loaded skills taxonomy: %d skills in %d categories", len(taxonomy), len(taxonomy.categories))
    return taxonomy


@lru_cache(maxsize=1)
def get_taxonomy() -> SkillTaxonomy:
    """Process-wide taxonomy from settings.taxonomy_path."""
    return load_taxonomy(settings.resolve_path(settings.taxonomy_path))


def extract_skills(text: str, taxonomy: SkillTaxonomy) -> SkillAnalysis:
    """Find taxonomy skills mentioned in text.

    Skills are reported once, in taxonomy display casing, grouped by
    category in taxonomy order.
    """
    found: list[str] = []
    by_category: dict[str, list[str]] = {category: [] for category in taxonomy.categories}

    if text:
        for skill, pattern in taxonomy.patterns.items():
            if pattern.search(text):
                name = taxonomy.canonical_names[skill]
                found.append(name)
                by_category[taxonomy.skill_to_category[skill]].append(name)

    return SkillAnalysis(found=found, by_category=by_category, total_count=len(found))


def analyze_gap(resume_skills: Iterable[str], job_skills: Iterable[str]) -> SkillGap:
    """Compare resume skills with a job's skills (exact, case-insensitive).

    match_percentage is the share of job skills the resume covers,
    0 when the job lists none.
    """
    resume_list = list(resume_skills)
    job_list = list(job_skills)
    resume_set = {s.lower() for s in resume_list}
    job_set = {s.lower() for s in job_list}

    matching = [s for s in job_list if s.lower() in resume_set]
    missing = [s for s in job_list if s.lower() not in resume_set]
    extra = [s for s in resume_list if s.lower() not in job_set]

    return SkillGap(
        missing=missing,
        matching=matching,
        extra=extra,
        match_percentage=(len(matching) / len(job_list)) * 100 if job_list else 0.0,
    )
