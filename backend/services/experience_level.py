"""Candidate seniority detection and job-level compatibility.

detect_experience_level() combines three kinds of evidence:
1. Explicit year claims ("7+ years of experience") -> confidence 0.8
2. Seniority keywords, which only promote a low-confidence level
3. Leadership phrases, which lift sub-senior candidates to senior
"""

import re

from models.schemas.experience_analysis import ExperienceAnalysis, ExperienceLevel

LEVEL_ORDER: list[ExperienceLevel] = ["intern", "entry", "mid", "senior", "lead", "principal"]

DEFAULT_CONFIDENCE = 0.3
YEARS_CONFIDENCE = 0.8
KEYWORD_CONFIDENCE = 0.6
# Keyword evidence cannot override anything at or above this confidence
KEYWORD_OVERRIDE_CEILING = 0.7
MAX_PLAUSIBLE_YEARS = 50

# (minimum years, level), checked top down
_YEARS_TO_LEVEL: list[tuple[int, ExperienceLevel]] = [
    (12, "principal"),
    (8, "lead"),
    (5, "senior"),
    (2, "mid"),
]

_YEARS_PATTERNS: list[re.Pattern] = [
    re.compile(r"(\d{1,2})\+?\s*years?\s*(?:of)?\s*(?:professional|work|industry)?\s*experience", re.IGNORECASE),
    re.compile(r"experience:?\s*(\d{1,2})\+?\s*years?", re.IGNORECASE),
    re.compile(r"(\d{1,2})\+?\s*years?\s*in\s*(?:the\s*)?(?:industry|field|tech)", re.IGNORECASE),
]

LEVEL_KEYWORDS: dict[ExperienceLevel, list[re.Pattern]] = {
    "intern": [
        re.compile(r"intern(?:ship)?", re.IGNORECASE),
        re.compile(r"student", re.IGNORECASE),
        re.compile(r"trainee", re.IGNORECASE),
    ],
    "entry": [
        re.compile(r"junior", re.IGNORECASE),
        re.compile(r"entry[\s-]?level", re.IGNORECASE),
        re.compile(r"graduate", re.IGNORECASE),
        re.compile(r"associate", re.IGNORECASE),
    ],
    "mid": [
        re.compile(r"mid[\s-]?level", re.IGNORECASE),
        re.compile(r"\b2-?4\s*years?\b", re.IGNORECASE),
        re.compile(r"\b3-?5\s*years?\b", re.IGNORECASE),
    ],
    "senior": [
        re.compile(r"senior", re.IGNORECASE),
        re.compile(r"\b5\+?\s*years?\b", re.IGNORECASE),
        re.compile(r"\b6-?10\s*years?\b", re.IGNORECASE),
        re.compile(r"experienced", re.IGNORECASE),
    ],
    "lead": [
        re.compile(r"lead", re.IGNORECASE),
        re.compile(r"team\s*lead", re.IGNORECASE),
        re.compile(r"tech\s*lead", re.IGNORECASE),
        re.compile(r"manager", re.IGNORECASE),
        re.compile(r"\b8\+?\s*years?\b", re.IGNORECASE),
    ],
    "principal": [
        re.compile(r"principal", re.IGNORECASE),
        re.compile(r"staff", re.IGNORECASE),
        re.compile(r"architect", re.IGNORECASE),
        re.compile(r"director", re.IGNORECASE),
        re.compile(r"\b10\+?\s*years?\b", re.IGNORECASE),
    ],
}

_LEADERSHIP_PATTERNS: list[re.Pattern] = [
    re.compile(r"led\s+a?\s*team", re.IGNORECASE),
    re.compile(r"managed\s+\d+\s*(?:developers|engineers|people)", re.IGNORECASE),
    re.compile(r"mentored", re.IGNORECASE),
    re.compile(r"oversaw", re.IGNORECASE),
    re.compile(r"directed", re.IGNORECASE),
]
_LEADERSHIP_MIN_HITS = 2

# Job level strings, first match wins
_JOB_LEVEL_PATTERNS: list[tuple[re.Pattern, int]] = [
    (re.compile(r"intern|trainee", re.IGNORECASE), 0),
    (re.compile(r"junior|entry|associate", re.IGNORECASE), 1),
    (re.compile(r"mid|intermediate", re.IGNORECASE), 2),
    (re.compile(r"senior", re.IGNORECASE), 3),
    (re.compile(r"lead|manager", re.IGNORECASE), 4),
    (re.compile(r"principal|staff|director", re.IGNORECASE), 5),
]

NEUTRAL_LEVEL_SCORE = 0.8
# Level distance -> compatibility; anything further scores FAR_LEVEL_SCORE
_DISTANCE_SCORES = {0: 1.0, 1: 0.85, 2: 0.6}
FAR_LEVEL_SCORE = 0.3


def extract_years_of_experience(text: str) -> int | None:
    """Largest self-declared years-of-experience figure, or None.

    Values above 50 are treated as noise.
    """
    max_years = 0
    for pattern in _YEARS_PATTERNS:
        for match in pattern.finditer(text):
            years = int(match.group(1))
            if max_years < years <= MAX_PLAUSIBLE_YEARS:
                max_years = years
    return max_years if max_years > 0 else None


def _level_for_years(years: int) -> ExperienceLevel:
    for minimum, level in _YEARS_TO_LEVEL:
        if years >= minimum:
            return level
    return "entry"


def detect_experience_level(resume_text: str) -> ExperienceAnalysis:
    """Infer candidate seniority from resume text."""
    signals: list[str] = []
    level: ExperienceLevel = "entry"
    confidence = DEFAULT_CONFIDENCE

    years = extract_years_of_experience(resume_text)
    if years is not None:
        signals.append(f"Found {years}+ years of experience mentioned")
        confidence = YEARS_CONFIDENCE
        level = _level_for_years(years)

    for keyword_level, patterns in LEVEL_KEYWORDS.items():
        for pattern in patterns:
            if not pattern.search(resume_text):
                continue
            signals.append(f'Keyword match: "{pattern.pattern}"')
            if (
                LEVEL_ORDER.index(keyword_level) > LEVEL_ORDER.index(level)
                and confidence < KEYWORD_OVERRIDE_CEILING
            ):
                level = keyword_level
                confidence = KEYWORD_CONFIDENCE
            break  # one match per level

    leadership_hits = sum(1 for p in _LEADERSHIP_PATTERNS if p.search(resume_text))
    if leadership_hits >= _LEADERSHIP_MIN_HITS:
        signals.append("Strong leadership signals detected")
        if LEVEL_ORDER.index(level) < LEVEL_ORDER.index("senior"):
            level = "senior"
            confidence = max(confidence, KEYWORD_CONFIDENCE)

    return ExperienceAnalysis(
        level=level,
        years_of_experience=years,
        confidence=confidence,
        signals=signals,
    )


def parse_job_level(job_level: str | None) -> int | None:
    """Map a free-text job level onto the LEVEL_ORDER index."""
    if not job_level:
        return None
    for pattern, index in _JOB_LEVEL_PATTERNS:
        if pattern.search(job_level):
            return index
    return None


def match_experience_level(candidate_level: ExperienceLevel, job_level: str | None) -> float:
    """Score 0-1 for how well the candidate level fits the job level.

    Unknown or missing job levels score a neutral 0.8.
    """
    job_index = parse_job_level(job_level)
    if job_index is None:
        return NEUTRAL_LEVEL_SCORE

    distance = abs(LEVEL_ORDER.index(candidate_level) - job_index)
    return _DISTANCE_SCORES.get(distance, FAR_LEVEL_SCORE)
