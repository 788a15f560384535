"""Rule-based resume improvement feedback.

Starts from a neutral 50 and adjusts per check:
    skills      none -20 | <5 -10 | >=10 +10
    experience  missing/sparse -15 | metrics +10 / none -5 | action verbs +5
    education   degree listed +5
    length      <150 words -15 | >1200 words -5 | otherwise +5
Deterministic, no model involved.
"""

import re

from models.responses import ResumeFeedback, Suggestion
from models.schemas.experience_analysis import ExperienceAnalysis
from models.schemas.skill_gap import SkillAnalysis
from services.section_parser import ResumeSections, extract_contact_info

BASE_SCORE = 50

_METRICS_RE = re.compile(r"\d+%|\$[\d,]+|\d+\s*(?:users|customers|clients|projects|team)", re.IGNORECASE)
_ACTION_VERBS_RE = re.compile(
    r"\b(?:developed|built|designed|implemented|led|managed|created|optimized|"
    r"improved|launched|deployed|architected|mentored|scaled)\b",
    re.IGNORECASE,
)
_DEGREE_RE = re.compile(r"bachelor|master|phd|b\.s\.|m\.s\.|mba|associate", re.IGNORECASE)
_CONTACT_HINT_RE = re.compile(r"@|email|linkedin|github|phone|\(\d{3}\)", re.IGNORECASE)

_SEVERITY_ORDER = {"critical": 0, "warning": 1, "tip": 2}

# (minimum score, grade), checked top down
_GRADES = [(85, "A"), (70, "B"), (55, "C"), (40, "D")]


def generate_resume_feedback(
    resume_text: str,
    sections: ResumeSections,
    skill_analysis: SkillAnalysis,
    experience: ExperienceAnalysis,
    top_job_skills: list[str] | None = None,
) -> ResumeFeedback:
    """Score the resume 0-100 and list prioritized suggestions."""
    suggestions: list[Suggestion] = []
    strengths: list[str] = []
    score = BASE_SCORE

    score += _check_skills(skill_analysis, top_job_skills or [], suggestions, strengths)
    score += _check_experience(sections.experience, suggestions, strengths)
    score += _check_education(sections.education, suggestions, strengths)
    score += _check_format(resume_text, suggestions, strengths)

    if experience.confidence < 0.5:
        suggestions.append(Suggestion(
            category="experience",
            severity="tip",
            title="Experience Level Unclear",
            message="Consider explicitly mentioning years of experience.",
            example='"5+ years of experience in full-stack development"',
        ))

    score = max(0, min(100, score))
    suggestions.sort(key=lambda s: _SEVERITY_ORDER[s.severity])

    return ResumeFeedback(
        overall_score=score,
        grade=_grade(score),
        suggestions=suggestions,
        strengths=strengths,
        summary=_build_summary(suggestions, strengths),
    )


def _check_skills(
    analysis: SkillAnalysis,
    top_job_skills: list[str],
    suggestions: list[Suggestion],
    strengths: list[str],
) -> int:
    delta = 0
    count = analysis.total_count

    if count == 0:
        suggestions.append(Suggestion(
            category="skills",
            severity="critical",
            title="No Skills Detected",
            message='No technical skills were detected. Add a dedicated "Skills" section.',
            example="Skills: Python, React, AWS, Docker, PostgreSQL",
        ))
        delta -= 20
    elif count < 5:
        suggestions.append(Suggestion(
            category="skills",
            severity="warning",
            title="Limited Skills Listed",
            message=f"Only {count} skills detected. Consider adding more relevant technologies.",
        ))
        delta -= 10
    elif count >= 10:
        strengths.append(f"Strong technical profile with {count} skills identified")
        delta += 10

    if top_job_skills:
        have = {s.lower() for s in analysis.found}
        missing = [s for s in top_job_skills if s.lower() not in have][:5]
        if missing:
            suggestions.append(Suggestion(
                category="skills",
                severity="warning",
                title="Missing In-Demand Skills",
                message="Consider adding these high-demand skills if you have them:",
                example=", ".join(missing),
            ))

    return delta


def _check_experience(
    experience: str | None,
    suggestions: list[Suggestion],
    strengths: list[str],
) -> int:
    if not experience or len(experience) < 100:
        suggestions.append(Suggestion(
            category="experience",
            severity="critical",
            title="Experience Section Missing or Sparse",
            message="The experience section is too short or missing. Add detailed work history.",
            example="Include company, title, dates, and 3-5 bullet points per role",
        ))
        return -15

    delta = 0
    if _METRICS_RE.search(experience):
        strengths.append("Experience includes quantified achievements")
        delta += 10
    else:
        suggestions.append(Suggestion(
            category="experience",
            severity="warning",
            title="Add Quantified Achievements",
            message="Use numbers to demonstrate impact in your experience.",
            example='"Improved API performance by 40%" or "Led team of 5 engineers"',
        ))
        delta -= 5

    if _ACTION_VERBS_RE.search(experience):
        strengths.append("Uses strong action verbs")
        delta += 5
    else:
        suggestions.append(Suggestion(
            category="content",
            severity="tip",
            title="Use Action Verbs",
            message="Start bullet points with strong action verbs.",
            example="Developed, Implemented, Led, Optimized, Architected",
        ))
    return delta


def _check_education(
    education: str | None,
    suggestions: list[Suggestion],
    strengths: list[str],
) -> int:
    if not education or len(education) < 30:
        suggestions.append(Suggestion(
            category="education",
            severity="tip",
            title="Education Section Light",
            message="Consider adding education details if relevant (degree, institution, graduation year).",
        ))
        return 0
    if _DEGREE_RE.search(education):
        strengths.append("Education credentials clearly listed")
        return 5
    return 0


def _check_format(
    resume_text: str,
    suggestions: list[Suggestion],
    strengths: list[str],
) -> int:
    delta = 0
    word_count = len(resume_text.split())

    if word_count < 150:
        suggestions.append(Suggestion(
            category="format",
            severity="critical",
            title="Resume Too Short",
            message=f"Only ~{word_count} words detected. Resumes should be 300-800 words for optimal parsing.",
        ))
        delta -= 15
    elif word_count > 1200:
        suggestions.append(Suggestion(
            category="format",
            severity="warning",
            title="Resume May Be Too Long",
            message="Consider condensing to 1-2 pages. Focus on the most relevant experience.",
        ))
        delta -= 5
    else:
        strengths.append("Resume length is appropriate")
        delta += 5

    contact = extract_contact_info(resume_text)
    has_contact = contact["email"] or contact["linkedin"] or contact["github"]
    if not has_contact and not _CONTACT_HINT_RE.search(resume_text):
        suggestions.append(Suggestion(
            category="format",
            severity="warning",
            title="Contact Information May Be Missing",
            message="Ensure your email, LinkedIn, and phone are clearly visible.",
        ))
    return delta


def _grade(score: int) -> str:
    for minimum, grade in _GRADES:
        if score >= minimum:
            return grade
    return "F"


def _build_summary(suggestions: list[Suggestion], strengths: list[str]) -> str:
    critical = sum(1 for s in suggestions if s.severity == "critical")
    if critical > 0:
        plural = "s" if critical > 1 else ""
        return (
            f"Your resume has {critical} critical issue{plural} that may significantly "
            f"impact your job search. Address these first."
        )
    if len(suggestions) > 3:
        return "Your resume is solid but has room for improvement. Review the suggestions below."
    if len(strengths) >= 3:
        return "Excellent resume! Just a few minor optimizations to consider."
    return "Good foundation. Focus on adding more quantified achievements and skills."
