from services.section_parser import (
    MIN_SECTION_CHARS,
    extract_contact_info,
    extract_resume_sections,
    parse_sections,
)


SAMPLE_RESUME = """John Doe
john.doe@email.com | (555) 123-4567
linkedin.com/in/johndoe | github.com/johndoe

Summary
Experienced software engineer with 5+ years building web applications.

Experience
Senior Software Engineer | TechCorp | 2021 - Present
• Built REST APIs serving 1M requests/day
• Led team of 5 engineers

Software Engineer | StartupXYZ | 2019 - 2021
• Developed React frontend components
• Implemented CI/CD pipelines

Education
B.S. Computer Science | State University | 2019

Skills
Python, JavaScript, React, Docker, AWS, PostgreSQL, Git
"""


def test_parse_sections_detects_all():
    sections = parse_sections(SAMPLE_RESUME)
    assert "summary" in sections
    assert "experience" in sections
    assert "education" in sections
    assert "skills" in sections
    assert "header" in sections


def test_parse_sections_content():
    sections = parse_sections(SAMPLE_RESUME)
    assert "REST APIs" in sections["experience"]
    assert "Computer Science" in sections["education"]
    assert "Python" in sections["skills"]


def test_parse_sections_header_variants():
    text = "PROFESSIONAL EXPERIENCE:\nBuilt things\n\nTechnical Skills\nGo, Rust\n"
    sections = parse_sections(text)
    assert sections["experience"] == "Built things"
    assert sections["skills"] == "Go, Rust"


def test_parse_sections_empty():
    sections = parse_sections("")
    assert len(sections) <= 1  # At most 'header' with empty content


def test_extract_resume_sections_keeps_long_sections():
    sections = extract_resume_sections(SAMPLE_RESUME)
    assert "TechCorp" in sections.experience
    assert "State University" in sections.education
    assert sections.skills.startswith("Python")


def test_extract_resume_sections_drops_short_sections():
    text = "Experience\nIntern at a bakery\n\nSkills\nPython\n\nEducation\nBSc\n"
    sections = extract_resume_sections(text)
    assert sections.experience is None
    assert sections.skills is None
    assert sections.education is None


def test_extract_resume_sections_minimum_is_exclusive():
    at_minimum = "x" * MIN_SECTION_CHARS["skills"]
    assert extract_resume_sections(f"Skills\n{at_minimum}\n").skills is None
    assert extract_resume_sections(f"Skills\n{at_minimum}y\n").skills == at_minimum + "y"


def test_extract_resume_sections_no_headers():
    sections = extract_resume_sections("Just a paragraph about me and my career in software.")
    assert sections.model_dump() == {"experience": None, "skills": None, "education": None}


def test_extract_contact_info():
    contact = extract_contact_info(SAMPLE_RESUME)
    assert contact["email"] == "john.doe@email.com"
    assert contact["linkedin"] == "linkedin.com/in/johndoe"
    assert contact["github"] == "github.com/johndoe"
    assert contact["phone"] is not None


def test_extract_contact_info_missing():
    contact = extract_contact_info("No contact details here")
    assert contact["email"] is None
    assert contact["linkedin"] is None
    assert contact["github"] is None
