"""
Model-free fallback extractors.

Used by the legacy flow when no model is configured or the model call
fails. Deterministic: the same text always yields the same output.
"""
import re
from typing import List

from etl.resume.models import LEGACY_MAX_TAGS, MIN_BULLET_LENGTH

BULLET_GLYPH_RE = re.compile(r'^[•\-*○●▪▫►‣⁃]\s+')
ALL_CAPS_HEADING_RE = re.compile(r'^[A-Z\s]{3,}$')
SECTION_HEADER_RE = re.compile(r'^(education|experience|skills|contact|summary|objective)', re.IGNORECASE)

MIN_PLAIN_LINE_LENGTH = 20
MAX_PLAIN_LINE_LENGTH = 500

# Vocabulary order is the output order
COMMON_SKILLS = [
    "JavaScript",
    "TypeScript",
    "Python",
    "Java",
    "C++",
    "C#",
    "Ruby",
    "Go",
    "Rust",
    "PHP",
    "React",
    "Angular",
    "Vue",
    "Node.js",
    "Express",
    "Django",
    "Flask",
    "Spring",
    "Rails",
    "SQL",
    "PostgreSQL",
    "MySQL",
    "MongoDB",
    "Redis",
    "AWS",
    "Azure",
    "GCP",
    "Docker",
    "Kubernetes",
    "Git",
    "CI/CD",
    "Agile",
    "Scrum",
    "REST",
    "GraphQL",
    "API",
    "Microservices",
    "Machine Learning",
    "AI",
    "Data Science",
    "Analytics",
    "Testing",
    "TDD",
]


def is_bullet_candidate(line: str) -> bool:
    """Whether a stripped line looks like a resume bullet.

    Section headers never qualify, even when they start with a glyph or
    are long enough.
    """
    if SECTION_HEADER_RE.match(line):
        return False
    if BULLET_GLYPH_RE.match(line):
        return True
    return (
        MIN_PLAIN_LINE_LENGTH < len(line) < MAX_PLAIN_LINE_LENGTH
        and not ALL_CAPS_HEADING_RE.match(line)
    )


def extract_bullet_points_simple(text: str) -> List[str]:
    """Pick bullet-looking lines out of raw text, glyphs stripped."""
    bullet_points = []
    for raw_line in text.split('\n'):
        line = raw_line.strip()
        if not is_bullet_candidate(line):
            continue
        cleaned = BULLET_GLYPH_RE.sub('', line).strip()
        if len(cleaned) > MIN_BULLET_LENGTH:
            bullet_points.append(cleaned)
    return bullet_points


def extract_skills_simple(text: str, limit: int = LEGACY_MAX_TAGS) -> List[str]:
    """Case-insensitive substring match against COMMON_SKILLS."""
    lower_text = text.lower()
    tags = [skill for skill in COMMON_SKILLS if skill.lower() in lower_text]
    return tags[:limit]
