#!/usr/bin/env python3
"""
Resume Models - Transient values produced by the extraction pipeline.

These live for one upload request: created by the response parser,
consumed by the import orchestrator, never persisted as-is.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Any, Optional, Set


# Per-bullet skill caps
FULL_MODE_MAX_SKILLS = 5
LEGACY_MAX_TAGS = 10

# Bullet text must be strictly longer than this
MIN_BULLET_LENGTH = 10


class ExtractionMode(str, Enum):
    """Which prompt/response shape to use against the model."""
    LEGACY_BULLETS_AND_TAGS = 'legacy_bullets_and_tags'
    FULL_RESUME_STRUCTURE = 'full_resume_structure'


@dataclass
class ParsedBulletPoint:
    """One accomplishment sentence and the skills it demonstrates."""
    text: str
    skills: List[str] = field(default_factory=list)


@dataclass
class ParsedJob:
    """A single role at a single company."""
    company: str
    title: str
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_remote: bool = False
    is_current: bool = False
    bullet_points: List[ParsedBulletPoint] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'company': self.company,
            'city': self.city,
            'state': self.state,
            'is_remote': self.is_remote,
            'title': self.title,
            'start_date': self.start_date,
            'end_date': self.end_date,
            'is_current': self.is_current,
            'bullet_points': [
                {'text': bp.text, 'skills': list(bp.skills)}
                for bp in self.bullet_points
            ],
        }


@dataclass
class ParsedResume:
    """Validated resume graph, most recent job first.

    skills holds the unique resume-wide skill names; insertion order is
    kept so imports are deterministic.
    """
    jobs: List[ParsedJob] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)

    @property
    def skill_set(self) -> Set[str]:
        return {s.strip().lower() for s in self.skills if s and s.strip()}

    def to_dict(self) -> Dict[str, Any]:
        return {
            'jobs': [job.to_dict() for job in self.jobs],
            'skills': list(self.skills),
        }


@dataclass
class RejectedRecord:
    """A job or bullet point dropped during validation."""
    kind: str  # job | bullet_point
    index: int
    reason: str
    record: Any = None
    job_index: Optional[int] = None


@dataclass
class ResumeParseResult:
    """Validated resume plus everything that was dropped on the way."""
    resume: ParsedResume
    rejected: List[RejectedRecord] = field(default_factory=list)


@dataclass
class LegacyBullet:
    """Flat bullet produced by the legacy extraction mode."""
    text: str
    tags: List[str] = field(default_factory=list)
