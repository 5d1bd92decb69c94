"""
Resume Extraction Service - Model-backed extraction with heuristic fallback.

Two modes:
- Full resume structure: one model call returning companies, jobs, bullet
  points and skills. Requires a configured model; there is no fallback.
- Legacy bullets and tags: a bulk bullet call plus per-bullet tag calls,
  falling back to deterministic heuristics whenever the model is missing
  or fails.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from core.llm.interfaces import LLMProvider
from etl.resume.exceptions import ConfigurationError, ModelCallError
from etl.resume.heuristics import extract_bullet_points_simple, extract_skills_simple
from etl.resume.models import LEGACY_MAX_TAGS, ExtractionMode, LegacyBullet, ResumeParseResult
from etl.resume.prompts import build_bullet_skills_prompt, build_extraction_prompt
from etl.resume.response_parser import (
    parse_legacy_bullets_response,
    parse_resume_response,
    parse_skill_list_response,
)

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r'\s+')


def bullet_key(text: str) -> str:
    """Lookup key for a bullet: whitespace collapsed, case folded."""
    return _WHITESPACE_RE.sub(' ', text).strip().casefold()


@dataclass
class LegacyExtractionContext:
    """Per-upload scratch space linking the bulk call to the per-bullet calls.

    Create one per request and pass it to both extract_bullet_points and
    tag_bullet_point; never share it across requests.
    """
    bullets: Dict[str, LegacyBullet] = field(default_factory=dict)

    def remember(self, bullets: List[LegacyBullet]) -> None:
        for bullet in bullets:
            self.bullets[bullet_key(bullet.text)] = bullet

    def cached_tags(self, text: str) -> List[str]:
        bullet = self.bullets.get(bullet_key(text))
        return list(bullet.tags) if bullet else []


class ResumeExtractionService:
    """Run one extraction task against the model (or the heuristics).

    Args:
        provider: Configured LLM provider, or None when no credential is set
    """

    def __init__(self, provider: Optional[LLMProvider] = None):
        self.provider = provider

    @property
    def model_configured(self) -> bool:
        return self.provider is not None

    # ------------------------------------------------------------------
    # Full resume structure
    # ------------------------------------------------------------------

    def parse_resume_structure(self, text: str) -> ResumeParseResult:
        """Reconstruct the company/job/bullet/skill graph from resume text.

        Raises:
            ConfigurationError: No model configured
            ModelCallError: The model call failed
            ParseFailure: The response could not be turned into >= 1 job
        """
        if self.provider is None:
            raise ConfigurationError(
                "Resume parsing requires a generative model; no API key is configured"
            )

        prompt = build_extraction_prompt(text, ExtractionMode.FULL_RESUME_STRUCTURE)
        logger.info(f"Requesting full resume structure ({len(text)} chars of resume text)")
        raw = self.provider.generate_text(prompt)

        result = parse_resume_response(raw)
        logger.info(
            f"Parsed {len(result.resume.jobs)} job(s), {len(result.resume.skills)} skill(s), "
            f"{len(result.rejected)} rejected record(s)"
        )
        return result

    # ------------------------------------------------------------------
    # Legacy bullets and tags
    # ------------------------------------------------------------------

    def extract_bullet_points(
        self, text: str, context: Optional[LegacyExtractionContext] = None
    ) -> List[str]:
        """Flat list of bullet texts; never raises for model problems."""
        if self.provider is None:
            return extract_bullet_points_simple(text)

        prompt = build_extraction_prompt(text, ExtractionMode.LEGACY_BULLETS_AND_TAGS)
        try:
            raw = self.provider.generate_text(prompt)
        except ModelCallError as e:
            logger.warning(f"Model unavailable, falling back to simple extraction: {e}")
            return extract_bullet_points_simple(text)

        bullets, from_json = parse_legacy_bullets_response(raw)
        if from_json and context is not None:
            context.remember(bullets)
        return [b.text for b in bullets]

    def tag_bullet_point(
        self, text: str, context: Optional[LegacyExtractionContext] = None
    ) -> List[str]:
        """Skills for one bullet: cached tags, else a model call, else keywords."""
        if context is not None:
            cached = context.cached_tags(text)
            if cached:
                return cached[:LEGACY_MAX_TAGS]

        if self.provider is None:
            return extract_skills_simple(text)

        try:
            raw = self.provider.generate_text(build_bullet_skills_prompt(text))
        except ModelCallError as e:
            logger.warning(f"Model unavailable for tags, falling back to simple extraction: {e}")
            return extract_skills_simple(text)

        return parse_skill_list_response(raw)

    def extract_tagged_bullets(self, text: str) -> List[LegacyBullet]:
        """Run the whole legacy flow for one document with a fresh context."""
        context = LegacyExtractionContext()
        bullets = self.extract_bullet_points(text, context)
        return [LegacyBullet(text=b, tags=self.tag_bullet_point(b, context)) for b in bullets]
