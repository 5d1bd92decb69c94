"""
Response Parser - Turn raw model text into validated resume values.

Validation policy: lenient per field (missing optionals get defaults),
strict on structure (the result must keep at least one job). Records that
fail their minimal checks are dropped and reported as RejectedRecords
alongside the result rather than raised.
"""
import json
import logging
import re
from datetime import datetime
from typing import Any, List, Optional, Tuple

from dateutil import parser as date_parser

from etl.resume.exceptions import ParseFailure
from etl.resume.models import (
    FULL_MODE_MAX_SKILLS,
    LEGACY_MAX_TAGS,
    MIN_BULLET_LENGTH,
    LegacyBullet,
    ParsedBulletPoint,
    ParsedJob,
    ParsedResume,
    RejectedRecord,
    ResumeParseResult,
)

logger = logging.getLogger(__name__)

CODE_FENCE_RE = re.compile(r'```json\n?|\n?```')
ISO_DATE_RE = re.compile(r'^(\d{4})(?:-(\d{1,2}))?(?:-(\d{1,2}))?$')

_DEFAULT_DATE = datetime(2000, 1, 1)
_TRUE_STRINGS = {'true', 'yes', '1'}


def strip_code_fences(raw_text: str) -> str:
    """Remove ```json / ``` fence markers around a model response."""
    return CODE_FENCE_RE.sub('', raw_text).strip()


def load_json_response(raw_text: str) -> Any:
    """Strip fences and decode JSON.

    Raises:
        json.JSONDecodeError: If the remaining text is not JSON
    """
    return json.loads(strip_code_fences(raw_text))


def _clean_str(value: Any) -> Optional[str]:
    """Scalar to stripped text; None, blanks and nested objects count as missing."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if not isinstance(value, str):
        value = str(value)
    value = value.strip()
    return value or None


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    if isinstance(value, (int, float)):
        return value != 0
    return False


def normalize_date(value: Any) -> Optional[str]:
    """Normalize a date-ish value to YYYY-MM-DD.

    'YYYY' and 'YYYY-MM' become the first day of the period; free-form
    strings like 'March 2021' go through dateutil. Anything unreadable
    becomes None.
    """
    text = _clean_str(value)
    if text is None:
        return None

    match = ISO_DATE_RE.match(text)
    if match:
        year, month, day = match.groups()
        try:
            return datetime(int(year), int(month or 1), int(day or 1)).date().isoformat()
        except ValueError:
            return None

    try:
        return date_parser.parse(text, default=_DEFAULT_DATE).date().isoformat()
    except (ValueError, OverflowError):
        logger.debug(f"Unreadable date value: {text!r}")
        return None


def _clean_skill_list(value: Any, limit: Optional[int] = None) -> List[str]:
    if not isinstance(value, list):
        return []
    skills = [s for s in (_clean_str(v) for v in value) if s]
    return skills[:limit] if limit is not None else skills


def _unique_skills(value: Any) -> List[str]:
    """Resume-wide skills: cleaned, first spelling wins on case-insensitive duplicates."""
    seen = set()
    unique = []
    for skill in _clean_skill_list(value):
        key = skill.lower()
        if key not in seen:
            seen.add(key)
            unique.append(skill)
    return unique


def _validate_bullet(
    raw: Any, index: int, job_index: int, rejected: List[RejectedRecord]
) -> Optional[ParsedBulletPoint]:
    if isinstance(raw, str):
        raw = {'text': raw}
    if not isinstance(raw, dict):
        rejected.append(RejectedRecord('bullet_point', index, 'not an object', raw, job_index))
        return None

    text = _clean_str(raw.get('text'))
    if text is None:
        rejected.append(RejectedRecord('bullet_point', index, 'missing text', raw, job_index))
        return None
    if len(text) <= MIN_BULLET_LENGTH:
        rejected.append(RejectedRecord('bullet_point', index, 'text too short', raw, job_index))
        return None

    return ParsedBulletPoint(
        text=text,
        skills=_clean_skill_list(raw.get('skills'), FULL_MODE_MAX_SKILLS),
    )


def _validate_job(raw: Any, index: int, rejected: List[RejectedRecord]) -> Optional[ParsedJob]:
    if not isinstance(raw, dict):
        rejected.append(RejectedRecord('job', index, 'not an object', raw))
        return None

    company = _clean_str(raw.get('company'))
    title = _clean_str(raw.get('title'))
    if not company or not title:
        missing = 'company' if not company else 'title'
        rejected.append(RejectedRecord('job', index, f'missing {missing}', raw))
        return None

    is_remote = _as_bool(raw.get('is_remote', False))
    is_current = _as_bool(raw.get('is_current', False))

    raw_bullets = raw.get('bullet_points')
    if not isinstance(raw_bullets, list):
        raw_bullets = []
    bullet_points = []
    for bp_index, raw_bullet in enumerate(raw_bullets):
        bullet = _validate_bullet(raw_bullet, bp_index, index, rejected)
        if bullet is not None:
            bullet_points.append(bullet)

    return ParsedJob(
        company=company,
        title=title,
        city=None if is_remote else _clean_str(raw.get('city')),
        state=None if is_remote else _clean_str(raw.get('state')),
        is_remote=is_remote,
        start_date=normalize_date(raw.get('start_date')),
        end_date=None if is_current else normalize_date(raw.get('end_date')),
        is_current=is_current,
        bullet_points=bullet_points,
    )


def validate_resume_structure(data: Any) -> ResumeParseResult:
    """Validate an already-decoded full-structure response.

    Raises:
        ParseFailure: missing_jobs or no_jobs
    """
    if not isinstance(data, dict) or not isinstance(data.get('jobs'), list):
        raise ParseFailure(ParseFailure.MISSING_JOBS)

    rejected: List[RejectedRecord] = []
    jobs = []
    for index, raw_job in enumerate(data['jobs']):
        job = _validate_job(raw_job, index, rejected)
        if job is not None:
            jobs.append(job)

    for record in rejected:
        logger.debug(f"Dropped {record.kind} #{record.index}: {record.reason}")
    if rejected:
        logger.info(f"Resume validation dropped {len(rejected)} record(s)")

    if not jobs:
        raise ParseFailure(ParseFailure.NO_JOBS)

    resume = ParsedResume(jobs=jobs, skills=_unique_skills(data.get('skills')))
    return ResumeParseResult(resume=resume, rejected=rejected)


def parse_resume_response(raw_text: str) -> ResumeParseResult:
    """Full-structure mode: raw model text to validated resume.

    Raises:
        ParseFailure: unparseable, missing_jobs or no_jobs
    """
    try:
        data = load_json_response(raw_text)
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse resume structure JSON: {e}")
        raise ParseFailure(ParseFailure.UNPARSEABLE) from e

    return validate_resume_structure(data)


def split_response_lines(raw_text: str) -> List[str]:
    """Line fallback for non-JSON legacy responses."""
    lines = [line.strip() for line in raw_text.split('\n')]
    return [
        line for line in lines
        if len(line) > MIN_BULLET_LENGTH and not line.startswith('{') and not line.startswith('[')
    ]


def parse_legacy_bullets_response(raw_text: str) -> Tuple[List[LegacyBullet], bool]:
    """Legacy mode: raw model text to flat bullets.

    Returns:
        (bullets, from_json) - from_json is False when the line fallback
        was used, in which case no bullet carries tags
    """
    try:
        data = load_json_response(raw_text)
    except json.JSONDecodeError:
        data = None
        logger.warning("Failed to parse JSON response, falling back to text parsing")

    if isinstance(data, list):
        bullets = []
        for item in data:
            if not isinstance(item, dict):
                continue
            text = _clean_str(item.get('text'))
            if text and len(text) > MIN_BULLET_LENGTH:
                bullets.append(LegacyBullet(text=text, tags=_clean_skill_list(item.get('tags'))))
        return bullets, True

    return [LegacyBullet(text=line) for line in split_response_lines(raw_text)], False


def parse_skill_list_response(raw_text: str, limit: int = LEGACY_MAX_TAGS) -> List[str]:
    """Comma-separated skills answer to a list of tags."""
    tags = [tag.strip() for tag in raw_text.split(',')]
    return [tag for tag in tags if 1 < len(tag) < 30][:limit]
