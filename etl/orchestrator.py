from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from database.repository import CatalogRepository
from database.repositories import normalize_skill_name
from etl.resume.extraction import ResumeExtractionService
from etl.resume.models import ParsedResume, RejectedRecord
from etl.resume.text_extractor import DocumentTextExtractor, detect_document_kind

logger = logging.getLogger(__name__)


@dataclass
class ImportedJob:
    company: str
    title: str
    bullet_point_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'company': self.company,
            'title': self.title,
            'bullet_point_count': self.bullet_point_count,
        }


@dataclass
class ImportSummary:
    """Counts of what one resume import wrote, plus what validation dropped."""
    job_count: int = 0
    bullet_point_count: int = 0
    skill_count: int = 0
    link_count: int = 0
    jobs: List[ImportedJob] = field(default_factory=list)
    rejected: List[RejectedRecord] = field(default_factory=list)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'job_count': self.job_count,
            'bullet_point_count': self.bullet_point_count,
            'skill_count': self.skill_count,
            'link_count': self.link_count,
            'rejected_count': self.rejected_count,
            'jobs': [job.to_dict() for job in self.jobs],
        }


class ResumeImportService:
    """Service turning a parsed resume into catalog rows.

    The service does not manage transactions - all commits/rollbacks are
    handled by the caller's unit of work. Rows already written when a later
    step fails are kept only if the caller commits.

    Usage:
        with catalog_uow() as repo:
            service = ResumeImportService(extractor, extraction)
            summary = service.process_upload(repo, external_id, data, name, mime)
        # commit happens automatically
    """

    def __init__(
        self,
        extractor: Optional[DocumentTextExtractor] = None,
        extraction: Optional[ResumeExtractionService] = None,
    ):
        self.extractor = extractor or DocumentTextExtractor()
        self.extraction = extraction or ResumeExtractionService()

    def resolve_skills(self, repo: CatalogRepository, user_id: int, names: List[str]) -> Dict[str, int]:
        """Resolve every resume-wide skill to an id, once per distinct name.

        Returns:
            Map of normalized skill name to skill id
        """
        skill_ids: Dict[str, int] = {}
        for name in names:
            if not name or not name.strip():
                continue
            key = normalize_skill_name(name)
            if key in skill_ids:
                continue
            skill = repo.skills.get_or_create(user_id, name)
            skill_ids[key] = skill['id']
        return skill_ids

    def import_resume(self, repo: CatalogRepository, user_id: int, parsed: ParsedResume) -> ImportSummary:
        """Write companies, jobs, bullet points and skill links for one resume.

        Skills come from the resume-wide list only; a bullet-level skill
        missing from that list is skipped rather than created.
        """
        summary = ImportSummary()
        skill_ids = self.resolve_skills(repo, user_id, parsed.skills)
        summary.skill_count = len(skill_ids)

        for job in parsed.jobs:
            company = repo.companies.create(
                user_id,
                job.company,
                city=job.city,
                state=job.state,
                is_remote=job.is_remote,
            )
            job_row = repo.jobs.create(
                user_id,
                company['id'],
                job.title,
                start_date=job.start_date,
                end_date=job.end_date,
                is_current=job.is_current,
            )
            summary.job_count += 1

            for bullet in job.bullet_points:
                bullet_row = repo.bullet_points.create(user_id, bullet.text, job_id=job_row['id'])
                summary.bullet_point_count += 1

                for skill_name in bullet.skills:
                    skill_id = skill_ids.get(normalize_skill_name(skill_name))
                    if skill_id is None:
                        logger.debug(f"Bullet skill {skill_name!r} not in resume skill list; skipped")
                        continue
                    if repo.skills.link(bullet_row['id'], skill_id):
                        summary.link_count += 1

            summary.jobs.append(ImportedJob(
                company=job.company,
                title=job.title,
                bullet_point_count=len(job.bullet_points),
            ))

        logger.info(
            f"Imported {summary.job_count} job(s), {summary.bullet_point_count} bullet point(s), "
            f"{summary.skill_count} skill(s) for user {user_id}"
        )
        return summary

    def process_upload(
        self,
        repo: CatalogRepository,
        external_user_id: str,
        data: bytes,
        filename: str,
        content_type: Optional[str] = None,
    ) -> ImportSummary:
        """Run the whole upload pipeline: identity, extraction, parse, import.

        Raises:
            ExtractionError, ConfigurationError, ModelCallError, ParseFailure
        """
        user = repo.users.get_or_create(external_user_id)

        # Browsers often send a generic MIME type; fall back to the file name
        declared = content_type if detect_document_kind(content_type) else filename
        try:
            text = self.extractor.extract(data, declared)
        except Exception:
            logger.error(f"Text extraction failed for {filename!r} ({declared}, {len(data)} bytes)")
            raise

        result = self.extraction.parse_resume_structure(text)
        summary = self.import_resume(repo, user['id'], result.resume)
        summary.rejected = result.rejected
        return summary
