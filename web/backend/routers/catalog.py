#!/usr/bin/env python3
"""
Catalog endpoints - companies, jobs, bullet points and skills of the caller.

Every query is scoped to the authenticated user; rows owned by someone
else behave as if they did not exist.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends

from database.repository import CatalogRepository
from ..dependencies import get_current_user, get_repo
from ..exceptions import NotFoundException
from ..models.requests import BulletPointRequest, CompanyRequest, JobRequest
from ..models.responses import (
    BulletPointOut,
    CompanyOut,
    DeleteResponse,
    JobOut,
    SkillOut,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["catalog"])


def _with_skills(repo: CatalogRepository, bullet_point: dict) -> dict:
    return {**bullet_point, 'skills': repo.skills.skills_for_bullet_point(bullet_point['id'])}


def _link_skills(repo: CatalogRepository, user_id: int, bullet_point_id: int, names: List[str]) -> None:
    for name in names:
        if name.strip():
            skill = repo.skills.get_or_create(user_id, name)
            repo.skills.link(bullet_point_id, skill['id'])


def _require_job(repo: CatalogRepository, job_id: int, user_id: int) -> dict:
    job = repo.jobs.get(job_id, user_id)
    if job is None:
        raise NotFoundException("Job not found or does not belong to user")
    return job


# Skills

@router.get("/skills", response_model=List[SkillOut])
def list_skills(user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    return repo.skills.list_for_user(user['id'])


@router.delete("/skills/{skill_id}", response_model=DeleteResponse)
def delete_skill(skill_id: int, user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    if not repo.skills.delete(skill_id, user['id']):
        raise NotFoundException("Skill not found")
    return DeleteResponse()


# Companies

@router.get("/companies", response_model=List[CompanyOut])
def list_companies(user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    return repo.companies.list_for_user(user['id'])


@router.post("/companies", response_model=CompanyOut, status_code=201)
def create_company(
    body: CompanyRequest,
    user: dict = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_repo),
):
    return repo.companies.create(
        user['id'], body.name, city=body.city, state=body.state, is_remote=body.is_remote
    )


@router.put("/companies/{company_id}", response_model=CompanyOut)
def update_company(
    company_id: int,
    body: CompanyRequest,
    user: dict = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_repo),
):
    company = repo.companies.update(company_id, user['id'], **body.model_dump())
    if company is None:
        raise NotFoundException("Company not found")
    return company


@router.delete("/companies/{company_id}", response_model=DeleteResponse)
def delete_company(company_id: int, user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    if not repo.companies.delete(company_id, user['id']):
        raise NotFoundException("Company not found")
    return DeleteResponse()


# Jobs

@router.get("/jobs", response_model=List[JobOut])
def list_jobs(user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    return repo.jobs.list_for_user(user['id'])


@router.post("/jobs", response_model=JobOut, status_code=201)
def create_job(body: JobRequest, user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    if repo.companies.get(body.company_id, user['id']) is None:
        raise NotFoundException("Company not found or does not belong to user")
    return repo.jobs.create(
        user['id'],
        body.company_id,
        body.title,
        start_date=body.start_date,
        end_date=body.end_date,
        is_current=body.is_current,
    )


@router.put("/jobs/{job_id}", response_model=JobOut)
def update_job(
    job_id: int,
    body: JobRequest,
    user: dict = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_repo),
):
    if repo.companies.get(body.company_id, user['id']) is None:
        raise NotFoundException("Company not found or does not belong to user")
    job = repo.jobs.update(job_id, user['id'], **body.model_dump())
    if job is None:
        raise NotFoundException("Job not found")
    return job


@router.delete("/jobs/{job_id}", response_model=DeleteResponse)
def delete_job(job_id: int, user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    if not repo.jobs.delete(job_id, user['id']):
        raise NotFoundException("Job not found")
    return DeleteResponse()


# Bullet points

@router.get("/bullet-points", response_model=List[BulletPointOut])
def list_bullet_points(user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    return [_with_skills(repo, bp) for bp in repo.bullet_points.list_for_user(user['id'])]


@router.post("/bullet-points", response_model=BulletPointOut, status_code=201)
def create_bullet_point(
    body: BulletPointRequest,
    user: dict = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_repo),
):
    if body.job_id is not None:
        _require_job(repo, body.job_id, user['id'])
    bullet_point = repo.bullet_points.create(user['id'], body.content, job_id=body.job_id)
    _link_skills(repo, user['id'], bullet_point['id'], body.skills)
    return _with_skills(repo, bullet_point)


@router.delete("/bullet-points/delete-all", response_model=DeleteResponse)
def delete_all_bullet_points(user: dict = Depends(get_current_user), repo: CatalogRepository = Depends(get_repo)):
    deleted = repo.bullet_points.delete_all_for_user(user['id'])
    logger.info(f"Deleted {deleted} bullet point(s) for user {user['id']}")
    return DeleteResponse(deleted_count=deleted)


@router.put("/bullet-points/{bullet_point_id}", response_model=BulletPointOut)
def update_bullet_point(
    bullet_point_id: int,
    body: BulletPointRequest,
    user: dict = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_repo),
):
    """Replace the content and make the skill links match ``body.skills``."""
    if repo.bullet_points.get(bullet_point_id, user['id']) is None:
        raise NotFoundException("Bullet point not found")
    if body.job_id is not None:
        _require_job(repo, body.job_id, user['id'])

    fields = {'content': body.content}
    if body.job_id is not None:
        fields['job_id'] = body.job_id
    bullet_point = repo.bullet_points.update(bullet_point_id, user['id'], **fields)

    wanted = {name.strip().lower() for name in body.skills if name.strip()}
    current = repo.skills.skills_for_bullet_point(bullet_point_id)
    for skill in current:
        if skill['normalized_name'] not in wanted:
            repo.skills.unlink(bullet_point_id, skill['id'])
    _link_skills(repo, user['id'], bullet_point_id, body.skills)

    return _with_skills(repo, bullet_point)


@router.delete("/bullet-points/{bullet_point_id}", response_model=DeleteResponse)
def delete_bullet_point(
    bullet_point_id: int,
    user: dict = Depends(get_current_user),
    repo: CatalogRepository = Depends(get_repo),
):
    if not repo.bullet_points.delete(bullet_point_id, user['id']):
        raise NotFoundException("Bullet point not found")
    return DeleteResponse()
