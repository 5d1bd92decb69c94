#!/usr/bin/env python3
"""
Response models for API endpoints.
"""

from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class SkillOut(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None


class CompanyOut(BaseModel):
    id: int
    name: str
    city: Optional[str] = None
    state: Optional[str] = None
    is_remote: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class JobOut(BaseModel):
    id: int
    company_id: int
    title: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BulletPointOut(BaseModel):
    id: int
    job_id: Optional[int] = None
    content: str
    skills: List[SkillOut] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ImportedJobOut(BaseModel):
    company: str
    title: str
    bullet_point_count: int


class UploadResponse(BaseModel):
    """Result of importing one resume."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "success": True,
                "job_count": 2,
                "bullet_point_count": 5,
                "skill_count": 4,
                "rejected_count": 1,
                "jobs": [
                    {"company": "Acme", "title": "Senior Engineer", "bullet_point_count": 3},
                    {"company": "Acme", "title": "Software Engineer", "bullet_point_count": 2}
                ]
            }
        }
    )

    success: bool = True
    job_count: int
    bullet_point_count: int
    skill_count: int
    link_count: int = 0
    rejected_count: int = 0
    jobs: List[ImportedJobOut] = Field(default_factory=list)


class DeleteResponse(BaseModel):
    success: bool = True
    deleted_count: int = 1
