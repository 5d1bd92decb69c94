#!/usr/bin/env python3
"""
Request models for API endpoints.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

MAX_BULLET_SKILLS = 20
MAX_SKILL_NAME_LENGTH = 50


class CompanyRequest(BaseModel):
    """Create or replace a company."""
    name: str = Field(..., min_length=1, max_length=255)
    city: Optional[str] = Field(None, max_length=100)
    state: Optional[str] = Field(None, max_length=50)
    is_remote: bool = False

    @field_validator('name')
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Company name is required")
        return value


class JobRequest(BaseModel):
    """Create or replace a job."""
    company_id: int
    title: str = Field(..., min_length=1, max_length=255)
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = False

    @field_validator('title')
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Job title is required")
        return value


class BulletPointRequest(BaseModel):
    """Create or replace a bullet point and its skill links."""
    content: str = Field(..., min_length=1, max_length=5000)
    job_id: Optional[int] = None
    skills: List[str] = Field(default_factory=list)

    @field_validator('skills')
    @classmethod
    def limit_skills(cls, value: List[str]) -> List[str]:
        # Oversized input is cut down rather than rejected
        return [s[:MAX_SKILL_NAME_LENGTH] for s in value[:MAX_BULLET_SKILLS]]
