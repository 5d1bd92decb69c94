"""
Work-history catalog: companies, jobs, bullet points and skills.

Every row is owned by one user. Skills are unique per user by
case-insensitive name and are linked to bullet points through the
bullet_point_skills junction table.
"""
from sqlalchemy import (
    Column, Integer, String, Text, Boolean, Date, TIMESTAMP, ForeignKey, Table,
    UniqueConstraint, Index, func,
)
from sqlalchemy.orm import relationship

from .base import Base


bullet_point_skills = Table(
    'bullet_point_skills',
    Base.metadata,
    Column('bullet_point_id', Integer, ForeignKey('bullet_points.id', ondelete='CASCADE'), primary_key=True),
    Column('skill_id', Integer, ForeignKey('skills.id', ondelete='CASCADE'), primary_key=True),
    Column('created_at', TIMESTAMP(timezone=True), nullable=False, server_default=func.now()),
    Index('idx_bullet_point_skills_skill_id', 'skill_id'),
)


class Company(Base):
    __tablename__ = 'companies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    city = Column(String(100))
    state = Column(String(50))
    is_remote = Column(Boolean, nullable=False, default=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="companies")
    jobs = relationship("Job", back_populates="company", cascade="all, delete-orphan")


class Job(Base):
    __tablename__ = 'jobs'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    company_id = Column(Integer, ForeignKey('companies.id', ondelete='CASCADE'), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    # Nullable: the model does not always recover a start date
    start_date = Column(Date)
    end_date = Column(Date)
    is_current = Column(Boolean, nullable=False, default=False, index=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    company = relationship("Company", back_populates="jobs")
    bullet_points = relationship("BulletPoint", back_populates="job", cascade="all, delete-orphan")


class BulletPoint(Base):
    __tablename__ = 'bullet_points'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey('jobs.id', ondelete='CASCADE'), index=True)
    content = Column(Text, nullable=False)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    job = relationship("Job", back_populates="bullet_points")
    skills = relationship("Skill", secondary=bullet_point_skills, back_populates="bullet_points")


class Skill(Base):
    __tablename__ = 'skills'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    # name.strip().lower(); the identity used for de-duplication
    normalized_name = Column(String(100), nullable=False, index=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", back_populates="skills")
    bullet_points = relationship("BulletPoint", secondary=bullet_point_skills, back_populates="skills")

    __table_args__ = (
        UniqueConstraint('user_id', 'normalized_name', name='uq_skills_user_normalized_name'),
    )
