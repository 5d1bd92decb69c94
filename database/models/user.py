from sqlalchemy import Column, Integer, Text, TIMESTAMP, func, Index
from sqlalchemy.orm import relationship

from .base import Base


class User(Base):
    """
    Internal user record mapped 1:1 to the identity provider's subject.
    """
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(Text, nullable=False, unique=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    companies = relationship("Company", back_populates="owner", cascade="all, delete-orphan")
    skills = relationship("Skill", back_populates="owner", cascade="all, delete-orphan")

    __table_args__ = (
        Index('idx_users_external_id', 'external_id'),
    )
