import uuid

from sqlalchemy import Column, Text, TIMESTAMP, JSON, Uuid, func, Index
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base


class UserProfile(Base):
    """
    Study profile, one row per user.

    courses/interests are JSON arrays of strings. Older rows may hold
    JSON-encoded or comma-separated strings; the store adapter normalizes
    them on read.
    """
    __tablename__ = 'user_profile'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, unique=True)

    courses = Column(JSON().with_variant(JSONB, 'postgresql'), default=list)  # subjects the user can teach
    interests = Column(JSON().with_variant(JSONB, 'postgresql'), default=list)  # subjects the user wants to learn

    major = Column(Text, nullable=True)
    year = Column(Text, nullable=True)
    learning_style = Column(Text, nullable=True)
    study_preference = Column(Text, nullable=True)

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index('idx_user_profile_user_id', 'user_id'),
    )
