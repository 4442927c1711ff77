import uuid

from sqlalchemy import Column, Text, TIMESTAMP, Integer, Uuid, func, UniqueConstraint, CheckConstraint, Index

from .base import Base

# Byte-order comparison on PostgreSQL so the pair-order CHECK agrees with
# Python string ordering (PairKey.of) whatever the database locale is.
PAIR_USER_ID = Text().with_variant(Text(collation="C"), "postgresql")


class MatchSuggestion(Base):
    """
    Suggested study pairing between two users.

    The pair is stored normalized (user_id_a < user_id_b) and is unique, so
    concurrent regenerations for both ends of a pair cannot create duplicates.

    Tracks:
    - Compatibility score (0-100)
    - Status: 'suggestion' while owned by the regenerator;
      'pending_connection' / 'connected' once the connection workflow takes over
    """
    __tablename__ = 'match_suggestion'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id_a = Column(PAIR_USER_ID, nullable=False)
    user_id_b = Column(PAIR_USER_ID, nullable=False)

    compatibility_score = Column(Integer, nullable=False, default=0)
    status = Column(Text, nullable=False, default='suggestion')

    created_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint('user_id_a', 'user_id_b', name='uq_match_suggestion_pair'),
        CheckConstraint('user_id_a < user_id_b', name='ck_match_suggestion_pair_order'),
        CheckConstraint('compatibility_score >= 0 AND compatibility_score <= 100', name='ck_match_suggestion_score_range'),
        Index('idx_match_suggestion_user_a', 'user_id_a'),
        Index('idx_match_suggestion_user_b', 'user_id_b'),
        Index('idx_match_suggestion_status', 'status'),
        Index('idx_match_suggestion_score', 'compatibility_score'),
    )
