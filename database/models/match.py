import datetime

from sqlalchemy import Column, Integer, Text, JSON, DateTime, UniqueConstraint, Index

from .base import Base


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(datetime.timezone.utc)


class MatchRecord(Base):
    """
    Stores one ranked job for one user.

    A re-run for the same (user_email, job_hash) pair updates the existing
    row rather than inserting a duplicate.
    """
    __tablename__ = 'job_match_record'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_email = Column(Text, nullable=False)
    job_hash = Column(Text, nullable=False)

    match_score = Column(Integer, nullable=False)
    match_reason = Column(Text, nullable=False, default='')
    confidence_score = Column(Integer, nullable=False)
    match_method = Column(Text, nullable=False)
    match_quality = Column(Text, nullable=False)

    score_breakdown = Column(JSON, default=dict)
    unified_score = Column(JSON, default=dict)

    matched_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)

    __table_args__ = (
        UniqueConstraint('user_email', 'job_hash', name='uq_job_match_record_user_job'),
        Index('idx_job_match_record_user', 'user_email'),
        Index('idx_job_match_record_score', 'match_score'),
    )
