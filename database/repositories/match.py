import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from database.models import MatchRecord

logger = logging.getLogger(__name__)


class MatchRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_existing_match(
        self,
        user_email: str,
        job_hash: str
    ) -> Optional[MatchRecord]:
        stmt = select(MatchRecord).where(
            MatchRecord.user_email == user_email,
            MatchRecord.job_hash == job_hash
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def get_matches_for_user(
        self,
        user_email: str,
        min_score: Optional[int] = None
    ) -> List[MatchRecord]:
        stmt = select(MatchRecord).where(MatchRecord.user_email == user_email)

        if min_score is not None:
            stmt = stmt.where(MatchRecord.match_score >= min_score)

        stmt = stmt.order_by(MatchRecord.match_score.desc(), MatchRecord.id)
        return list(self.db.execute(stmt).scalars().all())

    def upsert_matches(
        self,
        user_email: str,
        rows: List[Dict[str, Any]]
    ) -> int:
        """
        Insert or update match rows for one user.

        Each row carries job_hash plus the MatchRecord column values.
        A job_hash repeated within rows updates the row written first.
        Returns the number of distinct rows written.
        """
        pending: Dict[str, MatchRecord] = {}
        for row in rows:
            values = dict(row)
            job_hash = values.pop('job_hash')
            record = pending.get(job_hash) or self.get_existing_match(user_email, job_hash)
            if record is None:
                record = MatchRecord(user_email=user_email, job_hash=job_hash, **values)
                self.db.add(record)
            else:
                for key, value in values.items():
                    setattr(record, key, value)
            pending[job_hash] = record

        count = len(pending)
        self.db.flush()
        if count > 0:
            logger.info(f"Saved {count} matches for {user_email}")
        return count

    def delete_matches_for_user(self, user_email: str) -> int:
        stmt = delete(MatchRecord).where(MatchRecord.user_email == user_email)
        result = self.db.execute(stmt)
        deleted = result.rowcount or 0
        if deleted > 0:
            logger.info(f"Deleted {deleted} matches for {user_email}")
        return deleted
