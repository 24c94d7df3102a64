#!/usr/bin/env python3
"""
Match Persistence - Store a ranking run through the match repository.

The engine itself never touches the database; callers rank first and then
hand the resulting JobMatch list to save_ranking() inside a unit of work.
"""

from typing import Any, Dict, List
import logging

from database.repositories.match import MatchRepository
from matching.models import UserPreferences
from matching.results import JobMatch

logger = logging.getLogger(__name__)


def match_to_row(match: JobMatch) -> Dict[str, Any]:
    """Column values for one MatchRecord."""
    return {
        'job_hash': match.job.job_hash,
        'match_score': match.match_score,
        'match_reason': match.match_reason,
        'confidence_score': match.confidence_score,
        'match_method': match.method.value,
        'match_quality': match.match_quality,
        'score_breakdown': match.score_breakdown.to_dict(),
        'unified_score': match.unified_score.to_dict(),
        'matched_at': match.matched_at,
    }


def save_ranking(
    repo: MatchRepository,
    user: UserPreferences,
    matches: List[JobMatch],
    replace_existing: bool = False
) -> int:
    """
    Persist a user's ranked matches.

    Args:
        repo: MatchRepository bound to the caller's session
        user: User the ranking was produced for
        matches: Output of RankingEngine.rank()
        replace_existing: Delete the user's previous matches first

    Returns:
        Number of rows written
    """
    if not user.email:
        logger.warning("Skipping save for ranking without a user email")
        return 0

    if replace_existing:
        repo.delete_matches_for_user(user.email)

    if not matches:
        return 0

    return repo.upsert_matches(user.email, [match_to_row(m) for m in matches])
