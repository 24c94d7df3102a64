"""
Matching - Rank scraped job postings for a user.

Public API:
- rank(jobs, user, max_matches) -> List[JobMatch]
- RankingEngine: configurable engine (strategy, vocabulary, config)
- Job, UserPreferences, SubscriptionTier: inputs
- JobMatch, UnifiedScore: outputs
"""

from matching.engine import RankingEngine, rank
from matching.exceptions import AIScoringError, InvalidMaxMatchesError, MatchingError
from matching.models import Job, RankingRequest, SubscriptionTier, UserPreferences
from matching.results import JobMatch, categorize_matches
from matching.scorer.models import ScoreComponents, ScoringMethod, UnifiedScore

__all__ = [
    'RankingEngine',
    'rank',
    'AIScoringError',
    'InvalidMaxMatchesError',
    'MatchingError',
    'Job',
    'RankingRequest',
    'SubscriptionTier',
    'UserPreferences',
    'JobMatch',
    'categorize_matches',
    'ScoreComponents',
    'ScoringMethod',
    'UnifiedScore',
]
