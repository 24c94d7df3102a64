#!/usr/bin/env python3
"""
Ranking Engine - Rank a job pool for one user.

Pipeline per user:
1. Score every job (rule-based, or AI with rule-based fallback)
2. Stable sort descending by overall score
3. Drop matches below the configured minimum score
4. Balanced distribution across target cities and career paths
5. Adapt to JobMatch records

One user's full job pool is a single unit of work, since selection quotas
only make sense over the complete scored set. Users are independent and
can be ranked in parallel with rank_many().
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from typing import List, Optional
import logging
import time

from matching.config_loader import MatchingConfig
from matching.distribution import BalancedDistributionSelector
from matching.exceptions import InvalidMaxMatchesError
from matching.models import Job, RankingRequest, SubscriptionTier, UserPreferences
from matching.results import JobMatch, ScoredMatch, adapt_matches
from matching.scorer.service import ScoringService, resolve_now
from matching.strategies import MatchingStrategy, RuleBasedStrategy
from matching.vocabulary import Vocabulary, default_vocabulary

logger = logging.getLogger(__name__)


def validate_max_matches(max_matches) -> int:
    """Fail fast on a negative or non-integer output size."""
    if isinstance(max_matches, bool) or not isinstance(max_matches, int):
        raise InvalidMaxMatchesError(f"max_matches must be an integer, got {max_matches!r}")
    if max_matches < 0:
        raise InvalidMaxMatchesError(f"max_matches must be >= 0, got {max_matches}")
    return max_matches


class RankingEngine:
    """
    Score, select and adapt jobs for users.

    Holds only read-only configuration, vocabulary and strategy, so one
    instance can be shared across threads.
    """

    def __init__(
        self,
        config: Optional[MatchingConfig] = None,
        vocabulary: Optional[Vocabulary] = None,
        strategy: Optional[MatchingStrategy] = None
    ):
        self.config = config or MatchingConfig()
        self.vocabulary = vocabulary or default_vocabulary()
        self.strategy = strategy or RuleBasedStrategy(
            ScoringService(self.config.scoring, self.vocabulary)
        )
        self.selector = BalancedDistributionSelector(self.config.distribution, self.vocabulary)

    def default_max_matches(self, user: UserPreferences) -> int:
        policy = self.config.result_policy
        if SubscriptionTier.resolve(user.subscription_tier).is_premium:
            return policy.premium_max_matches
        return policy.free_max_matches

    def _sort_by_score(self, scored: List[ScoredMatch]) -> List[ScoredMatch]:
        # sorted() is stable: equal scores keep input order
        return sorted(scored, key=lambda match: match.unified_score.overall, reverse=True)

    def rank(
        self,
        jobs: List[Job],
        user: UserPreferences,
        max_matches: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> List[JobMatch]:
        """
        Rank a job pool for one user.

        Args:
            jobs: Candidate jobs
            user: User preferences
            max_matches: Output cap; defaults to the tier's configured cap
            now: Reference time for recency and matched_at (defaults to UTC now)

        Returns:
            At most max_matches JobMatch records

        Raises:
            InvalidMaxMatchesError: If max_matches is negative or not an integer
        """
        if max_matches is None:
            max_matches = self.default_max_matches(user)
        max_matches = validate_max_matches(max_matches)

        if not jobs or max_matches == 0:
            return []

        start_time = time.time()
        now = resolve_now(now)

        scored = self._sort_by_score(self.strategy.score(jobs, user, now=now))

        min_score = self.config.result_policy.min_score
        if min_score > 0:
            scored = [match for match in scored if match.unified_score.overall >= min_score]

        selected = self.selector.select(
            scored,
            target_cities=user.target_cities,
            career_paths=user.career_path,
            max_matches=max_matches,
            user_email=user.email,
        )
        matches = adapt_matches(selected, matched_at=now)

        elapsed_ms = (time.time() - start_time) * 1000
        avg_score = sum(m.match_score for m in matches) / len(matches) if matches else 0
        logger.info(
            f"Ranked {len(jobs)} jobs for {user.email}: {len(matches)} matches, "
            f"avg score {avg_score:.1f}, method={self.strategy.name}, {elapsed_ms:.1f}ms"
        )
        return matches

    def rank_many(
        self,
        requests: List[RankingRequest],
        now: Optional[datetime] = None,
        max_workers: int = 4
    ) -> List[List[JobMatch]]:
        """Rank several users in parallel; results follow request order."""
        if not requests:
            return []

        now = resolve_now(now)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [
                executor.submit(self.rank, request.jobs, request.user, request.max_matches, now)
                for request in requests
            ]
            return [future.result() for future in futures]


def rank(
    jobs: List[Job],
    user: UserPreferences,
    max_matches: Optional[int] = None,
    now: Optional[datetime] = None,
    config: Optional[MatchingConfig] = None
) -> List[JobMatch]:
    """Rank jobs for one user with the rule-based engine."""
    return RankingEngine(config=config).rank(jobs, user, max_matches=max_matches, now=now)
