#!/usr/bin/env python3
"""
Scoring Service - Rule-based scoring of a job pool for one user.

For each job:
- Relevance: skills, experience, career path, location (relevance.py)
- Quality, Opportunity, Timing (components.py)
- Unified score: tier-weighted overall + explanation (aggregator.py)

The service holds only read-only configuration and vocabulary, so one
instance can score many users concurrently.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple
import logging

from matching.config_loader import ScoringConfig
from matching.models import Job, SubscriptionTier, UserPreferences, parse_posted_at
from matching.results import FallbackMatch, DEFAULT_RULE_BASED_REASON
from matching.scorer import components as component_calculations
from matching.scorer.aggregator import build_unified_score
from matching.scorer.models import RelevanceBreakdown, ScoreComponents, UnifiedScore
from matching.scorer.relevance import calculate_relevance
from matching.vocabulary import Vocabulary, default_vocabulary

logger = logging.getLogger(__name__)


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Reference time for recency; naive values are taken as UTC."""
    if now is None:
        return datetime.now(timezone.utc)
    return parse_posted_at(now)


class ScoringService:
    """
    Service for rule-based component scoring.

    Produces one UnifiedScore per (job, user) pair with method "rule-based".
    """

    def __init__(
        self,
        config: Optional[ScoringConfig] = None,
        vocabulary: Optional[Vocabulary] = None
    ):
        self.config = config or ScoringConfig()
        self.vocabulary = vocabulary or default_vocabulary()

    def calculate_components(
        self,
        job: Job,
        user: UserPreferences,
        tier: SubscriptionTier,
        now: datetime
    ) -> Tuple[ScoreComponents, RelevanceBreakdown]:
        """Compute the four components for one job.

        Returns: (components, relevance_breakdown)
        """
        relevance, breakdown = calculate_relevance(
            job, user, self.vocabulary, self.config.relevance_weights
        )
        components = ScoreComponents(
            relevance=relevance,
            quality=component_calculations.calculate_quality(job, self.vocabulary),
            opportunity=component_calculations.calculate_opportunity(job, tier, self.vocabulary),
            timing=component_calculations.calculate_timing(job, now, self.config),
        )
        return components, breakdown

    def score_job(
        self,
        job: Job,
        user: UserPreferences,
        now: Optional[datetime] = None,
        tier: Optional[SubscriptionTier] = None
    ) -> UnifiedScore:
        """Score a single job.

        Args:
            job: Job posting to score
            user: User preferences
            now: Reference time for recency (defaults to the current UTC time)
            tier: Pre-resolved tier; resolved from the user when omitted

        Returns:
            UnifiedScore with method "rule-based"
        """
        now = resolve_now(now)
        if tier is None:
            tier = SubscriptionTier.resolve(user.subscription_tier)

        components, breakdown = self.calculate_components(job, user, tier, now)
        unified_score = build_unified_score(
            components, tier, self.config,
            job_title=job.title,
            relevance_breakdown=breakdown,
        )

        logger.debug(
            f"Job {job.job_hash}: overall={unified_score.overall}, "
            f"relevance={components.relevance:.1f}, quality={components.quality:.1f}, "
            f"opportunity={components.opportunity:.1f}, timing={components.timing:.1f}"
        )
        return unified_score

    def score_jobs(
        self,
        jobs: List[Job],
        user: UserPreferences,
        now: Optional[datetime] = None
    ) -> List[FallbackMatch]:
        """Score every job in the pool, preserving input order.

        The tier and reference time are resolved once for the whole run.
        """
        now = resolve_now(now)
        tier = SubscriptionTier.resolve(user.subscription_tier)

        matches = []
        for job in jobs:
            unified_score = self.score_job(job, user, now=now, tier=tier)
            matches.append(FallbackMatch(
                job=job,
                unified_score=unified_score,
                match_reason=unified_score.explanation or DEFAULT_RULE_BASED_REASON,
            ))
        return matches
