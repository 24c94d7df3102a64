#!/usr/bin/env python3
"""
Matching Strategies - Interchangeable ways of scoring a job pool.

The rule-based strategy is always available. The AI strategy wraps an
external AIJobScorer and falls back to rule-based scoring whenever the AI
call fails, times out or returns nothing for a non-empty pool.
"""

from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime
from typing import List, Optional
import logging

from matching.config_loader import ScoringConfig
from matching.exceptions import AIScoringError
from matching.models import Job, UserPreferences
from matching.results import AIMatchResult, ScoredMatch
from matching.scorer.models import ScoringMethod
from matching.scorer.service import ScoringService
from matching.utils import clamp, round_half_up

logger = logging.getLogger(__name__)


class MatchingStrategy(ABC):
    """
    Abstract base class for scoring strategies.

    A strategy scores every job in the pool and returns one ScoredMatch per
    job, in input order. Selection happens afterwards.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the strategy identifier."""
        pass

    @abstractmethod
    def score(
        self,
        jobs: List[Job],
        user: UserPreferences,
        now: Optional[datetime] = None
    ) -> List[ScoredMatch]:
        pass


class RuleBasedStrategy(MatchingStrategy):
    """Deterministic scoring through the ScoringService."""

    def __init__(self, service: Optional[ScoringService] = None):
        self.service = service or ScoringService()

    @property
    def name(self) -> str:
        return ScoringMethod.RULE_BASED.value

    def score(
        self,
        jobs: List[Job],
        user: UserPreferences,
        now: Optional[datetime] = None
    ) -> List[ScoredMatch]:
        return list(self.service.score_jobs(jobs, user, now=now))


class AIJobScorer(ABC):
    """
    Interface for an external AI scoring backend.

    Implementations should raise AIScoringError (or TimeoutError) on failure.
    """

    @abstractmethod
    def score_jobs(self, user: UserPreferences, jobs: List[Job]) -> List[AIMatchResult]:
        pass


class AIScoringStrategy(MatchingStrategy):
    """AI scoring with rule-based fallback."""

    def __init__(
        self,
        scorer: AIJobScorer,
        fallback: Optional[MatchingStrategy] = None,
        config: Optional[ScoringConfig] = None
    ):
        self.scorer = scorer
        self.config = config or ScoringConfig()
        self.fallback = fallback or RuleBasedStrategy(ScoringService(self.config))

    @property
    def name(self) -> str:
        return ScoringMethod.AI.value

    def _normalize(self, result: AIMatchResult) -> AIMatchResult:
        # Scorers may build results directly; keep every value in [0, 100]
        score = result.unified_score
        normalized = replace(
            score,
            overall=round_half_up(clamp(score.overall)),
            confidence=round_half_up(clamp(score.confidence)),
            method=ScoringMethod.AI,
        )
        return replace(result, unified_score=normalized)

    def score(
        self,
        jobs: List[Job],
        user: UserPreferences,
        now: Optional[datetime] = None
    ) -> List[ScoredMatch]:
        if not jobs:
            return []

        try:
            results = self.scorer.score_jobs(user, jobs)
        except (AIScoringError, TimeoutError) as e:
            logger.warning(f"AI scoring failed for {user.email}, using rule-based fallback: {e}")
            return self.fallback.score(jobs, user, now=now)

        if not results:
            logger.warning(
                f"AI scoring returned no results for {user.email} "
                f"({len(jobs)} jobs), using rule-based fallback"
            )
            return self.fallback.score(jobs, user, now=now)

        return [self._normalize(result) for result in results]
