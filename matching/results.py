#!/usr/bin/env python3
"""
Result Adapter - Normalize rule-based and AI scoring output into JobMatch.

Both scoring paths produce a ScoredMatch (FallbackMatch for the rule-based
engine, AIMatchResult for the AI path). Downstream persistence and email
composition only ever see JobMatch, whose shape is identical for both
paths apart from method and confidence_score.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple
import logging

from matching.config_loader import ScoringConfig
from matching.models import Job
from matching.scorer.explanation import generate_score_explanation, get_score_quality
from matching.scorer.models import ScoreComponents, ScoringMethod, UnifiedScore
from matching.utils import clamp, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_RULE_BASED_REASON = "Rule-based algorithmic match"
DEFAULT_AI_REASON = "AI analyzed match"

CONFIDENT_MIN_CONFIDENCE = 70
CONFIDENT_MIN_SCORE = 80
PROMISING_MIN_SCORE = 60


@dataclass(frozen=True)
class ScoredMatch:
    """One job with its UnifiedScore, before selection and adaptation."""
    job: Job
    unified_score: UnifiedScore
    match_reason: str


@dataclass(frozen=True)
class FallbackMatch(ScoredMatch):
    """Output of the deterministic rule-based engine."""


@dataclass(frozen=True)
class AIMatchResult(ScoredMatch):
    """Output of an AI scorer."""

    @classmethod
    def from_scores(
        cls,
        job: Job,
        match_score: float,
        components: Dict[str, float],
        config: ScoringConfig,
        confidence: Optional[float] = None,
        match_reason: Optional[str] = None
    ) -> "AIMatchResult":
        """
        Build an AI result from raw model output.

        All values are clamped to [0, 100]; missing components default to 50
        and a missing confidence to the configured AI default.
        """
        score_components = ScoreComponents(
            relevance=clamp(float(components.get('relevance', 50))),
            quality=clamp(float(components.get('quality', 50))),
            opportunity=clamp(float(components.get('opportunity', 50))),
            timing=clamp(float(components.get('timing', 50))),
        )
        overall = round_half_up(clamp(float(match_score or 0)))
        confidence_value = config.ai_default_confidence if confidence is None else confidence

        unified_score = UnifiedScore(
            overall=overall,
            components=score_components,
            confidence=round_half_up(clamp(float(confidence_value))),
            method=ScoringMethod.AI,
            explanation=generate_score_explanation(
                overall, score_components, config.premium_weights, job.title
            ),
        )
        return cls(
            job=job,
            unified_score=unified_score,
            match_reason=match_reason or DEFAULT_AI_REASON,
        )


@dataclass(frozen=True)
class LegacyScoreBreakdown:
    """Breakdown shape older consumers (email templates, match rows) read."""
    overall: int
    skills: float
    experience: float
    career_path: float
    location: float
    company: float
    growth: float
    timing: float

    @classmethod
    def from_unified_score(cls, score: UnifiedScore) -> "LegacyScoreBreakdown":
        components = score.components
        breakdown = score.relevance_breakdown
        # The AI path has no relevance sub-terms; repeat relevance so the shape is stable
        if breakdown is None:
            skills = experience = career_path = location = components.relevance
        else:
            skills = breakdown.skills
            experience = breakdown.experience
            career_path = breakdown.career_path
            location = breakdown.location
        return cls(
            overall=score.overall,
            skills=skills,
            experience=experience,
            career_path=career_path,
            location=location,
            company=components.quality,
            growth=components.opportunity,
            timing=components.timing,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'overall': self.overall,
            'skills': self.skills,
            'experience': self.experience,
            'careerPath': self.career_path,
            'location': self.location,
            'company': self.company,
            'growth': self.growth,
            'timing': self.timing,
        }


@dataclass(frozen=True)
class JobMatch:
    """Final, immutable record of one ranked job for one user."""
    job: Job
    match_score: int
    match_reason: str
    confidence_score: int
    unified_score: UnifiedScore
    score_breakdown: LegacyScoreBreakdown
    method: ScoringMethod
    matched_at: datetime

    @property
    def match_quality(self) -> str:
        return get_score_quality(self.match_score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'job_hash': self.job.job_hash,
            'job_title': self.job.title,
            'company': self.job.company,
            'match_score': self.match_score,
            'match_reason': self.match_reason,
            'match_quality': self.match_quality,
            'confidence_score': self.confidence_score,
            'unified_score': self.unified_score.to_dict(),
            'score_breakdown': self.score_breakdown.to_dict(),
            'method': self.method.value,
            'matched_at': self.matched_at.isoformat(),
        }


def to_job_match(scored: ScoredMatch, matched_at: datetime) -> JobMatch:
    """Adapt one scored match; match_score is unified_score.overall, never re-rounded."""
    score = scored.unified_score
    if scored.match_reason:
        reason = scored.match_reason
    elif score.method == ScoringMethod.AI:
        reason = DEFAULT_AI_REASON
    else:
        reason = score.explanation or DEFAULT_RULE_BASED_REASON

    return JobMatch(
        job=scored.job,
        match_score=score.overall,
        match_reason=reason,
        confidence_score=score.confidence,
        unified_score=score,
        score_breakdown=LegacyScoreBreakdown.from_unified_score(score),
        method=score.method,
        matched_at=matched_at,
    )


def adapt_matches(scored_matches: List[ScoredMatch], matched_at: datetime) -> List[JobMatch]:
    return [to_job_match(scored, matched_at) for scored in scored_matches]


def categorize_matches(matches: List[JobMatch]) -> Tuple[List[JobMatch], List[JobMatch]]:
    """
    Split matches into confident and promising buckets.

    Confident: confidence >= 70 and score >= 80. Promising: remaining
    matches scoring >= 60. Anything lower is in neither bucket.
    """
    confident = []
    promising = []
    for match in matches:
        if match.confidence_score >= CONFIDENT_MIN_CONFIDENCE and match.match_score >= CONFIDENT_MIN_SCORE:
            confident.append(match)
        elif match.match_score >= PROMISING_MIN_SCORE:
            promising.append(match)
    return confident, promising
