#!/usr/bin/env python3
"""
Unified Score Aggregator - Combine components with tier-specific weights.

overall = round(clamp(sum(component * weight), 0, 100))

Weights:
- premium / premium_pending: relevance 0.35, quality 0.25, opportunity 0.25, timing 0.15
- free: relevance 0.50, quality 0.30, opportunity 0.10, timing 0.10
"""

from typing import Optional
import logging

from matching.config_loader import ScoringConfig, TierWeights
from matching.models import SubscriptionTier
from matching.scorer.explanation import generate_score_explanation
from matching.scorer.models import RelevanceBreakdown, ScoreComponents, ScoringMethod, UnifiedScore
from matching.utils import clamp, round_half_up

logger = logging.getLogger(__name__)


def weights_for_tier(tier: SubscriptionTier, config: ScoringConfig) -> TierWeights:
    return config.premium_weights if tier.is_premium else config.free_weights


def calculate_overall(components: ScoreComponents, weights: TierWeights) -> int:
    weighted_score = (
        components.relevance * weights.relevance +
        components.quality * weights.quality +
        components.opportunity * weights.opportunity +
        components.timing * weights.timing
    )
    return round_half_up(clamp(weighted_score))


def build_unified_score(
    components: ScoreComponents,
    tier: SubscriptionTier,
    config: ScoringConfig,
    job_title: Optional[str] = None,
    relevance_breakdown: Optional[RelevanceBreakdown] = None
) -> UnifiedScore:
    """
    Build the rule-based UnifiedScore for one job.

    Confidence is fixed at the configured rule-based value (75 by default),
    below what the AI path reports.
    """
    weights = weights_for_tier(tier, config)
    overall = calculate_overall(components, weights)

    return UnifiedScore(
        overall=overall,
        components=components,
        confidence=config.rule_based_confidence,
        method=ScoringMethod.RULE_BASED,
        explanation=generate_score_explanation(overall, components, weights, job_title),
        relevance_breakdown=relevance_breakdown,
    )
