#!/usr/bin/env python3
"""
Unit tests for the unified score aggregator and score explanations.
"""

import unittest

from pydantic import ValidationError

from matching.config_loader import ScoringConfig, TierWeights
from matching.models import SubscriptionTier
from matching.scorer.aggregator import build_unified_score, calculate_overall, weights_for_tier
from matching.scorer.explanation import generate_score_explanation, get_score_quality
from matching.scorer.models import ScoreComponents, ScoringMethod


class TestAggregator(unittest.TestCase):
    """Tier-weighted overall score."""

    def setUp(self):
        self.config = ScoringConfig()
        self.components = ScoreComponents(relevance=60, quality=50, opportunity=40, timing=100)

    def test_free_weights(self):
        weights = weights_for_tier(SubscriptionTier.FREE, self.config)
        # 0.5*60 + 0.3*50 + 0.1*40 + 0.1*100
        self.assertEqual(calculate_overall(self.components, weights), 59)

    def test_premium_weights_round_half_up(self):
        weights = weights_for_tier(SubscriptionTier.PREMIUM, self.config)
        # 21 + 12.5 + 10 + 15 = 58.5
        self.assertEqual(calculate_overall(self.components, weights), 59)

    def test_premium_pending_uses_premium_weights(self):
        self.assertEqual(
            weights_for_tier(SubscriptionTier.PREMIUM_PENDING, self.config),
            self.config.premium_weights,
        )

    def test_overall_is_bounded(self):
        weights = self.config.free_weights
        self.assertEqual(calculate_overall(ScoreComponents(100, 100, 100, 100), weights), 100)
        self.assertEqual(calculate_overall(ScoreComponents(0, 0, 0, 0), weights), 0)

    def test_build_unified_score(self):
        score = build_unified_score(
            self.components, SubscriptionTier.FREE, self.config, job_title="Analyst"
        )
        self.assertEqual(score.overall, 59)
        self.assertEqual(score.confidence, 75)
        self.assertEqual(score.method, ScoringMethod.RULE_BASED)
        self.assertEqual(
            score.explanation,
            "Fair match for Analyst: Profile Match is the strongest factor (60/100)",
        )

    def test_weights_must_sum_to_one(self):
        with self.assertRaises(ValidationError):
            TierWeights(relevance=0.5, quality=0.5, opportunity=0.5, timing=0.0)

    def test_rule_based_confidence_below_ai(self):
        with self.assertRaises(ValidationError):
            ScoringConfig(rule_based_confidence=90, ai_default_confidence=85)


class TestExplanation(unittest.TestCase):

    def test_score_quality_thresholds(self):
        self.assertEqual(get_score_quality(85), "excellent")
        self.assertEqual(get_score_quality(84), "good")
        self.assertEqual(get_score_quality(70), "good")
        self.assertEqual(get_score_quality(69), "fair")
        self.assertEqual(get_score_quality(55), "fair")
        self.assertEqual(get_score_quality(54), "poor")

    def test_second_factor_named_when_close(self):
        components = ScoreComponents(relevance=80, quality=100, opportunity=50, timing=50)
        weights = ScoringConfig().free_weights
        # contributions 40 and 30: runner-up is exactly 75% of the top
        explanation = generate_score_explanation(80, components, weights, "Data Analyst")
        self.assertEqual(
            explanation,
            "Good match for Data Analyst: Profile Match is the strongest factor (80/100), "
            "followed by Company Quality (100/100)",
        )

    def test_missing_title(self):
        components = ScoreComponents(relevance=20, quality=20, opportunity=20, timing=90)
        weights = ScoringConfig().premium_weights
        explanation = generate_score_explanation(30, components, weights)
        self.assertTrue(explanation.startswith("Poor match for Unknown Position: Market Timing"))


if __name__ == '__main__':
    unittest.main()
