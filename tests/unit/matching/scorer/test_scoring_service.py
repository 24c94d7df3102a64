#!/usr/bin/env python3
"""
Unit tests for the ScoringService.

Covers the end-to-end scoring of a single job, score bounds, determinism
and premium-only opportunity scoring.
"""

import itertools
import unittest
from datetime import datetime, timezone

from matching.results import FallbackMatch
from matching.scorer.models import ScoringMethod
from matching.scorer.service import ScoringService, resolve_now
from tests import FIXED_NOW, days_ago, make_job, make_user


class TestScoringService(unittest.TestCase):

    def setUp(self):
        self.service = ScoringService()
        self.graduate = make_user(
            subscription_tier="free",
            target_cities=["Dublin"],
            career_path=["finance"],
            entry_level_preference="graduate",
        )

    def test_01_round_trip_scenario(self):
        """Free graduate user against a fresh Dublin finance job."""
        print("\n📊 UNIT Test 1: Round Trip Scenario")
        job = make_job(
            city="Dublin", categories=["finance"], experience_required="graduate", posted_at=FIXED_NOW
        )

        score = self.service.score_job(job, self.graduate, now=FIXED_NOW)
        breakdown = score.relevance_breakdown

        self.assertEqual(breakdown.skills, 0.0)
        self.assertEqual(breakdown.experience, 100.0)
        self.assertEqual(breakdown.career_path, 100.0)
        self.assertEqual(breakdown.location, 100.0)
        self.assertAlmostEqual(score.components.relevance, 60.0)
        self.assertEqual(score.components.quality, 50.0)
        self.assertEqual(score.components.opportunity, 40.0)
        self.assertEqual(score.components.timing, 100.0)
        # 0.5*60 + 0.3*50 + 0.1*40 + 0.1*100
        self.assertEqual(score.overall, 59)
        self.assertEqual(score.method, ScoringMethod.RULE_BASED)
        self.assertEqual(score.confidence, 75)

        print(f"  ✓ Overall: {score.overall}")

    def test_02_scores_are_bounded(self):
        """Every component and overall stays within [0, 100]."""
        print("\n📊 UNIT Test 2: Bounds")
        jobs = [
            make_job(
                job_hash=f"job-{i}",
                company=company,
                title=title,
                description=description,
                city=city,
                categories=categories,
                experience_required=experience,
                posted_at=posted_at,
            )
            for i, (company, title, description, city, categories, experience, posted_at) in enumerate(
                itertools.product(
                    ["Google", "Startup Consulting", ""],
                    ["Permanent Full-Time FTE Analyst", ""],
                    ["growth development progression learning training mentorship career advancement python", ""],
                    ["Dublin", "Tokyo"],
                    [["finance", "finance-investment", "accounting"], []],
                    ["director", ""],
                    [days_ago(400), None],
                )
            )
        ]
        users = [
            self.graduate,
            make_user(subscription_tier="premium", career_keywords="python, sql, javascript, finance"),
            make_user(subscription_tier="premium_pending", career_path=["tech", "data"]),
        ]

        for user in users:
            for match in self.service.score_jobs(jobs, user, now=FIXED_NOW):
                score = match.unified_score
                self.assertTrue(0 <= score.overall <= 100)
                for value in score.components.as_dict().values():
                    self.assertTrue(0 <= value <= 100)

        print(f"  ✓ Checked {len(jobs) * len(users)} scores")

    def test_03_deterministic_with_fixed_now(self):
        """Repeated runs produce identical scores."""
        print("\n📊 UNIT Test 3: Determinism")
        jobs = [
            make_job(job_hash="a", city="Dublin", categories=["finance"], posted_at=days_ago(3)),
            make_job(job_hash="b", company="Google", description="python", posted_at=days_ago(40)),
        ]
        user = make_user(career_keywords="python", target_cities=["Dublin"])

        first = [m.unified_score for m in self.service.score_jobs(jobs, user, now=FIXED_NOW)]
        second = [m.unified_score for m in self.service.score_jobs(jobs, user, now=FIXED_NOW)]

        self.assertEqual(first, second)

    def test_04_opportunity_is_premium_gated(self):
        """Growth language only helps premium users."""
        print("\n📊 UNIT Test 4: Premium Opportunity")
        rich = make_job(job_hash="rich", description="Mentorship, training and career progression")
        bare = make_job(job_hash="bare", description="")
        premium = make_user(subscription_tier="premium")
        free = make_user(subscription_tier="free")

        premium_rich = self.service.score_job(rich, premium, now=FIXED_NOW).components.opportunity
        premium_bare = self.service.score_job(bare, premium, now=FIXED_NOW).components.opportunity
        free_rich = self.service.score_job(rich, free, now=FIXED_NOW).components.opportunity
        free_bare = self.service.score_job(bare, free, now=FIXED_NOW).components.opportunity

        self.assertGreater(premium_rich, premium_bare)
        self.assertEqual(free_rich, 40.0)
        self.assertEqual(free_bare, 40.0)

    def test_05_score_jobs_preserves_order(self):
        jobs = [make_job(job_hash=str(i)) for i in range(5)]
        matches = self.service.score_jobs(jobs, self.graduate, now=FIXED_NOW)

        self.assertEqual([m.job.job_hash for m in matches], ["0", "1", "2", "3", "4"])
        self.assertTrue(all(isinstance(m, FallbackMatch) for m in matches))
        self.assertEqual(matches[0].match_reason, matches[0].unified_score.explanation)

    def test_06_resolve_now_treats_naive_as_utc(self):
        resolved = resolve_now(datetime(2024, 3, 15, 12, 0))
        self.assertEqual(resolved, FIXED_NOW)
        self.assertEqual(resolve_now(FIXED_NOW), FIXED_NOW)
        self.assertEqual(resolve_now().tzinfo, timezone.utc)


if __name__ == '__main__':
    unittest.main()
