#!/usr/bin/env python3
"""
Unit tests for the Balanced Distribution Selector.
"""

import unittest

from matching.config_loader import DistributionConfig
from matching.distribution import BalancedDistributionSelector
from matching.results import FallbackMatch
from matching.scorer.models import ScoreComponents, ScoringMethod, UnifiedScore
from tests import make_job


def scored(job_hash, overall, city="", categories=()):
    return FallbackMatch(
        job=make_job(job_hash=job_hash, city=city, categories=categories),
        unified_score=UnifiedScore(
            overall=overall,
            components=ScoreComponents(overall, 50, 40, 100),
            confidence=75,
            method=ScoringMethod.RULE_BASED,
        ),
        match_reason="",
    )


def hashes(matches):
    return [m.job.job_hash for m in matches]


class TestBalancedDistribution(unittest.TestCase):

    def setUp(self):
        self.selector = BalancedDistributionSelector()

    def test_01_no_preferences_returns_top_n(self):
        """Without targets the output is the plain top-N in score order."""
        print("\n📊 UNIT Test 1: No-Preference Passthrough")
        pool = [scored(f"j{i}", 90 - i) for i in range(8)]

        selected = self.selector.select(pool, [], [], max_matches=5)

        self.assertEqual(hashes(selected), ["j0", "j1", "j2", "j3", "j4"])

    def test_02_city_quota_is_respected(self):
        """The weaker city still gets its floor(N / cities) share."""
        print("\n📊 UNIT Test 2: City Quota")
        berlin = [scored(f"berlin-{i}", 95 - i, city="Berlin") for i in range(6)]
        paris = [scored(f"paris-{i}", 80 - i, city="Paris") for i in range(6)]

        selected = self.selector.select(berlin + paris, ["Berlin", "Paris"], [], max_matches=10)

        paris_count = sum(1 for m in selected if m.job.city == "Paris")
        self.assertEqual(len(selected), 10)
        self.assertGreaterEqual(paris_count, 5)
        self.assertNotIn("berlin-5", hashes(selected))

        print(f"  ✓ Paris jobs selected: {paris_count}")

    def test_03_back_fill_when_quota_cannot_be_met(self):
        """Pass 2 fills remaining slots in score order."""
        print("\n📊 UNIT Test 3: Back-Fill")
        pool = [scored(f"berlin-{i}", 90 - i, city="Berlin") for i in range(5)]

        selected = self.selector.select(pool, ["Berlin", "Paris"], [], max_matches=4)

        self.assertEqual(hashes(selected), ["berlin-0", "berlin-1", "berlin-2", "berlin-3"])

    def test_04_both_axes_must_have_room(self):
        """A job is admitted in pass 1 only when city and path both have room."""
        print("\n📊 UNIT Test 4: Both Axes")
        pool = [
            scored("paris-tech", 99, city="Paris", categories=["tech"]),
            scored("berlin-fin-1", 95, city="Berlin", categories=["finance"]),
            scored("berlin-fin-2", 94, city="Berlin", categories=["finance"]),
            scored("berlin-fin-3", 93, city="Berlin", categories=["finance"]),
            scored("berlin-tech", 80, city="Berlin", categories=["tech"]),
        ]

        selected = self.selector.select(pool, ["Berlin"], ["finance", "tech"], max_matches=4)

        # paris-tech misses the city target and only enters on back-fill
        self.assertEqual(
            hashes(selected), ["berlin-fin-1", "berlin-fin-2", "berlin-tech", "paris-tech"]
        )

    def test_05_career_path_aliases_count_toward_quota(self):
        pool = [
            scored("fin-long", 90, categories=["finance-investment"]),
            scored("fin-short", 85, categories=["finance"]),
            scored("data", 60, categories=["data-analytics"]),
        ]

        selected = self.selector.select(pool, [], ["finance", "data"], max_matches=2)

        self.assertEqual(hashes(selected), ["fin-long", "data"])

    def test_06_resort_is_opt_in(self):
        pool = [
            scored("berlin-1", 90, city="Berlin"),
            scored("berlin-2", 85, city="Berlin"),
            scored("london", 80, city="London"),
            scored("paris", 70, city="Paris"),
        ]
        cities = ["Berlin", "Paris"]

        resorted = BalancedDistributionSelector(DistributionConfig(resort_by_score=True))
        self.assertEqual(
            hashes(self.selector.select(pool, cities, [], max_matches=3)),
            ["berlin-1", "paris", "berlin-2"],
        )
        self.assertEqual(
            hashes(resorted.select(pool, cities, [], max_matches=3)),
            ["berlin-1", "berlin-2", "paris"],
        )

    def test_07_resort_keeps_ties_in_input_order(self):
        pool = [
            scored("a", 80, city="Berlin"),
            scored("b", 80, city="Berlin"),
            scored("c", 80, city="Paris"),
        ]

        resorted = BalancedDistributionSelector(DistributionConfig(resort_by_score=True))
        selected = resorted.select(pool, ["Berlin", "Paris"], [], max_matches=3)

        self.assertEqual(hashes(selected), ["a", "b", "c"])

    def test_08_empty_inputs(self):
        self.assertEqual(self.selector.select([], ["Berlin"], [], max_matches=5), [])
        self.assertEqual(self.selector.select([scored("a", 80)], ["Berlin"], [], max_matches=0), [])

    def test_09_repeated_job_hash_admitted_once(self):
        """A posting listed twice in the pool fills one slot."""
        pool = [
            scored("same", 90, city="Berlin"),
            scored("same", 90, city="Berlin"),
            scored("other", 70, city="Berlin"),
        ]

        selected = self.selector.select(pool, ["Berlin", "Paris"], [], max_matches=5)

        self.assertEqual(hashes(selected), ["same", "other"])

    def test_10_passthrough_skips_repeated_job_hash(self):
        pool = [scored("a", 90), scored("a", 90), scored("b", 80), scored("c", 70)]

        selected = self.selector.select(pool, [], [], max_matches=2)

        self.assertEqual(hashes(selected), ["a", "b"])


if __name__ == '__main__':
    unittest.main()
