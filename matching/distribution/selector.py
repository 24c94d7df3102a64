#!/usr/bin/env python3
"""
Balanced Distribution Selector - Cap the shortlist while representing every
requested city and career path.

Pure top-N selection starves a secondary city or career path whenever the
primary one dominates the score distribution. Selection therefore runs in
two passes over the score-sorted list:

1. Fair fill: admit a job only when it has room under its city quota
   (floor(N / |cities|)) and under its career path quota
   (floor(N / |paths|)). An axis without targets imposes no quota.
2. Back-fill: admit the remaining jobs in score order until N is reached.

A job_hash is admitted at most once; repeated postings are skipped.
"""

from typing import Dict, List, Optional, Sequence, Tuple
import logging

from matching.config_loader import DistributionConfig
from matching.results import ScoredMatch
from matching.scorer.relevance import category_matches_career_path
from matching.vocabulary import Vocabulary, default_vocabulary

logger = logging.getLogger(__name__)


class BalancedDistributionSelector:
    """Select a capped, fairly distributed subset of scored jobs."""

    def __init__(
        self,
        config: Optional[DistributionConfig] = None,
        vocabulary: Optional[Vocabulary] = None
    ):
        self.config = config or DistributionConfig()
        self.vocabulary = vocabulary or default_vocabulary()

    def _dedupe(self, scored_matches: List[ScoredMatch]) -> List[ScoredMatch]:
        """Keep the first (highest-scoring) entry per job_hash."""
        seen = set()
        unique = []
        for match in scored_matches:
            if match.job.job_hash in seen:
                continue
            seen.add(match.job.job_hash)
            unique.append(match)
        return unique

    def _city_needing_job(
        self,
        match: ScoredMatch,
        target_cities: Sequence[str],
        city_counts: Dict[str, int],
        city_quota: int
    ) -> Optional[str]:
        job_city = (match.job.city or match.job.location).lower()
        for city in target_cities:
            if city in job_city and city_counts[city] < city_quota:
                return city
        return None

    def _career_path_needing_job(
        self,
        match: ScoredMatch,
        career_paths: Sequence[str],
        path_counts: Dict[str, int],
        path_quota: int
    ) -> Optional[str]:
        for path in career_paths:
            if path_counts[path] >= path_quota:
                continue
            if any(
                category_matches_career_path(category, path, self.vocabulary)
                for category in match.job.categories
            ):
                return path
        return None

    def select(
        self,
        scored_matches: List[ScoredMatch],
        target_cities: Sequence[str],
        career_paths: Sequence[str],
        max_matches: int,
        user_email: str = ""
    ) -> List[ScoredMatch]:
        """
        Select up to max_matches jobs.

        Args:
            scored_matches: All scored jobs, sorted descending by overall score
            target_cities: User's target cities (may be empty)
            career_paths: User's career paths (may be empty)
            max_matches: Output cap N
            user_email: Used for logging only

        Returns:
            Selected matches; score-descending when resort_by_score is set,
            otherwise fair-fill admissions followed by back-fill admissions.
        """
        if max_matches <= 0 or not scored_matches:
            return []

        cities = list(dict.fromkeys(c.lower() for c in target_cities if c))
        paths = list(dict.fromkeys(p for p in career_paths if p))

        if not cities and not paths:
            return self._dedupe(scored_matches)[:max_matches]

        city_quota = max_matches // len(cities) if cities else max_matches
        path_quota = max_matches // len(paths) if paths else max_matches
        city_counts = {city: 0 for city in cities}
        path_counts = {path: 0 for path in paths}

        admitted: List[Tuple[int, ScoredMatch]] = []
        admitted_hashes = set()

        # Pass 1: fair fill
        for position, match in enumerate(scored_matches):
            if len(admitted) >= max_matches:
                break
            if match.job.job_hash in admitted_hashes:
                continue

            city = self._city_needing_job(match, cities, city_counts, city_quota) if cities else None
            path = self._career_path_needing_job(match, paths, path_counts, path_quota) if paths else None

            if (not cities or city) and (not paths or path):
                admitted.append((position, match))
                admitted_hashes.add(match.job.job_hash)
                if city:
                    city_counts[city] += 1
                if path:
                    path_counts[path] += 1

        fair_fill_count = len(admitted)

        # Pass 2: back-fill with highest-scoring leftovers
        for position, match in enumerate(scored_matches):
            if len(admitted) >= max_matches:
                break
            if match.job.job_hash in admitted_hashes:
                continue
            admitted.append((position, match))
            admitted_hashes.add(match.job.job_hash)

        logger.info(
            f"Applied balanced distribution for {user_email or 'user'}: "
            f"city_counts={city_counts}, career_path_counts={path_counts}, "
            f"fair_fill={fair_fill_count}, back_fill={len(admitted) - fair_fill_count}, "
            f"total={len(admitted)}"
        )

        if self.config.resort_by_score:
            # Stable: ties keep their original score-order position
            admitted.sort(key=lambda item: (-item[1].unified_score.overall, item[0]))

        return [match for _, match in admitted]
