#!/usr/bin/env python3
"""
Component Calculations - Quality, opportunity and timing components.

Relevance lives in relevance.py. All functions here are pure; the
reference time for timing is passed in explicitly.
"""

from datetime import datetime
import logging

from matching.config_loader import ScoringConfig
from matching.models import Job, SubscriptionTier
from matching.utils import clamp
from matching.vocabulary import Vocabulary

logger = logging.getLogger(__name__)

BASE_QUALITY = 50.0
BASE_OPPORTUNITY = 40.0
BASE_TIMING = 50.0
RECENCY_WEIGHT = 0.8

# (max age in days, recency score), checked in order
RECENCY_TIERS = (
    (1, 100.0),
    (2, 95.0),
    (3, 85.0),
    (7, 70.0),
    (14, 50.0),
    (21, 35.0),
    (30, 20.0),
    (60, 10.0),
)
STALE_RECENCY_SCORE = 5.0


def calculate_quality(job: Job, vocabulary: Vocabulary) -> float:
    """
    Employer reputation and role stability.

    Base 50; +25 recognised employer, else +15 consulting/investment firm;
    +10 when the title signals permanent or full-time employment.
    """
    quality = BASE_QUALITY

    company = job.company.lower()
    if company:
        if any(name in company for name in vocabulary.top_employers):
            quality += 25
        elif any(hint in company for hint in vocabulary.professional_services_hints):
            quality += 15

    title = job.title.lower()
    if any(hint in title for hint in vocabulary.stable_role_hints):
        quality += 10

    return clamp(quality)


def calculate_opportunity(job: Job, tier: SubscriptionTier, vocabulary: Vocabulary) -> float:
    """
    Career advancement potential, assessed for premium tiers only.

    Free users stay at the 40 baseline. Premium: +10 per growth keyword in
    the description (max 30), +20 when the company signals a growth stage.
    """
    opportunity = BASE_OPPORTUNITY
    if not tier.is_premium:
        return opportunity

    description = job.description.lower()
    if description:
        growth_matches = [k for k in vocabulary.growth_keywords if k in description]
        opportunity += min(len(growth_matches) * 10, 30)

    company = job.company.lower()
    if any(hint in company for hint in vocabulary.growth_stage_hints):
        opportunity += 20

    return clamp(opportunity)


def calculate_recency(job: Job, now: datetime) -> float:
    """
    Step function of days since posting.

    A missing posting date counts as posted now; future dates count as fresh.
    """
    posted_at = job.posted_at or now
    days_since_posted = (now - posted_at).total_seconds() / 86400.0

    for max_days, score in RECENCY_TIERS:
        if days_since_posted <= max_days:
            return score
    return STALE_RECENCY_SCORE


def calculate_timing(job: Job, now: datetime, config: ScoringConfig) -> float:
    """Timing = 50 + 0.8 * recency, +bonus inside the graduate hiring window."""
    timing = BASE_TIMING + calculate_recency(job, now) * RECENCY_WEIGHT

    if now.month in config.graduate_season_months:
        timing += config.graduate_season_bonus

    return clamp(timing)
