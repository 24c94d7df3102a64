#!/usr/bin/env python3
"""
Matching Models - Input data structures for the ranking engine.

Job postings come from the ingestion pipeline and user preferences from
the profile store; both are read-only to the engine.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
import logging

from dateutil import parser as date_parser

from matching.utils import JobFingerprinter, to_string_list
from matching.vocabulary import Vocabulary, default_vocabulary

logger = logging.getLogger(__name__)


class SubscriptionTier(str, Enum):
    FREE = "free"
    PREMIUM = "premium"
    PREMIUM_PENDING = "premium_pending"

    @classmethod
    def resolve(cls, value: Any) -> "SubscriptionTier":
        """Absent or unrecognised tiers are treated as free."""
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        for tier in cls:
            if tier.value == text:
                return tier
        return cls.FREE

    @property
    def is_premium(self) -> bool:
        return self in (SubscriptionTier.PREMIUM, SubscriptionTier.PREMIUM_PENDING)


def parse_posted_at(value: Any) -> Optional[datetime]:
    """
    Parse a posting timestamp into an aware UTC datetime.

    Accepts datetimes and ISO-8601 strings; naive values are assumed UTC.
    Unparseable values are treated as absent.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = date_parser.isoparse(str(value))
        except (ValueError, TypeError, OverflowError):
            logger.debug(f"Ignoring unparseable posted_at value: {value!r}")
            return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _split_categories(value: Any) -> List[str]:
    if isinstance(value, str):
        value = value.replace("|", ",")
    return [c.lower() for c in to_string_list(value)]


_JOB_TEXT_FIELDS = (
    "title", "company", "job_hash", "city", "country", "location",
    "description", "experience_required", "work_environment",
)


@dataclass(frozen=True)
class Job:
    """One scraped job posting."""
    title: str
    company: str
    job_hash: str
    city: str = ""
    country: str = ""
    location: str = ""
    description: str = ""
    categories: Tuple[str, ...] = ()
    experience_required: str = ""
    work_environment: str = ""
    posted_at: Optional[datetime] = None
    job_url: Optional[str] = None

    def __post_init__(self):
        # Direct construction may pass None for any text field
        for name in _JOB_TEXT_FIELDS:
            object.__setattr__(self, name, str(getattr(self, name) or ""))
        object.__setattr__(self, "categories", tuple(_split_categories(self.categories)))
        object.__setattr__(self, "posted_at", parse_posted_at(self.posted_at))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Job":
        """
        Build a Job from an ingestion record.

        Categories may be a list or a "|"/comma separated string. A missing
        job_hash falls back to a fingerprint of company, title and location.
        """
        title = str(data.get('title') or "").strip()
        company = str(data.get('company') or "").strip()
        location = str(data.get('location') or "").strip()
        job_hash = data.get('job_hash') or JobFingerprinter.calculate(
            company, title, location or str(data.get('city') or "")
        )
        return cls(
            title=title,
            company=company,
            job_hash=str(job_hash),
            city=str(data.get('city') or "").strip(),
            country=str(data.get('country') or "").strip(),
            location=location,
            description=str(data.get('description') or ""),
            categories=data.get('categories') or (),
            experience_required=str(data.get('experience_required') or "").strip(),
            work_environment=str(data.get('work_environment') or "").strip().lower(),
            posted_at=data.get('posted_at'),
            job_url=data.get('job_url'),
        )

    @property
    def text(self) -> str:
        """Lowercased title + description used for keyword matching."""
        return f"{self.title} {self.description}".lower()


@dataclass(frozen=True)
class UserPreferences:
    """One user's declared intent, normalized once at the boundary."""
    email: str
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    target_cities: Tuple[str, ...] = ()
    career_path: Tuple[str, ...] = ()
    entry_level_preference: str = ""
    career_keywords: str = ""

    def __post_init__(self):
        # Direct construction may pass a single string or a list
        object.__setattr__(self, "subscription_tier", SubscriptionTier.resolve(self.subscription_tier))
        object.__setattr__(self, "target_cities", tuple(to_string_list(self.target_cities)))
        object.__setattr__(self, "career_path", tuple(c.lower() for c in to_string_list(self.career_path)))

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        vocabulary: Optional[Vocabulary] = None
    ) -> "UserPreferences":
        """
        Build preferences from a profile-store record.

        target_cities and career_path may each be a single value or a list.
        Career paths given as display labels or database categories are
        resolved to the short controlled-vocabulary slug.
        """
        vocabulary = vocabulary or default_vocabulary()

        career_paths = []
        for value in to_string_list(data.get('career_path')):
            slug = vocabulary.resolve_career_path(value)
            if slug not in career_paths:
                career_paths.append(slug)

        keywords = data.get('career_keywords')
        if isinstance(keywords, (list, tuple)):
            keywords = ", ".join(to_string_list(keywords))

        return cls(
            email=str(data.get('email') or ""),
            subscription_tier=SubscriptionTier.resolve(data.get('subscription_tier')),
            target_cities=tuple(to_string_list(data.get('target_cities'))),
            career_path=tuple(career_paths),
            entry_level_preference=str(data.get('entry_level_preference') or "").strip(),
            career_keywords=str(keywords or ""),
        )


@dataclass
class RankingRequest:
    """Bundle of one ranking run's inputs, used by callers fanning out across users."""
    jobs: List[Job]
    user: UserPreferences
    max_matches: Optional[int] = None
