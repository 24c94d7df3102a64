#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests can be run with standard Python tools:

    # Run all tests
    python -m pytest tests/ -v

    # Skip tests that touch a database (in-memory SQLite)
    python -m pytest tests/ -v -m "not db"

    # Using unittest
    python -m unittest discover tests -v

Shared builders for jobs and users live here so every suite constructs
inputs the same way.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from matching.models import Job, UserPreferences

# Outside the graduate hiring window so timing is not boosted
FIXED_NOW = datetime(2024, 3, 15, 12, 0, tzinfo=timezone.utc)
# Inside the graduate hiring window
SEASON_NOW = datetime(2024, 10, 15, 12, 0, tzinfo=timezone.utc)


def make_job(job_hash: str = "job-1", **overrides: Any) -> Job:
    """Build a Job with neutral defaults."""
    fields = {
        'title': "Analyst",
        'company': "Acme Ltd",
        'job_hash': job_hash,
        'city': "",
        'country': "",
        'location': "",
        'description': "",
        'categories': (),
        'experience_required': "",
        'work_environment': "",
        'posted_at': FIXED_NOW,
    }
    fields.update(overrides)
    return Job(**fields)


def make_user(**overrides: Any) -> UserPreferences:
    """Build a free-tier user with no preferences."""
    fields = {
        'email': "grad@example.com",
        'subscription_tier': "free",
        'target_cities': (),
        'career_path': (),
        'entry_level_preference': "",
        'career_keywords': "",
    }
    fields.update(overrides)
    return UserPreferences(**fields)


def days_ago(days: float, now: datetime = FIXED_NOW) -> datetime:
    return now - timedelta(days=days)
