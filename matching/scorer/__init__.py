#!/usr/bin/env python3
"""
Scoring Module - Rule-based component scoring.

Public API:
- ScoreComponents, UnifiedScore, ScoringMethod: score contract (models.py)

Modules:
- models.py: Data structures (ScoreComponents, UnifiedScore, RelevanceBreakdown)
- relevance.py: Skills, experience, career path and location sub-terms
- components.py: Quality, opportunity and timing components
- aggregator.py: Tier-weighted overall score
- explanation.py: Explanations and quality labels
- transparency.py: User-facing score display, comparison and suggestions
- service.py: ScoringService orchestrator

ScoringService is imported from matching.scorer.service directly; it
depends on matching.results, which itself depends on this package.
"""

from matching.scorer.models import (
    COMPONENT_NAMES, RelevanceBreakdown, ScoreComponents, ScoringMethod, UnifiedScore
)

__all__ = [
    'COMPONENT_NAMES', 'RelevanceBreakdown', 'ScoreComponents', 'ScoringMethod', 'UnifiedScore'
]
