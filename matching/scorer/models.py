#!/usr/bin/env python3
"""
Scoring Models - Data structures for scoring results.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Optional

COMPONENT_NAMES = ('relevance', 'quality', 'opportunity', 'timing')


class ScoringMethod(str, Enum):
    RULE_BASED = "rule-based"
    AI = "ai"


@dataclass(frozen=True)
class RelevanceBreakdown:
    """The four relevance sub-terms, each bounded to [0, 100]."""
    skills: float
    experience: float
    career_path: float
    location: float


@dataclass(frozen=True)
class ScoreComponents:
    """Four independent 0-100 sub-scores for one (job, user) pair."""
    relevance: float
    quality: float
    opportunity: float
    timing: float

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in COMPONENT_NAMES}


@dataclass(frozen=True)
class UnifiedScore:
    """
    Method-agnostic score contract shared by the rule-based and AI paths.

    overall is always an integer in [0, 100].
    """
    overall: int
    components: ScoreComponents
    confidence: int
    method: ScoringMethod
    explanation: Optional[str] = None
    relevance_breakdown: Optional[RelevanceBreakdown] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'overall': self.overall,
            'components': self.components.as_dict(),
            'confidence': self.confidence,
            'method': self.method.value,
            'explanation': self.explanation,
        }
        if self.relevance_breakdown is not None:
            data['relevance_breakdown'] = asdict(self.relevance_breakdown)
        return data
