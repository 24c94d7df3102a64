#!/usr/bin/env python3
"""
Scoring Transparency - Present a UnifiedScore to users.

Builds the per-component display used by match emails and the matches
page, compares two scores and suggests how to find better matches.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from matching.config_loader import ScoringConfig, TierWeights
from matching.scorer.explanation import (
    COMPONENT_DESCRIPTIONS, COMPONENT_LABELS, get_score_quality
)
from matching.scorer.models import COMPONENT_NAMES, ScoringMethod, UnifiedScore

SCORE_INTERPRETATION = {
    'excellent': "Outstanding fit with your profile and goals",
    'good': "Strong fit worth prioritising",
    'fair': "Reasonable fit with some gaps",
    'poor': "Limited fit with your current preferences",
}

METHOD_DISPLAY_NAMES = {
    ScoringMethod.AI: "AI Analysis",
    ScoringMethod.RULE_BASED: "Smart Algorithm",
}

EQUAL_SCORE_MARGIN = 5
COMPONENT_DIFFERENCE_MARGIN = 15


@dataclass
class ComponentDisplay:
    score: float
    label: str
    description: str
    weight: int  # percent
    impact: str  # high | medium | low


@dataclass
class ScoreDisplay:
    overall: int
    quality: str
    quality_description: str
    method: str
    confidence: int
    components: Dict[str, ComponentDisplay] = field(default_factory=dict)
    insights: List[str] = field(default_factory=list)


def _impact(score: float) -> str:
    if score >= 80:
        return "high"
    if score >= 60:
        return "medium"
    return "low"


def _display_weights(unified_score: UnifiedScore, config: ScoringConfig, premium: bool) -> TierWeights:
    # AI scores are always presented with the premium weighting
    if unified_score.method == ScoringMethod.AI or premium:
        return config.premium_weights
    return config.free_weights


def _generate_insights(unified_score: UnifiedScore) -> List[str]:
    insights = []
    overall = unified_score.overall
    components = unified_score.components

    if overall >= 85:
        insights.append("Excellent match! This role aligns perfectly with your profile.")
    elif overall >= 70:
        insights.append("Strong match with good potential for your career.")
    elif overall >= 55:
        insights.append("Decent match worth considering if it interests you.")
    else:
        insights.append("Limited fit - explore other opportunities that better match your goals.")

    if components.relevance >= 80:
        insights.append("Your skills and experience are an excellent fit for this role.")
    elif components.relevance < 60:
        insights.append("Consider roles that better match your current skill set and experience level.")

    if components.quality >= 80:
        insights.append("High-quality opportunity with a reputable company.")
    if components.opportunity >= 80:
        insights.append("Strong career growth potential with learning and advancement opportunities.")
    if components.timing >= 80:
        insights.append("Perfect timing - this role was posted recently and is in high demand.")

    if unified_score.method == ScoringMethod.AI:
        insights.append("AI-powered match using semantic analysis of your profile.")
    else:
        insights.append("Algorithmic match using proven matching rules and market data.")

    return insights


def create_score_display(
    unified_score: UnifiedScore,
    config: Optional[ScoringConfig] = None,
    premium: bool = False
) -> ScoreDisplay:
    """Convert a UnifiedScore to the user-facing display structure."""
    config = config or ScoringConfig()
    weights = _display_weights(unified_score, config, premium).as_dict()
    quality = get_score_quality(unified_score.overall)

    components = {}
    for name in COMPONENT_NAMES:
        score = getattr(unified_score.components, name)
        components[name] = ComponentDisplay(
            score=score,
            label=COMPONENT_LABELS[name],
            description=COMPONENT_DESCRIPTIONS[name],
            weight=int(round(weights[name] * 100)),
            impact=_impact(score),
        )

    return ScoreDisplay(
        overall=unified_score.overall,
        quality=quality,
        quality_description=SCORE_INTERPRETATION[quality],
        method=METHOD_DISPLAY_NAMES.get(unified_score.method, "Analysis"),
        confidence=unified_score.confidence,
        components=components,
        insights=_generate_insights(unified_score),
    )


def compare_scores(first: UnifiedScore, second: UnifiedScore) -> Dict[str, object]:
    """
    Compare two scores.

    Returns {'better': 'first' | 'second' | 'equal', 'differences': [...]}.
    Overall gaps under 5 points count as equal.
    """
    diff = first.overall - second.overall
    if abs(diff) < EQUAL_SCORE_MARGIN:
        return {
            'better': 'equal',
            'differences': ["Scores are very similar - both are good options to consider."],
        }

    differences = []
    for name in COMPONENT_NAMES:
        component_diff = getattr(first.components, name) - getattr(second.components, name)
        if abs(component_diff) >= COMPONENT_DIFFERENCE_MARGIN:
            if component_diff > 0:
                differences.append(f"Better {name} match ({component_diff:.0f} points higher)")
            else:
                differences.append(f"Lower {name} score ({abs(component_diff):.0f} points lower)")

    if not differences:
        differences.append("Similar component scores, but overall score difference is significant.")

    return {
        'better': 'first' if diff > 0 else 'second',
        'differences': differences,
    }


def get_improvement_suggestions(unified_score: UnifiedScore) -> List[str]:
    components = unified_score.components
    suggestions = []

    if components.relevance < 70:
        suggestions.append("Focus on roles that better match your current skills and experience level")
        suggestions.append("Consider updating your profile with recent projects or achievements")
    if components.quality < 60:
        suggestions.append("Look for opportunities with established companies or growing startups")
    if components.opportunity < 60:
        suggestions.append("Seek roles with clear growth paths and learning opportunities")
    if components.timing < 60:
        suggestions.append("Consider both new postings and established roles in your field")

    if not suggestions:
        suggestions.append("You're well-matched for this role! Consider applying and preparing for interviews.")

    return suggestions
