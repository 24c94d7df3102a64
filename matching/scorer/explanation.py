#!/usr/bin/env python3
"""
Score Explanation - Human-readable reasons and quality labels.
"""

from typing import List, Optional, Tuple

from matching.config_loader import TierWeights
from matching.scorer.models import COMPONENT_NAMES, ScoreComponents

COMPONENT_LABELS = {
    'relevance': "Profile Match",
    'quality': "Company Quality",
    'opportunity': "Growth Potential",
    'timing': "Market Timing",
}

COMPONENT_DESCRIPTIONS = {
    'relevance': "How well your skills, experience, and preferences align with this role",
    'quality': "Company reputation, stability, and work environment quality",
    'opportunity': "Career advancement opportunities and skill development potential",
    'timing': "Job freshness and current market demand",
}

# Lower bounds, checked from the top
SCORE_QUALITY_THRESHOLDS = (
    (85, "excellent"),
    (70, "good"),
    (55, "fair"),
)

SECOND_FACTOR_RATIO = 0.75


def get_score_quality(score: float) -> str:
    for threshold, label in SCORE_QUALITY_THRESHOLDS:
        if score >= threshold:
            return label
    return "poor"


def rank_contributions(components: ScoreComponents, weights: TierWeights) -> List[Tuple[str, float]]:
    """Weighted contribution of each component, largest first (ties keep component order)."""
    weight_map = weights.as_dict()
    contributions = [
        (name, getattr(components, name) * weight_map[name])
        for name in COMPONENT_NAMES
    ]
    return sorted(contributions, key=lambda item: item[1], reverse=True)


def generate_score_explanation(
    overall: int,
    components: ScoreComponents,
    weights: TierWeights,
    job_title: Optional[str] = None
) -> str:
    """
    Explain a score through its dominant weighted component(s).

    Always names the highest weighted contribution; names the runner-up
    too when it contributes at least 75% as much.
    """
    ranked = rank_contributions(components, weights)
    top_name, top_value = ranked[0]
    quality = get_score_quality(overall).capitalize()
    title = job_title or "Unknown Position"

    reason = (
        f"{quality} match for {title}: {COMPONENT_LABELS[top_name]} is the strongest factor "
        f"({getattr(components, top_name):.0f}/100)"
    )

    second_name, second_value = ranked[1]
    if top_value > 0 and second_value >= top_value * SECOND_FACTOR_RATIO:
        reason += (
            f", followed by {COMPONENT_LABELS[second_name]} "
            f"({getattr(components, second_name):.0f}/100)"
        )

    return reason
