import yaml
import os
from typing import List
from pydantic import BaseModel, Field, model_validator


class TierWeights(BaseModel):
    """Weights applied to the four score components for one subscription tier."""
    relevance: float
    quality: float
    opportunity: float
    timing: float

    @model_validator(mode='after')
    def _check_sum(self) -> 'TierWeights':
        total = self.relevance + self.quality + self.opportunity + self.timing
        if abs(total - 1.0) > 1e-6:
            raise ValueError(f"Tier weights must sum to 1.0, got {total:.4f}")
        return self

    def as_dict(self) -> dict:
        return {
            'relevance': self.relevance,
            'quality': self.quality,
            'opportunity': self.opportunity,
            'timing': self.timing,
        }


class RelevanceWeights(BaseModel):
    """Weights of the four relevance sub-terms."""
    skills: float = 0.4
    experience: float = 0.3
    career_path: float = 0.2
    location: float = 0.1


def _premium_weights() -> TierWeights:
    return TierWeights(relevance=0.35, quality=0.25, opportunity=0.25, timing=0.15)


def _free_weights() -> TierWeights:
    return TierWeights(relevance=0.50, quality=0.30, opportunity=0.10, timing=0.10)


class ScoringConfig(BaseModel):
    """
    Configuration for the ScoringService (rule-based component scoring).

    Tier weights drive the Unified Score Aggregator; confidence values
    tag each scoring path.
    """
    premium_weights: TierWeights = Field(default_factory=_premium_weights)
    free_weights: TierWeights = Field(default_factory=_free_weights)
    relevance_weights: RelevanceWeights = Field(default_factory=RelevanceWeights)

    # Rule-based is the lower-certainty fallback; AI results default higher
    rule_based_confidence: int = 75
    ai_default_confidence: int = 85

    # Graduate hiring window (calendar months, 1-12)
    graduate_season_months: List[int] = Field(default_factory=lambda: [9, 10, 11, 12])
    graduate_season_bonus: float = 10.0

    @model_validator(mode='after')
    def _check_confidence(self) -> 'ScoringConfig':
        if not (0 <= self.rule_based_confidence < self.ai_default_confidence <= 100):
            raise ValueError(
                "rule_based_confidence must be below ai_default_confidence, both within [0, 100]"
            )
        return self


class DistributionConfig(BaseModel):
    """Balanced Distribution Selector settings."""
    # Output keeps admission order: fair-fill admissions first, back-fill after.
    # True stably re-sorts the admitted list by overall score.
    resort_by_score: bool = False


class ResultPolicy(BaseModel):
    """Output caps used when the caller does not pass max_matches."""
    free_max_matches: int = 5
    premium_max_matches: int = 10
    min_score: int = 0  # 0-100, matches below are dropped before selection


class MatchingConfig(BaseModel):
    """
    Top-level matching configuration.
    """
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    distribution: DistributionConfig = Field(default_factory=DistributionConfig)
    result_policy: ResultPolicy = Field(default_factory=ResultPolicy)


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///jobping_matches.db"


class AppConfig(BaseModel):
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another directory), try the repo root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    with open(config_path, "r") as f:
        data = yaml.safe_load(f) or {}

    # Allow env var override for DB URL
    env_db_url = os.environ.get("DATABASE_URL")
    if env_db_url:
        if not data.get('database'):
            data['database'] = {}
        data['database']['url'] = env_db_url

    return AppConfig(**data)

