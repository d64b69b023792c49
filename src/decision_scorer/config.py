"""Centralized configuration management for the decision scorer."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .schema import DegeneratePolicy


class PerformanceBandsConfig(BaseModel):
    """Score thresholds for performance levels and impact.

    A criterion score at or above ``excellent`` reads as excellent (or
    "very low" when minimizing); scores from ``average`` up to ``good``
    are neutral; scores below ``average`` hurt the ranking.
    """
    excellent: float = Field(80.0, description="Minimum score for excellent / very low")
    good: float = Field(60.0, description="Minimum score for good / low")
    average: float = Field(40.0, description="Minimum score for average (neutral impact)")
    below_average: float = Field(20.0, description="Minimum score for below average / high")


class ComparisonBandsConfig(BaseModel):
    """Percentile thresholds for the comparison label against alternatives."""
    extreme: float = Field(80.0, description="Minimum percentile for 'among the highest/lowest'")
    favorable: float = Field(60.0, description="Minimum percentile for 'above/below average'")
    middle: float = Field(40.0, description="Minimum percentile for 'near average'")


class TradeOffConfig(BaseModel):
    """Limits and thresholds for trade-off analysis."""
    max_strengths: int = Field(3, description="Maximum strengths listed per option")
    max_weaknesses: int = Field(3, description="Maximum weaknesses listed per option")
    max_differentiators: int = Field(4, description="Maximum key differentiators per option")
    differentiator_threshold: float = Field(
        20.0,
        description="Points a criterion score must deviate from the cohort mean to count"
    )


class ConfidenceConfig(BaseModel):
    """Top-pick confidence and reasoning thresholds."""
    base_confidence: float = Field(0.5, description="Confidence with no score gap")
    max_gap_bonus: float = Field(0.5, description="Maximum bonus added for the score gap")
    clear_leader_gap: float = Field(15.0, description="Gap above which the top pick is a clear leader")
    moderate_edge_gap: float = Field(8.0, description="Gap above which the top pick has a moderate edge")
    slight_advantage_gap: float = Field(3.0, description="Gap above which the top pick has a slight advantage")


class NormalizationConfig(BaseModel):
    """Normalization behavior."""
    degenerate_policy: DegeneratePolicy = Field(
        DegeneratePolicy.NEUTRAL,
        description="How to score a criterion whose values are identical across options (neutral, zero)"
    )


class InsightsConfig(BaseModel):
    """Thresholds for decision insights."""
    very_close_range: float = Field(10.0, description="Score range below which options are very close")
    competitive_range: float = Field(25.0, description="Score range below which options are competitive")
    max_key_factors: int = Field(3, description="Maximum key decision factors reported")
    max_recommendations: int = Field(3, description="Maximum actionable recommendations")


class EngineConfig(BaseModel):
    """Complete configuration for the decision scorer."""
    performance_bands: PerformanceBandsConfig = Field(default_factory=PerformanceBandsConfig)
    comparison_bands: ComparisonBandsConfig = Field(default_factory=ComparisonBandsConfig)
    trade_offs: TradeOffConfig = Field(default_factory=TradeOffConfig)
    confidence: ConfidenceConfig = Field(default_factory=ConfidenceConfig)
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    insights: InsightsConfig = Field(default_factory=InsightsConfig)


# Global config instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = EngineConfig()
    return _config


def load_config(path: Path) -> EngineConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded EngineConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = EngineConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = EngineConfig()


def find_config_file() -> Optional[Path]:
    """Find a scorer configuration file.

    Looks in (order of priority):
    1. DECISION_SCORER_CONFIG environment variable
    2. ./scorer-config.yaml
    3. ./scorer-config.yml
    4. ~/.config/decision-scorer/config.yaml
    """
    # Environment variable
    env_path = os.environ.get("DECISION_SCORER_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    # Current directory
    for name in ["scorer-config.yaml", "scorer-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    # User config directory
    user_config = Path.home() / ".config" / "decision-scorer" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    config = EngineConfig()
    data = config.model_dump(mode="json")

    yaml_content = """# Decision Scorer Configuration
# =============================
#
# This file configures explanation bands, trade-off limits, confidence
# thresholds and normalization behavior.
#
# Copy this file to one of these locations:
#   - ./scorer-config.yaml (current directory)
#   - ~/.config/decision-scorer/config.yaml (user config)
#
# Or set the DECISION_SCORER_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
