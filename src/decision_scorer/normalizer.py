"""Feature Normalizer - Phase 2 of the Decision Engine.

Rescales each priority criterion across the eligible options into 0-1 and
computes descriptive statistics used for comparison wording. Only options
that passed their required constraints are passed in, so excluded options
never influence ranges.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, Optional

from .app_logging import get_logger
from .config import EngineConfig, get_config
from .formatting import coerce_number
from .paths import get_feature, set_feature
from .schema import DegeneratePolicy, Option, Priority

logger = get_logger("normalizer")

# Normalized value used for tied criteria, per policy
DEGENERATE_VALUES = {
    DegeneratePolicy.NEUTRAL: 0.5,
    DegeneratePolicy.ZERO: 0.0,
}


@dataclass(frozen=True)
class CriterionRange:
    """Observed numeric range of a criterion."""
    min: float
    max: float

    @property
    def span(self) -> float:
        return self.max - self.min

    @property
    def is_degenerate(self) -> bool:
        """True when every observed value is the same."""
        return self.span == 0


@dataclass(frozen=True)
class CriterionStatistics:
    """Descriptive statistics of a criterion's raw values."""
    min: float
    max: float
    mean: float
    median: float
    count: int


@dataclass(frozen=True)
class NormalizedOption:
    """An option plus its normalized copy of the features."""
    option: Option
    normalized_features: dict[str, Any]

    def normalized_value(self, criteria: str) -> Optional[Any]:
        return get_feature(self.normalized_features, criteria)


@dataclass(frozen=True)
class NormalizationResult:
    """Normalized options with per-criterion ranges and statistics."""
    options: list[NormalizedOption] = field(default_factory=list)
    ranges: dict[str, CriterionRange] = field(default_factory=dict)
    statistics: dict[str, CriterionStatistics] = field(default_factory=dict)


def numeric_values(options: list[Option], criteria: str) -> list[float]:
    """Collect the numeric values of a criterion, skipping absent or non-numeric ones."""
    values = []
    for option in options:
        number = coerce_number(get_feature(option.features, criteria))
        if number is not None:
            values.append(number)
    return values


def describe(values: list[float]) -> Optional[CriterionStatistics]:
    """Compute statistics for a list of values; None when empty."""
    if not values:
        return None
    ordered = sorted(values)
    return CriterionStatistics(
        min=ordered[0],
        max=ordered[-1],
        mean=sum(values) / len(values),
        # Upper middle element for even counts
        median=ordered[len(ordered) // 2],
        count=len(values),
    )


class FeatureNormalizer:
    """Min-max normalizes priority criteria across a set of options.

    The normalized value is direction-agnostic: 0 is the minimum observed
    value and 1 the maximum. The scorer applies the optimization direction.
    Criteria with no spread are handled by the configured degenerate policy
    instead of leaking the raw value.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        cfg = config or get_config()
        self.degenerate_policy = cfg.normalization.degenerate_policy

    def normalize(
        self,
        options: list[Option],
        priorities: list[Priority],
    ) -> NormalizationResult:
        """Normalize all priority criteria for the given options.

        Args:
            options: Eligible options, in input order
            priorities: Priorities naming the criteria to normalize

        Returns:
            NormalizationResult; option features are copied, never modified
        """
        ranges: dict[str, CriterionRange] = {}
        statistics: dict[str, CriterionStatistics] = {}

        for priority in priorities:
            stats = describe(numeric_values(options, priority.criteria))
            if stats is None:
                logger.debug("No numeric values for criterion %s", priority.criteria)
                continue
            ranges[priority.criteria] = CriterionRange(min=stats.min, max=stats.max)
            statistics[priority.criteria] = stats

        normalized = [
            NormalizedOption(
                option=option,
                normalized_features=self._normalize_features(option, priorities, ranges),
            )
            for option in options
        ]

        return NormalizationResult(options=normalized, ranges=ranges, statistics=statistics)

    def normalize_value(self, value: Any, value_range: CriterionRange) -> Optional[float]:
        """Normalize one raw value into 0-1; None when it is not numeric."""
        number = coerce_number(value)
        if number is None:
            return None
        if value_range.is_degenerate:
            return DEGENERATE_VALUES[self.degenerate_policy]
        return (number - value_range.min) / value_range.span

    def _normalize_features(
        self,
        option: Option,
        priorities: list[Priority],
        ranges: dict[str, CriterionRange],
    ) -> dict[str, Any]:
        features = copy.deepcopy(option.features)

        for priority in priorities:
            value_range = ranges.get(priority.criteria)
            if value_range is None:
                continue
            value = self.normalize_value(get_feature(option.features, priority.criteria), value_range)
            if value is not None:
                set_feature(features, priority.criteria, value)

        return features
