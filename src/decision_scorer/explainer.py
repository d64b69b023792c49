"""Explainer - human-readable reasoning for criteria and constraints.

Used by the constraint evaluator (one reason per constraint) and by the
scorer (one reason per priority). Wording thresholds come from the
``performance_bands`` and ``comparison_bands`` configuration sections.
"""

from typing import Any, Optional

from .config import EngineConfig, get_config
from .formatting import clamp, coerce_number, format_display_value, round_half_up
from .normalizer import CriterionStatistics
from .paths import get_feature
from .schema import (
    Constraint,
    ConstraintReason,
    ConstraintStatus,
    Impact,
    Optimization,
    Option,
    Priority,
    Reason,
    ReasonDetails,
    ReasonStatus,
)

# (maximize label, minimize label) per performance band, best band first
_LEVEL_LABELS = (
    ("excellent", "very low"),
    ("good", "low"),
    ("average", "average"),
    ("below average", "high"),
    ("poor", "very high"),
)

_EFFECT_VERBS = {
    Impact.POSITIVE: "helps",
    Impact.NEGATIVE: "hurts",
    Impact.NEUTRAL: "neutrally affects",
}

ONLY_OPTION = "only option available"


class ExplanationGenerator:
    """Generates per-criterion and per-constraint explanations.

    Principles:
    - Every score gets a sentence a non-expert can read
    - Labels follow the optimization direction ("very low" cost is good)
    - Absent data is stated, never guessed
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        cfg = config or get_config()
        self.bands = cfg.performance_bands
        self.comparison_bands = cfg.comparison_bands

    def classify(self, score: float, optimization: Optimization) -> tuple[str, Impact]:
        """Map a 0-100 score to a performance level and impact."""
        minimize = optimization == Optimization.MINIMIZE
        bands = self.bands

        if score >= bands.excellent:
            index, impact = 0, Impact.POSITIVE
        elif score >= bands.good:
            index, impact = 1, Impact.POSITIVE
        elif score >= bands.average:
            index, impact = 2, Impact.NEUTRAL
        elif score >= bands.below_average:
            index, impact = 3, Impact.NEGATIVE
        else:
            index, impact = 4, Impact.NEGATIVE

        maximize_label, minimize_label = _LEVEL_LABELS[index]
        return (minimize_label if minimize else maximize_label), impact

    def percentile(
        self,
        value: Any,
        stats: CriterionStatistics,
        optimization: Optimization,
    ) -> float:
        """Position of a raw value within the observed range, 0-100.

        Inverted when minimizing so that a higher percentile is always better.
        """
        number = coerce_number(value)
        value_range = stats.max - stats.min
        if number is None or value_range == 0:
            return 50.0

        percentile = (number - stats.min) / value_range * 100
        if optimization == Optimization.MINIMIZE:
            percentile = 100 - percentile
        return clamp(percentile, 0.0, 100.0)

    def comparison_label(
        self,
        value: Any,
        stats: Optional[CriterionStatistics],
        optimization: Optimization,
    ) -> str:
        """Describe a raw value relative to the alternatives."""
        if stats is None or stats.count <= 1:
            return ONLY_OPTION

        minimize = optimization == Optimization.MINIMIZE
        percentile = self.percentile(value, stats, optimization)
        bands = self.comparison_bands

        if percentile >= bands.extreme:
            return "among the lowest" if minimize else "among the highest"
        if percentile >= bands.favorable:
            return "below average" if minimize else "above average"
        if percentile >= bands.middle:
            return "near average"
        return "above average" if minimize else "below average"

    def criterion_reason(
        self,
        option_name: str,
        priority: Priority,
        raw_value: Any,
        score: float,
        stats: Optional[CriterionStatistics],
    ) -> Reason:
        """Build the reason for one scored criterion."""
        criteria = priority.criteria
        level, impact = self.classify(score, priority.optimization)
        comparison = self.comparison_label(raw_value, stats, priority.optimization)
        formatted = format_display_value(raw_value, criteria)

        explanation = (
            f"{option_name} has {level} {criteria} ({formatted}), which is "
            f"{comparison} compared to alternatives. "
            f"This {_EFFECT_VERBS[impact]} its overall ranking."
        )

        return Reason(
            criteria=criteria,
            status=ReasonStatus(impact.value),
            impact=impact,
            explanation=explanation,
            details=ReasonDetails(
                raw_value=raw_value,
                formatted_value=formatted,
                score=round_half_up(score, 2),
                performance_level=level,
                comparison=comparison,
                weight_percentage=int(round_half_up(priority.weight * 100, 0)),
            ),
            weight_contribution=round_half_up(score * priority.weight, 2),
        )

    def missing_data_reason(self, option_name: str, criteria: str) -> Reason:
        """Build the reason for a criterion an option has no usable data for."""
        return Reason(
            criteria=criteria,
            status=ReasonStatus.MISSING_DATA,
            impact=Impact.NEUTRAL,
            explanation=f"No {criteria} data available for {option_name}",
            weight_contribution=0.0,
        )

    def constraint_reason(
        self,
        option: Option,
        constraint: Constraint,
        passed: bool,
    ) -> ConstraintReason:
        """Build the reason for one constraint check."""
        value = get_feature(option.features, constraint.criteria)
        requirement = "required" if constraint.required else "optional"

        if value is None:
            explanation = (
                f"{option.name} has no {constraint.criteria} data available "
                f"for {requirement} constraint"
            )
        else:
            formatted_actual = format_display_value(value, constraint.criteria)
            formatted_expected = format_display_value(constraint.value, constraint.criteria)
            verdict = "meets" if passed else "does not meet"
            explanation = (
                f"{option.name} {constraint.criteria} ({formatted_actual}) {verdict} "
                f"the {requirement} requirement of being "
                f"{constraint.operator.phrase} {formatted_expected}"
            )

        return ConstraintReason(
            criteria=constraint.criteria,
            status=ConstraintStatus.PASSED if passed else ConstraintStatus.FAILED,
            explanation=explanation,
            required=constraint.required,
            actual_value=value,
            constraint_value=constraint.value,
            operator=constraint.operator,
        )
