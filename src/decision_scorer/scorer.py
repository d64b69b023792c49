"""Scorer - Phase 3 of the Decision Engine.

Turns normalized values into directional 0-100 criterion scores, weights
and sums them into a total score, and ranks the options.
"""

from typing import Any, Optional

from .app_logging import get_logger
from .config import EngineConfig
from .explainer import ExplanationGenerator
from .formatting import is_number, round_half_up
from .normalizer import NormalizationResult, NormalizedOption
from .paths import get_feature
from .schema import (
    ConstraintComplianceReport,
    CriterionScore,
    Optimization,
    Priority,
    Reason,
    ScoredOption,
)

logger = get_logger("scorer")


class WeightedSumScorer:
    """Scores options with a weighted sum of per-criterion scores.

    Scoring principles:
    - A criterion score is the normalized value scaled to 0-100,
      inverted when the priority minimizes
    - The total is the sum of score * weight; with weights summing to 1
      it stays within 0-100
    - Missing data contributes nothing and is reported, never guessed
    - Ranking is a stable sort, so ties keep input order
    """

    def __init__(
        self,
        explainer: Optional[ExplanationGenerator] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.explainer = explainer or ExplanationGenerator(config)

    def score(
        self,
        normalization: NormalizationResult,
        priorities: list[Priority],
        compliance: Optional[dict[str, ConstraintComplianceReport]] = None,
    ) -> list[ScoredOption]:
        """Score every normalized option.

        Args:
            normalization: Output of the normalizer
            priorities: Weighted priorities
            compliance: Constraint reports keyed by option id

        Returns:
            Scored options in input order (unranked)
        """
        compliance = compliance or {}
        return [
            self._score_option(
                normalized,
                priorities,
                normalization,
                compliance.get(normalized.option.id),
            )
            for normalized in normalization.options
        ]

    def rank(
        self,
        scored: list[ScoredOption],
        max_results: Optional[int] = None,
    ) -> list[ScoredOption]:
        """Order by descending total score and assign ranks 1..N.

        When max_results is set only the first N ranked options are
        returned; their ranks still reflect the full ranking.
        """
        ordered = sorted(scored, key=lambda s: s.total_score, reverse=True)
        ranked = [
            option.model_copy(update={"rank": position})
            for position, option in enumerate(ordered, 1)
        ]
        if max_results:
            return ranked[:max_results]
        return ranked

    def criterion_score(self, normalized_value: float, optimization: Optimization) -> float:
        """Directional 0-100 score for a normalized value."""
        score = normalized_value * 100
        if optimization == Optimization.MINIMIZE:
            score = 100 - score
        return round_half_up(score, 2)

    def _score_option(
        self,
        normalized: NormalizedOption,
        priorities: list[Priority],
        normalization: NormalizationResult,
        compliance: Optional[ConstraintComplianceReport],
    ) -> ScoredOption:
        """Score a single option across all priorities."""
        option = normalized.option
        criteria_scores: dict[str, CriterionScore] = {}
        reasons: list[Reason] = []
        total = 0.0

        for priority in priorities:
            raw_value = get_feature(option.features, priority.criteria)
            normalized_value = normalized.normalized_value(priority.criteria)

            if not self._has_data(raw_value, normalized_value):
                reasons.append(self.explainer.missing_data_reason(option.name, priority.criteria))
                continue

            score = self.criterion_score(normalized_value, priority.optimization)
            criteria_scores[priority.criteria] = CriterionScore(
                score=score,
                normalized_value=normalized_value,
                raw_value=raw_value,
            )
            reasons.append(self.explainer.criterion_reason(
                option.name,
                priority,
                raw_value,
                score,
                normalization.statistics.get(priority.criteria),
            ))
            total += score * priority.weight

        return ScoredOption(
            option_id=option.id,
            name=option.name,
            total_score=round_half_up(total, 2),
            criteria_scores=criteria_scores,
            reasons=reasons,
            constraint_compliance=compliance or ConstraintComplianceReport(),
        )

    @staticmethod
    def _has_data(raw_value: Any, normalized_value: Any) -> bool:
        # A raw value that could not be normalized is still left in the copy
        return raw_value is not None and is_number(normalized_value)
