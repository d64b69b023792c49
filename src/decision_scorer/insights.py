"""Decision insights - which criteria separate the options and how close they are."""

import math
from typing import Optional

from .config import EngineConfig, get_config
from .formatting import round_half_up
from .schema import (
    Competitiveness,
    DecisionInsights,
    KeyDecisionFactor,
    Priority,
    ScoredOption,
)


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class DecisionInsightAnalyzer:
    """Summarizes the decision landscape of a ranking."""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.thresholds = (config or get_config()).insights

    def key_factors(
        self,
        ranked: list[ScoredOption],
        priorities: list[Priority],
    ) -> list[KeyDecisionFactor]:
        """Rank criteria by weight times the spread of their scores."""
        factors = []
        for priority in priorities:
            scores = [
                option.criteria_scores[priority.criteria].score
                for option in ranked
                if priority.criteria in option.criteria_scores
            ]
            if not scores:
                continue

            average = _mean(scores)
            variance = _mean([(score - average) ** 2 for score in scores])
            factors.append(KeyDecisionFactor(
                criteria=priority.criteria,
                weight=priority.weight,
                variance=round_half_up(variance, 2),
                impact_score=round_half_up(priority.weight * math.sqrt(variance), 3),
                optimization=priority.optimization,
            ))

        return sorted(factors, key=lambda f: f.impact_score, reverse=True)

    def competitiveness(self, score_range: float) -> Competitiveness:
        if score_range < self.thresholds.very_close_range:
            return Competitiveness.VERY_CLOSE
        if score_range < self.thresholds.competitive_range:
            return Competitiveness.COMPETITIVE
        return Competitiveness.CLEAR_DIFFERENCES

    def analyze(
        self,
        ranked: list[ScoredOption],
        priorities: list[Priority],
    ) -> DecisionInsights:
        """Build insights for a full ranking (best first, trade-offs filled in)."""
        if not ranked:
            return DecisionInsights(competitiveness=Competitiveness.NO_OPTIONS)

        factors = self.key_factors(ranked, priorities)
        score_range = ranked[0].total_score - ranked[-1].total_score
        competitiveness = self.competitiveness(score_range)

        return DecisionInsights(
            competitiveness=competitiveness,
            score_range=round_half_up(score_range, 1),
            key_factors=factors[:self.thresholds.max_key_factors],
            recommendations=self._recommendations(ranked, factors, competitiveness),
        )

    def _recommendations(
        self,
        ranked: list[ScoredOption],
        factors: list[KeyDecisionFactor],
        competitiveness: Competitiveness,
    ) -> list[str]:
        recommendations = []

        if competitiveness == Competitiveness.VERY_CLOSE:
            recommendations.append(
                "Consider additional criteria or gather more detailed data - "
                "the options are very close in overall value"
            )
            if factors:
                recommendations.append(
                    f"Focus on {factors[0].criteria} as it's the most differentiating factor"
                )
        elif competitiveness == Competitiveness.CLEAR_DIFFERENCES:
            recommendations.append(
                "The analysis shows clear differences between options - "
                "the top choice is well-supported"
            )
            top = ranked[0]
            if top.trade_offs and top.trade_offs.strengths:
                recommendations.append(f"Top choice excels in: {top.trade_offs.strengths[0]}")

        if any(option.constraint_compliance.failed_constraints for option in ranked):
            recommendations.append(
                "Some options failed constraints - consider if requirements can be relaxed"
            )

        return recommendations[:self.thresholds.max_recommendations]
