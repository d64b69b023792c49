"""Summary Generator - Phase 5 of the Decision Engine.

Computes the top pick's confidence and reasoning, and the fixed-template
methodology explanations.
"""

from typing import Optional

from .config import EngineConfig, get_config
from .formatting import clamp, format_score, plain_text, round_half_up
from .schema import (
    Algorithm,
    ComparisonSummary,
    Explanations,
    Priority,
    ScoredOption,
    Settings,
    TopRecommendation,
)

TRADE_OFF_ANALYSIS_TEXT = (
    "Strengths and weaknesses identified by comparing scores across criteria. "
    "Key differentiators highlight significant performance gaps."
)


class SummaryGenerator:
    """Generates the comparison summary.

    Configuration:
    - Confidence and gap thresholds can be customized via scorer-config.yaml
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.thresholds = (config or get_config()).confidence

    def generate_summary(
        self,
        ranked: list[ScoredOption],
        total_options: int,
    ) -> ComparisonSummary:
        """Summarize a ranking.

        Args:
            ranked: Full ranking with trade-offs, best first
            total_options: Number of options before constraint filtering

        Returns:
            Summary; top_recommendation is None when nothing qualified
        """
        if not ranked:
            return ComparisonSummary(
                total_options_evaluated=total_options,
                options_meeting_constraints=0,
                top_recommendation=None,
            )

        top = ranked[0]
        return ComparisonSummary(
            total_options_evaluated=total_options,
            options_meeting_constraints=len(ranked),
            top_recommendation=TopRecommendation(
                option_id=top.option_id,
                confidence=self.confidence(ranked),
                reasoning=self.reasoning(ranked),
            ),
        )

    def confidence(self, ranked: list[ScoredOption]) -> float:
        """Confidence in the top pick, from its lead over the runner-up."""
        if len(ranked) < 2:
            return 1.0

        gap = ranked[0].total_score - ranked[1].total_score
        bonus = min(gap / 100, self.thresholds.max_gap_bonus)
        return round_half_up(clamp(self.thresholds.base_confidence + bonus, 0.0, 1.0), 2)

    def gap_phrase(self, gap: float) -> str:
        """Describe the lead of the top pick."""
        t = self.thresholds
        if gap > t.clear_leader_gap:
            return f"Clear leader with {plain_text(round_half_up(gap, 1))} point advantage."
        if gap > t.moderate_edge_gap:
            return "Moderate edge over alternatives."
        if gap > t.slight_advantage_gap:
            return "Slight advantage in close competition."
        return "Very close competition with other options."

    def reasoning(self, ranked: list[ScoredOption]) -> str:
        """Reasoning text for the top pick."""
        top = ranked[0]
        gap = top.total_score - ranked[1].total_score if len(ranked) > 1 else 0.0

        parts = [
            f"Scored {format_score(top.total_score)}/100 overall.",
            self.gap_phrase(gap),
        ]
        if top.trade_offs and top.trade_offs.strengths:
            parts.append(f"Key strength: {top.trade_offs.strengths[0].lower()}.")
        return " ".join(parts)


def generate_explanations(
    priorities: list[Priority],
    settings: Optional[Settings] = None,
) -> Explanations:
    """Fixed-template methodology text with the per-criterion weight breakdown."""
    algorithm = (settings.algorithm if settings else Algorithm.WEIGHTED_SUM).value
    breakdown = ", ".join(
        f"{p.criteria} ({int(round_half_up(p.weight * 100, 0))}%)" for p in priorities
    )
    return Explanations(
        methodology=(
            f"Used {algorithm} algorithm with user-defined priority weights. "
            "Each option scored 0-100 per criteria, then weighted by importance."
        ),
        scoring_breakdown=f"Criteria weights: {breakdown}",
        trade_off_analysis=TRADE_OFF_ANALYSIS_TEXT,
    )
