"""Trade-off Analyzer - Phase 4 of the Decision Engine.

Derives strengths, weaknesses and key differentiators for each ranked
option by comparing its reasons and criterion scores with the cohort.
"""

from typing import Optional

from .config import EngineConfig, get_config
from .schema import Impact, Reason, ScoredOption, TradeOffs


def cohort_averages(options: list[ScoredOption]) -> dict[str, float]:
    """Mean criterion score across the options that were scored on it."""
    totals: dict[str, list[float]] = {}
    for option in options:
        for criteria, criterion_score in option.criteria_scores.items():
            totals.setdefault(criteria, []).append(criterion_score.score)
    return {criteria: sum(scores) / len(scores) for criteria, scores in totals.items()}


class TradeOffAnalyzer:
    """Annotates ranked options with trade-offs.

    Candidate lists are assembled in priority order and then truncated,
    so criteria-based differentiators always come before contextual notes.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.limits = (config or get_config()).trade_offs

    def analyze(
        self,
        ranked: list[ScoredOption],
        cohort: Optional[list[ScoredOption]] = None,
    ) -> list[ScoredOption]:
        """Return copies of the ranked options with trade_offs filled in.

        Args:
            ranked: Options to annotate (ranks already assigned)
            cohort: Options to compare against; defaults to ``ranked``
        """
        if not ranked:
            return []

        averages = cohort_averages(cohort if cohort is not None else ranked)
        return [
            option.model_copy(update={"trade_offs": self.analyze_option(option, averages)})
            for option in ranked
        ]

    def analyze_option(self, option: ScoredOption, averages: dict[str, float]) -> TradeOffs:
        """Compute trade-offs for a single option."""
        strengths = [
            self._describe("Strong", reason)
            for reason in self._top_reasons(option, Impact.POSITIVE)
        ]
        weaknesses = [
            self._describe("Weak", reason)
            for reason in self._top_reasons(option, Impact.NEGATIVE)
        ]

        return TradeOffs(
            strengths=strengths[:self.limits.max_strengths],
            weaknesses=weaknesses[:self.limits.max_weaknesses],
            key_differentiators=self._differentiators(option, averages)[:self.limits.max_differentiators],
        )

    def _top_reasons(self, option: ScoredOption, impact: Impact) -> list[Reason]:
        matching = [r for r in option.reasons if r.impact == impact and r.details is not None]
        # Stable sort: equal contributions keep priority order
        return sorted(matching, key=lambda r: r.weight_contribution, reverse=True)

    @staticmethod
    def _describe(prefix: str, reason: Reason) -> str:
        details = reason.details
        return f"{prefix} {reason.criteria}: {details.formatted_value} ({details.performance_level})"

    def _differentiators(self, option: ScoredOption, averages: dict[str, float]) -> list[str]:
        differentiators = []
        reasons = {r.criteria: r for r in option.reasons if r.details is not None}

        for criteria, criterion_score in option.criteria_scores.items():
            average = averages.get(criteria, 0.0)
            if abs(criterion_score.score - average) <= self.limits.differentiator_threshold:
                continue
            reason = reasons.get(criteria)
            if reason is None:
                continue
            direction = "superior" if criterion_score.score > average else "inferior"
            differentiators.append(
                f"{direction} {criteria}: {reason.details.formatted_value} vs competitors"
            )

        if option.rank == 1:
            differentiators.append("Top overall recommendation based on your priorities")
        elif option.rank is not None and option.rank <= 3:
            differentiators.append(f"Ranked #{option.rank} among viable options")

        failed_optional = option.constraint_compliance.failed_optional_count
        if failed_optional > 0:
            differentiators.append(f"Fails {failed_optional} optional constraint(s)")

        return differentiators
