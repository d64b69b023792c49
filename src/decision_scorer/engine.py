"""Decision Engine - runs the complete comparison pipeline.

options + constraints -> eligible options -> normalized options ->
scored and ranked options -> trade-offs -> summary.

Each phase returns new objects; inputs are never modified. The engine
holds configuration only, so one instance can serve concurrent calls.
"""

from typing import Any, Optional

from .app_logging import get_logger
from .config import EngineConfig, get_config
from .constraint_evaluator import ConstraintEvaluator
from .exceptions import ComparisonProcessingError, UnsupportedAlgorithmError
from .explainer import ExplanationGenerator
from .insights import DecisionInsightAnalyzer
from .normalizer import FeatureNormalizer
from .schema import (
    Algorithm,
    ComparisonRequest,
    ComparisonResult,
    Constraint,
    Option,
    Priority,
    Settings,
)
from .scorer import WeightedSumScorer
from .summary import SummaryGenerator, generate_explanations
from .tradeoffs import TradeOffAnalyzer
from .validation import parse_request

logger = get_logger("engine")


class DecisionEngine:
    """Multi-criteria scoring and explanation engine.

    Usage:
        engine = DecisionEngine()
        result = engine.compare(options, constraints, priorities, settings)
        payload = result.to_wire()
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or get_config()
        explainer = ExplanationGenerator(self.config)
        self.evaluator = ConstraintEvaluator(explainer)
        self.normalizer = FeatureNormalizer(self.config)
        self.scorer = WeightedSumScorer(explainer)
        self.trade_off_analyzer = TradeOffAnalyzer(self.config)
        self.summary_generator = SummaryGenerator(self.config)
        self.insight_analyzer = DecisionInsightAnalyzer(self.config)

    def compare(
        self,
        options: list[Option],
        constraints: list[Constraint],
        priorities: list[Priority],
        settings: Optional[Settings] = None,
    ) -> ComparisonResult:
        """Rank options against constraints and priorities.

        Input is assumed valid (see ``validation.parse_request``).

        Raises:
            UnsupportedAlgorithmError: If settings select an unimplemented algorithm
            ComparisonProcessingError: For any unexpected fault during computation
        """
        settings = settings or Settings()
        if settings.algorithm not in Algorithm.implemented():
            raise UnsupportedAlgorithmError(settings.algorithm.value)

        logger.debug(
            "Comparing %d options with %d constraints and %d priorities",
            len(options), len(constraints), len(priorities),
        )

        try:
            return self._run(options, constraints, priorities, settings)
        except Exception as e:
            logger.exception("Comparison failed")
            raise ComparisonProcessingError(str(e)) from e

    def compare_request(self, request: ComparisonRequest) -> ComparisonResult:
        """Run a comparison for a parsed request."""
        return self.compare(
            request.options,
            request.constraints,
            request.priorities,
            request.settings,
        )

    def compare_payload(self, payload: Any) -> ComparisonResult:
        """Validate a raw request body and run the comparison.

        Raises:
            RequestValidationError: If the payload fails validation
        """
        return self.compare_request(parse_request(payload))

    def _run(
        self,
        options: list[Option],
        constraints: list[Constraint],
        priorities: list[Priority],
        settings: Settings,
    ) -> ComparisonResult:
        explanations = (
            generate_explanations(priorities, settings) if settings.include_explanations else None
        )

        evaluation = self.evaluator.evaluate(options, constraints)
        logger.info(
            "%d of %d options meet required constraints",
            len(evaluation.eligible), len(options),
        )

        if not evaluation.eligible:
            return ComparisonResult(
                ranked_options=[],
                summary=self.summary_generator.generate_summary([], len(options)),
                explanations=explanations,
                insights=self.insight_analyzer.analyze([], priorities),
                constraint_results=evaluation.reports,
            )

        normalization = self.normalizer.normalize(
            [eligible.option for eligible in evaluation.eligible],
            priorities,
        )
        scored = self.scorer.score(normalization, priorities, evaluation.reports)

        # Trade-offs, summary and insights use the full ranking;
        # max_results only trims what is returned
        ranking = self.trade_off_analyzer.analyze(self.scorer.rank(scored))
        ranked_options = ranking[:settings.max_results] if settings.max_results else ranking

        return ComparisonResult(
            ranked_options=ranked_options,
            summary=self.summary_generator.generate_summary(ranking, len(options)),
            explanations=explanations,
            insights=self.insight_analyzer.analyze(ranking, priorities),
            constraint_results=evaluation.reports,
        )


def compare_options(
    options: list[Option],
    constraints: list[Constraint],
    priorities: list[Priority],
    settings: Optional[Settings] = None,
    config: Optional[EngineConfig] = None,
) -> ComparisonResult:
    """Convenience wrapper: run one comparison with a fresh engine."""
    return DecisionEngine(config).compare(options, constraints, priorities, settings)
