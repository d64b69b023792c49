"""Pydantic models for the Decision Scoring Engine.

Input schemas for options, constraints, priorities and settings, and output
schemas for the ranked, explained comparison. Output models serialize with
camelCase aliases (``rankedOptions``, ``totalScore``...).
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Enums
# =============================================================================


class ConstraintOperator(str, Enum):
    """Comparison operator for a constraint."""
    LT = "lt"
    LTE = "lte"
    GT = "gt"
    GTE = "gte"
    EQ = "eq"
    NEQ = "neq"
    IN = "in"
    CONTAINS = "contains"

    @property
    def phrase(self) -> str:
        """Human-readable phrase used in constraint explanations."""
        return _OPERATOR_PHRASES[self]


_OPERATOR_PHRASES = {
    ConstraintOperator.LT: "less than",
    ConstraintOperator.LTE: "less than or equal to",
    ConstraintOperator.GT: "greater than",
    ConstraintOperator.GTE: "greater than or equal to",
    ConstraintOperator.EQ: "equal to",
    ConstraintOperator.NEQ: "not equal to",
    ConstraintOperator.IN: "one of",
    ConstraintOperator.CONTAINS: "containing",
}


class Optimization(str, Enum):
    """Direction of a priority."""
    MINIMIZE = "minimize"
    MAXIMIZE = "maximize"


class Algorithm(str, Enum):
    """Scoring algorithm selector.

    Only WEIGHTED_SUM is implemented; the others are recognized so they can
    be rejected with a clear message.
    """
    WEIGHTED_SUM = "weighted_sum"
    TOPSIS = "topsis"
    AHP = "ahp"

    @classmethod
    def implemented(cls) -> tuple["Algorithm", ...]:
        return (cls.WEIGHTED_SUM,)


class Impact(str, Enum):
    """Effect of a criterion on an option's ranking."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class ReasonStatus(str, Enum):
    """Status of a criterion reason."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"
    MISSING_DATA = "missing_data"


class ConstraintStatus(str, Enum):
    """Outcome of a single constraint check."""
    PASSED = "passed"
    FAILED = "failed"


class DegeneratePolicy(str, Enum):
    """Normalized value given to a criterion whose values are all equal."""
    NEUTRAL = "neutral"  # 0.5, score 50 in both directions
    ZERO = "zero"  # 0.0, then inverted when minimizing


class Competitiveness(str, Enum):
    """How close the ranked options are overall."""
    NO_OPTIONS = "no_options"
    VERY_CLOSE = "very_close"
    COMPETITIVE = "competitive"
    CLEAR_DIFFERENCES = "clear_differences"


# =============================================================================
# Input Models
# =============================================================================


class Option(BaseModel):
    """A named alternative described by a feature mapping."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    features: dict[str, Any]


class Constraint(BaseModel):
    """A hard requirement on a feature value."""
    model_config = ConfigDict(frozen=True)

    criteria: str = Field(..., description="Dotted path into option features")
    operator: ConstraintOperator
    value: Any
    required: bool = Field(
        True,
        description="Required constraints gate eligibility; optional ones are only reported"
    )


class Priority(BaseModel):
    """A weighted, directional scoring objective."""
    model_config = ConfigDict(frozen=True)

    criteria: str = Field(..., description="Dotted path into option features")
    weight: float = Field(..., ge=0, le=1)
    optimization: Optimization


class Settings(BaseModel):
    """Algorithm settings for a comparison."""
    model_config = ConfigDict(frozen=True)

    algorithm: Algorithm = Algorithm.WEIGHTED_SUM
    include_explanations: bool = True
    max_results: Optional[int] = Field(None, ge=1)


class ComparisonRequest(BaseModel):
    """A complete comparison request body."""
    model_config = ConfigDict(frozen=True)

    options: list[Option]
    constraints: list[Constraint] = Field(default_factory=list)
    priorities: list[Priority]
    settings: Settings = Field(default_factory=Settings)


# =============================================================================
# Output Models
# =============================================================================


class WireModel(BaseModel):
    """Base for output models: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConstraintReason(WireModel):
    """Explanation of one constraint check for one option."""
    criteria: str
    status: ConstraintStatus
    explanation: str
    required: bool
    actual_value: Any = None
    constraint_value: Any = None
    operator: ConstraintOperator


class ConstraintComplianceReport(WireModel):
    """Constraint outcome for one option."""
    passed: bool = True  # All required constraints satisfied
    failed_constraints: list[str] = Field(default_factory=list)
    constraint_reasons: list[ConstraintReason] = Field(default_factory=list)

    @property
    def failed_optional_count(self) -> int:
        """Number of optional constraints this option failed."""
        return sum(
            1 for r in self.constraint_reasons
            if r.status == ConstraintStatus.FAILED and not r.required
        )


class CriterionScore(WireModel):
    """Score of one option on one criterion."""
    score: float  # 0-100, direction applied
    normalized_value: float  # 0-1, direction-agnostic
    raw_value: Any


class ReasonDetails(WireModel):
    """Structured details behind a criterion explanation."""
    raw_value: Any
    formatted_value: str
    score: float
    performance_level: str
    comparison: str
    weight_percentage: int


class Reason(WireModel):
    """Per-criterion explanation for a scored option."""
    criteria: str
    status: ReasonStatus
    impact: Impact
    explanation: str
    details: Optional[ReasonDetails] = None
    weight_contribution: float = Field(
        0.0,
        description="Additive contribution to totalScore (score * weight)"
    )


class TradeOffs(WireModel):
    """Strengths, weaknesses and differentiators of a ranked option."""
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    key_differentiators: list[str] = Field(default_factory=list)


class ScoredOption(WireModel):
    """An option with its weighted score, reasons and rank."""
    option_id: str
    name: str
    total_score: float
    criteria_scores: dict[str, CriterionScore] = Field(default_factory=dict)
    reasons: list[Reason] = Field(default_factory=list)
    constraint_compliance: ConstraintComplianceReport = Field(
        default_factory=ConstraintComplianceReport
    )
    rank: Optional[int] = None
    trade_offs: Optional[TradeOffs] = None


class TopRecommendation(WireModel):
    """The top-ranked option and how decisively it leads."""
    option_id: str
    confidence: float = Field(..., ge=0, le=1)
    reasoning: str


class ComparisonSummary(WireModel):
    """Counts and the top recommendation."""
    total_options_evaluated: int
    options_meeting_constraints: int
    top_recommendation: Optional[TopRecommendation] = None


class Explanations(WireModel):
    """Methodology text accompanying the results."""
    methodology: str
    scoring_breakdown: str
    trade_off_analysis: str


class KeyDecisionFactor(WireModel):
    """A criterion ranked by how much it separates the options."""
    criteria: str
    weight: float
    variance: float
    impact_score: float
    optimization: Optimization


class DecisionInsights(WireModel):
    """Overview of the decision landscape."""
    competitiveness: Competitiveness
    score_range: Optional[float] = None
    key_factors: list[KeyDecisionFactor] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)


class ComparisonResult(WireModel):
    """Complete output from the decision engine."""
    ranked_options: list[ScoredOption] = Field(default_factory=list)
    summary: ComparisonSummary
    explanations: Optional[Explanations] = None
    insights: DecisionInsights = Field(
        default_factory=lambda: DecisionInsights(competitiveness=Competitiveness.NO_OPTIONS)
    )
    # Compliance for every input option, including excluded ones
    constraint_results: dict[str, ConstraintComplianceReport] = Field(default_factory=dict)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
