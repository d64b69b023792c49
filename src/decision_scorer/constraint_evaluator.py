"""Constraint Evaluator - Phase 1 of the Decision Engine.

Checks every option against every constraint. Options failing any
required constraint are excluded from scoring; every option still gets a
compliance report so exclusions can be explained.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from .app_logging import get_logger
from .config import EngineConfig
from .exceptions import FeatureTypeError
from .explainer import ExplanationGenerator
from .formatting import coerce_number, is_number, plain_text
from .paths import get_feature
from .schema import (
    Constraint,
    ConstraintComplianceReport,
    ConstraintOperator,
    Option,
)

logger = get_logger("constraint_evaluator")


@dataclass(frozen=True)
class EligibleOption:
    """An option that passed all required constraints, with its report."""
    option: Option
    compliance: ConstraintComplianceReport


@dataclass(frozen=True)
class ConstraintEvaluation:
    """Result of evaluating all constraints against all options."""
    eligible: list[EligibleOption] = field(default_factory=list)
    # Report for every input option id, including excluded ones
    reports: dict[str, ConstraintComplianceReport] = field(default_factory=dict)

    @property
    def excluded_ids(self) -> list[str]:
        return [option_id for option_id, report in self.reports.items() if not report.passed]


def strict_equals(left: Any, right: Any) -> bool:
    """Value equality without type coercion.

    Booleans only equal booleans, ints and floats compare numerically,
    anything else must share a type.
    """
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if is_number(left) and is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def _as_number(value: Any, criteria: str) -> float:
    number = coerce_number(value)
    if number is None:
        raise FeatureTypeError(value, criteria)
    return number


def _contains(actual: Any, expected: Any) -> bool:
    return plain_text(expected).lower() in plain_text(actual).lower()


def _is_member(actual: Any, expected: Any) -> bool:
    if isinstance(expected, (str, bytes)) or not isinstance(expected, Sequence):
        return False
    return any(strict_equals(actual, candidate) for candidate in expected)


_NUMERIC_CHECKS: dict[ConstraintOperator, Callable[[float, float], bool]] = {
    ConstraintOperator.LT: lambda a, b: a < b,
    ConstraintOperator.LTE: lambda a, b: a <= b,
    ConstraintOperator.GT: lambda a, b: a > b,
    ConstraintOperator.GTE: lambda a, b: a >= b,
}

_VALUE_CHECKS: dict[ConstraintOperator, Callable[[Any, Any], bool]] = {
    ConstraintOperator.EQ: strict_equals,
    ConstraintOperator.NEQ: lambda a, b: not strict_equals(a, b),
    ConstraintOperator.IN: _is_member,
    ConstraintOperator.CONTAINS: _contains,
}


class ConstraintEvaluator:
    """Filters options by hard requirements.

    Exclusion is decided by required constraints only; optional failures
    are recorded in the report but never exclude an option.
    """

    def __init__(
        self,
        explainer: Optional[ExplanationGenerator] = None,
        config: Optional[EngineConfig] = None,
    ):
        self.explainer = explainer or ExplanationGenerator(config)

    def evaluate(
        self,
        options: list[Option],
        constraints: list[Constraint],
    ) -> ConstraintEvaluation:
        """Evaluate all constraints for all options.

        Args:
            options: All options, in input order
            constraints: Constraints to apply (possibly empty)

        Returns:
            ConstraintEvaluation with eligible options (input order kept)
            and a report per option id
        """
        eligible = []
        reports = {}

        for option in options:
            report = self.check_option(option, constraints)
            reports[option.id] = report
            if report.passed:
                eligible.append(EligibleOption(option=option, compliance=report))
            else:
                logger.debug(
                    "Option %s excluded by required constraints: %s",
                    option.id, ", ".join(report.failed_constraints),
                )

        return ConstraintEvaluation(eligible=eligible, reports=reports)

    def check_option(
        self,
        option: Option,
        constraints: list[Constraint],
    ) -> ConstraintComplianceReport:
        """Build the compliance report for a single option."""
        passed = True
        failed = []
        reasons = []

        for constraint in constraints:
            satisfied = self.check_constraint(option, constraint)
            reasons.append(self.explainer.constraint_reason(option, constraint, satisfied))

            if not satisfied:
                failed.append(constraint.criteria)
                if constraint.required:
                    passed = False

        return ConstraintComplianceReport(
            passed=passed,
            failed_constraints=failed,
            constraint_reasons=reasons,
        )

    def check_constraint(self, option: Option, constraint: Constraint) -> bool:
        """Check one constraint. An absent feature always fails.

        Raises:
            FeatureTypeError: If a numeric operator meets a non-numeric value
        """
        value = get_feature(option.features, constraint.criteria)
        if value is None:
            return False

        operator = constraint.operator
        if operator in _NUMERIC_CHECKS:
            return _NUMERIC_CHECKS[operator](
                _as_number(value, constraint.criteria),
                _as_number(constraint.value, constraint.criteria),
            )
        return _VALUE_CHECKS[operator](value, constraint.value)
