"""Tests for the constraint evaluator."""

import pytest

from decision_scorer.constraint_evaluator import (
    _NUMERIC_CHECKS,
    _VALUE_CHECKS,
    ConstraintEvaluator,
    strict_equals,
)
from decision_scorer.exceptions import FeatureTypeError
from decision_scorer.schema import Constraint, ConstraintOperator, ConstraintStatus, Option


@pytest.fixture
def option() -> Option:
    return Option(
        id="pg",
        name="Managed Postgres",
        features={
            "cost": 100,
            "tier": "gold",
            "tags": "Managed,HA",
            "managed": True,
            "replicas": 2.0,
            "version": "15",
            "storage": {"iops": 3000},
        },
    )


@pytest.fixture
def evaluator() -> ConstraintEvaluator:
    return ConstraintEvaluator()


class TestOperators:
    """Every operator against one option."""

    @pytest.mark.parametrize("criteria, operator, value, expected", [
        ("cost", "lt", 150, True),
        ("cost", "lt", 100, False),
        ("cost", "lte", 100, True),
        ("cost", "gt", 50, True),
        ("cost", "gt", 100, False),
        ("cost", "gte", 100, True),
        ("version", "gte", 14, True),
        ("storage.iops", "gte", 2000, True),
        ("tier", "eq", "gold", True),
        ("tier", "eq", "Gold", False),
        ("replicas", "eq", 2, True),
        ("managed", "eq", True, True),
        ("managed", "eq", 1, False),
        ("cost", "eq", "100", False),
        ("tier", "neq", "silver", True),
        ("managed", "neq", True, False),
        ("tier", "in", ["gold", "platinum"], True),
        ("tier", "in", ["silver"], False),
        ("tier", "in", "gold", False),
        ("managed", "in", [1], False),
        ("tags", "contains", "managed", True),
        ("tags", "contains", "serverless", False),
        ("managed", "contains", "TRUE", True),
    ])
    def test_operator(self, evaluator, option, criteria, operator, value, expected):
        constraint = Constraint(criteria=criteria, operator=operator, value=value)
        assert evaluator.check_constraint(option, constraint) is expected

    @pytest.mark.parametrize("operator", list(ConstraintOperator))
    def test_absent_feature_fails_for_every_operator(self, evaluator, option, operator):
        constraint = Constraint(criteria="latency", operator=operator, value=1)
        assert evaluator.check_constraint(option, constraint) is False

    def test_every_operator_has_a_check(self):
        assert set(_NUMERIC_CHECKS) | set(_VALUE_CHECKS) == set(ConstraintOperator)
        assert not set(_NUMERIC_CHECKS) & set(_VALUE_CHECKS)

    def test_numeric_operator_on_text_raises(self, evaluator, option):
        constraint = Constraint(criteria="tier", operator="lt", value=5)
        with pytest.raises(FeatureTypeError, match="tier"):
            evaluator.check_constraint(option, constraint)

    @pytest.mark.parametrize("value", ["", "   "])
    def test_numeric_operator_on_blank_string_raises(self, evaluator, value):
        blank = Option(id="blank", name="Blank", features={"cost": value})
        constraint = Constraint(criteria="cost", operator="gte", value=0)
        with pytest.raises(FeatureTypeError):
            evaluator.check_constraint(blank, constraint)


class TestStrictEquals:
    """Tests for equality without coercion."""

    @pytest.mark.parametrize("left, right, expected", [
        (1, 1.0, True),
        (True, True, True),
        (True, 1, False),
        (0, False, False),
        ("1", 1, False),
        ("a", "a", True),
        (None, None, True),
    ])
    def test_strict_equals(self, left, right, expected):
        assert strict_equals(left, right) is expected


class TestEvaluate:
    """Tests for filtering options and building compliance reports."""

    def test_required_failure_excludes_option(self, evaluator, budget_options, budget_constraint):
        evaluation = evaluator.evaluate(budget_options, [budget_constraint])

        assert [e.option.id for e in evaluation.eligible] == ["small", "medium"]
        assert evaluation.excluded_ids == ["large"]

    def test_every_option_gets_a_report(self, evaluator, budget_options, budget_constraint):
        evaluation = evaluator.evaluate(budget_options, [budget_constraint])

        assert list(evaluation.reports) == ["small", "medium", "large"]
        large = evaluation.reports["large"]
        assert large.passed is False
        assert large.failed_constraints == ["cost"]
        assert large.constraint_reasons[0].status == ConstraintStatus.FAILED

    def test_optional_failure_is_reported_but_not_excluding(self, evaluator, budget_options):
        constraint = Constraint(criteria="uptime", operator="gte", value=99.9, required=False)
        evaluation = evaluator.evaluate(budget_options, [constraint])

        assert len(evaluation.eligible) == 3
        small = evaluation.reports["small"]
        assert small.passed is True
        assert small.failed_constraints == ["uptime"]
        assert small.failed_optional_count == 1

    def test_no_constraints_keeps_everything(self, evaluator, budget_options):
        evaluation = evaluator.evaluate(budget_options, [])

        assert len(evaluation.eligible) == 3
        assert all(r.passed and not r.constraint_reasons for r in evaluation.reports.values())

    def test_failed_constraints_keep_constraint_order(self, evaluator, budget_options):
        constraints = [
            Constraint(criteria="uptime", operator="gte", value=99.999, required=False),
            Constraint(criteria="cost", operator="lt", value=50),
        ]
        report = evaluator.evaluate(budget_options, constraints).reports["medium"]
        assert report.failed_constraints == ["uptime", "cost"]

    def test_eligible_option_carries_its_report(self, evaluator, budget_options, budget_constraint):
        evaluation = evaluator.evaluate(budget_options, [budget_constraint])
        first = evaluation.eligible[0]
        assert first.compliance is evaluation.reports["small"]


class TestConstraintExplanations:
    """Tests for per-constraint explanation text."""

    def test_met_requirement(self, evaluator, budget_options, budget_constraint):
        report = evaluator.check_option(budget_options[0], [budget_constraint])
        reason = report.constraint_reasons[0]

        assert reason.explanation == (
            "Small Plan cost ($100.000) meets the required requirement of being "
            "less than or equal to $150.000"
        )
        assert reason.actual_value == 100
        assert reason.constraint_value == 150
        assert reason.required is True

    def test_unmet_optional_requirement(self, evaluator, budget_options):
        constraint = Constraint(criteria="tier", operator="in", value=["premium"], required=False)
        reason = evaluator.check_option(budget_options[0], [constraint]).constraint_reasons[0]

        assert reason.explanation == (
            "Small Plan tier (basic) does not meet the optional requirement of being "
            "one of premium"
        )

    def test_absent_feature_message(self, evaluator, budget_options):
        constraint = Constraint(criteria="latency", operator="lt", value=10)
        reason = evaluator.check_option(budget_options[1], [constraint]).constraint_reasons[0]

        assert reason.explanation == "Medium Plan has no latency data available for required constraint"
        assert reason.actual_value is None
        assert reason.status == ConstraintStatus.FAILED
