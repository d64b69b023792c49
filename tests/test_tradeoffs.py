"""Tests for trade-off analysis."""

import pytest

from decision_scorer.config import EngineConfig, TradeOffConfig
from decision_scorer.engine import DecisionEngine
from decision_scorer.schema import Constraint, CriterionScore, Option, Priority, ScoredOption
from decision_scorer.tradeoffs import TradeOffAnalyzer, cohort_averages


@pytest.fixture
def four_criteria():
    """One option better than the other on four equally weighted criteria."""
    options = [
        Option(id="top", name="Top", features={"a": 10, "b": 10, "c": 10, "d": 10}),
        Option(id="low", name="Low", features={"a": 1, "b": 1, "c": 1, "d": 1}),
    ]
    priorities = [
        Priority(criteria=name, weight=0.25, optimization="maximize")
        for name in ("a", "b", "c", "d")
    ]
    return options, priorities


class TestStrengthsAndWeaknesses:
    """Tests for strengths and weaknesses."""

    def test_scenario_trade_offs(self, scenario_options, scenario_priorities):
        first, second = DecisionEngine().compare(scenario_options, [], scenario_priorities).ranked_options

        assert first.trade_offs.strengths == ["Strong cost: $100.000 (very low)"]
        assert first.trade_offs.weaknesses == ["Weak performance: 80 (poor)"]
        assert second.trade_offs.strengths == ["Strong performance: 90 (excellent)"]
        assert second.trade_offs.weaknesses == ["Weak cost: $150.000 (very high)"]

    def test_lists_are_capped_at_three(self, four_criteria):
        options, priorities = four_criteria
        top, low = DecisionEngine().compare(options, [], priorities).ranked_options

        assert top.trade_offs.strengths == [
            "Strong a: 10.0 (excellent)",
            "Strong b: 10.0 (excellent)",
            "Strong c: 10.0 (excellent)",
        ]
        assert top.trade_offs.weaknesses == []
        assert len(low.trade_offs.weaknesses) == 3
        assert low.trade_offs.weaknesses[0] == "Weak a: 1.0 (poor)"

    def test_strengths_sorted_by_contribution(self):
        options = [
            Option(id="x", name="X", features={"light": 10, "heavy": 10}),
            Option(id="y", name="Y", features={"light": 0, "heavy": 0}),
        ]
        priorities = [
            Priority(criteria="light", weight=0.2, optimization="maximize"),
            Priority(criteria="heavy", weight=0.8, optimization="maximize"),
        ]
        x = DecisionEngine().compare(options, [], priorities).ranked_options[0]
        assert [s.split(":")[0] for s in x.trade_offs.strengths] == ["Strong heavy", "Strong light"]


class TestDifferentiators:
    """Tests for key differentiators and contextual notes."""

    def test_scenario_differentiators(self, scenario_options, scenario_priorities):
        first, second = DecisionEngine().compare(scenario_options, [], scenario_priorities).ranked_options

        assert first.trade_offs.key_differentiators == [
            "superior cost: $100.000 vs competitors",
            "inferior performance: 80 vs competitors",
            "Top overall recommendation based on your priorities",
        ]
        assert second.trade_offs.key_differentiators == [
            "inferior cost: $150.000 vs competitors",
            "superior performance: 90 vs competitors",
            "Ranked #2 among viable options",
        ]

    def test_truncation_drops_contextual_notes_first(self, four_criteria):
        options, priorities = four_criteria
        top = DecisionEngine().compare(options, [], priorities).ranked_options[0]

        assert top.trade_offs.key_differentiators == [
            "superior a: 10.0 vs competitors",
            "superior b: 10.0 vs competitors",
            "superior c: 10.0 vs competitors",
            "superior d: 10.0 vs competitors",
        ]

    def test_optional_failures_are_counted(self, budget_options):
        constraints = [Constraint(criteria="uptime", operator="gte", value=99.9, required=False)]
        priorities = [Priority(criteria="cost", weight=1.0, optimization="minimize")]
        small, medium, large = DecisionEngine().compare(budget_options, constraints, priorities).ranked_options

        assert small.trade_offs.key_differentiators == [
            "superior cost: $100.000 vs competitors",
            "Top overall recommendation based on your priorities",
            "Fails 1 optional constraint(s)",
        ]
        # 80 is exactly 20 above the mean of 60, which does not count
        assert medium.trade_offs.key_differentiators == ["Ranked #2 among viable options"]
        assert large.trade_offs.key_differentiators == [
            "inferior cost: $200.000 vs competitors",
            "Ranked #3 among viable options",
        ]

    def test_no_note_below_third_place(self):
        options = [Option(id=f"o{i}", name=f"O{i}", features={"cost": 5}) for i in range(4)]
        priorities = [Priority(criteria="cost", weight=1.0, optimization="minimize")]
        ranked = DecisionEngine().compare(options, [], priorities).ranked_options

        assert ranked[3].trade_offs.key_differentiators == []

    def test_configurable_limits(self, four_criteria):
        options, priorities = four_criteria
        config = EngineConfig(trade_offs=TradeOffConfig(max_strengths=1, max_differentiators=2))
        top = DecisionEngine(config).compare(options, [], priorities).ranked_options[0]

        assert len(top.trade_offs.strengths) == 1
        assert len(top.trade_offs.key_differentiators) == 2


class TestCohort:
    """Tests for cohort averages."""

    def test_cohort_averages_skip_unscored_options(self):
        options = [
            ScoredOption(option_id="a", name="A", total_score=0,
                         criteria_scores={"x": CriterionScore(score=80, normalized_value=0.8, raw_value=8)}),
            ScoredOption(option_id="b", name="B", total_score=0,
                         criteria_scores={"x": CriterionScore(score=20, normalized_value=0.2, raw_value=2)}),
            ScoredOption(option_id="c", name="C", total_score=0),
        ]
        assert cohort_averages(options) == {"x": 50.0}

    def test_analyze_returns_copies(self, scenario_options, scenario_priorities):
        engine = DecisionEngine()
        result = engine.compare(scenario_options, [], scenario_priorities)
        stripped = [o.model_copy(update={"trade_offs": None}) for o in result.ranked_options]

        annotated = TradeOffAnalyzer().analyze(stripped)

        assert all(o.trade_offs is None for o in stripped)
        assert annotated == result.ranked_options

    def test_empty_ranking(self):
        assert TradeOffAnalyzer().analyze([]) == []
