"""Shared fixtures for the decision scorer tests."""

import pytest

from decision_scorer.config import reset_config
from decision_scorer.schema import Constraint, Option, Priority


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the default configuration."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def scenario_options() -> list[Option]:
    """Two options where each wins one criterion."""
    return [
        Option(id="opt1", name="Option 1", features={"cost": 100, "performance": 80}),
        Option(id="opt2", name="Option 2", features={"cost": 150, "performance": 90}),
    ]


@pytest.fixture
def scenario_priorities() -> list[Priority]:
    """Cost-heavy priorities for the two-option scenario."""
    return [
        Priority(criteria="cost", weight=0.6, optimization="minimize"),
        Priority(criteria="performance", weight=0.4, optimization="maximize"),
    ]


@pytest.fixture
def budget_options() -> list[Option]:
    """Three options, one of them over budget."""
    return [
        Option(id="small", name="Small Plan", features={"cost": 100, "uptime": 99.5, "tier": "basic"}),
        Option(id="medium", name="Medium Plan", features={"cost": 120, "uptime": 99.9, "tier": "standard"}),
        Option(id="large", name="Large Plan", features={"cost": 200, "uptime": 99.99, "tier": "premium"}),
    ]


@pytest.fixture
def budget_constraint() -> Constraint:
    return Constraint(criteria="cost", operator="lte", value=150, required=True)


@pytest.fixture
def valid_payload() -> dict:
    """A minimal valid request body."""
    return {
        "options": [
            {"id": "a", "name": "Alpha", "features": {"cost": 10, "speed": 5}},
            {"id": "b", "name": "Beta", "features": {"cost": 20, "speed": 9}},
        ],
        "constraints": [
            {"criteria": "cost", "operator": "lte", "value": 50},
        ],
        "priorities": [
            {"criteria": "cost", "weight": 0.5, "optimization": "minimize"},
            {"criteria": "speed", "weight": 0.5, "optimization": "maximize"},
        ],
    }
