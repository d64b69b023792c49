"""Tests for configuration loading."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from decision_scorer.config import (
    EngineConfig,
    find_config_file,
    get_config,
    load_config,
    reset_config,
    save_default_config,
)
from decision_scorer.engine import DecisionEngine
from decision_scorer.schema import DegeneratePolicy, Option, Priority


class TestDefaults:
    """Tests for the default configuration."""

    def test_default_values(self):
        config = get_config()

        assert config.performance_bands.excellent == 80
        assert config.comparison_bands.extreme == 80
        assert config.trade_offs.max_differentiators == 4
        assert config.trade_offs.differentiator_threshold == 20
        assert config.confidence.clear_leader_gap == 15
        assert config.normalization.degenerate_policy == DegeneratePolicy.NEUTRAL
        assert config.insights.very_close_range == 10

    def test_get_config_is_shared(self):
        assert get_config() is get_config()


class TestLoading:
    """Tests for YAML loading and saving."""

    def test_load_partial_config(self, tmp_path):
        path = tmp_path / "scorer-config.yaml"
        path.write_text("normalization:\n  degenerate_policy: zero\ntrade_offs:\n  max_strengths: 2\n")

        config = load_config(path)

        assert config.normalization.degenerate_policy == DegeneratePolicy.ZERO
        assert config.trade_offs.max_strengths == 2
        assert config.trade_offs.max_weaknesses == 3
        assert get_config() is config

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path) == EngineConfig()

    def test_invalid_value_raises(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("normalization:\n  degenerate_policy: raw\n")
        with pytest.raises(ValidationError):
            load_config(path)

    def test_reset(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("insights:\n  max_key_factors: 1\n")
        load_config(path)
        reset_config()
        assert get_config().insights.max_key_factors == 3

    def test_save_default_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "scorer-config.yaml"
        save_default_config(path)

        text = path.read_text()
        assert text.startswith("# Decision Scorer Configuration")
        assert yaml.safe_load(text)["normalization"]["degenerate_policy"] == "neutral"
        assert load_config(path) == EngineConfig()

    def test_loaded_config_reaches_engine(self, tmp_path):
        path = tmp_path / "c.yaml"
        path.write_text("normalization:\n  degenerate_policy: zero\n")
        load_config(path)

        options = [
            Option(id="a", name="A", features={"support": 5}),
            Option(id="b", name="B", features={"support": 5}),
        ]
        priorities = [Priority(criteria="support", weight=1.0, optimization="minimize")]
        result = DecisionEngine().compare(options, [], priorities)

        assert [o.total_score for o in result.ranked_options] == [100.0, 100.0]


class TestFindConfigFile:
    """Tests for the config lookup order."""

    @pytest.fixture
    def isolated(self, tmp_path, monkeypatch):
        monkeypatch.delenv("DECISION_SCORER_CONFIG", raising=False)
        monkeypatch.setenv("HOME", str(tmp_path / "home"))
        workdir = tmp_path / "work"
        workdir.mkdir()
        monkeypatch.chdir(workdir)
        return tmp_path

    def test_nothing_found(self, isolated):
        assert find_config_file() is None

    def test_environment_variable_first(self, isolated, monkeypatch):
        env_file = isolated / "env.yaml"
        env_file.write_text("")
        Path("scorer-config.yaml").write_text("")
        monkeypatch.setenv("DECISION_SCORER_CONFIG", str(env_file))

        assert find_config_file() == env_file

    def test_missing_env_file_falls_through(self, isolated, monkeypatch):
        monkeypatch.setenv("DECISION_SCORER_CONFIG", str(isolated / "missing.yaml"))
        Path("scorer-config.yml").write_text("")

        assert find_config_file() == Path("scorer-config.yml")

    def test_user_config(self, isolated):
        user_config = isolated / "home" / ".config" / "decision-scorer" / "config.yaml"
        user_config.parent.mkdir(parents=True)
        user_config.write_text("")

        assert find_config_file() == user_config
