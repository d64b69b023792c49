"""Tests for the decision-scorer CLI."""

import json

import pytest
from click.testing import CliRunner

from decision_scorer import __version__
from decision_scorer.cli import main
from decision_scorer.samples import SAMPLE_REQUESTS


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def request_file(tmp_path, valid_payload):
    path = tmp_path / "request.json"
    path.write_text(json.dumps(valid_payload))
    return path


class TestGroup:
    """Tests for group-level options."""

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_lists_commands(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("compare", "validate", "generate-sample", "init-config"):
            assert command in result.output


class TestCompare:
    """Tests for the 'compare' command."""

    def test_formatted_output(self, runner, request_file):
        result = runner.invoke(main, ["compare", "-i", str(request_file)])

        assert result.exit_code == 0, result.output
        assert "Comparison Summary" in result.output
        assert "Ranked Options" in result.output
        assert "Alpha" in result.output

    def test_verbose_output(self, runner, request_file):
        result = runner.invoke(main, ["compare", "-i", str(request_file), "-v"])

        assert result.exit_code == 0, result.output
        assert "Used weighted_sum algorithm" in result.output

    def test_json_output_to_file(self, runner, request_file, tmp_path):
        out = tmp_path / "response.json"
        result = runner.invoke(main, ["compare", "-i", str(request_file), "-j", "-o", str(out)])

        assert result.exit_code == 0, result.output
        response = json.loads(out.read_text())
        assert response["status"] == "success"
        assert len(response["results"]["rankedOptions"]) == 2

    def test_max_results_override(self, runner, request_file, tmp_path):
        out = tmp_path / "response.json"
        result = runner.invoke(main, ["compare", "-i", str(request_file), "-n", "1", "-j", "-o", str(out)])

        assert result.exit_code == 0, result.output
        ranked = json.loads(out.read_text())["results"]["rankedOptions"]
        assert len(ranked) == 1
        assert ranked[0]["rank"] == 1

    def test_invalid_request_exits_with_error(self, runner, tmp_path, valid_payload):
        valid_payload["priorities"][0]["weight"] = 0.9
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(valid_payload))

        result = runner.invoke(main, ["compare", "-i", str(path)])

        assert result.exit_code == 1
        assert "Validation failed" in result.output
        assert "Priority weights must sum to 1.0" in result.output

    def test_unreadable_json(self, runner, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(main, ["compare", "-i", str(path)])

        assert result.exit_code == 1
        assert "Error reading request" in result.output

    def test_config_option(self, runner, request_file, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("trade_offs:\n  max_strengths: 0\n")
        out = tmp_path / "response.json"

        result = runner.invoke(main, ["-c", str(config), "compare", "-i", str(request_file), "-j", "-o", str(out)])

        assert result.exit_code == 0, result.output
        ranked = json.loads(out.read_text())["results"]["rankedOptions"]
        assert all(o["tradeOffs"]["strengths"] == [] for o in ranked)


class TestValidate:
    """Tests for the 'validate' command."""

    def test_valid_request(self, runner, request_file):
        result = runner.invoke(main, ["validate", "-i", str(request_file)])

        assert result.exit_code == 0
        assert "Request valid" in result.output

    def test_invalid_request(self, runner, tmp_path, valid_payload):
        valid_payload["options"] = valid_payload["options"][:1]
        path = tmp_path / "bad.json"
        path.write_text(json.dumps(valid_payload))

        result = runner.invoke(main, ["validate", "-i", str(path)])

        assert result.exit_code == 1
        assert "Request invalid" in result.output
        assert "At least two options are required" in result.output


class TestGenerateSample:
    """Tests for the 'generate-sample' command."""

    @pytest.mark.parametrize("name", sorted(SAMPLE_REQUESTS))
    def test_writes_sample(self, runner, tmp_path, name):
        out = tmp_path / f"{name}.json"
        result = runner.invoke(main, ["generate-sample", "-s", name, "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert json.loads(out.read_text()) == SAMPLE_REQUESTS[name]

    def test_unknown_sample(self, runner, tmp_path):
        result = runner.invoke(main, ["generate-sample", "-s", "nope", "-o", str(tmp_path / "x.json")])
        assert result.exit_code != 0

    def test_generated_sample_can_be_compared(self, runner, tmp_path):
        out = tmp_path / "cloud.json"
        runner.invoke(main, ["generate-sample", "-s", "cloud", "-o", str(out)])

        result = runner.invoke(main, ["compare", "-i", str(out)])
        assert result.exit_code == 0, result.output


class TestInitConfig:
    """Tests for the 'init-config' command."""

    def test_creates_config(self, runner, tmp_path):
        out = tmp_path / "scorer-config.yaml"
        result = runner.invoke(main, ["init-config", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert out.read_text().startswith("# Decision Scorer Configuration")

    def test_refuses_to_overwrite(self, runner, tmp_path):
        out = tmp_path / "scorer-config.yaml"
        out.write_text("existing")

        result = runner.invoke(main, ["init-config", "-o", str(out)])

        assert result.exit_code == 1
        assert "already exists" in result.output
        assert out.read_text() == "existing"

    def test_force_overwrites(self, runner, tmp_path):
        out = tmp_path / "scorer-config.yaml"
        out.write_text("existing")

        result = runner.invoke(main, ["init-config", "-o", str(out), "-f"])

        assert result.exit_code == 0
        assert out.read_text() != "existing"
