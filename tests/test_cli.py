"""CLI commands via Typer's CliRunner."""
import json

import yaml

from app_spec import get_example_configs
from cli.main import EXIT_INVALID, EXIT_UNREADABLE, app


def _write(tmp_path, data, name="app.yaml"):
    path = tmp_path / name
    path.write_text(yaml.safe_dump(data))
    return str(path)


def test_validate_valid_config(runner, tmp_path, minimal_config):
    result = runner.invoke(app, ["validate", _write(tmp_path, minimal_config)])
    assert result.exit_code == 0
    assert "is valid (build: image)" in result.output


def test_validate_reports_dockerfile_build(runner, tmp_path, full_config):
    result = runner.invoke(app, ["validate", _write(tmp_path, full_config)])
    assert result.exit_code == 0
    assert "is valid (build: dockerfile)" in result.output


def test_validate_invalid_config_lists_violations(runner, tmp_path, minimal_config):
    del minimal_config["service"]
    minimal_config["releases"][0]["action"]["command"] = []
    result = runner.invoke(app, ["validate", _write(tmp_path, minimal_config)])
    assert result.exit_code == EXIT_INVALID
    assert "2 violation(s)" in result.output
    assert "releases[0].action.command: must contain at least one element [required]" in result.output
    assert "service: is required [required]" in result.output


def test_validate_json_output(runner, tmp_path, minimal_config):
    minimal_config["service"]["scale"] = {"min": -1, "max": 2, "metric": {"type": "cpu", "threshold": 50}}
    result = runner.invoke(app, ["validate", "--json", _write(tmp_path, minimal_config)])
    assert result.exit_code == EXIT_INVALID
    data = json.loads(result.stdout)
    assert data["valid"] is False
    assert data["violations"] == [{
        "path": "service.scale.min",
        "kind": "bound_violation",
        "rule": "min=0",
        "message": "must be >= 0 (got -1)",
        "value": -1,
    }]


def test_validate_missing_file(runner, tmp_path):
    result = runner.invoke(app, ["validate", str(tmp_path / "nope.yaml")])
    assert result.exit_code == EXIT_UNREADABLE
    assert "not found" in result.output


def test_validate_undecodable_file(runner, tmp_path, minimal_config):
    minimal_config["service"]["http"] = [{"target_port": "eighty"}]
    result = runner.invoke(app, ["validate", _write(tmp_path, minimal_config)])
    assert result.exit_code == EXIT_UNREADABLE


def test_stages_default(runner, tmp_path, minimal_config):
    result = runner.invoke(app, ["stages", _write(tmp_path, minimal_config)])
    assert result.exit_code == 0
    assert "default stage" in result.output
    assert "production: branch -> main" in result.output


def test_stages_declared(runner, tmp_path, full_config):
    result = runner.invoke(app, ["stages", _write(tmp_path, full_config)])
    assert result.exit_code == 0
    assert "staging: branch -> develop" in result.output
    assert "default stage" not in result.output


def test_example_lists_names(runner):
    result = runner.invoke(app, ["example"])
    assert result.exit_code == 0
    assert result.output.split() == sorted(get_example_configs())


def test_example_prints_yaml(runner):
    result = runner.invoke(app, ["example", "minimal"])
    assert result.exit_code == 0
    assert yaml.safe_load(result.stdout) == get_example_configs()["minimal"]


def test_example_unknown(runner):
    result = runner.invoke(app, ["example", "nope"])
    assert result.exit_code == 1
    assert "not found" in result.output
