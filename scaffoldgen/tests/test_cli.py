from __future__ import annotations

from pathlib import Path

import yaml
from typer.testing import CliRunner

from scaffoldgen.cli import app

runner = CliRunner()


def test_list(greet_generator: str, source_dir: Path) -> None:
    result = runner.invoke(app, ["list", str(source_dir)])

    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["greet"]


def test_list_with_trailing_slash_fails(source_dir: Path) -> None:
    result = runner.invoke(app, ["list", f"{source_dir}/"])

    assert result.exit_code == 1
    assert "must not contain trailing slash" in result.output


def test_spec_prints_yaml(greet_generator: str, source_dir: Path) -> None:
    result = runner.invoke(app, ["spec", str(source_dir), "greet"])

    assert result.exit_code == 0
    assert yaml.safe_load(result.stdout) == {
        "templates": [{"source": "greet.tmpl", "target": "greet.txt"}],
        "variables": {"name": {"description": "Who to greet"}},
    }


def test_values_then_render(greet_generator: str, source_dir: Path, target_dir: Path) -> None:
    values = runner.invoke(
        app, ["values", str(source_dir), str(target_dir), "greet", "--param", "name=Ada"]
    )
    rendered = runner.invoke(app, ["render", str(source_dir), str(target_dir)])

    assert values.exit_code == 0, values.output
    assert "generated-main.yaml" in values.stdout
    assert rendered.exit_code == 0, rendered.output
    assert "greet.txt" in rendered.stdout
    assert (target_dir / "greet.txt").read_text() == "Hello Ada"


def test_values_file_and_spec_file(
    greet_generator: str, source_dir: Path, target_dir: Path, tmp_path: Path
) -> None:
    values_file = tmp_path / "values.yaml"
    values_file.write_text("name: Grace\n")

    result = runner.invoke(
        app,
        [
            "values",
            str(source_dir),
            str(target_dir),
            "greet",
            "--values",
            str(values_file),
            "--spec-file",
            "greet.yaml",
        ],
    )

    assert result.exit_code == 0, result.output
    stored = yaml.safe_load((target_dir / "greet.yaml").read_text())
    assert stored == {"generator": "greet", "parameters": {"name": "Grace"}}


def test_values_rejects_malformed_param(greet_generator: str, source_dir: Path, target_dir: Path) -> None:
    result = runner.invoke(
        app, ["values", str(source_dir), str(target_dir), "greet", "--param", "name"]
    )

    assert result.exit_code == 2
    assert "KEY=VALUE" in result.output


def test_values_reports_missing_parameter(greet_generator: str, source_dir: Path, target_dir: Path) -> None:
    result = runner.invoke(app, ["values", str(source_dir), str(target_dir), "greet"])

    assert result.exit_code == 1
    assert "parameter 'name' is required but missing" in result.output


def test_defaults(greet_generator: str, source_dir: Path, target_dir: Path) -> None:
    result = runner.invoke(app, ["defaults", str(source_dir), str(target_dir), "greet"])

    assert result.exit_code == 0, result.output
    stored = yaml.safe_load((target_dir / "generated-main.yaml").read_text())
    assert stored["parameters"] == {"name": ""}


def test_render_failure_exits_non_zero(source_dir: Path, target_dir: Path) -> None:
    result = runner.invoke(app, ["render", str(source_dir), str(target_dir)])

    assert result.exit_code == 1
    assert "error reading render spec file" in result.output


def test_render_rejects_bad_mode(source_dir: Path, target_dir: Path) -> None:
    result = runner.invoke(app, ["render", str(source_dir), str(target_dir), "--mode", "9x"])

    assert result.exit_code == 2
    assert "Invalid octal mode" in result.output
