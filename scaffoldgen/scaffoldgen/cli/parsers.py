"""CLI argument parsers and validators."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
import yaml


def parse_param(value: str) -> tuple[str, str]:
    """Parse a parameter argument in format KEY=VALUE."""
    if "=" not in value:
        raise typer.BadParameter(f"Must be KEY=VALUE, got: {value!r}")
    key, val = value.split("=", 1)
    if not key:
        raise typer.BadParameter(f"Missing parameter name in: {value!r}")
    return key, val


def parse_file_mode(value: str) -> int:
    """Parse octal file mode string."""
    try:
        return int(value, 8)
    except ValueError as e:
        raise typer.BadParameter(f"Invalid octal mode: {value!r}") from e


def parse_values_file(path: Path) -> dict[str, Any]:
    """Load parameter values from a YAML mapping file."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise typer.BadParameter(f"Cannot read values file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise typer.BadParameter(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise typer.BadParameter(f"Values file {path} must contain a mapping")
    return data
