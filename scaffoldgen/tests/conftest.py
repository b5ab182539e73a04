from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from scaffoldgen.core.models import Request
from scaffoldgen.core.settings import Settings
from scaffoldgen.generation.orchestrator import Generator

@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    path = tmp_path / "generators"
    path.mkdir()
    return path


@pytest.fixture
def target_dir(tmp_path: Path) -> Path:
    path = tmp_path / "output"
    path.mkdir()
    return path


@pytest.fixture
def write_generator(source_dir: Path) -> Callable[..., Path]:
    """Write ``generator-<name>.yaml`` plus template files into the source directory."""

    def _write(name: str, spec_yaml: str, templates: dict[str, str | bytes] | None = None) -> Path:
        spec_path = source_dir / f"generator-{name}.yaml"
        spec_path.write_text(textwrap.dedent(spec_yaml), encoding="utf-8")
        for relative, content in (templates or {}).items():
            path = source_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return spec_path

    return _write


@pytest.fixture
def request_(source_dir: Path, target_dir: Path) -> Request:
    return Request(source_dir=str(source_dir), target_dir=str(target_dir))


@pytest.fixture
def generator() -> Generator:
    return Generator(Settings())


@pytest.fixture
def write_render_spec(target_dir: Path) -> Callable[[str], Path]:
    def _write(content: str, file_name: str = "generated-main.yaml") -> Path:
        path = target_dir / file_name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def greet_generator(write_generator: Callable[..., Path]) -> str:
    """A generator rendering ``greet.txt`` from a required ``name`` variable."""
    write_generator(
        "greet",
        """
        templates:
          - source: greet.tmpl
            target: greet.txt
        variables:
          name:
            description: Who to greet
        """,
        {"greet.tmpl": "Hello {{ name }}"},
    )
    return "greet"
