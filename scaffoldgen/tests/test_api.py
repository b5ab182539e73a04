from __future__ import annotations

import logging
from pathlib import Path

import pytest

import scaffoldgen
from scaffoldgen.core.errors import ConfigError, SpecLoadError
from scaffoldgen.core.models import Request
from scaffoldgen.core.settings import Settings
from scaffoldgen.generation.logfacade import LoggingGenerator


def test_create_generator_wraps_with_logging() -> None:
    generator = scaffoldgen.create_generator(Settings(render_spec_file="custom.yaml"))

    assert isinstance(generator, LoggingGenerator)
    assert generator.wrapped.settings.render_spec_file == "custom.yaml"


def test_public_functions_end_to_end(greet_generator: str, source_dir: Path, target_dir: Path) -> None:
    request = Request(source_dir=str(source_dir), target_dir=str(target_dir))

    assert scaffoldgen.find_generator_names(str(source_dir)) == ["greet"]
    assert list(scaffoldgen.obtain_generator_spec(str(source_dir), "greet").variables) == ["name"]
    assert scaffoldgen.write_render_spec_with_values(request, "greet", {"name": "Ada"}).success
    assert scaffoldgen.render(request).success
    assert (target_dir / "greet.txt").read_text() == "Hello Ada"


def test_defaults_then_render_uses_empty_string(greet_generator: str, request_: Request, target_dir: Path) -> None:
    assert scaffoldgen.write_render_spec_with_defaults(request_, "greet").success

    response = scaffoldgen.render(request_)

    assert response.success
    assert (target_dir / "greet.txt").read_text() == "Hello "


def test_obtain_generator_spec_raises(source_dir: Path) -> None:
    with pytest.raises(SpecLoadError):
        scaffoldgen.obtain_generator_spec(str(source_dir), "notthere")

    with pytest.raises(ConfigError):
        scaffoldgen.find_generator_names(f"{source_dir}/")


def test_logging_facade_reports_outcomes(
    greet_generator: str, request_: Request, caplog: pytest.LogCaptureFixture
) -> None:
    caplog.set_level(logging.DEBUG, logger="scaffoldgen")
    generator = scaffoldgen.create_generator()

    generator.write_render_spec_with_values(request_, "greet", {"name": "Ada"})
    generator.render(request_)
    generator.write_render_spec_with_values(request_, "greet", {"bogus": "x"})

    messages = [(r.levelno, r.getMessage()) for r in caplog.records if r.name.endswith("logfacade")]
    assert (logging.INFO, "write_render_spec_with_values succeeded: 1 file(s)") in messages
    assert (logging.INFO, "render succeeded: 1 file(s)") in messages
    assert (
        logging.WARNING,
        "write_render_spec_with_values failed: parameter 'name' is required but missing",
    ) in messages


def test_logging_facade_logs_failed_files(
    write_generator, write_render_spec, request_: Request, caplog: pytest.LogCaptureFixture
) -> None:
    write_generator(
        "broken",
        """
        templates:
          - source: missing.tmpl
            target: missing.txt
        """,
    )
    write_render_spec("generator: broken\n")
    caplog.set_level(logging.WARNING, logger="scaffoldgen")

    response = scaffoldgen.render(request_)

    assert not response.success
    assert any("missing.txt: failed to load template" in r.getMessage() for r in caplog.records)
