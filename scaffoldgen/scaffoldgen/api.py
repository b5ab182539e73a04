"""Public entry points."""

from __future__ import annotations

from typing import Any, Mapping

from .core.models import GeneratorSpec, Request, Response
from .core.settings import Settings
from .generation.logfacade import LoggingGenerator
from .generation.orchestrator import Generator


def create_generator(settings: Settings | None = None) -> LoggingGenerator:
    """Create a generator with call-boundary logging.

    Args:
        settings: Overrides for the environment-derived settings

    Returns:
        Ready-to-use generator
    """
    return LoggingGenerator(Generator(settings))


def find_generator_names(source_dir: str) -> list[str]:
    return create_generator().find_generator_names(source_dir)


def obtain_generator_spec(source_dir: str, generator_name: str) -> GeneratorSpec:
    return create_generator().obtain_generator_spec(source_dir, generator_name)


def write_render_spec_with_defaults(request: Request, generator_name: str) -> Response:
    return create_generator().write_render_spec_with_defaults(request, generator_name)


def write_render_spec_with_values(
    request: Request, generator_name: str, parameters: Mapping[str, Any]
) -> Response:
    return create_generator().write_render_spec_with_values(request, generator_name, parameters)


def render(request: Request) -> Response:
    return create_generator().render(request)
