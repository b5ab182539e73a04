"""Call-boundary logging around a generator."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.errors import ScaffoldError
from ..core.models import GeneratorSpec, Request, Response
from .orchestrator import Generator

logger = logging.getLogger(__name__)


class LoggingGenerator:
    """Wraps a generator and logs entry and outcome of every operation."""

    def __init__(self, wrapped: Generator) -> None:
        self.wrapped = wrapped

    def find_generator_names(self, source_dir: str) -> list[str]:
        logger.debug(f"find_generator_names(source_dir={source_dir})")
        try:
            names = self.wrapped.find_generator_names(source_dir)
        except ScaffoldError as exc:
            logger.warning(f"find_generator_names failed: {exc}")
            raise
        logger.info(f"Found {len(names)} generator(s) in {source_dir}")
        return names

    def obtain_generator_spec(self, source_dir: str, generator_name: str) -> GeneratorSpec:
        logger.debug(
            f"obtain_generator_spec(source_dir={source_dir}, generator_name={generator_name})"
        )
        try:
            spec = self.wrapped.obtain_generator_spec(source_dir, generator_name)
        except ScaffoldError as exc:
            logger.warning(f"obtain_generator_spec failed: {exc}")
            raise
        logger.info(
            f"Loaded generator {generator_name}: {len(spec.templates)} template(s), "
            f"{len(spec.variables)} variable(s)"
        )
        return spec

    def write_render_spec_with_defaults(self, request: Request, generator_name: str) -> Response:
        logger.debug(f"write_render_spec_with_defaults({request!r}, generator_name={generator_name})")
        response = self.wrapped.write_render_spec_with_defaults(request, generator_name)
        return _log_response("write_render_spec_with_defaults", response)

    def write_render_spec_with_values(
        self, request: Request, generator_name: str, parameters: Mapping[str, Any]
    ) -> Response:
        logger.debug(
            f"write_render_spec_with_values({request!r}, generator_name={generator_name}, "
            f"parameters={sorted(parameters)})"
        )
        response = self.wrapped.write_render_spec_with_values(request, generator_name, parameters)
        return _log_response("write_render_spec_with_values", response)

    def render(self, request: Request) -> Response:
        logger.debug(f"render({request!r})")
        response = self.wrapped.render(request)
        return _log_response("render", response)


def _log_response(operation: str, response: Response) -> Response:
    if response.success:
        logger.info(f"{operation} succeeded: {len(response.rendered_files)} file(s)")
        return response

    logger.warning(f"{operation} failed: {'; '.join(response.errors)}")
    for result in response.rendered_files:
        if not result.success:
            logger.warning(f"  {result.relative_path}: {'; '.join(result.errors)}")
    return response
