"""Render orchestration: render specs in, generated files out."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from jinja2 import Environment
from pydantic import ValidationError

from ..core.errors import ParameterError, ScaffoldError
from ..core.models import (
    FileResult,
    GeneratorSpec,
    RenderSpec,
    Request,
    Response,
    TemplateSpec,
)
from ..core.settings import Settings, get_settings
from ..rendering.engine import TemplateUnit, create_environment, render_string
from ..repository.generatordir import GeneratorDirectory
from ..repository.targetdir import TargetDirectory
from . import parameters as params

logger = logging.getLogger(__name__)

SKIP_VALUES = frozenset({"false", "0", "no", "skip"})
RENDER_FAILED = "an error occurred during rendering, see individual files"


def condition_holds(rendered: str) -> bool:
    """Return False only for the exact, case-sensitive skip values."""
    return rendered not in SKIP_VALUES


class Generator:
    """Scaffolding operations over a generator directory and a target directory."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def _source(self, base_dir: str) -> GeneratorDirectory:
        return GeneratorDirectory(base_dir, self.settings)

    def _target(self, base_dir: str) -> TargetDirectory:
        return TargetDirectory(base_dir, self.settings)

    def find_generator_names(self, source_dir: str) -> list[str]:
        return self._source(source_dir).find_generator_names()

    def obtain_generator_spec(self, source_dir: str, generator_name: str) -> GeneratorSpec:
        return self._source(source_dir).obtain_generator_spec(generator_name)

    def write_render_spec_with_defaults(self, request: Request, generator_name: str) -> Response:
        """Write a render spec holding every variable's default.

        Variables without a default become empty strings. Defaults are not
        validated, they may be placeholders that fail the pattern on purpose.
        """
        try:
            source = self._source(request.source_dir)
            target = self._target(request.target_dir)
            spec = source.obtain_generator_spec(generator_name)
            values = params.resolve_with_fallback(spec, {}, "")
            render_spec = self._build_render_spec(generator_name, values)
            written = target.write_render_spec(render_spec, request.render_spec_file or None)
        except ScaffoldError as exc:
            return self._error_response(exc)
        return self._success_response([self._success_file(written)])

    def write_render_spec_with_values(
        self, request: Request, generator_name: str, parameters: Mapping[str, Any]
    ) -> Response:
        """Validate caller-supplied values and write them as a render spec."""
        try:
            source = self._source(request.source_dir)
            target = self._target(request.target_dir)
            spec = source.obtain_generator_spec(generator_name)
            values = params.resolve_with_fallback(spec, parameters, None)
            render_spec = self._build_render_spec(generator_name, values)
            params.resolve_and_validate(spec, render_spec)
            params.reject_unknown(spec, parameters)
            written = target.write_render_spec(render_spec, request.render_spec_file or None)
        except ScaffoldError as exc:
            return self._error_response(exc)
        return self._success_response([self._success_file(written)])

    def render(self, request: Request) -> Response:
        """Render every template of the generator named in the render spec.

        Failures before the first template abort with a top-level error.
        Failures of single templates are reported per file and rendering
        carries on with the next template or item.
        """
        environment = create_environment()
        try:
            source = self._source(request.source_dir)
            target = self._target(request.target_dir)
            render_spec = target.obtain_render_spec(request.render_spec_file or None)
            spec = source.obtain_generator_spec(render_spec.generator)
            params.reject_unknown(spec, render_spec.parameters)
            parameters = params.resolve_and_validate(spec, render_spec, environment)
        except ScaffoldError as exc:
            return self._error_response(exc)

        results: list[FileResult] = []
        for template in spec.templates:
            results.extend(
                self._render_template(template, parameters, source, target, environment)
            )

        if all(result.success for result in results):
            return self._success_response(results)
        return Response(success=False, rendered_files=results, errors=[RENDER_FAILED])

    # --- helpers

    def _render_template(
        self,
        template: TemplateSpec,
        parameters: Mapping[str, Any],
        source: GeneratorDirectory,
        target: TargetDirectory,
        environment: Environment,
    ) -> list[FileResult]:
        template_name = template.source.replace("/", "_")
        try:
            contents = source.read_file(template.source)
        except ScaffoldError as exc:
            return [
                self._error_file(
                    template.target, f"failed to load template {template.source}: {exc}"
                )
            ]

        try:
            unit = TemplateUnit(
                contents, template.source, just_copy=template.just_copy, environment=environment
            ).parse()
        except ScaffoldError as exc:
            return [
                self._error_file(
                    template.target, f"failed to parse template {template.source}: {exc}"
                )
            ]

        if not template.with_items:
            result = self._render_iteration(
                template, unit, parameters, template_name, "", target, environment
            )
            return [result] if result is not None else []

        results = []
        for counter, item in enumerate(template.with_items, start=1):
            result = self._render_iteration(
                template,
                unit,
                params.with_item(parameters, item),
                f"{template_name}_{counter}",
                f" for item #{counter}",
                target,
                environment,
            )
            if result is not None:
                results.append(result)
        return results

    def _render_iteration(
        self,
        template: TemplateSpec,
        unit: TemplateUnit,
        parameters: Mapping[str, Any],
        name: str,
        item_suffix: str,
        target: TargetDirectory,
        environment: Environment,
    ) -> FileResult | None:
        try:
            target_path = render_string(template.target, parameters, f"{name}_path", environment)
        except ScaffoldError as exc:
            return self._error_file(
                template.target,
                f"error evaluating target path from '{template.target}'{item_suffix}: {exc}",
            )

        if template.condition:
            try:
                rendered = render_string(
                    template.condition, parameters, f"{name}_condition", environment
                )
            except ScaffoldError as exc:
                return self._error_file(
                    target_path,
                    f"error evaluating condition from '{template.condition}'{item_suffix}: {exc}",
                )
            if not condition_holds(rendered):
                logger.debug(f"Skipping {target_path}{item_suffix}: condition is {rendered!r}")
                return None

        try:
            contents = unit.render(parameters)
        except ScaffoldError as exc:
            return self._error_file(
                target_path,
                f"error evaluating template for target '{target_path}'{item_suffix}: {exc}",
            )

        try:
            target.write_file(target_path, contents)
        except ScaffoldError as exc:
            return self._error_file(target_path, f"{exc}{item_suffix}")
        return self._success_file(target_path)

    @staticmethod
    def _build_render_spec(generator_name: str, values: dict[str, Any]) -> RenderSpec:
        try:
            return RenderSpec(generator=generator_name, parameters=values)
        except ValidationError as exc:
            raise ParameterError(f"unsupported parameter value: {exc}") from exc

    @staticmethod
    def _error_response(exc: ScaffoldError) -> Response:
        return Response(success=False, errors=[str(exc)])

    @staticmethod
    def _success_response(results: list[FileResult]) -> Response:
        return Response(success=True, rendered_files=results)

    @staticmethod
    def _success_file(relative_path: str) -> FileResult:
        return FileResult(success=True, relative_path=relative_path)

    @staticmethod
    def _error_file(relative_path: str, message: str) -> FileResult:
        return FileResult(success=False, relative_path=relative_path, errors=[message])
