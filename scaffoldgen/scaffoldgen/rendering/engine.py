"""Template rendering engine."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from jinja2 import Environment, StrictUndefined, Template, TemplateSyntaxError

from ..core.errors import TemplateExecutionError, TemplateParseError
from ..core.values import stringify
from . import functions

logger = logging.getLogger(__name__)


def create_environment() -> Environment:
    """Create a Jinja2 environment with the builtin helper library.

    Returns:
        Environment used for template bodies, target paths, conditions and
        string defaults
    """
    env = Environment(
        undefined=StrictUndefined,
        autoescape=False,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        finalize=stringify,
    )
    functions.register(env)
    return env


class TemplateUnit:
    """A single template source, copied through or rendered with Jinja2."""

    def __init__(
        self,
        source: bytes,
        name: str,
        *,
        just_copy: bool = False,
        environment: Environment | None = None,
    ) -> None:
        self.source = source
        self.name = name
        self.just_copy = just_copy
        self.environment = environment or create_environment()
        self._template: Template | None = None

    def parse(self) -> TemplateUnit:
        """Compile the template source.

        Returns:
            This unit, ready to render

        Raises:
            TemplateParseError: If the source is not UTF-8 or not a valid template
        """
        if self.just_copy:
            return self

        try:
            text = self.source.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TemplateParseError(f"template {self.name} is not valid UTF-8: {exc}") from exc

        try:
            self._template = self.environment.from_string(text)
        except TemplateSyntaxError as exc:
            raise TemplateParseError(
                f"template {self.name}: line {exc.lineno}: {exc.message}"
            ) from exc
        return self

    def render(self, parameters: Mapping[str, Any]) -> bytes:
        """Render against a parameter map.

        Args:
            parameters: Template context

        Returns:
            Rendered bytes, or the untouched source for copy-only units

        Raises:
            TemplateExecutionError: If evaluation fails
        """
        if self.just_copy:
            return self.source
        if self._template is None:
            self.parse()

        try:
            text = self._template.render(dict(parameters))  # type: ignore[union-attr]
        except Exception as exc:
            raise TemplateExecutionError(f"template {self.name}: {exc}") from exc
        return text.encode("utf-8")


def render_string(
    text: str,
    parameters: Mapping[str, Any],
    name: str,
    environment: Environment | None = None,
) -> str:
    """Render a standalone expression such as a target path or condition.

    Raises:
        TemplateParseError: If the expression does not compile
        TemplateExecutionError: If evaluation fails
    """
    logger.debug(f"Rendering expression {name}: {text!r}")
    unit = TemplateUnit(text.encode("utf-8"), name, environment=environment)
    return unit.parse().render(parameters).decode("utf-8")
