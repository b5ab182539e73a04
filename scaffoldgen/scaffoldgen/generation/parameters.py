"""Resolution and validation of generator parameters."""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from jinja2 import Environment

from ..core.errors import (
    ParameterError,
    SpecAuthoringError,
    TemplateExecutionError,
    TemplateParseError,
)
from ..core.models import GeneratorSpec, RenderSpec, VariableSpec
from ..core.values import stringify
from ..rendering.engine import create_environment, render_string

logger = logging.getLogger(__name__)

ITEM_KEY = "item"


def render_default(variable_name: str, default: str, environment: Environment | None = None) -> str:
    """Render a string default as a standalone template with no parameters.

    Raises:
        SpecAuthoringError: If the default is not a valid template
    """
    try:
        return render_string(default, {}, f"__defaultvalue_{variable_name}", environment)
    except (TemplateParseError, TemplateExecutionError) as exc:
        raise SpecAuthoringError(
            f"variable declaration {variable_name} has invalid default "
            f"(this is an error in the generator spec): {exc}"
        ) from exc


def default_value(
    variable_name: str, variable: VariableSpec, environment: Environment | None = None
) -> Any:
    """Return the default of a variable, or None when it declares none.

    String defaults are rendered, structured defaults are returned unchanged.
    """
    if isinstance(variable.default, str):
        return render_default(variable_name, variable.default, environment)
    return variable.default


def resolve_with_fallback(
    spec: GeneratorSpec,
    supplied: Mapping[str, Any],
    nil_default: Any,
    environment: Environment | None = None,
) -> dict[str, Any]:
    """Fill every declared variable from supplied values or defaults.

    Defaults are not checked against their pattern.

    Args:
        spec: Generator spec declaring the variables
        supplied: Values given by the caller, None counts as absent
        nil_default: Value for variables with neither a supplied value nor a default
        environment: Jinja2 environment for string defaults

    Returns:
        Parameter map covering every declared variable

    Raises:
        SpecAuthoringError: If a string default fails to render
    """
    environment = environment or create_environment()
    parameters: dict[str, Any] = {}
    for name, variable in spec.variables.items():
        value = supplied.get(name)
        if value is None:
            value = default_value(name, variable, environment)
        if value is None:
            value = nil_default
        parameters[name] = value
    return parameters


def validate_value(name: str, variable: VariableSpec, value: Any) -> None:
    """Check a resolved value against required-ness and the variable's pattern.

    Raises:
        ParameterError: If the value is missing or does not match
        SpecAuthoringError: If the pattern is not a valid regular expression
    """
    if value is None:
        raise ParameterError(f"parameter '{name}' is required but missing")
    if not variable.pattern:
        return
    try:
        compiled = re.compile(variable.pattern)
    except re.error as exc:
        raise SpecAuthoringError(
            f"variable declaration {name} has invalid pattern "
            f"(this is an error in the generator spec, not the render request): {exc}"
        ) from exc
    if compiled.fullmatch(stringify(value)) is None:
        raise ParameterError(
            f"value for parameter '{name}' does not match pattern {variable.pattern}"
        )


def resolve_and_validate(
    spec: GeneratorSpec,
    render_spec: RenderSpec,
    environment: Environment | None = None,
) -> dict[str, Any]:
    """Build the validated parameter map a render runs with.

    Values present in the render spec win, even when they are None; missing
    entries fall back to defaults.

    Raises:
        ParameterError: If a value is missing or violates its pattern
        SpecAuthoringError: If a default or pattern is malformed
    """
    environment = environment or create_environment()
    parameters: dict[str, Any] = {}
    for name, variable in spec.variables.items():
        if name in render_spec.parameters:
            value = render_spec.parameters[name]
        else:
            value = default_value(name, variable, environment)
        validate_value(name, variable, value)
        parameters[name] = value
    logger.debug(f"Validated {len(parameters)} parameter(s) for {render_spec.generator}")
    return parameters


def reject_unknown(spec: GeneratorSpec, supplied: Mapping[str, Any]) -> None:
    """Fail on any supplied name the generator does not declare.

    Raises:
        ParameterError: Naming the first unknown key
    """
    for name in supplied:
        if name not in spec.variables:
            raise ParameterError(
                f"parameter '{name}' is not allowed according to generator spec"
            )


def with_item(parameters: Mapping[str, Any], item: Any) -> dict[str, Any]:
    """Derive the parameter map for one with-items iteration."""
    return {**parameters, ITEM_KEY: item}
