"""Domain models for generators, render specs and render results."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .values import Value, stringify


def _scalar_text(value: Any) -> Any:
    # YAML 1.1 reads unquoted no, false, 0 as bool or int
    if isinstance(value, (bool, int, float)):
        return stringify(value)
    return value


class VariableSpec(BaseModel):
    """A variable declared by a generator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    description: str = Field(default="", description="Informational text")
    default: Optional[Value] = Field(
        default=None,
        description="String defaults are rendered as templates, structured ones used verbatim",
    )
    pattern: str = Field(
        default="", description="Regular expression the resolved value must fully match"
    )

    @field_validator("description", "pattern", mode="before")
    @classmethod
    def scalar_as_text(cls, value: Any) -> Any:
        return _scalar_text(value)


class TemplateSpec(BaseModel):
    """One source-to-target mapping of a generator."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    source: str = Field(..., description="Template path relative to the generator directory")
    target: str = Field(..., description="Output path template relative to the target directory")
    condition: str = Field(default="", description="Skip expression, empty means always render")
    just_copy: bool = Field(default=False, description="Copy the source byte-for-byte")
    with_items: list[Value] | None = Field(
        default=None, description="Render once per item, exposed as 'item'"
    )

    @field_validator("source", "target", "condition", mode="before")
    @classmethod
    def scalar_as_text(cls, value: Any) -> Any:
        return _scalar_text(value)


class GeneratorSpec(BaseModel):
    """A generator: ordered templates plus declared variables."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    templates: list[TemplateSpec] = Field(default_factory=list, description="Render order")
    variables: dict[str, VariableSpec] = Field(
        default_factory=dict, description="Declared variables by name"
    )


class RenderSpec(BaseModel):
    """Resolved parameter set for one concrete generation run."""

    model_config = ConfigDict(extra="forbid")

    generator: str = Field(..., description="Name of the governing generator")
    parameters: dict[str, Optional[Value]] = Field(
        default_factory=dict, description="Resolved parameter values"
    )


class Request(BaseModel):
    """Locations a call operates on."""

    source_dir: str = Field(..., description="Generator directory")
    target_dir: str = Field(..., description="Output directory")
    render_spec_file: str = Field(
        default="", description="Render spec file name, empty for the configured default"
    )


class FileResult(BaseModel):
    """Outcome for one produced or attempted output file."""

    success: bool
    relative_path: str
    errors: list[str] = Field(default_factory=list)


class Response(BaseModel):
    """Aggregate outcome of a call."""

    success: bool = False
    rendered_files: list[FileResult] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
