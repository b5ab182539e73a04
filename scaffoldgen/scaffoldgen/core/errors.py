"""Error taxonomy.

Errors that are not tied to a single output file abort the whole call and are
reported as one top-level error. Errors tied to a file are collected into that
file's result.
"""

from __future__ import annotations


class ScaffoldError(Exception):
    """Base class for all scaffoldgen errors."""


class ConfigError(ScaffoldError):
    """Raised when a source or target directory path is unusable."""


class SpecLoadError(ScaffoldError):
    """Raised when a generator spec file cannot be read."""


class SpecParseError(ScaffoldError):
    """Raised when a generator spec file is not valid YAML or violates the schema."""


class ParameterError(ScaffoldError):
    """Raised for missing, non-matching or unknown parameters."""


class SpecAuthoringError(ScaffoldError):
    """Raised when the generator itself is malformed (bad default or pattern)."""


class FileReadError(ScaffoldError):
    """Raised when a template file cannot be read from the generator directory."""


class TemplateParseError(ScaffoldError):
    """Raised when a template cannot be compiled."""


class TemplateExecutionError(ScaffoldError):
    """Raised when a compiled template fails while rendering."""


class ReadError(ScaffoldError):
    """Raised when a render spec cannot be read from the target directory."""


class WriteError(ScaffoldError):
    """Raised when a file cannot be written to the target directory."""
