"""Scaffoldgen - generator-driven code scaffolding.

Generators declare templates and variables in ``generator-<name>.yaml`` files.
A render spec records the resolved variables, rendering turns it into files.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .api import (
    create_generator,
    find_generator_names,
    obtain_generator_spec,
    render,
    write_render_spec_with_defaults,
    write_render_spec_with_values,
)
from .cli import main
from .core.models import FileResult, GeneratorSpec, RenderSpec, Request, Response

__all__ = [
    "FileResult",
    "GeneratorSpec",
    "RenderSpec",
    "Request",
    "Response",
    "create_generator",
    "find_generator_names",
    "main",
    "obtain_generator_spec",
    "render",
    "write_render_spec_with_defaults",
    "write_render_spec_with_values",
]
