"""Read-only access to a directory of generators."""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..core.errors import FileReadError, SpecLoadError, SpecParseError
from ..core.models import GeneratorSpec
from ..core.settings import Settings, get_settings
from . import validate_base_dir
from .yamlio import load_yaml

logger = logging.getLogger(__name__)


class GeneratorDirectory:
    """A source directory holding ``generator-<name>.yaml`` files and their templates."""

    def __init__(self, base_dir: str | Path, settings: Settings | None = None) -> None:
        self.base_dir = validate_base_dir(base_dir, "generator")
        self.settings = settings or get_settings()

    def spec_file_name(self, generator_name: str) -> str:
        return (
            f"{self.settings.generator_file_prefix}{generator_name}"
            f"{self.settings.generator_file_suffix}"
        )

    def find_generator_names(self) -> list[str]:
        """List the generators declared in this directory.

        Returns:
            Sorted generator names

        Raises:
            SpecLoadError: If the directory cannot be listed
        """
        prefix = self.settings.generator_file_prefix
        suffix = self.settings.generator_file_suffix
        try:
            entries = sorted(p.name for p in self.base_dir.iterdir() if p.is_file())
        except OSError as exc:
            raise SpecLoadError(
                f"error reading generator directory {self.base_dir}: {exc}"
            ) from exc

        names = [
            entry[len(prefix) : len(entry) - len(suffix)]
            for entry in entries
            if entry.startswith(prefix)
            and entry.endswith(suffix)
            and len(entry) > len(prefix) + len(suffix)
        ]
        logger.debug(f"Found {len(names)} generator(s) in {self.base_dir}")
        return names

    def obtain_generator_spec(self, generator_name: str) -> GeneratorSpec:
        """Load and validate a generator spec.

        Args:
            generator_name: Name between the spec file prefix and suffix

        Returns:
            Parsed generator spec

        Raises:
            SpecLoadError: If the spec file cannot be read
            SpecParseError: If it is not valid YAML, repeats a key or violates the schema
        """
        file_name = self.spec_file_name(generator_name)
        path = self.base_dir / file_name
        logger.debug(f"Loading generator spec: {path}")

        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SpecLoadError(f"error reading generator spec file {file_name}: {exc}") from exc

        try:
            data = load_yaml(raw)
            return GeneratorSpec.model_validate(data if data is not None else {})
        except (yaml.YAMLError, ValidationError) as exc:
            raise SpecParseError(
                f"error parsing generator spec from file {file_name}: {exc}"
            ) from exc

    def read_file(self, relative_path: str) -> bytes:
        """Read a template file relative to the generator directory.

        Raises:
            FileReadError: If the file cannot be read
        """
        path = self.base_dir / relative_path
        try:
            return path.read_bytes()
        except OSError as exc:
            raise FileReadError(f"error reading template file {relative_path}: {exc}") from exc
