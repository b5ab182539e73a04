"""Access to the directory generated files and render specs are written to."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

import yaml
from pydantic import ValidationError

from ..core.errors import ReadError, WriteError
from ..core.models import RenderSpec
from ..core.settings import Settings, get_settings
from ..rendering.io import atomic_write_bytes
from . import validate_base_dir
from .yamlio import dump_yaml, load_yaml

logger = logging.getLogger(__name__)


class TargetDirectory:
    """The output directory of a generation run."""

    def __init__(self, base_dir: str | Path, settings: Settings | None = None) -> None:
        self.base_dir = validate_base_dir(base_dir, "target")
        self.settings = settings or get_settings()

    def _render_spec_name(self, file_name: str | None) -> str:
        return file_name or self.settings.render_spec_file

    def _resolve(self, relative_path: str) -> Path:
        posix = PurePosixPath(relative_path.replace("\\", "/"))
        if not relative_path or posix.is_absolute() or ".." in posix.parts:
            raise WriteError(f"target path '{relative_path}' must stay inside the target directory")
        return self.base_dir.joinpath(*posix.parts)

    def write_render_spec(self, render_spec: RenderSpec, file_name: str | None = None) -> str:
        """Persist a render spec as YAML.

        Args:
            render_spec: Resolved parameters to persist
            file_name: Override for the configured render spec file name

        Returns:
            File name the render spec was written to, relative to the target directory

        Raises:
            WriteError: If the file cannot be written
        """
        name = self._render_spec_name(file_name)
        text = dump_yaml(render_spec.model_dump(mode="json"))
        self.write_file(name, text.encode("utf-8"))
        logger.debug(f"Wrote render spec for {render_spec.generator} to {name}")
        return name

    def obtain_render_spec(self, file_name: str | None = None) -> RenderSpec:
        """Read a previously written render spec.

        Raises:
            ReadError: If the file is missing, not valid YAML or violates the schema
        """
        name = self._render_spec_name(file_name)
        path = self.base_dir / name
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ReadError(f"error reading render spec file {name}: {exc}") from exc

        try:
            data = load_yaml(raw)
            return RenderSpec.model_validate(data if data is not None else {})
        except (yaml.YAMLError, ValidationError) as exc:
            raise ReadError(f"error parsing render spec from file {name}: {exc}") from exc

    def write_file(self, relative_path: str, data: bytes) -> None:
        """Atomically write a file below the target directory, creating parents.

        Raises:
            WriteError: If the path escapes the target directory or the write fails
        """
        path = self._resolve(relative_path)
        try:
            atomic_write_bytes(path, data, mode=self.settings.file_mode)
        except OSError as exc:
            raise WriteError(f"error writing file {relative_path}: {exc}") from exc
        logger.debug(f"Wrote {len(data)} byte(s) to {path}")
