"""Generator and target directory access."""

from __future__ import annotations

from pathlib import Path

from ..core.errors import ConfigError


def validate_base_dir(base_dir: str | Path, kind: str) -> Path:
    """Reject directory paths with a trailing separator.

    Args:
        base_dir: Directory path as given by the caller
        kind: "generator" or "target", used in the error message

    Returns:
        The directory as a Path

    Raises:
        ConfigError: If the path ends with a separator
    """
    raw = str(base_dir)
    if raw.endswith(("/", "\\")):
        raise ConfigError(
            f"invalid {kind} directory: baseDir {raw} must not contain trailing slash"
        )
    return Path(raw)
