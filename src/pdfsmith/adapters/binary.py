"""Locate the renderer executable on the host."""

from __future__ import annotations

import os
from pathlib import Path
import shutil


DEFAULT_BINARY = "wkhtmltopdf"
BINARY_ENV_VAR = "WKHTMLTOPDF_PATH"


def _looks_like_path(binary: str) -> bool:
    """Return True when ``binary`` already encodes a filesystem path."""
    if Path(binary).is_absolute():
        return True
    separators = [os.sep]
    if os.altsep:
        separators.append(os.altsep)
    return any(sep and sep in binary for sep in separators)


def find_executable(name: str = DEFAULT_BINARY) -> str:
    """Resolve the renderer binary.

    The ``WKHTMLTOPDF_PATH`` environment variable wins, then a ``PATH``
    lookup. When neither yields anything the bare name is returned so the
    spawn failure surfaces with the original command.
    """
    env_value = os.environ.get(BINARY_ENV_VAR, "").strip()
    if env_value:
        return env_value

    if _looks_like_path(name):
        return name

    try:
        resolved = shutil.which(name)
    except (OSError, ValueError):
        resolved = None
    return resolved or name


__all__ = ["BINARY_ENV_VAR", "DEFAULT_BINARY", "find_executable"]
