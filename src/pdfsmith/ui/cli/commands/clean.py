"""Implementation of the ``pdfsmith clean`` command."""

from __future__ import annotations

from pdfsmith.core.staging import cleanup_all_orphans, default_temp_directory

from .._options import TempDirOption
from ..state import get_cli_state


def clean(temp_dir: TempDirOption = None) -> None:
    """Delete temporary files left behind by previous renders.

    Files staged by renders still running in the same directory are removed
    too, so only run this when no render is in progress.
    """
    directory = temp_dir or default_temp_directory()
    removed = cleanup_all_orphans(directory)
    get_cli_state().console.print(
        f"{removed} temporary file(s) removed from {directory}", markup=False, soft_wrap=True
    )


__all__ = ["clean"]
