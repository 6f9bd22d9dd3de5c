"""Temporary files backing inline markup sources.

The renderer only accepts URLs or paths, so inline markup is written to a
tagged file in the temp directory and referenced by path. Every staged file
carries :data:`TEMPORARY_FILE_PREFIX` so that :func:`cleanup_all_orphans`
can sweep leftovers from crashed processes.
"""

from __future__ import annotations

from collections.abc import Iterable
import logging
import os
from pathlib import Path
import tempfile

from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import CleanupWarning, StagingError
from .objects import DocumentObject


logger = logging.getLogger(__name__)

TEMPORARY_FILE_PREFIX = "pdfsmith-"
TEMPORARY_FILE_SUFFIX = ".html"


def default_temp_directory() -> Path:
    return Path(tempfile.gettempdir())


class TempResourceManager:
    """Stage inline markup and release it once the render is over."""

    def __init__(
        self,
        temp_directory: str | Path | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self._temp_directory = Path(temp_directory) if temp_directory is not None else None
        self.emitter: DiagnosticEmitter = emitter or LoggingEmitter(logger_obj=logger)

    @property
    def directory(self) -> Path:
        """Directory receiving staged files for this manager."""
        return self._temp_directory or default_temp_directory()

    def materialize(self, obj: DocumentObject) -> DocumentObject:
        """Write inline markup to a fresh tagged file and record its path."""
        if not obj.needs_staging:
            return obj

        directory = self.directory
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, name = tempfile.mkstemp(
                prefix=TEMPORARY_FILE_PREFIX,
                suffix=TEMPORARY_FILE_SUFFIX,
                dir=directory,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(obj.source)
        except OSError as exc:
            raise StagingError(
                f"Unable to stage inline markup in '{directory}': {exc}"
            ) from exc

        obj.resolved_path = Path(name)
        logger.debug("Staged inline %s markup at %s", obj.identifier, obj.resolved_path)
        return obj

    def cleanup_job(self, objects: Iterable[DocumentObject]) -> int:
        """Remove the staged file of every inline object; never raises."""
        removed = 0
        for obj in objects:
            if not obj.needs_staging or obj.resolved_path is None:
                continue
            path = obj.resolved_path
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                self.emitter.warning(
                    f"Couldn't delete temp file {path}",
                    CleanupWarning(str(exc)),
                )
                continue
            obj.resolved_path = None
            removed += 1
            logger.debug("Deleted temp file at %s", path)
        return removed

    def cleanup_all_orphans(self, temp_dir: str | Path | None = None) -> int:
        return cleanup_all_orphans(temp_dir or self.directory, emitter=self.emitter)


def cleanup_all_orphans(
    temp_dir: str | Path | None = None,
    *,
    emitter: DiagnosticEmitter | None = None,
) -> int:
    """Delete every tagged file in ``temp_dir``, whichever job created it.

    Not coordinated with renders in flight: a file staged by a running job
    in the same directory is removed as well.
    """
    emitter = emitter or LoggingEmitter(logger_obj=logger)
    directory = Path(temp_dir) if temp_dir is not None else default_temp_directory()
    logger.debug("Cleaning up temporary files in %s...", directory)

    try:
        candidates = sorted(directory.glob(f"{TEMPORARY_FILE_PREFIX}*"))
    except OSError as exc:
        emitter.warning(f"Couldn't list temp directory {directory}", CleanupWarning(str(exc)))
        return 0

    removed = 0
    for path in candidates:
        if not path.is_file():
            continue
        try:
            path.unlink()
        except OSError as exc:
            emitter.warning(f"Couldn't delete temp file {path}", CleanupWarning(str(exc)))
            continue
        removed += 1

    emitter.event("temp_files_swept", {"count": removed, "directory": str(directory)})
    return removed


__all__ = [
    "TEMPORARY_FILE_PREFIX",
    "TEMPORARY_FILE_SUFFIX",
    "TempResourceManager",
    "cleanup_all_orphans",
    "default_temp_directory",
]
