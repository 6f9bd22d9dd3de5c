"""Render jobs: the public entry point driving the external renderer."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

from pdfsmith.adapters.process import DEFAULT_TIMEOUT, ProcessOutput, ProcessRunner

from .command import CommandBuilder
from .config import WrapperConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter
from .exceptions import format_command
from .objects import DocumentObject, ObjectKind, SourceType
from .params import ParameterSet, ParamLike
from .staging import TempResourceManager


logger = logging.getLogger(__name__)

MISSING_ASSETS_EXIT_CODE = 1


class Job:
    """A PDF assembled from pages, covers, and tables of contents.

    Jobs are single-writer: configure them from one thread, then render. A
    job keeps its objects between renders, so the same job can be rendered
    several times; inline markup is re-staged for every render and removed
    once it finishes, whatever the outcome.
    """

    def __init__(
        self,
        config: WrapperConfig | None = None,
        *,
        emitter: DiagnosticEmitter | None = None,
    ) -> None:
        self.config = config or WrapperConfig()
        self.params = ParameterSet()
        self._objects: list[DocumentObject] = []
        self._last_toc: DocumentObject | None = None
        self._timeout: int = DEFAULT_TIMEOUT
        self._success_values: frozenset[int] = frozenset({0})
        self._temp_directory: Path | None = None
        self._output_path: Path | None = None
        self.emitter: DiagnosticEmitter = emitter or LoggingEmitter(logger_obj=logger)
        logger.info("Initialized with %s", self.config)

    # Objects -----------------------------------------------------------------

    @property
    def objects(self) -> tuple[DocumentObject, ...]:
        return tuple(self._objects)

    def add_object(
        self,
        kind: ObjectKind | str,
        source: str = "",
        source_type: SourceType | str = SourceType.URL,
    ) -> DocumentObject:
        obj = DocumentObject(ObjectKind(kind), source, SourceType(source_type))
        self._objects.append(obj)
        if obj.is_toc:
            self._last_toc = obj
        return obj

    def add_page(self, source: str, source_type: SourceType | str = SourceType.URL) -> DocumentObject:
        return self.add_object(ObjectKind.PAGE, source, source_type)

    def add_page_from_url(self, source: str) -> DocumentObject:
        return self.add_page(source, SourceType.URL)

    def add_page_from_file(self, source: str | Path) -> DocumentObject:
        return self.add_page(str(source), SourceType.FILE)

    def add_page_from_string(self, source: str) -> DocumentObject:
        return self.add_page(source, SourceType.HTML)

    def add_cover_from_url(self, source: str) -> DocumentObject:
        return self.add_object(ObjectKind.COVER, source, SourceType.URL)

    def add_cover_from_file(self, source: str | Path) -> DocumentObject:
        return self.add_object(ObjectKind.COVER, str(source), SourceType.FILE)

    def add_cover_from_string(self, source: str) -> DocumentObject:
        return self.add_object(ObjectKind.COVER, source, SourceType.HTML)

    def add_toc(self) -> DocumentObject:
        return self.add_object(ObjectKind.TOC)

    # Parameters --------------------------------------------------------------

    def add_param(self, *params: ParamLike) -> None:
        """Add global flags, rendered before every object."""
        self.params.add_all(*params)

    def add_toc_param(self, *params: ParamLike) -> None:
        """Add flags to the most recently added table of contents.

        Prefer ``job.add_toc().add_param(...)`` when several are needed.
        """
        if self._last_toc is None:
            raise ValueError("No table of contents has been added to this job.")
        self._last_toc.add_param(*params)

    # Settings ----------------------------------------------------------------

    @property
    def timeout(self) -> int:
        """Seconds to wait for the renderer before killing it."""
        return self._timeout

    @timeout.setter
    def timeout(self, value: int) -> None:
        if value <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        self._timeout = value

    def set_timeout(self, value: int) -> None:
        self.timeout = value

    @property
    def success_values(self) -> frozenset[int]:
        return self._success_values

    def set_success_values(self, values: Iterable[int]) -> None:
        """Replace the accepted exit codes; 0 is always kept."""
        self._success_values = frozenset({0, *(int(value) for value in values)})

    @property
    def allow_missing_assets(self) -> bool:
        return MISSING_ASSETS_EXIT_CODE in self._success_values

    @allow_missing_assets.setter
    def allow_missing_assets(self, allow: bool) -> None:
        if allow:
            self._success_values = self._success_values | {MISSING_ASSETS_EXIT_CODE}
        else:
            self._success_values = self._success_values - {MISSING_ASSETS_EXIT_CODE}

    def set_allow_missing_assets(self) -> None:
        """Accept exit code 1, which the renderer uses when some assets failed to load."""
        self.allow_missing_assets = True

    @property
    def temp_directory(self) -> Path | None:
        return self._temp_directory

    @temp_directory.setter
    def temp_directory(self, value: str | Path | None) -> None:
        self._temp_directory = Path(value) if value is not None else None

    def set_temp_directory(self, value: str | Path | None) -> None:
        self.temp_directory = value

    @property
    def output_path(self) -> Path | None:
        return self._output_path

    @output_path.setter
    def output_path(self, value: str | Path | None) -> None:
        self._output_path = Path(value) if value is not None else None

    def set_output_path(self, value: str | Path | None) -> None:
        self.output_path = value

    @property
    def stager(self) -> TempResourceManager:
        return TempResourceManager(self._temp_directory, emitter=self.emitter)

    # Commands ----------------------------------------------------------------

    def get_command_as_list(self) -> list[str]:
        """Return the renderer argv; preview files staged for it are removed."""
        stager = self.stager
        try:
            return CommandBuilder(self.config).build(self, stager)
        finally:
            stager.cleanup_job(self._objects)

    def get_command(self) -> str:
        return format_command(self.get_command_as_list())

    # Rendering ---------------------------------------------------------------

    def _render(self) -> ProcessOutput:
        stager = self.stager
        runner = ProcessRunner(timeout=self._timeout, success_values=self._success_values)
        self.emitter.event(
            "render_started", {"objects": len(self._objects), "timeout": self._timeout}
        )
        try:
            argv = CommandBuilder(self.config).build(self, stager)
            output = runner.execute(argv)
        finally:
            stager.cleanup_job(self._objects)
        self.emitter.event(
            "render_completed",
            {
                "output": str(self._output_path) if self._output_path else None,
                "bytes": len(output.stdout),
                "returncode": output.returncode,
            },
        )
        return output

    def get_pdf(self) -> bytes:
        """Render and return the PDF written by the renderer to stdout."""
        return self._render().stdout

    def save_as(self, path: str | Path) -> Path:
        """Render in memory, then write the bytes to ``path``."""
        target = Path(path)
        payload = self.get_pdf()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(payload)
        logger.info("PDF successfully saved in %s", target.resolve())
        return target

    def save_as_direct(self, path: str | Path) -> Path:
        """Have the renderer write ``path`` itself, skipping the in-memory copy."""
        target = Path(path).resolve()
        self.output_path = target
        self._render()
        return target

    def clean_all_temp_files(self) -> int:
        """Sweep every tagged temp file, including ones other jobs are using."""
        return self.stager.cleanup_all_orphans()


__all__ = ["MISSING_ASSETS_EXIT_CODE", "Job"]
