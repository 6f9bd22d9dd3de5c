"""Primary public API for pdfsmith."""

from __future__ import annotations

from pdfsmith.core import (
    MISSING_ASSETS_EXIT_CODE,
    STDOUT_SENTINEL,
    TEMPORARY_FILE_PREFIX,
    CleanupWarning,
    CommandBuilder,
    DiagnosticEmitter,
    DocumentObject,
    Job,
    LoggingEmitter,
    NullEmitter,
    ObjectKind,
    Param,
    ParameterSet,
    RendererNotFoundError,
    RenderingError,
    RenderProcessError,
    RenderTimeoutError,
    SourceType,
    StagingError,
    TempResourceManager,
    WrapperConfig,
    XvfbConfig,
    cleanup_all_orphans,
)
from pdfsmith.adapters.process import ProcessOutput, ProcessRunner  # noqa: I001 - after core
from pdfsmith.version import get_version


__version__ = get_version()

__all__ = [
    "MISSING_ASSETS_EXIT_CODE",
    "STDOUT_SENTINEL",
    "TEMPORARY_FILE_PREFIX",
    "CleanupWarning",
    "CommandBuilder",
    "DiagnosticEmitter",
    "DocumentObject",
    "Job",
    "LoggingEmitter",
    "NullEmitter",
    "ObjectKind",
    "Param",
    "ParameterSet",
    "ProcessOutput",
    "ProcessRunner",
    "RenderProcessError",
    "RenderTimeoutError",
    "RendererNotFoundError",
    "RenderingError",
    "SourceType",
    "StagingError",
    "TempResourceManager",
    "WrapperConfig",
    "XvfbConfig",
    "__version__",
    "cleanup_all_orphans",
    "get_version",
]
