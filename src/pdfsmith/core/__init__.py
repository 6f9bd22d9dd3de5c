"""Core building blocks: objects, parameters, staging, command assembly, jobs."""

from __future__ import annotations

from .command import STDOUT_SENTINEL, CommandBuilder, order_objects
from .config import WrapperConfig, XvfbConfig
from .diagnostics import DiagnosticEmitter, LoggingEmitter, NullEmitter
from .exceptions import (
    CleanupWarning,
    RendererNotFoundError,
    RenderingError,
    RenderProcessError,
    RenderTimeoutError,
    StagingError,
)
from .job import MISSING_ASSETS_EXIT_CODE, Job
from .objects import DocumentObject, ObjectKind, SourceType
from .params import Param, ParameterSet
from .staging import TEMPORARY_FILE_PREFIX, TempResourceManager, cleanup_all_orphans


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
    "RenderProcessError",
    "RenderTimeoutError",
    "RendererNotFoundError",
    "RenderingError",
    "SourceType",
    "StagingError",
    "TempResourceManager",
    "WrapperConfig",
    "XvfbConfig",
    "cleanup_all_orphans",
    "order_objects",
]
