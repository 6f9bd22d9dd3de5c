"""Assemble the renderer argument vector for a job."""

from __future__ import annotations

from collections.abc import Sequence
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from .config import WrapperConfig
from .exceptions import StagingError, format_command
from .objects import DocumentObject
from .staging import TempResourceManager


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .job import Job


logger = logging.getLogger(__name__)

STDOUT_SENTINEL = "-"


def order_objects(
    objects: Sequence[DocumentObject], *, toc_first: bool
) -> list[DocumentObject]:
    """Return a render-order copy, with TOC objects stably moved first when asked."""
    if not toc_first:
        return list(objects)
    tocs = [obj for obj in objects if obj.is_toc]
    others = [obj for obj in objects if not obj.is_toc]
    return [*tocs, *others]


def destination_token(output_path: str | Path | None) -> str:
    return str(output_path) if output_path is not None else STDOUT_SENTINEL


class CommandBuilder:
    """Build the full renderer command line from a job and its objects."""

    def __init__(self, config: WrapperConfig) -> None:
        self.config = config

    def build(self, job: Job, stager: TempResourceManager | None = None) -> list[str]:
        """Return the argv for ``job``, staging inline markup on the way.

        A staging failure removes whatever this build already staged before
        the error propagates, so no process is ever spawned for it.
        """
        stager = stager or job.stager
        config = self.config
        argv: list[str] = []

        if config.xvfb is not None:
            argv.extend(config.xvfb.command_line())

        argv.extend(config.command_as_list())
        argv.extend(job.params.render())

        ordered = order_objects(job.objects, toc_first=config.always_put_toc_first)
        staged: list[DocumentObject] = []
        try:
            for obj in ordered:
                if obj.needs_staging:
                    stager.materialize(obj)
                    staged.append(obj)
                argv.extend(obj.contribute(job))
        except StagingError:
            stager.cleanup_job(staged)
            raise

        argv.append(destination_token(job.output_path))
        logger.debug("Command generated: %s", argv)
        return argv

    def build_string(self, job: Job, stager: TempResourceManager | None = None) -> str:
        return format_command(self.build(job, stager))


__all__ = [
    "STDOUT_SENTINEL",
    "CommandBuilder",
    "destination_token",
    "order_objects",
]
