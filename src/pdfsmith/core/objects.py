"""Document objects contributing arguments to the renderer command."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from .exceptions import StagingError
from .params import ParameterSet, ParamLike


if TYPE_CHECKING:  # pragma: no cover - typing only
    from .job import Job


class SourceType(str, Enum):
    """Where an object's content comes from."""

    URL = "url"
    FILE = "file"
    HTML = "html"


class ObjectKind(str, Enum):
    """Closed set of objects understood by the renderer."""

    PAGE = "page"
    COVER = "cover"
    TOC = "toc"


@dataclass(slots=True)
class DocumentObject:
    """A page, cover, or table of contents with its own flags.

    ``resolved_path`` is only populated for inline markup once it has been
    staged to disk; it is the value placed on the command line in place of
    the raw markup.
    """

    kind: ObjectKind
    source: str = ""
    source_type: SourceType = SourceType.URL
    params: ParameterSet = field(default_factory=ParameterSet)
    resolved_path: Path | None = None

    @property
    def identifier(self) -> str:
        return self.kind.value

    @property
    def is_toc(self) -> bool:
        return self.kind is ObjectKind.TOC

    @property
    def needs_staging(self) -> bool:
        return self.kind is not ObjectKind.TOC and self.source_type is SourceType.HTML

    @property
    def is_staged(self) -> bool:
        return self.needs_staging and self.resolved_path is not None

    def add_param(self, *params: ParamLike) -> DocumentObject:
        self.params.add_all(*params)
        return self

    def resolved_source(self) -> str:
        if not self.needs_staging:
            return self.source
        if self.resolved_path is None:
            raise StagingError(f"Inline markup for {self.identifier} object has not been staged.")
        return str(self.resolved_path)

    def contribute(self, job: Job | None = None) -> list[str]:
        """Return the tokens this object adds to the renderer command."""
        return _CONTRIBUTORS[self.kind](self, job)


def _source_contribution(obj: DocumentObject, job: Any) -> list[str]:
    return [*obj.params.render(), obj.identifier, obj.resolved_source()]


def _toc_contribution(obj: DocumentObject, job: Any) -> list[str]:
    return [*obj.params.render(), obj.identifier]


_CONTRIBUTORS = {
    ObjectKind.PAGE: _source_contribution,
    ObjectKind.COVER: _source_contribution,
    ObjectKind.TOC: _toc_contribution,
}


__all__ = [
    "DocumentObject",
    "ObjectKind",
    "SourceType",
]
