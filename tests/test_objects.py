from __future__ import annotations

from pathlib import Path

import pytest

from pdfsmith.core.exceptions import StagingError
from pdfsmith.core.objects import DocumentObject, ObjectKind, SourceType


def test_page_contributes_params_then_identifier_then_source() -> None:
    page = DocumentObject(ObjectKind.PAGE, "https://example.com", SourceType.URL)
    page.add_param(("zoom", "1.5"), "disable-javascript")

    assert page.contribute() == [
        "--zoom",
        "1.5",
        "--disable-javascript",
        "page",
        "https://example.com",
    ]


def test_cover_uses_cover_identifier() -> None:
    cover = DocumentObject(ObjectKind.COVER, "cover.html", SourceType.FILE)

    assert cover.contribute() == ["cover", "cover.html"]


def test_toc_has_no_source_argument() -> None:
    toc = DocumentObject(ObjectKind.TOC)
    toc.add_param(("toc-header-text", "Contents"))

    assert toc.contribute() == ["--toc-header-text", "Contents", "toc"]
    assert toc.is_toc
    assert not toc.needs_staging


def test_inline_markup_uses_staged_path(tmp_path: Path) -> None:
    page = DocumentObject(ObjectKind.PAGE, "<p>Hello</p>", SourceType.HTML)
    page.resolved_path = tmp_path / "pdfsmith-abc.html"

    assert page.is_staged
    assert page.contribute() == ["page", str(tmp_path / "pdfsmith-abc.html")]


def test_unstaged_inline_markup_is_rejected() -> None:
    page = DocumentObject(ObjectKind.PAGE, "<p>Hello</p>", SourceType.HTML)

    with pytest.raises(StagingError):
        page.contribute()


def test_kinds_accept_plain_strings() -> None:
    page = DocumentObject(ObjectKind("cover"), "x", SourceType("file"))

    assert page.kind is ObjectKind.COVER
    assert page.source_type is SourceType.FILE
