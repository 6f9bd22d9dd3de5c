from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest

from pdfsmith.core.exceptions import CleanupWarning, StagingError
from pdfsmith.core.objects import DocumentObject, ObjectKind, SourceType
from pdfsmith.core.staging import (
    TEMPORARY_FILE_PREFIX,
    TempResourceManager,
    cleanup_all_orphans,
)


class RecordingEmitter:
    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[tuple[str, BaseException | None]] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append((message, exc))

    def error(self, message: str, exc: BaseException | None = None) -> None:
        raise AssertionError(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))


def _inline(markup: str = "<h1>Title</h1>") -> DocumentObject:
    return DocumentObject(ObjectKind.PAGE, markup, SourceType.HTML)


def test_materialize_writes_tagged_file(tmp_path: Path) -> None:
    manager = TempResourceManager(tmp_path)
    page = manager.materialize(_inline("<h1>Héllo</h1>"))

    assert page.resolved_path is not None
    assert page.resolved_path.parent == tmp_path
    assert page.resolved_path.name.startswith(TEMPORARY_FILE_PREFIX)
    assert page.resolved_path.suffix == ".html"
    assert page.resolved_path.read_text(encoding="utf-8") == "<h1>Héllo</h1>"


def test_materialize_gives_each_object_its_own_file(tmp_path: Path) -> None:
    manager = TempResourceManager(tmp_path)
    first = manager.materialize(_inline())
    second = manager.materialize(_inline())

    assert first.resolved_path != second.resolved_path


def test_materialize_ignores_file_and_url_sources(tmp_path: Path) -> None:
    manager = TempResourceManager(tmp_path)
    page = DocumentObject(ObjectKind.PAGE, "https://example.com", SourceType.URL)

    assert manager.materialize(page).resolved_path is None
    assert list(tmp_path.iterdir()) == []


def test_materialize_failure_raises_staging_error(tmp_path: Path) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    manager = TempResourceManager(blocker / "nested")

    with pytest.raises(StagingError):
        manager.materialize(_inline())


def test_cleanup_job_removes_staged_files(tmp_path: Path) -> None:
    manager = TempResourceManager(tmp_path)
    pages = [manager.materialize(_inline()), manager.materialize(_inline())]
    paths = [page.resolved_path for page in pages]

    assert manager.cleanup_job(pages) == 2
    assert all(path is not None and not path.exists() for path in paths)
    assert all(page.resolved_path is None for page in pages)


def test_cleanup_job_swallows_deletion_errors(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    emitter = RecordingEmitter()
    manager = TempResourceManager(tmp_path, emitter=emitter)
    page = manager.materialize(_inline())

    def refuse(self: Path, missing_ok: bool = False) -> None:
        raise PermissionError("read-only")

    monkeypatch.setattr(Path, "unlink", refuse)

    assert manager.cleanup_job([page]) == 0
    assert len(emitter.warnings) == 1
    message, exc = emitter.warnings[0]
    assert "Couldn't delete temp file" in message
    assert isinstance(exc, CleanupWarning)


def test_cleanup_all_orphans_only_removes_tagged_files(tmp_path: Path) -> None:
    for name in ("a", "b", "c"):
        (tmp_path / f"{TEMPORARY_FILE_PREFIX}{name}.html").write_text("x", encoding="utf-8")
    (tmp_path / "report.pdf").write_text("keep", encoding="utf-8")
    (tmp_path / "notes-pdfsmith.html").write_text("keep", encoding="utf-8")
    emitter = RecordingEmitter()

    removed = cleanup_all_orphans(tmp_path, emitter=emitter)

    assert removed == 3
    assert sorted(path.name for path in tmp_path.iterdir()) == [
        "notes-pdfsmith.html",
        "report.pdf",
    ]
    assert emitter.events == [
        ("temp_files_swept", {"count": 3, "directory": str(tmp_path)})
    ]


def test_cleanup_all_orphans_skips_directories(tmp_path: Path) -> None:
    (tmp_path / f"{TEMPORARY_FILE_PREFIX}dir").mkdir()

    assert cleanup_all_orphans(tmp_path) == 0
    assert (tmp_path / f"{TEMPORARY_FILE_PREFIX}dir").is_dir()


def test_manager_sweep_defaults_to_its_directory(tmp_path: Path) -> None:
    manager = TempResourceManager(tmp_path)
    manager.materialize(_inline())

    assert manager.cleanup_all_orphans() == 1
    assert list(tmp_path.iterdir()) == []
