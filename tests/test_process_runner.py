from __future__ import annotations

from collections.abc import Callable
import os
from pathlib import Path
import time

import pytest

from pdfsmith.adapters import process as process_mod
from pdfsmith.adapters.process import ProcessRunner
from pdfsmith.core.exceptions import (
    RendererNotFoundError,
    RenderProcessError,
    RenderTimeoutError,
)


Command = Callable[[str], list[str]]


def test_execute_returns_stdout_bytes(python_command: Command) -> None:
    argv = python_command(
        "import sys\n"
        "sys.stdout.buffer.write(b'%PDF-1.4 body')\n"
        "sys.stderr.write('Loading pages (1/6)')\n"
    )

    output = ProcessRunner(timeout=10).execute(argv)

    assert output.stdout == b"%PDF-1.4 body"
    assert output.stderr == b"Loading pages (1/6)"
    assert output.returncode == 0


def test_large_stdout_and_stderr_drain_without_deadlock(python_command: Command) -> None:
    size = 2 * 1024 * 1024
    argv = python_command(
        "import sys\n"
        f"sys.stderr.buffer.write(b'e' * {size})\n"
        "sys.stderr.flush()\n"
        f"sys.stdout.buffer.write(b'o' * {size})\n"
        "sys.stdout.flush()\n"
        f"sys.stderr.buffer.write(b'e' * {size})\n"
    )

    output = ProcessRunner(timeout=30).execute(argv)

    assert len(output.stdout) == size
    assert len(output.stderr) == 2 * size


def test_timeout_kills_the_process(python_command: Command, tmp_path: Path) -> None:
    pid_file = tmp_path / "pid"
    argv = python_command(
        "import os, time\n"
        f"open({str(pid_file)!r}, 'w').write(str(os.getpid()))\n"
        "time.sleep(60)\n"
    )

    started = time.monotonic()
    with pytest.raises(RenderTimeoutError) as excinfo:
        ProcessRunner(timeout=2).execute(argv)
    elapsed = time.monotonic() - started

    assert elapsed < 2 + process_mod.KILL_GRACE
    assert excinfo.value.timeout == 2
    assert excinfo.value.command.endswith(".py")

    pid = int(pid_file.read_text(encoding="utf-8"))
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)


def test_accepted_exit_code_is_success(python_command: Command) -> None:
    argv = python_command(
        "import sys\n"
        "sys.stdout.buffer.write(b'pdf')\n"
        "sys.stderr.write('Exit with code 1 due to network error: HostNotFoundError')\n"
        "sys.exit(1)\n"
    )

    output = ProcessRunner(timeout=10, success_values={0, 1}).execute(argv)

    assert output.stdout == b"pdf"
    assert output.returncode == 1


def test_rejected_exit_code_carries_diagnostics(python_command: Command) -> None:
    argv = python_command(
        "import sys\n"
        "sys.stdout.buffer.write(b'partial')\n"
        "sys.stderr.write('Failed loading page')\n"
        "sys.exit(1)\n"
    )

    with pytest.raises(RenderProcessError) as excinfo:
        ProcessRunner(timeout=10).execute(argv)

    error = excinfo.value
    assert error.returncode == 1
    assert error.stderr == b"Failed loading page"
    assert error.stdout == b"partial"
    assert error.command == " ".join(argv)
    assert "Failed loading page" in str(error)


def test_zero_is_always_accepted(python_command: Command) -> None:
    runner = ProcessRunner(timeout=10, success_values=[2])

    assert runner.success_values == frozenset({0, 2})
    assert runner.execute(python_command("pass\n")).returncode == 0


def test_missing_executable_raises_not_found(tmp_path: Path) -> None:
    with pytest.raises(RendererNotFoundError):
        ProcessRunner(timeout=5).execute([str(tmp_path / "missing-wkhtmltopdf")])


def test_invalid_timeout_is_rejected() -> None:
    with pytest.raises(ValueError):
        ProcessRunner(timeout=0)


def test_empty_command_is_rejected() -> None:
    with pytest.raises(ValueError):
        ProcessRunner().execute([])


def test_stdin_is_not_inherited(python_command: Command) -> None:
    argv = python_command("import sys\nsys.stdout.write(repr(sys.stdin.read()))\n")

    output = ProcessRunner(timeout=10).execute(argv)

    assert output.stdout.strip() == b"''"

