"""Bounded execution of the external renderer.

Both output pipes are drained on their own threads while the caller waits
for the process: reading them one after the other deadlocks as soon as the
renderer fills the pipe nobody is reading.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
import logging
import os
from pathlib import Path
import signal
import subprocess
from threading import Thread
from typing import IO

from pdfsmith.core.exceptions import (
    RendererNotFoundError,
    RenderingError,
    RenderProcessError,
    RenderTimeoutError,
    format_command,
)


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10
CHUNK_SIZE = 64 * 1024
KILL_GRACE = 5.0


@dataclass(slots=True)
class ProcessOutput:
    """Captured output of a renderer run whose exit code was accepted."""

    stdout: bytes
    stderr: bytes
    returncode: int


class _StreamDrain:
    """Read one pipe to end-of-stream on a daemon thread."""

    def __init__(self, stream: IO[bytes], label: str) -> None:
        self._stream = stream
        self._chunks: list[bytes] = []
        self._error: BaseException | None = None
        self._thread = Thread(target=self._run, name=f"pdfsmith-{label}", daemon=True)
        self.label = label

    def start(self) -> _StreamDrain:
        self._thread.start()
        return self

    def _run(self) -> None:
        try:
            while True:
                chunk = self._stream.read1(CHUNK_SIZE)
                if not chunk:
                    break
                self._chunks.append(chunk)
        except (OSError, ValueError) as exc:
            self._error = exc

    def join(self, timeout: float) -> bool:
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def result(self) -> bytes:
        if self._error is not None:
            raise RenderingError(f"Failed to read renderer {self.label}: {self._error}")
        self._stream.close()
        return b"".join(self._chunks)


def _terminate(process: subprocess.Popen[bytes]) -> None:
    """Kill the renderer and everything it spawned, then reap it."""
    if os.name == "posix":
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except (ProcessLookupError, PermissionError):
            process.kill()
    else:
        process.kill()
    try:
        process.wait(timeout=KILL_GRACE)
    except subprocess.TimeoutExpired:
        logger.warning("Renderer process %s did not exit after being killed", process.pid)


class ProcessRunner:
    """Spawn the renderer, drain its pipes, and classify the exit code."""

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        success_values: Iterable[int] = (0,),
        env: Mapping[str, str] | None = None,
        cwd: str | Path | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        self.timeout = timeout
        self.success_values = frozenset({0, *success_values})
        self.env = dict(env) if env is not None else None
        self.cwd = cwd

    def _spawn(self, argv: Sequence[str], command: str) -> subprocess.Popen[bytes]:
        try:
            return subprocess.Popen(
                list(argv),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=self.cwd,
                env=self.env,
                start_new_session=os.name == "posix",
            )
        except FileNotFoundError as exc:
            raise RendererNotFoundError(
                f"Renderer executable '{argv[0]}' could not be located."
            ) from exc
        except OSError as exc:
            raise RenderingError(f"Failed to invoke renderer '{command}': {exc}") from exc

    def _collect(self, drain: _StreamDrain, command: str) -> bytes:
        if not drain.join(self.timeout):
            logger.error("Renderer %s did not close within %ss, command: %s",
                         drain.label, self.timeout, command)
            raise RenderTimeoutError(command, self.timeout)
        return drain.result()

    def execute(self, argv: Sequence[str]) -> ProcessOutput:
        """Run ``argv`` and return its output, or raise a structured failure."""
        if not argv:
            raise ValueError("Cannot execute an empty command.")
        command = format_command(argv)
        logger.debug("Generating pdf with: %s", command)

        process = self._spawn(argv, command)
        assert process.stdout is not None and process.stderr is not None
        stdout_drain = _StreamDrain(process.stdout, "stdout").start()
        stderr_drain = _StreamDrain(process.stderr, "stderr").start()

        try:
            returncode = process.wait(timeout=self.timeout)
        except subprocess.TimeoutExpired:
            _terminate(process)
            logger.error(
                "PDF generation failed by defined timeout of %ss, command: %s",
                self.timeout,
                command,
            )
            raise RenderTimeoutError(command, self.timeout) from None
        except BaseException:
            _terminate(process)
            raise

        stdout = self._collect(stdout_drain, command)
        stderr = self._collect(stderr_drain, command)

        if returncode not in self.success_values:
            logger.error(
                "Error while generating pdf: %s",
                stderr.decode("utf-8", errors="replace"),
            )
            raise RenderProcessError(command, returncode, stderr, stdout)

        if stderr:
            logger.debug("Renderer output:\n%s", stderr.decode("utf-8", errors="replace"))
        logger.info("PDF successfully generated with: %s", command)
        return ProcessOutput(stdout=stdout, stderr=stderr, returncode=returncode)


__all__ = ["DEFAULT_TIMEOUT", "ProcessOutput", "ProcessRunner"]
