"""Custom exception hierarchy for the PDF rendering pipeline."""

from __future__ import annotations

from collections.abc import Sequence


class RenderingError(RuntimeError):
    """Base exception for PDF rendering failures."""


class StagingError(RenderingError):
    """Raised when inline markup cannot be written to a temporary file."""


class RendererNotFoundError(RenderingError):
    """Raised when the renderer executable cannot be spawned."""


class RenderTimeoutError(RenderingError):
    """Raised when the renderer does not exit within the configured window."""

    def __init__(self, command: str, timeout: float) -> None:
        super().__init__(
            f"PDF generation exceeded the timeout of {timeout}s. "
            "Try to increase the timeout."
        )
        self.command = command
        self.timeout = timeout


class RenderProcessError(RenderingError):
    """Raised when the renderer exits with a code that is not accepted."""

    def __init__(
        self,
        command: str,
        returncode: int,
        stderr: bytes = b"",
        stdout: bytes = b"",
    ) -> None:
        detail = stderr.decode("utf-8", errors="replace").strip()
        message = f"Renderer failed with exit code {returncode}"
        if detail:
            message = f"{message}: {detail.splitlines()[-1]}"
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        self.stdout = stdout


class CleanupWarning(UserWarning):
    """Reported when a temporary file could not be removed."""


def exception_messages(exc: BaseException) -> list[str]:
    """Return the collected message chain for an exception and its causes."""
    messages: list[str] = []
    visited: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in visited:
        visited.add(id(current))
        text = str(current).strip()
        if text:
            first_line = text.splitlines()[0].strip()
            if first_line:
                messages.append(first_line)
        current = current.__cause__ or current.__context__
    return messages


def exception_hint(exc: BaseException) -> str | None:
    """Return the most specific message available for an exception chain."""
    messages = exception_messages(exc)
    return messages[-1] if messages else None


def format_command(argv: Sequence[str]) -> str:
    """Join command tokens the way they are reported in logs and errors."""
    return " ".join(str(token) for token in argv)


__all__ = [
    "CleanupWarning",
    "RenderProcessError",
    "RenderTimeoutError",
    "RendererNotFoundError",
    "RenderingError",
    "StagingError",
    "exception_hint",
    "exception_messages",
    "format_command",
]
