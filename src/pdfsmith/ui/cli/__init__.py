"""Public CLI exports for pdfsmith."""

from __future__ import annotations

from .app import app, main
from .commands import clean, render
from .state import debug_enabled, emit_error, emit_warning, get_cli_state


__all__ = [
    "app",
    "clean",
    "debug_enabled",
    "emit_error",
    "emit_warning",
    "get_cli_state",
    "main",
    "render",
]
