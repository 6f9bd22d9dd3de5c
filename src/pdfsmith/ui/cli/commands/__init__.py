"""CLI command implementations exposed via `pdfsmith.ui.cli`."""

from __future__ import annotations

from .clean import clean
from .render import render


__all__ = ["clean", "render"]
