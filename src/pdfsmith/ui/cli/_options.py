"""Shared Typer option definitions for CLI commands."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer

from pdfsmith.adapters.process import DEFAULT_TIMEOUT


INPUTS_PANEL = "Inputs"
RENDERING_PANEL = "Rendering"
OUTPUT_PANEL = "Output"

SourceArgument = Annotated[
    list[str],
    typer.Argument(
        metavar="SOURCE...",
        help="Pages to render: URLs, HTML files, or '-' to read markup from stdin.",
        show_default=False,
    ),
]

CoverOption = Annotated[
    list[str] | None,
    typer.Option(
        "--cover",
        metavar="SOURCE",
        help="Cover page placed before the table of contents and pages.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

TocOption = Annotated[
    bool,
    typer.Option(
        "--toc",
        help="Insert a generated table of contents after the covers.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

TocFirstOption = Annotated[
    bool,
    typer.Option(
        "--toc-first",
        help="Always move tables of contents before every other object.",
        rich_help_panel=INPUTS_PANEL,
    ),
]

ParamOption = Annotated[
    list[str] | None,
    typer.Option(
        "--param",
        "-p",
        metavar="NAME[=VALUE]",
        help="Global renderer flag, e.g. -p page-size=A4 or -p grayscale. Repeatable.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

TimeoutOption = Annotated[
    int,
    typer.Option(
        "--timeout",
        "-t",
        min=1,
        help="Seconds to wait for the renderer before killing it.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

AllowMissingAssetsOption = Annotated[
    bool,
    typer.Option(
        "--allow-missing-assets",
        help="Accept exit code 1, reported when some assets could not be loaded.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

SuccessCodeOption = Annotated[
    list[int] | None,
    typer.Option(
        "--success-code",
        metavar="CODE",
        help="Additional renderer exit code treated as success. Repeatable.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

TempDirOption = Annotated[
    Path | None,
    typer.Option(
        "--temp-dir",
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
        help="Directory receiving staged inline markup (defaults to the system temp dir).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

XvfbOption = Annotated[
    bool,
    typer.Option(
        "--xvfb",
        help="Run the renderer under xvfb-run for headless hosts.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

BinaryOption = Annotated[
    str | None,
    typer.Option(
        "--binary",
        metavar="PATH",
        help="Renderer executable (defaults to $WKHTMLTOPDF_PATH, then PATH lookup).",
        rich_help_panel=RENDERING_PANEL,
    ),
]

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        exists=True,
        file_okay=True,
        dir_okay=False,
        readable=True,
        resolve_path=True,
        help="YAML file holding the renderer configuration.",
        rich_help_panel=RENDERING_PANEL,
    ),
]

OutputOption = Annotated[
    Path | None,
    typer.Option(
        "--output",
        "-o",
        dir_okay=False,
        help="Destination PDF. Without it the PDF is written to stdout.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

DirectOption = Annotated[
    bool,
    typer.Option(
        "--direct",
        help="Let the renderer write the output file itself instead of piping it through.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]

PrintCommandOption = Annotated[
    bool,
    typer.Option(
        "--print-command",
        help="Print the renderer command line and exit without rendering.",
        rich_help_panel=OUTPUT_PANEL,
    ),
]


__all__ = [
    "DEFAULT_TIMEOUT",
    "AllowMissingAssetsOption",
    "BinaryOption",
    "ConfigOption",
    "CoverOption",
    "DirectOption",
    "OutputOption",
    "ParamOption",
    "PrintCommandOption",
    "SourceArgument",
    "SuccessCodeOption",
    "TempDirOption",
    "TimeoutOption",
    "TocFirstOption",
    "TocOption",
    "XvfbOption",
]
