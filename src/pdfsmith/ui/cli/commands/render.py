"""Implementation of the ``pdfsmith render`` command."""

from __future__ import annotations

from pathlib import Path
import re

from rich.markup import escape
import typer

from pdfsmith.core.config import WrapperConfig, XvfbConfig
from pdfsmith.core.exceptions import RenderingError, exception_hint
from pdfsmith.core.job import Job
from pdfsmith.core.objects import ObjectKind, SourceType
from pdfsmith.core.params import Param

from .._options import (
    DEFAULT_TIMEOUT,
    AllowMissingAssetsOption,
    BinaryOption,
    ConfigOption,
    CoverOption,
    DirectOption,
    OutputOption,
    ParamOption,
    PrintCommandOption,
    SourceArgument,
    SuccessCodeOption,
    TempDirOption,
    TimeoutOption,
    TocFirstOption,
    TocOption,
    XvfbOption,
)
from ..state import emit_error, get_cli_state


STDIN_SOURCE = "-"

_URL_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


def classify_source(value: str) -> tuple[str, SourceType]:
    """Map a command-line source onto a source type and its payload."""
    if value == STDIN_SOURCE:
        markup = typer.get_text_stream("stdin").read()
        if not markup.strip():
            raise typer.BadParameter("no markup received on stdin")
        return markup, SourceType.HTML
    if _URL_PATTERN.match(value):
        return value, SourceType.URL
    path = Path(value).expanduser()
    if not path.is_file():
        raise typer.BadParameter(f"'{value}' is neither a URL nor an existing file")
    return str(path.resolve()), SourceType.FILE


def parse_param(raw: str) -> Param:
    """Turn ``name=value`` (or a bare ``name``) into a renderer flag."""
    name, sep, value = raw.partition("=")
    name = name.strip()
    if not name:
        raise typer.BadParameter(f"invalid parameter '{raw}'")
    return Param(name, value if sep else None)


def build_config(
    *,
    config_path: Path | None,
    binary: str | None,
    xvfb: bool,
    toc_first: bool,
) -> WrapperConfig:
    config = WrapperConfig.from_file(config_path) if config_path else WrapperConfig()
    updates: dict[str, object] = {}
    if binary:
        updates["wkhtmltopdf_command"] = binary
    if xvfb and config.xvfb is None:
        updates["xvfb"] = XvfbConfig()
    if toc_first:
        updates["always_put_toc_first"] = True
    return config.model_copy(update=updates) if updates else config


def render(
    sources: SourceArgument,
    output: OutputOption = None,
    covers: CoverOption = None,
    toc: TocOption = False,
    toc_first: TocFirstOption = False,
    params: ParamOption = None,
    timeout: TimeoutOption = DEFAULT_TIMEOUT,
    allow_missing_assets: AllowMissingAssetsOption = False,
    success_codes: SuccessCodeOption = None,
    temp_dir: TempDirOption = None,
    xvfb: XvfbOption = False,
    binary: BinaryOption = None,
    config_path: ConfigOption = None,
    direct: DirectOption = False,
    print_command: PrintCommandOption = False,
) -> None:
    """Render pages, covers, and an optional table of contents into a PDF."""
    state = get_cli_state()

    if direct and output is None:
        raise typer.BadParameter("--direct requires --output", param_hint="--direct")

    try:
        config = build_config(
            config_path=config_path, binary=binary, xvfb=xvfb, toc_first=toc_first
        )
    except (OSError, ValueError) as exc:
        emit_error(f"Invalid configuration: {exception_hint(exc)}", exception=exc)
        raise typer.Exit(code=1) from exc

    job = Job(config)
    job.set_timeout(timeout)
    if success_codes:
        job.set_success_values(success_codes)
    if allow_missing_assets:
        job.set_allow_missing_assets()
    if temp_dir is not None:
        job.set_temp_directory(temp_dir)
    job.add_param(*(parse_param(raw) for raw in params or []))

    for cover in covers or []:
        job.add_object(ObjectKind.COVER, *classify_source(cover))
    if toc:
        job.add_toc()
    for source in sources:
        job.add_page(*classify_source(source))

    try:
        if print_command:
            if output is not None:
                job.set_output_path(output.resolve())
            state.console.print(job.get_command(), markup=False, highlight=False, soft_wrap=True)
            return

        if output is None:
            payload = job.get_pdf()
            typer.get_binary_stream("stdout").write(payload)
            return

        if direct:
            target = job.save_as_direct(output)
        else:
            target = job.save_as(output)
    except RenderingError as exc:
        emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc

    state.err_console.print(f"[green]PDF written to[/] {escape(str(target))}")


__all__ = ["build_config", "classify_source", "parse_param", "render"]
