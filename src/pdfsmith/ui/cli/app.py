"""Typer application wiring for the pdfsmith CLI."""

from __future__ import annotations

import typer

from pdfsmith.version import get_version

from .commands.clean import clean
from .commands.render import render
from .state import configure_logging, debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help="Render HTML pages into PDF documents with wkhtmltopdf.",
    context_settings={"help_option_names": ["--help"]},
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(get_version())
        raise typer.Exit()


@app.callback()
def _app_root(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase CLI verbosity. Combine multiple times for additional diagnostics.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug/--no-debug",
        help="Show full tracebacks when an unexpected error occurs.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the installed version and exit.",
    ),
) -> None:
    ctx.obj = get_cli_state()
    set_cli_state(verbosity=verbose, debug=debug)
    configure_logging()


app.command(name="render")(render)
app.command(name="clean")(clean)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except typer.Exit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        raise typer.Exit(code=1) from exc
    except SystemExit:
        raise
    except Exception as exc:  # pragma: no cover
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc), exception=exc)
        raise typer.Exit(code=1) from exc


__all__ = ["app", "main"]
