"""Command-line interface for lineprof."""

from __future__ import annotations

import logging
import runpy
import sys
from enum import Enum
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from .config import get_settings
from .engine import Profiler
from .renderers import TextRenderer

LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="lineprof",
    help="Line-level execution profiler for Python scripts",
    add_completion=False,
)


class OutputFormat(str, Enum):
    html = "html"
    text = "text"


@app.callback()
def main() -> None:
    """Profile Python programs line by line."""


@app.command(
    name="run",
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
)
def run_cmd(
    ctx: typer.Context,
    script: Annotated[Path, typer.Argument(help="Python script to profile; extra arguments are passed to it")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Report file path (defaults to LINEPROF_OUTPUT_PATH for html)"),
    ] = None,
    max_rows: Annotated[
        Optional[int],
        typer.Option("--max-rows", "-n", min=1, help="Maximum number of ranked lines"),
    ] = None,
    ignore_file: Annotated[
        Optional[List[str]],
        typer.Option("--ignore-file", help="Skip files whose path contains this text (repeatable)"),
    ] = None,
    ignore_line: Annotated[
        Optional[List[str]],
        typer.Option("--ignore-line", help="Hide source lines matching this regex (repeatable)"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Report format"),
    ] = OutputFormat.html,
) -> None:
    """Run SCRIPT under the profiler and write a report."""

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    if not script.is_file():
        typer.echo(f"Error: script not found: {script}", err=True)
        raise typer.Exit(1)

    profiler = Profiler.from_settings(settings)
    profiler.add_file_ignore(runpy.__file__)
    if max_rows is not None:
        profiler.set_max_rows(max_rows)
    profiler.add_file_ignores(ignore_file or [])
    for pattern in ignore_line or []:
        profiler.add_line_ignore(pattern)

    try:
        exit_code = _run_script(profiler, script.resolve(), ctx.args)
    finally:
        written = _write_report(profiler, output_format, output, settings.output_path)

    if not written and exit_code == 0:
        exit_code = 1
    if exit_code:
        raise typer.Exit(exit_code)


def _run_script(profiler: Profiler, script: Path, args: List[str]) -> int:
    saved_argv = sys.argv
    saved_path = list(sys.path)
    sys.argv = [str(script), *args]
    sys.path.insert(0, str(script.parent))
    LOGGER.info("Profiling %s", script)

    exit_code = 0
    profiler.start()
    try:
        runpy.run_path(str(script), run_name="__main__")
    except SystemExit as exc:
        if isinstance(exc.code, int):
            exit_code = exc.code
        elif exc.code is not None:
            typer.echo(str(exc.code), err=True)
            exit_code = 1
    finally:
        profiler.stop()
        sys.argv = saved_argv
        sys.path[:] = saved_path
    return exit_code


def _write_report(
    profiler: Profiler,
    output_format: OutputFormat,
    output: Optional[Path],
    default_path: str,
) -> bool:
    if output_format is OutputFormat.text:
        if output is None:
            typer.echo(TextRenderer().render(profiler.report()), nl=False)
            return True
        written = profiler.dump(str(output), renderer=TextRenderer())
    else:
        output = output or Path(default_path)
        written = profiler.dump(str(output))

    if written is None:
        typer.echo(f"Error: could not write report to {output}", err=True)
        return False
    typer.echo(f"Profile written to {output}")
    return True
