"""Click command group exposing metadata, the severity table, and a demo.

Purpose
-------
Give operators a quick way to see what the logging facade renders in their
terminal: every severity line, a decorated call, and a full exception report.

Contents
--------
* :func:`cli` - root group with traceback and ``.env`` toggles.
* ``info`` / ``levels`` / ``demo`` subcommands.
* :func:`main` - entry point delegating to :func:`lib_cli_exit_tools.run_cli`.
"""

from __future__ import annotations

from typing import Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as log_config
from . import runtime
from .aspect import log_calls
from .domain import exceptions as factory
from .domain.levels import LogLevel

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}

_DEMO_LEVELS = (
    LogLevel.STUB,
    LogLevel.TRACE,
    LogLevel.DEBUG,
    LogLevel.INFO,
    LogLevel.SUCCESS,
    LogLevel.NOTICE,
    LogLevel.IMPORTANT,
    LogLevel.WARN,
    LogLevel.ERROR,
    LogLevel.SEVERE,
    LogLevel.FATAL,
)


@click.group(
    help=__init__conf__.title,
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=True,
)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load a .env file before reading settings (default: ${log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool | None) -> None:
    """Root command storing global options for subcommands."""

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if log_config.use_dotenv_requested(use_dotenv):
        log_config.enable_dotenv()
    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    if ctx.invoked_subcommand is None:
        click.echo(runtime.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(runtime.summary_info(), nl=False)


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """Print the severity table ordered by rank."""

    for level in sorted(LogLevel):
        rank = "OFF" if level is LogLevel.OFF else str(level.rank)
        click.echo(f"{level.label:<12} {rank:>5}  {level.glyph}  {level.description}")


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--plain", is_flag=True, default=False, help="Render [LEVEL] markers without glyphs.")
@click.option(
    "--threshold",
    type=click.Choice([level.name for level in LogLevel], case_sensitive=False),
    default=None,
    help="Threshold for the demo logger (default: STUB, so every level prints).",
)
def cli_demo(plain: bool, threshold: str | None) -> None:
    """Emit one line per severity, a decorated call, and an exception report."""

    runtime.configure(
        default_threshold=threshold if threshold is not None else LogLevel.STUB,
        enhanced=not plain,
    )
    logger = runtime.get_logger("lib_log_aspect.demo")
    for level in _DEMO_LEVELS:
        logger.log(level, f"{level.description}\nsecond line keeps the {level.name} marker")

    @log_calls(logger=logger, level=LogLevel.INFO)
    def load_settings(path: str) -> dict[str, str]:
        try:
            with open(path, encoding="utf-8") as handle:
                return {"content": handle.read()}
        except OSError as exc:
            raise factory.config_error(f"Cannot read settings from {path}", exc).with_property(
                "settings.path"
            ).with_source(path).with_solution("Create the file or point LOG_ASPECT settings elsewhere") from exc

    try:
        load_settings("/nonexistent/lib_log_aspect/settings.toml")
    except factory.ContextAwareError:
        logger.notice("Continuing with default settings")

    raw = "forty-two"
    try:
        int(raw)
    except ValueError as exc:
        logger.exception_report_with_tips(
            LogLevel.WARN,
            exc,
            {"input": raw},
            "Pass a decimal number",
            "Use --threshold ERROR to hide warnings",
        )
    runtime.shutdown()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI through lib_cli_exit_tools and restore traceback settings.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Exit code reported by :func:`lib_cli_exit_tools.run_cli`.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        lib_cli_exit_tools.config.traceback = previous_traceback
        lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
