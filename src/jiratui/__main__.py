"""CLI entry point for jira-tui."""

from __future__ import annotations

# Python version check - must be before any imports that use 3.12+ syntax.
import sys

if sys.version_info < (3, 12):  # noqa: UP036
    print("Error: jira-tui requires Python 3.12 or higher.")
    print(
        "You are running Python {}.{}".format(  # noqa: UP032
            sys.version_info.major, sys.version_info.minor
        )
    )
    sys.exit(1)

import asyncio  # noqa: E402
import logging  # noqa: E402
from pathlib import Path  # noqa: E402

import click  # noqa: E402

from jiratui import __version__  # noqa: E402
from jiratui.config import JiraCredentials  # noqa: E402
from jiratui.debug_log import export_logs_to_file, setup_debug_logging  # noqa: E402
from jiratui.errors import ExitCode, StartupError  # noqa: E402

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _report_startup_error(error: StartupError) -> None:
    click.secho(f"Error: {error.message}", fg="red", err=True)
    if error.hint:
        click.echo(f"  {click.style('Hint:', fg='cyan')} {error.hint}", err=True)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of the per-user config.toml",
)
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Directory inside the git repository (default: current directory)",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Minimum level captured in the debug log (F12)",
)
@click.option(
    "--debug-log",
    "debug_log_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the captured log to this file on exit",
)
@click.version_option(__version__, "--version", prog_name="jira-tui")
def main(
    config_path: Path | None,
    repo_path: Path | None,
    log_level: str,
    debug_log_path: Path | None,
) -> None:
    """Browse Jira tickets and check out or create a branch for one.

    Needs JIRA_HOST, JIRA_USER and JIRA_PASS in the environment.
    """
    from jiratui.bootstrap import run_session

    setup_debug_logging(getattr(logging, log_level.upper()))

    try:
        credentials = JiraCredentials.from_env()
        outcome = asyncio.run(
            run_session(credentials, repo_path=repo_path, config_path=config_path)
        )
    except StartupError as error:
        _report_startup_error(error)
        sys.exit(error.code)
    finally:
        if debug_log_path is not None:
            count = export_logs_to_file(debug_log_path)
            click.echo(f"Wrote {count} log lines to {debug_log_path}", err=True)

    if outcome is not None:
        click.echo(outcome.reason)
    sys.exit(ExitCode.SUCCESS)


if __name__ == "__main__":
    main()
