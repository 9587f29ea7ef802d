import logging
from pathlib import Path
from typing import Iterable, Optional

import click
from rich.console import Console

from runrunrun.constants import (
    DEFAULT_PROFILE,
    ENV_CASE_SENSITIVE,
    ENV_CONFIG,
    ENV_FALLBACK,
    ENV_PROFILE,
    ENV_SHELL,
)
from runrunrun.errors import AllCandidatesFailedError, RrrError
from runrunrun.executor import FallbackExecutor
from runrunrun.loader import load_config
from runrunrun.service import RunMode, RunService
from runrunrun.tui import RunConsoleUI
from runrunrun.utils import split_command

logger = logging.getLogger(__name__)

LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _configure_logging(verbose: int) -> None:
    # Without -v, warnings reach stderr through logging's last-resort handler.
    if not verbose:
        return
    level = LOG_LEVELS[min(verbose, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s", force=True)
    logger.debug("log operational")


def _parse_shell(value: Optional[str]) -> Optional[list[str]]:
    if value is None:
        return None
    try:
        shell = split_command(value)
    except ValueError as exc:
        raise click.BadParameter(f"invalid shell command ({exc})", param_hint="--sh")
    if not shell:
        raise click.BadParameter("shell command is empty", param_hint="--sh")
    return shell


def _read_inputs(use_stdin: bool, inputs: tuple[str, ...]) -> Iterable[str]:
    if not use_stdin:
        return inputs
    logger.debug("process inputs from stdin")
    stream = click.get_text_stream("stdin")
    return (line.rstrip("\n") for line in stream if line.strip())


def _mode(dry_run: bool, query: bool) -> RunMode:
    if query:
        return RunMode.QUERY
    if dry_run:
        return RunMode.DRY_RUN
    return RunMode.EXECUTE


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-v", "--verbose", count=True, help="Increase verbosity level.")
@click.option("-n", "--dry-run", is_flag=True, help="Do not execute any matching rule.")
@click.option(
    "-c",
    "--config",
    type=click.Path(path_type=Path, dir_okay=False),
    envvar=ENV_CONFIG,
    help="Main configuration file.",
)
@click.option(
    "-p",
    "--profile",
    default=DEFAULT_PROFILE,
    show_default=True,
    envvar=ENV_PROFILE,
    help="Profile to match against.",
)
@click.option("-q", "--query", is_flag=True, help="Print the command instead of running it.")
@click.option("-e", "--explain", is_flag=True, help="Show every matching rule and which one won.")
@click.option(
    "-s",
    "--case-sensitive",
    is_flag=True,
    envvar=ENV_CASE_SENSITIVE,
    help="Match patterns case sensitively.",
)
@click.option("--stdin", "use_stdin", is_flag=True, help="Read inputs from stdin, one per line.")
@click.option(
    "-f",
    "--fallback",
    is_flag=True,
    envvar=ENV_FALLBACK,
    help="On failure, try the next matching rule until one succeeds.",
)
@click.option("--sh", envvar=ENV_SHELL, help='Run commands through this shell, e.g. "sh -c".')
@click.argument("inputs", nargs=-1)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    dry_run: bool,
    config: Optional[Path],
    profile: str,
    query: bool,
    explain: bool,
    case_sensitive: bool,
    use_stdin: bool,
    fallback: bool,
    sh: Optional[str],
    inputs: tuple[str, ...],
) -> None:
    """Open files and URIs with the command of the best matching rule."""
    obj = ctx.ensure_object(dict)
    _configure_logging(verbose)

    if not inputs and not use_stdin:
        raise click.UsageError("Missing argument 'INPUTS...' (or use --stdin).")

    shell = _parse_shell(sh)
    ui = RunConsoleUI(obj.get("console") or Console())

    try:
        loaded = load_config(config, case_insensitive=not case_sensitive)
        service = RunService(
            loaded,
            profile=profile,
            fallback=fallback,
            mode=_mode(dry_run, query),
            executor=FallbackExecutor(spawner=obj.get("spawner"), shell=shell),
        )
    except (RrrError, OSError) as exc:
        raise click.ClickException(str(exc))

    for target in _read_inputs(use_stdin, inputs):
        try:
            result = service.process(target)
        except AllCandidatesFailedError as exc:
            ui.render_failure(exc)
            raise click.ClickException(str(exc))
        except (RrrError, OSError) as exc:
            raise click.ClickException(str(exc))

        if explain:
            ui.render_explain(result, profile=service.profile.name)
        if service.mode == RunMode.QUERY:
            ui.render_query(result)
        if result.outcome is not None:
            if explain:
                ui.render_attempts(result.outcome)
            if not result.outcome.succeeded:
                raise click.exceptions.Exit(result.outcome.exit_code)

    logger.debug("all inputs processed")


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.exceptions.Abort:
        return 130
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
