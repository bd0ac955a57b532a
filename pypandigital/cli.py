"""Defines the command-line interface for pypandigital.

This module uses the `click` library to build the `pandigital` command. It
checks individual values, filters candidates from files or standard input,
enumerates ranges of digit strings, and manages the user settings.
"""
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

import click
from halo import Halo
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .core.config import ConfigError, Settings
from .core.validator import Validator
from .utils.candidates import iter_digit_strings, read_candidates

# Configure rich consoles for output.
console = Console(emoji=True, force_terminal=True)
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


class AliasedGroup(click.Group):
    """A custom click Group that supports command aliases and case-insensitivity."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._aliases: Dict[str, str] = {}

    def get_command(self, ctx: click.Context, cmd_name: str) -> Optional[click.Command]:
        """Gets a command by name, checking for aliases and prefixes.

        Args:
            ctx: The click context.
            cmd_name: The command name entered by the user.

        Returns:
            The matched click command, or None.
        """
        cmd_name = cmd_name.lower()
        rv = super().get_command(ctx, cmd_name)
        if rv is not None:
            return rv
        if cmd_name in self._aliases:
            return super().get_command(ctx, self._aliases[cmd_name])
        matches = [x for x in self.list_commands(ctx) if x.startswith(cmd_name)]
        if not matches:
            return None
        if len(matches) == 1:
            return super().get_command(ctx, matches[0])
        ctx.fail(f"Ambiguous command: '{cmd_name}'. Matches: {', '.join(sorted(matches))}")
        return None

    def add_alias(self, alias: str, command_name: str) -> None:
        self._aliases[alias.lower()] = command_name.lower()


_RULE_OPTIONS = (
    click.option("--base", "-b", type=int, default=None, help="Numbering base: 1 to 10, or 16. [default: 10]"),
    click.option("--unique/--no-unique", default=None, help="Forbid repeated digits."),
    click.option("--zero/--no-zero", "require_zero", default=None, help="Require (or forbid) the zero digit."),
    click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to a custom config file."),
)


def rule_options(func: Callable) -> Callable:
    """Adds the options shared by every command that builds a validator."""
    for option in reversed(_RULE_OPTIONS):
        func = option(func)
    return func


def _build_validator(config_path: Optional[str], base: Optional[int], unique: Optional[bool],
                     require_zero: Optional[bool]) -> Validator:
    """Builds a validator from settings overridden by command-line flags.

    Exits with status 2 if the resulting rule set is invalid.
    """
    settings = Settings(config_path=Path(config_path) if config_path else None)
    if not settings.get("colors", True):
        console.no_color = True
    try:
        config = settings.to_config(base=base, unique=unique, require_zero=require_zero)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(2)
    logger.info(f"Using rule set: {config.describe()}")
    return Validator.from_config(config)


def _log_level(verbose: bool, debug: bool) -> int:
    """Picks the logging level; the `verbose` setting applies when no flag is given."""
    if debug:
        return logging.DEBUG
    if verbose or Settings().get("verbose", False):
        return logging.INFO
    return logging.WARNING


@click.group(cls=AliasedGroup, invoke_without_command=True, context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="pypandigital")
@click.option("--verbose", is_flag=True, help="Enable verbose output.")
@click.option("--debug", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool, debug: bool) -> None:
    """Detect pandigital numbers: digit strings that contain every digit of their base.

    Values are always handled as strings, so leading zeros are significant
    and hex digits may be given in either case.
    """
    logging.basicConfig(level=_log_level(verbose, debug), format='%(asctime)s - %(levelname)s - %(message)s')
    logger.debug("Debug mode enabled.")

    if ctx.invoked_subcommand is None:
        console.print("Use 'pandigital check <value>' to test values, or 'pandigital --help' for more commands.")


@main.command()
@click.argument("values", nargs=-1, required=True)
@rule_options
@click.option("--json", "json_output", is_flag=True, help="Output results in JSON format.")
def check(values: Tuple[str, ...], base: Optional[int], unique: Optional[bool], require_zero: Optional[bool],
          config_path: Optional[str], json_output: bool) -> None:
    """Check whether each VALUE is pandigital.

    For every value the command reports the verdict and, for values that
    are not pandigital, the stage that rejected them and why. It exits with
    a non-zero status if any value is not pandigital.
    """
    validator = _build_validator(config_path, base, unique, require_zero)
    reports = [validator.explain(value) for value in values]

    if json_output:
        click.echo(json.dumps(reports, indent=2))
    else:
        _display_reports(reports, validator)

    if not all(report["pandigital"] for report in reports):
        sys.exit(1)


def _display_reports(reports: List[Dict[str, Any]], validator: Validator) -> None:
    """Displays stage reports in a table.

    Args:
        reports: Reports as returned by `Validator.explain`.
        validator: The validator that produced them.
    """
    table = Table(title=f"Pandigital check ({validator.config.describe()})")
    table.add_column("Value", style="cyan")
    table.add_column("Result", style="bold")
    table.add_column("Stage")
    table.add_column("Reason")
    for report in reports:
        if report["pandigital"]:
            table.add_row(escape(report["value"]), "[green]PANDIGITAL[/green]", "", "")
        else:
            table.add_row(escape(report["value"]), "[red]NO[/red]", report["failed_stage"], escape(report["reason"]))
    console.print(table)


@main.command()
@click.argument("source", type=click.File("r"), default="-")
@rule_options
@click.option("--count", "count_only", is_flag=True, help="Print only the number of pandigital values.")
def scan(source, base: Optional[int], unique: Optional[bool], require_zero: Optional[bool],
         config_path: Optional[str], count_only: bool) -> None:
    """Print the pandigital values in SOURCE, one candidate per line.

    SOURCE defaults to standard input. Blank lines are ignored and
    surrounding whitespace is stripped.
    """
    validator = _build_validator(config_path, base, unique, require_zero)
    found = 0
    for value in validator.scan(read_candidates(source)):
        found += 1
        if not count_only:
            click.echo(value)
    if count_only:
        click.echo(found)
    logger.info(f"Found {found} pandigital value(s).")


@main.command(name="range")
@click.argument("start", type=str)
@click.argument("stop", type=str)
@rule_options
@click.option("--count", "count_only", is_flag=True, help="Print only the number of pandigital values.")
def range_command(start: str, stop: str, base: Optional[int], unique: Optional[bool], require_zero: Optional[bool],
                  config_path: Optional[str], count_only: bool) -> None:
    """Print every pandigital digit string from START to STOP inclusive.

    START and STOP are written in the configured base, and every candidate
    keeps the width of START. For example, 'pandigital range 1234567890
    9999999999' lists all ten-digit pandigital numbers.
    """
    validator = _build_validator(config_path, base, unique, require_zero)
    try:
        candidates = iter_digit_strings(start, stop, validator.config.base)
    except ValueError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(2)

    found = 0
    with Halo(text=f"Scanning {start}..{stop}", spinner="dots", stream=sys.stderr,
              enabled=sys.stderr.isatty()) as spinner:
        for value in validator.scan(candidates):
            found += 1
            if not count_only:
                click.echo(value)
        spinner.succeed(f"Found {found} pandigital value(s) in {start}..{stop}")
    if count_only:
        click.echo(found)


@main.command()
@rule_options
def info(base: Optional[int], unique: Optional[bool], require_zero: Optional[bool], config_path: Optional[str]) -> None:
    """Display the effective rule set: alphabet, minimum length and pattern."""
    validator = _build_validator(config_path, base, unique, require_zero)
    rules = validator.config
    panel_content = f"""
[bold]Base[/bold]: {rules.base}
[bold]Zero digit[/bold]: {'required' if rules.require_zero else 'excluded'}
[bold]Repeated digits[/bold]: {'forbidden' if rules.unique else 'allowed'}
[bold]Alphabet[/bold]: {''.join(validator.alphabet) or '(empty)'}
[bold]Minimum length[/bold]: {validator.min_length}
[bold]Pattern[/bold]: {validator.pattern.pattern or '(empty string only)'}
"""
    console.print(Panel(panel_content.strip(), title="Pandigital rule set", expand=False))


@main.command()
@click.argument("action", type=click.Choice(['get', 'set', 'list', 'reset']), required=True)
@click.argument("key", type=str, required=False)
@click.argument("value", type=str, required=False)
def config(action: str, key: Optional[str], value: Optional[str]) -> None:
    """Manage the pandigital user settings.

    \b
    ACTION:
        get <key>         Get a settings value.
        set <key> <value> Set a settings value and save it.
        list              List all current settings values.
        reset             Remove the user settings file.
    """
    settings = Settings()
    if action == "list":
        console.print(Panel(json.dumps(settings.settings, indent=2), title="Current Settings"))
    elif action == "get":
        if not key:
            err_console.print("[red]Error: 'get' action requires a key.[/red]")
            sys.exit(1)
        click.echo(settings.get(key))
    elif action == "set":
        if not key or value is None:
            err_console.print("[red]Error: 'set' action requires a key and a value.[/red]")
            sys.exit(1)
        if key not in Settings.DEFAULT_SETTINGS:
            err_console.print(f"[red]Error: unknown setting '{key}'. Known settings: {', '.join(Settings.DEFAULT_SETTINGS)}[/red]")
            sys.exit(1)
        settings.set(key, value)
        try:
            settings.to_config()
        except ConfigError as e:
            err_console.print(f"[red]Error: {e}[/red]")
            sys.exit(2)
        try:
            settings.save_user_config()
            console.print(f"[green]'{key}' set to '{settings.get(key)}' and saved to user config.[/green]")
        except IOError as e:
            err_console.print(f"[red]Error saving configuration: {e}[/red]")
            sys.exit(1)
    elif action == "reset":
        if Settings.reset_user_config():
            console.print("[green]Configuration reset to defaults.[/green]")
        else:
            console.print("[yellow]No user configuration file to reset.[/yellow]")


main.add_alias('c', 'check')
main.add_alias('s', 'scan')
main.add_alias('r', 'range')

if __name__ == "__main__":
    main()
