"""
grvrc - rc File Checker Command-Line Interface
==============================================

This module implements the command-line interface for the rc parser. It
parses an rc file (or inline configuration text), prints each command in
canonical form and reports every malformed statement with its position.

Usage Examples
--------------
Check the default rc file ($XDG_CONFIG_HOME/grv/grvrc):
    $ grvrc

Check a specific file:
    $ grvrc ~/dotfiles/grvrc

Check inline configuration:
    $ grvrc -c 'set theme solarized'

Only report errors:
    $ grvrc -q grvrc
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from grvrc import __version__
from grvrc.cli.errors import ExitCode, handle_cli_exception
from grvrc.loader import ConfigLoader
from grvrc.settings import RcSettings


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    # Diagnostics go to the final report; warnings are only logged when verbose
    level = logging.DEBUG if verbose else logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "rc_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-c", "--command",
    "inline",
    metavar="TEXT",
    help="Parse inline configuration text instead of a file",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Do not print parsed commands, only errors",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many errors (default: 100, or $GRVRC_MAX_ERRORS)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="grvrc")
def main(
    rc_file: Optional[Path],
    inline: Optional[str],
    quiet: bool,
    max_errors: Optional[int],
    verbose: bool,
) -> None:
    """
    Check an rc configuration file.

    RC_FILE is the configuration file to parse. Without it, the default
    rc file is used ($GRVRC_FILE, or $XDG_CONFIG_HOME/grv/grvrc).

    \b
    Examples:
        grvrc                        # Check the default rc file
        grvrc grvrc                  # Check a specific file
        grvrc -c 'map Main gg G'     # Check inline configuration
        grvrc -q grvrc               # Only report errors

    \b
    Commands:
        set <variable> <value>
        theme --name N --component C --bgcolor B --fgcolor F
        map <view> <from> <to>
        q
    """
    setup_logging(verbose)

    if rc_file is not None and inline is not None:
        raise click.UsageError("RC_FILE and --command cannot be used together")

    settings = RcSettings.from_env()
    if max_errors is not None:
        settings.max_errors = max_errors

    loader = ConfigLoader(settings)

    try:
        if inline is not None:
            result = loader.load_string(inline)
        elif rc_file is not None:
            result = loader.load_file(rc_file)
        else:
            if verbose:
                click.echo(f"Using rc file {settings.rc_path()}")
            result = loader.load_default()
    except Exception as e:
        handle_cli_exception(e, verbose)

    if not quiet:
        for command in result.commands:
            click.echo(str(command))

    if result.errors.has_errors():
        click.echo(result.errors.report(), err=True)
        sys.exit(ExitCode.CONFIG_ERROR)

    if verbose:
        click.echo(f"Parsed {len(result.commands)} command(s) from {result.source or '<string>'}")


if __name__ == "__main__":
    main()
