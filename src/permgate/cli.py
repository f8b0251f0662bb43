"""permgate CLI entrypoint."""

from __future__ import annotations

import logging

import click

from permgate import __version__


@click.group()
@click.version_option(version=__version__, prog_name="permgate")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(verbose: bool) -> None:
    """permgate — check commands and paths against allow/deny patterns."""
    if verbose:
        from rich.logging import RichHandler

        from permgate.cli_commands._output import err_console

        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
            force=True,
        )


# Register subcommands
from permgate.cli_commands import register_commands  # noqa: E402

register_commands(main)

if __name__ == "__main__":
    main()
