"""
Main CLI dispatcher for folio.

Usage:
    folio content check                  # Validate every document
    folio content posts [-t TAG]         # List posts, newest first
    folio content show IDENTIFIER
"""

from __future__ import annotations

import logging
from pathlib import Path

import click
from rich.console import Console

from folio import __version__
from folio.core.log import setup_logging

console = Console()


class Context:
    """Shared context for all commands."""

    def __init__(self, verbose: bool = False, root: Path | None = None):
        self.verbose = verbose
        self.root = root
        self.console = console

    def site_root(self) -> Path:
        """Explicit --root, otherwise the resolved site root."""
        if self.root is not None:
            return self.root
        from folio.core.config import get_site_root

        return get_site_root()


pass_context = click.make_pass_decorator(Context, ensure=True)


@click.group()
@click.version_option(version=__version__, prog_name="folio")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Site root (default: FOLIO_SITE_ROOT, nearest _config.yml, or global config)",
)
@click.pass_context
def main(ctx: click.Context, verbose: bool, root: Path | None) -> None:
    """Load and inspect the content of a static blog."""
    setup_logging(logging.DEBUG if verbose else logging.WARNING)
    ctx.obj = Context(verbose=verbose, root=root)


# Import and register command groups (imports after main definition intentional)
from folio.content.commands import content  # noqa: E402

main.add_command(content)


if __name__ == "__main__":
    main()
