"""nbrecon command-line interface."""

from nbrecon.cli.commands import app

__all__ = ["app"]
