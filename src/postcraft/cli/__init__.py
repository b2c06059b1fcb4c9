"""Command line interface for postcraft."""

from postcraft.cli.main import app

__all__ = ["app"]
