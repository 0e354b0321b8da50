"""CLI command modules for halfwit."""

from halfwit.command.bisect import BisectCommand

__all__ = ["BisectCommand"]
