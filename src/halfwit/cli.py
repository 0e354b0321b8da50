"""Halfwit CLI - find the files that make a command fail."""

import asyncio
import sys

from pydantic_settings import CliApp, CliSubCommand, get_subcommand

from halfwit.command.bisect import BisectCommand
from halfwit.core.config import Session
from halfwit.core.log import logger


class CliSession(Session):
    """Find which files make a command fail by bisecting them.

    Configuration sources (in priority order):
    1. Command-line arguments (--config.bisect.timeout 60)
    2. Environment variables (HALFWIT_CONFIG__BISECT__TIMEOUT=60)
    3. .env file
    4. --include files, then halfwit.yaml in the current directory
    5. The user config file (e.g. ~/.config/halfwit/halfwit.yaml)
    """

    bisect: CliSubCommand[BisectCommand]

    def cli_cmd(self):
        """Dispatch to the active subcommand, or show help if none
        was given."""
        subcommand = get_subcommand(self, is_required=False)

        if subcommand is None:
            CliApp.run(CliSession, cli_args=['--help'])
            sys.exit(1)

        with logger:
            exit_code = asyncio.run(subcommand.run_workflow(self))
        raise SystemExit(exit_code)


def main():
    """Main entry point for CLI."""
    CliApp.run(CliSession)


if __name__ == "__main__":
    main()
