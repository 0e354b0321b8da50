"""Bisect command - find the files that make a command fail."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import CliPositionalArg

from halfwit.core.log import logger

if TYPE_CHECKING:
    from halfwit.core.config import Session


class BisectCommand(BaseModel):
    """Repeatedly run a command with different subsets of files to
    find out which of them make it fail.

    Files are removed from and restored to their locations while
    the search runs, and all of them are restored when it ends,
    whether it succeeded or not.
    """

    command: CliPositionalArg[str] = Field(
        description="Command run to determine behavior; non-zero exit "
        "means the files present cause the problem"
    )
    files: CliPositionalArg[list[str]] = Field(
        description="Files or globs to bisect"
    )
    shell: str | None = Field(
        default=None,
        description="Shell to use instead of sh (or powershell.exe)",
    )
    timeout: int | None = Field(
        default=None,
        description="Timeout for one test run in seconds",
    )
    single_culprit: bool = Field(
        default=False,
        alias="single-culprit",
        description="Assume exactly one file is responsible",
    )
    skip_baseline: bool = Field(
        default=False,
        alias="skip-baseline",
        description="Do not check that the command passes with no files",
    )

    model_config = ConfigDict(populate_by_name=True)

    def apply_to(self, state: Session) -> None:
        """Copy command line options over the loaded configuration."""
        config = state.config.bisect
        if self.shell is not None:
            config.shell = self.shell
        if self.timeout is not None:
            config.timeout = self.timeout
        if self.single_culprit:
            config.single_culprit = True
        if self.skip_baseline:
            config.verify_baseline = False
        state.runtime.bisect.command = self.command

    async def run_workflow(self, state: Session) -> int:
        """Run the bisection workflow.

        Every backed-up file is restored before returning, even
        when the workflow fails.

        Returns:
            Exit code (0=success, 1=failure)
        """
        self.apply_to(state)
        logger.warn(
            "Files are removed and restored while bisecting. "
            "Back up anything important first."
        )

        try:
            culprits = await run_bisection(state, self.files)
        except Exception as e:
            logger.error(f"Bisection failed: {e}")
            return 1

        if culprits:
            print("Dominant files:")
            for path in culprits:
                print(path)
        else:
            print("No dominant files found.")
        return 0


async def run_bisection(state: Session, patterns: list[str]) -> list[Path]:
    """Run the bisection workflow and return the dominant files.

    Every backed-up file is restored before this returns or
    raises. When the search fails and the restore fails too, the
    restore error is logged and the search error is raised.

    Raises:
        BisectionError: If the search could not be completed
        OSError: If files could not be backed up or restored
    """
    from halfwit.workflow.graph import create_workflow
    from halfwit.workflow.nodes.initialize import Initialize

    workflow = create_workflow()
    try:
        with logger.span("Bisection", command=state.runtime.bisect.command):
            async with workflow.iter(
                Initialize(patterns=patterns), state=state
            ) as run:
                async for _node in run:
                    pass
    except BaseException:
        state.runtime.bisect.status = "failed"
        try:
            _restore(state)
        except OSError as e:
            logger.error(f"Could not restore all files: {e}")
        raise

    _restore(state)
    return run.result.output


def _restore(state: Session) -> None:
    manifest = state.runtime.bisect.manifest
    if manifest is not None:
        logger.info("Restoring all files")
        manifest.restore_all()
