"""Baseline node - check the test passes with no files present."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic_graph import BaseNode, GraphRunContext

from halfwit.bisection.errors import BaselineError
from halfwit.core.config import Session
from halfwit.core.log import logger
from halfwit.workflow.nodes.run_test import RunTest


@dataclass
class Baseline(BaseNode[Session]):
    """Run the test with every file removed.

    If the test still shows dominant behavior, no subset of the
    files can be responsible and bisecting would only report
    noise.
    """

    async def run(self, ctx: GraphRunContext[Session]) -> RunTest:
        state = ctx.state.runtime.bisect

        logger.info("Checking test with all files removed")
        if state.bisection.run_baseline(state.test_runner):
            raise BaselineError(
                f"Test command {state.command!r} fails even with all "
                f"{len(state.files)} files removed"
            )

        logger.info("Baseline passed")
        return RunTest()
