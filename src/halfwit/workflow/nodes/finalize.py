"""Finalize node - report the files found dominant."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic_graph import BaseNode, End, GraphRunContext

from halfwit.core.config import Session
from halfwit.core.log import logger


@dataclass
class Finalize(BaseNode[Session, None, list[Path]]):
    """Translate culprit indices back into file paths."""

    async def run(
        self, ctx: GraphRunContext[Session]
    ) -> End[list[Path]]:
        state = ctx.state.runtime.bisect
        bisection = state.bisection

        state.culprits = [state.files[i] for i in bisection.culprits]
        state.status = "complete"

        logger.info(
            f"Bisection complete after {bisection.tests_run} tests: "
            f"{len(state.culprits)} dominant file(s)"
        )
        for path in state.culprits:
            logger.info(f"Dominant: {path}")
        return End(state.culprits)
