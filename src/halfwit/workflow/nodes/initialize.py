"""Initialize node - resolve files, back them up, set up the search."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic_graph import BaseNode, GraphRunContext

from halfwit.bisection import Bisection, ConstructionError
from halfwit.core.config import Session
from halfwit.core.log import logger
from halfwit.files import Manifest, resolve_paths
from halfwit.runner import TestRunner
from halfwit.workflow.nodes.baseline import Baseline
from halfwit.workflow.nodes.run_test import RunTest


@dataclass
class Initialize(BaseNode[Session]):
    """Resolve file arguments and prepare the bisection."""

    patterns: list[str]

    async def run(
        self, ctx: GraphRunContext[Session]
    ) -> Baseline | RunTest:
        """Back up the files and build the Bisection and TestRunner.

        The manifest is stored in runtime state before the first
        file is touched, so the caller can always restore.

        Raises:
            ConstructionError: If no files match
        """
        config = ctx.state.config.bisect
        state = ctx.state.runtime.bisect
        state.status = "running"

        backup_dir = config.backup_dir.resolve()
        files = [
            path for path in resolve_paths(self.patterns)
            if not path.resolve().is_relative_to(backup_dir)
        ]
        if not files:
            raise ConstructionError(
                f"No files match {' '.join(self.patterns)}"
            )
        state.files = files

        manifest = Manifest(config.backup_dir)
        state.manifest = manifest
        tracked = manifest.create(files)

        state.bisection = Bisection(
            tracked, single_culprit=config.single_culprit
        )
        state.test_runner = TestRunner(
            workdir=Path.cwd(),
            output_dir=config.output_dir,
            command=state.command,
            shell=config.shell,
            timeout=config.timeout,
        )

        mode = "single-culprit" if config.single_culprit else "multi-culprit"
        logger.info(
            f"Bisecting {len(files)} file(s) ({mode})",
            command=state.command,
        )

        if config.verify_baseline:
            return Baseline()
        return RunTest()
