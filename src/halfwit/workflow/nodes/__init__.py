"""Workflow nodes for graph state machine."""

from halfwit.workflow.nodes.baseline import Baseline
from halfwit.workflow.nodes.finalize import Finalize
from halfwit.workflow.nodes.initialize import Initialize
from halfwit.workflow.nodes.run_test import RunTest

__all__ = [
    "Initialize",
    "Baseline",
    "RunTest",
    "Finalize",
]
