"""Graph workflow definition."""

from pydantic_graph import Graph

from halfwit.core.config import Session
from halfwit.core.log import logger


def create_workflow():
    """Create the bisection workflow graph.

    Initialize → [Baseline] → RunTest ↺ → Finalize

    Returns:
        Graph workflow with Session as state_type
    """
    logger.debug("Building workflow graph")

    from halfwit.workflow.nodes.baseline import Baseline
    from halfwit.workflow.nodes.finalize import Finalize
    from halfwit.workflow.nodes.initialize import Initialize
    from halfwit.workflow.nodes.run_test import RunTest

    return Graph(
        nodes=(
            Initialize,
            Baseline,
            RunTest,
            Finalize,
        ),
        state_type=Session
    )
