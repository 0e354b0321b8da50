"""Bisection search engine."""

from halfwit.bisection.behavior import Behavior, State
from halfwit.bisection.bisection import Bisection, TestFunc
from halfwit.bisection.errors import (
    BaselineError,
    BisectionError,
    ConstructionError,
    InvariantError,
    ObjectStateError,
    SplitError,
    TestRunnerError,
)
from halfwit.bisection.group import Group
from halfwit.bisection.stateful import Stateful

__all__ = [
    "Behavior",
    "State",
    "Group",
    "Stateful",
    "Bisection",
    "TestFunc",
    "BisectionError",
    "ConstructionError",
    "SplitError",
    "ObjectStateError",
    "TestRunnerError",
    "BaselineError",
    "InvariantError",
]
