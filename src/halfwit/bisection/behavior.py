"""Classification vocabulary for objects and groups."""

from enum import Enum


class Behavior(str, Enum):
    """What effect a group of objects has on the outcome of a test.

    If any object in the enabled set is DOMINANT the test shows
    dominant behavior (usually: it fails). Only when every enabled
    object is RECESSIVE does the test show recessive behavior.
    A group starts out UNKNOWN until it has been tested or inferred.
    """

    UNKNOWN = "unknown"
    DOMINANT = "dominant"
    RECESSIVE = "recessive"

    @property
    def rank(self) -> int:
        """Testing priority: unknown before dominant before recessive."""
        return _RANKS[self]


_RANKS = {
    Behavior.UNKNOWN: 3,
    Behavior.DOMINANT: 2,
    Behavior.RECESSIVE: 1,
}


class State(str, Enum):
    """Whether an object is part of the set currently under test."""

    ENABLED = "enabled"
    DISABLED = "disabled"
