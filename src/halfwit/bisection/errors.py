"""Errors raised while setting up or running a bisection."""


class BisectionError(Exception):
    """Base class for all bisection errors."""


class ConstructionError(BisectionError, ValueError):
    """An object set or Group was built from invalid input.

    Raised before any test runs: an empty object set, a Group whose
    first index is past its last, or a Group reaching outside the
    object set.
    """


class SplitError(BisectionError, ValueError):
    """A single-object Group was asked to split."""


class ObjectStateError(BisectionError):
    """An object could not be switched to the requested State.

    The group being applied is left partially applied, so the
    current iteration is abandoned without running the test.
    """

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class TestRunnerError(BisectionError):
    """The test command could not be executed at all.

    This is different from the test reporting dominant behavior:
    nothing was observed, and the run cannot continue.
    """

    __test__ = False  # not a pytest test class


class BaselineError(BisectionError):
    """The test reported dominant behavior with every object disabled."""


class InvariantError(BisectionError, AssertionError):
    """Two distinct groups tied on behavior, size and first index.

    Groups in one partition are disjoint, so this means the
    worklist has been corrupted.
    """
