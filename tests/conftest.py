"""Pytest configuration and fixtures for halfwit tests."""

import sys
import tempfile
from pathlib import Path

import pytest

from halfwit.bisection import State
from halfwit.core.log import ConsoleSink, setup_logger


@pytest.fixture(autouse=True, scope="session")
def configure_logging():
    """Configure console-only logging for the test session.

    Debug output shows up in failing tests without sending
    anything to logfire.dev.
    """
    test_log_root = Path(tempfile.gettempdir()) / "halfwit-tests"
    setup_logger(
        log_root=test_log_root,
        session_name="test",
        console=ConsoleSink(level="debug"),
    )


@pytest.fixture
def mock_argv():
    """Give Session a clean sys.argv and restore it afterwards."""
    original = sys.argv.copy()
    sys.argv = ["halfwit"]
    yield
    sys.argv = original


class Value:
    """Stateful test object holding a number.

    Records every set_state() call so tests can check exactly
    what the controller did.
    """

    def __init__(self, value: int):
        self.value = value
        self._state = State.ENABLED
        self.calls: list[State] = []

    def set_state(self, state: State) -> None:
        self.calls.append(state)
        self._state = state

    def state(self) -> State:
        return self._state


@pytest.fixture
def make_values():
    """Build a list of Value objects from numbers."""
    def _make(numbers):
        return [Value(n) for n in numbers]
    return _make
