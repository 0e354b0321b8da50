"""Result types for test execution."""

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel


class TestResult(BaseModel):
    """Result of running the test command once."""

    __test__ = False  # not a pytest test class

    iteration: int
    command: str
    dominant: bool
    log_file: Path
    returncode: int
    timestamp: datetime
