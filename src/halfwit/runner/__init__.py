"""External test execution."""

from halfwit.runner.test import TestRunner

__all__ = ["TestRunner"]
