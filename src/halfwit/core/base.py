"""Base classes for configuration and state models.

This module contains the foundational classes used throughout
halfwit:
- Closeable Protocol for resource cleanup
- BaseCloseable for automatic cleanup cascade
- BaseConfig for configuration models
- BaseState for runtime state models

These live in their own module to avoid circular imports between
config.py and log.py.
"""

from __future__ import annotations

import sys
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

# ============================================================
# CLOSEABLE PROTOCOL AND BASE CLASS
# ============================================================

@runtime_checkable
class Closeable(Protocol):
    """Protocol for objects that support close()."""

    def close(self) -> None:
        """Clean up resources."""
        ...


class BaseCloseable(BaseModel):
    """Base class providing automatic cleanup of Closeable children.

    Any model inheriting from BaseCloseable becomes a context
    manager, and close() calls close() on every field value that
    has the method. Remaining children are still closed when one
    of them fails.

    Session.__exit__() → Config.close() → Logger.close() → Sink.close()
    """

    def close(self):
        """Close all closeable child objects.

        Errors are reported on stderr and do not stop the cascade.
        """
        for field_name in self.__class__.model_fields:
            child = getattr(self, field_name, None)
            if child is None:
                continue

            if isinstance(child, Closeable):
                try:
                    child.close()
                except Exception as e:
                    msg = f"Warning: Error closing {field_name}: {e}"
                    print(msg, file=sys.stderr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):  # noqa: U100
        self.close()
        return False


# ============================================================
# BASE CLASSES (semantic markers for readers)
# ============================================================

class BaseConfig(BaseCloseable):
    """Base class for configuration sections (YAML/env/CLI)."""
    pass


class BaseState(BaseCloseable):
    """Base class for runtime state sections (mutated while a
    bisection runs)."""
    pass


__all__ = ["Closeable", "BaseCloseable", "BaseConfig", "BaseState"]
