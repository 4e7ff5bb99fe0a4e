"""
Errors — Typed failures raised by the reference indexer

Missing optional input is never an error (it contributes nothing).
What is raised here are contract violations by the build pipeline
or by callers mutating published results.
"""

from typing import Any


class ProcIndexError(Exception):
    """Root of every procindex failure."""


class MetadataDecodeError(ProcIndexError, TypeError):
    """
    A well-known metadata key carried a value of the wrong type.

    Attributes:
        key: Metadata key that was being decoded
        expected: Human-readable description of the expected type
        actual: The offending value
    """

    def __init__(self, key: str, expected: str, actual: Any):
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Metadata '{key}' must be {expected}, got {type(actual).__name__}"
        )


class LifecycleError(ProcIndexError, RuntimeError):
    """A build callback arrived outside the state it is valid in."""

    def __init__(self, callback: str, state: Any):
        self.callback = callback
        self.state = state
        name = getattr(state, "value", state)
        super().__init__(f"{callback}() is not allowed in state '{name}'")


class FrozenResourceError(ProcIndexError):
    """A published resource was mutated."""


class DocumentError(ProcIndexError, ValueError):
    """A process descriptor document is malformed."""
