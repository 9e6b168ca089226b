"""Errors raised by the digest loop.

Failures inside observe/react callbacks are never raised; they are logged
and contained per watch. Only non-convergence reaches the caller.
"""

from __future__ import annotations


class DigestError(Exception):
    """Base class for digest failures."""


class NonConvergenceError(DigestError):
    """Watches kept changing for every pass of the digest budget."""

    def __init__(self, iterations: int) -> None:
        self.iterations = iterations
        super().__init__(f"{iterations} digest iterations reached")
