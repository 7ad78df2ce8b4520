# simplex_homology/utils/exceptions.py
"""
Exception hierarchy for simplex_homology.

- ValidationError: malformed user input, raised at the public boundary.
- InvariantViolation: an internal consistency check failed (a facet that was
  never indexed, a witness simplex of the wrong arity). These are fatal and are
  never caught inside the package.

Both also subclass the matching builtin (ValueError / AssertionError) so plain
``except ValueError`` callers keep working.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class HomologyError(Exception):
    """Base error; carries a free-form ``context`` dict for debugging."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context: Dict[str, Any] = dict(context or {})

    def __str__(self) -> str:
        if not self.context:
            return self.message
        ctx = ", ".join(f"{k}={v}" for k, v in self.context.items())
        return f"{self.message} (Context: {ctx})"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
        }


class ValidationError(HomologyError, ValueError):
    """
    Input failed validation (array shape, non-finite coordinates, bad config,
    simplices that are not strictly increasing vertex tuples, ...).
    """

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        expected: Optional[Any] = None,
        actual: Optional[Any] = None,
    ):
        context: Dict[str, Any] = {}
        if parameter is not None:
            context["parameter"] = parameter
        if expected is not None:
            context["expected"] = expected
        if actual is not None:
            context["actual"] = actual
        super().__init__(message, context)


class InvariantViolation(HomologyError, AssertionError):
    """
    An engine invariant does not hold.

    Raised when a higher simplex references a facet that was never indexed
    (malformed complex, e.g. a triangle without all three edges), or when a
    witness simplex pulled from an index range has the wrong number of vertices.
    """

    def __init__(self, message: str, simplex: Optional[Any] = None, **context: Any):
        ctx: Dict[str, Any] = dict(context)
        if simplex is not None:
            ctx["simplex"] = simplex
        super().__init__(message, ctx)
