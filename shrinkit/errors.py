"""Exceptions raised while validating shrinkage inputs.

Every failure is raised before any arithmetic starts; there are no
partial results.  All classes derive from ``ShrinkageInputError`` (a
``ValueError``) so callers can catch the whole family at once.
``NonNumericInput`` is additionally a ``TypeError``.
"""


class ShrinkageInputError(ValueError):
    """Base class for invalid estimator inputs."""


class InvalidArgumentCount(ShrinkageInputError):
    """Raised when the estimator does not receive exactly four arrays."""


class EmptyInput(ShrinkageInputError):
    """Raised when an input is missing or has zero elements."""


class ShapeMismatch(ShrinkageInputError):
    """Raised when the four inputs do not share one shape."""


class NonNumericInput(ShrinkageInputError, TypeError):
    """Raised when an input is not a real-valued numeric array."""


class InsufficientSubjects(ShrinkageInputError):
    """Raised when there is no subject axis with more than one subject."""
