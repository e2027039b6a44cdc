"""Input checks and array-shape helpers shared across the package.

Provides the building blocks used by the estimator before and after the
numerical work:

* **Validation** -- ``check_inputs`` coerces the four surrogate arrays to
  numpy and raises the errors in ``shrinkit.errors`` in a fixed order
  (count, emptiness, shape, dtype, subject axis).
* **Parameter blocks** -- ``to_param_block`` flattens the leading
  ``(p1, ..., pk)`` axes into a single parameter index so that all the
  arithmetic runs on a 2-D ``(p, n)`` array; ``from_param_block``
  restores the caller's shape.

Key notation throughout:
  - n  : number of subjects (size of the trailing axis)
  - p  : number of parameter slots, p = p1 * p2 * ... * pk
  - param_shape : the leading shape (p1, ..., pk); () for 1-D inputs
"""

from typing import Sequence, Tuple

import numpy as np

from shrinkit.config import INPUT_NAMES
from shrinkit.errors import (
    EmptyInput,
    InsufficientSubjects,
    InvalidArgumentCount,
    NonNumericInput,
    ShapeMismatch,
)


def is_real_numeric(X: np.ndarray) -> bool:
    """True for signed, unsigned and floating dtypes.

    Booleans, complex numbers, timedeltas, datetimes, strings and object
    arrays are rejected.
    """
    return X.dtype.kind in "iuf"


def check_inputs(arrays: Sequence) -> Tuple[np.ndarray, ...]:
    """Validate the four surrogate estimates and return them as arrays.

    Parameters
    ----------
    arrays : sequence
        ``(X1, X2, Xodd, Xeven)``, each array-like of shape
        ``(p1, ..., pk, n)``.

    Returns
    -------
    tuple of four ndarrays
        The inputs as numpy arrays (no copy when already ndarrays).  They
        keep their original dtype; casting happens in the arithmetic.

    Raises
    ------
    InvalidArgumentCount, EmptyInput, ShapeMismatch, NonNumericInput,
    InsufficientSubjects
        Checked in that order, so the first failing rule wins.
    """
    if len(arrays) != len(INPUT_NAMES):
        raise InvalidArgumentCount(
            f"Must specify {len(INPUT_NAMES)} inputs ({', '.join(INPUT_NAMES)}); "
            f"got {len(arrays)}."
        )

    coerced = []
    for name, X in zip(INPUT_NAMES, arrays):
        if X is None:
            raise EmptyInput(f"{name} is None.")
        try:
            X = np.asarray(X)
        except ValueError as exc:
            # ragged nested sequences
            raise ShapeMismatch(f"{name} is not a rectangular array: {exc}") from exc
        if X.size == 0:
            raise EmptyInput(f"{name} is empty (shape {X.shape}).")
        coerced.append(X)

    dims = coerced[0].shape
    for name, X in zip(INPUT_NAMES[1:], coerced[1:]):
        if X.shape != dims:
            raise ShapeMismatch(
                f"Dimensions of all inputs must match: {INPUT_NAMES[0]} has "
                f"shape {dims} but {name} has shape {X.shape}."
            )

    for name, X in zip(INPUT_NAMES, coerced):
        if not is_real_numeric(X):
            raise NonNumericInput(
                f"All inputs must be real numeric arrays; {name} has dtype {X.dtype}."
            )
        if not np.all(np.isfinite(X)):
            raise NonNumericInput(
                f"All inputs must be finite real values; {name} contains NaN or inf."
            )

    if len(dims) == 0 or dims[-1] <= 1 or max(dims) == 1:
        raise InsufficientSubjects(
            f"Last dimension of inputs must equal number of subjects > 1; "
            f"got shape {dims}."
        )
    return tuple(coerced)


def to_param_block(X: np.ndarray) -> np.ndarray:
    """Reshape ``(p1, ..., pk, n)`` to ``(p, n)`` as float64.

    A 1-D input (no parameter axes) becomes a single row.
    """
    n = X.shape[-1]
    return np.asarray(X, dtype=np.float64).reshape(-1, n)


def from_param_block(block: np.ndarray, param_shape: Tuple[int, ...]) -> np.ndarray:
    """Inverse of ``to_param_block`` for ``(p, n)`` or ``(p,)`` arrays.

    ``(p, n)`` goes back to ``param_shape + (n,)``; a per-slot vector
    ``(p,)`` goes back to ``param_shape`` (a 0-d array when the parameter
    block has rank 0).
    """
    if block.ndim == 2:
        return block.reshape(param_shape + (block.shape[-1],))
    return block.reshape(param_shape)
