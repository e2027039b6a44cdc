"""Shrinkage of subject-level estimates toward the group mean.

Given four surrogate estimates of the same summary statistic for each
subject (first/second half and odd/even blocks of the time series), the
estimator weights every subject's estimate against the group mean::

    X_shrink = lambda * X_bar + (1 - lambda) * X,    X = (X1 + X2) / 2

where lambda is computed per parameter from the variance decomposition in
``shrinkit.variance``.  Lambda is 0 for perfectly reliable parameters (no
shrinkage) and 1 when there is no reliable subject-level information
(complete shrinkage to the group mean).

Three interfaces:

1. Functional, returns the two arrays::

    from shrinkit import shrink_it
    X_shrink, lam = shrink_it(X1, X2, Xodd, Xeven)

2. Functional with diagnostics::

    from shrinkit import estimate_shrinkage
    result = estimate_shrinkage(X1, X2, Xodd, Xeven)
    print(result.summary())
    table = result.to_frame()

3. Configured estimator object::

    from shrinkit import ShrinkageEstimator
    est = ShrinkageEstimator(ddof=1, verbose=True)
    X_shrink, lam = est.estimate(X1, X2, Xodd, Xeven)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np
import pandas as pd

from shrinkit.config import DDOF, LAMBDA_MAX
from shrinkit.utils import check_inputs, from_param_block, to_param_block
from shrinkit.variance import (
    VarianceComponents,
    check_ddof,
    decompose_variance,
    shrinkage_weights,
    subject_estimates,
)


# -- Result dataclass --


@dataclass
class ShrinkageResult:
    """Shrunk estimates plus the quantities they were derived from."""

    X_shrink: np.ndarray
    lam: np.ndarray
    group_mean: np.ndarray
    components: VarianceComponents
    n_subjects: int

    def __iter__(self) -> Iterator[np.ndarray]:
        # X_shrink, lam = result
        return iter((self.X_shrink, self.lam))

    @property
    def param_shape(self) -> Tuple[int, ...]:
        return self.lam.shape

    @property
    def n_params(self) -> int:
        return int(self.lam.size)

    def summary(self) -> str:
        """Return a readable summary of the shrinkage weights."""
        lam = np.ravel(self.lam)
        comp = self.components
        n_zero = int(np.sum(comp.zero_variance))
        n_full = int(np.sum(lam >= LAMBDA_MAX))
        kind = "sample" if comp.ddof == 1 else "population"
        lines = [
            f"Shrinkage toward the group mean  (n={self.n_subjects} subjects, "
            f"p={self.n_params:,} parameters, shape={self.param_shape})",
            f"Variance normalization: {kind} (ddof={comp.ddof})",
            "",
            f"{'lambda':>12s}  {'min':>8s}  {'median':>8s}  {'mean':>8s}  {'max':>8s}",
            "-" * 52,
            f"{'':>12s}  {lam.min():8.4f}  {np.median(lam):8.4f}  "
            f"{lam.mean():8.4f}  {lam.max():8.4f}",
            "",
            f"  zero-variance parameters (lambda set to 0): {n_zero:,}",
            f"  var_within floored at 0:                    {comp.n_floored:,}",
            f"  lambda clamped to 1 (complete shrinkage):   {n_full:,}",
        ]
        return "\n".join(lines)

    def to_frame(self) -> pd.DataFrame:
        """One row per parameter slot with lambda and its variance components."""
        comp = self.components
        shape = self.param_shape
        if len(shape) == 0:
            index = pd.RangeIndex(1, name="slot")
        else:
            index = pd.MultiIndex.from_tuples(
                list(np.ndindex(*shape)),
                names=[f"p{i + 1}" for i in range(len(shape))],
            )
        return pd.DataFrame(
            {
                "lambda": np.ravel(self.lam),
                "group_mean": np.ravel(self.group_mean),
                "var_noise": np.ravel(comp.var_noise),
                "var_scan_rescan": np.ravel(comp.var_scan_rescan),
                "var_signal": np.ravel(comp.var_signal),
                "var_within": np.ravel(comp.var_within),
                "var_total": np.ravel(comp.var_total),
            },
            index=index,
        )


# -- Core functions --


def apply_shrinkage(X: np.ndarray, lam: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Convex combination of each subject's estimate and the group mean.

    Parameters
    ----------
    X : (p, n) array
        Per-subject point estimates.
    lam : (p,) array
        Shrinkage weight per parameter, in [0, 1].

    Returns
    -------
    X_shrink : (p, n) array
    X_bar : (p,) array
        Group mean per parameter.

    The mean and lambda are broadcast across subjects through a trailing
    axis; nothing is replicated in memory.
    """
    X_bar = X.mean(axis=-1)
    lam_b = lam[:, np.newaxis]
    X_shrink = lam_b * X_bar[:, np.newaxis] + (1.0 - lam_b) * X
    return X_shrink, X_bar


def _estimate(arrays, *, ddof: int, verbose: bool) -> ShrinkageResult:
    ddof = check_ddof(ddof)
    X1, X2, Xodd, Xeven = check_inputs(arrays)
    dims = X1.shape
    param_shape = dims[:-1]
    n = dims[-1]

    # All arithmetic runs on (p, n) blocks.
    B1, B2, Bodd, Beven = (to_param_block(X) for X in (X1, X2, Xodd, Xeven))
    components = decompose_variance(B1, B2, Bodd, Beven, ddof=ddof)
    lam = shrinkage_weights(components)
    X_shrink, X_bar = apply_shrinkage(subject_estimates(B1, B2), lam)

    if verbose:
        print(
            f"[shrink_it] n={n} subjects, p={lam.size} parameters; "
            f"mean lambda={lam.mean():.4f}, "
            f"{int(np.sum(lam >= LAMBDA_MAX))} at 1, "
            f"{int(np.sum(components.zero_variance))} zero-variance, "
            f"{components.n_floored} floored"
        )

    return ShrinkageResult(
        X_shrink=from_param_block(X_shrink, param_shape),
        lam=from_param_block(lam, param_shape),
        group_mean=from_param_block(X_bar, param_shape),
        components=components.reshape(param_shape),
        n_subjects=n,
    )


def estimate_shrinkage(
    X1: np.ndarray,
    X2: np.ndarray,
    Xodd: np.ndarray,
    Xeven: np.ndarray,
    *,
    ddof: int = DDOF,
    verbose: bool = False,
) -> ShrinkageResult:
    """Shrink subject-level estimates and keep the variance diagnostics.

    Parameters
    ----------
    X1, X2 : (p1, ..., pk, n) arrays
        Estimates from the first and second half of each subject's time
        series.
    Xodd, Xeven : (p1, ..., pk, n) arrays
        Estimates from the odd and even blocks of each subject's time
        series.
    ddof : int
        Variance normalization used for every variance across subjects:
        1 (sample, default) or 0 (population).
    verbose : bool
        Print a one-line summary of the fitted weights.

    Returns
    -------
    ShrinkageResult
        Unpacks to ``(X_shrink, lam)``.
    """
    return _estimate((X1, X2, Xodd, Xeven), ddof=ddof, verbose=verbose)


def shrink_it(
    X1: np.ndarray,
    X2: np.ndarray,
    Xodd: np.ndarray,
    Xeven: np.ndarray,
    *,
    ddof: int = DDOF,
    verbose: bool = False,
) -> Tuple[np.ndarray, np.ndarray]:
    """Shrink subject-level estimates toward the group mean.

    Returns
    -------
    X_shrink : (p1, ..., pk, n) array
        Shrinkage estimate of each parameter for each subject.
    lam : (p1, ..., pk) array
        Degree of shrinkage for each parameter, in [0, 1].

    See ``estimate_shrinkage`` for the parameters.
    """
    result = _estimate((X1, X2, Xodd, Xeven), ddof=ddof, verbose=verbose)
    return result.X_shrink, result.lam


class ShrinkageEstimator:
    """Reusable estimator holding the variance normalization and verbosity.

    ``estimate`` takes the four arrays positionally and reports a wrong
    count as ``InvalidArgumentCount``.
    """

    def __init__(self, ddof: int = DDOF, verbose: bool = False):
        self.ddof = check_ddof(ddof)
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"ShrinkageEstimator(ddof={self.ddof}, verbose={self.verbose})"

    def estimate_result(self, *arrays) -> ShrinkageResult:
        return _estimate(arrays, ddof=self.ddof, verbose=self.verbose)

    def estimate(self, *arrays) -> Tuple[np.ndarray, np.ndarray]:
        result = self.estimate_result(*arrays)
        return result.X_shrink, result.lam
