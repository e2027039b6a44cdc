"""Split-half variance decomposition and the optimal shrinkage weight.

Total subject-to-subject variability of a parameter estimate is split
into a within-subject part (noise plus within-subject signal drift) and
a between-subject part.  Two pairs of surrogate estimates are needed:

  - X1 / X2      : the two halves of each subject's time series
                   (pseudo scan-rescan).  Their difference carries
                   within-subject signal drift *and* noise.
  - Xodd / Xeven : two interleaved splits (odd / even blocks).  They
                   share the same drift, so their difference isolates
                   noise.

Under the model

    Var(Xodd - Xeven) = 4 * varU
    Var(X2 - X1)      = 2 * (varW + varU)

so the within-subject noise and signal variances are

    varU = Var(Xodd - Xeven) / 4
    varW = (Var(X2 - X1) - 4 * varU) / 2

and the shrinkage weight of each parameter is

    lambda = (varW + varU) / Var((X1 + X2) / 2),   clipped to [0, 1].

All functions work on 2-D ``(p, n)`` blocks (parameters x subjects, see
``shrinkit.utils.to_param_block``); every variance is taken along the
subject axis with a single ``ddof``.
"""

from dataclasses import dataclass, fields
from typing import Tuple

import numpy as np

from shrinkit.config import ALLOWED_DDOF, DDOF, LAMBDA_MAX, LAMBDA_MIN, NOISE_SCALE


def check_ddof(ddof: int) -> int:
    """Return *ddof* as an int, or raise ValueError if it is not 0 or 1."""
    if ddof not in ALLOWED_DDOF:
        raise ValueError(
            f"ddof must be 0 (population) or 1 (sample) variance; got {ddof!r}."
        )
    return int(ddof)


@dataclass
class VarianceComponents:
    """Per-parameter variance components of the shrinkage model.

    Every array has one entry per parameter slot (shape ``(p,)`` inside
    the estimator, ``(p1, ..., pk)`` once reshaped for the caller).
    """

    var_noise: np.ndarray        # varU, within-subject noise
    var_scan_rescan: np.ndarray  # varSR, signal drift + noise
    var_signal: np.ndarray       # varW, may be negative on finite samples
    var_within: np.ndarray       # varW + varU floored at 0
    var_total: np.ndarray        # varTOT, across-subject variance of X
    zero_variance: np.ndarray    # slots with no across-subject variance
    ddof: int = DDOF

    def reshape(self, param_shape: Tuple[int, ...]) -> "VarianceComponents":
        """Return a copy with every per-slot array reshaped to *param_shape*."""
        arrays = {
            f.name: np.reshape(getattr(self, f.name), param_shape)
            for f in fields(self)
            if f.name != "ddof"
        }
        return VarianceComponents(ddof=self.ddof, **arrays)

    @property
    def n_floored(self) -> int:
        """Number of slots whose raw varW + varU came out negative."""
        return int(np.sum((self.var_signal + self.var_noise) < 0))


def subject_estimates(X1: np.ndarray, X2: np.ndarray) -> np.ndarray:
    """Best per-subject point estimate: the average of the two halves."""
    return (X1 + X2) / 2.0


def variance_over_subjects(D: np.ndarray, *, ddof: int = DDOF) -> np.ndarray:
    """Variance of each row of a ``(p, n)`` block across subjects."""
    return np.var(D, axis=-1, ddof=ddof)


def decompose_variance(
    X1: np.ndarray,
    X2: np.ndarray,
    Xodd: np.ndarray,
    Xeven: np.ndarray,
    *,
    ddof: int = DDOF,
) -> VarianceComponents:
    """Estimate varU, varSR, varW, var_within and varTOT per parameter.

    Parameters
    ----------
    X1, X2, Xodd, Xeven : (p, n) float arrays
        Already validated surrogate estimates.
    ddof : int
        Normalization shared by all four variances.

    Returns
    -------
    VarianceComponents
        ``var_within`` is floored at zero: on finite samples varW can be
        negative enough to outweigh varU.  ``zero_variance`` flags slots
        where ``varTOT`` is 0 or every subject's estimate is identical,
        e.g. the unit diagonal of a correlation matrix.
    """
    ddof = check_ddof(ddof)
    X = subject_estimates(X1, X2)

    # within-subject noise variance from the odd/even differences
    var_noise = NOISE_SCALE * variance_over_subjects(Xodd - Xeven, ddof=ddof)

    # pseudo scan-rescan variance: within-subject signal and noise
    var_scan_rescan = variance_over_subjects(X2 - X1, ddof=ddof)
    var_signal = 0.5 * (var_scan_rescan - 4.0 * var_noise)

    var_within = np.maximum(var_signal + var_noise, 0.0)

    var_total = variance_over_subjects(X, ddof=ddof)
    zero_variance = (var_total == 0) | (np.ptp(X, axis=-1) == 0)

    return VarianceComponents(
        var_noise=var_noise,
        var_scan_rescan=var_scan_rescan,
        var_signal=var_signal,
        var_within=var_within,
        var_total=var_total,
        zero_variance=zero_variance,
        ddof=ddof,
    )


def shrinkage_weights(components: VarianceComponents) -> np.ndarray:
    """Lambda = var_within / var_total per slot, clipped to [0, 1].

    Slots without across-subject variance get lambda = 0 instead of 0/0:
    there is nothing unreliable to correct.  Values above 1 occur when the
    within-subject variance estimate exceeds the total variance.
    """
    var_within = components.var_within
    var_total = components.var_total
    keep = ~components.zero_variance
    lam = np.divide(
        var_within,
        var_total,
        out=np.zeros_like(var_total, dtype=np.float64),
        where=keep,
    )
    return np.clip(lam, LAMBDA_MIN, LAMBDA_MAX)
