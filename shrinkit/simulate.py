"""Synthetic surrogate estimates drawn from the shrinkage variance model.

The generator produces the four arrays the estimator expects, with known
variance components, so that the estimator can be checked against a
ground truth:

  - subject truth       theta = mean + between_sd * z
  - first / second half X1 = theta + w1 + e1,   X2 = theta + w2 + e2
  - odd / even blocks   Xodd  = theta + (w1 + w2) / 2 + e3
                        Xeven = theta + (w1 + w2) / 2 + e4

The w terms are within-subject signal drift (sd ``within_sd``) and the e
terms independent measurement noise (sd ``noise_sd``).  Interleaved
odd/even blocks see the same drift, so their difference is pure noise,
while the two halves differ by drift and noise.

Setting ``between_sd = within_sd = 0`` gives a population in which every
difference between subjects is noise (lambda near 1); setting
``noise_sd = within_sd = 0`` gives perfectly reliable estimates (lambda
of 0).
"""

from typing import NamedTuple, Sequence, Union

import numpy as np

from shrinkit.config import SEED


class SplitEstimates(NamedTuple):
    """The four surrogate estimates plus the simulated subject truth.

    Iterating yields ``X1, X2, Xodd, Xeven, truth``; use ``arrays`` (or
    slice the first four) to feed the estimator.
    """

    X1: np.ndarray
    X2: np.ndarray
    Xodd: np.ndarray
    Xeven: np.ndarray
    truth: np.ndarray

    @property
    def arrays(self):
        return self.X1, self.X2, self.Xodd, self.Xeven


def simulate_split_estimates(
    param_shape: Union[int, Sequence[int]],
    n_subjects: int,
    *,
    between_sd: float = 1.0,
    within_sd: float = 0.0,
    noise_sd: float = 1.0,
    mean: Union[float, np.ndarray] = 0.0,
    seed: int = SEED,
) -> SplitEstimates:
    """Draw X1, X2, Xodd, Xeven of shape ``param_shape + (n_subjects,)``.

    Parameters
    ----------
    param_shape : int or sequence of int
        Shape of each subject's parameter block, e.g. ``(V, V)``.  Use
        ``()`` for a single scalar parameter per subject.
    n_subjects : int
        Number of subjects (trailing axis), at least 2.
    between_sd : float
        SD of the true subject values around *mean* (signal).
    within_sd : float
        SD of the within-subject drift between the two halves.
    noise_sd : float
        SD of the measurement noise added to each surrogate estimate.
    mean : float or array broadcastable to ``param_shape``
        Group-level value of each parameter.
    seed : int
        Seed for ``np.random.default_rng``.
    """
    if isinstance(param_shape, (int, np.integer)):
        param_shape = (int(param_shape),)
    param_shape = tuple(int(s) for s in param_shape)
    if n_subjects < 2:
        raise ValueError(f"Need at least 2 subjects; got n_subjects={n_subjects}.")
    for name, sd in (("between_sd", between_sd), ("within_sd", within_sd), ("noise_sd", noise_sd)):
        if sd < 0:
            raise ValueError(f"{name} must be non-negative; got {sd}.")

    rng = np.random.default_rng(seed)
    shape = param_shape + (n_subjects,)
    mean = np.asarray(mean, dtype=np.float64)
    if mean.ndim > 0:
        # group mean is per parameter; add the subject axis
        mean = mean[..., np.newaxis]

    truth = mean + between_sd * rng.standard_normal(shape)
    w1 = within_sd * rng.standard_normal(shape)
    w2 = within_sd * rng.standard_normal(shape)
    drift = (w1 + w2) / 2.0

    X1 = truth + w1 + noise_sd * rng.standard_normal(shape)
    X2 = truth + w2 + noise_sd * rng.standard_normal(shape)
    Xodd = truth + drift + noise_sd * rng.standard_normal(shape)
    Xeven = truth + drift + noise_sd * rng.standard_normal(shape)
    return SplitEstimates(X1, X2, Xodd, Xeven, truth)
