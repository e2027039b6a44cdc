"""
shrinkit -- shrinkage of subject-level estimates toward the group mean.

The "shrinkit" package denoises per-subject summary statistics (for
example the VxV correlation matrix of each subject's fMRI time series)
before downstream analyses such as clustering.  Each subject's estimate
is pulled toward the group mean in proportion to how unreliable it is,
with one optimal weight per estimated parameter obtained from a
split-half / pseudo scan-rescan variance decomposition.

Key exports
-----------
shrink_it : function
    ``X_shrink, lam = shrink_it(X1, X2, Xodd, Xeven)``.  Inputs have shape
    (p1, ..., pk, n) with subjects on the last axis; lam has shape
    (p1, ..., pk) and lies in [0, 1].
estimate_shrinkage : function
    Same computation returning a ``ShrinkageResult`` that also carries
    the group mean and the variance components, with ``summary()`` and
    ``to_frame()`` diagnostics.
ShrinkageEstimator : class
    Estimator object holding the variance normalization (``ddof``).
VarianceComponents, ShrinkageResult : dataclasses
    Structured result containers.
simulate_split_estimates : function
    Synthetic X1, X2, Xodd, Xeven drawn from the variance model.
"""

from shrinkit.errors import (
    EmptyInput,
    InsufficientSubjects,
    InvalidArgumentCount,
    NonNumericInput,
    ShapeMismatch,
    ShrinkageInputError,
)
from shrinkit.shrinkage import (
    ShrinkageEstimator,
    ShrinkageResult,
    estimate_shrinkage,
    shrink_it,
)
from shrinkit.simulate import SplitEstimates, simulate_split_estimates
from shrinkit.variance import VarianceComponents

__version__ = "0.1.0"

__all__ = [
    "shrink_it",
    "estimate_shrinkage",
    "ShrinkageEstimator",
    "ShrinkageResult",
    "VarianceComponents",
    "simulate_split_estimates",
    "SplitEstimates",
    "ShrinkageInputError",
    "InvalidArgumentCount",
    "EmptyInput",
    "ShapeMismatch",
    "NonNumericInput",
    "InsufficientSubjects",
]
