"""Package-wide constants for the shrinkage estimator.

This module centralizes the numerical conventions shared by the variance
decomposition, the lambda computation and the simulator, so that every
module imports a single source of truth.
"""

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# Delta degrees of freedom for every variance taken across subjects.
# 1 gives the unbiased sample variance (divide by n - 1), which is the
# normalization the estimator was validated against.  0 (population
# variance) is also accepted.  The same value must be used for all four
# variance computations: lambda = var_within / var_total is invariant to
# a shared normalization but not to a mixed one.
DDOF = 1
ALLOWED_DDOF = (0, 1)

# Scale applied to the variance of the odd/even differences to obtain the
# within-subject noise variance.  Var(Xodd - Xeven) = 2 * s^2 for two
# independent noise terms of variance s^2, and averaging the two halves
# halves the noise variance again, hence 1/4.
NOISE_SCALE = 0.25

# Bounds on the shrinkage weight.  0 means the subject estimate is kept
# as is; 1 means complete shrinkage to the group mean.
LAMBDA_MIN = 0.0
LAMBDA_MAX = 1.0

# Global random seed for the simulator.
SEED = 42

# Names used in error messages and diagnostics, in positional order.
INPUT_NAMES = ("X1", "X2", "Xodd", "Xeven")
