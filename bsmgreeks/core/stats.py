import numpy as np
from scipy.special import erfc

SQRT_2 = np.sqrt(2.0)
INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)

def cumulative_normal(x):
    """P(Z <= x) for a standard normal Z (scalar or numpy array)."""
    return 0.5 * erfc(-np.asarray(x, dtype=float) / SQRT_2)

def normal_density(x):
    """Standard normal density (scalar or numpy array)."""
    x = np.asarray(x, dtype=float)
    return INV_SQRT_2PI * np.exp(-0.5 * x * x)
