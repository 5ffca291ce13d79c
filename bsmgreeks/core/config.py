# bsmgreeks/core/config.py
import logging
import math
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class SolverConfig:
    """Implied-volatility solver settings.

    tolerance is an absolute bound on |model price - observed price|;
    [sigma_min, sigma_max] is the starting bracket, whose upper end is
    doubled up to max_bracket_expansions times until it reaches the target.
    """
    initial_sigma: float = 0.25
    tolerance: float = 1e-8
    max_iterations: int = 1000
    sigma_min: float = 1e-6
    sigma_max: float = 5.0
    min_vega: float = 1e-12
    max_bracket_expansions: int = 20  # doublings of sigma_max

    def __post_init__(self):
        if not (self.tolerance > 0):
            raise ValueError(f"tolerance must be > 0, got {self.tolerance}")
        if int(self.max_iterations) != self.max_iterations or self.max_iterations < 1:
            raise ValueError(f"max_iterations must be a positive integer, got {self.max_iterations}")
        if not (0 < self.sigma_min < self.sigma_max and math.isfinite(self.sigma_max)):
            raise ValueError(f"need 0 < sigma_min < sigma_max, got [{self.sigma_min}, {self.sigma_max}]")
        if not (math.isfinite(self.initial_sigma) and self.initial_sigma > 0):
            raise ValueError(f"initial_sigma must be > 0, got {self.initial_sigma}")
        if not (self.min_vega >= 0):
            raise ValueError(f"min_vega must be >= 0, got {self.min_vega}")
        if int(self.max_bracket_expansions) != self.max_bracket_expansions or self.max_bracket_expansions < 0:
            raise ValueError(f"max_bracket_expansions must be a non-negative integer, got {self.max_bracket_expansions}")

    @classmethod
    def from_env(cls) -> "SolverConfig":
        """Build from BSM_IV_* environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            initial_sigma=_env("BSM_IV_INITIAL_SIGMA", defaults.initial_sigma, float),
            tolerance=_env("BSM_IV_TOL", defaults.tolerance, float),
            max_iterations=_env("BSM_IV_MAX_ITER", defaults.max_iterations, int),
            sigma_min=_env("BSM_IV_SIGMA_MIN", defaults.sigma_min, float),
            sigma_max=_env("BSM_IV_SIGMA_MAX", defaults.sigma_max, float),
            min_vega=_env("BSM_IV_MIN_VEGA", defaults.min_vega, float),
            max_bracket_expansions=_env("BSM_IV_MAX_EXPANSIONS", defaults.max_bracket_expansions, int),
        )

def _env(name, default, cast):
    raw = os.getenv(name, "")
    if not raw:
        return default
    try:
        return cast(raw)
    except (TypeError, ValueError):
        logger.warning(f"Invalid {name}={raw!r}, using default {default}")
        return default

DEFAULT_CONFIG = SolverConfig()
