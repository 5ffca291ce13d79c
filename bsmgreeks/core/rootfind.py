"""Safeguarded Newton iteration for monotone scalar functions.

Newton steps are taken while they stay inside the current sign-change
bracket; otherwise (flat or non-finite slope, step out of bracket) the
bracket is bisected. The bracket shrinks on every evaluation, so the
iterate can never leave ``[lo, hi]``.
"""
import math
from dataclasses import dataclass
from typing import Callable

@dataclass(frozen=True)
class RootResult:
    root: float
    converged: bool
    iterations: int
    residual: float
    bracketed: bool = True

def _checked(f, x):
    fx = float(f(x))
    if not math.isfinite(fx):
        raise FloatingPointError(f"non-finite residual {fx!r} at x={x!r}")
    return fx

def newton_bisect(f: Callable[[float], float], fprime: Callable[[float], float],
                  x0: float, lo: float, hi: float,
                  tol: float = 1e-8, maxiter: int = 1000, min_slope: float = 1e-12) -> RootResult:
    """Find x in [lo, hi] with |f(x)| < tol."""
    f_lo = _checked(f, lo)
    if abs(f_lo) < tol:
        return RootResult(lo, True, 0, f_lo)
    f_hi = _checked(f, hi)
    if abs(f_hi) < tol:
        return RootResult(hi, True, 0, f_hi)
    if (f_lo > 0) == (f_hi > 0):
        return RootResult(float("nan"), False, 0, min(f_lo, f_hi, key=abs), bracketed=False)

    x = x0 if lo < x0 < hi else 0.5*(lo + hi)
    for i in range(1, maxiter + 1):
        fx = _checked(f, x)
        if abs(fx) < tol:
            return RootResult(x, True, i, fx)
        if i == maxiter:
            break

        if (fx > 0) == (f_lo > 0):
            lo, f_lo = x, fx
        else:
            hi = x

        slope = float(fprime(x))
        step = x - fx/slope if math.isfinite(slope) and abs(slope) > min_slope else None
        x = step if step is not None and lo < step < hi else 0.5*(lo + hi)

    return RootResult(x, False, maxiter, fx)

def expand_upper(f: Callable[[float], float], hi: float,
                 factor: float = 2.0, max_expansions: int = 20) -> float:
    """Grow hi geometrically until f(hi) >= 0, for increasing f.

    Returns the last hi tried; the caller's bracket check decides whether
    it is usable.
    """
    for _ in range(max_expansions):
        if _checked(f, hi) >= 0:
            break
        hi *= factor
    return hi
