from typing import Tuple

import numpy as np
from numpy import log, sqrt, exp

from .contract import OptionContract
from .stats import cumulative_normal as N, normal_density as n

def _check_sigma(sigma) -> float:
    sigma = float(sigma)
    if not (np.isfinite(sigma) and sigma > 0):
        raise ValueError(f"sigma must be a positive finite number, got {sigma!r}")
    return sigma

def discount_factors(c: OptionContract) -> Tuple[float, float]:
    """(e^-rT, e^-qT)"""
    T = c.time_to_maturity
    return exp(-c.risk_free_rate*T), exp(-c.dividend_yield*T)

def d1_d2(c: OptionContract, sigma: float) -> Tuple[float, float]:
    sigma = _check_sigma(sigma)
    S, K, T = c.underlying_price, c.strike_price, c.time_to_maturity
    vol_sqrt_t = sigma*sqrt(T)
    d1 = (log(S/K) + (c.risk_free_rate - c.dividend_yield + 0.5*sigma**2)*T) / vol_sqrt_t
    return float(d1), float(d1 - vol_sqrt_t)

def price(c: OptionContract, sigma: float) -> float:
    """European BSM price of `c` at volatility `sigma`."""
    d1, d2 = d1_d2(c, sigma)
    disc_r, disc_q = discount_factors(c)
    S, K = c.underlying_price, c.strike_price
    if c.is_call:
        return float(disc_q*S*N(d1) - disc_r*K*N(d2))
    return float(disc_r*K*N(-d2) - disc_q*S*N(-d1))

def raw_vega(c: OptionContract, sigma: float) -> float:
    """dPrice/dsigma, unscaled (the Newton derivative)."""
    d1, _ = d1_d2(c, sigma)
    _, disc_q = discount_factors(c)
    return float(c.underlying_price*disc_q*sqrt(c.time_to_maturity)*n(d1))

def price_bounds(c: OptionContract) -> Tuple[float, float]:
    """No-arbitrage (lower, upper) bounds on the option price."""
    disc_r, disc_q = discount_factors(c)
    fwd_s = c.underlying_price*disc_q
    pv_k = c.strike_price*disc_r
    if c.is_call:
        return float(max(fwd_s - pv_k, 0.0)), float(fwd_s)
    return float(max(pv_k - fwd_s, 0.0)), float(pv_k)
