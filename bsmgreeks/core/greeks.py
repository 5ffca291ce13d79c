"""Sensitivities of the BSM price at a given volatility.

Reporting conventions follow the usual quoting on trading screens:
theta per calendar day, rho and vega per 1% move.
"""
from typing import Optional

from numpy import sqrt

from .bsm import d1_d2, discount_factors
from .config import SolverConfig
from .contract import OptionContract, Greeks
from .iv import implied_volatility
from .stats import cumulative_normal as N, normal_density as n

DAYS_PER_YEAR = 365.0
PER_PERCENT = 100.0

def delta(c: OptionContract, sigma: float) -> float:
    d1, _ = d1_d2(c, sigma)
    _, disc_q = discount_factors(c)
    if c.is_call:
        return float(disc_q*N(d1))
    return float(-disc_q*N(-d1))

def gamma(c: OptionContract, sigma: float) -> float:
    d1, _ = d1_d2(c, sigma)
    _, disc_q = discount_factors(c)
    return float(n(d1)*disc_q / (c.underlying_price*sigma*sqrt(c.time_to_maturity)))

def theta(c: OptionContract, sigma: float) -> float:
    # The call branch carries neither the e^-qT factor nor the q*S carry
    # term; with q = 0 both branches are the textbook BSM theta.
    d1, d2 = d1_d2(c, sigma)
    disc_r, disc_q = discount_factors(c)
    S, K, T, r, q = (c.underlying_price, c.strike_price, c.time_to_maturity,
                     c.risk_free_rate, c.dividend_yield)
    if c.is_call:
        annual = -S*n(d1)*sigma/(2*sqrt(T)) - r*K*disc_r*N(d2)
    else:
        annual = (-S*n(d1)*sigma*disc_q/(2*sqrt(T))
                  + r*K*disc_r*N(-d2)
                  - q*S*disc_q*N(-d1))
    return float(annual / DAYS_PER_YEAR)

def rho(c: OptionContract, sigma: float) -> float:
    _, d2 = d1_d2(c, sigma)
    disc_r, _ = discount_factors(c)
    kt = c.strike_price*c.time_to_maturity*disc_r
    if c.is_call:
        return float(kt*N(d2) / PER_PERCENT)
    return float(-kt*N(-d2) / PER_PERCENT)

def vega(c: OptionContract, sigma: float) -> float:
    d1, _ = d1_d2(c, sigma)
    _, disc_q = discount_factors(c)
    return float(c.underlying_price*sqrt(c.time_to_maturity)*n(d1)*disc_q / PER_PERCENT)

def greeks_at(c: OptionContract, sigma: float) -> Greeks:
    return Greeks(
        delta=delta(c, sigma),
        gamma=gamma(c, sigma),
        theta=theta(c, sigma),
        rho=rho(c, sigma),
        vega=vega(c, sigma),
    )

def compute_greeks(c: OptionContract, config: Optional[SolverConfig] = None) -> Greeks:
    """Resolve implied vol from c.observed_price, then all five Greeks at it.

    Raises ImpliedVolatilityError if the solver does not converge.
    """
    return greeks_at(c, implied_volatility(c, config))
