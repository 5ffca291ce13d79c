import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .bsm import price, raw_vega, price_bounds
from .config import SolverConfig, DEFAULT_CONFIG
from .contract import OptionContract
from .errors import ImpliedVolatilityError
from .rootfind import newton_bisect, expand_upper

logger = logging.getLogger(__name__)

class IVStatus(str, Enum):
    CONVERGED = "converged"
    DID_NOT_CONVERGE = "did_not_converge"
    DEGENERATE = "degenerate"

@dataclass(frozen=True)
class IVResult:
    sigma: float
    status: IVStatus
    iters: int
    reason: Optional[str] = None

    @property
    def converged(self) -> bool:
        return self.status is IVStatus.CONVERGED

def _degenerate(reason, iters=0):
    logger.warning(f"Implied vol degenerate: {reason}")
    return IVResult(float("nan"), IVStatus.DEGENERATE, iters, reason)

def implied_vol(contract: OptionContract, config: Optional[SolverConfig] = None) -> IVResult:
    """Solve price(contract, sigma) = contract.observed_price; returns IVResult."""
    cfg = config or DEFAULT_CONFIG
    target = contract.observed_price
    if target is None:
        return _degenerate("contract has no observed price")

    # Edge/degenerate cases: outside no-arbitrage bounds no sigma exists
    lower, upper = price_bounds(contract)
    if target <= lower:
        return _degenerate(f"observed price {target} at or below lower bound {lower:.10g}")
    if target >= upper:
        return _degenerate(f"observed price {target} at or above upper bound {upper:.10g}")

    def f(sig):
        return price(contract, sig) - target

    def fprime(sig):
        return raw_vega(contract, sig)

    try:
        # strictly inside the bounds, so some finite sigma reaches the target
        hi = expand_upper(f, cfg.sigma_max, max_expansions=cfg.max_bracket_expansions)
        res = newton_bisect(f, fprime, cfg.initial_sigma, cfg.sigma_min, hi,
                            tol=cfg.tolerance, maxiter=cfg.max_iterations, min_slope=cfg.min_vega)
    except FloatingPointError as exc:
        return _degenerate(str(exc))

    if not res.bracketed:
        return _degenerate(f"observed price {target} not attainable for sigma in "
                           f"[{cfg.sigma_min}, {hi}]")
    if not res.converged:
        logger.warning(f"Implied vol did not converge after {res.iterations} iterations "
                       f"(sigma={res.root:.10g}, residual={res.residual:.3g})")
        return IVResult(res.root, IVStatus.DID_NOT_CONVERGE, res.iterations,
                        f"residual {res.residual:.3g} after {res.iterations} iterations")

    logger.debug(f"Implied vol {res.root:.10g} in {res.iterations} iterations")
    return IVResult(res.root, IVStatus.CONVERGED, res.iterations)

def implied_volatility(contract: OptionContract, config: Optional[SolverConfig] = None) -> float:
    """Converged implied volatility, or ImpliedVolatilityError."""
    res = implied_vol(contract, config)
    if not res.converged:
        raise ImpliedVolatilityError(res)
    return res.sigma
