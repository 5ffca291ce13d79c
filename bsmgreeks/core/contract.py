from dataclasses import dataclass, asdict
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

class OptionContract(BaseModel):
    """European option inputs for a single valuation.

    S, K and T must be strictly positive; every float must be finite.
    `observed_price` is only read by the implied-vol solver.
    """
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    underlying_price: float = Field(gt=0)   # S
    strike_price: float = Field(gt=0)       # K
    time_to_maturity: float = Field(gt=0)   # T, years
    risk_free_rate: float = 0.0             # r, continuous
    dividend_yield: float = 0.0             # q, continuous
    observed_price: Optional[float] = None
    is_call: bool = True

    def with_observed_price(self, observed_price: float) -> "OptionContract":
        # model_copy(update=...) skips validation
        return OptionContract(**{**self.model_dump(), "observed_price": observed_price})

@dataclass(frozen=True)
class Greeks:
    delta: float
    gamma: float
    theta: float  # per calendar day
    rho: float    # per 1% rate move
    vega: float   # per 1% vol move

    def as_dict(self) -> dict:
        return asdict(self)
