import logging
import math
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from .core.bsm import price
from .core.config import SolverConfig
from .core.contract import OptionContract
from .core.errors import ImpliedVolatilityError
from .core.greeks import greeks_at
from .core.iv import implied_vol

logger = logging.getLogger(__name__)

app = FastAPI(title="BSM API")
solver_config = SolverConfig.from_env()

class ContractReq(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    S: float = Field(gt=0); K: float = Field(gt=0); T: float = Field(gt=0); r: float
    option: Literal["call","put"]="call"
    q: float = 0.0

    def contract(self, observed_price=None) -> OptionContract:
        try:
            return OptionContract(underlying_price=self.S, strike_price=self.K, time_to_maturity=self.T,
                                  risk_free_rate=self.r, dividend_yield=self.q,
                                  observed_price=observed_price, is_call=self.option == "call")
        except ValueError as exc:
            raise HTTPException(status_code=422, detail=str(exc))

class PriceReq(ContractReq):
    sigma: float = Field(gt=0)

class PriceResp(BaseModel):
    value: float

@app.post("/price", response_model=PriceResp)
def price_endpoint(req: PriceReq):
    try:
        v = price(req.contract(), req.sigma)
    except (ValueError, ArithmeticError) as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    if not math.isfinite(v):
        raise HTTPException(status_code=422, detail=f"price is not finite for sigma={req.sigma}")
    return {"value": v}

class IVReq(ContractReq):
    target_price: float

class IVResp(BaseModel):
    sigma: Optional[float]; converged: bool; status: str; iters: int
    reason: Optional[str] = None

@app.post("/implied-vol", response_model=IVResp)
def iv_endpoint(req: IVReq):
    res = implied_vol(req.contract(req.target_price), solver_config)
    sigma = res.sigma if math.isfinite(res.sigma) else None  # NaN is not valid JSON
    return {"sigma": sigma, "converged": res.converged, "status": res.status.value,
            "iters": res.iters, "reason": res.reason}

class GreeksResp(BaseModel):
    sigma: float
    delta: float; gamma: float; theta: float; rho: float; vega: float

@app.post("/greeks", response_model=GreeksResp)
def greeks_endpoint(req: IVReq):
    contract = req.contract(req.target_price)
    res = implied_vol(contract, solver_config)
    if not res.converged:
        exc = ImpliedVolatilityError(res)
        logger.info(f"Rejecting /greeks request: {exc}")
        raise HTTPException(status_code=422, detail=str(exc))
    return {"sigma": res.sigma, **greeks_at(contract, res.sigma).as_dict()}
