import pytest

from bsmgreeks.core.contract import OptionContract

@pytest.fixture
def reference_contract():
    """Deep OTM short-dated call quoted at 1.20 with a 50% rate."""
    return OptionContract(
        underlying_price=112.5,
        strike_price=190,
        time_to_maturity=0.21095890410958903,
        risk_free_rate=0.5,
        dividend_yield=0,
        observed_price=1.2,
        is_call=True,
    )

@pytest.fixture
def atm_call():
    return OptionContract(underlying_price=100, strike_price=100, time_to_maturity=1.0,
                          risk_free_rate=0.05, is_call=True)

@pytest.fixture
def atm_put(atm_call):
    return OptionContract(**{**atm_call.model_dump(), "is_call": False})
