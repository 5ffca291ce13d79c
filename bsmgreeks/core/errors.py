class BSMError(Exception):
    """Base class for pricing-engine errors."""

class ImpliedVolatilityError(BSMError, ValueError):
    """Raised when a usable implied volatility could not be resolved."""

    def __init__(self, result):
        self.result = result
        super().__init__(f"implied volatility {result.status.value}: {result.reason or 'no detail'} "
                         f"(sigma={result.sigma}, iters={result.iters})")
