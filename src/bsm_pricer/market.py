"""
Market snapshot value object.
"""

from dataclasses import dataclass, replace

from bsm_pricer.analytics.black_scholes import (
    bs_greeks,
    bs_price,
    bs_price_and_greeks,
    compute_d1_d2,
    validate_inputs,
    year_fraction,
)
from bsm_pricer.greeks.types import Greeks, PriceAndGreeks


@dataclass(frozen=True)
class MarketSnapshot:
    """
    Immutable set of inputs for pricing one European option.

    Attributes
    ----------
    S : float
        Underlying price
    K : float
        Strike price
    v : float
        Volatility (decimal, 0.20 for 20%)
    r : float
        Risk-free rate (decimal)
    q : float
        Continuous dividend yield (decimal)
    t_days : float
        Days to expiration
    is_call : bool
        True for a call, False for a put
    is_calendar_days : bool
        Day-count basis: 365 if True, 252 otherwise
    """

    S: float
    K: float
    v: float
    r: float
    q: float
    t_days: float
    is_call: bool
    is_calendar_days: bool = True

    def _args(self) -> tuple:
        return (
            self.S,
            self.K,
            self.v,
            self.r,
            self.q,
            self.t_days,
            self.is_call,
            self.is_calendar_days,
        )

    def validate(self) -> "MarketSnapshot":
        """Raise ValueError if the inputs are outside the model's domain."""
        validate_inputs(self.S, self.K, self.v, self.t_days)
        return self

    def bump(self, **changes) -> "MarketSnapshot":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def year_fraction(self) -> float:
        """Time to expiration in years on the snapshot's day-count basis."""
        return year_fraction(self.t_days, self.is_calendar_days)

    def d1_d2(self) -> tuple[float, float]:
        """Moneyness factors (d1, d2), NaN when v·√t is not positive."""
        return compute_d1_d2(
            self.S, self.K, self.v, self.r, self.q, self.t_days, self.is_calendar_days
        )

    def price(self) -> float:
        """Option present value, see ``bs_price``."""
        return bs_price(*self._args())

    def greeks(self) -> Greeks:
        """Delta, Gamma, Theta, Vega and Rho from one d1/d2 evaluation."""
        return bs_greeks(*self._args())

    def price_and_greeks(self) -> PriceAndGreeks:
        """Price and all Greeks from one d1/d2 evaluation."""
        return bs_price_and_greeks(*self._args())
