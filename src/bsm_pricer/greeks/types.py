"""
Greeks result types.
"""

from typing import NamedTuple


class Greeks(NamedTuple):
    """
    Container for the five Black-Scholes-Merton Greeks.

    Attributes
    ----------
    delta : float
        Price change per 1 unit move in the underlying
    gamma : float
        Delta change per 1 unit move in the underlying
    theta : float
        Price change per elapsed day (calendar or trading basis)
    vega : float
        Price change per 1% move in volatility
    rho : float
        Price change per 1% move in the risk-free rate
    """

    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    def __repr__(self) -> str:
        return (
            f"Greeks(\n"
            f"  delta={self.delta:.6f},\n"
            f"  gamma={self.gamma:.6f},\n"
            f"  theta={self.theta:.6f},\n"
            f"  vega={self.vega:.6f},\n"
            f"  rho={self.rho:.6f}\n"
            f")"
        )


class PriceAndGreeks(NamedTuple):
    """
    Option price bundled with its Greeks, all from the same d1/d2.

    Attributes
    ----------
    price : float
        Option present value
    delta, gamma, theta, vega, rho : float
        See ``Greeks``
    """

    price: float
    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float

    @property
    def greeks(self) -> Greeks:
        """The Greeks without the price."""
        return Greeks(self.delta, self.gamma, self.theta, self.vega, self.rho)

    def __repr__(self) -> str:
        return (
            f"PriceAndGreeks(\n"
            f"  price={self.price:.6f},\n"
            f"  delta={self.delta:.6f},\n"
            f"  gamma={self.gamma:.6f},\n"
            f"  theta={self.theta:.6f},\n"
            f"  vega={self.vega:.6f},\n"
            f"  rho={self.rho:.6f}\n"
            f")"
        )
