"""
Black-Scholes-Merton Option Pricer

Closed-form prices and Greeks for European options with a continuous
dividend yield.
"""

from bsm_pricer._version import __version__

# Analytics
from bsm_pricer.analytics.black_scholes import (
    CALENDAR_DAYS_PER_YEAR,
    TRADING_DAYS_PER_YEAR,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_price_and_greeks,
    bs_rho,
    bs_theta,
    bs_vega,
    compute_d1_d2,
    norm_cdf,
    norm_pdf,
    validate_inputs,
    year_fraction,
)

# Greeks
from bsm_pricer.greeks.finite_diff import finite_diff_greeks
from bsm_pricer.greeks.types import Greeks, PriceAndGreeks

# Market inputs
from bsm_pricer.market import MarketSnapshot

__all__ = [
    # Version
    "__version__",
    # Analytics
    "CALENDAR_DAYS_PER_YEAR",
    "TRADING_DAYS_PER_YEAR",
    "norm_cdf",
    "norm_pdf",
    "year_fraction",
    "compute_d1_d2",
    "validate_inputs",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_theta",
    "bs_vega",
    "bs_rho",
    "bs_greeks",
    "bs_price_and_greeks",
    # Greeks
    "Greeks",
    "PriceAndGreeks",
    "finite_diff_greeks",
    # Market inputs
    "MarketSnapshot",
]
