"""
Analytics module for Black-Scholes-Merton pricing and Greeks.

Provides closed-form formulas for European options with a continuous
dividend yield, without scipy dependency.
"""

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

__all__ = [
    "CALENDAR_DAYS_PER_YEAR",
    "TRADING_DAYS_PER_YEAR",
    "bs_delta",
    "bs_gamma",
    "bs_greeks",
    "bs_price",
    "bs_price_and_greeks",
    "bs_rho",
    "bs_theta",
    "bs_vega",
    "compute_d1_d2",
    "norm_cdf",
    "norm_pdf",
    "validate_inputs",
    "year_fraction",
]
