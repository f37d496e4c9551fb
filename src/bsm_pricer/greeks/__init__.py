"""
Greeks package initialization.

Finite-difference estimators live in ``bsm_pricer.greeks.finite_diff``; they
are not imported here because they depend on the analytics layer, which in
turn depends on these result types.
"""

from bsm_pricer.greeks.types import Greeks, PriceAndGreeks

__all__ = [
    'Greeks',
    'PriceAndGreeks',
]
