"""
Greeks computation via finite differences.

Bump-and-reprice estimators on top of the closed-form price, reported in
the same units as the analytic Greeks (Vega and Rho per 1%, Theta per day).
Useful for cross-checking the closed forms.
"""

from bsm_pricer.analytics.black_scholes import PERCENT, bs_price
from bsm_pricer.greeks.types import Greeks


def _check_step(name: str, value: float) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be positive")


def finite_diff_delta(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    h_rel: float = 1e-4,
) -> float:
    """
    Compute Delta via central finite difference in the underlying price.

    Falls back to a forward difference when the downward bump would reach a
    non-positive spot.

    Parameters
    ----------
    S, K, v, r, q, t_days, is_call, is_calendar_days
        Market inputs, as for ``bs_price``
    h_rel : float
        Relative step size for spot (h = h_rel * S)

    Returns
    -------
    float
        Delta estimate
    """
    _check_step("h_rel", h_rel)
    h = h_rel * S

    V_up = bs_price(S + h, K, v, r, q, t_days, is_call, is_calendar_days)
    if S - h <= 0:
        # Use forward difference if central would give negative spot
        V_base = bs_price(S, K, v, r, q, t_days, is_call, is_calendar_days)
        return (V_up - V_base) / h

    V_down = bs_price(S - h, K, v, r, q, t_days, is_call, is_calendar_days)
    return (V_up - V_down) / (2 * h)


def finite_diff_gamma(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    h_rel: float = 1e-4,
) -> float:
    """
    Compute Gamma via second-order central difference in the underlying price.

    Uses the forward second difference when S - h would be non-positive.
    """
    _check_step("h_rel", h_rel)
    h = h_rel * S

    if S - h <= 0:
        V_far = bs_price(S + 2 * h, K, v, r, q, t_days, is_call, is_calendar_days)
        V_near = bs_price(S + h, K, v, r, q, t_days, is_call, is_calendar_days)
        V_base = bs_price(S, K, v, r, q, t_days, is_call, is_calendar_days)
        return (V_far - 2 * V_near + V_base) / (h * h)

    V_up = bs_price(S + h, K, v, r, q, t_days, is_call, is_calendar_days)
    V_base = bs_price(S, K, v, r, q, t_days, is_call, is_calendar_days)
    V_down = bs_price(S - h, K, v, r, q, t_days, is_call, is_calendar_days)
    return (V_up - 2 * V_base + V_down) / (h * h)


def finite_diff_theta(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    h_days: float = 1e-3,
) -> float:
    """
    Compute Theta (price change per elapsed day) via finite difference.

    Passing time shortens the days to expiration, so theta is the negative
    derivative with respect to ``t_days``. Uses a central difference unless
    stepping down would reach expiration, in which case the one-sided
    difference away from expiration is used.

    Agrees with ``bs_theta`` for calls, and for puts when q = 0.
    """
    _check_step("h_days", h_days)

    V_longer = bs_price(S, K, v, r, q, t_days + h_days, is_call, is_calendar_days)
    if t_days - h_days <= 0:
        V_base = bs_price(S, K, v, r, q, t_days, is_call, is_calendar_days)
        return -(V_longer - V_base) / h_days

    V_shorter = bs_price(S, K, v, r, q, t_days - h_days, is_call, is_calendar_days)
    return -(V_longer - V_shorter) / (2 * h_days)


def finite_diff_vega(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    h_abs: float = 1e-4,
) -> float:
    """
    Compute Vega (per 1% volatility) via central finite difference.

    Falls back to a forward difference when the downward bump would leave
    a non-positive volatility.
    """
    _check_step("h_abs", h_abs)

    V_up = bs_price(S, K, v + h_abs, r, q, t_days, is_call, is_calendar_days)
    if v - h_abs < 1e-12:
        V_base = bs_price(S, K, v, r, q, t_days, is_call, is_calendar_days)
        return (V_up - V_base) / h_abs / PERCENT

    V_down = bs_price(S, K, v - h_abs, r, q, t_days, is_call, is_calendar_days)
    return (V_up - V_down) / (2 * h_abs) / PERCENT


def finite_diff_rho(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    h_abs: float = 1e-4,
) -> float:
    """
    Compute Rho (per 1% rate) via central finite difference.

    This is the true rate sensitivity. It agrees with ``bs_rho`` only when
    q = 0, since the closed form discounts with e^(-(r-q)t).
    """
    _check_step("h_abs", h_abs)

    V_up = bs_price(S, K, v, r + h_abs, q, t_days, is_call, is_calendar_days)
    V_down = bs_price(S, K, v, r - h_abs, q, t_days, is_call, is_calendar_days)
    return (V_up - V_down) / (2 * h_abs) / PERCENT


def finite_diff_greeks(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
) -> Greeks:
    """
    Compute all five Greeks by bump-and-reprice with default step sizes.
    """
    args = (S, K, v, r, q, t_days, is_call, is_calendar_days)
    return Greeks(
        delta=finite_diff_delta(*args),
        gamma=finite_diff_gamma(*args),
        theta=finite_diff_theta(*args),
        vega=finite_diff_vega(*args),
        rho=finite_diff_rho(*args),
    )
