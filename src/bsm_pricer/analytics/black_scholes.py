"""
Black-Scholes-Merton analytical pricing formulas for European options.

Closed-form price and Greeks with a continuous dividend yield. Time to
expiration is given in days and converted to a year fraction on either a
calendar (365) or trading (252) day-count basis.

All formulas are evaluated with IEEE-754 semantics: degenerate inputs produce
NaN or ±inf instead of raising. Use ``validate_inputs`` for strict checking.
"""

import functools
import math

import numpy as np

from bsm_pricer.greeks.types import Greeks, PriceAndGreeks

CALENDAR_DAYS_PER_YEAR = 365
TRADING_DAYS_PER_YEAR = 252

# Vega and Rho are quoted per 1% move
PERCENT = 100.0

_SQRT_2 = math.sqrt(2.0)
_INV_SQRT_2PI = 1.0 / math.sqrt(2.0 * math.pi)


def _ieee754(func):
    """Evaluate with NumPy floating-point warnings silenced; NaN/inf are results."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
            return func(*args, **kwargs)

    return wrapper


def norm_cdf(x: float) -> float:
    """
    Cumulative distribution function for standard normal distribution.

    Uses math.erfc, which keeps full relative precision in the lower tail
    and saturates to exactly 0.0 / 1.0 far from the origin.

    Parameters
    ----------
    x : float
        Input value

    Returns
    -------
    float
        CDF value at x: P(Z <= x) where Z ~ N(0,1)
    """
    return 0.5 * math.erfc(-x / _SQRT_2)


def norm_pdf(x: float) -> float:
    """
    Probability density function for standard normal distribution.

    Parameters
    ----------
    x : float
        Input value

    Returns
    -------
    float
        PDF value at x: φ(x) = exp(-x²/2)/√(2π)
    """
    return _INV_SQRT_2PI * math.exp(-0.5 * x * x)


def _days_per_year(is_calendar_days: bool) -> int:
    return CALENDAR_DAYS_PER_YEAR if is_calendar_days else TRADING_DAYS_PER_YEAR


def year_fraction(t_days: float, is_calendar_days: bool = True) -> float:
    """
    Convert days to expiration into a year fraction.

    Parameters
    ----------
    t_days : float
        Days to expiration (fractional days allowed)
    is_calendar_days : bool
        True for a 365-day basis, False for a 252 trading-day basis

    Returns
    -------
    float
        Time to expiration in years
    """
    return float(t_days) / _days_per_year(is_calendar_days)


# The private helpers below take the year fraction t and resolved d1/d2 and
# must run inside _ieee754; the public functions enter it exactly once.


def _d1_d2(S, K, v, r, q, t, d1, d2):
    if d1 is not None and d2 is not None:
        return float(d1), float(d2)

    vol_sqrt_t = v * np.sqrt(t)

    if d1 is None:
        if vol_sqrt_t > 0:
            d1 = (np.log(np.float64(S) / K) + t * (r - q + 0.5 * v * v)) / vol_sqrt_t
        else:
            d1 = math.nan
    if d2 is None:
        d2 = d1 - vol_sqrt_t if vol_sqrt_t > 0 else math.nan

    return float(d1), float(d2)


def _price(S, K, r, q, t, is_call, d1, d2):
    if is_call:
        price = S * np.exp(-q * t) * norm_cdf(d1) - K * np.exp(-r * t) * norm_cdf(d2)
    else:
        price = K * np.exp(-r * t) * norm_cdf(-d2) - S * np.exp(-q * t) * norm_cdf(-d1)
    return float(price)


# Gamma and Vega share one formula for calls and puts; Delta, Theta and Rho
# branch on the contract type.


def _delta(q, t, is_call, d1):
    if is_call:
        return float(np.exp(-q * t) * norm_cdf(d1))
    return float(-np.exp(-q * t) * norm_cdf(-d1))


def _gamma(S, v, q, t, d1):
    return float(np.exp(-q * t) / (S * v * np.sqrt(t)) * norm_pdf(d1))


def _theta(S, K, v, r, q, t, is_call, days_per_year, d1, d2):
    spot_discount = np.exp(-q * t)
    strike_discount = np.exp(-r * t)
    decay = -(S * v * spot_discount) / (2 * np.sqrt(t)) * norm_pdf(d1)

    if is_call:
        carry = -r * K * strike_discount * norm_cdf(d2)
        dividend = q * S * spot_discount * norm_cdf(d1)
    else:
        carry = r * K * strike_discount * norm_cdf(-d2)
        dividend = q * S * spot_discount * norm_cdf(-d1)

    return float((decay + carry + dividend) / days_per_year)


def _vega(S, q, t, d1):
    return float(S * np.exp(-q * t) * np.sqrt(t) * norm_pdf(d1) / PERCENT)


def _rho(K, r, q, t, is_call, d2):
    discounted = K * t * np.exp(-(r - q) * t) / PERCENT
    if is_call:
        return float(discounted * norm_cdf(d2))
    return float(-discounted * norm_cdf(-d2))


def _greeks(S, K, v, r, q, t, is_call, days_per_year, d1, d2):
    return Greeks(
        delta=_delta(q, t, is_call, d1),
        gamma=_gamma(S, v, q, t, d1),
        theta=_theta(S, K, v, r, q, t, is_call, days_per_year, d1, d2),
        vega=_vega(S, q, t, d1),
        rho=_rho(K, r, q, t, is_call, d2),
    )


@_ieee754
def compute_d1_d2(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> tuple[float, float]:
    """
    Compute the moneyness factors d1 and d2.

    Parameters
    ----------
    S : float
        Underlying price
    K : float
        Strike price
    v : float
        Volatility (decimal, e.g. 0.20)
    r : float
        Risk-free rate (decimal)
    q : float
        Continuous dividend yield (decimal)
    t_days : float
        Days to expiration
    is_calendar_days : bool
        Day-count basis selector (365 if True, 252 otherwise)
    d1, d2 : float, optional
        Precomputed values. A supplied value is used verbatim (0.0 included);
        None means derive it. A missing d2 is derived from the (possibly
        supplied) d1.

    Returns
    -------
    tuple[float, float]
        (d1, d2)

    Notes
    -----
    d1 = (ln(S/K) + t(r - q + v²/2)) / (v√t),  d2 = d1 - v√t

    When v√t is not strictly positive (zero volatility, zero time, or a
    negative input) the derived factors are NaN.
    """
    t = year_fraction(t_days, is_calendar_days)
    return _d1_d2(S, K, v, r, q, t, d1, d2)


def validate_inputs(S: float, K: float, v: float, t_days: float) -> None:
    """
    Strictly validate market inputs.

    The pricing functions never call this; they let NaN/inf propagate.
    Callers who prefer an exception over a NaN result call it first.

    Raises
    ------
    ValueError
        If any input is non-finite or outside the model's domain
    """
    for name, value in (("S", S), ("K", K), ("v", v), ("t_days", t_days)):
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value}")
    if S <= 0:
        raise ValueError("Underlying price S must be positive")
    if K <= 0:
        raise ValueError("Strike K must be positive")
    if v <= 0:
        raise ValueError("Volatility v must be positive")
    if t_days <= 0:
        raise ValueError("Days to expiration t_days must be positive")


@_ieee754
def bs_price(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> float:
    """
    Compute European option price using the Black-Scholes-Merton formula.

    Parameters
    ----------
    S : float
        Underlying price (must be > 0)
    K : float
        Strike price (must be > 0)
    v : float
        Volatility as a decimal fraction (must be > 0)
    r : float
        Risk-free rate as a decimal fraction
    q : float
        Continuous dividend yield as a decimal fraction
    t_days : float
        Days to expiration (must be > 0)
    is_call : bool
        True for a call, False for a put
    is_calendar_days : bool
        Day-count basis: 365 if True, 252 otherwise
    d1, d2 : float, optional
        Precomputed moneyness factors (see ``compute_d1_d2``)

    Returns
    -------
    float
        Option present value; NaN for degenerate inputs

    Notes
    -----
    Call: S·e^(-qt)·N(d1) - K·e^(-rt)·N(d2)
    Put:  K·e^(-rt)·N(-d2) - S·e^(-qt)·N(-d1)
    """
    t = year_fraction(t_days, is_calendar_days)
    d1, d2 = _d1_d2(S, K, v, r, q, t, d1, d2)
    return _price(S, K, r, q, t, is_call, d1, d2)


@_ieee754
def bs_delta(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> float:
    """
    Delta: option price change per 1 unit change in the underlying price.

    Call: e^(-qt)·N(d1), put: -e^(-qt)·N(-d1).
    """
    t = year_fraction(t_days, is_calendar_days)
    d1, _ = _d1_d2(S, K, v, r, q, t, d1, d2)
    return _delta(q, t, is_call, d1)


@_ieee754
def bs_gamma(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> float:
    """
    Gamma: Delta change per 1 unit change in the underlying price.

    e^(-qt)·φ(d1) / (S·v·√t), identical for calls and puts.
    """
    t = year_fraction(t_days, is_calendar_days)
    d1, _ = _d1_d2(S, K, v, r, q, t, d1, d2)
    return _gamma(S, v, q, t, d1)


@_ieee754
def bs_theta(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> float:
    """
    Theta: option price change per elapsed day.

    The day is measured on the same basis as ``t_days`` (calendar or
    trading), so the annual theta is divided by 365 or 252.

    Notes
    -----
    Call: (1/T)·[-S·v·e^(-qt)·φ(d1)/(2√t) - r·K·e^(-rt)·N(d2) + q·S·e^(-qt)·N(d1)]
    Put:  (1/T)·[-S·v·e^(-qt)·φ(d1)/(2√t) + r·K·e^(-rt)·N(-d2) + q·S·e^(-qt)·N(-d1)]

    The put carries the dividend term with a positive sign, so for q != 0
    it differs from -dV/dt of ``bs_price``.
    """
    t = year_fraction(t_days, is_calendar_days)
    d1, d2 = _d1_d2(S, K, v, r, q, t, d1, d2)
    return _theta(S, K, v, r, q, t, is_call, _days_per_year(is_calendar_days), d1, d2)


@_ieee754
def bs_vega(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> float:
    """
    Vega: option price change per 1% change in volatility.

    S·e^(-qt)·√t·φ(d1) / 100, identical for calls and puts.
    """
    t = year_fraction(t_days, is_calendar_days)
    d1, _ = _d1_d2(S, K, v, r, q, t, d1, d2)
    return _vega(S, q, t, d1)


@_ieee754
def bs_rho(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> float:
    """
    Rho: option price change per 1% change in the risk-free rate.

    Calls gain value as rates rise, puts lose it.

    Notes
    -----
    Call:  K·t·e^(-(r-q)t)·N(d2) / 100
    Put:  -K·t·e^(-(r-q)t)·N(-d2) / 100
    """
    t = year_fraction(t_days, is_calendar_days)
    _, d2 = _d1_d2(S, K, v, r, q, t, d1, d2)
    return _rho(K, r, q, t, is_call, d2)


@_ieee754
def bs_greeks(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> Greeks:
    """
    Compute all five Greeks from a single d1/d2 evaluation.

    Returns
    -------
    Greeks
        (delta, gamma, theta, vega, rho), each computed from identical
        moneyness factors
    """
    t = year_fraction(t_days, is_calendar_days)
    d1, d2 = _d1_d2(S, K, v, r, q, t, d1, d2)
    return _greeks(S, K, v, r, q, t, is_call, _days_per_year(is_calendar_days), d1, d2)


@_ieee754
def bs_price_and_greeks(
    S: float,
    K: float,
    v: float,
    r: float,
    q: float,
    t_days: float,
    is_call: bool,
    is_calendar_days: bool = True,
    d1: float | None = None,
    d2: float | None = None,
) -> PriceAndGreeks:
    """
    Compute the price and all Greeks from a single d1/d2 evaluation.

    Returns
    -------
    PriceAndGreeks
        (price, delta, gamma, theta, vega, rho)
    """
    t = year_fraction(t_days, is_calendar_days)
    d1, d2 = _d1_d2(S, K, v, r, q, t, d1, d2)
    greeks = _greeks(S, K, v, r, q, t, is_call, _days_per_year(is_calendar_days), d1, d2)
    return PriceAndGreeks(_price(S, K, r, q, t, is_call, d1, d2), *greeks)
