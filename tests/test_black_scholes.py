"""
Tests for Black-Scholes-Merton price and per-Greek formulas.
"""

import math
import warnings

import pytest

from bsm_pricer.analytics.black_scholes import (
    bs_delta,
    bs_gamma,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
    compute_d1_d2,
    norm_cdf,
    validate_inputs,
    year_fraction,
)
from tests.utils.black_scholes import (
    black_scholes_delta,
    black_scholes_gamma,
    black_scholes_price,
    black_scholes_rho,
    black_scholes_theta,
    black_scholes_vega,
)

# (S, K, v, r, q, t_days)
MARKETS = [
    (100.0, 100.0, 0.20, 0.05, 0.00, 365.0),
    (100.0, 110.0, 0.25, 0.05, 0.02, 90.0),
    (100.0, 90.0, 0.25, 0.03, 0.01, 30.0),
    (50.0, 55.0, 0.40, 0.01, 0.00, 7.5),
    (150.0, 150.0, 0.18, 0.02, 0.04, 730.0),
    (80.0, 100.0, 0.60, 0.04, 0.00, 0.5),
]


class TestYearFraction:
    """Tests for day-count conversion."""

    def test_calendar_basis(self):
        assert year_fraction(365, True) == 1.0
        assert year_fraction(73, True) == pytest.approx(0.2)

    def test_trading_basis(self):
        assert year_fraction(252, False) == 1.0
        assert year_fraction(126, False) == 0.5

    def test_fractional_days(self):
        assert year_fraction(0.5, True) == pytest.approx(0.5 / 365)

    def test_default_is_calendar(self):
        assert year_fraction(182.5) == 0.5


class TestComputeD1D2:
    """Tests for the moneyness factors."""

    def test_atm_textbook(self):
        d1, d2 = compute_d1_d2(100, 100, 0.2, 0.05, 0.0, 365)
        assert d1 == pytest.approx(0.35, abs=1e-12)
        assert d2 == pytest.approx(0.15, abs=1e-12)

    def test_dividend_lowers_d1(self):
        d1_no_div, _ = compute_d1_d2(100, 100, 0.2, 0.05, 0.0, 365)
        d1_div, _ = compute_d1_d2(100, 100, 0.2, 0.05, 0.03, 365)
        assert d1_div == pytest.approx(d1_no_div - 0.03 / 0.2, abs=1e-12)

    def test_overrides_used_verbatim(self):
        assert compute_d1_d2(100, 120, 0.3, 0.05, 0.0, 60, True, 1.25, -0.5) == (1.25, -0.5)

    def test_zero_override_is_honoured(self):
        """A supplied d1 of exactly zero must not trigger recomputation."""
        d1, d2 = compute_d1_d2(100, 80, 0.2, 0.05, 0.0, 365, True, 0.0, 0.0)
        assert (d1, d2) == (0.0, 0.0)

    def test_missing_d2_derived_from_supplied_d1(self):
        d1, d2 = compute_d1_d2(100, 100, 0.2, 0.05, 0.0, 365, True, d1=0.5)
        assert d1 == 0.5
        assert d2 == pytest.approx(0.3, abs=1e-12)

    @pytest.mark.parametrize(
        "v,t_days",
        [(0.0, 30.0), (0.2, 0.0), (-0.2, 30.0), (0.2, -5.0)],
    )
    def test_degenerate_inputs_give_nan(self, v, t_days):
        d1, d2 = compute_d1_d2(100, 100, v, 0.03, 0.0, t_days)
        assert math.isnan(d1)
        assert math.isnan(d2)


class TestPrice:
    """Tests for the option price formula."""

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    @pytest.mark.parametrize("is_call", [True, False])
    def test_matches_reference(self, S, K, v, r, q, t_days, is_call):
        T = t_days / 365
        option_type = "call" if is_call else "put"
        expected = black_scholes_price(S, K, r, q, v, T, option_type)
        price = bs_price(S, K, v, r, q, t_days, is_call)
        assert price == pytest.approx(expected, rel=1e-10, abs=1e-12)

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    def test_put_call_parity(self, S, K, v, r, q, t_days):
        """Test C - P = S·e^(-qt) - K·e^(-rt)."""
        t = t_days / 365
        call = bs_price(S, K, v, r, q, t_days, True)
        put = bs_price(S, K, v, r, q, t_days, False)
        parity = S * math.exp(-q * t) - K * math.exp(-r * t)
        assert abs(call - put - parity) < 1e-8

    def test_call_monotone_in_spot(self):
        prices = [bs_price(S, 100, 0.25, 0.03, 0.01, 60, True) for S in range(50, 151)]
        assert all(b >= a for a, b in zip(prices, prices[1:]))

    def test_put_monotone_in_spot(self):
        prices = [bs_price(S, 100, 0.25, 0.03, 0.01, 60, False) for S in range(50, 151)]
        assert all(b <= a for a, b in zip(prices, prices[1:]))

    def test_prices_non_negative(self):
        for S, K, v, r, q, t_days in MARKETS:
            assert bs_price(S, K, v, r, q, t_days, True) >= 0
            assert bs_price(S, K, v, r, q, t_days, False) >= 0

    def test_day_count_round_trip(self):
        """365 calendar days and 252 trading days are both one year."""
        for is_call in (True, False):
            calendar = bs_price(100, 95, 0.3, 0.04, 0.01, 365, is_call, True)
            trading = bs_price(100, 95, 0.3, 0.04, 0.01, 252, is_call, False)
            assert calendar == trading

    def test_zero_volatility_is_nan(self):
        assert math.isnan(bs_price(100, 100, 0.0, 0.03, 0.0, 30, True))

    def test_zero_days_is_nan(self):
        assert math.isnan(bs_price(100, 100, 0.2, 0.03, 0.0, 0, False))

    def test_negative_spot_is_nan(self):
        assert math.isnan(bs_price(-1.0, 100, 0.2, 0.03, 0.0, 30, True))

    def test_degenerate_inputs_do_not_warn(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            bs_price(100, 100, 0.0, 0.03, 0.0, 30, True)
            bs_gamma(100, 100, 0.0, 0.03, 0.0, 30, True)
            bs_theta(100, 100, 0.2, 0.03, 0.0, 0, True)
            bs_price(100, 0.0, 0.2, 0.03, 0.0, 30, True)

    def test_zero_d1_override_prices_at_the_money_forward(self):
        """With d1 = d2 = 0 both CDFs are exactly one half."""
        t = 90 / 365
        price = bs_price(100, 80, 0.2, 0.05, 0.01, 90, True, True, 0.0, 0.0)
        expected = 0.5 * (100 * math.exp(-0.01 * t) - 80 * math.exp(-0.05 * t))
        assert price == pytest.approx(expected, rel=1e-14)

    def test_returns_builtin_float(self):
        assert type(bs_price(100, 100, 0.2, 0.05, 0.0, 30, True)) is float
        assert type(year_fraction(365, True)) is float
        assert type(year_fraction(252, False)) is float
        assert all(type(d) is float for d in compute_d1_d2(100, 100, 0.2, 0.05, 0.0, 30))


class TestGreeks:
    """Tests for the per-Greek formulas."""

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    @pytest.mark.parametrize("is_call", [True, False])
    def test_delta_matches_reference(self, S, K, v, r, q, t_days, is_call):
        option_type = "call" if is_call else "put"
        expected = black_scholes_delta(S, K, r, q, v, t_days / 365, option_type)
        assert bs_delta(S, K, v, r, q, t_days, is_call) == pytest.approx(expected, abs=1e-12)

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    def test_delta_bounds(self, S, K, v, r, q, t_days):
        ceiling = math.exp(-q * t_days / 365) + 1e-15
        call_delta = bs_delta(S, K, v, r, q, t_days, True)
        put_delta = bs_delta(S, K, v, r, q, t_days, False)
        assert 0.0 <= call_delta <= ceiling
        assert -ceiling <= put_delta <= 0.0

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    def test_gamma_matches_reference(self, S, K, v, r, q, t_days):
        expected = black_scholes_gamma(S, K, r, q, v, t_days / 365)
        assert bs_gamma(S, K, v, r, q, t_days, True) == pytest.approx(expected, rel=1e-10)

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    def test_vega_is_per_one_percent(self, S, K, v, r, q, t_days):
        expected = black_scholes_vega(S, K, r, q, v, t_days / 365) / 100
        assert bs_vega(S, K, v, r, q, t_days, True) == pytest.approx(expected, rel=1e-10)

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    def test_gamma_and_vega_identical_for_call_and_put(self, S, K, v, r, q, t_days):
        assert bs_gamma(S, K, v, r, q, t_days, True) == bs_gamma(S, K, v, r, q, t_days, False)
        assert bs_vega(S, K, v, r, q, t_days, True) == bs_vega(S, K, v, r, q, t_days, False)

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    @pytest.mark.parametrize("is_call", [True, False])
    def test_theta_is_per_calendar_day_without_dividend(self, S, K, v, r, q, t_days, is_call):
        option_type = "call" if is_call else "put"
        expected = black_scholes_theta(S, K, r, 0.0, v, t_days / 365, option_type) / 365
        assert bs_theta(S, K, v, r, 0.0, t_days, is_call) == pytest.approx(expected, rel=1e-10)

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    def test_call_theta_with_dividend(self, S, K, v, r, q, t_days):
        expected = black_scholes_theta(S, K, r, q, v, t_days / 365, "call") / 365
        assert bs_theta(S, K, v, r, q, t_days, True) == pytest.approx(expected, rel=1e-10)

    def test_put_theta_dividend_term(self):
        """The put's dividend term is +q·S·e^(-qt)·N(-d1)."""
        S, K, v, r, q, t_days = 100.0, 110.0, 0.25, 0.05, 0.02, 90.0
        t = t_days / 365
        d1, _ = compute_d1_d2(S, K, v, r, q, t_days)
        without_dividend_term = (
            black_scholes_theta(S, K, r, q, v, t, "put") + q * S * math.exp(-q * t) * norm_cdf(-d1)
        )
        expected = (without_dividend_term + q * S * math.exp(-q * t) * norm_cdf(-d1)) / 365
        assert bs_theta(S, K, v, r, q, t_days, False) == pytest.approx(expected, rel=1e-10)

    def test_theta_trading_basis(self):
        """Annual theta is the same; only the per-day divisor changes."""
        calendar = bs_theta(100, 100, 0.2, 0.05, 0.0, 365, True, True)
        trading = bs_theta(100, 100, 0.2, 0.05, 0.0, 252, True, False)
        assert calendar * 365 == pytest.approx(trading * 252, rel=1e-12)

    @pytest.mark.parametrize("S,K,v,r,q,t_days", MARKETS)
    @pytest.mark.parametrize("is_call", [True, False])
    def test_rho_without_dividend(self, S, K, v, r, q, t_days, is_call):
        option_type = "call" if is_call else "put"
        expected = black_scholes_rho(S, K, r, v, t_days / 365, option_type) / 100
        assert bs_rho(S, K, v, r, 0.0, t_days, is_call) == pytest.approx(expected, rel=1e-10)

    def test_rho_discounts_with_rate_less_dividend(self):
        S, K, v, r, q, t_days = 100.0, 100.0, 0.2, 0.05, 0.03, 180.0
        t = t_days / 365
        _, d2 = compute_d1_d2(S, K, v, r, q, t_days)
        expected = K * t * math.exp(-(r - q) * t) * norm_cdf(d2) / 100
        assert bs_rho(S, K, v, r, q, t_days, True) == pytest.approx(expected, rel=1e-12)

    def test_rho_signs(self):
        assert bs_rho(100, 100, 0.2, 0.05, 0.0, 90, True) > 0
        assert bs_rho(100, 100, 0.2, 0.05, 0.0, 90, False) < 0

    def test_delta_uses_d1_override(self):
        t = 30 / 365
        delta = bs_delta(100, 100, 0.2, 0.05, 0.02, 30, True, True, d1=0.35)
        assert delta == pytest.approx(math.exp(-0.02 * t) * norm_cdf(0.35), rel=1e-14)

    @pytest.mark.parametrize("greek", [bs_delta, bs_gamma, bs_theta, bs_vega, bs_rho])
    def test_zero_volatility_is_nan(self, greek):
        assert math.isnan(greek(100, 100, 0.0, 0.03, 0.0, 30, True))


class TestValidateInputs:
    """Tests for opt-in strict validation."""

    def test_valid_inputs_pass(self):
        validate_inputs(100, 100, 0.2, 30)

    @pytest.mark.parametrize(
        "S,K,v,t_days,match",
        [
            (0.0, 100, 0.2, 30, "Underlying price"),
            (100, -5, 0.2, 30, "Strike"),
            (100, 100, 0.0, 30, "Volatility"),
            (100, 100, -0.1, 30, "Volatility"),
            (100, 100, 0.2, 0, "Days to expiration"),
            (math.nan, 100, 0.2, 30, "S must be finite"),
            (100, 100, math.inf, 30, "v must be finite"),
        ],
    )
    def test_invalid_inputs_raise(self, S, K, v, t_days, match):
        with pytest.raises(ValueError, match=match):
            validate_inputs(S, K, v, t_days)
