#!/usr/bin/env python
"""
Analytic vs finite-difference Greeks demonstration.

Prints the closed-form price and Greeks across a strike ladder next to the
bump-and-reprice estimates.
"""

import sys
from pathlib import Path

# Add parent directory to path to allow running without installation
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bsm_pricer import MarketSnapshot, finite_diff_greeks


def main():
    """Run the Greeks comparison."""
    # Fixed parameters
    S = 100.0
    v = 0.2
    r = 0.05
    q = 0.0
    t_days = 365.0

    strikes = [80.0, 90.0, 100.0, 110.0, 120.0]

    print("=" * 100)
    print("Black-Scholes-Merton Greeks - Analytic vs Finite Difference")
    print("=" * 100)
    print(f"\nParameters: S={S}, v={v}, r={r}, q={q}, t_days={t_days} (calendar)")
    print("Vega and Rho per 1%, Theta per calendar day\n")

    for is_call in (True, False):
        print("-" * 100)
        print("European Call" if is_call else "European Put")
        print("-" * 100)
        print(
            f"{'K':<8} {'Price':<10} {'Delta':<10} {'Gamma':<10} {'Theta':<10} "
            f"{'Vega':<10} {'Rho':<10} {'max |FD err|':<12}"
        )

        for K in strikes:
            snapshot = MarketSnapshot(S=S, K=K, v=v, r=r, q=q, t_days=t_days, is_call=is_call)
            result = snapshot.price_and_greeks()
            numeric = finite_diff_greeks(S, K, v, r, q, t_days, is_call)
            max_err = max(abs(a - b) for a, b in zip(result.greeks, numeric))

            print(
                f"{K:<8.1f} {result.price:<10.4f} {result.delta:<10.4f} {result.gamma:<10.4f} "
                f"{result.theta:<10.4f} {result.vega:<10.4f} {result.rho:<10.4f} {max_err:<12.2e}"
            )
        print()


if __name__ == "__main__":
    main()
