
import argparse
import logging
from typing import List, Optional, Tuple

import numpy as np

from black_scholes import black_scholes_price, w
from greeks import RHO_SCALE, THETA_SCALE, GreeksResult, all_greeks, get_delta
from normal_dist import days_in_years

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Black–Scholes price and Greeks for a European option.")
    p.add_argument("--S", type=float, required=True, help="Spot price of the underlying.")
    p.add_argument("--K", type=float, required=True, help="Strike price.")
    expiry = p.add_mutually_exclusive_group(required=True)
    expiry.add_argument("--T", type=float, help="Time to expiration in years.")
    expiry.add_argument("--days", type=float, help="Time to expiration in calendar days.")
    p.add_argument("--sigma", type=float, required=True, help="Annualized volatility as a decimal.")
    p.add_argument("--r", type=float, required=True, help="Annualized risk-free rate as a decimal.")
    p.add_argument("--option", type=str, default="call", choices=["call", "put"])
    p.add_argument("--rho-scale", type=float, default=RHO_SCALE, dest="rho_scale",
                   help="Divisor for rho (100 = per 1%%, 10000 = per bp).")
    p.add_argument("--theta-scale", type=float, default=THETA_SCALE, dest="theta_scale",
                   help="Divisor for theta, usually 365 or 252.")
    p.add_argument("--ladder", type=int, default=0,
                   help="Also reprice across N spot levels from 50%% to 150%% of S.")
    p.add_argument("--log-level", type=str, default="WARNING", dest="log_level",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p

def _validate(p: argparse.ArgumentParser, args: argparse.Namespace) -> float:
    """Reject inputs the engine would silently turn into nan; returns T in years."""
    if args.S <= 0 or args.K <= 0:
        p.error("S and K must be positive.")
    if args.sigma < 0:
        p.error("sigma must be non-negative.")
    if args.rho_scale <= 0 or args.theta_scale <= 0:
        p.error("scales must be positive.")
    if args.ladder < 0:
        p.error("ladder must be non-negative.")
    T = days_in_years(args.days) if args.days is not None else args.T
    if T < 0:
        p.error("time to expiration must be non-negative.")
    return T

def spot_ladder(S: float, K: float, T: float, sigma: float, r: float, option: str,
                n: int) -> List[Tuple[float, float, float]]:
    """(spot, price, delta) rows for n spots evenly spaced over [0.5*S, 1.5*S]."""
    rows = []
    for spot in np.linspace(0.5 * S, 1.5 * S, n):
        spot = float(spot)
        rows.append((spot, black_scholes_price(spot, K, T, sigma, r, option),
                     get_delta(spot, K, T, sigma, r, option)))
    return rows

def _print_greeks(g: GreeksResult) -> None:
    print(f"  Delta: {g.delta:.6f}")
    print(f"  Gamma: {g.gamma:.6f}")
    print(f"  Vega:  {g.vega:.6f}")
    print(f"  Theta: {g.theta:.6f}")
    print(f"  Rho:   {g.rho:.6f}")

def run_cli(argv: Optional[List[str]] = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    T = _validate(p, args)
    d1 = w(args.S, args.K, T, args.sigma, args.r)
    if not np.isfinite(d1):
        logger.warning("degenerate inputs (w=%s): price is not special-cased, Greeks use limit values", d1)

    price = black_scholes_price(args.S, args.K, T, args.sigma, args.r, args.option)
    g = all_greeks(args.S, args.K, T, args.sigma, args.r, args.option,
                   rho_scale=args.rho_scale, theta_scale=args.theta_scale)

    print("Inputs:")
    print(f"  S={args.S}, K={args.K}, T={T}, sigma={args.sigma}, r={args.r}, option={args.option}")
    print(f"  rho_scale={args.rho_scale}, theta_scale={args.theta_scale}")
    print("\nResults:")
    print(f"  w (d1):  {d1:.6f}")
    print(f"  BS price: {price:.6f}")
    print("\nGreeks:")
    _print_greeks(g)

    if args.ladder:
        print("\nSpot ladder:")
        print(f"  {'spot':>12}  {'price':>12}  {'delta':>9}")
        for spot, px, delta in spot_ladder(args.S, args.K, T, args.sigma, args.r, args.option, args.ladder):
            print(f"  {spot:12.4f}  {px:12.6f}  {delta:9.6f}")

if __name__ == "__main__":
    run_cli()
