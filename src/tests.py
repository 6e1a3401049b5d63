
import io
import logging
import math
from contextlib import redirect_stdout

import numpy as np

from normal_dist import double_factorial, standard_normal_cdf, standard_normal_density, days_in_years
from black_scholes import black_scholes_price, w
from greeks import get_delta, get_rho, get_vega, get_theta, get_gamma, all_greeks
from bs_cli import run_cli, spot_ladder

REF = (100.0, 100.0, 1.0, 0.2, 0.05)  # S, K, T, sigma, r

def _exact_cdf(x):
    return 0.5 * (1.0 + math.erf(x / math.sqrt(2.0)))

# --- normal distribution ---------------------------------------------------------

def test_double_factorial():
    assert double_factorial(0) == 1
    assert double_factorial(1) == 1
    assert double_factorial(7) == 105
    assert double_factorial(8) == 384

def test_cdf_center_and_known_quantile():
    assert standard_normal_cdf(0) == 0.5
    assert abs(standard_normal_cdf(1.96) - 0.9750021048517795) < 1e-9

def test_cdf_saturates_at_eight():
    assert standard_normal_cdf(8) == 1
    assert standard_normal_cdf(-8) == 0
    assert standard_normal_cdf(8.0001) == 1
    assert standard_normal_cdf(-25.0) == 0
    assert standard_normal_cdf(math.inf) == 1
    assert standard_normal_cdf(-math.inf) == 0

def test_cdf_nan_propagates():
    assert math.isnan(standard_normal_cdf(math.nan))

def test_cdf_symmetry_and_accuracy():
    for x in np.linspace(-7.5, 7.5, 301):
        x = float(x)
        p = standard_normal_cdf(x)
        assert 0.0 <= p <= 1.0
        assert abs(p + standard_normal_cdf(-x) - 1.0) < 1e-9
        assert abs(p - _exact_cdf(x)) < 1e-9

def test_density():
    assert abs(standard_normal_density(0) - 1 / math.sqrt(2 * math.pi)) < 1e-15
    assert standard_normal_density(1.3) == standard_normal_density(-1.3)
    assert standard_normal_density(math.inf) == 0.0

def test_days_in_years():
    assert days_in_years(365) == 1.0
    assert days_in_years(30) == 0.08219
    assert days_in_years(0) == 0.0
    assert days_in_years(-30) == -0.08219

# --- pricing -----------------------------------------------------------------------

def test_w_matches_d1():
    assert abs(w(*REF) - 0.35) < 1e-12

def test_w_degenerate_values_do_not_raise():
    assert w(110, 100, 1, 0.0, 0.05) == math.inf
    assert w(90, 100, 1, 0.0, 0.05) == -math.inf
    assert math.isnan(w(100, 100, 0.0, 0.0, 0.05))
    assert math.isnan(w(-100, 100, 1, 0.2, 0.05))

def test_reference_prices():
    call = black_scholes_price(*REF, "call")
    put = black_scholes_price(*REF, "put")
    assert abs(call - 10.4506) < 1e-3
    assert abs(put - 5.5735) < 1e-3

def test_put_call_parity():
    for S, K, T, sigma, r in [(100, 100, 1, 0.2, 0.05), (80, 120, 0.25, 0.5, 0.01),
                              (150, 90, 2.5, 0.1, -0.01), (42, 40, 0.5, 0.3, 0.1)]:
        lhs = black_scholes_price(S, K, T, sigma, r, "call") - black_scholes_price(S, K, T, sigma, r, "put")
        assert abs(lhs - (S - K * math.exp(-r * T))) < 1e-8

def test_unknown_option_type_prices_as_put():
    put = black_scholes_price(*REF, "put")
    assert black_scholes_price(*REF, "CALL") == put
    assert black_scholes_price(*REF, "straddle") == put

def test_price_propagates_nan_for_degenerate_inputs():
    assert math.isnan(black_scholes_price(100, 100, 0.0, 0.0, 0.05, "call"))

# --- greeks -----------------------------------------------------------------------

def test_reference_greeks():
    assert abs(get_delta(*REF, "call") - 0.6368) < 1e-4
    assert abs(get_delta(*REF, "put") - (0.6368 - 1)) < 1e-4
    assert abs(get_gamma(*REF) - 0.0188) < 1e-4
    assert abs(get_vega(*REF) - 0.3752) < 1e-4
    assert abs(get_theta(*REF, "call") - (-0.017573)) < 1e-5
    assert abs(get_theta(*REF, "put") - (-0.004542)) < 1e-5
    assert abs(get_rho(*REF, "call") - 0.532325) < 1e-5
    assert abs(get_rho(*REF, "put") - (-0.418905)) < 1e-5

def test_delta_relation():
    for S, K, T, sigma, r in [(100, 100, 1, 0.2, 0.05), (80, 120, 0.25, 0.5, 0.01), (150, 90, 2.5, 0.1, -0.01)]:
        assert abs(get_delta(S, K, T, sigma, r, "call") - get_delta(S, K, T, sigma, r, "put") - 1) < 1e-12

def test_vega_gamma_do_not_depend_on_option_type():
    c = all_greeks(*REF, "call")
    p = all_greeks(*REF, "put")
    assert c.vega == p.vega
    assert c.gamma == p.gamma

def test_zero_vol_in_the_money():
    args = (110, 100, 1, 0.0, 0.05)
    assert get_delta(*args, "call") == 1
    assert get_delta(*args, "put") == 0
    assert get_vega(*args) == 0
    assert get_theta(*args, "call") == 0
    assert get_theta(*args, "put") == 0
    assert get_gamma(*args) == 0

def test_zero_vol_at_the_money_put_delta_is_zero():
    # w = +inf, call falls back to 0 (s > k is false), put would be exactly -1
    args = (100, 100, 1, 0.0, 0.05)
    assert get_delta(*args, "call") == 0
    assert get_delta(*args, "put") == 0

def test_rho_only_falls_back_on_nan():
    # w = +/-inf still goes through the formula
    assert abs(get_rho(110, 100, 1, 0.0, 0.05, "call") - math.exp(-0.05)) < 1e-12
    assert abs(get_rho(90, 100, 1, 0.0, 0.05, "put") + math.exp(-0.05)) < 1e-12
    assert get_rho(90, 100, 1, 0.0, 0.05, "call") == 0
    # w = nan
    assert get_rho(100, 100, 0.0, 0.0, 0.05, "call") == 0
    assert get_rho(100, 100, 0.0, 0.0, 0.05, "put") == 0

def test_scales():
    base_rho = get_rho(*REF, "call")
    assert abs(get_rho(*REF, "call", 10000) - base_rho / 100) < 1e-15
    assert get_rho(*REF, "call", 0) == base_rho
    assert get_rho(*REF, "call", None) == base_rho
    base_theta = get_theta(*REF, "put")
    assert abs(get_theta(*REF, "put", 252) - base_theta * 365 / 252) < 1e-12
    assert get_theta(*REF, "put", 0) == base_theta

def test_all_greeks_matches_getters():
    g = all_greeks(*REF, "put", rho_scale=10000, theta_scale=252)
    assert g.delta == get_delta(*REF, "put")
    assert g.theta == get_theta(*REF, "put", 252)
    assert g.rho == get_rho(*REF, "put", 10000)
    d = g.as_dict()
    assert set(d) == {"delta", "gamma", "vega", "theta", "rho", "call_put"}
    assert d["call_put"] == "put"

def test_fallback_is_logged_at_debug():
    records = []

    class _Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    log = logging.getLogger("greeks")
    handler = _Collect(level=logging.DEBUG)
    old_level = log.level
    log.addHandler(handler)
    log.setLevel(logging.DEBUG)
    try:
        assert get_gamma(110, 100, 1, 0.0, 0.05) == 0
    finally:
        log.removeHandler(handler)
        log.setLevel(old_level)
    assert any(r.levelno == logging.DEBUG and "gamma" in r.getMessage() for r in records)

# --- cli ------------------------------------------------------------------------

def _cli(argv):
    buf = io.StringIO()
    with redirect_stdout(buf):
        run_cli(argv)
    return buf.getvalue()

def test_cli_prints_price_and_greeks():
    out = _cli(["--S", "100", "--K", "100", "--T", "1", "--sigma", "0.2", "--r", "0.05"])
    assert "BS price: 10.45" in out
    assert "Gamma: 0.0187" in out

def test_cli_days_converted_to_years():
    out = _cli(["--S", "100", "--K", "100", "--days", "365", "--sigma", "0.2", "--r", "0.05",
                "--option", "put"])
    assert "T=1.0," in out
    assert "BS price: 5.57" in out

def test_cli_rejects_bad_inputs():
    for argv in (["--S", "-1", "--K", "100", "--T", "1", "--sigma", "0.2", "--r", "0.05"],
                 ["--S", "100", "--K", "100", "--T", "1", "--sigma", "-0.2", "--r", "0.05"],
                 ["--S", "100", "--K", "100", "--sigma", "0.2", "--r", "0.05"]):
        try:
            _cli(argv)
        except SystemExit as e:
            assert e.code == 2
        else:
            raise AssertionError(f"expected exit for {argv}")

def test_spot_ladder():
    rows = spot_ladder(*REF, "call", 5)
    assert [r[0] for r in rows] == [50.0, 75.0, 100.0, 125.0, 150.0]
    assert abs(rows[2][1] - black_scholes_price(*REF, "call")) < 1e-12
    deltas = [r[2] for r in rows]
    assert deltas == sorted(deltas)

if __name__ == "__main__":
    for name, fn in sorted(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("All tests passed.")
