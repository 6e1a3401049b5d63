
import numpy as np

from normal_dist import standard_normal_cdf

CALL = "call"
PUT = "put"

def w(s: float, k: float, t: float, v: float, r: float) -> float:
    """
    Standardized drift term (d1):  (r*t + v^2*t/2 - ln(k/s)) / (v*sqrt(t)).
    No validation: t = 0 or v = 0 gives +/-inf, or nan when the numerator is 0 too.
    """
    s, k, t, v, r = (np.float64(a) for a in (s, k, t, v, r))
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        return float((r * t + v ** 2 * t / 2 - np.log(k / s)) / (v * np.sqrt(t)))

def black_scholes_price(s: float, k: float, t: float, v: float, r: float, call_put: str) -> float:
    """
    European option price. Only call_put == "call" prices a call; any other
    value is priced as a put. Degenerate inputs are not special-cased.
    """
    d1 = w(s, k, t, v, r)
    s, k, t, v, r = (np.float64(a) for a in (s, k, t, v, r))
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        disc_k = k * np.exp(-r * t)
        vol_t = v * np.sqrt(t)
        if call_put == CALL:
            price = s * standard_normal_cdf(d1) - disc_k * standard_normal_cdf(d1 - vol_t)
        else:
            price = disc_k * standard_normal_cdf(vol_t - d1) - s * standard_normal_cdf(-d1)
    return float(price)
