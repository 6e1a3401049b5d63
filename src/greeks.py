
import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, Optional

import numpy as np

from black_scholes import CALL, w
from normal_dist import standard_normal_cdf, standard_normal_density

logger = logging.getLogger(__name__)

RHO_SCALE = 100      # 100 = 1% rate move, 10000 = 1bp
THETA_SCALE = 365    # calendar days; 252 for trading days

@dataclass(frozen=True)
class GreeksResult:
    delta: float
    gamma: float
    vega: float
    theta: float
    rho: float
    call_put: str

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)

def _discount(r: float, t: float) -> float:
    with np.errstate(over="ignore"):
        return float(np.exp(np.float64(-r) * t))

def _vol_time(v: float, t: float) -> float:
    with np.errstate(invalid="ignore"):
        return float(v * np.sqrt(np.float64(t)))

# --- delta --------------------------------------------------------------------

def _call_delta(s, k, t, v, r) -> float:
    d1 = w(s, k, t, v, r)
    if not math.isfinite(d1):
        logger.debug("call delta: w=%s not finite, using intrinsic step (s=%s, k=%s)", d1, s, k)
        return 1.0 if s > k else 0.0
    return standard_normal_cdf(d1)

def _put_delta(s, k, t, v, r) -> float:
    delta = _call_delta(s, k, t, v, r) - 1
    # at the money the step fallback leaves an exact -1 artifact
    return 0.0 if (delta == -1 and k == s) else delta

def get_delta(s, k, t, v, r, call_put: str) -> float:
    if call_put == CALL:
        return _call_delta(s, k, t, v, r)
    return _put_delta(s, k, t, v, r)

# --- rho ----------------------------------------------------------------------

def _call_rho(s, k, t, v, r) -> float:
    d1 = w(s, k, t, v, r)
    if math.isnan(d1):
        logger.debug("call rho: w is nan, returning 0")
        return 0.0
    return k * t * _discount(r, t) * standard_normal_cdf(d1 - _vol_time(v, t))

def _put_rho(s, k, t, v, r) -> float:
    d1 = w(s, k, t, v, r)
    if math.isnan(d1):
        logger.debug("put rho: w is nan, returning 0")
        return 0.0
    return -k * t * _discount(r, t) * standard_normal_cdf(_vol_time(v, t) - d1)

def get_rho(s, k, t, v, r, call_put: str, scale: Optional[float] = None) -> float:
    """
    Rho divided by `scale` (default 100, i.e. per 1% move in the rate).
    A falsy scale (None or 0) falls back to the default.
    Only an undefined w (nan) short-circuits to 0; an infinite w still prices.
    """
    scale = scale or RHO_SCALE
    if call_put == CALL:
        return _call_rho(s, k, t, v, r) / scale
    return _put_rho(s, k, t, v, r) / scale

# --- vega ---------------------------------------------------------------------

def get_vega(s, k, t, v, r) -> float:
    """Vega per 1 vol point. Same for calls and puts."""
    d1 = w(s, k, t, v, r)
    if not math.isfinite(d1):
        logger.debug("vega: w=%s not finite, returning 0", d1)
        return 0.0
    return s * math.sqrt(t) * standard_normal_density(d1) / 100

# --- theta --------------------------------------------------------------------

def _decay(s, t, v, d1) -> float:
    return -v * s * standard_normal_density(d1) / (2 * math.sqrt(t))

def _call_theta(s, k, t, v, r) -> float:
    d1 = w(s, k, t, v, r)
    if not math.isfinite(d1):
        logger.debug("call theta: w=%s not finite, returning 0", d1)
        return 0.0
    return _decay(s, t, v, d1) - k * r * _discount(r, t) * standard_normal_cdf(d1 - _vol_time(v, t))

def _put_theta(s, k, t, v, r) -> float:
    d1 = w(s, k, t, v, r)
    if not math.isfinite(d1):
        logger.debug("put theta: w=%s not finite, returning 0", d1)
        return 0.0
    return _decay(s, t, v, d1) + k * r * _discount(r, t) * standard_normal_cdf(_vol_time(v, t) - d1)

def get_theta(s, k, t, v, r, call_put: str, scale: Optional[float] = None) -> float:
    """
    Theta divided by `scale` (default 365 -> decay per calendar day).
    A falsy scale falls back to the default, as with rho.
    """
    scale = scale or THETA_SCALE
    if call_put == CALL:
        return _call_theta(s, k, t, v, r) / scale
    return _put_theta(s, k, t, v, r) / scale

# --- gamma --------------------------------------------------------------------

def get_gamma(s, k, t, v, r) -> float:
    d1 = w(s, k, t, v, r)
    if not math.isfinite(d1):
        logger.debug("gamma: w=%s not finite, returning 0", d1)
        return 0.0
    return standard_normal_density(d1) / (s * v * math.sqrt(t))

def all_greeks(s, k, t, v, r, call_put: str,
               rho_scale: Optional[float] = None, theta_scale: Optional[float] = None) -> GreeksResult:
    """All five sensitivities for one contract, with the same dispatch as the getters."""
    return GreeksResult(
        delta=get_delta(s, k, t, v, r, call_put),
        gamma=get_gamma(s, k, t, v, r),
        vega=get_vega(s, k, t, v, r),
        theta=get_theta(s, k, t, v, r, call_put, theta_scale),
        rho=get_rho(s, k, t, v, r, call_put, rho_scale),
        call_put=call_put,
    )
