
import math
import numpy as np

CDF_TERMS = 100
CDF_CLAMP = 8.0
DAYS_PER_YEAR = 365

def double_factorial(n: int) -> float:
    """n * (n-2) * (n-4) * ... down to 2 or 1, accumulated as a float."""
    val = 1.0
    while n > 1:
        val *= n
        n -= 2
    return val

# Odd powers 1, 3, ..., 199 and their double factorials, built once.
_POWERS = np.arange(1, 2 * CDF_TERMS + 1, 2)
_DENOMINATORS = np.array([double_factorial(int(n)) for n in _POWERS], dtype=np.float64)

def standard_normal_density(x: float) -> float:
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)

def standard_normal_cdf(x: float) -> float:
    """
    P(Z <= x) for a standard normal Z, from the first 100 terms of the series
    0.5 + phi(x) * sum x^(2i+1) / (2i+1)!!.
    The series blows up near |x| = 8 with this many terms, so the tails are
    clamped to exactly 0 and 1 from there on.
    """
    if x >= CDF_CLAMP:
        return 1.0
    if x <= -CDF_CLAMP:
        return 0.0
    x = float(x)
    if math.isnan(x):
        return x
    series = float(np.sum(np.power(x, _POWERS) / _DENOMINATORS))
    return series * math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi) + 0.5

def days_in_years(d: float) -> float:
    """Days to years, kept to 5 decimals (halves round up)."""
    return math.floor(d / DAYS_PER_YEAR * 100000 + 0.5) / 100000
