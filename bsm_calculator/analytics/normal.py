"""Standard normal distribution functions.

The CDF uses the Abramowitz & Stegun 26.2.17 rational approximation
(absolute error below ~1e-7), which is ample for option pricing.
"""

import math

_INV_SQRT_2PI = 0.3989423

# Polynomial coefficients b1..b5 and p
_P = 0.2316419
_B = (0.3193815, -0.3565638, 1.781478, -1.821256, 1.330274)


def normal_cdf(x: float) -> float:
    """P(Z <= x) for a standard normal Z.

    Evaluated on |x| and reflected, so ``normal_cdf(-x) == 1 - normal_cdf(x)``.
    The approximation is off by ~1.5e-7 at the origin, so 0 is pinned to 0.5.
    """
    if x == 0:
        return 0.5
    t = 1.0 / (1.0 + _P * abs(x))
    d = _INV_SQRT_2PI * math.exp(-x * x / 2.0)
    poly = t * (_B[0] + t * (_B[1] + t * (_B[2] + t * (_B[3] + t * _B[4]))))
    tail = d * poly
    return 1.0 - tail if x > 0 else tail


def normal_pdf(x: float) -> float:
    """Standard normal density exp(-x²/2) / sqrt(2π)."""
    return math.exp(-0.5 * x * x) / math.sqrt(2.0 * math.pi)
