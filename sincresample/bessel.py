"""Modified Bessel function of the first kind, order zero."""

from __future__ import annotations

import math

__all__ = ["bessel_i0"]

# Below this argument the power series is summed; above it the
# asymptotic expansion is already accurate to full double precision.
_SERIES_LIMIT = 30.0


def _power_series(w: float) -> float:
    """Sum of ((w/2)**(2k)) / (k!)**2; every term is positive."""
    q = 0.25 * w * w
    term = total = 1.0
    k = 1
    while term > total * 1e-18:
        term *= q / (k * k)
        total += term
        k += 1
    return total


def _asymptotic(w: float) -> float:
    """Large-argument expansion e**w / sqrt(2*pi*w) * (1 + 1/(8w) + ...)."""
    total = term = 1.0
    k = 1
    while True:
        odd = 2 * k - 1
        next_term = term * odd * odd / (8.0 * k * w)
        if next_term >= term or next_term < total * 1e-18:
            break
        term = next_term
        total += term
        k += 1
    half = math.exp(0.5 * w) if w < 1400 else math.inf
    return half * (total / math.sqrt(2 * math.pi * w)) * half


def bessel_i0(x: float) -> float:
    """Return I0(x), the zeroth-order modified Bessel function of the first kind.

    The power series is used for small arguments and the asymptotic
    expansion for large ones; results too large for a float are infinite.
    """
    w = abs(x)
    if w < _SERIES_LIMIT:
        return _power_series(w)
    return _asymptotic(w)