"""Thread-safe FFTs sharing one set of tables, and spectrum products.

The spectra handled by :func:`ordered_convolve` are in the packed layout
that :func:`safe_rdft` produces: ``a[0]`` is the DC term, ``a[1]`` the
Nyquist term, and ``a[2k]``, ``a[2k+1]`` the real and imaginary parts of
bin ``k``.
"""

from __future__ import annotations

import threading
from typing import MutableSequence, Sequence

from .fft4g import FftTables, cdft, rdft

__all__ = [
    "safe_rdft",
    "safe_cdft",
    "clear_fft_cache",
    "ordered_convolve",
    "ordered_partial_convolve",
]


class _FftCache:
    """Tables grown on demand and shared by all callers."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.tables = FftTables()

    def clear(self) -> None:
        with self.lock:
            self.tables = FftTables()


_cache = _FftCache()


def safe_rdft(a: MutableSequence[float], isgn: int) -> None:
    """Real DFT (``isgn >= 0``) or its unscaled inverse, using the shared tables."""
    with _cache.lock:
        rdft(a, isgn, _cache.tables)


def safe_cdft(a: MutableSequence[float], isgn: int) -> None:
    """Complex DFT of interleaved data, using the shared tables."""
    with _cache.lock:
        cdft(a, isgn, _cache.tables)


def clear_fft_cache() -> None:
    """Drop the shared tables; they are rebuilt on the next transform."""
    _cache.clear()


def _complex_products(n: int, a: MutableSequence[float], b: Sequence[float]) -> None:
    for i in range(2, n, 2):
        re, im = a[i], a[i + 1]
        a[i] = b[i] * re - b[i + 1] * im
        a[i + 1] = b[i + 1] * re + b[i] * im


def ordered_convolve(a: MutableSequence[float], b: Sequence[float]) -> None:
    """Multiply packed spectrum ``a`` by packed spectrum ``b``, in place."""
    n = len(a)
    if len(b) < n:
        raise ValueError("second spectrum is shorter than the first")
    a[0] *= b[0]
    a[1] *= b[1]
    _complex_products(n, a, b)


def ordered_partial_convolve(a: MutableSequence[float], b: Sequence[float]) -> None:
    """Multiply the leading portion of a spectrum by ``b``, in place.

    ``a`` holds a packed portion of ``n = len(a) - 2`` values followed by
    the unpacked bin at ``a[n]``, ``a[n + 1]``; the real part of that
    bin's product becomes the Nyquist term ``a[1]``.
    """
    n = len(a) - 2
    if n < 2 or n % 2:
        raise ValueError("portion length must be even and at least 2")
    if len(b) < n + 2:
        raise ValueError("second spectrum is shorter than the portion")
    a[0] *= b[0]
    _complex_products(n, a, b)
    a[1] = b[n] * a[n] - b[n + 1] * a[n + 1]