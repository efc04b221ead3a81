"""Split-radix style real and complex FFTs on power-of-two lengths.

Data are mutable sequences of floats transformed in place.  Complex data
are stored interleaved: ``a[2*k]`` is the real part and ``a[2*k+1]`` the
imaginary part of element ``k``.

Definitions (``n`` is the number of complex points for :func:`cdft` and
the number of real points for :func:`rdft`):

* ``cdft(a, 1)``:  ``X[k] = sum_j x[j] * exp(+2*pi*i*j*k/n)``
* ``cdft(a, -1)``: ``X[k] = sum_j x[j] * exp(-2*pi*i*j*k/n)``
* ``rdft(a, 1)``:  ``R[k] = sum_j a[j]*cos(2*pi*j*k/n)``,
  ``I[k] = sum_j a[j]*sin(2*pi*j*k/n)``, stored as ``a[2k] = R[k]``,
  ``a[2k+1] = I[k]`` and ``a[1] = R[n/2]``.
* ``rdft(a, -1)`` is the inverse of the above, excluding a scale of
  ``2/n``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import MutableSequence, Sequence

__all__ = [
    "FftTables",
    "bitrv2",
    "bitrv2conj",
    "cftfsub",
    "cftbsub",
    "rftfsub",
    "rftbsub",
    "cdft",
    "rdft",
]

Floats = MutableSequence[float]


@dataclass
class FftTables:
    """Cached cos/sin tables shared between transforms.

    ``w`` holds the twiddle table of ``nw`` entries and ``c`` the
    cos/sin table of ``nc`` entries used by the real-data passes.
    """

    nw: int = 0
    nc: int = 0
    w: list[float] = field(default_factory=list)
    c: list[float] = field(default_factory=list)

    def make_wt(self, nw: int) -> None:
        """Build the twiddle table for transforms of up to ``4 * nw`` values."""
        self.nw = nw
        self.nc = 1
        w = [0.0] * max(nw, 0)
        if nw > 2:
            nwh = nw >> 1
            delta = math.atan(1.0) / nwh
            w[0] = 1.0
            w[1] = 0.0
            w[nwh] = math.cos(delta * nwh)
            w[nwh + 1] = w[nwh]
            if nwh > 2:
                for j in range(2, nwh, 2):
                    x = math.cos(delta * j)
                    y = math.sin(delta * j)
                    w[j] = x
                    w[j + 1] = y
                    w[nw - j] = y
                    w[nw - j + 1] = x
                bitrv2(nw, w)
        self.w = w

    def make_ct(self, nc: int) -> None:
        """Build the cos/sin table of ``nc`` entries for the real-data passes."""
        self.nc = nc
        c = [0.0] * max(nc, 0)
        if nc > 1:
            nch = nc >> 1
            delta = math.atan(1.0) / nch
            c[0] = math.cos(delta * nch)
            c[nch] = 0.5 * c[0]
            for j in range(1, nch):
                c[j] = 0.5 * math.cos(delta * j)
                c[nc - j] = 0.5 * math.sin(delta * j)
        self.c = c


def _is_power_of_2(n: int) -> bool:
    return n >= 2 and not n & (n - 1)


def _bit_reversal_offsets(n: int) -> tuple[list[int], int, int]:
    ip = [0]
    l = n
    m = 1
    while (m << 3) < l:
        l >>= 1
        ip.extend(ip[j] + l for j in range(m))
        m <<= 1
    return ip, m, l


def _swap(a: Floats, i: int, k: int) -> None:
    a[i], a[i + 1], a[k], a[k + 1] = a[k], a[k + 1], a[i], a[i + 1]


def _swap_conj(a: Floats, i: int, k: int) -> None:
    a[i], a[i + 1], a[k], a[k + 1] = a[k], -a[k + 1], a[i], -a[i + 1]


def bitrv2(n: int, a: Floats) -> None:
    """Permute the ``n // 2`` complex values in ``a`` into bit-reversed order."""
    ip, m, l = _bit_reversal_offsets(n)
    m2 = 2 * m
    if (m << 3) == l:
        for k in range(m):
            for j in range(k):
                j1 = 2 * j + ip[k]
                k1 = 2 * k + ip[j]
                _swap(a, j1, k1)
                j1 += m2
                k1 += 2 * m2
                _swap(a, j1, k1)
                j1 += m2
                k1 -= m2
                _swap(a, j1, k1)
                j1 += m2
                k1 += 2 * m2
                _swap(a, j1, k1)
            j1 = 2 * k + m2 + ip[k]
            _swap(a, j1, j1 + m2)
    else:
        for k in range(1, m):
            for j in range(k):
                j1 = 2 * j + ip[k]
                k1 = 2 * k + ip[j]
                _swap(a, j1, k1)
                _swap(a, j1 + m2, k1 + m2)


def bitrv2conj(n: int, a: Floats) -> None:
    """Bit-reverse the complex values in ``a`` and conjugate them."""
    ip, m, l = _bit_reversal_offsets(n)
    m2 = 2 * m
    if (m << 3) == l:
        for k in range(m):
            for j in range(k):
                j1 = 2 * j + ip[k]
                k1 = 2 * k + ip[j]
                _swap_conj(a, j1, k1)
                j1 += m2
                k1 += 2 * m2
                _swap_conj(a, j1, k1)
                j1 += m2
                k1 -= m2
                _swap_conj(a, j1, k1)
                j1 += m2
                k1 += 2 * m2
                _swap_conj(a, j1, k1)
            k1 = 2 * k + ip[k]
            a[k1 + 1] = -a[k1 + 1]
            j1 = k1 + m2
            k1 = j1 + m2
            _swap_conj(a, j1, k1)
            k1 += m2
            a[k1 + 1] = -a[k1 + 1]
    else:
        a[1] = -a[1]
        a[m2 + 1] = -a[m2 + 1]
        for k in range(1, m):
            for j in range(k):
                j1 = 2 * j + ip[k]
                k1 = 2 * k + ip[j]
                _swap_conj(a, j1, k1)
                _swap_conj(a, j1 + m2, k1 + m2)
            k1 = 2 * k + ip[k]
            a[k1 + 1] = -a[k1 + 1]
            a[k1 + m2 + 1] = -a[k1 + m2 + 1]


def _radix4(a: Floats, j: int, l: int) -> tuple[float, ...]:
    j1 = j + l
    j2 = j1 + l
    j3 = j2 + l
    return (
        a[j] + a[j1], a[j + 1] + a[j1 + 1],
        a[j] - a[j1], a[j + 1] - a[j1 + 1],
        a[j2] + a[j3], a[j2 + 1] + a[j3 + 1],
        a[j2] - a[j3], a[j2 + 1] - a[j3 + 1],
    )


def _butterfly_plain(a: Floats, j: int, l: int) -> None:
    x0r, x0i, x1r, x1i, x2r, x2i, x3r, x3i = _radix4(a, j, l)
    j1 = j + l
    j2 = j1 + l
    j3 = j2 + l
    a[j] = x0r + x2r
    a[j + 1] = x0i + x2i
    a[j2] = x0r - x2r
    a[j2 + 1] = x0i - x2i
    a[j1] = x1r - x3i
    a[j1 + 1] = x1i + x3r
    a[j3] = x1r + x3i
    a[j3 + 1] = x1i - x3r


def _butterfly_eighth(a: Floats, j: int, l: int, wk1r: float) -> None:
    x0r, x0i, x1r, x1i, x2r, x2i, x3r, x3i = _radix4(a, j, l)
    j1 = j + l
    j2 = j1 + l
    j3 = j2 + l
    a[j] = x0r + x2r
    a[j + 1] = x0i + x2i
    a[j2] = x2i - x0i
    a[j2 + 1] = x0r - x2r
    yr = x1r - x3i
    yi = x1i + x3r
    a[j1] = wk1r * (yr - yi)
    a[j1 + 1] = wk1r * (yr + yi)
    yr = x3i + x1r
    yi = x3r - x1i
    a[j3] = wk1r * (yi - yr)
    a[j3 + 1] = wk1r * (yi + yr)


def _butterfly_twiddle(
    a: Floats, j: int, l: int,
    wk1: tuple[float, float], wk2: tuple[float, float], wk3: tuple[float, float],
) -> None:
    x0r, x0i, x1r, x1i, x2r, x2i, x3r, x3i = _radix4(a, j, l)
    j1 = j + l
    j2 = j1 + l
    j3 = j2 + l
    a[j] = x0r + x2r
    a[j + 1] = x0i + x2i
    yr = x0r - x2r
    yi = x0i - x2i
    a[j2] = wk2[0] * yr - wk2[1] * yi
    a[j2 + 1] = wk2[0] * yi + wk2[1] * yr
    yr = x1r - x3i
    yi = x1i + x3r
    a[j1] = wk1[0] * yr - wk1[1] * yi
    a[j1 + 1] = wk1[0] * yi + wk1[1] * yr
    yr = x1r + x3i
    yi = x1i - x3r
    a[j3] = wk3[0] * yr - wk3[1] * yi
    a[j3 + 1] = wk3[0] * yi + wk3[1] * yr


def _twiddles(w: Sequence[float], k1: int):
    k2 = 2 * k1
    wk2r, wk2i = w[k1], w[k1 + 1]
    wk1r, wk1i = w[k2], w[k2 + 1]
    first = (
        (wk1r, wk1i),
        (wk2r, wk2i),
        (wk1r - 2 * wk2i * wk1i, 2 * wk2i * wk1r - wk1i),
    )
    wk1r, wk1i = w[k2 + 2], w[k2 + 3]
    second = (
        (wk1r, wk1i),
        (-wk2i, wk2r),
        (wk1r - 2 * wk2r * wk1i, 2 * wk2r * wk1r - wk1i),
    )
    return first, second


def _cft1st(n: int, a: Floats, w: Sequence[float]) -> None:
    _butterfly_plain(a, 0, 2)
    _butterfly_eighth(a, 8, 2, w[2])
    k1 = 0
    for j in range(16, n, 16):
        k1 += 2
        first, second = _twiddles(w, k1)
        _butterfly_twiddle(a, j, 2, *first)
        _butterfly_twiddle(a, j + 8, 2, *second)


def _cftmdl(n: int, l: int, a: Floats, w: Sequence[float]) -> None:
    m = l << 2
    for j in range(0, l, 2):
        _butterfly_plain(a, j, l)
    wk1r = w[2]
    for j in range(m, l + m, 2):
        _butterfly_eighth(a, j, l, wk1r)
    k1 = 0
    m2 = 2 * m
    for k in range(m2, n, m2):
        k1 += 2
        first, second = _twiddles(w, k1)
        for j in range(k, l + k, 2):
            _butterfly_twiddle(a, j, l, *first)
        for j in range(k + m, l + k + m, 2):
            _butterfly_twiddle(a, j, l, *second)


def _first_passes(n: int, a: Floats, w: Sequence[float]) -> int:
    l = 2
    if n > 8:
        _cft1st(n, a, w)
        l = 8
        while (l << 2) < n:
            _cftmdl(n, l, a, w)
            l <<= 2
    return l


def cftfsub(n: int, a: Floats, w: Sequence[float]) -> None:
    """Butterfly passes of the forward complex FFT on bit-reversed data."""
    l = _first_passes(n, a, w)
    if (l << 2) == n:
        for j in range(0, l, 2):
            _butterfly_plain(a, j, l)
    else:
        for j in range(0, l, 2):
            j1 = j + l
            x0r = a[j] - a[j1]
            x0i = a[j + 1] - a[j1 + 1]
            a[j] += a[j1]
            a[j + 1] += a[j1 + 1]
            a[j1] = x0r
            a[j1 + 1] = x0i


def cftbsub(n: int, a: Floats, w: Sequence[float]) -> None:
    """Butterfly passes of the backward complex FFT on bit-reversed data."""
    l = _first_passes(n, a, w)
    if (l << 2) == n:
        for j in range(0, l, 2):
            j1 = j + l
            j2 = j1 + l
            j3 = j2 + l
            x0r = a[j] + a[j1]
            x0i = -a[j + 1] - a[j1 + 1]
            x1r = a[j] - a[j1]
            x1i = -a[j + 1] + a[j1 + 1]
            x2r = a[j2] + a[j3]
            x2i = a[j2 + 1] + a[j3 + 1]
            x3r = a[j2] - a[j3]
            x3i = a[j2 + 1] - a[j3 + 1]
            a[j] = x0r + x2r
            a[j + 1] = x0i - x2i
            a[j2] = x0r - x2r
            a[j2 + 1] = x0i + x2i
            a[j1] = x1r - x3i
            a[j1 + 1] = x1i - x3r
            a[j3] = x1r + x3i
            a[j3 + 1] = x1i + x3r
    else:
        for j in range(0, l, 2):
            j1 = j + l
            x0r = a[j] - a[j1]
            x0i = -a[j + 1] + a[j1 + 1]
            a[j] += a[j1]
            a[j + 1] = -a[j + 1] - a[j1 + 1]
            a[j1] = x0r
            a[j1 + 1] = x0i


def rftfsub(n: int, a: Floats, nc: int, c: Sequence[float]) -> None:
    """Post-processing step turning a half-length complex FFT into a real one."""
    m = n >> 1
    ks = 2 * nc // m
    kk = 0
    for j in range(2, m, 2):
        k = n - j
        kk += ks
        wkr = 0.5 - c[nc - kk]
        wki = c[kk]
        xr = a[j] - a[k]
        xi = a[j + 1] + a[k + 1]
        yr = wkr * xr - wki * xi
        yi = wkr * xi + wki * xr
        a[j] -= yr
        a[j + 1] -= yi
        a[k] += yr
        a[k + 1] -= yi


def rftbsub(n: int, a: Floats, nc: int, c: Sequence[float]) -> None:
    """Pre-processing step of the inverse real FFT."""
    a[1] = -a[1]
    m = n >> 1
    ks = 2 * nc // m
    kk = 0
    for j in range(2, m, 2):
        k = n - j
        kk += ks
        wkr = 0.5 - c[nc - kk]
        wki = c[kk]
        xr = a[j] - a[k]
        xi = a[j + 1] + a[k + 1]
        yr = wkr * xr + wki * xi
        yi = wkr * xi - wki * xr
        a[j] -= yr
        a[j + 1] = yi - a[j + 1]
        a[k] += yr
        a[k + 1] = yi - a[k + 1]
    a[m + 1] = -a[m + 1]


def _check_length(n: int) -> None:
    if not _is_power_of_2(n):
        raise ValueError(f"transform length must be a power of 2 >= 2, not {n}")


def cdft(a: Floats, isgn: int, tables: FftTables | None = None) -> None:
    """Complex DFT of the interleaved data in ``a``, in place.

    ``isgn >= 0`` uses ``exp(+2*pi*i*j*k/n)``, ``isgn < 0`` the conjugate.
    """
    n = len(a)
    _check_length(n)
    if tables is None:
        tables = FftTables()
    if n > (tables.nw << 2):
        tables.make_wt(n >> 2)
    if n > 4:
        if isgn >= 0:
            bitrv2(n, a)
            cftfsub(n, a, tables.w)
        else:
            bitrv2conj(n, a)
            cftbsub(n, a, tables.w)
    elif n == 4:
        cftfsub(n, a, tables.w)


def rdft(a: Floats, isgn: int, tables: FftTables | None = None) -> None:
    """Real DFT (``isgn >= 0``) or its unscaled inverse (``isgn < 0``), in place."""
    n = len(a)
    _check_length(n)
    if tables is None:
        tables = FftTables()
    if n > (tables.nw << 2):
        tables.make_wt(n >> 2)
    if n > (tables.nc << 2):
        tables.make_ct(n >> 2)
    w, nc, c = tables.w, tables.nc, tables.c
    if isgn >= 0:
        if n > 4:
            bitrv2(n, a)
            cftfsub(n, a, w)
            rftfsub(n, a, nc, c)
        elif n == 4:
            cftfsub(n, a, w)
        xi = a[0] - a[1]
        a[0] += a[1]
        a[1] = xi
    else:
        a[1] = 0.5 * (a[0] - a[1])
        a[0] -= a[1]
        if n > 4:
            rftbsub(n, a, nc, c)
            bitrv2(n, a)
            cftbsub(n, a, w)
        elif n == 4:
            cftfsub(n, a, w)