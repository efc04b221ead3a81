"""Cosine and sine transforms built on the real FFT passes.

All transforms work in place on power-of-two lengths.

* ``ddct(a, 1)``:  ``C[k] = sum_j a[j]*cos(pi*j*(k+1/2)/n)`` (IDCT, unscaled)
* ``ddct(a, -1)``: ``C[k] = sum_j a[j]*cos(pi*(j+1/2)*k/n)`` (DCT)
* ``ddst(a, 1)``:  ``S[k] = sum_{j=1..n} A[j]*sin(pi*j*(k+1/2)/n)`` with
  ``A[j] = a[j]`` for ``0 < j < n`` and ``A[n] = a[0]`` (IDST, unscaled)
* ``ddst(a, -1)``: ``S[k] = sum_j a[j]*sin(pi*(j+1/2)*k/n)`` for
  ``0 < k <= n``, stored with ``a[0] = S[n]`` (DST)
* ``dfct(a)``: ``C[k] = sum_{j=0..n} a[j]*cos(pi*j*k/n)`` on ``n + 1`` values
* ``dfst(a)``: ``S[k] = sum_{j=1..n-1} a[j]*sin(pi*j*k/n)`` on ``n`` values,
  ``a[0]`` is set to zero
"""

from __future__ import annotations

from typing import MutableSequence, Sequence

from .fft4g import FftTables, bitrv2, cftbsub, cftfsub, rftbsub, rftfsub

__all__ = ["ddct", "ddst", "dfct", "dfst"]

Floats = MutableSequence[float]


def _check_length(n: int) -> None:
    if n < 2 or n & (n - 1):
        raise ValueError(f"transform length must be a power of 2 >= 2, not {n}")


def _forward_passes(n: int, a: Floats, w: Sequence[float], nc: int, c: Sequence[float]) -> None:
    if n > 4:
        bitrv2(n, a)
        cftfsub(n, a, w)
        rftfsub(n, a, nc, c)
    elif n == 4:
        cftfsub(n, a, w)


def _backward_passes(n: int, a: Floats, w: Sequence[float], nc: int, c: Sequence[float]) -> None:
    if n > 4:
        rftbsub(n, a, nc, c)
        bitrv2(n, a)
        cftbsub(n, a, w)
    elif n == 4:
        cftfsub(n, a, w)


def _dctsub(n: int, a: Floats, nc: int, c: Sequence[float]) -> None:
    m = n >> 1
    ks = nc // n
    kk = 0
    for j in range(1, m):
        k = n - j
        kk += ks
        wkr = c[kk] - c[nc - kk]
        wki = c[kk] + c[nc - kk]
        xr = wki * a[j] - wkr * a[k]
        a[j] = wkr * a[j] + wki * a[k]
        a[k] = xr
    a[m] *= c[0]


def _dstsub(n: int, a: Floats, nc: int, c: Sequence[float]) -> None:
    m = n >> 1
    ks = nc // n
    kk = 0
    for j in range(1, m):
        k = n - j
        kk += ks
        wkr = c[kk] - c[nc - kk]
        wki = c[kk] + c[nc - kk]
        xr = wki * a[k] - wkr * a[j]
        a[k] = wkr * a[k] + wki * a[j]
        a[j] = xr
    a[m] *= c[0]


def _tables_for_ddct(n: int, tables: FftTables | None) -> FftTables:
    if tables is None:
        tables = FftTables()
    if n > (tables.nw << 2):
        tables.make_wt(n >> 2)
    if n > tables.nc:
        tables.make_ct(n)
    return tables


def _tables_for_dfct(n: int, tables: FftTables | None) -> FftTables:
    if tables is None:
        tables = FftTables()
    if n > (tables.nw << 3):
        tables.make_wt(n >> 3)
    if n > (tables.nc << 1):
        tables.make_ct(n >> 1)
    return tables


def ddct(a: Floats, isgn: int, tables: FftTables | None = None) -> None:
    """DCT (``isgn < 0``) or unscaled inverse DCT (``isgn >= 0``), in place."""
    n = len(a)
    _check_length(n)
    tables = _tables_for_ddct(n, tables)
    w, nc, c = tables.w, tables.nc, tables.c
    if isgn < 0:
        xr = a[n - 1]
        for j in range(n - 2, 1, -2):
            a[j + 1] = a[j] - a[j - 1]
            a[j] += a[j - 1]
        a[1] = a[0] - xr
        a[0] += xr
        _backward_passes(n, a, w, nc, c)
    _dctsub(n, a, nc, c)
    if isgn >= 0:
        _forward_passes(n, a, w, nc, c)
        xr = a[0] - a[1]
        a[0] += a[1]
        for j in range(2, n, 2):
            a[j - 1] = a[j] - a[j + 1]
            a[j] += a[j + 1]
        a[n - 1] = xr


def ddst(a: Floats, isgn: int, tables: FftTables | None = None) -> None:
    """DST (``isgn < 0``) or unscaled inverse DST (``isgn >= 0``), in place."""
    n = len(a)
    _check_length(n)
    tables = _tables_for_ddct(n, tables)
    w, nc, c = tables.w, tables.nc, tables.c
    if isgn < 0:
        xr = a[n - 1]
        for j in range(n - 2, 1, -2):
            a[j + 1] = -a[j] - a[j - 1]
            a[j] -= a[j - 1]
        a[1] = a[0] + xr
        a[0] -= xr
        _backward_passes(n, a, w, nc, c)
    _dstsub(n, a, nc, c)
    if isgn >= 0:
        _forward_passes(n, a, w, nc, c)
        xr = a[0] - a[1]
        a[0] += a[1]
        for j in range(2, n, 2):
            a[j - 1] = -a[j] - a[j + 1]
            a[j] -= a[j + 1]
        a[n - 1] = -xr


def dfct(a: Floats, tables: FftTables | None = None) -> None:
    """Cosine transform of a real symmetric sequence of ``n + 1`` values, in place."""
    n = len(a) - 1
    _check_length(n)
    tables = _tables_for_dfct(n, tables)
    w, nc, c = tables.w, tables.nc, tables.c
    t = [0.0] * (n // 2 + 1)
    m = n >> 1
    yi = a[m]
    xi = a[0] + a[n]
    a[0] -= a[n]
    t[0] = xi - yi
    t[m] = xi + yi
    if n > 2:
        mh = m >> 1
        for j in range(1, mh):
            k = m - j
            xr = a[j] - a[n - j]
            xi = a[j] + a[n - j]
            yr = a[k] - a[n - k]
            yi = a[k] + a[n - k]
            a[j] = xr
            a[k] = yr
            t[j] = xi - yi
            t[k] = xi + yi
        t[mh] = a[mh] + a[n - mh]
        a[mh] -= a[n - mh]
        _dctsub(m, a, nc, c)
        _forward_passes(m, a, w, nc, c)
        a[n - 1] = a[0] - a[1]
        a[1] = a[0] + a[1]
        for j in range(m - 2, 1, -2):
            a[2 * j + 1] = a[j] + a[j + 1]
            a[2 * j - 1] = a[j] - a[j + 1]
        l = 2
        m = mh
        while m >= 2:
            _dctsub(m, t, nc, c)
            _forward_passes(m, t, w, nc, c)
            a[n - l] = t[0] - t[1]
            a[l] = t[0] + t[1]
            k = 0
            for j in range(2, m, 2):
                k += l << 2
                a[k - l] = t[j] - t[j + 1]
                a[k + l] = t[j] + t[j + 1]
            l <<= 1
            mh = m >> 1
            for j in range(mh):
                k = m - j
                t[j] = t[m + k] - t[m + j]
                t[k] = t[m + k] + t[m + j]
            t[mh] = t[m + mh]
            m = mh
        a[l] = t[0]
        a[n] = t[2] - t[1]
        a[0] = t[2] + t[1]
    else:
        a[1] = a[0]
        a[2] = t[0]
        a[0] = t[1]


def dfst(a: Floats, tables: FftTables | None = None) -> None:
    """Sine transform of a real anti-symmetric sequence of ``n`` values, in place."""
    n = len(a)
    _check_length(n)
    tables = _tables_for_dfct(n, tables)
    w, nc, c = tables.w, tables.nc, tables.c
    if n > 2:
        m = n >> 1
        mh = m >> 1
        t = [0.0] * m
        for j in range(1, mh):
            k = m - j
            xr = a[j] + a[n - j]
            xi = a[j] - a[n - j]
            yr = a[k] + a[n - k]
            yi = a[k] - a[n - k]
            a[j] = xr
            a[k] = yr
            t[j] = xi + yi
            t[k] = xi - yi
        t[0] = a[mh] - a[n - mh]
        a[mh] += a[n - mh]
        a[0] = a[m]
        _dstsub(m, a, nc, c)
        _forward_passes(m, a, w, nc, c)
        a[n - 1] = a[1] - a[0]
        a[1] = a[0] + a[1]
        for j in range(m - 2, 1, -2):
            a[2 * j + 1] = a[j] - a[j + 1]
            a[2 * j - 1] = -a[j] - a[j + 1]
        l = 2
        m = mh
        while m >= 2:
            _dstsub(m, t, nc, c)
            _forward_passes(m, t, w, nc, c)
            a[n - l] = t[1] - t[0]
            a[l] = t[0] + t[1]
            k = 0
            for j in range(2, m, 2):
                k += l << 2
                a[k - l] = -t[j] - t[j + 1]
                a[k + l] = t[j] - t[j + 1]
            l <<= 1
            mh = m >> 1
            for j in range(1, mh):
                k = m - j
                t[j] = t[m + k] + t[m + j]
                t[k] = t[m + k] - t[m + j]
            t[0] = t[m + mh]
            m = mh
        a[l] = t[0]
    a[0] = 0.0