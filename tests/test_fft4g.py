import math
import random

import pytest

from sincresample.fft4g import (
    FftTables,
    bitrv2,
    bitrv2conj,
    cdft,
    rdft,
)

SIZES = [2, 4, 8, 16, 32, 64, 128, 256]


def _random(n, seed=1):
    rng = random.Random(seed)
    return [rng.uniform(-1.0, 1.0) for _ in range(n)]


def _bit_reverse(j, bits):
    return int(format(j, f"0{bits}b")[::-1], 2) if bits else 0


@pytest.mark.parametrize("n", [8, 16, 32, 64, 128])
def test_bitrv2_is_bit_reversal(n):
    points = n // 2
    bits = points.bit_length() - 1
    a = [float(v) for j in range(points) for v in (j, 1000 + j)]
    bitrv2(n, a)
    expected = [_bit_reverse(j, bits) for j in range(points)]
    assert a[0::2] == [float(e) for e in expected]
    assert a[1::2] == [float(1000 + e) for e in expected]


@pytest.mark.parametrize("n", [8, 16, 32, 64])
def test_bitrv2_is_involution(n):
    a = _random(n)
    original = list(a)
    bitrv2(n, a)
    bitrv2(n, a)
    assert a == original


@pytest.mark.parametrize("n", [8, 16, 32, 64, 128])
def test_bitrv2conj_conjugates(n):
    a = _random(n, seed=7)
    b = list(a)
    bitrv2(n, a)
    bitrv2conj(n, b)
    assert b[0::2] == a[0::2]
    assert b[1::2] == [-x for x in a[1::2]]


def test_make_wt_table():
    tables = FftTables()
    tables.make_wt(8)
    assert tables.nw == 8
    assert len(tables.w) == 8
    assert tables.w[0] == 1.0
    assert tables.w[1] == 0.0
    assert tables.w[2] == pytest.approx(math.cos(math.pi / 4))
    assert tables.w[3] == pytest.approx(tables.w[2])


def test_make_ct_table():
    tables = FftTables()
    tables.make_ct(4)
    assert tables.nc == 4
    assert tables.c[0] == pytest.approx(math.cos(math.pi / 4))
    assert tables.c[2] == pytest.approx(0.5 * tables.c[0])


@pytest.mark.parametrize("n", SIZES)
def test_cdft_impulse_gives_flat_spectrum(n):
    a = [0.0] * n
    a[0] = 1.0
    cdft(a, 1)
    assert a[0::2] == pytest.approx([1.0] * (n // 2))
    assert a[1::2] == pytest.approx([0.0] * (n // 2), abs=1e-12)


@pytest.mark.parametrize("n", [8, 16, 64, 256])
def test_cdft_sign_convention(n):
    points = n // 2
    k0 = 1
    a = []
    for j in range(points):
        angle = -2 * math.pi * j * k0 / points
        a.extend((math.cos(angle), math.sin(angle)))
    cdft(a, 1)
    expected_re = [float(points) if k == k0 else 0.0 for k in range(points)]
    assert a[0::2] == pytest.approx(expected_re, abs=1e-9)
    assert a[1::2] == pytest.approx([0.0] * points, abs=1e-9)


@pytest.mark.parametrize("n", SIZES)
@pytest.mark.parametrize("first", [1, -1])
def test_cdft_round_trip(n, first):
    a = _random(n, seed=n)
    original = list(a)
    cdft(a, first)
    cdft(a, -first)
    scale = 2.0 / n
    assert [x * scale for x in a] == pytest.approx(original, abs=1e-12)


@pytest.mark.parametrize("n", [16, 64, 512])
def test_cdft_parseval(n):
    a = _random(n, seed=3)
    energy = sum(x * x for x in a)
    cdft(a, -1)
    assert sum(x * x for x in a) == pytest.approx(energy * (n // 2))


def test_cdft_linearity():
    n = 64
    x = _random(n, seed=11)
    y = _random(n, seed=12)
    combined = [p + 2 * q for p, q in zip(x, y)]

    fx = list(x)
    cdft(fx, 1)
    fy = list(y)
    cdft(fy, 1)
    cdft(combined, 1)

    assert combined == pytest.approx([p + 2 * q for p, q in zip(fx, fy)], abs=1e-12)


@pytest.mark.parametrize("n", SIZES)
def test_rdft_constant(n):
    a = [1.0] * n
    rdft(a, 1)
    assert a[0] == pytest.approx(float(n))
    assert a[1:] == pytest.approx([0.0] * (n - 1), abs=1e-9)


@pytest.mark.parametrize("n", SIZES)
def test_rdft_alternating_goes_to_nyquist_slot(n):
    a = [1.0 if j % 2 == 0 else -1.0 for j in range(n)]
    rdft(a, 1)
    assert a[1] == pytest.approx(float(n))
    assert a[0] == pytest.approx(0.0, abs=1e-9)
    assert a[2:] == pytest.approx([0.0] * (n - 2), abs=1e-9)


@pytest.mark.parametrize("n", [16, 32, 128])
def test_rdft_cosine_and_sine_bins(n):
    k0 = 3
    a = [math.cos(2 * math.pi * j * k0 / n) + 2 * math.sin(2 * math.pi * j * k0 / n)
         for j in range(n)]
    rdft(a, 1)
    expected = [0.0] * n
    expected[2 * k0] = n / 2
    expected[2 * k0 + 1] = n
    assert a == pytest.approx(expected, abs=1e-9)


@pytest.mark.parametrize("n", SIZES)
def test_rdft_round_trip(n):
    a = _random(n, seed=n + 5)
    original = list(a)
    rdft(a, 1)
    rdft(a, -1)
    scale = 2.0 / n
    assert [x * scale for x in a] == pytest.approx(original, abs=1e-12)


def test_shared_tables_give_same_results():
    tables = FftTables()
    big = _random(1024, seed=21)
    rdft(big, 1, tables)
    small = _random(64, seed=22)
    fresh = list(small)
    rdft(small, 1, tables)
    rdft(fresh, 1)
    assert small == pytest.approx(fresh, abs=1e-12)
    c = _random(64, seed=23)
    c_fresh = list(c)
    cdft(c, -1, tables)
    cdft(c_fresh, -1)
    assert c == pytest.approx(c_fresh, abs=1e-12)


@pytest.mark.parametrize("n", [0, 1, 3, 6, 12, 100])
def test_bad_lengths_rejected(n):
    with pytest.raises(ValueError):
        rdft([0.0] * n, 1)
    with pytest.raises(ValueError):
        cdft([0.0] * n, 1)