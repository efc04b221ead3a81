import pytest

from sincresample.polyphase import (
    FRACTION_BITS,
    poly_fir,
    poly_fir0,
    prepare_poly_fir_coefs,
)

ONE = 1 << FRACTION_BITS
HALF = 1 << (FRACTION_BITS - 1)


def test_prepare_order0_worked_example():
    assert prepare_poly_fir_coefs([1.0, 2.0, 1.0], 2, 2, 0, 1.0) == [2.0, 0.0, 1.0, 1.0]


@pytest.mark.parametrize("order", [0, 1, 2, 3])
def test_prepare_length(order):
    coefs = [float(i) for i in range(3 * 4 - 1)]
    result = prepare_poly_fir_coefs(coefs, 3, 4, order, 1.0)
    assert len(result) == 3 * 4 * (order + 1)


@pytest.mark.parametrize("order", [1, 2, 3])
def test_constant_terms_match_order0(order):
    proto = [0.1, 0.4, 0.9, 1.0, 0.9, 0.4, 0.1]
    plain = prepare_poly_fir_coefs(proto, 2, 4, 0, 1.0)
    interp = prepare_poly_fir_coefs(proto, 2, 4, order, 1.0)
    width = order + 1
    assert interp[order::width] == plain


def test_order1_reaches_next_phase():
    proto = [0.1, 0.4, 0.9, 1.0, 0.9, 0.4, 0.1]
    num_coefs, num_phases = 2, 4
    table = prepare_poly_fir_coefs(proto, num_coefs, num_phases, 1, 1.0)
    for phase in range(num_phases - 1):
        for tap in range(num_coefs):
            here = 2 * (num_coefs * phase + tap)
            nxt = 2 * (num_coefs * (phase + 1) + tap)
            assert table[here] + table[here + 1] == pytest.approx(table[nxt + 1])


def test_multiplier_scales_interior_coefficients():
    proto = [0.1, 0.4, 0.9, 1.0, 0.9, 0.4, 0.1]
    base = prepare_poly_fir_coefs(proto, 2, 4, 0, 1.0)
    scaled = prepare_poly_fir_coefs(proto, 2, 4, 0, 2.0)
    top = 2 * 3  # last phase, first tap: taken straight from the prototype
    for idx, (x, y) in enumerate(zip(base, scaled)):
        if idx != top:
            assert y == pytest.approx(2 * x)
    assert scaled[top] == base[top]


def test_prepare_rejects_bad_order():
    with pytest.raises(ValueError):
        prepare_poly_fir_coefs([1.0, 2.0, 1.0], 2, 2, 4, 1.0)


def test_prepare_rejects_short_prototype():
    with pytest.raises(ValueError):
        prepare_poly_fir_coefs([1.0], 2, 2, 0, 1.0)


def test_poly_fir0_identity():
    samples = [3.0, -1.0, 4.0, 1.5]
    out, consumed, at = poly_fir0(samples, 4, [1.0], 1, 1, 0, 1)
    assert out == samples
    assert consumed == 4
    assert at == 0


def test_poly_fir0_linear_upsampling():
    coefs = [1.0, 0.0, 0.5, 0.5]
    out, consumed, at = poly_fir0([0.0, 2.0, 4.0, 6.0], 3, coefs, 2, 2, 0, 1)
    assert out == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0]
    assert consumed == 3
    assert at == 0


def test_poly_fir0_decimation_keeps_remainder():
    samples = [1.0, 2.0, 3.0, 4.0, 5.0]
    out, consumed, at = poly_fir0(samples, 5, [1.0], 1, 1, 0, 2)
    assert out == [1.0, 3.0, 5.0]
    assert consumed == 6
    assert at == 0


def test_poly_fir0_no_input():
    assert poly_fir0([], 0, [1.0], 1, 1, 5, 1) == ([], 0, 5)


def test_poly_fir0_rejects_short_samples():
    with pytest.raises(ValueError):
        poly_fir0([1.0, 2.0], 2, [0.5, 0.5], 2, 1, 0, 1)


def test_poly_fir_linear_interpolation():
    coefs = [-1.0, 1.0, 1.0, 0.0]
    out, consumed, at = poly_fir([0.0, 10.0, 20.0, 30.0], 3, coefs, 2, 1, 0, 0, HALF)
    assert out == [0.0, 5.0, 10.0, 15.0, 20.0, 25.0]
    assert consumed == 3
    assert at == 0


def test_poly_fir_fractional_start():
    coefs = [-1.0, 1.0, 1.0, 0.0]
    out, consumed, at = poly_fir([0.0, 10.0, 20.0, 30.0], 3, coefs, 2, 1, 0, HALF, ONE)
    assert out == [5.0, 15.0, 25.0]
    assert consumed == 3
    assert at == HALF


def test_poly_fir_matches_poly_fir0_at_phase_points():
    proto = [0.1, 0.4, 0.9, 1.0, 0.9, 0.4, 0.1]
    num_coefs, phase_bits = 2, 2
    plain = prepare_poly_fir_coefs(proto, num_coefs, 1 << phase_bits, 0, 1.0)
    interp = prepare_poly_fir_coefs(proto, num_coefs, 1 << phase_bits, 1, 1.0)
    samples = [1.0, -2.0, 3.0, 0.5, 4.0]
    step = ONE >> phase_bits
    a, _, _ = poly_fir(samples, 4, interp, num_coefs, 1, phase_bits, 0, step)
    b, _, _ = poly_fir0(samples, 4, plain, num_coefs, 1 << phase_bits, 0, 1)
    assert a == pytest.approx(b)


def test_poly_fir_rejects_order0():
    with pytest.raises(ValueError):
        poly_fir([1.0, 2.0], 1, [1.0, 1.0], 2, 0, 0, 0, ONE)


def test_poly_fir_rejects_short_table():
    with pytest.raises(ValueError):
        poly_fir([1.0, 2.0, 3.0], 2, [1.0, 0.0], 2, 1, 0, 0, ONE)