import pytest

from sincresample.data_io import (
    INT16_MAX,
    INT32_MAX,
    DataType,
    deinterleave,
    interleave,
    rint16,
    rint32,
    rint_clip,
)


def test_data_type_uses_low_two_bits():
    assert DataType.of(4) is DataType.FLOAT32
    assert DataType.of(7) is DataType.INT16


@pytest.mark.parametrize("k", [0, 1, 7, 100, 30000])
def test_rint_rounds_to_nearest(k):
    assert rint32(k + 0.25) == k
    assert rint32(k + 0.75) == k + 1
    assert rint16(k - 0.25) == k


@pytest.mark.parametrize("x", [0.5, 1.5, 2.4, 1000.5, 12.75])
def test_rint_is_symmetric(x):
    assert rint32(-x) == -rint32(x)
    assert rint16(-x) == -rint16(x)


def test_rint16_out_of_range_raises():
    with pytest.raises(OverflowError):
        rint16(40000.0)


def test_rint_clip_in_range_matches_rint():
    samples = [0.0, 1.4, -1.6, 300.5, -300.5, 32766.9]
    values, clips, seed = rint_clip(samples, INT16_MAX)
    assert values == [rint16(x) for x in samples]
    assert clips == 0
    assert seed is None


def test_rint_clip_clips_and_counts():
    values, clips, _ = rint_clip([40000.0, -40000.0, 5.0], INT16_MAX)
    assert values == [INT16_MAX, -INT16_MAX - 1, 5]
    assert clips == 2


def test_rint_clip_int32_limits():
    values, clips, _ = rint_clip([3e9, -3e9], INT32_MAX)
    assert values == [INT32_MAX, -INT32_MAX - 1]
    assert clips == 2


def test_dither_is_small_and_deterministic():
    samples = [float(i) * 10.25 for i in range(40)]
    a, clips_a, seed_a = rint_clip(samples, INT16_MAX, 1)
    b, clips_b, seed_b = rint_clip(samples, INT16_MAX, 1)
    assert a == b and seed_a == seed_b and clips_a == clips_b
    assert seed_a != 1
    plain, _, _ = rint_clip(samples, INT16_MAX)
    assert all(abs(x - y) <= 1 for x, y in zip(a, plain))


def test_dither_advances_seed_even_for_empty_input():
    _, clips, seed = rint_clip([], INT16_MAX, 1)
    assert clips == 0
    assert seed != 1 and isinstance(seed, int)


def test_deinterleave_splits_channels():
    assert deinterleave(DataType.INT16, [1, 2, 3, 4, 5, 6], 2) == [
        [1.0, 3.0, 5.0],
        [2.0, 4.0, 6.0],
    ]


def test_deinterleave_rejects_ragged_input():
    with pytest.raises(ValueError):
        deinterleave(DataType.FLOAT64, [1.0, 2.0, 3.0], 2)
    with pytest.raises(ValueError):
        deinterleave(DataType.FLOAT64, [1.0], 0)


def test_float64_round_trip():
    src = [0.1, -0.2, 0.3, -0.4, 0.5, -0.6]
    chans = deinterleave(DataType.FLOAT64, src, 3)
    out, clips, seed = interleave(DataType.FLOAT64, chans, 9)
    assert out == src
    assert clips == 0
    assert seed == 9


def test_float32_output_is_single_precision():
    out, _, _ = interleave(DataType.FLOAT32, [[0.5, 0.1]])
    assert out[0] == 0.5
    assert abs(out[1] - 0.1) < 1e-7
    assert out[1] != 0.1


def test_int16_round_trip():
    src = [100, -200, 300, -400]
    chans = deinterleave(DataType.INT16, src, 2)
    out, clips, _ = interleave(DataType.INT16, chans)
    assert out == src
    assert clips == 0


def test_int32_ignores_seed():
    out, clips, seed = interleave(DataType.INT32, [[1.4, 3e9]], 5)
    assert out == [1, INT32_MAX]
    assert clips == 1
    assert seed == 5


def test_int16_dither_is_deterministic_and_small():
    chans = [[1.0, 2.0], [3.0, 4.0]]
    out_a, clips_a, seed_a = interleave(DataType.INT16, chans, 5)
    out_b, clips_b, seed_b = interleave(DataType.INT16, chans, 5)
    assert out_a == out_b
    assert seed_a == seed_b
    assert clips_a == clips_b == 0
    assert len(out_a) == 4
    assert all(abs(x - y) <= 1 for x, y in zip(out_a, [1, 3, 2, 4]))


def test_interleave_rejects_mismatched_channels():
    with pytest.raises(ValueError):
        interleave(DataType.FLOAT64, [[1.0], [1.0, 2.0]])
    with pytest.raises(ValueError):
        interleave(DataType.FLOAT64, [])