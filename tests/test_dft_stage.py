import pytest

from sincresample.dft_stage import (
    DftFilter,
    DftStage,
    design_dft_filter,
    set_dft_length,
)
from sincresample.pipeline import Rate


def _resample(stage, io_ratio, samples):
    rate = Rate([stage], io_ratio)
    rate.input(samples)
    rate.flush()
    rate.process(10 ** 6)
    return rate.output(10 ** 6)


def _filter(fn, L=1, phase=50):
    return design_dft_filter(.8, 1.0, fn, 100., phase, L, 1.0, 0, 17)


def test_set_dft_length_values():
    assert set_dft_length(100, 0, 0) == 256
    assert set_dft_length(100, 10, 17) == 1024


@pytest.mark.parametrize("taps", [3, 17, 100, 511, 4000])
def test_set_dft_length_is_power_of_two_above_taps(taps):
    length = set_dft_length(taps, 0, 20)
    assert length & (length - 1) == 0
    assert length > taps


def test_set_dft_length_rejects_zero_taps():
    with pytest.raises(ValueError):
        set_dft_length(0, 0, 0)


def test_design_linear_phase_filter_shape():
    f = _filter(1.0)
    assert isinstance(f, DftFilter)
    assert len(f.coefs) == f.dft_length
    assert f.num_taps % 4 == 1
    assert f.post_peak == f.num_taps // 2
    assert f.dft_length > f.num_taps


def test_design_minimum_phase_filter():
    f = _filter(1.0, phase=0)
    assert len(f.coefs) == f.dft_length
    assert 0 <= f.post_peak < f.num_taps


def test_design_rejects_bad_arguments():
    with pytest.raises(ValueError):
        design_dft_filter(.8, 1.0, -1.0, 100., 50, 1, 1.0, 0, 17)
    with pytest.raises(ValueError):
        design_dft_filter(.8, 1.0, 1.0, 100., 50, 0, 1.0, 0, 17)


def test_stage_initial_state():
    f = _filter(2.0, L=2)
    stage = DftStage(f, 2, 1, 1.0)
    assert stage.preload == f.post_peak // 2
    assert stage.input_size == (f.dft_length - stage.at + 1) // 2
    assert stage.block_len == f.dft_length - (f.num_taps - 1)
    assert len(stage.fifo) == stage.preload


def test_stage_step_selection():
    f = _filter(2.0)
    assert DftStage(f, 1, 2, 1.0).step == -1
    assert DftStage(f, 1, 4, 1.0).step == -2
    assert DftStage(f, 1, 2, 1.5).step == 2
    assert DftStage(f, 1, 3, 1.0).step == 3


def test_stage_rejects_bad_factors():
    with pytest.raises(ValueError):
        DftStage(_filter(1.0), 0, 1, 1.0)


def test_unit_ratio_passes_dc():
    out = _resample(DftStage(_filter(1.0), 1, 1, 1.0), 1.0, [1.0] * 1000)
    assert len(out) == 1000
    assert all(abs(x - 1.0) < 1e-3 for x in out[200:800])


def test_unit_ratio_impulse_is_not_delayed():
    data = [0.0] * 600
    data[300] = 1.0
    out = _resample(DftStage(_filter(1.0), 1, 1, 1.0), 1.0, data)
    assert len(out) == 600
    assert max(range(600), key=lambda i: out[i]) == 300


def test_frequency_domain_decimation_by_two():
    out = _resample(DftStage(_filter(2.0), 1, 2, 1.0), 2.0, [1.0] * 2000)
    assert len(out) == 1000
    assert all(abs(x - 1.0) < 1e-3 for x in out[200:800])


def test_time_domain_decimation_by_three():
    out = _resample(DftStage(_filter(3.0), 1, 3, 1.0), 3.0, [1.0] * 3000)
    assert len(out) == 1000
    assert all(abs(x - 1.0) < 1e-3 for x in out[200:800])


def test_interpolation_by_two():
    out = _resample(DftStage(_filter(2.0, L=2), 2, 1, 1.0), 0.5, [1.0] * 1000)
    assert len(out) == 2000
    assert all(abs(x - 1.0) < 1e-3 for x in out[400:1600])


def test_interpolation_by_three():
    out = _resample(DftStage(_filter(3.0, L=3), 3, 1, 1.0), 1 / 3, [1.0] * 600)
    assert len(out) == 1800
    assert all(abs(x - 1.0) < 1e-3 for x in out[400:1400])