"""Fixed-ratio resampling stages that filter by fast convolution.

A stage interpolates by ``L`` and decimates by ``M`` with a low-pass
filter applied in the frequency domain, block by block, using
overlap-save.  Interpolation by a power of two builds the up-sampled
spectrum by mirroring; decimation by 2 or 4 keeps only the lower part of
the spectrum.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .fifo import Fifo
from .filters import design_lpf, fir_to_phase
from .pipeline import Stage
from .rdft import ordered_convolve, ordered_partial_convolve, safe_rdft

__all__ = ["DftFilter", "DftStage", "set_dft_length", "design_dft_filter"]

_RDFT_MULTIPLIER = 2


def _is_power_of_2(x: int) -> bool:
    return x >= 2 and not x & (x - 1)


@dataclass
class DftFilter:
    """A filter's spectrum ready for block convolution."""

    dft_length: int
    num_taps: int
    post_peak: int
    coefs: list[float]


def set_dft_length(num_taps: int, min_bits: int, large_bits: int) -> int:
    """Transform length for a filter: about 4x its length, limited by the given bit counts."""
    if num_taps < 1:
        raise ValueError(f"number of taps must be positive, not {num_taps}")
    d = math.log(num_taps) / math.log(2.)
    bits = min(max(int(d + 2.77), min_bits), max(int(d + 1.77), large_bits))
    return 1 << bits


def design_dft_filter(
    fp: float,
    fs: float,
    fn: float,
    att: float,
    phase_response: float,
    L: int,
    multiplier: float,
    log2_min_dft_size: int,
    log2_large_dft_size: int,
) -> DftFilter:
    """Design a low-pass and return its scaled spectrum.

    ``phase_response`` is 0 (minimum) to 100 (maximum), 50 being linear;
    the gain ``multiplier`` and interpolation factor ``L`` are folded in.
    """
    if L < 1:
        raise ValueError(f"interpolation factor must be positive, not {L}")
    if fn <= 0:
        raise ValueError(f"Nyquist frequency must be positive, not {fn}")
    k = L << 1 if phase_response == 50 and _is_power_of_2(L) and fn == L else 4
    h, num_taps = design_lpf(fp, fs, fn, att, 0, -k, -1.)
    if phase_response != 50:
        h, post_peak = fir_to_phase(h, phase_response)
        num_taps = len(h)
    else:
        post_peak = num_taps // 2

    dft_length = set_dft_length(num_taps, log2_min_dft_size, log2_large_dft_size)
    mask = dft_length - 1
    offset = dft_length - num_taps + 1
    scale = (1. / dft_length) * _RDFT_MULTIPLIER * L * multiplier
    coefs = [0.0] * dft_length
    for i, value in enumerate(h):
        coefs[(i + offset) & mask] = value * scale
    safe_rdft(coefs, 1)
    return DftFilter(dft_length, num_taps, post_peak, coefs)


class DftStage(Stage):
    """Resample by ``L / M`` with a frequency-domain filter.

    ``fs`` is the stop-band start the filter was designed with; decimation
    by 2 or 4 is done in the frequency domain when it is at most 1.
    """

    def __init__(self, dft_filter: DftFilter, L: int, M: int, fs: float) -> None:
        if L < 1 or M < 1:
            raise ValueError("interpolation and decimation factors must be positive")
        at = dft_filter.post_peak % L
        super().__init__(
            (dft_filter.dft_length - at + L - 1) // L, dft_filter.post_peak // L
        )
        f_domain_m = abs(3 - M) == 1 and fs <= 1
        self.filter = dft_filter
        self.L = L
        self.M = M
        self.at = at
        self.step = -(M // 2) if f_domain_m else M
        self.rem_m = 0
        self.out_in_ratio = L / M
        self.block_len = dft_filter.dft_length - (dft_filter.num_taps - 1)
        self.phase0 = at // L

    def _upsampled_spectrum(self, block: list[float], dft_length: int) -> list[float]:
        portion = len(block)
        spec = list(block)
        safe_rdft(spec, 1)
        spec.extend([0.0] * (dft_length - portion))
        two = portion << 1
        for i in range(portion + 2, two, 2):  # mirror image
            spec[i] = spec[two - i]
            spec[i + 1] = -spec[two - i + 1]
        spec[portion] = spec[1]
        spec[portion + 1] = 0.0
        spec[1] = spec[0]
        i = size = two
        while i < dft_length:
            spec[i:i + size] = spec[:size]
            spec[i + 1] = 0.0
            i += size
            size <<= 1
        return spec

    def _time_spectrum(self, data: list[float], dft_length: int, rem: int) -> list[float]:
        L = self.L
        if L == 1:
            spec = data[:dft_length]
        else:
            spec = [0.0] * dft_length
            count = len(range(self.at, dft_length, L))
            spec[self.at::L] = data[:count]
            self.at = L - 1 - rem
        safe_rdft(spec, 1)
        return spec

    def run(self, output_fifo: Fifo) -> None:
        """Filter one block if enough input is queued, and update the input size."""
        f = self.filter
        dft_length = f.dft_length
        overlap = f.num_taps - 1
        L = self.L
        num_in = len(self.fifo)

        if self.at + L * num_in >= dft_length:
            quot, rem = divmod(dft_length - overlap - self.at + L - 1, L)
            data = self.fifo.view()
            self.fifo.discard(quot)

            if _is_power_of_2(L):
                spec = self._upsampled_spectrum(data[:dft_length // L], dft_length)
            else:
                spec = self._time_spectrum(data, dft_length, rem)

            if self.step > 0:
                ordered_convolve(spec, f.coefs)
                safe_rdft(spec, -1)
                limit = dft_length - overlap
                if self.step != 1:
                    out = spec[self.rem_m:limit:self.step]
                    self.rem_m = self.rem_m + len(out) * self.step - limit
                else:
                    out = spec[:limit]
                output_fifo.write(out)
            else:
                m = -self.step
                n = dft_length >> m
                part = spec[:n + 2]
                ordered_partial_convolve(part, f.coefs)
                del part[n:]
                safe_rdft(part, -1)
                keep = dft_length - ((((1 << m) - 1) * dft_length + overlap) >> m)
                output_fifo.write(part[:keep])

        self.input_size = (dft_length - self.at + L - 1) // L