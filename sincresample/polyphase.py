"""Poly-phase FIR resampling kernels.

Coefficient tables are laid out as ``[phase][tap][order + 1]``. Within each
tap the polynomial coefficients run from the highest power down to the
constant term.

The interpolated kernel keeps time as a fixed-point number with 32
fraction bits. Its integer part indexes the input and the top
``phase_bits`` fraction bits select the phase. The remaining fraction bits
interpolate between that phase and the next.
"""

from __future__ import annotations

from typing import Sequence

__all__ = [
    "prepare_poly_fir_coefs",
    "poly_fir0",
    "poly_fir",
    "FRACTION_BITS",
]

FRACTION_BITS = 32
_FRACTION_MASK = (1 << FRACTION_BITS) - 1
_MULT32 = float(1 << FRACTION_BITS)


def prepare_poly_fir_coefs(
    coefs: Sequence[float],
    num_coefs: int,
    num_phases: int,
    interp_order: int,
    multiplier: float,
) -> list[float]:
    """Rearrange a prototype filter into a poly-phase table with interpolation terms.

    ``coefs`` is the prototype low-pass of ``num_coefs * num_phases - 1``
    taps. The result holds, for each phase and tap, the polynomial of
    degree ``interp_order`` that interpolates towards the next phase.
    """
    if interp_order not in (0, 1, 2, 3):
        raise ValueError(f"interpolation order must be 0 to 3, not {interp_order}")
    if num_coefs < 1 or num_phases < 1:
        raise ValueError("number of coefficients and phases must be positive")
    if len(coefs) < num_coefs * num_phases - 1:
        raise ValueError("prototype filter is shorter than num_coefs * num_phases - 1")

    width = interp_order + 1
    result = [0.0] * (num_coefs * num_phases * width)
    fm1 = coefs[0]
    f1 = f2 = 0.0
    for i in range(num_coefs - 1, -1, -1):
        for j in range(num_phases - 1, -1, -1):
            f0 = fm1
            b = c = d = 0.0
            pos = i * num_phases + j - 1
            fm1 = coefs[pos - 1] * multiplier if pos > 0 else 0.0
            if interp_order == 1:
                b = f1 - f0
            elif interp_order == 2:
                c = .5 * (f2 + f0) - f1
                b = f1 - c - f0
            elif interp_order == 3:
                c = .5 * (f1 + fm1) - f0
                d = (1 / 6.) * (f2 - f1 + fm1 - f0 - 4 * c)
                b = f1 - f0 - d - c
            base = num_coefs * width * j + width * (num_coefs - 1 - i) + interp_order
            terms = (f0, b, c, d)
            for x in range(interp_order + 1):
                result[base - x] = terms[x]
            f2, f1 = f1, f0
    return result


def _check_span(samples: Sequence[float], num_in: int, fir_length: int) -> None:
    if num_in < 0:
        raise ValueError(f"input count must not be negative, not {num_in}")
    if fir_length < 1:
        raise ValueError(f"filter length must be positive, not {fir_length}")
    if len(samples) < num_in + fir_length - 1:
        raise ValueError(
            f"{len(samples)} samples are too few for {num_in} inputs "
            f"with a {fir_length}-tap filter"
        )


def poly_fir0(
    samples: Sequence[float],
    num_in: int,
    coefs: Sequence[float],
    fir_length: int,
    L: int,
    at: int,
    step: int,
) -> tuple[list[float], int, int]:
    """Resample by the rational factor ``L / step`` with a poly-phase FIR.

    ``samples`` holds ``num_in`` input samples followed by at least
    ``fir_length - 1`` more. ``at`` is the starting position in units of
    ``1 / L`` input samples. Returns the output, the number of input
    samples consumed and the new position.
    """
    if L < 1 or step < 1:
        raise ValueError("interpolation and decimation factors must be positive")
    _check_span(samples, num_in, fir_length)
    if len(coefs) < fir_length * L:
        raise ValueError("coefficient table is too short for the number of phases")
    if not num_in:
        return [], 0, at
    out = []
    end = num_in * L
    while at < end:
        div, rem = divmod(at, L)
        phase = coefs[fir_length * rem:fir_length * (rem + 1)]
        out.append(sum(c * s for c, s in zip(phase, samples[div:div + fir_length])))
        at += step
    return out, at // L, at % L


def poly_fir(
    samples: Sequence[float],
    num_in: int,
    coefs: Sequence[float],
    fir_length: int,
    interp_order: int,
    phase_bits: int,
    at: int,
    step: int,
) -> tuple[list[float], int, int]:
    """Resample with an interpolated poly-phase FIR.

    ``at`` and ``step`` are fixed-point values with 32 fraction bits.
    ``samples`` holds ``num_in`` input samples followed by at least
    ``fir_length - 1`` more. Returns the output, the number of input
    samples consumed and the new position, which is only a fraction.
    """
    if interp_order not in (1, 2, 3):
        raise ValueError(f"interpolation order must be 1 to 3, not {interp_order}")
    if not 0 <= phase_bits <= FRACTION_BITS:
        raise ValueError(f"phase bits must be 0 to {FRACTION_BITS}, not {phase_bits}")
    if step <= 0:
        raise ValueError("step must be positive")
    if at < 0:
        raise ValueError("position must not be negative")
    _check_span(samples, num_in, fir_length)
    width = interp_order + 1
    block = fir_length * width
    if len(coefs) < block << phase_bits:
        raise ValueError("coefficient table is too short for the number of phases")

    out = []
    while (at >> FRACTION_BITS) < num_in:
        start = at >> FRACTION_BITS
        frac = at & _FRACTION_MASK
        phase = frac >> (FRACTION_BITS - phase_bits)
        x = ((frac << phase_bits) & _FRACTION_MASK) * (1 / _MULT32)
        base = block * phase
        total = 0.0
        for j, s in enumerate(samples[start:start + fir_length]):
            value = 0.0
            tap = base + width * j
            for c in coefs[tap:tap + width]:
                value = value * x + c
            total += value * s
        out.append(total)
        at += step
    return out, at >> FRACTION_BITS, at & _FRACTION_MASK