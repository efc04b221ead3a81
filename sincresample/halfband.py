"""Decimation by two with odd-length half-band FIR filters.

A half-band filter with ``n`` stored coefficients has ``4*n - 1`` taps.
The centre tap is one half, every other tap is zero, and the rest are
symmetric about the centre. Only the non-zero taps on one side are stored.
"""

from __future__ import annotations

from typing import Sequence

__all__ = ["half_band_coefs", "half_band_decimate", "HALF_BAND_LENGTHS"]

_HALF_FIR_COEFS: dict[int, tuple[float, ...]] = {
    7: (
        0.3106265649665737,
        -0.084998810699955796,
        0.0340070446211235,
        -0.012839903789829387,
        0.0039899380181723145,
        -0.00089355202017945374,
        0.00010918292424806546,
    ),
    8: (
        0.31154652365332069,
        -0.087344917685739543,
        0.03681445835363728,
        -0.015189204581464479,
        0.0054540855610738801,
        -0.0015643862626630416,
        0.00031816575906323303,
        -0.000034799449225005688,
    ),
    9: (
        0.31227034755311189,
        -0.089221517147969526,
        0.039139704015071934,
        -0.017250558515852023,
        0.0068589440230476112,
        -0.0023045049636430419,
        0.00060963740543348963,
        -0.00011323803957431231,
        0.000011197769991000046,
    ),
    10: (
        0.31285456012000523,
        -0.090756740799292787,
        0.04109639810419316,
        -0.01906631957252522,
        0.0081840569787684902,
        -0.0030766876176359834,
        0.0009639652442927798,
        -0.00023585679989922018,
        0.000040252189026627833,
        -0.0000036298196342497932,
    ),
    11: (
        0.31333588822574199,
        -0.092035898673019811,
        0.042765169698406408,
        -0.020673580894964429,
        0.0094225426824512421,
        -0.0038563379950013192,
        0.0013634742159642453,
        -0.00039874150714431009,
        0.000090586723632664806,
        -0.000014285617244076783,
        0.0000011834642946400529,
    ),
    12: (
        0.31373928463345568,
        -0.093118180335301962,
        0.044205005881659098,
        -0.022103860986973051,
        0.010574689371162864,
        -0.0046276428065385065,
        0.0017936153397572132,
        -0.00059617527051353237,
        0.00016314517495669067,
        -0.000034555126770115446,
        0.0000050617615610782593,
        -0.00000038768958592971409,
    ),
    13: (
        0.3140822484788891,
        -0.094045836332667387,
        0.045459878763259978,
        -0.023383369012219993,
        0.011644273044890753,
        -0.0053806714579057013,
        0.0022429072878264022,
        -0.00082204347506606424,
        0.00025724946477840893,
        -0.000066072709864248668,
        0.000013099163296288644,
        -0.0000017907147069136,
        0.00000012750825595240592,
    ),
}

HALF_BAND_LENGTHS = tuple(sorted(_HALF_FIR_COEFS))
"""Numbers of stored coefficients for which a filter is available."""


def half_band_coefs(length: int) -> tuple[float, ...]:
    """Return the stored coefficients of the half-band filter with ``length`` of them."""
    try:
        return _HALF_FIR_COEFS[length]
    except KeyError:
        raise ValueError(
            f"no half-band filter with {length} coefficients; "
            f"available: {', '.join(map(str, HALF_BAND_LENGTHS))}"
        ) from None


def half_band_decimate(samples: Sequence[float], coefs: Sequence[float]) -> list[float]:
    """Filter and decimate ``samples`` by two.

    ``samples`` must start with ``2 * len(coefs)`` samples of history and
    end with as many samples of look-ahead. The samples in between are the
    input. The result has ``(num_in + 1) // 2`` samples, and the caller
    consumes ``2 * len(result)`` input samples.
    """
    n = len(coefs)
    if n < 1:
        raise ValueError("a half-band filter needs at least one coefficient")
    pre = 2 * n
    num_in = max(0, len(samples) - 2 * pre)
    num_out = (num_in + 1) >> 1
    taps = [(2 * j + 1, c) for j, c in enumerate(coefs)]
    out = []
    for centre in range(pre, pre + 2 * num_out, 2):
        total = samples[centre] * .5
        for offset, c in taps:
            total += (samples[centre - offset] + samples[centre + offset]) * c
        out.append(total)
    return out