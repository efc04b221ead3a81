"""Kaiser-windowed low-pass FIR design and filter phase conversion."""

from __future__ import annotations

import math
from typing import Sequence

from .bessel import bessel_i0
from .rdft import safe_rdft

__all__ = [
    "kaiser_beta",
    "make_lpf",
    "kaiser_params",
    "design_lpf",
    "fir_to_phase",
    "f_resp",
    "inv_f_resp",
    "to_3db",
    "linear_to_db",
]

_BETA_COEFS = (
    (-6.784957e-10, 1.02856e-05, 0.1087556, -0.8988365 + .001),
    (-6.897885e-10, 1.027433e-05, 0.10876, -0.8994658 + .002),
    (-1.000683e-09, 1.030092e-05, 0.1087677, -0.9007898 + .003),
    (-3.654474e-10, 1.040631e-05, 0.1087085, -0.8977766 + .006),
    (8.106988e-09, 6.983091e-06, 0.1091387, -0.9172048 + .015),
    (9.519571e-09, 7.272678e-06, 0.1090068, -0.9140768 + .025),
    (-5.626821e-09, 1.342186e-05, 0.1083999, -0.9065452 + .05),
    (-9.965946e-08, 5.073548e-05, 0.1040967, -0.7672778 + .085),
    (1.604808e-07, -5.856462e-05, 0.1185998, -1.34824 + .1),
    (-1.511964e-07, 6.363034e-05, 0.1064627, -0.9876665 + .18),
)


def linear_to_db(x: float) -> float:
    """Convert a linear amplitude ratio to decibels."""
    return math.log10(x) * 20


def _db_to_linear(x: float) -> float:
    return math.exp(x * (math.log(10) * 0.05))


def _range_limit(x: int, lower: int, upper: int) -> int:
    return min(max(x, lower), upper)


def kaiser_beta(att: float, tr_bw: float) -> float:
    """Kaiser window beta for stop-band attenuation ``att`` dB."""
    if att >= 60:
        realm = math.log(tr_bw / .0005) / math.log(2.)
        last = len(_BETA_COEFS) - 1
        c0 = _BETA_COEFS[_range_limit(int(realm), 0, last)]
        c1 = _BETA_COEFS[_range_limit(1 + int(realm), 0, last)]
        b0 = ((c0[0] * att + c0[1]) * att + c0[2]) * att + c0[3]
        b1 = ((c1[0] * att + c1[1]) * att + c1[2]) * att + c1[3]
        return b0 + (b1 - b0) * (realm - int(realm))
    if att > 50:
        return .1102 * (att - 8.7)
    if att > 20.96:
        return .58417 * (att - 20.96) ** .4 + .07886 * (att - 20.96)
    return 0.0


def make_lpf(num_taps: int, fc: float, beta: float, rho: float, scale: float) -> list[float]:
    """Kaiser-windowed sinc low-pass of ``num_taps`` taps with cut-off ``fc`` (Nyquist = 1)."""
    if not 0 <= fc <= 1:
        raise ValueError(f"cut-off frequency {fc} not in [0, 1]")
    m = num_taps - 1
    mult = scale / bessel_i0(beta)
    mult1 = 1 / (.5 * m + rho)
    h = [0.0] * num_taps
    for i in range(m // 2 + 1):
        z = i - .5 * m
        x = z * math.pi
        y = z * mult1
        value = math.sin(fc * x) / x if x != 0 else fc
        value *= bessel_i0(beta * math.sqrt(1 - y * y)) * mult
        h[i] = value
        h[m - i] = value
    return h


def kaiser_params(
    att: float, fc: float, tr_bw: float, beta: float, num_taps: int
) -> tuple[float, int]:
    """Return ``(beta, num_taps)``, estimating beta if negative and taps if zero."""
    if beta < 0:
        beta = kaiser_beta(att, tr_bw * .5 / fc)
    if att < 60:
        width = (att - 7.95) / (2.285 * math.pi * 2)
    else:
        width = ((.0007528358 - 1.577737e-05 * beta) * beta + .6248022) * beta + .06186902
    if not num_taps:
        num_taps = int(math.ceil(width / tr_bw + 1))
    return beta, num_taps


def design_lpf(
    fp: float,
    fs: float,
    fn: float,
    att: float,
    num_taps: int,
    k: int,
    beta: float,
) -> tuple[list[float] | None, int]:
    """Design a low-pass filter; return ``(coefficients, num_taps)``.

    ``fp`` and ``fs`` are the pass-band end and stop-band start relative to
    the Nyquist frequency ``fn``; a negative ``fn`` is a dry run that only
    works out the number of taps and returns ``None`` for the coefficients.
    ``num_taps`` of zero is estimated.  A positive ``k`` is a number of
    phases; a negative one makes ``num_taps`` equal 1 modulo ``-k``.
    A negative ``beta`` is estimated.
    """
    n = num_taps
    phases = max(k, 1)
    modulo = max(-k, 1)
    rho = .5 if phases == 1 else (.63 if att < 120 else .75)

    fp /= abs(fn)
    fs /= abs(fn)
    tr_bw = .5 * (fs - fp)
    tr_bw /= phases
    fs /= phases
    tr_bw = min(tr_bw, .5 * fs)
    fc = fs - tr_bw
    if not fc - tr_bw >= 0:
        raise ValueError("transition band extends below zero frequency")
    beta, num_taps = kaiser_params(att, fc, tr_bw, beta, num_taps)
    if not n:
        if phases > 1:
            num_taps = num_taps // phases * phases + phases - 1
        else:
            num_taps = (num_taps + modulo - 2) // modulo * modulo + 1
    if fn < 0:
        return None, num_taps
    return make_lpf(num_taps, fc, beta, rho, float(phases)), num_taps


def _safe_log(x: float) -> float:
    if x < 0:
        raise ValueError("logarithm of a negative magnitude")
    return math.log(x) if x != 0 else -26.0


def _unwrap_flag(delta: float, detect: float) -> int:
    return int(delta < -detect * .7) - int(delta > detect * .7)


def fir_to_phase(h: Sequence[float], phase: float) -> tuple[list[float], int]:
    """Convert a linear-phase FIR to the given phase response.

    ``phase`` runs from 0 (minimum phase) through 50 (linear) to 100
    (maximum phase).  Returns the new coefficients and the number of
    taps after the impulse peak.
    """
    length = len(h)
    phase1 = (100 - phase if phase > 50 else phase) / 50

    work_len = 2 * 2 * 8
    i = length
    while i > 1:
        work_len <<= 1
        i >>= 1

    work = [0.0] * work_len
    work[:length] = h
    safe_rdft(work, 1)  # cepstral analysis
    work.extend((work[1], 0.0))
    work[1] = 0.0

    pi_wraps = [0.0] * (work_len // 2 + 1)
    prev_angle2 = cum_2pi = prev_angle1 = cum_1pi = 0.0
    for i in range(0, work_len + 1, 2):
        angle = math.atan2(work[i + 1], work[i])
        detect = 2 * math.pi
        adjust = detect * _unwrap_flag(angle - prev_angle2, detect)
        prev_angle2 = angle
        cum_2pi += adjust
        angle += cum_2pi
        detect = math.pi
        adjust = detect * _unwrap_flag(angle - prev_angle1, detect)
        prev_angle1 = angle
        cum_1pi += abs(adjust)
        pi_wraps[i >> 1] = cum_1pi
        work[i] = _safe_log(math.hypot(work[i], work[i + 1]))
        work[i + 1] = 0.0

    work[1] = work[work_len]
    del work[work_len:]
    safe_rdft(work, -1)
    scale = 2. / work_len
    work = [x * scale for x in work]

    half = work_len // 2
    for i in range(1, half):  # window to reject acausal components
        work[i] *= 2
        work[i + half] = 0.0
    safe_rdft(work, 1)

    total_wraps = pi_wraps[work_len >> 1]
    for i in range(2, work_len, 2):  # interpolate between linear & min phase
        work[i + 1] = (phase1 * i / work_len * total_wraps
                       + (1 - phase1) * (work[i + 1] + pi_wraps[i >> 1])
                       - pi_wraps[i >> 1])

    work[0] = math.exp(work[0])
    work[1] = math.exp(work[1])
    for i in range(2, work_len, 2):
        x = math.exp(work[i])
        angle = work[i + 1]
        work[i] = x * math.cos(angle)
        work[i + 1] = x * math.sin(angle)

    safe_rdft(work, -1)
    work = [x * scale for x in work]

    imp_sum = peak_imp_sum = 0.0
    peak = 0
    for i in range(int(total_wraps / math.pi + .5) + 1):
        imp_sum += work[i]
        if abs(imp_sum) > abs(peak_imp_sum):
            peak_imp_sum = imp_sum
            peak = i
    while (peak and abs(work[peak - 1]) > abs(work[peak])
           and work[peak - 1] * work[peak] > 0):
        peak -= 1

    if phase1 == 0:
        begin = 0
    elif phase1 == 1:
        begin = peak - length // 2
    else:
        begin = int((.997 - (2 - phase1) * .22) * length + .5)
        end = int((.997 + (0 - phase1) * .22) * length + .5)
        begin = peak - (begin & ~3)
        end = peak + 1 + ((end + 3) & ~3)
        length = end - begin

    mask = work_len - 1
    reverse = phase > 50
    result = [
        work[(begin + (length - 1 - i if reverse else i) + work_len) & mask]
        for i in range(length)
    ]
    post_len = peak - begin if reverse else begin + length - (peak + 1)
    return result, post_len


def _sine_phi(x: float) -> float:
    return ((2.0517e-07 * x - 1.1303e-04) * x + .023154) * x + .55924


def _sine_psi(x: float) -> float:
    return ((9.0667e-08 * x - 5.6114e-05) * x + .013658) * x + 1.0977


def _sine_pow(x: float) -> float:
    return math.log(.5) / math.log(math.sin(x * .5))


def f_resp(t: float, a: float) -> float:
    """Approximate response in dB at normalised transition-band position ``t``.

    ``a`` is the filter's stop-band attenuation in dB.
    """
    if t > (.8 if a <= 160 else .82):
        a1 = a + 15
        p = .00035 * a + .375
        w = 1 / (1 - .597) * math.asin(math.pow((a1 - 10.6) / a1, 1 / p))
        c = 1 + math.asin(math.pow(1 - a / a1, 1 / p)) / w
        return a1 * (math.pow(math.sin((c - t) * w), p) - 1)
    if t > .5:
        x = _sine_psi(a)
        x = math.pow(math.sin((1 - t) * x), _sine_pow(x))
    else:
        x = _sine_phi(a)
        x = 1 - math.pow(math.sin(t * x), _sine_pow(x))
    return linear_to_db(x)


def inv_f_resp(drop: float, a: float) -> float:
    """Transition-band position at which the response has fallen by ``drop`` dB."""
    x = _sine_phi(a)
    drop = _db_to_linear(drop)
    s = 1 - drop if drop > .5 else drop
    x = math.asin(math.pow(s, 1 / _sine_pow(x))) / x
    return x if drop > .5 else 1 - x


def to_3db(a: float) -> float:
    """Complement of the transition-band position of the -3 dB point."""
    return 1 - inv_f_resp(-3., a)