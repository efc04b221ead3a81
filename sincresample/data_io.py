"""Conversion between interleaved sample buffers and per-channel sample lists.

Integer output is rounded half away from zero and clipped to the range of
the target type; 16-bit output may be dithered with a small pseudo-random
triangular signal driven by a caller-held seed.
"""

from __future__ import annotations

from array import array
from enum import IntEnum
from typing import Iterable, Sequence

__all__ = [
    "DataType",
    "rint32",
    "rint16",
    "rint_clip",
    "deinterleave",
    "interleave",
    "INT32_MAX",
    "INT16_MAX",
]

INT32_MAX = 2147483647
INT16_MAX = 32767

_SEED_MASK = (1 << 64) - 1


class DataType(IntEnum):
    """Sample formats; only the low two bits of a format code select one."""

    FLOAT32 = 0
    FLOAT64 = 1
    INT32 = 2
    INT16 = 3

    @classmethod
    def of(cls, code: int) -> "DataType":
        """The format selected by the low two bits of ``code``."""
        return cls(int(code) & 3)


def _round(x: float, rint_max: int) -> int:
    value = int(x - .5) if x < 0 else int(x + .5)
    if not -rint_max - 1 <= value <= rint_max:
        raise OverflowError(f"{x} does not fit in the range [{-rint_max - 1}, {rint_max}]")
    return value


def rint32(x: float) -> int:
    """Round ``x`` half away from zero to a 32-bit integer."""
    return _round(x, INT32_MAX)


def rint16(x: float) -> int:
    """Round ``x`` half away from zero to a 16-bit integer."""
    return _round(x, INT16_MAX)


def _next_rand(seed: int) -> tuple[int, int]:
    seed = (1664525 * seed + 1013904223) & _SEED_MASK
    return seed, seed >> 3


def _blocks(n: int) -> Iterable[tuple[int, int]]:
    full = n & ~15
    for start in range(0, full, 16):
        yield start, start + 16
    yield full, n


def rint_clip(
    samples: Iterable[float], rint_max: int, seed: int | None = None
) -> tuple[list[int], int, int | None]:
    """Round and clip ``samples`` to integers in ``[-rint_max - 1, rint_max]``.

    With a ``seed``, dither is added before rounding.  Returns the integers,
    the number of samples that were clipped, and the updated seed.
    """
    values = list(samples)
    limit = 1.0 + rint_max
    out: list[int] = []
    clips = 0
    for start, stop in _blocks(len(values)):
        ran1 = ran2 = 0
        if seed is not None:
            seed, ran1 = _next_rand(seed)
            seed, ran2 = _next_rand(seed)
        for d in values[start:stop]:
            if seed is not None:
                ran1 >>= 3
                ran2 >>= 3
                d = d + ((ran1 & 31) - (ran2 & 31)) / 32
            if d > 0:
                r = d + .5
                if r >= limit:
                    clips += 1
                    out.append(rint_max)
                else:
                    out.append(int(r))
            else:
                r = d - .5
                if r <= -limit - 1:
                    clips += 1
                    out.append(-rint_max - 1)
                else:
                    out.append(int(r))
    return out, clips, seed


def deinterleave(data_type: int, src: Sequence[float], channels: int) -> list[list[float]]:
    """Split interleaved ``src`` into one list of floats per channel.

    Integer samples are converted without scaling.
    """
    DataType.of(data_type)
    if channels < 1:
        raise ValueError(f"channel count must be positive, not {channels}")
    if len(src) % channels:
        raise ValueError(
            f"{len(src)} samples do not divide into {channels} channels"
        )
    return [[float(x) for x in src[ch::channels]] for ch in range(channels)]


def _merge(per_channel: Sequence[Sequence]) -> list:
    return [sample for frame in zip(*per_channel) for sample in frame]


def interleave(
    data_type: int, channels: Sequence[Sequence[float]], seed: int | None = None
) -> tuple[list, int, int | None]:
    """Interleave per-channel samples into the given format.

    Returns the interleaved samples, the number clipped, and the seed as
    updated by dithering; only 16-bit output is dithered, and only when a
    seed is given.
    """
    kind = DataType.of(data_type)
    if not channels:
        raise ValueError("at least one channel is needed")
    length = len(channels[0])
    if any(len(ch) != length for ch in channels):
        raise ValueError("channels differ in length")

    if kind is DataType.FLOAT32:
        return _merge([array("f", ch).tolist() for ch in channels]), 0, seed
    if kind is DataType.FLOAT64:
        return _merge([[float(x) for x in ch] for ch in channels]), 0, seed

    rint_max = INT32_MAX if kind is DataType.INT32 else INT16_MAX
    dither_seed = seed if kind is DataType.INT16 else None
    converted = []
    clips = 0
    for ch in channels:
        values, n_clips, dither_seed = rint_clip(ch, rint_max, dither_seed)
        converted.append(values)
        clips += n_clips
    if kind is DataType.INT16 and seed is not None:
        seed = dither_seed
    return _merge(converted), clips, seed