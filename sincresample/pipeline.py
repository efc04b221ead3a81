"""A chain of resampling stages connected by sample queues.

Each stage reads from its own queue and writes to the queue of the stage
after it; the last stage writes to the pipeline's output queue.  Samples
are pulled through the chain on demand, and flushing pads the input with
zeros until every sample owed to the output has been produced.
"""

from __future__ import annotations

from typing import Iterable

from .fifo import Fifo

__all__ = ["Stage", "Rate", "check_quality"]

_TOLERANCE = 1 + 1e-5


class Stage:
    """One step of a pipeline.

    The base stage passes its input through unchanged; resampling stages
    override :meth:`run`.  ``preload`` zeros are queued ahead of the input
    to line up the stage's filter delay.
    """

    def __init__(self, input_size: int = 8192, preload: int = 0) -> None:
        if input_size < 1:
            raise ValueError(f"input size must be positive, not {input_size}")
        if preload < 0:
            raise ValueError(f"preload must not be negative, not {preload}")
        self.fifo = Fifo()
        self.input_size = input_size
        self.preload = preload
        self.pre = 0
        self.pre_post = 0
        self.is_input = False
        self.out_in_ratio = 1.0
        self.fifo.reserve(preload)

    @property
    def occupancy(self) -> int:
        """Number of queued samples available as input."""
        return max(0, len(self.fifo) - self.pre_post)

    def run(self, output_fifo: Fifo) -> None:
        """Move up to ``input_size`` samples to ``output_fifo``."""
        num_in = min(self.occupancy, self.input_size)
        output_fifo.write(self.fifo[self.pre:self.pre + num_in])
        self.fifo.discard(num_in)


class Rate:
    """A single channel's chain of stages converting at ``io_ratio``.

    ``io_ratio`` is the input rate divided by the output rate.
    """

    def __init__(self, stages: Iterable[Stage], io_ratio: float) -> None:
        if io_ratio <= 0:
            raise ValueError("resampling factor not positive")
        self.stages = list(stages)
        self.io_ratio = io_ratio
        self.samples_in = 0
        self.samples_out = 0
        self.flushing = False
        self._output_fifo = Fifo()
        if self.stages:
            self.stages[0].is_input = True

    def _input_fifo(self) -> Fifo:
        return self.stages[0].fifo if self.stages else self._output_fifo

    def _fifo_after(self, index: int) -> Fifo:
        if index + 1 < len(self.stages):
            return self.stages[index + 1].fifo
        return self._output_fifo

    def _limit(self, n: int) -> int:
        return min(-self.samples_out, n) if self.flushing else n

    def _stage_process(self, index: int) -> bool:
        stage = self.stages[index]
        fifo = stage.fifo
        done = False
        while not done and stage.input_size - len(fifo) > 0:
            want = stage.input_size - len(fifo)
            if stage.is_input:
                if self.flushing:
                    fifo.reserve(want)
                else:
                    done = True
            else:
                done = self._stage_process(index - 1)
        stage.run(self._fifo_after(index))
        return done and len(fifo) < stage.input_size

    def input(self, samples: Iterable[float]) -> None:
        """Queue input samples."""
        if self.flushing:
            raise RuntimeError("cannot accept input after flushing has begun")
        values = list(samples)
        self.samples_in += len(values)
        self._input_fifo().write(values)

    def process(self, olen: int) -> None:
        """Run the stages until ``olen`` output samples are ready or input runs out."""
        n = self._limit(olen)
        done = False
        while not done and len(self._output_fifo) < n:
            done = not self.stages or self._stage_process(len(self.stages) - 1)

    def output(self, n: int) -> list[float]:
        """Remove and return up to ``n`` output samples."""
        n = max(0, min(self._limit(n), len(self._output_fifo)))
        self.samples_out += n
        return self._output_fifo.read(n)

    def flush(self) -> None:
        """Mark the end of input; later processing pads with zeros as needed."""
        if self.flushing:
            return
        self.samples_out -= int(self.samples_in / self.io_ratio + .5)
        self.samples_in = 0
        self.flushing = True

    def delay(self) -> float:
        """Output samples owed for the input received so far."""
        return self.samples_in / self.io_ratio - self.samples_out


def check_quality(
    io_ratio: float,
    precision: float,
    passband_end: float,
    stopband_begin: float,
    phase_response: float,
) -> None:
    """Raise ``ValueError`` if the conversion parameters are out of range.

    Band edges are relative to the Nyquist frequency; a precision of zero
    selects the quick cubic interpolator and is always accepted.
    """
    fp0, fs0 = passband_end, stopband_begin
    tbw0 = fs0 - fp0
    if io_ratio < 1 and fs0 - 1 > 1 - fp0 / _TOLERANCE:
        raise ValueError("imaging greater than rolloff")
    if .002 / _TOLERANCE > tbw0 or tbw0 > .5 * _TOLERANCE:
        raise ValueError("transition bandwidth not in [0.2,50] % of nyquist")
    if .5 / _TOLERANCE > fp0 or fs0 > 1.5 * _TOLERANCE:
        raise ValueError("transition band not within [50,150] % of nyquist")
    if precision != 0 and (15 > precision or precision > 33):
        raise ValueError("precision not in [15,33] bits")
    if io_ratio <= 0:
        raise ValueError("resampling factor not positive")
    if 0 > phase_response or phase_response > 100:
        raise ValueError("phase response not in [0=min-phase,100=max-phase] %")