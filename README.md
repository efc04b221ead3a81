# sincresample

Pure-Python building blocks for band-limited sample-rate conversion.
The package uses only the standard library.

## Modules

- `sincresample.fft4g`: in-place complex and real DFTs on power-of-two
  lengths (`cdft`, `rdft`). Twiddle tables live in `FftTables` and can be
  reused between calls.
- `sincresample.dct`: cosine and sine transforms (`ddct`, `ddst`, `dfct`,
  `dfst`).
- `sincresample.rdft`: real and complex DFTs that share one lock-protected
  set of tables (`safe_rdft`, `safe_cdft`, `clear_fft_cache`). It also
  multiplies spectra in packed order (`ordered_convolve`,
  `ordered_partial_convolve`).
- `sincresample.bessel`: the modified Bessel function `bessel_i0`.
- `sincresample.filters`: Kaiser-windowed low-pass design (`kaiser_beta`,
  `kaiser_params`, `make_lpf`, `design_lpf`) and conversion of a
  linear-phase FIR to minimum, intermediate or maximum phase
  (`fir_to_phase`). It also has transition-band response models
  (`f_resp`, `inv_f_resp`, `to_3db`) and `linear_to_db`.
- `sincresample.fifo`: `Fifo`, the sample queue that links stages.
- `sincresample.data_io`: sample formats (`DataType`), interleaving and
  de-interleaving (`interleave`, `deinterleave`), and rounding half away
  from zero (`rint16`, `rint32`). `rint_clip` rounds with clipping and
  optional dither.
- `sincresample.halfband`: decimation by two with stored half-band FIRs
  (`half_band_coefs`, `half_band_decimate`). The available filter sizes
  are in `HALF_BAND_LENGTHS`.
- `sincresample.polyphase`: poly-phase FIR kernels. `poly_fir0` resamples
  by a rational factor. `poly_fir` uses coefficient interpolation and a
  32-bit fixed-point clock. `prepare_poly_fir_coefs` builds the
  coefficient table.
- `sincresample.dft_stage`: fast-convolution filter stages (`DftFilter`,
  `design_dft_filter`, `set_dft_length`, `DftStage`).
- `sincresample.pipeline`: chained stages (`Stage`, `Rate`) with flushing
  and delay accounting. `check_quality` validates conversion parameters.

## Installing

```
pip install .
```

## Examples

Design a low-pass filter with its passband ending at 0.45 of Nyquist, its
stopband starting at 0.5, and 120 dB of stop-band attenuation. Then take
its spectrum:

```python
from sincresample.filters import design_lpf
from sincresample.rdft import safe_rdft

taps, num_taps = design_lpf(0.45, 0.5, 1.0, 120.0, 0, -4, -1.0)

size = 1
while size < 2 * num_taps:
    size <<= 1
spectrum = list(taps) + [0.0] * (size - num_taps)
safe_rdft(spectrum, 1)
```

Convert 16-bit interleaved stereo to separate float channels and back.
`interleave` returns the samples, the number that were clipped, and the
dither seed. Dither is applied only when a seed is given.

```python
from sincresample.data_io import DataType, deinterleave, interleave

left, right = deinterleave(DataType.INT16, [100, -100, 200, -200], 2)
samples, clips, seed = interleave(DataType.INT16, [left, right], None)
```

Decimate by two with a half-band filter. The input needs
`2 * len(coefs)` samples of history before it and as many of look-ahead
after it:

```python
from sincresample.halfband import half_band_coefs, half_band_decimate

coefs = half_band_coefs(8)
pad = [0.0] * (2 * len(coefs))
halved = half_band_decimate(pad + [1.0] * 64 + pad, coefs)
```

Pull samples through a pipeline. The base `Stage` passes samples through
unchanged:

```python
from sincresample.pipeline import Rate, Stage

rate = Rate([Stage()], 1.0)
rate.input([0.1, 0.2, 0.3])
rate.process(3)
print(rate.output(3))  # [0.1, 0.2, 0.3]
```

## What it does not do

The package supplies the parts of a resampler. It has no single object
that takes input and output rates plus a quality setting and then plans
and builds the full chain of half-band, DFT and poly-phase stages. The
caller builds that chain from the stages above. There is no quick cubic
interpolation stage, no command-line tool, and no reading or writing of
audio files.

## Running the tests

```
pip install .[test]
pytest
```