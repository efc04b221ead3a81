"""Band-limited sample-rate conversion: FFTs, filter design, sample I/O and resampling stages."""

__version__ = "0.1.0"

__all__ = [
    "bessel",
    "data_io",
    "dct",
    "dft_stage",
    "fft4g",
    "fifo",
    "filters",
    "halfband",
    "pipeline",
    "polyphase",
    "rdft",
]