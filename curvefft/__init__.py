"""Prime fields, curves, FFTs and multi-exponentiation computed on the CPU."""

__version__ = "0.1.0"
__all__ = [
    "curve",
    "ec_fft_cpu",
    "errors",
    "fft_cpu",
    "fields",
    "multiexp_cpu",
    "threadpool",
]