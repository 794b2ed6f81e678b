"""Fast Fourier Transform over curve points, on the CPU."""

from __future__ import annotations

from .fft_cpu import _check_length, _parallel, _serial


def serial_ec_fft(points, omega, log_n):
    """Transform curve points in place on a single thread.

    ``points`` must hold exactly 2^log_n projective points and ``omega`` must
    belong to the curve's scalar field.
    """
    _serial(points, omega, log_n)


def parallel_ec_fft(points, worker, omega, log_n, log_threads):
    """Transform curve points in place using 2^log_threads threads.

    ``log_n`` must be at least ``log_threads``.
    """
    if log_n < log_threads:
        raise ValueError("log_n must not be smaller than log_threads")
    _check_length(points, log_n)
    zero = points[0].curve.zero()
    _parallel(points, worker, omega, log_n, log_threads, zero)