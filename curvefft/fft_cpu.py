"""Radix-2 Fast Fourier Transform over a prime field, on the CPU."""

from __future__ import annotations

from .fields import pow_vartime


def _bitreverse(n, bits):
    result = 0
    for _ in range(bits):
        result = (result << 1) | (n & 1)
        n >>= 1
    return result


def _check_length(values, log_n):
    if len(values) != 1 << log_n:
        raise ValueError(
            f"expected {1 << log_n} elements for log_n={log_n}, got {len(values)}"
        )


def _serial(values, omega, log_n):
    """In-place iterative Cooley-Tukey transform.

    Works for any values that support ``+``, ``-`` and multiplication by an
    element of ``omega``'s field.
    """
    _check_length(values, log_n)
    n = len(values)

    for k in range(n):
        rk = _bitreverse(k, log_n)
        if k < rk:
            values[k], values[rk] = values[rk], values[k]

    one = omega.field.one()
    m = 1
    for _ in range(log_n):
        w_m = pow_vartime(omega, n // (2 * m))
        for k in range(0, n, 2 * m):
            w = one
            for j in range(m):
                t = values[k + j + m] * w
                values[k + j + m] = values[k + j] - t
                values[k + j] = values[k + j] + t
                w = w * w_m
        m *= 2


def _parallel(values, worker, omega, log_n, log_threads, zero):
    """In-place transform split into 2^log_threads sub-transforms."""
    if log_n < log_threads:
        raise ValueError("log_n must not be smaller than log_threads")
    _check_length(values, log_n)

    thread_count = 1 << log_threads
    log_new_n = log_n - log_threads
    size = 1 << log_n
    parts = [[zero] * (1 << log_new_n) for _ in range(thread_count)]
    new_omega = pow_vartime(omega, thread_count)
    one = omega.field.one()

    def shuffle(j, part):
        omega_j = pow_vartime(omega, j)
        omega_step = pow_vartime(omega, j << log_new_n)
        elt = one
        for i in range(len(part)):
            acc = part[i]
            for s in range(thread_count):
                idx = (i + (s << log_new_n)) % size
                acc = acc + values[idx] * elt
                elt = elt * omega_step
            part[i] = acc
            elt = elt * omega_j
        _serial(part, new_omega, log_new_n)

    def run_shuffles(scope, _chunk):
        for j, part in enumerate(parts):
            scope.execute(shuffle, j, part)

    worker.scope(0, run_shuffles)

    mask = thread_count - 1

    def gather(start, stop):
        for idx in range(start, stop):
            values[idx] = parts[idx & mask][idx >> log_threads]

    def run_gathers(scope, chunk):
        for start in range(0, len(values), chunk):
            scope.execute(gather, start, min(start + chunk, len(values)))

    worker.scope(len(values), run_gathers)


def serial_fft(values, omega, log_n):
    """Transform ``values`` in place on a single thread.

    ``values`` must hold exactly 2^log_n field elements.
    """
    _serial(values, omega, log_n)


def parallel_fft(values, worker, omega, log_n, log_threads):
    """Transform ``values`` in place using 2^log_threads threads.

    ``log_n`` must be at least ``log_threads``.
    """
    _parallel(values, worker, omega, log_n, log_threads, omega.field.zero())