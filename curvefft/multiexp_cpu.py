"""Multi-exponentiation over curve points, on the CPU."""

from __future__ import annotations

import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .errors import EcError

_log = logging.getLogger(__name__)

_EOF_MESSAGE = "Expected more bases from source."
_IDENTITY_MESSAGE = "Encountered an identity element in the CRS."


@dataclass(frozen=True)
class BaseSource:
    """A sequence of affine bases, read from position ``skip`` onwards."""

    bases: Sequence
    skip: int = 0

    def get(self):
        """The bases and the offset of the first one to use."""
        return self.bases, self.skip

    def cursor(self):
        """A fresh cursor positioned at the first base to use."""
        return BaseCursor(self.bases, self.skip)


class BaseCursor:
    """Walks through bases one at a time, like an iterator."""

    def __init__(self, bases, position=0):
        self.bases = bases
        self.position = position

    def _ensure_more(self):
        if len(self.bases) <= self.position:
            raise EcError(_EOF_MESSAGE) from EOFError(_EOF_MESSAGE)

    def add_assign_mixed(self, acc):
        """Return ``acc`` plus the current base and advance.

        Fails if the bases are exhausted or the base is the point at infinity.
        """
        self._ensure_more()
        base = self.bases[self.position]
        if base.is_identity():
            raise EcError(_IDENTITY_MESSAGE)
        self.position += 1
        return acc + base

    def skip(self, amount):
        """Advance by ``amount`` bases without using them."""
        self._ensure_more()
        self.position += amount


@dataclass(frozen=True)
class FullDensity:
    """A density map in which every base is present.

    Its size is unknown unless one is given.
    """

    size: Optional[int] = None

    def __iter__(self):
        if self.size is None:
            return itertools.repeat(True)
        return itertools.repeat(True, self.size)

    def query_size(self):
        """The number of elements covered, or None when unbounded."""
        return self.size

    def generate_exps(self, exponents):
        """All exponents, since every base is in use."""
        return list(exponents)


@dataclass
class DensityTracker:
    """Tracks which of a growing list of bases are in use."""

    bits: list = field(default_factory=list)
    total_density: int = 0

    def add_element(self):
        self.bits.append(False)

    def inc(self, idx):
        """Mark the element at ``idx`` as used."""
        if not self.bits[idx]:
            self.bits[idx] = True
            self.total_density += 1

    def extend(self, other, is_input_density):
        """Append ``other``.

        For an input density the first element of ``other`` stands for the
        same ``One`` input as the first element of ``self`` and is merged
        into it.
        """
        if not other.bits:
            return

        if not self.bits:
            self.bits = list(other.bits)
            self.total_density = other.total_density
            return

        if is_input_density:
            if other.bits[0]:
                if self.bits[0]:
                    self.total_density -= 1
                else:
                    self.bits[0] = True
            self.bits.extend(other.bits[1:])
        else:
            self.bits.extend(other.bits)

        self.total_density += other.total_density

    def __iter__(self):
        return iter(self.bits)

    def query_size(self):
        return len(self.bits)

    def generate_exps(self, exponents):
        """The exponents whose bases are in use."""
        return [exp for exp, dense in zip(exponents, self.bits) if dense]


def shr(le_bytes, n):
    """Shift a little-endian byte string right by ``n`` bits.

    The result has the same length as the input.
    """
    length = len(le_bytes)
    if n >= 8 * length:
        return bytes(length)
    value = int.from_bytes(bytes(le_bytes), "little") >> n
    return value.to_bytes(length, "little")


def _window_count(count):
    if count < 32:
        return 3
    return math.ceil(math.log(count))


def _multiexp_inner(source, density_map, exponents, c):
    bases, _ = source.get()
    if not bases:
        raise EcError(_EOF_MESSAGE)
    curve = bases[0].curve
    bit_size = curve.scalar_field.modulus.bit_length()
    window_mask = (1 << c) - 1

    def region(skip):
        acc = curve.zero()
        cursor = source.cursor()
        buckets = [curve.zero()] * window_mask
        handle_trivial = skip == 0

        for exp, dense in zip(exponents, density_map):
            if not dense:
                continue
            if exp == 0:
                cursor.skip(1)
            elif exp == 1:
                if handle_trivial:
                    acc = cursor.add_assign_mixed(acc)
                else:
                    cursor.skip(1)
            else:
                window = (exp >> skip) & window_mask
                if window:
                    buckets[window - 1] = cursor.add_assign_mixed(
                        buckets[window - 1]
                    )
                else:
                    cursor.skip(1)

        # Summation by parts: 3a + 2b + c = a + (a + b) + (a + b + c).
        running = curve.zero()
        for bucket in reversed(buckets):
            running = running + bucket
            acc = acc + running
        return acc

    parts = [region(skip) for skip in range(0, bit_size, c)]

    acc = curve.zero()
    for part in reversed(parts):
        for _ in range(c):
            acc = acc.double()
        acc = acc + part
    return acc


def multiexp_cpu(pool, bases, density_map, exponents):
    """Start a multi-exponentiation on ``pool`` and return a Waiter.

    ``bases`` is a BaseSource (or a ``(bases, skip)`` pair), ``density_map``
    a FullDensity or DensityTracker, and ``exponents`` the canonical integer
    forms of the scalars. If the density map has a known size it must equal
    the number of exponents.
    """
    if not isinstance(bases, BaseSource):
        bases = BaseSource(*bases)
    exps = [int(exp) for exp in exponents]
    c = _window_count(len(exps))
    _log.debug("multiexp over %d exponents with window %d", len(exps), c)

    query_size = density_map.query_size()
    if query_size is not None and query_size != len(exps):
        raise ValueError(
            f"density map covers {query_size} elements, "
            f"but {len(exps)} exponents were given"
        )

    return pool.compute(lambda: _multiexp_inner(bases, density_map, exps, c))