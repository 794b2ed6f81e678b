"""Short Weierstrass curves with affine and Jacobian points."""

from __future__ import annotations

from dataclasses import dataclass

from .fields import FieldElement


class ShortWeierstrassCurve:
    """The curve y^2 = x^3 + a*x + b over a prime field."""

    def __init__(self, name, a, b, base_field, scalar_field, generator=None):
        self.name = name
        self.base_field = base_field
        self.scalar_field = scalar_field
        self.a = base_field(a)
        self.b = base_field(b)
        discriminant = 4 * self.a.square() * self.a + 27 * self.b.square()
        if discriminant.is_zero():
            raise ValueError("the curve is singular")
        self._generator = None if generator is None else self.point(*generator)

    def __repr__(self):
        return f"ShortWeierstrassCurve({self.name!r})"

    def is_on_curve(self, x, y):
        x = self.base_field(x)
        y = self.base_field(y)
        return y.square() == x.square() * x + self.a * x + self.b

    def point(self, x, y):
        """An affine point; raises ValueError when it is not on the curve."""
        if not self.is_on_curve(x, y):
            raise ValueError("point is not on the curve")
        return AffinePoint(self, self.base_field(x), self.base_field(y))

    def identity(self):
        zero = self.base_field.zero()
        return AffinePoint(self, zero, zero, True)

    def zero(self):
        one = self.base_field.one()
        return ProjectivePoint(self, one, one, self.base_field.zero())

    def generator_point(self):
        if self._generator is None:
            raise ValueError(f"curve {self.name} has no generator")
        return self._generator


def _scalar_value(curve, scalar):
    if isinstance(scalar, FieldElement):
        if scalar.field is not curve.scalar_field:
            raise ValueError("scalar belongs to a different field")
        return scalar.value
    if isinstance(scalar, int):
        return scalar
    return NotImplemented


@dataclass(frozen=True)
class AffinePoint:
    """A point in affine coordinates, or the point at infinity."""

    curve: ShortWeierstrassCurve
    x: FieldElement
    y: FieldElement
    infinity: bool = False

    def is_identity(self):
        return self.infinity

    def to_gpu_repr(self):
        """The coordinates as a pair; the identity becomes two zeros."""
        if self.infinity:
            zero = self.curve.base_field.zero()
            return (zero, zero)
        return (self.x, self.y)

    def to_projective(self):
        if self.infinity:
            return self.curve.zero()
        return ProjectivePoint(
            self.curve, self.x, self.y, self.curve.base_field.one()
        )

    def __neg__(self):
        if self.infinity:
            return self
        return AffinePoint(self.curve, self.x, -self.y)

    def __mul__(self, scalar):
        return self.to_projective() * scalar


@dataclass(frozen=True, eq=False)
class ProjectivePoint:
    """A point in Jacobian coordinates; z == 0 is the identity."""

    curve: ShortWeierstrassCurve
    x: FieldElement
    y: FieldElement
    z: FieldElement

    def _coerce(self, other):
        if isinstance(other, AffinePoint):
            other = other.to_projective()
        elif not isinstance(other, ProjectivePoint):
            return NotImplemented
        if other.curve is not self.curve:
            raise ValueError("points belong to different curves")
        return other

    def is_identity(self):
        return self.z.is_zero()

    def double(self):
        if self.is_identity() or self.y.is_zero():
            return self.curve.zero()
        xx = self.x.square()
        yy = self.y.square()
        yyyy = yy.square()
        zz = self.z.square()
        s = 4 * self.x * yy
        m = 3 * xx
        if not self.curve.a.is_zero():
            m = m + self.curve.a * zz.square()
        x3 = m.square() - 2 * s
        y3 = m * (s - x3) - 8 * yyyy
        z3 = 2 * self.y * self.z
        return ProjectivePoint(self.curve, x3, y3, z3)

    def __add__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self.is_identity():
            return other
        if other.is_identity():
            return self
        z1z1 = self.z.square()
        z2z2 = other.z.square()
        u1 = self.x * z2z2
        u2 = other.x * z1z1
        s1 = self.y * other.z * z2z2
        s2 = other.y * self.z * z1z1
        h = u2 - u1
        r = s2 - s1
        if h.is_zero():
            return self.double() if r.is_zero() else self.curve.zero()
        hh = h.square()
        hhh = hh * h
        v = u1 * hh
        x3 = r.square() - hhh - 2 * v
        y3 = r * (v - x3) - s1 * hhh
        z3 = self.z * other.z * h
        return ProjectivePoint(self.curve, x3, y3, z3)

    __radd__ = __add__

    def __neg__(self):
        return ProjectivePoint(self.curve, self.x, -self.y, self.z)

    def __sub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other + (-self)

    def __mul__(self, scalar):
        k = _scalar_value(self.curve, scalar)
        if k is NotImplemented:
            return NotImplemented
        if k < 0:
            return (-self) * (-k)
        result = self.curve.zero()
        for bit in bin(k)[2:]:
            result = result.double()
            if bit == "1":
                result = result + self
        return result

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, ProjectivePoint):
            return NotImplemented
        if other.curve is not self.curve:
            return False
        if self.is_identity() or other.is_identity():
            return self.is_identity() and other.is_identity()
        z1z1 = self.z.square()
        z2z2 = other.z.square()
        return (
            self.x * z2z2 == other.x * z1z1
            and self.y * z2z2 * other.z == other.y * z1z1 * self.z
        )

    def __hash__(self):
        return hash(self.to_affine())

    def to_affine(self):
        if self.is_identity():
            return self.curve.identity()
        z_inv = self.z.inverse()
        z_inv2 = z_inv.square()
        return AffinePoint(self.curve, self.x * z_inv2, self.y * z_inv2 * z_inv)