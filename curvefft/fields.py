"""Prime fields, their elements and the limb layouts used by GPU kernels."""

from __future__ import annotations

_U32_MASK = (1 << 32) - 1
_U64_MASK = (1 << 64) - 1


def u64_to_u32(limbs):
    """Split 64-bit limbs into 32-bit limbs, least significant first."""
    out = []
    for limb in limbs:
        if not 0 <= limb <= _U64_MASK:
            raise ValueError(f"limb out of 64-bit range: {limb}")
        out.extend((limb & _U32_MASK, limb >> 32))
    return out


def _to_u64_limbs(value, count):
    return [(value >> (64 * i)) & _U64_MASK for i in range(count)]


def gpu_name(module_path, type_name):
    """Build an identifier from a module path and a type name.

    Every character that is not an ASCII letter or digit becomes ``_``.
    """
    if type_name.startswith(module_path):
        name = type_name
    else:
        name = f"{module_path}__{type_name}"
    return "".join(c if c.isascii() and c.isalnum() else "_" for c in name)


def _exponent_value(exponent):
    if isinstance(exponent, int):
        if exponent < 0:
            raise ValueError("exponent must not be negative")
        return exponent
    value = 0
    for index, limb in enumerate(exponent):
        if not 0 <= limb <= _U64_MASK:
            raise ValueError(f"limb out of 64-bit range: {limb}")
        value |= limb << (64 * index)
    return value


def pow_vartime(base, exponent):
    """Raise a field element to a power by square and multiply.

    The exponent is an int or a sequence of 64-bit limbs, least significant
    first.
    """
    e = _exponent_value(exponent)
    result = base.field.one()
    for bit in bin(e)[2:]:
        result = result.square()
        if bit == "1":
            result = result * base
    return result


class FieldElement:
    """An element of a prime field."""

    __slots__ = ("field", "value")

    def __init__(self, field, value):
        self.field = field
        self.value = value % field.modulus

    def _coerce(self, other):
        if isinstance(other, FieldElement):
            if other.field is not self.field:
                raise ValueError("elements belong to different fields")
            return other.value
        if isinstance(other, int):
            return other
        return NotImplemented

    def _make(self, value):
        return FieldElement(self.field, value)

    def __add__(self, other):
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(self.value + value)

    __radd__ = __add__

    def __sub__(self, other):
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(self.value - value)

    def __rsub__(self, other):
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(value - self.value)

    def __mul__(self, other):
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self._make(self.value * value)

    __rmul__ = __mul__

    def __truediv__(self, other):
        value = self._coerce(other)
        if value is NotImplemented:
            return NotImplemented
        return self * self._make(value).inverse()

    def __neg__(self):
        return self._make(-self.value)

    def __pow__(self, exponent):
        if exponent < 0:
            return self.inverse() ** (-exponent)
        return self._make(pow(self.value, exponent, self.field.modulus))

    def __eq__(self, other):
        if not isinstance(other, FieldElement):
            return NotImplemented
        return self.field is other.field and self.value == other.value

    def __hash__(self):
        return hash((id(self.field), self.value))

    def __bool__(self):
        return self.value != 0

    def __int__(self):
        return self.value

    def __repr__(self):
        return f"{self.field.name}({self.value:#x})"

    def is_zero(self):
        return self.value == 0

    def square(self):
        return self._make(self.value * self.value)

    def inverse(self):
        """Return the multiplicative inverse; zero has none."""
        if self.value == 0:
            raise ZeroDivisionError("zero has no inverse")
        return self._make(pow(self.value, -1, self.field.modulus))

    def to_bigint(self):
        return self.value


class PrimeField:
    """A prime field with the data GPU kernels need to describe it."""

    def __init__(self, name, modulus, generator):
        if modulus < 3 or modulus % 2 == 0:
            raise ValueError("modulus must be an odd prime")
        self.name = name
        self.modulus = modulus
        # A prime field is not built over another field.
        self.subfield = None
        self.generator = FieldElement(self, generator)
        if self.generator.is_zero():
            raise ValueError("generator must not be zero")

    def __repr__(self):
        return f"PrimeField({self.name!r}, {self.modulus:#x})"

    def __call__(self, value):
        if isinstance(value, FieldElement):
            if value.field is not self:
                raise ValueError("element belongs to a different field")
            return value
        return FieldElement(self, value)

    def zero(self):
        return FieldElement(self, 0)

    def one(self):
        return FieldElement(self, 1)

    def limb_count(self):
        """Number of 64-bit limbs that hold the modulus."""
        return max(1, -(-self.modulus.bit_length() // 64))

    def two_adicity(self):
        """The largest s such that 2^s divides modulus - 1."""
        m = self.modulus - 1
        return (m & -m).bit_length() - 1

    def two_adic_root_of_unity(self):
        """A primitive 2^two_adicity root of unity."""
        return pow_vartime(
            self.generator, (self.modulus - 1) >> self.two_adicity()
        )

    def root_of_unity(self, n):
        """A primitive n-th root of unity, n a power of two."""
        if n <= 0 or n & (n - 1):
            raise ValueError(f"{n} is not a power of two")
        log_n = n.bit_length() - 1
        adicity = self.two_adicity()
        if log_n > adicity:
            raise ValueError(f"no root of unity of order {n} in {self.name}")
        return pow_vartime(self.two_adic_root_of_unity(), 1 << (adicity - log_n))

    def from_bigint(self, value):
        """Build an element from its canonical integer form."""
        if not 0 <= value < self.modulus:
            raise ValueError("value is not a canonical field element")
        return FieldElement(self, value)

    def _montgomery_r(self):
        return (1 << (64 * self.limb_count())) % self.modulus

    def _gpu_limbs(self, value):
        return u64_to_u32(_to_u64_limbs(value, self.limb_count()))

    def gpu_one(self):
        """R mod p as 32-bit limbs, least significant first."""
        return self._gpu_limbs(self._montgomery_r())

    def gpu_r2(self):
        """R^2 mod p as 32-bit limbs, least significant first."""
        r = self._montgomery_r()
        return self._gpu_limbs(r * r % self.modulus)

    def gpu_modulus(self):
        """The modulus as 32-bit limbs, least significant first."""
        return self._gpu_limbs(self.modulus)

    def sub_field_name(self):
        """The name of the field this one extends; None for a prime field."""
        if self.subfield is None:
            return None
        return self.subfield.name


class QuadraticExtensionField:
    """A degree-two extension, described to GPU kernels through its base."""

    def __init__(self, name, base):
        self.name = name
        self.base = base

    def __repr__(self):
        return f"QuadraticExtensionField({self.name!r}, {self.base.name!r})"

    def gpu_one(self):
        return self.base.gpu_one()

    def gpu_r2(self):
        return self.base.gpu_r2()

    def gpu_modulus(self):
        return self.base.gpu_modulus()

    def sub_field_name(self):
        return self.base.name


BLS12_381_FR = PrimeField(
    "BLS12_381_Fr",
    0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001,
    7,
)

BLS12_381_FQ = PrimeField(
    "BLS12_381_Fq",
    int(
        "1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f624"
        "1eabfffeb153ffffb9feffffffffaaab",
        16,
    ),
    2,
)