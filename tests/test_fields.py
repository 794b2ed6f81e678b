import pytest

from curvefft.fields import (
    BLS12_381_FQ,
    BLS12_381_FR,
    FieldElement,
    PrimeField,
    QuadraticExtensionField,
    gpu_name,
    pow_vartime,
    u64_to_u32,
)

F97 = PrimeField("F97", 97, 5)


def _from_u32(limbs):
    return sum(limb << (32 * i) for i, limb in enumerate(limbs))


def _from_u64(limbs):
    return sum(limb << (64 * i) for i, limb in enumerate(limbs))


def test_u64_to_u32_preserves_value():
    limbs = [0xDEADBEEF01234567, 0, (1 << 64) - 1]
    out = u64_to_u32(limbs)
    assert len(out) == 2 * len(limbs)
    assert all(0 <= limb < (1 << 32) for limb in out)
    assert _from_u32(out) == _from_u64(limbs)


def test_u64_to_u32_rejects_wide_limb():
    with pytest.raises(ValueError):
        u64_to_u32([1 << 64])


def test_gpu_name_prefixed_type():
    assert gpu_name("my_crate", "my_crate::Fp") == "my_crate__Fp"


def test_gpu_name_foreign_type():
    name = gpu_name("a::b", "other::Fp<T>")
    assert name.startswith("a__b__")
    assert all(c.isascii() and (c.isalnum() or c == "_") for c in name)


def test_arithmetic_round_trips():
    a, b = F97(40), F97(83)
    assert a + b - b == a
    assert a * b * b.inverse() == a
    assert -a + a == F97.zero()
    assert a.square() == a * a
    assert F97(F97.modulus + 11) == F97(11)


def test_zero_has_no_inverse():
    with pytest.raises(ZeroDivisionError):
        F97.zero().inverse()


def test_mixed_fields_rejected():
    other = PrimeField("F101", 101, 2)
    with pytest.raises(ValueError):
        F97(3) + other(3)


def test_equal_elements_hash_equal():
    assert hash(F97(10)) == hash(F97(10 + F97.modulus))
    assert {F97(10), F97(10 + F97.modulus)} == {F97(10)}


def test_pow_vartime_fermat():
    for value in range(1, F97.modulus):
        assert pow_vartime(F97(value), F97.modulus - 1) == F97.one()


def test_pow_vartime_limbs_match_int():
    a = F97(17)
    assert pow_vartime(a, [5, 1]) == pow_vartime(a, 5 + (1 << 64))
    assert pow_vartime(a, 0) == F97.one()


def test_pow_vartime_rejects_negative():
    with pytest.raises(ValueError):
        pow_vartime(F97(2), -1)


def test_from_bigint_round_trip():
    assert F97.from_bigint(42).to_bigint() == 42
    with pytest.raises(ValueError):
        F97.from_bigint(F97.modulus)


def test_root_of_unity_order():
    w = F97.root_of_unity(8)
    assert pow_vartime(w, 8) == F97.one()
    assert pow_vartime(w, 4) == -F97.one()


def test_root_of_unity_errors():
    with pytest.raises(ValueError):
        F97.root_of_unity(6)
    with pytest.raises(ValueError):
        F97.root_of_unity(1 << (F97.two_adicity() + 1))


def test_bls12_381_fr_two_adicity():
    assert BLS12_381_FR.two_adicity() == 32
    root = BLS12_381_FR.two_adic_root_of_unity()
    assert pow_vartime(root, 1 << 32) == BLS12_381_FR.one()
    assert pow_vartime(root, 1 << 31) == -BLS12_381_FR.one()


@pytest.mark.parametrize("field", [F97, BLS12_381_FR, BLS12_381_FQ])
def test_gpu_limbs(field):
    modulus = field.gpu_modulus()
    assert len(modulus) == 2 * field.limb_count()
    assert _from_u32(modulus) == field.modulus
    r = _from_u32(field.gpu_one())
    assert r < field.modulus
    assert (r - (1 << (32 * len(modulus)))) % field.modulus == 0
    assert _from_u32(field.gpu_r2()) == r * r % field.modulus
    assert field.sub_field_name() is None


def test_extension_field_uses_base():
    fq2 = QuadraticExtensionField("Fq2", BLS12_381_FQ)
    assert fq2.gpu_one() == BLS12_381_FQ.gpu_one()
    assert fq2.gpu_r2() == BLS12_381_FQ.gpu_r2()
    assert fq2.gpu_modulus() == BLS12_381_FQ.gpu_modulus()
    assert fq2.sub_field_name() == BLS12_381_FQ.name


def test_field_element_type():
    element = F97(3)
    assert isinstance(element, FieldElement) and element.field is F97