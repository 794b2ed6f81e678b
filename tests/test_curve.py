import pytest

from curvefft.curve import AffinePoint, ProjectivePoint, ShortWeierstrassCurve
from curvefft.fields import PrimeField

F97 = PrimeField("F97", 97, 5)
SCALARS = PrimeField("F101", 101, 2)
CURVE = ShortWeierstrassCurve("toy", 2, 3, F97, SCALARS)

POINTS = [
    CURVE.point(x, y)
    for x in range(F97.modulus)
    for y in range(F97.modulus)
    if CURVE.is_on_curve(x, y)
]
GROUP_ORDER = len(POINTS) + 1


def test_points_exist():
    assert len(POINTS) > 4
    assert all(isinstance(p, AffinePoint) for p in POINTS)


def test_point_off_curve_rejected():
    bad = next(
        (x, y) for x in range(5) for y in range(5) if not CURVE.is_on_curve(x, y)
    )
    with pytest.raises(ValueError):
        CURVE.point(*bad)


def test_singular_curve_rejected():
    with pytest.raises(ValueError):
        ShortWeierstrassCurve("bad", 0, 0, F97, SCALARS)


def test_generator_point():
    p = POINTS[0]
    curve = ShortWeierstrassCurve("g", 2, 3, F97, SCALARS, (p.x.value, p.y.value))
    g = curve.generator_point()
    assert (g.x, g.y) == (p.x, p.y)
    with pytest.raises(ValueError):
        CURVE.generator_point()


def test_identity_behaviour():
    zero = CURVE.zero()
    p = POINTS[1].to_projective()
    assert zero.is_identity()
    assert CURVE.identity().is_identity()
    assert p + zero == p
    assert (p - p).is_identity()
    assert (p + (-p)).is_identity()


def test_gpu_repr():
    p = POINTS[2]
    assert p.to_gpu_repr() == (p.x, p.y)
    assert CURVE.identity().to_gpu_repr() == (F97.zero(), F97.zero())


def test_affine_round_trip():
    for p in POINTS[:20]:
        assert p.to_projective().to_affine() == p
    assert CURVE.zero().to_affine() == CURVE.identity()


def test_group_laws():
    a, b, c = (p.to_projective() for p in POINTS[3:6])
    assert a + b == b + a
    assert (a + b) + c == a + (b + c)
    assert a.double() == a + a
    assert a * 3 == a + a + a


def test_sum_stays_on_curve():
    for p in POINTS[:15]:
        for q in POINTS[15:25]:
            r = (p.to_projective() + q).to_affine()
            assert r.is_identity() or CURVE.is_on_curve(r.x, r.y)


def test_mixed_addition():
    p, q = POINTS[6], POINTS[7]
    assert p.to_projective() + q == q + p.to_projective()
    assert q + p.to_projective() == p.to_projective() + q.to_projective()


def test_group_order_annihilates():
    for p in POINTS[::7]:
        assert (p * GROUP_ORDER).is_identity()


def test_scalar_distributes():
    p = POINTS[8].to_projective()
    for k1, k2 in [(2, 5), (11, 30), (0, 7)]:
        assert p * k1 + p * k2 == p * (k1 + k2)
    assert p * -4 == -(p * 4)


def test_field_scalar_matches_int():
    p = POINTS[9]
    assert p * SCALARS(13) == p * 13
    with pytest.raises(ValueError):
        p * F97(13)


def test_equal_points_hash_equal():
    p = POINTS[10].to_projective()
    left = p.double() + p
    right = p + p.double()
    assert left == right
    assert hash(left) == hash(right)
    assert isinstance(left, ProjectivePoint)


def test_points_of_different_curves_rejected():
    other = ShortWeierstrassCurve("other", 2, 3, F97, SCALARS)
    with pytest.raises(ValueError):
        POINTS[0].to_projective() + other.zero()