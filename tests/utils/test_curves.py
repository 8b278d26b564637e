# tests/utils/test_curves.py
import pytest
from py_ecc.bls.point_compression import compress_G1
from py_ecc.optimized_bls12_381 import G1, G2, add, curve_order, multiply, neg, normalize

from bbscred.errors import InvalidInfinityError, InvalidLengthError, InvalidPointError, InvalidScalarError
from bbscred.utils.curves import G1Point, G2Point, _ProjectivePoint, precompute
from bbscred.utils.fields import P, R, Fp, Fp2
from bbscred.utils.interop import (
    g1_from_py_ecc,
    g1_to_py_ecc,
    g2_compress_py_ecc,
    g2_from_py_ecc,
    g2_to_py_ecc,
)

G1_GENERATOR_HEX = (
    "97f1d3a73197d7942695638c4fa9ac0fc3688c4f9774b905a14e3a3f171bac586c55e83ff97a1aeffb3af00adb22c6bb"
)
SCALARS = [1, 2, 7, 0xdeadbeefcafebabe, R - 1, 2 ** 200 + 12345]


@pytest.fixture(scope="module")
def g1():
    return G1Point.generator()


@pytest.fixture(scope="module")
def g2():
    return G2Point.generator()


def _g1_equal(ours, theirs):
    return normalize(g1_to_py_ecc(ours)) == normalize(theirs)


def _g2_equal(ours, theirs):
    return normalize(g2_to_py_ecc(ours)) == normalize(theirs)


def test_base_point_class_is_abstract():
    with pytest.raises(TypeError):
        _ProjectivePoint(Fp(0), Fp(1), Fp(0))


class TestGroupLaw:

    def test_generators_match_py_ecc(self, g1, g2):
        """Our generators are py_ecc's generators."""
        assert _g1_equal(g1, G1)
        assert _g2_equal(g2, G2)
        assert g1_from_py_ecc(G1) == g1
        assert g2_from_py_ecc(G2) == g2

    def test_add_and_double_match_py_ecc(self, g1, g2):
        """Addition and doubling agree with py_ecc."""
        assert _g1_equal(g1.double(), add(G1, G1))
        assert _g1_equal(g1 + g1.double(), multiply(G1, 3))
        assert _g2_equal(g2 + g2, add(G2, G2))

    def test_identity_behaviour(self, g1):
        """P + O = P and P - P = O."""
        identity = G1Point.identity()
        assert g1 + identity == g1
        assert identity + g1 == g1
        assert (g1 - g1).is_identity()
        assert identity.double().is_identity()

    def test_negation(self, g1):
        assert _g1_equal(-g1, neg(G1))
        assert (g1 + (-g1)).is_identity()

    def test_curve_order(self, g1, g2):
        """r * G is the identity; the order matches py_ecc's."""
        assert curve_order == R
        assert (g1.multiply_unsafe(R - 1) + g1).is_identity()
        assert (g2.multiply_unsafe(R - 1) + g2).is_identity()


class TestScalarMultiplication:

    @pytest.mark.parametrize("k", SCALARS)
    def test_g1_multiply_matches_py_ecc(self, g1, k):
        expected = multiply(G1, k)
        assert _g1_equal(g1.multiply(k), expected)
        assert _g1_equal(g1.multiply_unsafe(k), expected)

    @pytest.mark.parametrize("k", [3, 0xdeadbeefcafebabe, R - 2])
    def test_g2_multiply_matches_py_ecc(self, g2, k):
        assert _g2_equal(g2.multiply(k), multiply(G2, k))

    def test_precomputed_tables(self, g1, g2):
        """Table-based multiplication agrees with the plain ladder."""
        t1 = precompute(g1, 8)
        t2 = precompute(g2, 4)
        for k in SCALARS:
            assert t1.multiply(k) == g1.multiply_unsafe(k)
            assert t1.multiply_unsafe(k) == g1.multiply_unsafe(k)
        assert t2.multiply(12345) == g2.multiply_unsafe(12345)
        assert t1.multiply_unsafe(0).is_identity()

    def test_scalar_range(self, g1):
        """Secret multiplication rejects 0 and r; unsafe allows 0 only."""
        with pytest.raises(InvalidScalarError):
            g1.multiply(0)
        with pytest.raises(InvalidScalarError):
            g1.multiply(R)
        with pytest.raises(InvalidScalarError):
            g1.multiply_unsafe(R)
        assert g1.multiply_unsafe(0).is_identity()


class TestSubgroup:

    def test_generators_are_torsion_free(self, g1, g2):
        assert g1.is_torsion_free()
        assert g2.is_torsion_free()

    def test_g1_point_outside_subgroup(self):
        """A curve point found by search is outside G1 until the cofactor is cleared."""
        x = Fp(1)
        while True:
            rhs = x.square() * x + G1Point.B
            if rhs.is_square():
                point = G1Point.from_affine(x, rhs.sqrt())
                break
            x = x + 1
        assert point.is_on_curve()
        assert not point.is_torsion_free()
        assert point.clear_cofactor().is_torsion_free()

    def test_g2_point_outside_subgroup(self):
        x = Fp2(1, 0)
        while True:
            rhs = x.square() * x + G2Point.B
            if rhs.is_square():
                point = G2Point.from_affine(x, rhs.sqrt())
                break
            x = x + Fp2(1, 0)
        assert point.is_on_curve()
        assert not point.is_torsion_free()
        assert point.clear_cofactor().is_torsion_free()

    def test_psi_acts_as_multiplication_by_p(self, g2):
        """On G2 the endomorphism psi is multiplication by p mod r."""
        assert g2.psi() == g2.multiply_unsafe(P % R)
        assert g2.psi2() == g2.multiply_unsafe(P * P % R)


class TestSerialization:

    def test_g1_generator_encoding(self, g1):
        assert g1.to_bytes().hex() == G1_GENERATOR_HEX
        assert G1Point.from_bytes(bytes.fromhex(G1_GENERATOR_HEX)) == g1

    @pytest.mark.parametrize("k", [5, 0x1234567890abcdef, R - 3])
    def test_g1_compression_matches_py_ecc(self, g1, k):
        point = g1.multiply(k)
        expected = compress_G1(multiply(G1, k)).to_bytes(48, "big")
        assert point.to_bytes() == expected

    @pytest.mark.parametrize("k", [1, 6, R - 7])
    def test_g2_compression_matches_py_ecc(self, g2, k):
        point = g2.multiply(k)
        assert point.to_bytes() == g2_compress_py_ecc(point)
        assert G2Point.from_bytes(point.to_bytes()) == point

    def test_uncompressed_forms(self, g1, g2):
        """96/192-byte forms and the 0x04-prefixed forms decode."""
        p = g1.multiply(99)
        q = g2.multiply(99)
        raw1 = p.to_bytes(compressed=False)
        raw2 = q.to_bytes(compressed=False)
        assert len(raw1) == 96 and len(raw2) == 192
        assert G1Point.from_bytes(raw1) == p
        assert G2Point.from_bytes(raw2) == q
        assert G1Point.from_bytes(b"\x04" + raw1) == p
        assert G2Point.from_bytes(b"\x04" + raw2) == q

    def test_identity_encoding(self):
        encoded = G1Point.identity().to_bytes()
        assert encoded == bytes([0xc0]) + bytes(47)
        assert G1Point.from_bytes(encoded).is_identity()
        assert G2Point.from_bytes(G2Point.identity().to_bytes()).is_identity()

    def test_invalid_encodings(self, g1):
        """Bad lengths, dirty infinity and inconsistent flags are rejected."""
        with pytest.raises(InvalidLengthError):
            G1Point.from_bytes(bytes(47))
        with pytest.raises(InvalidInfinityError):
            G1Point.from_bytes(bytes([0xc0]) + bytes(46) + b"\x01")
        encoded = bytearray(g1.to_bytes())
        encoded[0] &= 0x7f
        with pytest.raises(InvalidPointError):
            G1Point.from_bytes(bytes(encoded))

    def test_x_not_on_curve(self):
        """An x with no matching y is rejected."""
        x = Fp(1)
        while (x.square() * x + G1Point.B).is_square():
            x = x + 1
        encoded = bytearray(x.to_bytes())
        encoded[0] |= 0x80
        with pytest.raises(InvalidPointError):
            G1Point.from_bytes(bytes(encoded))
