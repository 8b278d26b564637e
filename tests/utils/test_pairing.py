# tests/utils/test_pairing.py
import pickle

import pytest

from bbscred.errors import DegeneratePairingError
from bbscred.utils.curves import G1Point, G2Point
from bbscred.utils.fields import BLS_X, Fp12
from bbscred.utils.pairing import (
    ATE_NAF,
    G2Prepared,
    final_exponentiate,
    miller_loop,
    pairing,
    pairing_batch,
    pairings_equal,
)


@pytest.fixture(scope="module")
def g1():
    return G1Point.generator()


@pytest.fixture(scope="module")
def g2():
    return G2Point.generator()


@pytest.fixture(scope="module")
def e_base(g1, g2):
    """e(G1, G2), computed once per module."""
    return pairing(g1, g2)


class TestNaf:

    def test_naf_reconstructs_x(self):
        """The signed digits, read from the top, rebuild |x| below its leading 1."""
        value = 1
        for digit in ATE_NAF:
            value = 2 * value + digit
        assert value == BLS_X

    def test_naf_is_non_adjacent(self):
        for a, b in zip(ATE_NAF, ATE_NAF[1:]):
            assert a == 0 or b == 0


class TestPairing:

    def test_non_degenerate(self, e_base):
        assert not e_base.is_one()

    def test_result_has_order_r(self, e_base):
        """e(G1, G2) lies in the cyclotomic subgroup: f^(p^6) == f^-1."""
        assert e_base.frobenius_map(6) == e_base.inv()

    def test_bilinearity(self, g1, g2, e_base):
        """e(aP, bQ) == e(P, Q)^(ab)."""
        a, b = 5, 7
        assert pairing(g1.multiply(a), g2.multiply(b)) == e_base ** (a * b)

    def test_scalar_moves_between_arguments(self, g1, g2):
        k = 0x1234567890abcdef
        assert pairing(g1.multiply(k), g2) == pairing(g1, g2.multiply(k))

    def test_identity_is_rejected(self, g1, g2):
        with pytest.raises(DegeneratePairingError):
            pairing(G1Point.identity(), g2)
        with pytest.raises(DegeneratePairingError):
            pairing(g1, G2Point.identity())

    def test_without_final_exponentiation(self, g1, g2, e_base):
        raw = pairing(g1, g2, with_final_exp=False)
        assert isinstance(raw, Fp12)
        assert final_exponentiate(raw) == e_base


class TestPairingBatch:

    def test_product_with_inverse_is_one(self, g1, g2):
        """e(P, Q) * e(-P, Q) == 1."""
        assert pairing_batch([(g1, g2), (-g1, g2)]).is_one()

    def test_product_matches_individual_pairings(self, g1, g2, e_base):
        p2 = g1.multiply(3)
        product = pairing_batch([(g1, g2), (p2, g2)])
        assert product == e_base ** 4

    @pytest.mark.parametrize("side", ["g1", "g2"])
    def test_identity_pair_is_rejected(self, g1, g2, side):
        bad = (G1Point.identity(), g2) if side == "g1" else (g1, G2Point.identity())
        with pytest.raises(DegeneratePairingError):
            pairing_batch([(g1, g2), bad])

    def test_prepared_points_are_reused(self, g1, g2):
        prepared = G2Prepared(g2)
        assert pairing_batch([(g1, prepared), (-g1, prepared)]).is_one()
        assert miller_loop([(g1, prepared)]) == pairing(g1, g2, with_final_exp=False)

    def test_prepared_points_pickle(self, g1, g2):
        """Prepared lines survive pickling for worker processes."""
        prepared = pickle.loads(pickle.dumps(G2Prepared(g2)))
        assert prepared.point == g2
        assert final_exponentiate(miller_loop([(g1, prepared)])) == pairing(g1, g2)

    def test_pairings_equal(self, g1, g2):
        k = 99
        assert pairings_equal((g1.multiply(k), g2), (g1, g2.multiply(k)))
        assert not pairings_equal((g1.multiply(k), g2), (g1, g2))
        with pytest.raises(DegeneratePairingError):
            pairings_equal((G1Point.identity(), g2), (g1, g2))
