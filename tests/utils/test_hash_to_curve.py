# tests/utils/test_hash_to_curve.py
import hashlib

import pytest
from py_ecc.bls.hash import expand_message_xmd as py_ecc_expand_xmd
from py_ecc.bls.hash_to_curve import hash_to_G2 as py_ecc_hash_to_g2
from py_ecc.optimized_bls12_381 import normalize

from bbscred.errors import InvalidLengthError
from bbscred.utils.curves import G1Point, G2Point
from bbscred.utils.fields import P, R, Fp
from bbscred.utils.hash_to_curve import (
    expand_message_xmd,
    expand_message_xof,
    hash_to_field,
    hash_to_g1,
    hash_to_g2,
    hash_to_scalar,
    map_to_curve_g1,
)
from bbscred.utils.interop import g2_to_py_ecc

G1_DST = b"QUUX-V01-CS02-with-BLS12381G1_XMD:SHA-256_SSWU_RO_"
G2_DST = b"QUUX-V01-CS02-with-BLS12381G2_XMD:SHA-256_SSWU_RO_"
XMD_DST = b"QUUX-V01-CS02-with-expander-SHA256-128"


class TestExpandMessage:

    @pytest.mark.parametrize("msg", [b"", b"abc", b"abcdef0123456789", b"q128_" + b"q" * 128])
    @pytest.mark.parametrize("length", [0x20, 0x80, 0x100])
    def test_xmd_matches_py_ecc(self, msg, length):
        """expand_message_xmd agrees with py_ecc's implementation."""
        assert expand_message_xmd(msg, XMD_DST, length) == py_ecc_expand_xmd(msg, XMD_DST, length, hashlib.sha256)

    def test_xmd_length_limit(self):
        with pytest.raises(InvalidLengthError):
            expand_message_xmd(b"msg", XMD_DST, 255 * 32 + 1)

    def test_xmd_oversize_dst(self):
        """A DST longer than 255 bytes is replaced by its SHA-256 digest."""
        long_dst = b"D" * 300
        reduced = hashlib.sha256(b"H2C-OVERSIZE-DST-" + long_dst).digest()
        assert expand_message_xmd(b"msg", long_dst, 64) == expand_message_xmd(b"msg", reduced, 64)

    def test_xof_properties(self):
        """XOF output has the requested length and is prefix-free across lengths."""
        dst = b"QUUX-V01-CS02-with-expander-SHAKE256"
        short = expand_message_xof(b"abc", dst, 32)
        long = expand_message_xof(b"abc", dst, 128)
        assert len(short) == 32 and len(long) == 128
        # The output length is an input to the XOF, so outputs are unrelated.
        assert long[:32] != short
        assert expand_message_xof(b"abc", dst, 32) == short
        assert expand_message_xof(b"abd", dst, 32) != short

    def test_xof_length_limit(self):
        with pytest.raises(InvalidLengthError):
            expand_message_xof(b"msg", b"DST", 65536)


class TestHashToField:

    def test_elements_are_reduced(self):
        elements = hash_to_field(b"abc", 2, G1_DST)
        assert len(elements) == 2
        assert all(0 <= e[0] < P for e in elements)

    def test_scalar_is_below_r(self):
        s = hash_to_scalar(b"abc", b"DST")
        assert 0 <= s < R
        assert s == hash_to_scalar(b"abc", b"DST")
        assert s != hash_to_scalar(b"abc", b"DST2")


class TestHashToCurve:

    def test_g1_known_answer(self):
        """hash_to_curve("") for BLS12381G1_XMD:SHA-256_SSWU_RO_."""
        point = hash_to_g1(b"", G1_DST)
        x, y = point.to_affine()
        assert x.n == 0x052926add2207b76ca4fa57a8734416c8dc95e24501772c814278700eed6d1e4e8cf62d9c09db0fac349612b759e79a1
        assert y.n == 0x08ba738453bfed09cb546dbb0783dbb3a5f1f566ed67bb6be0e8c67e2e81a4cc68ee29813bb7994998f3eae0c9c6a265

    @pytest.mark.parametrize("msg", [b"", b"abc", b"abcdef0123456789"])
    def test_g2_matches_py_ecc(self, msg):
        ours = hash_to_g2(msg, G2_DST)
        theirs = py_ecc_hash_to_g2(msg, G2_DST, hashlib.sha256)
        assert normalize(g2_to_py_ecc(ours)) == normalize(theirs)

    def test_outputs_are_in_subgroup(self):
        """Both suites land in the prime-order subgroups."""
        p = hash_to_g1(b"message", b"BBS-DST", expand_message_xof)
        q = hash_to_g2(b"message", G2_DST)
        assert p.is_on_curve() and p.is_torsion_free()
        assert q.is_on_curve() and q.is_torsion_free()
        assert G1Point.from_bytes(p.to_bytes()) == p
        assert G2Point.from_bytes(q.to_bytes()) == q

    def test_map_to_curve_lands_on_curve(self):
        """The SSWU map followed by the isogeny gives a point on E."""
        for u in (0, 1, 12345, P - 1):
            assert map_to_curve_g1(Fp(u)).is_on_curve()

    def test_dst_separates_outputs(self):
        assert hash_to_g1(b"m", b"DST-A") != hash_to_g1(b"m", b"DST-B")
