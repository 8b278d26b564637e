"""Conversions between bbscred points and py_ecc's optimized BLS12-381 points.

py_ecc represents points as homogeneous projective tuples (x, y, z) of FQ
(G1) or FQ2 (G2) elements, the same coordinate system used by
`bbscred.utils.curves`, so conversions are coordinate-wise.

Dependencies:
  - py_ecc: For `optimized_bls12_381` field and point types, and for the
    ZCash point compression helpers.
"""
from __future__ import annotations

from typing import Tuple

from py_ecc.bls.point_compression import compress_G2 as compress_g2_bls
from py_ecc.optimized_bls12_381 import FQ, FQ2

from .curves import G1Point, G2Point
from .fields import Fp, Fp2

__all__ = [
    "g1_to_py_ecc", "g1_from_py_ecc",
    "g2_to_py_ecc", "g2_from_py_ecc",
    "g2_compress_py_ecc",
]


def _fq2_to_fp2(value) -> Fp2:
    c0, c1 = value.coeffs
    return Fp2(int(c0), int(c1))


def g1_to_py_ecc(point: G1Point) -> Tuple[FQ, FQ, FQ]:
    return FQ(point.x.n), FQ(point.y.n), FQ(point.z.n)


def g1_from_py_ecc(pt) -> G1Point:
    """Builds a G1Point from a py_ecc optimized G1 tuple. No validation."""
    x, y, z = pt
    return G1Point(Fp(int(x)), Fp(int(y)), Fp(int(z)))


def g2_to_py_ecc(point: G2Point) -> Tuple[FQ2, FQ2, FQ2]:
    return tuple(FQ2([c.c0.n, c.c1.n]) for c in (point.x, point.y, point.z))


def g2_from_py_ecc(pt) -> G2Point:
    """Builds a G2Point from a py_ecc optimized G2 tuple. No validation."""
    x, y, z = pt
    return G2Point(_fq2_to_fp2(x), _fq2_to_fp2(y), _fq2_to_fp2(z))


def g2_compress_py_ecc(point: G2Point) -> bytes:
    """Compresses a G2 point with py_ecc, giving the same 96 bytes as `to_bytes()`."""
    z1, z2 = compress_g2_bls(g2_to_py_ecc(point))
    return z1.to_bytes(48, "big") + z2.to_bytes(48, "big")
