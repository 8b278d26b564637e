"""BBS ciphersuites over BLS12-381 G1.

A ciphersuite fixes the hash used for message expansion and hash_to_curve,
the identifier mixed into every domain separation tag, and the base point
P1. The G2 base point is shared by both suites; its wNAF table and Miller
loop lines are built on first use and owned by the ciphersuite object.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property
from typing import Dict, Union

from ..errors import UnknownCiphersuiteError
from ..utils.curves import G1Point, G2Point, PrecomputedPoint, precompute
from ..utils.hash_to_curve import ExpandFn, expand_message_xmd, expand_message_xof, hash_to_g1, hash_to_scalar
from ..utils.pairing import G2Prepared

__all__ = [
    "Ciphersuite", "BLS12381_SHAKE256", "BLS12381_SHA256",
    "CIPHERSUITES", "get_ciphersuite", "API_ID_SUFFIX",
]

API_ID_SUFFIX = b"H2G_HM2S_"


@dataclass(frozen=True, eq=False)
class Ciphersuite:
    """A named BBS ciphersuite.

    Attributes:
        key: Short registry key, e.g. "BLS12381_SHAKE256".
        ciphersuite_id: The ASCII identifier used as DST prefix.
        p1_hex: Compressed encoding of the signature base point P1.
        expand_message: The expand_message variant (XMD or XOF).
    """
    key: str
    ciphersuite_id: bytes
    p1_hex: str
    expand_message: ExpandFn
    expand_len: int = 48
    octet_scalar_length: int = 32
    octet_point_length: int = 48

    @property
    def api_id(self) -> bytes:
        return self.ciphersuite_id + API_ID_SUFFIX

    @cached_property
    def p1(self) -> G1Point:
        return G1Point.from_bytes(bytes.fromhex(self.p1_hex))

    @cached_property
    def bp2(self) -> G2Point:
        return G2Point.generator()

    @cached_property
    def bp2_table(self) -> PrecomputedPoint:
        return precompute(self.bp2, 8)

    @cached_property
    def bp2_prepared(self) -> G2Prepared:
        return G2Prepared(self.bp2)

    @cached_property
    def bp2_neg_prepared(self) -> G2Prepared:
        return G2Prepared(-self.bp2)

    def hash_to_curve(self, msg: bytes, dst: bytes) -> G1Point:
        return hash_to_g1(msg, dst, self.expand_message)

    def hash_to_scalar(self, msg: bytes, dst: bytes) -> int:
        return hash_to_scalar(msg, dst, self.expand_message)

    def __repr__(self) -> str:
        return f"Ciphersuite({self.key!r})"


BLS12381_SHAKE256 = Ciphersuite(
    key="BLS12381_SHAKE256",
    ciphersuite_id=b"BBS_BLS12381G1_XOF:SHAKE-256_SSWU_RO_",
    p1_hex="8929dfbc7e6642c4ed9cba0856e493f8b9d7d5fcb0c31ef8fdcd34d50648a56c795e106e9eada6e0bda386b414150755",
    expand_message=expand_message_xof,
)

BLS12381_SHA256 = Ciphersuite(
    key="BLS12381_SHA256",
    ciphersuite_id=b"BBS_BLS12381G1_XMD:SHA-256_SSWU_RO_",
    p1_hex="a8ce256102840821a3e94ea9025e4662b205762f9776b3a766c872b948f1fd225e7c59698588e70d11406d161b4e28c9",
    expand_message=expand_message_xmd,
)

CIPHERSUITES: Dict[str, Ciphersuite] = {
    BLS12381_SHAKE256.key: BLS12381_SHAKE256,
    BLS12381_SHA256.key: BLS12381_SHA256,
}


def get_ciphersuite(suite: Union[str, bytes, Ciphersuite]) -> Ciphersuite:
    """Looks a ciphersuite up by registry key or identifier.

    Args:
        suite: A `Ciphersuite`, a key such as "BLS12381_SHA256", or the full
            identifier such as "BBS_BLS12381G1_XMD:SHA-256_SSWU_RO_".

    Raises:
        UnknownCiphersuiteError: If nothing matches.
    """
    if isinstance(suite, Ciphersuite):
        return suite
    if isinstance(suite, bytes):
        suite = suite.decode("ascii", errors="replace")
    if suite in CIPHERSUITES:
        return CIPHERSUITES[suite]
    for cs in CIPHERSUITES.values():
        if suite == cs.ciphersuite_id.decode("ascii"):
            return cs
    raise UnknownCiphersuiteError(f"Unknown ciphersuite: {suite!r}")
