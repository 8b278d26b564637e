"""Initializes the bbscred utilities sub-package.

This package holds the BLS12-381 engine used by the BBS layer. This
`__init__.py` file exposes the most important classes and functions from the
sub-modules, allowing for convenient, direct access.

Available Utilities:
  - fields: Fp and its extension tower Fp2/Fp6/Fp12, plus scalar helpers.
  - curves: G1/G2 projective points, scalar multiplication, subgroup checks
    and ZCash point serialization.
  - hash_to_curve: RFC 9380 message expansion and hashing to G1/G2.
  - pairing: The optimal ate pairing and products of pairings.
  - octets: I2OSP and OS2IP.

Not re-exported here; import the module itself:
  - interop: Conversions to and from py_ecc points.
  - crypto: Identity hashing and multibase key encoding.
"""
from .fields import P, R, Fp, Fp2, Fp6, Fp12, fr_inv
from .curves import G1Point, G2Point, PrecomputedPoint, precompute
from .hash_to_curve import (
    expand_message_xmd,
    expand_message_xof,
    hash_to_field,
    hash_to_g1,
    hash_to_g2,
    hash_to_scalar,
)
from .pairing import (
    G2Prepared,
    miller_loop,
    final_exponentiate,
    pairing,
    pairing_batch,
    pairings_equal,
)
from .octets import i2osp, os2ip

__all__ = [
    # from .fields
    "P", "R", "Fp", "Fp2", "Fp6", "Fp12", "fr_inv",
    # from .curves
    "G1Point", "G2Point", "PrecomputedPoint", "precompute",
    # from .hash_to_curve
    "expand_message_xmd", "expand_message_xof", "hash_to_field",
    "hash_to_g1", "hash_to_g2", "hash_to_scalar",
    # from .pairing
    "G2Prepared", "miller_loop", "final_exponentiate",
    "pairing", "pairing_batch", "pairings_equal",
    # from .octets
    "i2osp", "os2ip",
]
