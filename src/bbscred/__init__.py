"""bbscred: BBS signatures, selective-disclosure proofs and anonymous credentials.

The package is split into the BLS12-381 engine (`bbscred.utils`), the BBS
scheme (`bbscred.bbs`), and the credential actors (`bbscred.clients`). The
byte-oriented interface below covers the common operations.
"""
from .api import (
    DEFAULT_CIPHERSUITE,
    derive_proof,
    generate_key_pair,
    secret_key_to_public_key,
    sign,
    verify_proof,
    verify_signature,
)
from .bbs.ciphersuites import BLS12381_SHA256, BLS12381_SHAKE256, get_ciphersuite
from .config import BBSConfig, configure_logging

__version__ = "0.1.0"

__all__ = [
    "generate_key_pair", "secret_key_to_public_key", "sign", "verify_signature",
    "derive_proof", "verify_proof", "DEFAULT_CIPHERSUITE",
    "BLS12381_SHAKE256", "BLS12381_SHA256", "get_ciphersuite",
    "BBSConfig", "configure_logging",
]
