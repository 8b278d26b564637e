"""Byte-oriented public interface for BBS signatures and proofs.

Keys, signatures, headers and proofs are plain bytes; messages may be bytes
or str (UTF-8 encoded). Ciphersuites are selected by registry key, full
identifier or `Ciphersuite` object.
"""
from __future__ import annotations

import logging
import secrets
from typing import Optional, Sequence, Union

from .bbs import core, proof
from .bbs.ciphersuites import Ciphersuite, get_ciphersuite
from .errors import BBSCredError, InvalidLengthError, InvalidScalarError
from .types import KeyPair
from .utils.fields import R
from .utils.octets import i2osp, os2ip

logger = logging.getLogger(__name__)


SuiteLike = Union[str, bytes, Ciphersuite]
MessageLike = Union[bytes, str]

DEFAULT_CIPHERSUITE = "BLS12381_SHAKE256"
SECRET_KEY_LENGTH = 32


def _secret_scalar(secret_key: Union[bytes, int]) -> int:
    if isinstance(secret_key, int):
        sk = secret_key
    else:
        if len(secret_key) != SECRET_KEY_LENGTH:
            raise InvalidLengthError(f"Secret key must be {SECRET_KEY_LENGTH} bytes (got {len(secret_key)}).")
        sk = os2ip(secret_key)
    if not 0 < sk < R:
        raise InvalidScalarError("Secret key is out of range.")
    return sk


def generate_key_pair(seed: Optional[bytes] = None, ciphersuite: SuiteLike = DEFAULT_CIPHERSUITE,
                      key_info: bytes = b"") -> KeyPair:
    """Generates a key pair with KeyGen.

    Args:
        seed: Key material of at least 32 bytes; 32 fresh random bytes when
            omitted.
        ciphersuite: The ciphersuite the key is bound to.
        key_info: Optional context mixed into KeyGen.

    Returns:
        A `KeyPair` with a 32-byte secret key and 96-byte public key.
    """
    suite = get_ciphersuite(ciphersuite)
    key_material = secrets.token_bytes(32) if seed is None else bytes(seed)
    sk = core.key_gen(key_material, key_info, None, suite)
    pk = core.sk_to_pk(sk, suite)
    return KeyPair(secret_key=i2osp(sk, SECRET_KEY_LENGTH).hex(), public_key=pk.hex(), ciphersuite=suite.key)


def secret_key_to_public_key(secret_key: Union[bytes, int], ciphersuite: SuiteLike = DEFAULT_CIPHERSUITE) -> bytes:
    """Returns the 96-byte public key for a secret key.

    Raises:
        InvalidScalarError: If the key is zero or not below r.
    """
    return core.sk_to_pk(_secret_scalar(secret_key), get_ciphersuite(ciphersuite))


def sign(secret_key: Union[bytes, int], public_key: Optional[bytes] = None, header: bytes = b"",
         messages: Sequence[MessageLike] = (), ciphersuite: SuiteLike = DEFAULT_CIPHERSUITE) -> bytes:
    """Signs `messages`, returning 80 signature bytes.

    The public key is derived from the secret key when not supplied.
    """
    suite = get_ciphersuite(ciphersuite)
    sk = _secret_scalar(secret_key)
    pk = core.sk_to_pk(sk, suite) if public_key is None else bytes(public_key)
    return core.sign(sk, pk, bytes(header), list(messages), suite)


def verify_signature(public_key: bytes, signature: bytes, header: bytes = b"",
                     messages: Sequence[MessageLike] = (), ciphersuite: SuiteLike = DEFAULT_CIPHERSUITE) -> bool:
    """Returns True if `signature` is valid for `messages` under `public_key`.

    Unknown ciphersuites and inputs that are not byte strings yield False.
    """
    try:
        suite = get_ciphersuite(ciphersuite)
        args = (bytes(public_key), bytes(signature), bytes(header), list(messages))
    except (BBSCredError, ValueError, TypeError) as exc:
        logger.debug("Signature rejected: %s", exc)
        return False
    return core.verify(*args, suite)


def derive_proof(public_key: bytes, signature: bytes, header: bytes = b"", messages: Sequence[MessageLike] = (),
                 presentation_header: bytes = b"", disclosed_indexes: Sequence[int] = (),
                 ciphersuite: SuiteLike = DEFAULT_CIPHERSUITE) -> bytes:
    """Derives a selective-disclosure proof revealing `disclosed_indexes`."""
    return proof.proof_gen(bytes(public_key), bytes(signature), bytes(header), bytes(presentation_header),
                           list(messages), list(disclosed_indexes), get_ciphersuite(ciphersuite))


def verify_proof(public_key: bytes, proof_bytes: bytes, header: bytes = b"", presentation_header: bytes = b"",
                 disclosed_messages: Sequence[MessageLike] = (), disclosed_indexes: Sequence[int] = (),
                 ciphersuite: SuiteLike = DEFAULT_CIPHERSUITE) -> bool:
    """Returns True if the proof verifies for the disclosed messages.

    Unknown ciphersuites and inputs that are not byte strings yield False.
    """
    try:
        suite = get_ciphersuite(ciphersuite)
        args = (bytes(public_key), bytes(proof_bytes), bytes(header), bytes(presentation_header),
                list(disclosed_messages), list(disclosed_indexes))
    except (BBSCredError, ValueError, TypeError) as exc:
        logger.debug("Proof rejected: %s", exc)
        return False
    return proof.proof_verify(*args, suite)


__all__ = [
    "generate_key_pair", "secret_key_to_public_key", "sign",
    "verify_signature", "derive_proof", "verify_proof", "DEFAULT_CIPHERSUITE",
]
