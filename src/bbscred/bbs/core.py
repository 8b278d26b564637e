"""BBS key generation, signing and signature verification.

Implements the core operations of the BBS signature scheme with the
"hash to scalar" message mapping (api_id suffix "H2G_HM2S_"):

    KeyGen, SkToPk, Sign, Verify

together with the shared helpers (domain calculation, B calculation,
serialization and octet codecs) that the proof layer reuses.

Signatures are 80 bytes: a compressed G1 point A followed by the 32-byte
scalar e. Public keys are 96-byte compressed G2 points.
"""
from __future__ import annotations

import logging
from typing import List, Sequence, Tuple, Union

from ..errors import (
    BBSCredError,
    InvalidLengthError,
    InvalidParameterError,
    InvalidPointError,
    InvalidScalarError,
    InvalidSignatureError,
)
from ..utils.curves import G1Point, G2Point
from ..utils.fields import R, fr_add, fr_inv
from ..utils.octets import i2osp, os2ip
from ..utils.pairing import pairing_batch
from .ciphersuites import Ciphersuite
from .generators import Generators, create_generators

logger = logging.getLogger(__name__)

__all__ = [
    "U64", "serialize", "key_gen", "sk_to_pk",
    "calculate_domain", "calculate_b", "messages_to_scalars",
    "signature_to_octets", "octets_to_signature", "octets_to_pubkey",
    "core_sign", "core_verify", "sign", "verify",
]

# --- DST Suffixes ---
KEYGEN_DST_SUFFIX = b"KEYGEN_DST_"
H2S_SUFFIX = b"H2S_"
MAP_MSG_SUFFIX = b"MAP_MSG_TO_SCALAR_AS_HASH_"

MessageLike = Union[bytes, str]


class U64(int):
    """A non-negative integer serialized as 8 bytes (lengths and indexes)."""


def _to_bytes(value: MessageLike) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    raise InvalidParameterError(f"Messages must be bytes or str (got {type(value).__name__}).")


# --- Serialization ---

def serialize(items: Sequence) -> bytes:
    """Concatenates points, scalars and 8-byte integers as octets.

    G1/G2 points use their compressed encoding, `U64` values take 8 bytes
    and every other integer is treated as a scalar of 32 bytes.

    Raises:
        InvalidParameterError: For unsupported element types or out of
            range scalars.
    """
    out = bytearray()
    for item in items:
        if isinstance(item, (G1Point, G2Point)):
            out += item.to_bytes()
        elif isinstance(item, U64):
            out += i2osp(int(item), 8)
        elif isinstance(item, int):
            if not 0 <= item < R:
                raise InvalidParameterError("Scalar out of range for serialization.")
            out += i2osp(item, 32)
        else:
            raise InvalidParameterError(f"Cannot serialize element of type {type(item).__name__}.")
    return bytes(out)


# --- Keys ---

def key_gen(key_material: bytes, key_info: bytes, key_dst: bytes | None, ciphersuite: Ciphersuite) -> int:
    """Derives a secret key from high-entropy key material.

    Args:
        key_material: At least 32 bytes of secret randomness.
        key_info: Optional context, at most 65535 bytes.
        key_dst: Domain separation tag; defaults to
            ciphersuite_id || "KEYGEN_DST_".
        ciphersuite: The ciphersuite in use.

    Returns:
        The secret scalar SK in [1, r).

    Raises:
        InvalidLengthError: If key_material is too short or key_info too long.
        InvalidScalarError: If the derived key is zero.
    """
    if len(key_material) < 32:
        raise InvalidLengthError(f"key_material must be at least 32 bytes (got {len(key_material)}).")
    if len(key_info) > 65535:
        raise InvalidLengthError(f"key_info must be at most 65535 bytes (got {len(key_info)}).")
    if key_dst is None:
        key_dst = ciphersuite.ciphersuite_id + KEYGEN_DST_SUFFIX
    derive_input = bytes(key_material) + i2osp(len(key_info), 2) + bytes(key_info)
    sk = ciphersuite.hash_to_scalar(derive_input, key_dst)
    if sk == 0:
        raise InvalidScalarError("KeyGen produced a zero secret key.")
    return sk


def sk_to_pk(sk: int, ciphersuite: Ciphersuite) -> bytes:
    """Returns the 96-byte compressed public key W = BP2 * SK.

    Raises:
        InvalidScalarError: If SK is not in [1, r).
    """
    return ciphersuite.bp2_table.multiply(sk).to_bytes()


def octets_to_pubkey(octets: bytes) -> G2Point:
    """Decodes and validates a public key.

    Raises:
        InvalidPointError: If the encoding is invalid or W is the identity.
    """
    w = G2Point.from_bytes(octets)
    if w.is_identity():
        raise InvalidPointError("Public key must not be the identity.")
    return w


# --- Signature Codec ---

def signature_to_octets(a: G1Point, e: int) -> bytes:
    return a.to_bytes() + i2osp(e, 32)


def octets_to_signature(octets: bytes, ciphersuite: Ciphersuite) -> Tuple[G1Point, int]:
    """Decodes a signature into (A, e).

    Raises:
        InvalidSignatureError: If the length is wrong, A is the identity or
            e is not in [1, r).
        InvalidPointError: If A does not decode to a valid G1 point.
    """
    point_len = ciphersuite.octet_point_length
    expected = point_len + ciphersuite.octet_scalar_length
    if len(octets) != expected:
        raise InvalidSignatureError(f"Signature must be {expected} bytes (got {len(octets)}).")
    a = G1Point.from_bytes(octets[:point_len])
    if a.is_identity():
        raise InvalidSignatureError("Signature point A must not be the identity.")
    e = os2ip(octets[point_len:])
    if e == 0 or e >= R:
        raise InvalidSignatureError("Signature scalar e is out of range.")
    return a, e


# --- Domain and B ---

def calculate_domain(pk: bytes, generators: Generators, header: bytes, api_id: bytes,
                     ciphersuite: Ciphersuite) -> int:
    """Binds the public key, generators, header and api_id into one scalar."""
    if len(header) > 2 ** 64 - 1:
        raise InvalidLengthError("Header is too long.")
    dom_array = [U64(len(generators.h)), generators.q1, *generators.h]
    dom_octs = serialize(dom_array) + api_id
    dom_input = bytes(pk) + dom_octs + i2osp(len(header), 8) + bytes(header)
    return ciphersuite.hash_to_scalar(dom_input, api_id + H2S_SUFFIX)


def calculate_b(generators: Generators, domain: int, msg_scalars: Sequence[int],
                ciphersuite: Ciphersuite) -> G1Point:
    """B = P1 + Q1 * domain + sum(H_i * msg_i)."""
    if len(msg_scalars) != len(generators.h):
        raise InvalidParameterError(
            f"Message count {len(msg_scalars)} does not match generator count {len(generators.h)}."
        )
    b = ciphersuite.p1 + generators.q1.multiply_unsafe(domain)
    for h_i, m_i in zip(generators.h, msg_scalars):
        b = b + h_i.multiply_unsafe(m_i)
    return b


def messages_to_scalars(messages: Sequence[MessageLike], api_id: bytes, ciphersuite: Ciphersuite) -> List[int]:
    """Maps each message to a scalar with hash_to_scalar."""
    dst = api_id + MAP_MSG_SUFFIX
    return [ciphersuite.hash_to_scalar(_to_bytes(m), dst) for m in messages]


# --- Core Operations ---

def core_sign(sk: int, pk: bytes, generators: Generators, header: bytes, msg_scalars: Sequence[int],
              api_id: bytes, ciphersuite: Ciphersuite) -> bytes:
    """Signs message scalars under SK.

    Raises:
        InvalidSignatureError: If SK + e is zero or A is the identity.
    """
    domain = calculate_domain(pk, generators, header, api_id, ciphersuite)
    e = ciphersuite.hash_to_scalar(serialize([sk, *msg_scalars, domain]), api_id + H2S_SUFFIX)
    b = calculate_b(generators, domain, msg_scalars, ciphersuite)
    denominator = fr_add(sk, e)
    if denominator == 0:
        raise InvalidSignatureError("SK + e is zero.")
    a = b.multiply(fr_inv(denominator))
    if a.is_identity():
        raise InvalidSignatureError("Signature point A is the identity.")
    return signature_to_octets(a, e)


def core_verify(pk: bytes, signature: bytes, generators: Generators, header: bytes,
                msg_scalars: Sequence[int], api_id: bytes, ciphersuite: Ciphersuite) -> bool:
    """Checks e(A, W + BP2 * e) * e(B, -BP2) == 1.

    Raises:
        BBSCredError: If the signature or public key cannot be decoded.
    """
    a, e = octets_to_signature(signature, ciphersuite)
    w = octets_to_pubkey(pk)
    domain = calculate_domain(pk, generators, header, api_id, ciphersuite)
    b = calculate_b(generators, domain, msg_scalars, ciphersuite)
    lhs = w + ciphersuite.bp2_table.multiply_unsafe(e)
    result = pairing_batch([(a, lhs), (b, ciphersuite.bp2_neg_prepared)])
    return result.is_one()


# --- Interface ---

def sign(sk: int, pk: bytes, header: bytes, messages: Sequence[MessageLike], ciphersuite: Ciphersuite) -> bytes:
    """Produces an 80-byte BBS signature over `messages`."""
    api_id = ciphersuite.api_id
    msg_scalars = messages_to_scalars(messages, api_id, ciphersuite)
    generators = create_generators(len(msg_scalars) + 1, api_id, ciphersuite)
    signature = core_sign(sk, pk, generators, header, msg_scalars, api_id, ciphersuite)
    logger.debug("Signed %d messages with %s.", len(msg_scalars), ciphersuite.key)
    return signature


def verify(pk: bytes, signature: bytes, header: bytes, messages: Sequence[MessageLike],
           ciphersuite: Ciphersuite) -> bool:
    """Verifies a signature. Malformed inputs yield False."""
    api_id = ciphersuite.api_id
    try:
        msg_scalars = messages_to_scalars(messages, api_id, ciphersuite)
        generators = create_generators(len(msg_scalars) + 1, api_id, ciphersuite)
        valid = core_verify(pk, signature, generators, header, msg_scalars, api_id, ciphersuite)
    except (BBSCredError, ValueError, TypeError) as exc:
        logger.debug("Signature rejected: %s", exc)
        return False
    if not valid:
        logger.debug("Signature rejected: pairing check failed.")
    return valid
