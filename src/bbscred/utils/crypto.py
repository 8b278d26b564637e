"""Identity hashing and key-encoding helpers for the credential layer.

Supported Operations:
  - BLAKE2b-256 attribute hashes and anonymous identifiers derived by using
    an identity digest as an Ed25519 seed.
  - Multibase (Base58btc) encoding of BBS public keys (BLS12-381 G2) and
    Ed25519 anonymous ids with multicodec prefixes.

Dependencies:
  - pycryptodome: For BLAKE2b.
  - cryptography: For Ed25519 key derivation.
  - multibase: For encoding keys with format prefixes.
"""
from __future__ import annotations

import secrets
from typing import Dict, Union

import multibase
from Crypto.Hash import BLAKE2b
from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from ..errors import InvalidParameterError

# --- Constants ---

# Multicodec prefixes for public key types.
_MB_ED_PREFIX: bytes = b"\xed\x01"   # 0xed: Ed25519-pub
_MB_BLS_PREFIX: bytes = b"\xeb\x01"  # 0xeb: BLS12-381-G2-pub


def _mb58(data: bytes) -> str:
    """Encodes data into a Base58-btc multibase string (prefix 'z')."""
    return multibase.encode("base58btc", data).decode("ascii")


def _as_bytes(data: Union[str, bytes]) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


# --- Hashing ---

def blake2b_256(data: Union[str, bytes]) -> bytes:
    """Returns the 32-byte BLAKE2b digest of `data`."""
    h = BLAKE2b.new(digest_bits=256)
    h.update(_as_bytes(data))
    return h.digest()


def hash_hex(data: Union[str, bytes]) -> str:
    return blake2b_256(data).hex()


def random_nonce(size: int = 16) -> str:
    """Returns `size` random bytes as a hex string."""
    return secrets.token_bytes(size).hex()


# --- Anonymous Identity ---

def derive_anonymous_id(name: str, surname: str, birthdate: str, location: str, ssn: str) -> Dict[str, str]:
    """Derives a deterministic anonymous identifier from identity data.

    The string "name:surname:birthdate:location:ssn" is hashed with
    BLAKE2b-256 and the digest is used as an Ed25519 seed. The public key is
    the anonymous id; the seed stays with the holder.

    Returns:
        A dictionary with the hex-encoded `anon_id`, the hex `private_key`
        seed and the multibase-encoded `anon_id_multibase`.
    """
    identity = f"{name}:{surname}:{birthdate}:{location}:{ssn}"
    seed = blake2b_256(identity)
    priv = Ed25519PrivateKey.from_private_bytes(seed)
    pk_bytes = priv.public_key().public_bytes(Encoding.Raw, PublicFormat.Raw)
    return {
        "anon_id": pk_bytes.hex(),
        "private_key": seed.hex(),
        "anon_id_multibase": _mb58(_MB_ED_PREFIX + pk_bytes),
    }


# --- Key Encoding ---

def bbs_public_key_to_multibase(pk: Union[bytes, str]) -> str:
    """Encodes a 96-byte compressed G2 public key as multibase."""
    if isinstance(pk, str):
        pk = bytes.fromhex(pk)
    if len(pk) != 96:
        raise InvalidParameterError(f"BBS public key must be 96 bytes (got {len(pk)}).")
    return _mb58(_MB_BLS_PREFIX + pk)


def multibase_to_raw_public_key(mb: str) -> bytes:
    """Converts a multibase-encoded public key to its raw bytes.

    Args:
        mb: A Base58btc multibase string encoding a prefixed public key.

    Returns:
        The raw public key bytes (32 for Ed25519, 96 for BLS12-381 G2).

    Raises:
        InvalidParameterError: If the decoded data does not start with a
            known prefix.
    """
    data = multibase.decode(mb)
    if data.startswith(_MB_ED_PREFIX):
        return data[len(_MB_ED_PREFIX):]
    if data.startswith(_MB_BLS_PREFIX):
        return data[len(_MB_BLS_PREFIX):]

    raise InvalidParameterError(f"Unknown multicodec prefix in multibase data: {data[:2].hex()}")


__all__ = [
    "blake2b_256",
    "hash_hex",
    "random_nonce",
    "derive_anonymous_id",
    "bbs_public_key_to_multibase",
    "multibase_to_raw_public_key",
]
