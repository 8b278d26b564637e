import pytest
import multibase  # used to build inputs with an unknown prefix

from bbscred.errors import InvalidParameterError
from bbscred.utils import crypto
from bbscred.utils.curves import G2Point


def test_blake2b_256_digest():
    """BLAKE2b-256 produces 32 bytes and accepts str or bytes."""
    digest = crypto.blake2b_256("hello")
    assert len(digest) == 32
    assert digest == crypto.blake2b_256(b"hello")
    assert crypto.hash_hex("hello") == digest.hex()
    assert crypto.hash_hex("hello") != crypto.hash_hex("hello!")


def test_random_nonce_format():
    nonce = crypto.random_nonce(16)
    assert len(nonce) == 32
    bytes.fromhex(nonce)
    assert nonce != crypto.random_nonce(16)


def test_derive_anonymous_id_format():
    """The anonymous id is a 32-byte Ed25519 public key in hex and multibase form."""
    identity = crypto.derive_anonymous_id("John", "Doe", "1990-05-15", "New York", "123-45-6789")
    assert set(identity.keys()) == {"anon_id", "private_key", "anon_id_multibase"}
    assert len(identity["anon_id"]) == 64
    assert len(identity["private_key"]) == 64
    assert identity["anon_id_multibase"].startswith("z")


def test_derive_anonymous_id_is_deterministic():
    """The same person always maps to the same id; any change gives a new one."""
    a = crypto.derive_anonymous_id("John", "Doe", "1990-05-15", "New York", "123-45-6789")
    b = crypto.derive_anonymous_id("John", "Doe", "1990-05-15", "New York", "123-45-6789")
    c = crypto.derive_anonymous_id("John", "Doe", "1990-05-16", "New York", "123-45-6789")
    assert a == b
    assert a["anon_id"] != c["anon_id"]


def test_anonymous_id_multibase_roundtrip():
    identity = crypto.derive_anonymous_id("Jane", "Roe", "1985-01-01", "Boston", "987-65-4321")
    raw = crypto.multibase_to_raw_public_key(identity["anon_id_multibase"])
    assert raw.hex() == identity["anon_id"]


def test_bbs_public_key_multibase_roundtrip():
    """A G2 public key survives multibase encoding with the BLS12-381 G2 prefix."""
    pk = G2Point.generator().multiply(42).to_bytes()
    mb = crypto.bbs_public_key_to_multibase(pk)
    assert mb.startswith("z")
    assert crypto.multibase_to_raw_public_key(mb) == pk
    assert crypto.bbs_public_key_to_multibase(pk.hex()) == mb


def test_bbs_public_key_wrong_length():
    with pytest.raises(InvalidParameterError):
        crypto.bbs_public_key_to_multibase(b"\x00" * 48)


def test_multibase_to_raw_invalid_prefix():
    """A multibase string with an unknown multicodec prefix should raise."""
    invalid_mb = multibase.encode("base58btc", b"\x00\x00" + b"\x01" * 32).decode("ascii")
    with pytest.raises(InvalidParameterError, match="Unknown multicodec prefix"):
        crypto.multibase_to_raw_public_key(invalid_mb)
