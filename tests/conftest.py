# tests/conftest.py
import pytest

from bbscred import api
from bbscred.bbs.ciphersuites import BLS12381_SHA256, BLS12381_SHAKE256

# Fixed key material so every module signs with the same, reproducible keys.
KEY_MATERIAL = bytes.fromhex(
    "746869732d49532d6a7573742d616e2d546573742d494b4d2d746f2d67656e65726174652d246528724074232d6b6579"
)
KEY_INFO = b"this-IS-some-key-metadata-to-be-used-in-test-key-gen"

MESSAGES = [
    b"9872ad089e452c7b6e283dfac2a80d58e8d0ff71cc4d5e310a1debdda4a45f02",
    b"c344136d9ab02da4dd5908bbba913ae6f58c2cc844b802a6f811f5fb075f9b80",
    b"7372e9daa5ed31e6cd5c825eac1b855e84476a1d94932aa348e07b73",
    b"77fe97eb97a1ebe2e81e4e3597a3ee740a66e9ef2412472c",
    b"496694774c5604ab1b2544eababcf0f53278ff50",
]


@pytest.fixture(scope="session")
def shake_suite():
    """The SHAKE-256 ciphersuite."""
    return BLS12381_SHAKE256


@pytest.fixture(scope="session")
def sha_suite():
    """The SHA-256 ciphersuite."""
    return BLS12381_SHA256


@pytest.fixture(scope="session", params=["BLS12381_SHAKE256", "BLS12381_SHA256"])
def suite(request):
    """Runs a test once per supported ciphersuite."""
    return request.param


@pytest.fixture(scope="session")
def key_pair(shake_suite):
    """A deterministic SHAKE-256 key pair."""
    return api.generate_key_pair(KEY_MATERIAL, shake_suite, KEY_INFO)


@pytest.fixture(scope="session")
def messages():
    return list(MESSAGES)


@pytest.fixture(scope="session")
def signature(key_pair, messages):
    """A SHAKE-256 signature over `messages` with an empty header."""
    return api.sign(key_pair.secret_key_bytes, key_pair.public_key_bytes, b"", messages, key_pair.ciphersuite)
