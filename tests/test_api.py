# tests/test_api.py
import pytest

import bbscred
from bbscred import api
from bbscred.errors import InvalidLengthError, InvalidParameterError, InvalidScalarError, UnknownCiphersuiteError
from bbscred.utils.fields import R


class TestKeyPairs:

    def test_seeded_key_pair_is_reproducible(self, suite):
        seed = b"\x07" * 32
        a = api.generate_key_pair(seed, suite)
        b = api.generate_key_pair(seed, suite)
        assert a.secret_key == b.secret_key
        assert a.public_key == b.public_key
        assert len(a.secret_key_bytes) == 32
        assert len(a.public_key_bytes) == 96
        assert a.ciphersuite == suite

    def test_random_key_pairs_differ(self):
        assert api.generate_key_pair().public_key != api.generate_key_pair().public_key

    def test_secret_key_to_public_key(self, key_pair):
        assert api.secret_key_to_public_key(key_pair.secret_key_bytes) == key_pair.public_key_bytes

    def test_secret_key_validation(self):
        with pytest.raises(InvalidLengthError):
            api.secret_key_to_public_key(b"\x01" * 31)
        with pytest.raises(InvalidScalarError):
            api.secret_key_to_public_key(bytes(32))
        with pytest.raises(InvalidScalarError):
            api.secret_key_to_public_key(R.to_bytes(32, "big"))

    def test_unknown_ciphersuite(self):
        with pytest.raises(UnknownCiphersuiteError):
            api.generate_key_pair(ciphersuite="BLS12381_NOPE")


class TestSignAndProve:

    def test_end_to_end(self, suite):
        """Sign, verify, derive a proof and verify it, for each ciphersuite."""
        kp = api.generate_key_pair(b"\x11" * 32, suite)
        msgs = [b"first", "second", b"third"]
        sig = api.sign(kp.secret_key_bytes, kp.public_key_bytes, b"hdr", msgs, suite)
        assert api.verify_signature(kp.public_key_bytes, sig, b"hdr", msgs, suite)

        prf = api.derive_proof(kp.public_key_bytes, sig, b"hdr", msgs, b"ph", [1], suite)
        assert api.verify_proof(kp.public_key_bytes, prf, b"hdr", b"ph", ["second"], [1], suite)
        assert not api.verify_proof(kp.public_key_bytes, prf, b"hdr", b"ph", ["third"], [1], suite)

    def test_public_key_is_optional(self, key_pair):
        with_pk = api.sign(key_pair.secret_key_bytes, key_pair.public_key_bytes, b"", [b"m"])
        without_pk = api.sign(key_pair.secret_key_bytes, None, b"", [b"m"])
        assert with_pk == without_pk

    def test_package_exports(self):
        assert bbscred.sign is api.sign
        assert bbscred.DEFAULT_CIPHERSUITE == "BLS12381_SHAKE256"
        assert bbscred.__version__


class TestUntrustedInput:
    """Verification predicates return False for anything they cannot parse."""

    @pytest.fixture(scope="class")
    def derived(self, key_pair, signature, messages):
        proof = api.derive_proof(key_pair.public_key_bytes, signature, b"", messages, b"ph", [1])
        return key_pair.public_key_bytes, proof

    def test_valid_proof(self, derived, messages):
        pk, proof = derived
        assert api.verify_proof(pk, proof, b"", b"ph", [messages[1]], [1])

    @pytest.mark.parametrize("indexes", [["1"], [1.0], [True], [None]])
    def test_bad_disclosed_indexes(self, derived, messages, indexes):
        pk, proof = derived
        assert not api.verify_proof(pk, proof, b"", b"ph", [messages[1]], indexes)

    @pytest.mark.parametrize("disclosed", [[None], [1], [1.5]])
    def test_bad_disclosed_messages(self, derived, disclosed):
        pk, proof = derived
        assert not api.verify_proof(pk, proof, b"", b"ph", disclosed, [1])

    def test_unknown_ciphersuite_in_proof_verify(self, derived, messages):
        pk, proof = derived
        assert not api.verify_proof(pk, proof, b"", b"ph", [messages[1]], [1], ciphersuite="bogus")

    def test_non_bytes_proof_inputs(self, derived, messages):
        pk, proof = derived
        assert not api.verify_proof(None, proof, b"", b"ph", [messages[1]], [1])
        assert not api.verify_proof(pk, "not-bytes", b"", b"ph", [messages[1]], [1])
        assert not api.verify_proof(pk, proof, None, b"ph", [messages[1]], [1])
        assert not api.verify_proof(pk, proof, b"", b"ph", None, [1])

    def test_unknown_ciphersuite_in_verify_signature(self, key_pair, signature, messages):
        assert not api.verify_signature(key_pair.public_key_bytes, signature, b"", messages, ciphersuite="bogus")

    def test_non_bytes_signature_inputs(self, key_pair, signature, messages):
        pk = key_pair.public_key_bytes
        assert not api.verify_signature(pk, None, b"", messages)
        assert not api.verify_signature(pk, signature, b"", [30] + messages[1:])
        assert not api.verify_signature(pk, signature, b"", None)

    def test_int_message_is_not_zero_bytes(self, key_pair):
        """An int message is rejected instead of signing that many NUL bytes"""
        sig = api.sign(key_pair.secret_key_bytes, key_pair.public_key_bytes, messages=[b"\x00" * 30])
        assert not api.verify_signature(key_pair.public_key_bytes, sig, messages=[30])
        with pytest.raises(InvalidParameterError):
            api.sign(key_pair.secret_key_bytes, key_pair.public_key_bytes, messages=[30])


def test_utils_exports_resolve():
    import bbscred.utils as utils
    from bbscred.utils import crypto, interop

    for name in utils.__all__:
        assert hasattr(utils, name), name
    assert callable(crypto.derive_anonymous_id)
    assert callable(interop.g2_to_py_ecc)
    assert sorted(interop.__all__) == [
        "g1_from_py_ecc", "g1_to_py_ecc", "g2_compress_py_ecc", "g2_from_py_ecc", "g2_to_py_ecc",
    ]
