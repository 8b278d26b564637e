# tests/bbs/test_proof.py
import pytest

from bbscred.bbs import core, proof
from bbscred.bbs.proof import mocked_calculate_random_scalars, octets_to_proof, proof_gen, proof_verify
from bbscred.errors import InvalidParameterError, MalformedProofError
from bbscred.utils.curves import G1Point
from bbscred.utils.fields import R
from bbscred.utils.octets import i2osp

PRESENTATION_HEADER = b"bbs-presentation-nonce"
SEED = b"332e313431353932363533353839373933323338343632363433333833323739"

# First and last byte of each component of a proof over five messages
# disclosing three: Abar, Bbar, D, then e, r1, r3, two m-hats and the challenge.
PROOF_COMPONENTS = [(0, 48), (48, 48), (96, 48)] + [(144 + 32 * i, 32) for i in range(6)]
FLIP_POSITIONS = sorted(
    {start for start, _ in PROOF_COMPONENTS} | {start + size - 1 for start, size in PROOF_COMPONENTS}
)


@pytest.fixture(scope="module")
def pk(key_pair):
    return key_pair.public_key_bytes


@pytest.fixture(scope="module")
def sk(key_pair):
    return int.from_bytes(key_pair.secret_key_bytes, "big")


@pytest.fixture(scope="module")
def partial_proof(pk, signature, messages, shake_suite):
    """A proof over `messages` disclosing indexes 0, 2 and 4."""
    return proof_gen(pk, signature, b"", PRESENTATION_HEADER, messages, [0, 2, 4], shake_suite)


class TestProofGenVerify:

    def test_partial_disclosure(self, pk, partial_proof, messages, shake_suite):
        disclosed = [messages[0], messages[2], messages[4]]
        assert len(partial_proof) == 3 * 48 + (4 + 2) * 32
        assert proof_verify(pk, partial_proof, b"", PRESENTATION_HEADER, disclosed, [0, 2, 4], shake_suite)

    def test_all_disclosed_and_none_disclosed(self, pk, signature, messages, shake_suite):
        everything = proof_gen(pk, signature, b"", b"", messages, range(len(messages)), shake_suite)
        assert len(everything) == 3 * 48 + 4 * 32
        assert proof_verify(pk, everything, b"", b"", messages, list(range(len(messages))), shake_suite)
        nothing = proof_gen(pk, signature, b"", b"", messages, [], shake_suite)
        assert proof_verify(pk, nothing, b"", b"", [], [], shake_suite)

    def test_proofs_are_unlinkable(self, pk, signature, messages, shake_suite, partial_proof):
        """Two proofs for the same disclosure share no bytes-level identity."""
        again = proof_gen(pk, signature, b"", PRESENTATION_HEADER, messages, [0, 2, 4], shake_suite)
        assert again != partial_proof
        assert again[:48] != partial_proof[:48]

    def test_wrong_presentation_header(self, pk, partial_proof, messages, shake_suite):
        disclosed = [messages[0], messages[2], messages[4]]
        assert not proof_verify(pk, partial_proof, b"", b"other", disclosed, [0, 2, 4], shake_suite)

    def test_wrong_disclosed_message(self, pk, partial_proof, messages, shake_suite):
        disclosed = [messages[0], b"forged", messages[4]]
        assert not proof_verify(pk, partial_proof, b"", PRESENTATION_HEADER, disclosed, [0, 2, 4], shake_suite)

    def test_wrong_indexes(self, pk, partial_proof, messages, shake_suite):
        disclosed = [messages[0], messages[2], messages[4]]
        assert not proof_verify(pk, partial_proof, b"", PRESENTATION_HEADER, disclosed, [0, 1, 4], shake_suite)

    def test_unsorted_indexes_are_paired_with_messages(self, pk, partial_proof, messages, shake_suite):
        """Indexes may arrive in any order as long as messages follow them."""
        disclosed = [messages[4], messages[0], messages[2]]
        assert proof_verify(pk, partial_proof, b"", PRESENTATION_HEADER, disclosed, [4, 0, 2], shake_suite)

    def test_wrong_public_key(self, partial_proof, messages, shake_suite):
        other = core.sk_to_pk(98765, shake_suite)
        disclosed = [messages[0], messages[2], messages[4]]
        assert not proof_verify(other, partial_proof, b"", PRESENTATION_HEADER, disclosed, [0, 2, 4], shake_suite)

    @pytest.mark.parametrize("position", FLIP_POSITIONS)
    def test_flipped_proof_byte_fails(self, pk, partial_proof, messages, shake_suite, position):
        disclosed = [messages[0], messages[2], messages[4]]
        tampered = bytearray(partial_proof)
        tampered[position] ^= 0x01
        assert not proof_verify(pk, bytes(tampered), b"", PRESENTATION_HEADER, disclosed, [0, 2, 4], shake_suite)

    def test_header_is_bound(self, sk, pk, messages, shake_suite):
        sig = core.sign(sk, pk, b"header", messages, shake_suite)
        prf = proof_gen(pk, sig, b"header", b"", messages, [1], shake_suite)
        assert proof_verify(pk, prf, b"header", b"", [messages[1]], [1], shake_suite)
        assert not proof_verify(pk, prf, b"", b"", [messages[1]], [1], shake_suite)


class TestAgeScenario:

    @pytest.fixture(scope="class")
    def age_setup(self, sk, pk, shake_suite):
        messages = ["age:30", "id:abc123"]
        sig = core.sign(sk, pk, b"", messages, shake_suite)
        return sig, messages

    def test_disclose_id_only(self, pk, age_setup, shake_suite):
        sig, messages = age_setup
        prf = proof_gen(pk, sig, b"", b"", messages, [1], shake_suite)
        assert proof_verify(pk, prf, b"", b"", ["id:abc123"], [1], shake_suite)

    def test_message_claimed_at_wrong_index(self, pk, age_setup, shake_suite):
        """The id message presented as if it were message 0 is rejected."""
        sig, messages = age_setup
        prf = proof_gen(pk, sig, b"", b"", messages, [1], shake_suite)
        assert not proof_verify(pk, prf, b"", b"", ["id:abc123"], [0], shake_suite)


class TestProofErrors:

    def test_index_out_of_range(self, pk, signature, messages, shake_suite):
        with pytest.raises(MalformedProofError, match="out of range"):
            proof_gen(pk, signature, b"", b"", messages, [len(messages)], shake_suite)

    def test_repeated_index(self, pk, signature, messages, shake_suite):
        with pytest.raises(MalformedProofError, match="must not repeat"):
            proof_gen(pk, signature, b"", b"", messages, [1, 1], shake_suite)

    @pytest.mark.parametrize("index", ["2", 2.0, True, None])
    def test_non_integer_index_verifies_false(self, pk, partial_proof, messages, shake_suite, index):
        disclosed = [messages[0], messages[2], messages[4]]
        assert not proof_verify(pk, partial_proof, b"", PRESENTATION_HEADER, disclosed, [0, index, 4], shake_suite)

    def test_non_integer_index_rejected_on_generation(self, pk, signature, messages, shake_suite):
        with pytest.raises(MalformedProofError, match="not an integer"):
            proof_gen(pk, signature, b"", b"", messages, ["1"], shake_suite)

    def test_non_byte_disclosed_message_verifies_false(self, pk, partial_proof, messages, shake_suite):
        disclosed = [messages[0], None, messages[4]]
        assert not proof_verify(pk, partial_proof, b"", PRESENTATION_HEADER, disclosed, [0, 2, 4], shake_suite)

    def test_mismatched_disclosed_counts_verify_false(self, pk, partial_proof, messages, shake_suite):
        assert not proof_verify(pk, partial_proof, b"", PRESENTATION_HEADER, [messages[0]], [0, 2, 4], shake_suite)

    def test_truncated_proof(self, pk, partial_proof, shake_suite):
        with pytest.raises(MalformedProofError, match="Invalid proof length"):
            octets_to_proof(partial_proof[:-1], shake_suite)
        assert not proof_verify(pk, partial_proof[:-1], b"", b"", [], [], shake_suite)

    def test_identity_point_in_proof(self, partial_proof, shake_suite):
        bad = G1Point.identity().to_bytes() + partial_proof[48:]
        with pytest.raises(MalformedProofError, match="identity"):
            octets_to_proof(bad, shake_suite)

    @pytest.mark.parametrize("value", [0, R])
    def test_scalar_out_of_range(self, partial_proof, shake_suite, value):
        bad = partial_proof[:-32] + i2osp(value, 32)
        with pytest.raises(MalformedProofError, match="out of range"):
            octets_to_proof(bad, shake_suite)

    def test_codec_roundtrip(self, partial_proof, shake_suite):
        decoded = octets_to_proof(partial_proof, shake_suite)
        assert len(decoded.commitments) == 2
        assert proof.proof_to_octets(decoded) == partial_proof


class TestMockedScalars:

    def test_mocked_scalars_are_deterministic(self, shake_suite):
        dst = shake_suite.api_id + b"MOCK_RANDOM_SCALARS_DST_"
        a = mocked_calculate_random_scalars(10, SEED, dst, shake_suite)
        b = mocked_calculate_random_scalars(10, SEED, dst, shake_suite)
        assert a == b
        assert len(a) == 10
        assert all(0 <= s < R for s in a)

    def test_mocked_scalars_limit(self, shake_suite):
        with pytest.raises(InvalidParameterError):
            mocked_calculate_random_scalars(2000, SEED, b"dst", shake_suite)

    def test_fixed_scalars_give_reproducible_proofs(self, pk, signature, messages, shake_suite):
        dst = shake_suite.api_id + b"MOCK_RANDOM_SCALARS_DST_"

        def draw(count):
            return mocked_calculate_random_scalars(count, SEED, dst, shake_suite)

        first = proof_gen(pk, signature, b"", b"", messages, [0], shake_suite, random_scalars=draw)
        second = proof_gen(pk, signature, b"", b"", messages, [0], shake_suite, random_scalars=draw)
        assert first == second
        assert proof_verify(pk, first, b"", b"", [messages[0]], [0], shake_suite)

    def test_wrong_scalar_count(self, pk, signature, messages, shake_suite):
        with pytest.raises(InvalidParameterError, match="random scalars"):
            proof_gen(pk, signature, b"", b"", messages, [0], shake_suite, random_scalars=lambda n: [1] * (n - 1))
