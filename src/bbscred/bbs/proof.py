"""BBS selective-disclosure proofs.

A holder of a signature over L messages proves knowledge of the signature
while revealing only the messages at `disclosed_indexes`. The proof is a
Schnorr-style sigma protocol made non-interactive with a Fiat-Shamir
challenge:

    ProofInit -> ProofChallengeCalculate -> ProofFinalize    (prover)
    ProofVerifyInit -> ProofChallengeCalculate -> pairing    (verifier)

Proof octets are Abar || Bbar || D || eHat || r1Hat || r3Hat || mHat_1..U || c,
i.e. 3 * 48 + (5 + U) * 32 bytes for U undisclosed messages.
"""
from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..errors import BBSCredError, InvalidParameterError, MalformedProofError
from ..utils.curves import G1Point
from ..utils.fields import R, fr_add, fr_inv, fr_mul, fr_sub
from ..utils.octets import i2osp, os2ip
from ..utils.pairing import pairing_batch
from .ciphersuites import Ciphersuite
from .core import H2S_SUFFIX, U64, MessageLike, calculate_b, calculate_domain, messages_to_scalars, \
    octets_to_pubkey, octets_to_signature, serialize
from .generators import Generators, create_generators

logger = logging.getLogger(__name__)

__all__ = [
    "InitResult", "Proof",
    "calculate_random_scalars", "mocked_calculate_random_scalars",
    "proof_init", "proof_challenge_calculate", "proof_finalize", "proof_verify_init",
    "core_proof_gen", "core_proof_verify",
    "proof_to_octets", "octets_to_proof",
    "proof_gen", "proof_verify",
]

RandomScalarsFn = Callable[[int], List[int]]


@dataclass(frozen=True)
class InitResult:
    """Points committed to before the challenge is known."""
    abar: G1Point
    bbar: G1Point
    d: G1Point
    t1: G1Point
    t2: G1Point
    domain: int


@dataclass(frozen=True)
class Proof:
    """A decoded proof.

    Attributes:
        abar, bbar, d: Randomized signature points.
        e_hat, r1_hat, r3_hat: Responses for e, r1 and r3.
        commitments: Responses mHat_j for the undisclosed messages.
        challenge: The Fiat-Shamir challenge c.
    """
    abar: G1Point
    bbar: G1Point
    d: G1Point
    e_hat: int
    r1_hat: int
    r3_hat: int
    commitments: Tuple[int, ...]
    challenge: int


# --- Random Scalars ---

def calculate_random_scalars(count: int) -> List[int]:
    """Draws `count` uniform scalars from 48 bytes of OS randomness each."""
    return [os2ip(secrets.token_bytes(48)) % R for _ in range(count)]


def mocked_calculate_random_scalars(count: int, seed: bytes, dst: bytes, ciphersuite: Ciphersuite) -> List[int]:
    """Deterministic scalars expanded from `seed`; for reproducible fixtures only.

    Raises:
        InvalidParameterError: If the requested output exceeds 65535 bytes.
    """
    length = ciphersuite.expand_len
    out_len = length * count
    if out_len > 65535:
        raise InvalidParameterError(f"Cannot expand {count} mocked scalars.")
    v = ciphersuite.expand_message(seed, dst, out_len)
    return [os2ip(v[i * length:(i + 1) * length]) % R for i in range(count)]


# --- Index Handling ---

def _check_indexes(indexes: Sequence[int], length: int) -> List[int]:
    for i in indexes:
        if isinstance(i, bool) or not isinstance(i, int):
            raise MalformedProofError(f"Disclosed index {i!r} is not an integer.")
    ordered = sorted(indexes)
    if len(set(ordered)) != len(ordered):
        raise MalformedProofError("Disclosed indexes must not repeat.")
    for i in ordered:
        if not 0 <= i < length:
            raise MalformedProofError(f"Disclosed index {i} is out of range for {length} messages.")
    return ordered


def _pair_disclosed(indexes: Sequence[int], messages: Sequence, length: int) -> Tuple[List[int], List]:
    if len(indexes) != len(messages):
        raise MalformedProofError(
            f"Got {len(messages)} disclosed messages for {len(indexes)} disclosed indexes."
        )
    _check_indexes(indexes, length)
    pairs = sorted(zip(indexes, messages), key=lambda item: item[0])
    return [i for i, _ in pairs], [m for _, m in pairs]


# --- Prover ---

def proof_init(pk: bytes, signature: Tuple[G1Point, int], generators: Generators, random_scalars: Sequence[int],
               header: bytes, msg_scalars: Sequence[int], undisclosed_indexes: Sequence[int],
               api_id: bytes, ciphersuite: Ciphersuite) -> InitResult:
    """Blinds the signature and commits to the undisclosed messages.

    Raises:
        InvalidParameterError: If the number of random scalars is not U + 5.
    """
    a, e = signature
    u = len(undisclosed_indexes)
    if len(random_scalars) != u + 5:
        raise InvalidParameterError(f"Expected {u + 5} random scalars (got {len(random_scalars)}).")
    r1, r2, e_tilde, r1_tilde, r3_tilde = random_scalars[:5]
    m_tilde = random_scalars[5:]

    domain = calculate_domain(pk, generators, header, api_id, ciphersuite)
    b = calculate_b(generators, domain, msg_scalars, ciphersuite)
    d = b.multiply(r2)
    abar = a.multiply(fr_mul(r1, r2))
    bbar = d.multiply(r1) - abar.multiply_unsafe(e)
    t1 = abar.multiply(e_tilde) + d.multiply(r1_tilde)
    t2 = d.multiply(r3_tilde)
    for j, m_t in zip(undisclosed_indexes, m_tilde):
        t2 = t2 + generators.h[j].multiply(m_t)
    return InitResult(abar=abar, bbar=bbar, d=d, t1=t1, t2=t2, domain=domain)


def proof_challenge_calculate(init_res: InitResult, disclosed_indexes: Sequence[int],
                              disclosed_scalars: Sequence[int], presentation_header: bytes,
                              api_id: bytes, ciphersuite: Ciphersuite) -> int:
    """Hashes the public proof transcript into the challenge scalar."""
    if len(presentation_header) > 2 ** 64 - 1:
        raise InvalidParameterError("Presentation header is too long.")
    c_arr: list = [U64(len(disclosed_indexes))]
    for i, m in zip(disclosed_indexes, disclosed_scalars):
        c_arr.extend((U64(i), m))
    c_arr.extend((init_res.abar, init_res.bbar, init_res.d, init_res.t1, init_res.t2, init_res.domain))
    c_octs = serialize(c_arr) + i2osp(len(presentation_header), 8) + bytes(presentation_header)
    return ciphersuite.hash_to_scalar(c_octs, api_id + H2S_SUFFIX)


def proof_finalize(init_res: InitResult, challenge: int, e: int, random_scalars: Sequence[int],
                   undisclosed_scalars: Sequence[int]) -> Proof:
    """Computes the sigma-protocol responses."""
    r1, r2, e_tilde, r1_tilde, r3_tilde = random_scalars[:5]
    m_tilde = random_scalars[5:]
    r3 = fr_inv(r2)
    e_hat = fr_add(e_tilde, fr_mul(e, challenge))
    r1_hat = fr_sub(r1_tilde, fr_mul(r1, challenge))
    r3_hat = fr_sub(r3_tilde, fr_mul(r3, challenge))
    commitments = tuple(fr_add(m_t, fr_mul(m, challenge)) for m_t, m in zip(m_tilde, undisclosed_scalars))
    return Proof(
        abar=init_res.abar, bbar=init_res.bbar, d=init_res.d,
        e_hat=e_hat, r1_hat=r1_hat, r3_hat=r3_hat,
        commitments=commitments, challenge=challenge,
    )


def core_proof_gen(pk: bytes, signature: bytes, generators: Generators, header: bytes, presentation_header: bytes,
                   msg_scalars: Sequence[int], disclosed_indexes: Sequence[int], api_id: bytes,
                   ciphersuite: Ciphersuite, random_scalars: Optional[RandomScalarsFn] = None) -> bytes:
    """Generates proof octets for already-mapped message scalars.

    Raises:
        MalformedProofError: If the disclosed indexes are invalid.
        InvalidSignatureError: If the signature cannot be decoded.
    """
    a, e = octets_to_signature(signature, ciphersuite)
    length = len(msg_scalars)
    disclosed = _check_indexes(disclosed_indexes, length)
    disclosed_set = set(disclosed)
    undisclosed = [i for i in range(length) if i not in disclosed_set]
    draw = random_scalars or calculate_random_scalars
    scalars = draw(len(undisclosed) + 5)

    init_res = proof_init(pk, (a, e), generators, scalars, header, msg_scalars, undisclosed, api_id, ciphersuite)
    challenge = proof_challenge_calculate(
        init_res, disclosed, [msg_scalars[i] for i in disclosed], presentation_header, api_id, ciphersuite
    )
    proof = proof_finalize(init_res, challenge, e, scalars, [msg_scalars[i] for i in undisclosed])
    return proof_to_octets(proof)


# --- Verifier ---

def proof_verify_init(pk: bytes, proof: Proof, generators: Generators, header: bytes,
                      disclosed_scalars: Sequence[int], disclosed_indexes: Sequence[int],
                      api_id: bytes, ciphersuite: Ciphersuite) -> InitResult:
    """Recomputes the prover's commitments from the proof responses."""
    length = len(disclosed_indexes) + len(proof.commitments)
    disclosed_set = set(_check_indexes(disclosed_indexes, length))
    undisclosed = [i for i in range(length) if i not in disclosed_set]
    c = proof.challenge

    domain = calculate_domain(pk, generators, header, api_id, ciphersuite)
    t1 = proof.bbar.multiply_unsafe(c) + proof.abar.multiply_unsafe(proof.e_hat) + proof.d.multiply_unsafe(proof.r1_hat)
    bv = ciphersuite.p1 + generators.q1.multiply_unsafe(domain)
    for i, m in zip(disclosed_indexes, disclosed_scalars):
        bv = bv + generators.h[i].multiply_unsafe(m)
    t2 = bv.multiply_unsafe(c) + proof.d.multiply_unsafe(proof.r3_hat)
    for j, m_hat in zip(undisclosed, proof.commitments):
        t2 = t2 + generators.h[j].multiply_unsafe(m_hat)
    return InitResult(abar=proof.abar, bbar=proof.bbar, d=proof.d, t1=t1, t2=t2, domain=domain)


def core_proof_verify(pk: bytes, proof: bytes, generators: Generators, header: bytes, presentation_header: bytes,
                      disclosed_scalars: Sequence[int], disclosed_indexes: Sequence[int], api_id: bytes,
                      ciphersuite: Ciphersuite) -> bool:
    """Verifies proof octets against already-mapped disclosed scalars.

    Raises:
        MalformedProofError: If the proof cannot be decoded.
        InvalidPointError: If the public key is invalid.
    """
    decoded = octets_to_proof(proof, ciphersuite)
    w = octets_to_pubkey(pk)
    init_res = proof_verify_init(pk, decoded, generators, header, disclosed_scalars, disclosed_indexes,
                                 api_id, ciphersuite)
    challenge = proof_challenge_calculate(init_res, disclosed_indexes, disclosed_scalars, presentation_header,
                                          api_id, ciphersuite)
    if challenge != decoded.challenge:
        logger.debug("Proof rejected: challenge mismatch.")
        return False
    result = pairing_batch([(decoded.abar, w), (decoded.bbar, ciphersuite.bp2_neg_prepared)])
    return result.is_one()


# --- Proof Codec ---

def proof_to_octets(proof: Proof) -> bytes:
    scalars = [proof.e_hat, proof.r1_hat, proof.r3_hat, *proof.commitments, proof.challenge]
    return proof.abar.to_bytes() + proof.bbar.to_bytes() + proof.d.to_bytes() + serialize(scalars)


def octets_to_proof(octets: bytes, ciphersuite: Ciphersuite) -> Proof:
    """Decodes and validates proof octets.

    Raises:
        MalformedProofError: For a bad length, identity points, or scalars
            equal to zero or not below r.
        InvalidPointError: If a point does not decode.
    """
    point_len = ciphersuite.octet_point_length
    scalar_len = ciphersuite.octet_scalar_length
    floor = 3 * point_len + 4 * scalar_len
    if len(octets) < floor or (len(octets) - floor) % scalar_len != 0:
        raise MalformedProofError(f"Invalid proof length {len(octets)}.")

    points = []
    for k in range(3):
        point = G1Point.from_bytes(octets[k * point_len:(k + 1) * point_len])
        if point.is_identity():
            raise MalformedProofError("Proof points must not be the identity.")
        points.append(point)

    scalars = []
    for offset in range(3 * point_len, len(octets), scalar_len):
        s = os2ip(octets[offset:offset + scalar_len])
        if s == 0 or s >= R:
            raise MalformedProofError("Proof scalar out of range.")
        scalars.append(s)

    return Proof(
        abar=points[0], bbar=points[1], d=points[2],
        e_hat=scalars[0], r1_hat=scalars[1], r3_hat=scalars[2],
        commitments=tuple(scalars[3:-1]), challenge=scalars[-1],
    )


# --- Interface ---

def proof_gen(pk: bytes, signature: bytes, header: bytes, presentation_header: bytes,
              messages: Sequence[MessageLike], disclosed_indexes: Sequence[int], ciphersuite: Ciphersuite,
              random_scalars: Optional[RandomScalarsFn] = None) -> bytes:
    """Derives a proof disclosing the messages at `disclosed_indexes`.

    Args:
        pk: The signer's 96-byte public key.
        signature: The 80-byte signature over all `messages`.
        header: The header the signature was created with.
        presentation_header: Context bound into the proof only.
        messages: All signed messages, in signing order.
        disclosed_indexes: Zero-based indexes of the messages to reveal.
        ciphersuite: The ciphersuite in use.
        random_scalars: Override for the scalar source, used by fixtures.

    Raises:
        MalformedProofError: If an index is out of range or repeated.
        InvalidSignatureError: If the signature cannot be decoded.
    """
    api_id = ciphersuite.api_id
    msg_scalars = messages_to_scalars(messages, api_id, ciphersuite)
    generators = create_generators(len(msg_scalars) + 1, api_id, ciphersuite)
    proof = core_proof_gen(pk, signature, generators, header, presentation_header, msg_scalars,
                           disclosed_indexes, api_id, ciphersuite, random_scalars)
    logger.debug("Derived proof disclosing %d of %d messages.", len(disclosed_indexes), len(msg_scalars))
    return proof


def proof_verify(pk: bytes, proof: bytes, header: bytes, presentation_header: bytes,
                 disclosed_messages: Sequence[MessageLike], disclosed_indexes: Sequence[int],
                 ciphersuite: Ciphersuite) -> bool:
    """Verifies a proof. Malformed inputs yield False."""
    api_id = ciphersuite.api_id
    try:
        point_len = ciphersuite.octet_point_length
        scalar_len = ciphersuite.octet_scalar_length
        floor = 3 * point_len + 4 * scalar_len
        if len(proof) < floor or (len(proof) - floor) % scalar_len != 0:
            raise MalformedProofError(f"Invalid proof length {len(proof)}.")
        undisclosed_count = (len(proof) - floor) // scalar_len
        length = len(disclosed_indexes) + undisclosed_count
        indexes, messages = _pair_disclosed(disclosed_indexes, disclosed_messages, length)
        disclosed_scalars = messages_to_scalars(messages, api_id, ciphersuite)
        generators = create_generators(length + 1, api_id, ciphersuite)
        valid = core_proof_verify(pk, proof, generators, header, presentation_header, disclosed_scalars,
                                  indexes, api_id, ciphersuite)
    except (BBSCredError, ValueError, TypeError) as exc:
        logger.debug("Proof rejected: %s", exc)
        return False
    if not valid:
        logger.debug("Proof rejected: verification failed.")
    return valid
