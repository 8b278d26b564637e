"""BBS signatures and selective-disclosure proofs over BLS12-381."""
from .ciphersuites import BLS12381_SHA256, BLS12381_SHAKE256, CIPHERSUITES, Ciphersuite, get_ciphersuite
from .generators import Generators, create_generators
from .core import key_gen, sk_to_pk, sign, verify, octets_to_signature, octets_to_pubkey
from .proof import proof_gen, proof_verify, octets_to_proof, mocked_calculate_random_scalars
from .batch import BatchItem, batch_verify

__all__ = [
    # from .ciphersuites
    "Ciphersuite", "BLS12381_SHAKE256", "BLS12381_SHA256", "CIPHERSUITES", "get_ciphersuite",
    # from .generators
    "Generators", "create_generators",
    # from .core
    "key_gen", "sk_to_pk", "sign", "verify", "octets_to_signature", "octets_to_pubkey",
    # from .proof
    "proof_gen", "proof_verify", "octets_to_proof", "mocked_calculate_random_scalars",
    # from .batch
    "BatchItem", "batch_verify",
]
