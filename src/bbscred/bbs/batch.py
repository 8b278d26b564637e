"""Batched BBS signature verification.

For items (W_i, A_i, e_i, B_i) and random 64-bit weights d_i the batch is
accepted when

    prod_i e(d_i * A_i, W_i + BP2 * e_i) * e(sum_i d_i * B_i, -BP2) == 1

which costs one Miller loop per item plus one, and a single final
exponentiation. A forged item passes only with probability about 2^-64.
Miller loops can be sharded across worker processes; each worker returns a
partial Fp12 product and the parent combines them.
"""
from __future__ import annotations

import logging
import secrets
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from ..errors import BBSCredError
from ..utils.curves import G1Point, G2Point
from ..utils.fields import Fp12
from ..utils.pairing import G2Prepared, final_exponentiate, miller_loop
from .ciphersuites import Ciphersuite
from .core import MessageLike, calculate_b, calculate_domain, messages_to_scalars, octets_to_pubkey, \
    octets_to_signature
from .generators import create_generators

logger = logging.getLogger(__name__)

__all__ = ["BatchItem", "batch_verify"]

WEIGHT_BITS = 64


@dataclass(frozen=True)
class BatchItem:
    """One signature to verify in a batch."""
    public_key: bytes
    signature: bytes
    messages: Tuple[MessageLike, ...] = field(default_factory=tuple)
    header: bytes = b""


def _random_weight() -> int:
    while True:
        weight = secrets.randbits(WEIGHT_BITS)
        if weight:
            return weight


def _miller_chunk(pairs: Sequence[Tuple[G1Point, G2Point]]) -> Fp12:
    return miller_loop([(p, G2Prepared(q)) for p, q in pairs])


def _chunks(items: list, count: int) -> List[list]:
    size = -(-len(items) // count)
    return [items[i:i + size] for i in range(0, len(items), size)]


def batch_verify(items: Sequence[BatchItem], ciphersuite: Ciphersuite, workers: int = 1) -> bool:
    """Verifies many signatures at once.

    Args:
        items: The signatures to check. An empty batch is rejected.
        ciphersuite: The ciphersuite all items were signed with.
        workers: Number of processes for the Miller loops; 1 runs inline.

    Returns:
        True only if every item is valid. Malformed items yield False.
    """
    if not items:
        logger.debug("Batch rejected: no items.")
        return False
    started = time.perf_counter()
    api_id = ciphersuite.api_id
    pairs: List[Tuple[G1Point, G2Point]] = []
    b_sum = G1Point.identity()
    try:
        for item in items:
            a, e = octets_to_signature(item.signature, ciphersuite)
            w = octets_to_pubkey(item.public_key)
            msg_scalars = messages_to_scalars(item.messages, api_id, ciphersuite)
            generators = create_generators(len(msg_scalars) + 1, api_id, ciphersuite)
            domain = calculate_domain(item.public_key, generators, item.header, api_id, ciphersuite)
            b = calculate_b(generators, domain, msg_scalars, ciphersuite)
            weight = _random_weight()
            pairs.append((a.multiply_unsafe(weight), w + ciphersuite.bp2_table.multiply_unsafe(e)))
            b_sum = b_sum + b.multiply_unsafe(weight)
    except (BBSCredError, ValueError, TypeError) as exc:
        logger.debug("Batch rejected: %s", exc)
        return False

    if b_sum.is_identity() or any(q.is_identity() for _, q in pairs):
        logger.debug("Batch rejected: degenerate pairing input.")
        return False
    if workers > 1 and len(pairs) > 1:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            partials = list(pool.map(_miller_chunk, _chunks(pairs, workers)))
    else:
        partials = [_miller_chunk(pairs)]

    f = miller_loop([(b_sum, ciphersuite.bp2_neg_prepared)])
    for partial in partials:
        f = f * partial
    valid = final_exponentiate(f).is_one()
    logger.debug("Batch of %d verified in %.3fs: %s", len(items), time.perf_counter() - started, valid)
    return valid
