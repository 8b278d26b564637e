"""Deterministic generator derivation for BBS.

Generators are public and reproducible: signer and verifier both call
`create_generators` with the same count and api_id and obtain the same
points, with no trusted setup.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..errors import InvalidParameterError
from ..utils.curves import G1Point
from ..utils.octets import i2osp
from .ciphersuites import Ciphersuite

__all__ = ["Generators", "create_generators"]

MESSAGE_GENERATOR_SEED = b"MESSAGE_GENERATOR_SEED"
SEED_DST_SUFFIX = b"SIG_GENERATOR_SEED_"
GENERATOR_DST_SUFFIX = b"SIG_GENERATOR_DST_"


@dataclass(frozen=True)
class Generators:
    """The blinding generator Q1 followed by one generator per message.

    Attributes:
        q1: The domain blinding generator.
        h: Message generators H_1..H_L.
    """
    q1: G1Point
    h: Tuple[G1Point, ...]

    def __len__(self) -> int:
        return 1 + len(self.h)


def _derive(count: int, api_id: bytes, ciphersuite: Ciphersuite) -> List[G1Point]:
    expand = ciphersuite.expand_message
    length = ciphersuite.expand_len
    seed_dst = api_id + SEED_DST_SUFFIX
    generator_dst = api_id + GENERATOR_DST_SUFFIX
    v = expand(api_id + MESSAGE_GENERATOR_SEED, seed_dst, length)
    points = []
    for i in range(1, count + 1):
        v = expand(v + i2osp(i, 8), seed_dst, length)
        points.append(ciphersuite.hash_to_curve(v, generator_dst))
    return points


def create_generators(count: int, api_id: bytes, ciphersuite: Ciphersuite) -> Generators:
    """Creates `count` generators: Q1 and `count - 1` message generators.

    Args:
        count: Number of points, L + 1 for L messages. Must be at least 1.
        api_id: The API identifier the generators are bound to.
        ciphersuite: Supplies expand_message and hash_to_curve.

    Raises:
        InvalidParameterError: If `count` is not positive.
    """
    if count < 1:
        raise InvalidParameterError(f"Generator count must be at least 1 (got {count}).")
    points = _derive(count, api_id, ciphersuite)
    return Generators(q1=points[0], h=tuple(points[1:]))
