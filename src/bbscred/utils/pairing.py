"""Optimal ate pairing on BLS12-381.

G2 line coefficients are computed once per G2 point (`G2Prepared`) and then
evaluated at any number of G1 points. Several pairings can share one Miller
loop and one final exponentiation, which is how products of pairings are
checked against one.
"""
from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from ..errors import DegeneratePairingError
from .curves import G1Point, G2Point
from .fields import BLS_X, Fp2, Fp12

__all__ = [
    "G2Prepared", "miller_loop", "final_exponentiate",
    "pairing", "pairing_batch", "pairings_equal",
]

LineCoeffs = Tuple[Fp2, Fp2, Fp2]


class G2Prepared:
    """Precomputed Miller-loop line coefficients for a G2 point.

    Attributes:
        point: The G2 point the lines were derived from.
        lines: Per NAF digit, the (c0, c1, c2) triples of its doubling and
            optional addition step.
    """
    __slots__ = ("point", "lines")

    def __init__(self, point: G2Point) -> None:
        if point.is_identity():
            raise DegeneratePairingError("Cannot prepare the G2 point at infinity.")
        self.point = point
        qx, qy = point.to_affine()
        self.lines = _line_coefficients(qx, qy)

    def __getstate__(self):
        return self.point, self.lines

    def __setstate__(self, state) -> None:
        self.point, self.lines = state


def _naf_decomposition(a: int) -> List[int]:
    # Digits below the leading 1, most significant first.
    digits: List[int] = []
    while a > 1:
        if a & 1 == 0:
            digits.insert(0, 0)
        elif a & 3 == 3:
            digits.insert(0, -1)
            a += 1
        else:
            digits.insert(0, 1)
        a >>= 1
    return digits


ATE_NAF = _naf_decomposition(BLS_X)


def _point_double(lines: List[LineCoeffs], rx: Fp2, ry: Fp2, rz: Fp2):
    t0 = ry.square()
    t1 = rz.square()
    t2 = (t1 * 3).mul_by_b()
    t3 = t2 * 3
    t4 = (ry + rz).square() - t1 - t0
    lines.append((t2 - t0, rx.square() * 3, -t4))
    rx = (t0 - t3) * rx * ry / 2
    ry = ((t0 + t3) / 2).square() - t2.square() * 3
    rz = t0 * t4
    return rx, ry, rz


def _point_add(lines: List[LineCoeffs], rx: Fp2, ry: Fp2, rz: Fp2, qx: Fp2, qy: Fp2):
    t0 = ry - qy * rz
    t1 = rx - qx * rz
    lines.append((t0 * qx - t1 * qy, -t0, t1))
    t2 = t1.square()
    t3 = t2 * t1
    t4 = t2 * rx
    t5 = t3 - t4 * 2 + t0.square() * rz
    rx = t1 * t5
    ry = (t4 - t5) * t0 - t3 * ry
    rz = rz * t3
    return rx, ry, rz


def _line_coefficients(qx: Fp2, qy: Fp2) -> List[List[LineCoeffs]]:
    rx, ry, rz = qx, qy, Fp2.one()
    steps: List[List[LineCoeffs]] = []
    for digit in ATE_NAF:
        lines: List[LineCoeffs] = []
        rx, ry, rz = _point_double(lines, rx, ry, rz)
        if digit:
            rx, ry, rz = _point_add(lines, rx, ry, rz, qx, -qy if digit == -1 else qy)
        steps.append(lines)
    return steps


def miller_loop(pairs: Sequence[Tuple[G1Point, G2Prepared]]) -> Fp12:
    """Shared Miller loop over several (P, Q) pairs.

    Identity G1 points contribute nothing and are skipped.
    """
    evaluated = []
    for p, q in pairs:
        if p.is_identity():
            continue
        px, py = p.to_affine()
        evaluated.append((px, py, q.lines))
    f = Fp12.one()
    for i in range(len(ATE_NAF)):
        f = f.square()
        for px, py, steps in evaluated:
            for c0, c1, c2 in steps[i]:
                f = f.mul_014(c0, c1 * px, c2 * py)
    # x is negative
    return f.conjugate()


def final_exponentiate(f: Fp12) -> Fp12:
    """Raises `f` to (p^12 - 1) / r."""
    x = BLS_X
    t0 = f.frobenius_map(6) / f
    t1 = t0.frobenius_map(2) * t0
    t2 = t1.cyclotomic_exp(x).conjugate()
    t3 = t1.cyclotomic_square().conjugate() * t2
    t4 = t3.cyclotomic_exp(x).conjugate()
    t5 = t4.cyclotomic_exp(x).conjugate()
    t6 = t5.cyclotomic_exp(x).conjugate() * t2.cyclotomic_square()
    t7 = t6.cyclotomic_exp(x).conjugate()
    t2_t5_pow_q2 = (t2 * t5).frobenius_map(2)
    t4_t1_pow_q3 = (t4 * t1).frobenius_map(3)
    t6_t1c_pow_q1 = (t6 * t1.conjugate()).frobenius_map(1)
    t7_t3c_t1 = t7 * t3.conjugate() * t1
    return t2_t5_pow_q2 * t4_t1_pow_q3 * t6_t1c_pow_q1 * t7_t3c_t1


def _prepare(q) -> G2Prepared:
    return q if isinstance(q, G2Prepared) else G2Prepared(q)


def pairing(p: G1Point, q, with_final_exp: bool = True) -> Fp12:
    """Computes e(P, Q).

    Args:
        p: A G1 point.
        q: A G2 point or its `G2Prepared` lines.
        with_final_exp: When False, returns the raw Miller-loop value.

    Raises:
        DegeneratePairingError: If either argument is the identity.
    """
    if p.is_identity():
        raise DegeneratePairingError("Cannot compute a pairing with the G1 point at infinity.")
    q = _prepare(q)
    looped = miller_loop([(p, q)])
    return final_exponentiate(looped) if with_final_exp else looped


def pairing_batch(pairs: Iterable[Tuple[G1Point, object]]) -> Fp12:
    """Computes the product of e(P_i, Q_i) with a single final exponentiation.

    Raises:
        DegeneratePairingError: If any point is the identity.
    """
    prepared = []
    for p, q in pairs:
        if p.is_identity() or (isinstance(q, G2Point) and q.is_identity()):
            raise DegeneratePairingError("Cannot compute a pairing with the point at infinity.")
        prepared.append((p, _prepare(q)))
    return final_exponentiate(miller_loop(prepared))


def pairings_equal(pair1: Tuple[G1Point, G2Point], pair2: Tuple[G1Point, G2Point]) -> bool:
    """Checks e(P1, Q1) == e(P2, Q2) as e(P1, Q1) * e(P2, -Q2) == 1.

    Raises:
        DegeneratePairingError: If any argument is the identity.
    """
    (p1, q1), (p2, q2) = pair1, pair2
    for point in (p1, q1, p2, q2):
        if point.is_identity():
            raise DegeneratePairingError("Cannot compute a pairing with the point at infinity.")
    result = pairing_batch([(p1, q1), (p2, -q2)])
    return result.is_one()
