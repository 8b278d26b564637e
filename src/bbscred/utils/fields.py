"""Finite-field arithmetic for the BLS12-381 pairing-friendly curve.

This module implements the prime field Fp and the extension tower used by
the pairing:

    Fp2  = Fp[u]  / (u^2 + 1)
    Fp6  = Fp2[v] / (v^3 - (u + 1))
    Fp12 = Fp6[w] / (w^2 - v)

Every level derives from the abstract `FieldElement` interface, so curve and
hashing code can be written once over "a field" and used with Fp (for G1)
or Fp2 (for G2). Elements are immutable value objects; all operators
return new instances.

Key Features:
  - Uniform field interface: add, sub, mul, square, inv, neg, pow, sqrt,
    legendre, cmov, to_bytes/from_bytes.
  - Square root strategy chosen from the modulus (p mod 4, p mod 8) with a
    Tonelli-Shanks fallback for the general case.
  - Frobenius maps, sparse multiplication and cyclotomic squaring used by
    the Miller loop and the final exponentiation.
  - Scalar-field helpers over the group order r.
"""
from __future__ import annotations

import abc
from typing import Callable, Optional, Tuple

from ..errors import DivisionByZeroError, InvalidLengthError, InvalidParameterError, NotASquareError

# --- Curve Parameters ---
P = 0x1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffaaab
R = 0x73eda753299d7d483339d80809a1d80553bda402fffe5bfeffffffff00000001
# |x| for the BLS parameter; x itself is negative.
BLS_X = 0xd201000000010000
BLS_X_IS_NEGATIVE = True
BLS_X_LEN = BLS_X.bit_length()

__all__ = [
    "P", "R", "BLS_X", "BLS_X_IS_NEGATIVE",
    "FieldElement", "Fp", "Fp2", "Fp6", "Fp12",
    "legendre", "sqrt_mod",
    "fr_inv", "fr_add", "fr_sub", "fr_mul",
]


# --- Modular Square Roots ---

def legendre(n: int, p: int) -> int:
    """Returns the Legendre symbol (n / p) as -1, 0 or 1."""
    n %= p
    if n == 0:
        return 0
    return 1 if pow(n, (p - 1) // 2, p) == 1 else -1


def _sqrt_3mod4(p: int) -> Callable[[int], Optional[int]]:
    exp = (p + 1) // 4

    def sqrt(n: int) -> Optional[int]:
        root = pow(n, exp, p)
        return root if root * root % p == n % p else None
    return sqrt


def _sqrt_5mod8(p: int) -> Callable[[int], Optional[int]]:
    # Atkin's algorithm.
    exp = (p - 5) // 8

    def sqrt(n: int) -> Optional[int]:
        n %= p
        v = pow(2 * n % p, exp, p)
        nv = n * v % p
        i = 2 * nv * v % p
        root = nv * (i - 1) % p
        return root if root * root % p == n else None
    return sqrt


def _tonelli_shanks(p: int) -> Callable[[int], Optional[int]]:
    q, s = p - 1, 0
    while q % 2 == 0:
        q //= 2
        s += 1
    z = 2
    while legendre(z, p) != -1:
        z += 1
        if z > 1000:
            raise InvalidParameterError("Cannot find a non-residue: modulus is probably not prime.")
    c_init = pow(z, q, p)

    def sqrt(n: int) -> Optional[int]:
        n %= p
        if n == 0:
            return 0
        if legendre(n, p) != 1:
            return None
        m, c = s, c_init
        t = pow(n, q, p)
        root = pow(n, (q + 1) // 2, p)
        while t != 1:
            i, t2 = 1, t * t % p
            while t2 != 1:
                i += 1
                t2 = t2 * t2 % p
            b = pow(c, 1 << (m - i - 1), p)
            m = i
            c = b * b % p
            t = t * c % p
            root = root * b % p
        return root
    return sqrt


def sqrt_mod(p: int) -> Callable[[int], Optional[int]]:
    """Selects a square-root routine for the prime modulus `p`.

    Args:
        p: An odd prime.

    Returns:
        A function mapping an integer to one of its square roots modulo `p`,
        or None when the input is a non-residue.

    Raises:
        InvalidParameterError: If `p` is too small to have a useful root.
    """
    if p < 3:
        raise InvalidParameterError("sqrt is not defined for small fields.")
    if p % 4 == 3:
        return _sqrt_3mod4(p)
    if p % 8 == 5:
        return _sqrt_5mod8(p)
    return _tonelli_shanks(p)


_fp_sqrt = sqrt_mod(P)


# --- Scalar Field Helpers ---

def fr_add(a: int, b: int) -> int:
    return (a + b) % R


def fr_sub(a: int, b: int) -> int:
    return (a - b) % R


def fr_mul(a: int, b: int) -> int:
    return a * b % R


def fr_inv(a: int) -> int:
    """Inverts a scalar modulo r.

    Raises:
        DivisionByZeroError: If `a` is congruent to zero.
    """
    a %= R
    if a == 0:
        raise DivisionByZeroError("Cannot invert the zero scalar.")
    return pow(a, -1, R)


# --- Field Interface ---

class FieldElement(abc.ABC):
    """Common interface shared by every level of the extension tower."""
    __slots__ = ()

    @classmethod
    @abc.abstractmethod
    def zero(cls): ...

    @classmethod
    @abc.abstractmethod
    def one(cls): ...

    @abc.abstractmethod
    def __add__(self, other): ...

    @abc.abstractmethod
    def __sub__(self, other): ...

    @abc.abstractmethod
    def __mul__(self, other): ...

    @abc.abstractmethod
    def __neg__(self): ...

    @abc.abstractmethod
    def __eq__(self, other) -> bool: ...

    @abc.abstractmethod
    def square(self): ...

    @abc.abstractmethod
    def inv(self): ...

    @abc.abstractmethod
    def is_zero(self) -> bool: ...

    @abc.abstractmethod
    def to_bytes(self) -> bytes: ...

    def __truediv__(self, other):
        if isinstance(other, int):
            return self * Fp(other).inv()
        return self * other.inv()

    def __pow__(self, exponent: int):
        if exponent < 0:
            raise InvalidParameterError("Negative exponents are not supported.")
        result = self.one()
        base = self
        while exponent:
            if exponent & 1:
                result = result * base
            base = base.square()
            exponent >>= 1
        return result

    def is_one(self) -> bool:
        return self == self.one()

    @staticmethod
    def cmov(a, b, flag: bool):
        """Returns `b` when `flag` is set, otherwise `a`."""
        return b if flag else a


# --- Fp ---

class Fp(FieldElement):
    """An element of the base field Fp."""
    __slots__ = ("n",)
    ORDER = P
    BYTES = 48
    BITS = 381

    def __init__(self, n: int = 0) -> None:
        self.n = n % P

    @classmethod
    def zero(cls) -> "Fp":
        return cls(0)

    @classmethod
    def one(cls) -> "Fp":
        return cls(1)

    def __add__(self, other) -> "Fp":
        return Fp(self.n + (other if isinstance(other, int) else other.n))

    def __sub__(self, other) -> "Fp":
        return Fp(self.n - (other if isinstance(other, int) else other.n))

    def __mul__(self, other) -> "Fp":
        if isinstance(other, int):
            return Fp(self.n * other)
        if isinstance(other, Fp):
            return Fp(self.n * other.n)
        return NotImplemented

    __rmul__ = __mul__

    def __neg__(self) -> "Fp":
        return Fp(-self.n)

    def __eq__(self, other) -> bool:
        if isinstance(other, int):
            return self.n == other % P
        return isinstance(other, Fp) and self.n == other.n

    def __hash__(self) -> int:
        return hash(("Fp", self.n))

    def __repr__(self) -> str:
        return f"Fp({hex(self.n)})"

    def __int__(self) -> int:
        return self.n

    def square(self) -> "Fp":
        return Fp(self.n * self.n)

    def __pow__(self, exponent: int) -> "Fp":
        if exponent < 0:
            raise InvalidParameterError("Negative exponents are not supported.")
        return Fp(pow(self.n, exponent, P))

    def inv(self) -> "Fp":
        if self.n == 0:
            raise DivisionByZeroError("Cannot invert the zero element of Fp.")
        return Fp(pow(self.n, -1, P))

    def is_zero(self) -> bool:
        return self.n == 0

    def legendre(self) -> int:
        return legendre(self.n, P)

    def is_square(self) -> bool:
        return self.legendre() != -1

    def sqrt(self) -> "Fp":
        """Computes a square root.

        Raises:
            NotASquareError: If the element is a quadratic non-residue.
        """
        root = _fp_sqrt(self.n)
        if root is None:
            raise NotASquareError("Cannot find square root: element is not a quadratic residue.")
        return Fp(root)

    def is_odd(self) -> bool:
        """sgn0 as defined by RFC 9380 for m = 1."""
        return bool(self.n & 1)

    def to_bytes(self) -> bytes:
        return self.n.to_bytes(self.BYTES, "big")

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fp":
        """Parses a big-endian encoding, rejecting values not below p.

        Raises:
            InvalidLengthError: If `data` is not 48 bytes.
            InvalidParameterError: If the encoded integer is not below p.
        """
        if len(data) != cls.BYTES:
            raise InvalidLengthError(f"Fp element must be {cls.BYTES} bytes (got {len(data)}).")
        n = int.from_bytes(data, "big")
        if n >= P:
            raise InvalidParameterError("Fp element out of range.")
        return cls(n)


# --- Fp2 ---

class Fp2(FieldElement):
    """An element c0 + c1*u of Fp2, with u^2 = -1."""
    __slots__ = ("c0", "c1")
    BYTES = 2 * Fp.BYTES

    def __init__(self, c0=0, c1=0) -> None:
        self.c0 = c0 if isinstance(c0, Fp) else Fp(c0)
        self.c1 = c1 if isinstance(c1, Fp) else Fp(c1)

    @classmethod
    def zero(cls) -> "Fp2":
        return cls(0, 0)

    @classmethod
    def one(cls) -> "Fp2":
        return cls(1, 0)

    def __add__(self, other) -> "Fp2":
        return Fp2(self.c0 + other.c0, self.c1 + other.c1)

    def __sub__(self, other) -> "Fp2":
        return Fp2(self.c0 - other.c0, self.c1 - other.c1)

    def __mul__(self, other) -> "Fp2":
        if isinstance(other, (int, Fp)):
            return Fp2(self.c0 * other, self.c1 * other)
        if not isinstance(other, Fp2):
            return NotImplemented
        a, b = self.c0.n, self.c1.n
        c, d = other.c0.n, other.c1.n
        t1 = a * c
        t2 = b * d
        return Fp2(t1 - t2, (a + b) * (c + d) - t1 - t2)

    __rmul__ = __mul__

    def __neg__(self) -> "Fp2":
        return Fp2(-self.c0, -self.c1)

    def __eq__(self, other) -> bool:
        return isinstance(other, Fp2) and self.c0 == other.c0 and self.c1 == other.c1

    def __hash__(self) -> int:
        return hash(("Fp2", self.c0.n, self.c1.n))

    def __repr__(self) -> str:
        return f"Fp2({hex(self.c0.n)}, {hex(self.c1.n)})"

    def square(self) -> "Fp2":
        a, b = self.c0.n, self.c1.n
        return Fp2((a + b) * (a - b), 2 * a * b)

    def inv(self) -> "Fp2":
        a, b = self.c0.n, self.c1.n
        norm = (a * a + b * b) % P
        if norm == 0:
            raise DivisionByZeroError("Cannot invert the zero element of Fp2.")
        factor = pow(norm, -1, P)
        return Fp2(a * factor, -b * factor)

    def is_zero(self) -> bool:
        return self.c0.n == 0 and self.c1.n == 0

    def conjugate(self) -> "Fp2":
        return Fp2(self.c0, -self.c1)

    def mul_by_nonresidue(self) -> "Fp2":
        # (c0 + c1*u) * (1 + u)
        return Fp2(self.c0 - self.c1, self.c0 + self.c1)

    def mul_by_b(self) -> "Fp2":
        # G2 curve constant b' = 4 * (1 + u)
        t0 = self.c0 * 4
        t1 = self.c1 * 4
        return Fp2(t0 - t1, t0 + t1)

    def frobenius_map(self, power: int) -> "Fp2":
        return self.conjugate() if power % 2 else self

    def legendre(self) -> int:
        return legendre(self.c0.n * self.c0.n + self.c1.n * self.c1.n, P)

    def is_square(self) -> bool:
        return self.legendre() != -1

    def sqrt(self) -> "Fp2":
        """Computes the canonical square root.

        Of the two roots the one with the larger imaginary part is returned
        (ties broken on the real part).

        Raises:
            NotASquareError: If the element is not a square in Fp2.
        """
        c0, c1 = self.c0, self.c1
        if c1.is_zero():
            if c0.legendre() != -1:
                return Fp2(c0.sqrt(), 0)
            # c0 / (-1) is a square: sqrt(c0) = sqrt(-c0) * u
            return Fp2(0, (-c0).sqrt())
        try:
            a = (c0.square() + c1.square()).sqrt()
        except NotASquareError:
            raise NotASquareError("Cannot find square root in Fp2.") from None
        half = Fp(2).inv()
        d = (a + c0) * half
        if d.legendre() == -1:
            d = d - a
        try:
            a0 = d.sqrt()
        except NotASquareError:
            raise NotASquareError("Cannot find square root in Fp2.") from None
        candidate = Fp2(a0, c1 * half / a0)
        if candidate.square() != self:
            raise NotASquareError("Cannot find square root in Fp2.")
        other = -candidate
        if (candidate.c1.n, candidate.c0.n) > (other.c1.n, other.c0.n):
            return candidate
        return other

    def is_odd(self) -> bool:
        """sgn0 as defined by RFC 9380 for m = 2."""
        sign_0 = self.c0.n & 1
        zero_0 = self.c0.n == 0
        sign_1 = self.c1.n & 1
        return bool(sign_0 or (zero_0 and sign_1))

    def to_bytes(self) -> bytes:
        return self.c0.to_bytes() + self.c1.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fp2":
        if len(data) != cls.BYTES:
            raise InvalidLengthError(f"Fp2 element must be {cls.BYTES} bytes (got {len(data)}).")
        return cls(Fp.from_bytes(data[:Fp.BYTES]), Fp.from_bytes(data[Fp.BYTES:]))

    @staticmethod
    def fp4_square(a: "Fp2", b: "Fp2") -> Tuple["Fp2", "Fp2"]:
        """Squares a + b*w in Fp4 = Fp2[w] / (w^2 - (u + 1))."""
        a2 = a.square()
        b2 = b.square()
        return b2.mul_by_nonresidue() + a2, (a + b).square() - a2 - b2


FP2_NONRESIDUE = Fp2(1, 1)


# --- Fp6 ---

class Fp6(FieldElement):
    """An element c0 + c1*v + c2*v^2 of Fp6, with v^3 = u + 1."""
    __slots__ = ("c0", "c1", "c2")
    BYTES = 3 * Fp2.BYTES

    def __init__(self, c0: Fp2, c1: Fp2, c2: Fp2) -> None:
        self.c0 = c0
        self.c1 = c1
        self.c2 = c2

    @classmethod
    def zero(cls) -> "Fp6":
        return cls(Fp2.zero(), Fp2.zero(), Fp2.zero())

    @classmethod
    def one(cls) -> "Fp6":
        return cls(Fp2.one(), Fp2.zero(), Fp2.zero())

    def __add__(self, other) -> "Fp6":
        return Fp6(self.c0 + other.c0, self.c1 + other.c1, self.c2 + other.c2)

    def __sub__(self, other) -> "Fp6":
        return Fp6(self.c0 - other.c0, self.c1 - other.c1, self.c2 - other.c2)

    def __mul__(self, other) -> "Fp6":
        if isinstance(other, (int, Fp, Fp2)):
            return Fp6(self.c0 * other, self.c1 * other, self.c2 * other)
        if not isinstance(other, Fp6):
            return NotImplemented
        c0, c1, c2 = self.c0, self.c1, self.c2
        r0, r1, r2 = other.c0, other.c1, other.c2
        t0 = c0 * r0
        t1 = c1 * r1
        t2 = c2 * r2
        return Fp6(
            t0 + ((c1 + c2) * (r1 + r2) - (t1 + t2)).mul_by_nonresidue(),
            (c0 + c1) * (r0 + r1) - (t0 + t1) + t2.mul_by_nonresidue(),
            t1 + (c0 + c2) * (r0 + r2) - (t0 + t2),
        )

    def __neg__(self) -> "Fp6":
        return Fp6(-self.c0, -self.c1, -self.c2)

    def __eq__(self, other) -> bool:
        return (isinstance(other, Fp6) and self.c0 == other.c0
                and self.c1 == other.c1 and self.c2 == other.c2)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Fp6({self.c0!r}, {self.c1!r}, {self.c2!r})"

    def square(self) -> "Fp6":
        c0, c1, c2 = self.c0, self.c1, self.c2
        t0 = c0.square()
        t1 = c0 * c1 * 2
        t3 = c1 * c2 * 2
        t4 = c2.square()
        return Fp6(
            t3.mul_by_nonresidue() + t0,
            t4.mul_by_nonresidue() + t1,
            t1 + (c0 - c1 + c2).square() + t3 - t0 - t4,
        )

    def inv(self) -> "Fp6":
        c0, c1, c2 = self.c0, self.c1, self.c2
        t0 = c0.square() - (c2 * c1).mul_by_nonresidue()
        t1 = c2.square().mul_by_nonresidue() - c0 * c1
        t2 = c1.square() - c0 * c2
        denom = (c2 * t1 + c1 * t2).mul_by_nonresidue() + c0 * t0
        if denom.is_zero():
            raise DivisionByZeroError("Cannot invert the zero element of Fp6.")
        t4 = denom.inv()
        return Fp6(t4 * t0, t4 * t1, t4 * t2)

    def is_zero(self) -> bool:
        return self.c0.is_zero() and self.c1.is_zero() and self.c2.is_zero()

    def mul_by_nonresidue(self) -> "Fp6":
        # Multiplication by v.
        return Fp6(self.c2.mul_by_nonresidue(), self.c0, self.c1)

    def mul_by_1(self, b1: Fp2) -> "Fp6":
        """Sparse multiplication by b1*v."""
        return Fp6((self.c2 * b1).mul_by_nonresidue(), self.c0 * b1, self.c1 * b1)

    def mul_by_01(self, b0: Fp2, b1: Fp2) -> "Fp6":
        """Sparse multiplication by b0 + b1*v."""
        c0, c1, c2 = self.c0, self.c1, self.c2
        t0 = c0 * b0
        t1 = c1 * b1
        return Fp6(
            ((c1 + c2) * b1 - t1).mul_by_nonresidue() + t0,
            (b0 + b1) * (c0 + c1) - t0 - t1,
            (c0 + c2) * b0 - t0 + t1,
        )

    def frobenius_map(self, power: int) -> "Fp6":
        return Fp6(
            self.c0.frobenius_map(power),
            self.c1.frobenius_map(power) * _FP6_FROBENIUS_1[power % 6],
            self.c2.frobenius_map(power) * _FP6_FROBENIUS_2[power % 6],
        )

    def to_bytes(self) -> bytes:
        return self.c0.to_bytes() + self.c1.to_bytes() + self.c2.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fp6":
        if len(data) != cls.BYTES:
            raise InvalidLengthError(f"Fp6 element must be {cls.BYTES} bytes (got {len(data)}).")
        n = Fp2.BYTES
        return cls(Fp2.from_bytes(data[:n]), Fp2.from_bytes(data[n:2 * n]), Fp2.from_bytes(data[2 * n:]))


# --- Fp12 ---

class Fp12(FieldElement):
    """An element c0 + c1*w of Fp12, with w^2 = v. Pairing values live here."""
    __slots__ = ("c0", "c1")
    BYTES = 2 * Fp6.BYTES

    def __init__(self, c0: Fp6, c1: Fp6) -> None:
        self.c0 = c0
        self.c1 = c1

    @classmethod
    def zero(cls) -> "Fp12":
        return cls(Fp6.zero(), Fp6.zero())

    @classmethod
    def one(cls) -> "Fp12":
        return cls(Fp6.one(), Fp6.zero())

    def __add__(self, other) -> "Fp12":
        return Fp12(self.c0 + other.c0, self.c1 + other.c1)

    def __sub__(self, other) -> "Fp12":
        return Fp12(self.c0 - other.c0, self.c1 - other.c1)

    def __mul__(self, other) -> "Fp12":
        if isinstance(other, (int, Fp, Fp2)):
            return Fp12(self.c0 * other, self.c1 * other)
        if not isinstance(other, Fp12):
            return NotImplemented
        c0, c1 = self.c0, self.c1
        r0, r1 = other.c0, other.c1
        t1 = c0 * r0
        t2 = c1 * r1
        return Fp12(t1 + t2.mul_by_nonresidue(), (c0 + c1) * (r0 + r1) - (t1 + t2))

    def __neg__(self) -> "Fp12":
        return Fp12(-self.c0, -self.c1)

    def __eq__(self, other) -> bool:
        return isinstance(other, Fp12) and self.c0 == other.c0 and self.c1 == other.c1

    __hash__ = None

    def __repr__(self) -> str:
        return f"Fp12({self.c0!r}, {self.c1!r})"

    def square(self) -> "Fp12":
        c0, c1 = self.c0, self.c1
        ab = c0 * c1
        return Fp12(
            (c1.mul_by_nonresidue() + c0) * (c0 + c1) - ab - ab.mul_by_nonresidue(),
            ab + ab,
        )

    def inv(self) -> "Fp12":
        c0, c1 = self.c0, self.c1
        denom = c0.square() - c1.square().mul_by_nonresidue()
        if denom.is_zero():
            raise DivisionByZeroError("Cannot invert the zero element of Fp12.")
        t = denom.inv()
        return Fp12(c0 * t, -(c1 * t))

    def is_zero(self) -> bool:
        return self.c0.is_zero() and self.c1.is_zero()

    def conjugate(self) -> "Fp12":
        return Fp12(self.c0, -self.c1)

    def frobenius_map(self, power: int) -> "Fp12":
        """Raises the element to the p**power-th power."""
        c1 = self.c1.frobenius_map(power)
        coeff = _FP12_FROBENIUS[power % 12]
        return Fp12(self.c0.frobenius_map(power), Fp6(c1.c0 * coeff, c1.c1 * coeff, c1.c2 * coeff))

    def mul_014(self, o0: Fp2, o1: Fp2, o4: Fp2) -> "Fp12":
        """Sparse multiplication by a line value with non-zero slots 0, 1 and 4."""
        c0, c1 = self.c0, self.c1
        t0 = c0.mul_by_01(o0, o1)
        t1 = c1.mul_by_1(o4)
        return Fp12(
            t1.mul_by_nonresidue() + t0,
            (c1 + c0).mul_by_01(o0, o1 + o4) - t0 - t1,
        )

    def cyclotomic_square(self) -> "Fp12":
        """Squaring valid only for elements of the cyclotomic subgroup."""
        c0c0, c0c1, c0c2 = self.c0.c0, self.c0.c1, self.c0.c2
        c1c0, c1c1, c1c2 = self.c1.c0, self.c1.c1, self.c1.c2
        t3, t4 = Fp2.fp4_square(c0c0, c1c1)
        t5, t6 = Fp2.fp4_square(c1c0, c0c2)
        t7, t8 = Fp2.fp4_square(c0c1, c1c2)
        t9 = t8.mul_by_nonresidue()
        return Fp12(
            Fp6(
                (t3 - c0c0) * 2 + t3,
                (t5 - c0c1) * 2 + t5,
                (t7 - c0c2) * 2 + t7,
            ),
            Fp6(
                (t9 + c1c0) * 2 + t9,
                (t4 + c1c1) * 2 + t4,
                (t6 + c1c2) * 2 + t6,
            ),
        )

    def cyclotomic_exp(self, n: int) -> "Fp12":
        """Exponentiation by `n` (at most BLS_X_LEN bits) in the cyclotomic subgroup."""
        z = Fp12.one()
        for i in range(BLS_X_LEN - 1, -1, -1):
            z = z.cyclotomic_square()
            if (n >> i) & 1:
                z = z * self
        return z

    def to_bytes(self) -> bytes:
        return self.c0.to_bytes() + self.c1.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "Fp12":
        if len(data) != cls.BYTES:
            raise InvalidLengthError(f"Fp12 element must be {cls.BYTES} bytes (got {len(data)}).")
        return cls(Fp6.from_bytes(data[:Fp6.BYTES]), Fp6.from_bytes(data[Fp6.BYTES:]))


# --- Frobenius Coefficients ---

def _frobenius_coefficients(numerator: int, divisor: int, degree: int) -> list:
    # nonresidue^((numerator * p^j - numerator) / divisor); the nonresidue has
    # order dividing p^2 - 1, so exponents are reduced modulo that.
    coeffs = []
    p_power = 1
    for _ in range(degree):
        exponent = (numerator * p_power - numerator) // divisor
        coeffs.append(FP2_NONRESIDUE ** (exponent % (P * P - 1)))
        p_power *= P
    return coeffs


_FP6_FROBENIUS_1 = _frobenius_coefficients(1, 3, 6)
_FP6_FROBENIUS_2 = _frobenius_coefficients(2, 3, 6)
_FP12_FROBENIUS = _frobenius_coefficients(1, 6, 12)
