"""Elliptic-curve groups G1 and G2 of BLS12-381.

G1 is the curve y^2 = x^3 + 4 over Fp and G2 is its sextic twist
y^2 = x^3 + 4(1 + u) over Fp2. Both groups share the prime order r.

Points are kept in homogeneous projective coordinates (X : Y : Z) with the
identity represented by Z = 0. Addition and doubling use the complete
Renes-Costello-Batina formulas, so no input pair needs special-casing.

Key Features:
  - Complete projective addition/doubling and negation.
  - Windowed-NAF scalar multiplication, with an explicit `PrecomputedPoint`
    handle for long-lived points such as the base points.
  - Endomorphism-based subgroup checks and cofactor clearing.
  - ZCash-style point serialization: compressed/infinity/sort flags in the
    three most significant bits of the first byte.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Tuple, Type, TypeVar

from ..errors import (
    InvalidInfinityError,
    InvalidLengthError,
    InvalidPointError,
    InvalidScalarError,
    NotASquareError,
    SubgroupError,
)
from .fields import BLS_X, P, R, Fp, Fp2

__all__ = [
    "G1Point", "G2Point", "PrecomputedPoint", "precompute",
    "G1_COMPRESSED_SIZE", "G2_COMPRESSED_SIZE",
]

# --- Constants ---
SCALAR_BITS = R.bit_length()
G1_COMPRESSED_SIZE = 48
G2_COMPRESSED_SIZE = 96

_FLAG_COMPRESSED = 0x80
_FLAG_INFINITY = 0x40
_FLAG_SORT = 0x20
_SEC1_UNCOMPRESSED = 0x04

_G1_GX = 0x17f1d3a73197d7942695638c4fa9ac0fc3688c4f9774b905a14e3a3f171bac586c55e83ff97a1aeffb3af00adb22c6bb
_G1_GY = 0x08b3f481e3aaa0f1a09e30ed741d8ae4fcf5e095d5d00af600db18cb2c04b3edd03cc744a2888ae40caa232946c5e7e1
_G2_GX = (
    0x024aa2b2f08f0a91260805272dc51051c6e47ad4fa403b02b4510b647ae3d1770bac0326a805bbefd48056c8c121bdb8,
    0x13e02b6052719f607dacd3a088274f65596bd0d09920b61ab5da61bbdc7f5049334cf11213945d57e5ac7d055d042b7e,
)
_G2_GY = (
    0x0ce5d527727d6e118cc9cdc6da2e351aadfd9baa8cbdd3a76d429a695160d12c923ac9cc3baca289e193548608b82801,
    0x0606c4a02ea734cc32acd2b02bc28b99cb3e287e85a763af267492ab572e99ab3f370d275cec1da1aaa9075ff05f79be,
)
# Cube root of unity used by the G1 endomorphism phi(x, y) = (beta * x, y).
_G1_BETA = Fp(0x5f19672fdf76ce51ba69c6076a0f77eaddb3a93be6f89688de17d813620a00022e01fffffffefffe)

# psi(x, y) = (frob(x) * PSI_X, frob(y) * PSI_Y), untwist-Frobenius-twist on G2.
_PSI_BASE = Fp2(1, 1).inv()
_PSI_X = _PSI_BASE ** ((P - 1) // 3)
_PSI_Y = _PSI_BASE ** ((P - 1) // 2)
_PSI2_X = _PSI_BASE ** ((P * P - 1) // 3)

PointT = TypeVar("PointT", bound="_ProjectivePoint")


def _parse_flags(data: bytes) -> Tuple[bool, bool, bool, bytes]:
    head = data[0]
    compressed = bool(head & _FLAG_COMPRESSED)
    infinity = bool(head & _FLAG_INFINITY)
    sort = bool(head & _FLAG_SORT)
    return compressed, infinity, sort, bytes([head & 0x1F]) + data[1:]


def _set_flags(data: bytes, *, compressed: bool = False, infinity: bool = False, sort: bool = False) -> bytes:
    head = data[0]
    if compressed:
        head |= _FLAG_COMPRESSED
    if infinity:
        head |= _FLAG_INFINITY
    if sort:
        head |= _FLAG_SORT
    return bytes([head]) + data[1:]


def _coordinate(data: bytes) -> Fp:
    n = int.from_bytes(data, "big")
    if n >= P:
        raise InvalidPointError("Point coordinate is not a canonical field element.")
    return Fp(n)


def _lexicographically_largest(y: Fp) -> bool:
    return y.n * 2 >= P


def _lexicographically_largest_fp2(y: Fp2) -> bool:
    if y.c1.n:
        return y.c1.n * 2 >= P
    return y.c0.n * 2 >= P


# --- Projective Point ---

class _ProjectivePoint(ABC):
    """Shared arithmetic for short Weierstrass curves y^2 = x^3 + b (a = 0)."""
    __slots__ = ("x", "y", "z")

    FIELD: type = Fp
    B = Fp(4)
    B3 = Fp(12)
    NAME = "point"

    def __init__(self, x, y, z) -> None:
        self.x = x
        self.y = y
        self.z = z

    # --- Constructors ---

    @classmethod
    def identity(cls: Type[PointT]) -> PointT:
        return cls(cls.FIELD.zero(), cls.FIELD.one(), cls.FIELD.zero())

    @classmethod
    @abstractmethod
    def generator(cls: Type[PointT]) -> PointT:
        """The fixed generator of the prime-order subgroup."""

    @classmethod
    def from_affine(cls: Type[PointT], x, y) -> PointT:
        """Builds a point from affine coordinates; (0, 0) denotes the identity."""
        if x.is_zero() and y.is_zero():
            return cls.identity()
        return cls(x, y, cls.FIELD.one())

    # --- Basic Properties ---

    def to_affine(self) -> tuple:
        """Returns (x, y); the identity maps to (0, 0)."""
        if self.z.is_zero():
            return self.FIELD.zero(), self.FIELD.zero()
        iz = self.z.inv()
        return self.x * iz, self.y * iz

    def is_identity(self) -> bool:
        return self.z.is_zero()

    def is_on_curve(self) -> bool:
        # Y^2 Z = X^3 + b Z^3
        lhs = self.y.square() * self.z
        rhs = self.x.square() * self.x + self.B * self.z.square() * self.z
        return lhs == rhs

    def __eq__(self, other) -> bool:
        if not isinstance(other, type(self)):
            return NotImplemented
        return (self.x * other.z == other.x * self.z
                and self.y * other.z == other.y * self.z)

    def __hash__(self) -> int:
        x, y = self.to_affine()
        return hash((self.NAME, x, y))

    def __repr__(self) -> str:
        if self.is_identity():
            return f"{type(self).__name__}(identity)"
        x, y = self.to_affine()
        return f"{type(self).__name__}(x={x!r}, y={y!r})"

    # --- Group Law ---

    def __neg__(self: PointT) -> PointT:
        return type(self)(self.x, -self.y, self.z)

    def negate(self: PointT) -> PointT:
        return -self

    def __add__(self: PointT, other: PointT) -> PointT:
        if not isinstance(other, type(self)):
            return NotImplemented
        # Renes-Costello-Batina, algorithm 7 (a = 0).
        b3 = self.B3
        x1, y1, z1 = self.x, self.y, self.z
        x2, y2, z2 = other.x, other.y, other.z
        t0 = x1 * x2
        t1 = y1 * y2
        t2 = z1 * z2
        t3 = (x1 + y1) * (x2 + y2) - t0 - t1
        t4 = (x1 + z1) * (x2 + z2) - t0 - t2
        t5 = (y1 + z1) * (y2 + z2) - t1 - t2
        bt2 = t2 * b3
        x3 = t1 - bt2
        z3 = t1 + bt2
        y3 = x3 * z3
        t1 = t0 * 3
        t4 = t4 * b3
        y3 = y3 + t1 * t4
        x3 = t3 * x3 - t5 * t4
        z3 = t5 * z3 + t3 * t1
        return type(self)(x3, y3, z3)

    def __sub__(self: PointT, other: PointT) -> PointT:
        return self + (-other)

    def double(self: PointT) -> PointT:
        # Renes-Costello-Batina, algorithm 9 (a = 0).
        b3 = self.B3
        x, y, z = self.x, self.y, self.z
        t0 = x.square()
        t1 = y.square()
        t2 = z.square()
        t3 = x * y * 2
        z3 = x * z * 2
        y3 = t2 * b3
        x3 = t1 - y3
        y3 = t1 + y3
        y3 = x3 * y3
        x3 = t3 * x3
        t3 = z3 * b3
        t0 = t0 * 3
        y3 = y3 + t0 * t3
        t2 = y * z * 2
        x3 = x3 - t2 * t3
        z3 = t2 * t1 * 4
        return type(self)(x3, y3, z3)

    # --- Scalar Multiplication ---

    def multiply(self: PointT, scalar: int) -> PointT:
        """Multiplies the point by a secret scalar.

        Uses the windowed-NAF routine with a window of 1, which performs the
        same sequence of additions regardless of the scalar's bit pattern.

        Args:
            scalar: An integer in [1, r).

        Raises:
            InvalidScalarError: If the scalar is out of range.
        """
        if not 0 < scalar < R:
            raise InvalidScalarError("invalid scalar: out of range")
        table = _precompute_window(self, 1)
        point, _fake = _wnaf(type(self), 1, table, scalar)
        return point

    def multiply_unsafe(self: PointT, scalar: int) -> PointT:
        """Variable-time multiplication for public scalars.

        Args:
            scalar: An integer in [0, r). Zero yields the identity.

        Raises:
            InvalidScalarError: If the scalar is out of range.
        """
        if not 0 <= scalar < R:
            raise InvalidScalarError("invalid scalar: out of range")
        return _ladder(self, scalar)

    # --- Validation ---

    def assert_validity(self) -> None:
        """Checks curve membership and prime-order subgroup membership.

        Raises:
            InvalidInfinityError: If the point has Z = 0 but Y = 0 as well.
            InvalidPointError: If the point is not on the curve.
            SubgroupError: If the point is not in the prime-order subgroup.
        """
        if self.is_identity():
            if self.y.is_zero():
                raise InvalidInfinityError(f"invalid {self.NAME} point: bad point at infinity")
            return
        if not self.is_on_curve():
            raise InvalidPointError(f"invalid {self.NAME} point: not on curve")
        if not self.is_torsion_free():
            raise SubgroupError(f"invalid {self.NAME} point: not in prime-order subgroup")

    @abstractmethod
    def is_torsion_free(self) -> bool:
        """Whether the point lies in the prime-order subgroup."""

    @abstractmethod
    def clear_cofactor(self: PointT) -> PointT:
        """Maps a curve point into the prime-order subgroup."""

    @abstractmethod
    def to_bytes(self, compressed: bool = True) -> bytes:
        """ZCash encoding of the point."""


# --- G1 ---

class G1Point(_ProjectivePoint):
    """A point on E(Fp): y^2 = x^3 + 4."""
    __slots__ = ()
    FIELD = Fp
    B = Fp(4)
    B3 = Fp(12)
    NAME = "G1"

    @classmethod
    def generator(cls) -> "G1Point":
        return cls(Fp(_G1_GX), Fp(_G1_GY), Fp.one())

    def is_torsion_free(self) -> bool:
        # https://eprint.iacr.org/2021/1130: [x^2] P == phi(P)
        phi = G1Point(self.x * _G1_BETA, self.y, self.z)
        x_p = -self.multiply_unsafe(BLS_X)
        return x_p.multiply_unsafe(BLS_X) == phi

    def clear_cofactor(self) -> "G1Point":
        # Multiplication by h_eff = 1 - x.
        return self.multiply_unsafe(BLS_X) + self

    def to_bytes(self, compressed: bool = True) -> bytes:
        """Serializes to 48 bytes (compressed) or 96 bytes (uncompressed)."""
        if compressed:
            if self.is_identity():
                return _set_flags(bytes(G1_COMPRESSED_SIZE), compressed=True, infinity=True)
            x, y = self.to_affine()
            return _set_flags(x.to_bytes(), compressed=True, sort=_lexicographically_largest(y))
        if self.is_identity():
            return _set_flags(bytes(2 * G1_COMPRESSED_SIZE), infinity=True)
        x, y = self.to_affine()
        return x.to_bytes() + y.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "G1Point":
        """Deserializes and fully validates a G1 point.

        Accepts the 48-byte compressed form, the 96-byte uncompressed form and
        a 97-byte uncompressed form prefixed with 0x04.

        Raises:
            InvalidLengthError: If the input size matches no encoding.
            InvalidInfinityError: If an infinity encoding carries data.
            InvalidPointError: If the flags are inconsistent or the point is
                not on the curve.
            SubgroupError: If the point is outside the prime-order subgroup.
        """
        data = bytes(data)
        if len(data) == 2 * G1_COMPRESSED_SIZE + 1 and data[0] == _SEC1_UNCOMPRESSED:
            point = cls.from_affine(_coordinate(data[1:49]), _coordinate(data[49:]))
            point.assert_validity()
            return point
        if len(data) not in (G1_COMPRESSED_SIZE, 2 * G1_COMPRESSED_SIZE):
            raise InvalidLengthError(f"invalid G1 point: expected 48/96 bytes (got {len(data)})")
        compressed, infinity, sort, value = _parse_flags(data)
        if compressed != (len(data) == G1_COMPRESSED_SIZE):
            raise InvalidPointError("invalid G1 point: compression flag does not match length")
        if infinity:
            if sort or any(value):
                raise InvalidInfinityError("invalid G1 point: non-empty point at infinity")
            return cls.identity()
        if compressed:
            x = _coordinate(value)
            try:
                y = (x.square() * x + cls.B).sqrt()
            except NotASquareError:
                raise InvalidPointError("invalid G1 point: x is not on the curve") from None
            if _lexicographically_largest(y) != sort:
                y = -y
            point = cls.from_affine(x, y)
        else:
            if sort:
                raise InvalidPointError("invalid G1 point: sort flag set on uncompressed point")
            point = cls.from_affine(_coordinate(value[:48]), _coordinate(value[48:]))
        point.assert_validity()
        return point


# --- G2 ---

def _psi(point: "G2Point") -> "G2Point":
    return G2Point(
        point.x.frobenius_map(1) * _PSI_X,
        point.y.frobenius_map(1) * _PSI_Y,
        point.z.frobenius_map(1),
    )


def _psi2(point: "G2Point") -> "G2Point":
    return G2Point(point.x * _PSI2_X, -point.y, point.z)


class G2Point(_ProjectivePoint):
    """A point on E'(Fp2): y^2 = x^3 + 4(1 + u)."""
    __slots__ = ()
    FIELD = Fp2
    B = Fp2(4, 4)
    B3 = Fp2(12, 12)
    NAME = "G2"

    @classmethod
    def generator(cls) -> "G2Point":
        return cls(Fp2(*_G2_GX), Fp2(*_G2_GY), Fp2.one())

    def psi(self) -> "G2Point":
        return _psi(self)

    def psi2(self) -> "G2Point":
        return _psi2(self)

    def is_torsion_free(self) -> bool:
        # https://eprint.iacr.org/2021/1130: [x] P == psi(P)
        return -self.multiply_unsafe(BLS_X) == _psi(self)

    def clear_cofactor(self) -> "G2Point":
        """clear_cofactor_bls12381_g2 from RFC 9380 (Budroni-Pintore)."""
        t1 = -self.multiply_unsafe(BLS_X)
        t2 = _psi(self)
        t3 = _psi2(self.double()) - t2
        t2 = -(t1 + t2).multiply_unsafe(BLS_X)
        t3 = t3 + t2 - t1
        return t3 - self

    def to_bytes(self, compressed: bool = True) -> bytes:
        """Serializes to 96 bytes (x1 || x0) or 192 bytes (x1 || x0 || y1 || y0)."""
        if compressed:
            if self.is_identity():
                return _set_flags(bytes(G2_COMPRESSED_SIZE), compressed=True, infinity=True)
            x, y = self.to_affine()
            head = x.c1.to_bytes() + x.c0.to_bytes()
            return _set_flags(head, compressed=True, sort=_lexicographically_largest_fp2(y))
        if self.is_identity():
            return _set_flags(bytes(2 * G2_COMPRESSED_SIZE), infinity=True)
        x, y = self.to_affine()
        return x.c1.to_bytes() + x.c0.to_bytes() + y.c1.to_bytes() + y.c0.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> "G2Point":
        """Deserializes and fully validates a G2 point.

        Accepts the 96-byte compressed form, the 192-byte uncompressed form and
        a 193-byte uncompressed form prefixed with 0x04.

        Raises:
            InvalidLengthError: If the input size matches no encoding.
            InvalidInfinityError: If an infinity encoding carries data.
            InvalidPointError: If the flags are inconsistent or the point is
                not on the curve.
            SubgroupError: If the point is outside the prime-order subgroup.
        """
        data = bytes(data)
        if len(data) == 2 * G2_COMPRESSED_SIZE + 1 and data[0] == _SEC1_UNCOMPRESSED:
            point = cls._from_uncompressed(data[1:])
            point.assert_validity()
            return point
        if len(data) not in (G2_COMPRESSED_SIZE, 2 * G2_COMPRESSED_SIZE):
            raise InvalidLengthError(f"invalid G2 point: expected 96/192 bytes (got {len(data)})")
        compressed, infinity, sort, value = _parse_flags(data)
        if compressed != (len(data) == G2_COMPRESSED_SIZE):
            raise InvalidPointError("invalid G2 point: compression flag does not match length")
        if infinity:
            if sort or any(value):
                raise InvalidInfinityError("invalid G2 point: non-empty point at infinity")
            return cls.identity()
        if compressed:
            x = Fp2(_coordinate(value[48:]), _coordinate(value[:48]))
            try:
                y = (x.square() * x + cls.B).sqrt()
            except NotASquareError:
                raise InvalidPointError("invalid G2 point: x is not on the curve") from None
            if _lexicographically_largest_fp2(y) != sort:
                y = -y
            point = cls.from_affine(x, y)
        else:
            if sort:
                raise InvalidPointError("invalid G2 point: sort flag set on uncompressed point")
            point = cls._from_uncompressed(value)
        point.assert_validity()
        return point

    @classmethod
    def _from_uncompressed(cls, value: bytes) -> "G2Point":
        x = Fp2(_coordinate(value[48:96]), _coordinate(value[:48]))
        y = Fp2(_coordinate(value[144:]), _coordinate(value[96:144]))
        return cls.from_affine(x, y)


# --- Windowed NAF ---

def _window_options(window: int) -> Tuple[int, int, int, int]:
    if not 1 <= window <= SCALAR_BITS:
        raise InvalidScalarError(f"invalid window size {window}")
    windows = -(-SCALAR_BITS // window) + 1
    window_size = 1 << (window - 1)
    return windows, window_size, (1 << window) - 1, 1 << window


def _precompute_window(point: PointT, window: int) -> List[PointT]:
    """Builds the table of i * 2^(k*window) * point used by `_wnaf`."""
    windows, window_size, _, _ = _window_options(window)
    points = []
    p = point
    for _ in range(windows):
        base = p
        points.append(base)
        for _ in range(1, window_size):
            base = base + p
            points.append(base)
        p = base.double()
    return points


def _wnaf(point_cls, window: int, table: list, n: int):
    # Returns the real result and a fake accumulator that absorbs the
    # additions skipped for zero digits.
    windows, window_size, mask, max_number = _window_options(window)
    acc = point_cls.identity()
    fake = point_cls.generator()
    for w in range(windows):
        wbits = n & mask
        n >>= window
        if wbits > window_size:
            wbits -= max_number
            n += 1
        offset = w * window_size
        if wbits == 0:
            item = table[offset]
            fake = fake + (-item if w % 2 else item)
        else:
            item = table[offset + abs(wbits) - 1]
            acc = acc + (-item if wbits < 0 else item)
    if n != 0:
        raise InvalidScalarError("invalid wNAF")
    return acc, fake


def _wnaf_unsafe(point_cls, window: int, table: list, n: int):
    windows, window_size, mask, max_number = _window_options(window)
    acc = point_cls.identity()
    for w in range(windows):
        if n == 0:
            break
        wbits = n & mask
        n >>= window
        if wbits > window_size:
            wbits -= max_number
            n += 1
        if wbits == 0:
            continue
        item = table[w * window_size + abs(wbits) - 1]
        acc = acc + (-item if wbits < 0 else item)
    if n != 0:
        raise InvalidScalarError("invalid wNAF")
    return acc


def _ladder(point: PointT, n: int) -> PointT:
    acc = type(point).identity()
    d = point
    while n > 0:
        if n & 1:
            acc = acc + d
        d = d.double()
        n >>= 1
    return acc


class PrecomputedPoint:
    """A point bundled with its wNAF table.

    The table belongs to this handle and is released with it. Window 8 suits
    points multiplied many times (the base points); window 1 is the cheapest
    table for single-use points.

    Attributes:
        point: The underlying G1 or G2 point.
        window: The wNAF window width.
    """
    __slots__ = ("point", "window", "_table")

    def __init__(self, point: _ProjectivePoint, window: int = 8) -> None:
        self.point = point
        self.window = window
        self._table = _precompute_window(point, window)

    def __len__(self) -> int:
        return len(self._table)

    def multiply(self, scalar: int) -> _ProjectivePoint:
        """Secret-scalar multiplication using the stored table.

        Raises:
            InvalidScalarError: If the scalar is not in [1, r).
        """
        if not 0 < scalar < R:
            raise InvalidScalarError("invalid scalar: out of range")
        point, _fake = _wnaf(type(self.point), self.window, self._table, scalar)
        return point

    def multiply_unsafe(self, scalar: int) -> _ProjectivePoint:
        """Public-scalar multiplication using the stored table; zero allowed."""
        if not 0 <= scalar < R:
            raise InvalidScalarError("invalid scalar: out of range")
        return _wnaf_unsafe(type(self.point), self.window, self._table, scalar)


def precompute(point: _ProjectivePoint, window: int = 8) -> PrecomputedPoint:
    """Creates an explicit precomputation handle for repeated multiplications."""
    return PrecomputedPoint(point, window)
