"""Hashing to BLS12-381 (RFC 9380).

Implements the message expanders, hash_to_field, the simplified SWU map
onto isogenous curves followed by the 11-isogeny (G1) / 3-isogeny (G2),
and cofactor clearing. Suites BLS12381G1_XMD:SHA-256_SSWU_RO_,
BLS12381G1_XOF:SHAKE-256_SSWU_RO_ and BLS12381G2_XMD:SHA-256_SSWU_RO_
are covered by choosing the expander.
"""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

from Crypto.Hash import SHAKE256

from ..errors import InvalidLengthError, InvalidParameterError
from .curves import G1Point, G2Point
from .fields import P, R, Fp, Fp2, FieldElement
from .octets import i2osp, os2ip, strxor

__all__ = [
    "expand_message_xmd", "expand_message_xof", "ExpandFn",
    "hash_to_field", "hash_to_field_fp2",
    "map_to_curve_g1", "map_to_curve_g2",
    "hash_to_g1", "hash_to_g2", "hash_to_scalar",
    "sqrt_ratio", "sqrt_ratio_3mod4",
]

ExpandFn = Callable[[bytes, bytes, int], bytes]

# Security parameter k = 128 and L = ceil((ceil(log2(p)) + k) / 8).
SECURITY_BITS = 128
FIELD_L = 64
_OVERSIZE_PREFIX = b"H2C-OVERSIZE-DST-"
_MAX_DST = 255


# --- Message Expansion ---

def _as_bytes(value) -> bytes:
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def expand_message_xmd(msg: bytes, dst: bytes, len_in_bytes: int) -> bytes:
    """expand_message_xmd with SHA-256 (RFC 9380, section 5.3.1).

    Args:
        msg: The message to expand.
        dst: Domain separation tag. Tags longer than 255 bytes are reduced
            with the H2C-OVERSIZE-DST- rule.
        len_in_bytes: Requested output length, at most 65535.

    Returns:
        `len_in_bytes` pseudo-random bytes.

    Raises:
        InvalidLengthError: If the requested length exceeds the limits.
    """
    msg, dst = _as_bytes(msg), _as_bytes(dst)
    b_in_bytes = hashlib.sha256().digest_size
    r_in_bytes = hashlib.sha256().block_size
    if len(dst) > _MAX_DST:
        dst = hashlib.sha256(_OVERSIZE_PREFIX + dst).digest()
    ell = -(-len_in_bytes // b_in_bytes)
    if len_in_bytes > 65535 or ell > 255:
        raise InvalidLengthError(f"expand_message_xmd: invalid length {len_in_bytes}")
    dst_prime = dst + i2osp(len(dst), 1)
    z_pad = bytes(r_in_bytes)
    l_i_b_str = i2osp(len_in_bytes, 2)
    b0 = hashlib.sha256(z_pad + msg + l_i_b_str + b"\x00" + dst_prime).digest()
    blocks = [hashlib.sha256(b0 + b"\x01" + dst_prime).digest()]
    for i in range(2, ell + 1):
        blocks.append(hashlib.sha256(strxor(b0, blocks[-1]) + i2osp(i, 1) + dst_prime).digest())
    return b"".join(blocks)[:len_in_bytes]


def _shake256(data: bytes, length: int) -> bytes:
    h = SHAKE256.new()
    h.update(data)
    return h.read(length)


def expand_message_xof(msg: bytes, dst: bytes, len_in_bytes: int) -> bytes:
    """expand_message_xof with SHAKE256 (RFC 9380, section 5.3.2).

    Raises:
        InvalidLengthError: If `len_in_bytes` exceeds 65535.
    """
    msg, dst = _as_bytes(msg), _as_bytes(dst)
    if len(dst) > _MAX_DST:
        dst = _shake256(_OVERSIZE_PREFIX + dst, -(-2 * SECURITY_BITS // 8))
    if len_in_bytes > 65535:
        raise InvalidLengthError(f"expand_message_xof: invalid length {len_in_bytes}")
    return _shake256(msg + i2osp(len_in_bytes, 2) + dst + i2osp(len(dst), 1), len_in_bytes)


# --- hash_to_field ---

def hash_to_field(msg: bytes, count: int, dst: bytes, expand: ExpandFn = expand_message_xmd,
                  m: int = 1, modulus: int = P) -> List[List[int]]:
    """Hashes `msg` to `count` elements of a degree-`m` extension of GF(modulus).

    Returns:
        A list of `count` elements, each a list of `m` integers.
    """
    if count < 1:
        raise InvalidParameterError("hash_to_field: count must be positive")
    len_in_bytes = count * m * FIELD_L
    pseudo_random = expand(msg, dst, len_in_bytes)
    out = []
    for i in range(count):
        element = []
        for j in range(m):
            offset = FIELD_L * (j + i * m)
            element.append(os2ip(pseudo_random[offset:offset + FIELD_L]) % modulus)
        out.append(element)
    return out


def hash_to_field_fp2(msg: bytes, count: int, dst: bytes, expand: ExpandFn = expand_message_xmd) -> List[Fp2]:
    return [Fp2(c0, c1) for c0, c1 in hash_to_field(msg, count, dst, expand, m=2)]


def hash_to_scalar(msg: bytes, dst: bytes, expand: ExpandFn = expand_message_xmd) -> int:
    """Hashes to a scalar in [0, r) from 48 uniform bytes."""
    return os2ip(expand(msg, dst, 48)) % R


# --- sqrt_ratio ---

def sqrt_ratio_3mod4(u: Fp, v: Fp, z: Fp) -> Tuple[bool, Fp]:
    """sqrt_ratio optimised for p = 3 mod 4 (RFC 9380, appendix F.2.1.2)."""
    c1 = (P - 3) // 4
    c2 = (-z).sqrt()
    tv1 = v.square()
    tv2 = u * v
    tv1 = tv1 * tv2
    y1 = (tv1 ** c1) * tv2
    y2 = y1 * c2
    is_qr = y1.square() * v == u
    return is_qr, FieldElement.cmov(y2, y1, is_qr)


@dataclass(frozen=True)
class _SqrtRatioConstants:
    c1: int
    c3: int
    c4: int
    c5: int
    c6: FieldElement
    c7: FieldElement


def _sqrt_ratio_constants(q: int, z: FieldElement) -> _SqrtRatioConstants:
    c1 = 0
    t = q - 1
    while t % 2 == 0:
        t //= 2
        c1 += 1
    c2 = (q - 1) >> c1
    return _SqrtRatioConstants(
        c1=c1,
        c3=(c2 - 1) // 2,
        c4=(1 << c1) - 1,
        c5=1 << (c1 - 1),
        c6=z ** c2,
        c7=z ** ((c2 + 1) // 2),
    )


def sqrt_ratio(u: FieldElement, v: FieldElement, c: _SqrtRatioConstants) -> Tuple[bool, FieldElement]:
    """Generic sqrt_ratio (RFC 9380, appendix F.2.1.1).

    Returns (True, sqrt(u/v)) when u/v is square, otherwise
    (False, sqrt(Z * u/v)).
    """
    cmov = FieldElement.cmov
    tv1 = c.c6
    tv2 = v ** c.c4
    tv3 = tv2.square()
    tv3 = tv3 * v
    tv5 = u * tv3
    tv5 = tv5 ** c.c3
    tv5 = tv5 * tv2
    tv2 = tv5 * v
    tv3 = tv5 * u
    tv4 = tv3 * tv2
    tv5 = tv4 ** c.c5
    is_qr = tv5.is_one()
    tv2 = tv3 * c.c7
    tv5 = tv4 * tv1
    tv3 = cmov(tv2, tv3, is_qr)
    tv4 = cmov(tv5, tv4, is_qr)
    for i in range(c.c1, 1, -1):
        tv5 = tv4 ** (1 << (i - 2))
        e1 = tv5.is_one()
        tv2 = tv3 * tv1
        tv1 = tv1.square()
        tv5 = tv4 * tv1
        tv3 = cmov(tv2, tv3, e1)
        tv4 = cmov(tv5, tv4, e1)
    return is_qr, tv3


# --- Simplified SWU ---

@dataclass(frozen=True)
class _SSWUParams:
    a: FieldElement
    b: FieldElement
    z: FieldElement
    sqrt_ratio: Callable[[FieldElement, FieldElement], Tuple[bool, FieldElement]]


def map_to_curve_sswu(u: FieldElement, params: _SSWUParams) -> Tuple[FieldElement, FieldElement]:
    """Simplified SWU for AB != 0 (RFC 9380, section 6.6.2).

    Returns affine (x, y) on the isogenous curve y^2 = x^3 + A'x + B'.
    """
    a, b, z = params.a, params.b, params.z
    one = type(u).one()
    tv1 = z * u.square()
    tv2 = tv1.square() + tv1
    tv3 = b * (tv2 + one)
    tv4 = a * FieldElement.cmov(z, -tv2, not tv2.is_zero())
    tv2 = tv3.square()
    tv6 = tv4.square()
    tv5 = tv6 * a
    tv2 = (tv2 + tv5) * tv3
    tv6 = tv6 * tv4
    tv5 = tv6 * b
    tv2 = tv2 + tv5
    x = tv1 * tv3
    is_valid, value = params.sqrt_ratio(tv2, tv6)
    y = tv1 * u * value
    x = FieldElement.cmov(x, tv3, is_valid)
    y = FieldElement.cmov(y, value, is_valid)
    if u.is_odd() != y.is_odd():
        y = -y
    return x / tv4, y


# --- Isogeny Maps ---

def _horner(coeffs: Sequence[FieldElement], x: FieldElement) -> FieldElement:
    acc = coeffs[-1]
    for c in reversed(coeffs[:-1]):
        acc = acc * x + c
    return acc


@dataclass(frozen=True)
class _IsogenyMap:
    x_num: Tuple[FieldElement, ...]
    x_den: Tuple[FieldElement, ...]
    y_num: Tuple[FieldElement, ...]
    y_den: Tuple[FieldElement, ...]

    def __call__(self, x: FieldElement, y: FieldElement) -> Tuple[FieldElement, FieldElement]:
        xn = _horner(self.x_num, x)
        xd = _horner(self.x_den, x)
        yn = _horner(self.y_num, x)
        yd = _horner(self.y_den, x)
        return xn / xd, y * yn / yd


# Coefficients are listed constant term first.
_G1_ISO = _IsogenyMap(
    x_num=tuple(Fp(c) for c in (
        0x11a05f2b1e833340b809101dd99815856b303e88a2d7005ff2627b56cdb4e2c85610c2d5f2e62d6eaeac1662734649b7,
        0x17294ed3e943ab2f0588bab22147a81c7c17e75b2f6a8417f565e33c70d1e86b4838f2a6f318c356e834eef1b3cb83bb,
        0xd54005db97678ec1d1048c5d10a9a1bce032473295983e56878e501ec68e25c958c3e3d2a09729fe0179f9dac9edcb0,
        0x1778e7166fcc6db74e0609d307e55412d7f5e4656a8dbf25f1b33289f1b330835336e25ce3107193c5b388641d9b6861,
        0xe99726a3199f4436642b4b3e4118e5499db995a1257fb3f086eeb65982fac18985a286f301e77c451154ce9ac8895d9,
        0x1630c3250d7313ff01d1201bf7a74ab5db3cb17dd952799b9ed3ab9097e68f90a0870d2dcae73d19cd13c1c66f652983,
        0xd6ed6553fe44d296a3726c38ae652bfb11586264f0f8ce19008e218f9c86b2a8da25128c1052ecaddd7f225a139ed84,
        0x17b81e7701abdbe2e8743884d1117e53356de5ab275b4db1a682c62ef0f2753339b7c8f8c8f475af9ccb5618e3f0c88e,
        0x80d3cf1f9a78fc47b90b33563be990dc43b756ce79f5574a2c596c928c5d1de4fa295f296b74e956d71986a8497e317,
        0x169b1f8e1bcfa7c42e0c37515d138f22dd2ecb803a0c5c99676314baf4bb1b7fa3190b2edc0327797f241067be390c9e,
        0x10321da079ce07e272d8ec09d2565b0dfa7dccdde6787f96d50af36003b14866f69b771f8c285decca67df3f1605fb7b,
        0x6e08c248e260e70bd1e962381edee3d31d79d7e22c837bc23c0bf1bc24c6b68c24b1b80b64d391fa9c8ba2e8ba2d229,
    )),
    x_den=tuple(Fp(c) for c in (
        0x8ca8d548cff19ae18b2e62f4bd3fa6f01d5ef4ba35b48ba9c9588617fc8ac62b558d681be343df8993cf9fa40d21b1c,
        0x12561a5deb559c4348b4711298e536367041e8ca0cf0800c0126c2588c48bf5713daa8846cb026e9e5c8276ec82b3bff,
        0xb2962fe57a3225e8137e629bff2991f6f89416f5a718cd1fca64e00b11aceacd6a3d0967c94fedcfcc239ba5cb83e19,
        0x3425581a58ae2fec83aafef7c40eb545b08243f16b1655154cca8abc28d6fd04976d5243eecf5c4130de8938dc62cd8,
        0x13a8e162022914a80a6f1d5f43e7a07dffdfc759a12062bb8d6b44e833b306da9bd29ba81f35781d539d395b3532a21e,
        0xe7355f8e4e667b955390f7f0506c6e9395735e9ce9cad4d0a43bcef24b8982f7400d24bc4228f11c02df9a29f6304a5,
        0x772caacf16936190f3e0c63e0596721570f5799af53a1894e2e073062aede9cea73b3538f0de06cec2574496ee84a3a,
        0x14a7ac2a9d64a8b230b3f5b074cf01996e7f63c21bca68a81996e1cdf9822c580fa5b9489d11e2d311f7d99bbdcc5a5e,
        0xa10ecf6ada54f825e920b3dafc7a3cce07f8d1d7161366b74100da67f39883503826692abba43704776ec3a79a1d641,
        0x95fc13ab9e92ad4476d6e3eb3a56680f682b4ee96f7d03776df533978f31c1593174e4b4b7865002d6384d168ecdd0a,
        0x1,
    )),
    y_num=tuple(Fp(c) for c in (
        0x90d97c81ba24ee0259d1f094980dcfa11ad138e48a869522b52af6c956543d3cd0c7aee9b3ba3c2be9845719707bb33,
        0x134996a104ee5811d51036d776fb46831223e96c254f383d0f906343eb67ad34d6c56711962fa8bfe097e75a2e41c696,
        0xcc786baa966e66f4a384c86a3b49942552e2d658a31ce2c344be4b91400da7d26d521628b00523b8dfe240c72de1f6,
        0x1f86376e8981c217898751ad8746757d42aa7b90eeb791c09e4a3ec03251cf9de405aba9ec61deca6355c77b0e5f4cb,
        0x8cc03fdefe0ff135caf4fe2a21529c4195536fbe3ce50b879833fd221351adc2ee7f8dc099040a841b6daecf2e8fedb,
        0x16603fca40634b6a2211e11db8f0a6a074a7d0d4afadb7bd76505c3d3ad5544e203f6326c95a807299b23ab13633a5f0,
        0x4ab0b9bcfac1bbcb2c977d027796b3ce75bb8ca2be184cb5231413c4d634f3747a87ac2460f415ec961f8855fe9d6f2,
        0x987c8d5333ab86fde9926bd2ca6c674170a05bfe3bdd81ffd038da6c26c842642f64550fedfe935a15e4ca31870fb29,
        0x9fc4018bd96684be88c9e221e4da1bb8f3abd16679dc26c1e8b6e6a1f20cabe69d65201c78607a360370e577bdba587,
        0xe1bba7a1186bdb5223abde7ada14a23c42a0ca7915af6fe06985e7ed1e4d43b9b3f7055dd4eba6f2bafaaebca731c30,
        0x19713e47937cd1be0dfd0b8f1d43fb93cd2fcbcb6caf493fd1183e416389e61031bf3a5cce3fbafce813711ad011c132,
        0x18b46a908f36f6deb918c143fed2edcc523559b8aaf0c2462e6bfe7f911f643249d9cdf41b44d606ce07c8a4d0074d8e,
        0xb182cac101b9399d155096004f53f447aa7b12a3426b08ec02710e807b4633f06c851c1919211f20d4c04f00b971ef8,
        0x245a394ad1eca9b72fc00ae7be315dc757b3b080d4c158013e6632d3c40659cc6cf90ad1c232a6442d9d3f5db980133,
        0x5c129645e44cf1102a159f748c4a3fc5e673d81d7e86568d9ab0f5d396a7ce46ba1049b6579afb7866b1e715475224b,
        0x15e6be4e990f03ce4ea50b3b42df2eb5cb181d8f84965a3957add4fa95af01b2b665027efec01c7704b456be69c8b604,
    )),
    y_den=tuple(Fp(c) for c in (
        0x16112c4c3a9c98b252181140fad0eae9601a6de578980be6eec3232b5be72e7a07f3688ef60c206d01479253b03663c1,
        0x1962d75c2381201e1a0cbd6c43c348b885c84ff731c4d59ca4a10356f453e01f78a4260763529e3532f6102c2e49a03d,
        0x58df3306640da276faaae7d6e8eb15778c4855551ae7f310c35a5dd279cd2eca6757cd636f96f891e2538b53dbf67f2,
        0x16b7d288798e5395f20d23bf89edb4d1d115c5dbddbcd30e123da489e726af41727364f2c28297ada8d26d98445f5416,
        0xbe0e079545f43e4b00cc912f8228ddcc6d19c9f0f69bbb0542eda0fc9dec916a20b15dc0fd2ededda39142311a5001d,
        0x8d9e5297186db2d9fb266eaac783182b70152c65550d881c5ecd87b6f0f5a6449f38db9dfa9cce202c6477faaf9b7ac,
        0x166007c08a99db2fc3ba8734ace9824b5eecfdfa8d0cf8ef5dd365bc400a0051d5fa9c01a58b1fb93d1a1399126a775c,
        0x16a3ef08be3ea7ea03bcddfabba6ff6ee5a4375efa1f4fd7feb34fd206357132b920f5b00801dee460ee415a15812ed9,
        0x1866c8ed336c61231a1be54fd1d74cc4f9fb0ce4c6af5920abc5750c4bf39b4852cfe2f7bb9248836b233d9d55535d4a,
        0x167a55cda70a6e1cea820597d94a84903216f763e13d87bb5308592e7ea7d4fbc7385ea3d529b35e346ef48bb8913f55,
        0x4d2f259eea405bd48f010a01ad2911d9c6dd039bb61a6290e591b36e636a5c871a5c29f4f83060400f8b49cba8f6aa8,
        0xaccbb67481d033ff5852c1e48c50c477f94ff8aefce42d28c0f9a88cea7913516f968986f7ebbea9684b529e2561092,
        0xad6b9514c767fe3c3613144b45f1496543346d98adf02267d5ceef9a00d9b8693000763e3b90ac11e99b138573345cc,
        0x2660400eb2e4f3b628bdd0d53cd76f2bf565b94e72927c1cb748df27942480e420517bd8714cc80d1fadc1326ed06f7,
        0xe0fa1d816ddc03e6b24255e0d7819c171c40f65e273b853324efcd6356caa205ca2f570f13497804415473a1d634b8f,
        0x1,
    )),
)

_G2_ISO = _IsogenyMap(
    x_num=tuple(Fp2(c0, c1) for c0, c1 in (
        (0x5c759507e8e333ebb5b7a9a47d7ed8532c52d39fd3a042a88b58423c50ae15d5c2638e343d9c71c6238aaaaaaaa97d6,
         0x5c759507e8e333ebb5b7a9a47d7ed8532c52d39fd3a042a88b58423c50ae15d5c2638e343d9c71c6238aaaaaaaa97d6),
        (0x0,
         0x11560bf17baa99bc32126fced787c88f984f87adf7ae0c7f9a208c6b4f20a4181472aaa9cb8d555526a9ffffffffc71a),
        (0x11560bf17baa99bc32126fced787c88f984f87adf7ae0c7f9a208c6b4f20a4181472aaa9cb8d555526a9ffffffffc71e,
         0x8ab05f8bdd54cde190937e76bc3e447cc27c3d6fbd7063fcd104635a790520c0a395554e5c6aaaa9354ffffffffe38d),
        (0x171d6541fa38ccfaed6dea691f5fb614cb14b4e7f4e810aa22d6108f142b85757098e38d0f671c7188e2aaaaaaaa5ed1,
         0x0),
    )),
    x_den=tuple(Fp2(c0, c1) for c0, c1 in (
        (0x0,
         0x1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffaa63),
        (0xc,
         0x1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffaa9f),
        (0x1, 0x0),
    )),
    y_num=tuple(Fp2(c0, c1) for c0, c1 in (
        (0x1530477c7ab4113b59a4c18b076d11930f7da5d4a07f649bf54439d87d27e500fc8c25ebf8c92f6812cfc71c71c6d706,
         0x1530477c7ab4113b59a4c18b076d11930f7da5d4a07f649bf54439d87d27e500fc8c25ebf8c92f6812cfc71c71c6d706),
        (0x0,
         0x5c759507e8e333ebb5b7a9a47d7ed8532c52d39fd3a042a88b58423c50ae15d5c2638e343d9c71c6238aaaaaaaa97be),
        (0x11560bf17baa99bc32126fced787c88f984f87adf7ae0c7f9a208c6b4f20a4181472aaa9cb8d555526a9ffffffffc71c,
         0x8ab05f8bdd54cde190937e76bc3e447cc27c3d6fbd7063fcd104635a790520c0a395554e5c6aaaa9354ffffffffe38f),
        (0x124c9ad43b6cf79bfbf7043de3811ad0761b0f37a1e26286b0e977c69aa274524e79097a56dc4bd9e1b371c71c718b10,
         0x0),
    )),
    y_den=tuple(Fp2(c0, c1) for c0, c1 in (
        (0x1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffa8fb,
         0x1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffa8fb),
        (0x0,
         0x1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffa9d3),
        (0x12,
         0x1a0111ea397fe69a4b1ba7b6434bacd764774b84f38512bf6730d2a0f6b0f6241eabfffeb153ffffb9feffffffffaa99),
        (0x1, 0x0),
    )),
)

# --- Suite Parameters ---

_G1_Z = Fp(11)
_G1_SSWU = _SSWUParams(
    a=Fp(0x144698a3b8e9433d693a02c96d4982b0ea985383ee66a8d8e8981aefd881ac98936f8da0e0f97f5cf428082d584c1d),
    b=Fp(0x12e2908d11688030018b12e8753eee3b2016c1f0f24f4070a0b9c14fcef35ef55a23215a316ceaa5d1cc48e98e172be0),
    z=_G1_Z,
    sqrt_ratio=lambda u, v: sqrt_ratio_3mod4(u, v, _G1_Z),
)

_G2_Z = Fp2(-2, -1)
_G2_SQRT_RATIO = _sqrt_ratio_constants(P * P, _G2_Z)
_G2_SSWU = _SSWUParams(
    a=Fp2(0, 240),
    b=Fp2(1012, 1012),
    z=_G2_Z,
    sqrt_ratio=lambda u, v: sqrt_ratio(u, v, _G2_SQRT_RATIO),
)


# --- Hash to Curve ---

def map_to_curve_g1(u: Fp) -> G1Point:
    """Maps a field element to E(Fp); the result is not yet in G1."""
    x, y = map_to_curve_sswu(u, _G1_SSWU)
    x, y = _G1_ISO(x, y)
    return G1Point.from_affine(x, y)


def map_to_curve_g2(u: Fp2) -> G2Point:
    """Maps a field element to E'(Fp2); the result is not yet in G2."""
    x, y = map_to_curve_sswu(u, _G2_SSWU)
    x, y = _G2_ISO(x, y)
    return G2Point.from_affine(x, y)


def _finish(q: G1Point | G2Point):
    point = q.clear_cofactor()
    if point.is_identity():
        return point
    point.assert_validity()
    return point


def hash_to_g1(msg: bytes, dst: bytes, expand: ExpandFn = expand_message_xmd) -> G1Point:
    """hash_to_curve into G1 (random-oracle construction).

    Args:
        msg: The message bytes.
        dst: Domain separation tag.
        expand: `expand_message_xmd` (SHA-256) or `expand_message_xof` (SHAKE256).
    """
    u0, u1 = (Fp(e[0]) for e in hash_to_field(msg, 2, dst, expand))
    return _finish(map_to_curve_g1(u0) + map_to_curve_g1(u1))


def hash_to_g2(msg: bytes, dst: bytes, expand: ExpandFn = expand_message_xmd) -> G2Point:
    """hash_to_curve into G2 (random-oracle construction)."""
    u0, u1 = hash_to_field_fp2(msg, 2, dst, expand)
    return _finish(map_to_curve_g2(u0) + map_to_curve_g2(u1))
