"""MD6 compression function and the packing of its 89-word input block."""

from __future__ import annotations

from collections.abc import Sequence

# Word size in bits and the sizes, in words, of the compression input parts.
MD6_W = 64
MD6_N = 89
MD6_C = 16
MD6_B = 64
MD6_Q = 15
MD6_K = 8
MD6_U = 1
MD6_V = 1

MAX_ROUNDS = 255
DEFAULT_L = 64
MAX_STACK_HEIGHT = 29

WORD_MASK = (1 << MD6_W) - 1

# Status codes carried by MD6Error.
FAIL = 1
BADHASHLEN = 2
NULLSTATE = 3
BADKEYLEN = 4
STATENOTINIT = 5
STACKUNDERFLOW = 6
STACKOVERFLOW = 7
NULLDATA = 8
NULL_N = 9
NULL_B = 10
BAD_ELL = 11
BAD_P = 12
NULL_K = 13
NULL_Q = 14
NULL_C = 15
BAD_L = 16
BAD_R = 17
OUT_OF_MEMORY = 18

# Initial 960 bits of the fractional part of sqrt(6).
Q = (
    0x7311C2812425CFA0,
    0x6432286434AAC8E7,
    0xB60450E9EF68B7C1,
    0xE8FB23908D9F06F1,
    0xDD2E76CBA691E5BF,
    0x0CD0D63B2C30BC41,
    0x1F8CCF6823058F8A,
    0x54E5ED5B88E3775D,
    0x4AD12AAE0A6D6031,
    0x3E7F16BB88222E0D,
    0x8AF8671D3FB50C2C,
    0x995AD1178BD25C31,
    0xC878C1DD04C4B633,
    0x3B72066C7A1552AC,
    0x0D6F3522631EFFCB,
)

_S0 = 0x0123456789ABCDEF
_SMASK = 0x7311C2812425CFA0

# Feedback tap positions.
_T0, _T1, _T2, _T3, _T4, _T5 = 17, 18, 21, 31, 67, 89

# (right shift, left shift) for each of the 16 steps of a round.
_SHIFTS = (
    (10, 11), (5, 24), (13, 9), (10, 16),
    (11, 15), (12, 9), (2, 27), (7, 15),
    (14, 6), (15, 2), (7, 29), (13, 8),
    (11, 15), (7, 5), (6, 31), (12, 9),
)


class MD6Error(ValueError):
    """Raised when MD6 receives invalid parameters or state."""

    def __init__(self, message: str, code: int = FAIL) -> None:
        super().__init__(message)
        self.code = code


def _words(values: Sequence[int] | None, length: int, what: str, code: int) -> list[int]:
    if values is None:
        raise MD6Error(f"{what} is missing", code)
    words = list(values)
    if len(words) != length:
        raise MD6Error(f"{what} must hold {length} words, got {len(words)}", code)
    return [word & WORD_MASK for word in words]


def make_control_word(r: int, L: int, z: int, p: int, keylen: int, d: int) -> int:
    """Build the control word V from rounds, mode, final flag, padding, key length and digest size."""
    return (
        (r << 48) | (L << 40) | (z << 36) | (p << 20) | (keylen << 12) | d
    ) & WORD_MASK


def make_node_id(ell: int, i: int) -> int:
    """Build the unique node ID U from a tree level and an index within it."""
    return ((ell << 56) | i) & WORD_MASK


def pack(
    key_words: Sequence[int],
    ell: int,
    i: int,
    r: int,
    L: int,
    z: int,
    p: int,
    keylen: int,
    d: int,
    block: Sequence[int],
) -> list[int]:
    """Assemble the 89-word compression input: Q, key, U, V and the data block."""
    key = _words(key_words, MD6_K, "key", NULL_K)
    data = _words(block, MD6_B, "data block", NULL_B)
    return [
        *Q,
        *key,
        make_node_id(ell, i),
        make_control_word(r, L, z, p, keylen, d),
        *data,
    ]


def _main_compression_loop(work: list[int], rounds: int) -> None:
    s = _S0
    for _ in range(rounds):
        for rs, ls in _SHIFTS:
            at = len(work)
            x = (
                s
                ^ work[at - _T5]
                ^ work[at - _T0]
                ^ (work[at - _T1] & work[at - _T2])
                ^ (work[at - _T3] & work[at - _T4])
            )
            x ^= x >> rs
            work.append((x ^ (x << ls)) & WORD_MASK)
        s = ((s << 1) ^ (s >> (MD6_W - 1)) ^ (s & _SMASK)) & WORD_MASK


def compress(n_words: Sequence[int], rounds: int) -> list[int]:
    """Compress an 89-word input into a 16-word chaining value."""
    work = _words(n_words, MD6_N, "compression input", NULL_N)
    if rounds < 0 or rounds > MAX_ROUNDS:
        raise MD6Error(f"rounds must be in 0..{MAX_ROUNDS}, got {rounds}", BAD_R)
    _main_compression_loop(work, rounds)
    start = (rounds - 1) * MD6_C + MD6_N
    return work[start:start + MD6_C]


def standard_compress(
    key_words: Sequence[int],
    ell: int,
    i: int,
    r: int,
    L: int,
    z: int,
    p: int,
    keylen: int,
    d: int,
    block: Sequence[int],
) -> list[int]:
    """Validate the standard inputs, pack them and compress the result."""
    if block is None:
        raise MD6Error("data block is missing", NULL_B)
    if r < 0 or r > MAX_ROUNDS:
        raise MD6Error(f"rounds must be in 0..{MAX_ROUNDS}, got {r}", BAD_R)
    if L < 0 or L > 255:
        raise MD6Error(f"mode parameter L must be in 0..255, got {L}", BAD_L)
    if ell < 0 or ell > 255:
        raise MD6Error(f"level must be in 0..255, got {ell}", BAD_ELL)
    if p < 0 or p > MD6_B * MD6_W:
        raise MD6Error(f"padding bits must be in 0..{MD6_B * MD6_W}, got {p}", BAD_P)
    if d <= 0 or d > MD6_C * MD6_W // 2:
        raise MD6Error(f"digest size must be in 1..{MD6_C * MD6_W // 2}, got {d}", BADHASHLEN)
    if key_words is None:
        raise MD6Error("key is missing", NULL_K)
    return compress(pack(key_words, ell, i, r, L, z, p, keylen, d, block), r)