"""Bit- and word-level helpers used by the MD6 mode of operation."""

from __future__ import annotations

from .compress import MD6_W, WORD_MASK

_WORD_BYTES = MD6_W // 8


def default_rounds(d: int, keylen: int) -> int:
    """Return the default number of rounds for digest size ``d`` and key length.

    The default is 40 plus a quarter of the digest size, raised to at least
    80 when a key is in use.
    """
    rounds = 40 + d // 4
    if keylen > 0:
        rounds = max(80, rounds)
    return rounds


def byte_reverse(word: int) -> int:
    """Return the 64-bit word with its bytes in reverse order."""
    raw = (word & WORD_MASK).to_bytes(_WORD_BYTES, "little")
    return int.from_bytes(raw, "big")


def append_bits(dest: bytes, destlen: int, src: bytes, srclen: int) -> bytes:
    """Append the first ``srclen`` bits of ``src`` to a ``destlen``-bit string.

    Bits are taken high-order first within each byte. The result holds
    ``destlen + srclen`` bits in as few bytes as needed, with any unused
    low-order bits of the last byte set to zero. With ``srclen`` of zero the
    bytes of ``dest`` covering ``destlen`` bits are returned unchanged.
    """
    if destlen < 0 or srclen < 0:
        raise ValueError("bit lengths must not be negative")
    dest_bytes = (destlen + 7) // 8
    src_bytes = (srclen + 7) // 8
    if len(dest) < dest_bytes:
        raise ValueError(f"destination holds fewer than {destlen} bits")
    if len(src) < src_bytes:
        raise ValueError(f"source holds fewer than {srclen} bits")

    if srclen == 0:
        return bytes(dest[:dest_bytes])

    head = bytes(dest[: destlen // 8])
    partial = destlen % 8
    accum = dest[destlen // 8] >> (8 - partial) if partial else 0

    src_value = int.from_bytes(bytes(src[:src_bytes]), "big") >> (src_bytes * 8 - srclen)
    tail_bits = partial + srclen
    value = (accum << srclen) | src_value
    value <<= -tail_bits % 8
    return head + value.to_bytes((tail_bits + 7) // 8, "big")