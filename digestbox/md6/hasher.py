"""MD6 hashing in its standard hierarchical (or sequential) mode of operation."""

from __future__ import annotations

from .bits import append_bits, default_rounds
from .compress import (
    BAD_L,
    BAD_R,
    BADHASHLEN,
    BADKEYLEN,
    DEFAULT_L,
    FAIL,
    MAX_STACK_HEIGHT,
    MD6_B,
    MD6_C,
    MD6_K,
    MD6_W,
    NULLDATA,
    STACKOVERFLOW,
    STACKUNDERFLOW,
    MD6Error,
    standard_compress,
)

_WORD_BYTES = MD6_W // 8
_BLOCK_BITS = MD6_B * MD6_W
_BLOCK_BYTES = MD6_B * _WORD_BYTES
_CHUNK_BITS = MD6_C * MD6_W
_CHUNK_BYTES = MD6_C * _WORD_BYTES
_MAX_KEY_BYTES = MD6_K * _WORD_BYTES


def _words_to_bytes(words: list[int]) -> bytes:
    return b"".join(word.to_bytes(_WORD_BYTES, "big") for word in words)


def _bytes_to_words(raw: bytes | bytearray) -> list[int]:
    return [
        int.from_bytes(raw[at:at + _WORD_BYTES], "big")
        for at in range(0, len(raw), _WORD_BYTES)
    ]


class MD6:
    """Incremental MD6 hasher producing a ``d``-bit digest.

    ``key`` is an optional salt of at most 64 bytes, ``L`` the mode
    parameter (0 for purely sequential, 64 by default) and ``r`` the number
    of rounds (by default 40 + d/4, at least 80 when a key is given).
    """

    def __init__(
        self,
        d: int = 256,
        key: bytes | None = b"",
        L: int = DEFAULT_L,
        r: int | None = None,
    ) -> None:
        key_bytes = bytes(key) if key is not None else b""
        if len(key_bytes) > _MAX_KEY_BYTES:
            raise MD6Error(
                f"key must be at most {_MAX_KEY_BYTES} bytes, got {len(key_bytes)}",
                BADKEYLEN,
            )
        if d < 1 or d > 512 or d > MD6_W * MD6_C // 2:
            raise MD6Error(f"digest size must be in 1..512 bits, got {d}", BADHASHLEN)
        if r is None:
            r = default_rounds(d, len(key_bytes))
        if L < 0 or L > 255:
            raise MD6Error(f"mode parameter L must be in 0..255, got {L}", BAD_L)
        if r < 0 or r > 255:
            raise MD6Error(f"rounds must be in 0..255, got {r}", BAD_R)

        self.d = d
        self.L = L
        self.r = r
        self.keylen = len(key_bytes)
        self._key_words = _bytes_to_words(key_bytes.ljust(_MAX_KEY_BYTES, b"\0"))

        self._blocks = [bytearray(_BLOCK_BYTES) for _ in range(MAX_STACK_HEIGHT)]
        self._bits = [0] * MAX_STACK_HEIGHT
        self._index = [0] * MAX_STACK_HEIGHT
        self._top = 1
        self._bits_processed = 0
        self._compression_calls = 0
        self._hashval: bytes | None = None

        # Sequential mode at level 1 starts with an all-zero chaining value.
        if L == 0:
            self._bits[1] = _CHUNK_BITS

    @property
    def bits_processed(self) -> int:
        """Number of message bits taken in so far."""
        return self._bits_processed

    @property
    def digest_size(self) -> int:
        """Size of the digest in bytes."""
        return (self.d + 7) // 8

    def update(self, data: bytes) -> None:
        """Feed whole bytes of message data."""
        if data is None:
            raise MD6Error("data is missing", NULLDATA)
        raw = bytes(data)
        self.update_bits(raw, len(raw) * 8)

    def update_bits(self, data: bytes, bitlen: int) -> None:
        """Feed the first ``bitlen`` bits of ``data``, high-order bits first."""
        if data is None:
            raise MD6Error("data is missing", NULLDATA)
        if self._hashval is not None:
            raise MD6Error("hash has already been finalized", FAIL)
        raw = bytes(data)
        if bitlen < 0 or bitlen > len(raw) * 8:
            raise MD6Error(f"bit length {bitlen} does not fit the {len(raw)}-byte data", FAIL)

        done = 0
        leaf = self._blocks[1]
        while done < bitlen:
            filled = self._bits[1]
            portion = min(bitlen - done, _BLOCK_BITS - filled)
            src = raw[done // 8:]
            if portion % 8 == 0 and filled % 8 == 0 and done % 8 == 0:
                start = filled // 8
                leaf[start:start + portion // 8] = src[:portion // 8]
            else:
                merged = append_bits(bytes(leaf[:(filled + 7) // 8]), filled, src, portion)
                leaf[:len(merged)] = merged
            done += portion
            self._bits[1] += portion
            self._bits_processed += portion

            if self._bits[1] == _BLOCK_BITS and done < bitlen:
                self._process(1, final=False)

    def _compress_block(self, ell: int, z: int) -> list[int]:
        if ell < 0:
            raise MD6Error("MD6 stack underflow", STACKUNDERFLOW)
        if ell >= MAX_STACK_HEIGHT - 1:
            raise MD6Error("MD6 stack overflow: message too long", STACKOVERFLOW)

        self._compression_calls += 1
        block = self._blocks[ell]
        chaining = standard_compress(
            self._key_words,
            ell,
            self._index[ell],
            self.r,
            self.L,
            z,
            _BLOCK_BITS - self._bits[ell],
            self.keylen,
            self.d,
            _bytes_to_words(block),
        )
        self._bits[ell] = 0
        self._index[ell] += 1
        block[:] = bytes(_BLOCK_BYTES)
        return chaining

    def _process(self, ell: int, final: bool) -> None:
        while True:
            if not final:
                if self._bits[ell] < _BLOCK_BITS:
                    return
            elif ell == self._top:
                if ell == self.L + 1:
                    if self._bits[ell] == _CHUNK_BITS and self._index[ell] > 0:
                        return
                elif ell > 1 and self._bits[ell] == _CHUNK_BITS:
                    return

            z = 1 if final and ell == self._top else 0
            chaining = self._compress_block(ell, z)
            if z:
                self._hashval = _words_to_bytes(chaining)
                return

            next_level = min(ell + 1, self.L + 1)
            if (
                next_level == self.L + 1
                and self._index[next_level] == 0
                and self._bits[next_level] == 0
            ):
                self._bits[next_level] = _CHUNK_BITS
            start = self._bits[next_level] // 8
            self._blocks[next_level][start:start + _CHUNK_BYTES] = _words_to_bytes(chaining)
            self._bits[next_level] += _CHUNK_BITS
            self._top = max(self._top, next_level)
            ell = next_level

    def _finalize(self) -> bytes:
        if self._hashval is None:
            if self._top == 1:
                ell = 1
            else:
                ell = next(
                    (level for level in range(1, self._top + 1) if self._bits[level] > 0),
                    self._top + 1,
                )
            self._process(ell, final=True)
        assert self._hashval is not None
        return self._trimmed(self._hashval)

    def _trimmed(self, chaining: bytes) -> bytes:
        size = (self.d + 7) // 8
        partial = self.d % 8
        value = bytearray(chaining[len(chaining) - size:]) + bytearray(len(chaining) - size)
        if partial:
            for at in range(size):
                value[at] = ((value[at] << (8 - partial)) & 0xFF) | (value[at + 1] >> partial)
        return bytes(value[:size])

    def digest(self) -> bytes:
        """Finish hashing and return the digest; later calls return the same value."""
        return self._finalize()

    def hexdigest(self) -> str:
        """Return the digest as ``ceil(d/4)`` lowercase hexadecimal digits."""
        return self.digest().hex()[: (self.d + 3) // 4]


def md6_hash(
    d: int,
    data: bytes,
    key: bytes | None = b"",
    L: int = DEFAULT_L,
    r: int | None = None,
) -> bytes:
    """Hash ``data`` in one call and return the ``d``-bit digest."""
    hasher = MD6(d, key, L, r)
    hasher.update(data)
    return hasher.digest()