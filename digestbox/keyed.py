"""HMAC built on top of any incremental hasher with ``update`` and ``digest``."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol


class _Hasher(Protocol):
    def update(self, data: bytes) -> Any: ...

    def digest(self) -> bytes: ...


_IPAD = 0x36
_OPAD = 0x5C


class HmacHasher:
    """Keyed-hash message authentication code over a hasher ``factory``.

    ``factory`` must return a fresh hasher on each call and ``block_size``
    is that hash function's block size in bytes. Keys longer than a block
    are hashed first; shorter ones are padded with zero bytes.
    """

    def __init__(
        self,
        factory: Callable[[], _Hasher],
        block_size: int,
        key: bytes,
    ) -> None:
        if block_size <= 0:
            raise ValueError(f"block size must be positive, got {block_size}")
        if key is None:
            raise ValueError("an HMAC key is required")
        key = bytes(key)

        if len(key) > block_size:
            shortener = factory()
            shortener.update(key)
            key = shortener.digest()
            if not 0 < len(key) <= block_size:
                raise ValueError(
                    f"digest of {len(key)} bytes does not fit a {block_size}-byte block"
                )
        padded = key.ljust(block_size, b"\0")

        self.block_size = block_size
        self._inner = factory()
        self._inner.update(bytes(b ^ _IPAD for b in padded))
        self._outer = factory()
        self._outer.update(bytes(b ^ _OPAD for b in padded))
        self._result: bytes | None = None

    def update(self, data: bytes) -> None:
        """Feed message data."""
        if self._result is not None:
            raise ValueError("HMAC has already been finalized")
        self._inner.update(bytes(data))

    def digest(self) -> bytes:
        """Finish and return the authentication code; later calls return the same value."""
        if self._result is None:
            self._outer.update(self._inner.digest())
            self._result = self._outer.digest()
        return self._result

    def hexdigest(self) -> str:
        """Return the authentication code as lowercase hexadecimal."""
        return self.digest().hex()

    @property
    def digest_size(self) -> int:
        """Size of the authentication code in bytes."""
        return len(self.digest()) if self._result is not None else getattr(
            self._outer, "digest_size", 0
        )