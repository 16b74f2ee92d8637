"""Registry of the hash functions available for digesting data."""

from __future__ import annotations

import functools
import hashlib
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from .keyed import HmacHasher
from .md6.hasher import MD6


class UnsupportedHashError(ValueError):
    """Raised for an unknown hash function or one unavailable here."""


class _Checksum:
    """Incremental 32-bit checksum presented as a hasher."""

    digest_size = 4

    def __init__(self, func: Callable[[bytes, int], int], start: int) -> None:
        self._func = func
        self._value = start

    def update(self, data: bytes) -> None:
        self._value = self._func(bytes(data), self._value)

    def digest(self) -> bytes:
        return (self._value & 0xFFFFFFFF).to_bytes(4, "big")

    def hexdigest(self) -> str:
        return self.digest().hex()


@dataclass(frozen=True)
class HashFunction:
    """A named hash function with its hasher factory and sizes in bytes.

    A ``block_size`` of zero means the function cannot be used for HMAC.
    """

    name: str
    factory: Callable[[], Any]
    digest_size: int
    block_size: int = 0

    @property
    def hmac_supported(self) -> bool:
        return self.block_size > 0

    @property
    def supported(self) -> bool:
        return _probe(self.name)

    def new(self, hmac_key: bytes | None = None) -> Any:
        """Return a fresh hasher, keyed with HMAC when a key is given and HMAC applies."""
        if not self.supported:
            raise UnsupportedHashError(f"hash function {self.name} is not available")
        if hmac_key is not None and self.hmac_supported:
            return HmacHasher(self.factory, self.block_size, hmac_key)
        return self.factory()


def _lib(algo: str) -> Callable[[], Any]:
    return functools.partial(hashlib.new, algo)


_FUNCTIONS: tuple[HashFunction, ...] = (
    HashFunction("MD5", _lib("md5"), 16, 64),
    HashFunction("SHA1", _lib("sha1"), 20, 64),
    HashFunction("RIPEMD160", _lib("ripemd160"), 20, 64),
    HashFunction("SHA224", _lib("sha224"), 28, 64),
    HashFunction("SHA256", _lib("sha256"), 32, 64),
    HashFunction("SHA384", _lib("sha384"), 48, 128),
    HashFunction("SHA512", _lib("sha512"), 64, 128),
    HashFunction("SHA3-224", _lib("sha3_224"), 28, 144),
    HashFunction("SHA3-256", _lib("sha3_256"), 32, 136),
    HashFunction("SHA3-384", _lib("sha3_384"), 48, 104),
    HashFunction("SHA3-512", _lib("sha3_512"), 64, 72),
    HashFunction("BLAKE2b", _lib("blake2b"), 64, 128),
    HashFunction("BLAKE2s", _lib("blake2s"), 32, 64),
    HashFunction("MD6-224", functools.partial(MD6, 224), 28, 512),
    HashFunction("MD6-256", functools.partial(MD6, 256), 32, 512),
    HashFunction("MD6-384", functools.partial(MD6, 384), 48, 512),
    HashFunction("MD6-512", functools.partial(MD6, 512), 64, 512),
    HashFunction("ADLER32", functools.partial(_Checksum, zlib.adler32, 1), 4),
    HashFunction("CRC32", functools.partial(_Checksum, zlib.crc32, 0), 4),
)

_BY_NAME = {func.name.casefold(): func for func in _FUNCTIONS}


@functools.cache
def _probe(name: str) -> bool:
    func = _BY_NAME.get(name.casefold())
    if func is None:
        return False
    try:
        func.factory()
    except (ValueError, TypeError):
        return False
    return True


def all_functions() -> tuple[HashFunction, ...]:
    """Every known hash function, in display order, whether available or not."""
    return _FUNCTIONS


def is_supported(name: str) -> bool:
    """Whether ``name`` is a known hash function that can be used here."""
    return _probe(name)


def get(name: str) -> HashFunction:
    """Look up a usable hash function by name, ignoring case."""
    func = _BY_NAME.get(name.casefold())
    if func is None:
        raise UnsupportedHashError(f"unknown hash function: {name}")
    if not func.supported:
        raise UnsupportedHashError(f"hash function {func.name} is not available")
    return func


def new(name: str, hmac_key: bytes | None = None) -> Any:
    """Return a fresh hasher for ``name``, keyed with HMAC when a key is given."""
    return get(name).new(hmac_key)