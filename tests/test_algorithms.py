import hashlib
import hmac

import pytest

from digestbox import algorithms
from digestbox.algorithms import UnsupportedHashError
from digestbox.md6.hasher import md6_hash


def _digest(name, data, key=None):
    hasher = algorithms.new(name, key)
    hasher.update(data)
    return hasher.digest()


def test_sha256_matches_hashlib():
    assert _digest("SHA256", b"abc") == hashlib.sha256(b"abc").digest()


def test_lookup_ignores_case():
    assert algorithms.get("sha3-256").name == "SHA3-256"


def test_crc32_check_value():
    assert _digest("CRC32", b"123456789").hex() == "cbf43926"


def test_adler32_empty_is_one():
    assert _digest("ADLER32", b"") == (1).to_bytes(4, "big")


def test_md6_through_registry():
    assert _digest("MD6-256", b"abc") == md6_hash(256, b"abc")


def test_hmac_sha1():
    key = b"secret"
    assert _digest("SHA1", b"message", key) == hmac.new(key, b"message", "sha1").digest()


def test_checksum_ignores_hmac_key():
    assert _digest("CRC32", b"data", b"secret") == _digest("CRC32", b"data")
    assert not algorithms.get("CRC32").hmac_supported


def test_unknown_name():
    assert not algorithms.is_supported("NOPE")
    with pytest.raises(UnsupportedHashError):
        algorithms.get("NOPE")
    with pytest.raises(UnsupportedHashError):
        algorithms.new("NOPE")


def test_names_unique_and_digest_sizes_match():
    names = [func.name for func in algorithms.all_functions()]
    assert len(names) == len(set(names))
    for func in algorithms.all_functions():
        if func.supported:
            hasher = func.new()
            hasher.update(b"x")
            assert len(hasher.digest()) == func.digest_size


def test_hmac_functions_fit_block():
    for func in algorithms.all_functions():
        if func.hmac_supported:
            assert func.digest_size <= func.block_size