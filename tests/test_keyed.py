import hashlib
import hmac

import pytest

from digestbox.keyed import HmacHasher


@pytest.mark.parametrize(
    "algo, block", [("sha256", 64), ("md5", 64), ("sha512", 128), ("sha1", 64)]
)
def test_matches_standard_hmac(algo, block):
    key = b"secret"
    mac = HmacHasher(lambda: hashlib.new(algo), block, key)
    mac.update(b"hello ")
    mac.update(b"world")
    assert mac.digest() == hmac.new(key, b"hello world", algo).digest()


def test_long_key_is_hashed_first():
    key = b"k" * 200
    mac = HmacHasher(hashlib.sha256, 64, key)
    mac.update(b"data")
    assert mac.digest() == hmac.new(key, b"data", "sha256").digest()


def test_empty_key():
    mac = HmacHasher(hashlib.sha1, 64, b"")
    mac.update(b"abc")
    assert mac.hexdigest() == hmac.new(b"", b"abc", "sha1").hexdigest()


def test_digest_is_stable():
    mac = HmacHasher(hashlib.sha256, 64, b"secret")
    mac.update(b"abc")
    first = mac.digest()
    assert mac.digest() == first


def test_update_after_digest_fails():
    mac = HmacHasher(hashlib.sha256, 64, b"secret")
    mac.digest()
    with pytest.raises(ValueError):
        mac.update(b"more")


def test_bad_block_size():
    with pytest.raises(ValueError):
        HmacHasher(hashlib.sha256, 0, b"secret")


def test_missing_key():
    with pytest.raises(ValueError):
        HmacHasher(hashlib.sha256, 64, None)


def test_digest_larger_than_block_rejected():
    with pytest.raises(ValueError):
        HmacHasher(hashlib.sha512, 32, b"x" * 40)