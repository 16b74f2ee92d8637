# digestbox

A library for computing and comparing message digests. It provides:

- a pure-Python MD6 (`digestbox.md6.hasher`) with a configurable digest
  length, key, mode parameter `L` and number of rounds, built on the
  compression function in `digestbox.md6.compress`;
- a generic HMAC construction (`digestbox.keyed.HmacHasher`) over any
  hasher factory and block size;
- a registry of named hash functions (`digestbox.algorithms`), each able
  to produce a plain or an HMAC hasher;
- string hashing with several output formats (`digestbox.hashstring`);
- in-memory tables for a list of files and their digests
  (`digestbox.filelist`) and for the digests of a single file
  (`digestbox.digesttable`).

It uses only the standard library.

## MD6

```python
from digestbox.md6.hasher import MD6, md6_hash

h = MD6(256)
h.update(b"hello ")
h.update(b"world")
print(h.hexdigest())

raw = md6_hash(256, b"hello world")
```

`MD6(d, key, L, r)` takes the digest length in bits (1–512, default 256),
an optional key of at most 64 bytes, the mode parameter `L` (0 for purely
sequential, 64 by default) and the number of rounds `r` (by default
40 + d/4, at least 80 when a key is given). `update_bits(data, bitlen)`
feeds messages whose length is not a whole number of bytes. `digest()`
may be called more than once and returns the same value; feeding more
data after it raises an error. Invalid parameters raise
`digestbox.md6.compress.MD6Error`, whose `code` attribute tells which
check failed.

## Named hash functions and HMAC

```python
from digestbox import algorithms

for func in algorithms.all_functions():
    print(func.name, func.digest_size, func.hmac_supported)

if algorithms.is_supported("SHA256"):
    plain = algorithms.new("SHA256", None)
    keyed = algorithms.new("SHA256", b"secret")
```

The registry holds MD5, SHA1, RIPEMD160, the SHA-2 and SHA-3 families,
BLAKE2b, BLAKE2s, MD6-224/256/384/512, ADLER32 and CRC32. Names are looked
up without regard to case. A function counts as supported when its hasher
can be created in the running Python (RIPEMD160, for one, depends on the
local hashlib). ADLER32 and CRC32 have no block size, so a key given to
them is ignored and a plain hasher is returned. An unknown or unavailable
name raises `algorithms.UnsupportedHashError`.

`HmacHasher` can wrap any hash constructor directly:

```python
import hashlib
from digestbox.keyed import HmacHasher

mac = HmacHasher(hashlib.sha256, 64, b"secret")
mac.update(b"message")
print(mac.hexdigest())
```

## Hashing strings

```python
from digestbox.hashstring import DigestFormat, hash_string

digests = hash_string(["MD5", "SHA1"], "hello", DigestFormat.HEX_UPPER)
```

`hash_string(names, text, fmt, hmac_key)` returns a dict from function
name to digest, in registry order. `format_digest(raw, fmt)` renders raw
digest bytes as lower-case hex, upper-case hex or base64.

## Digest tables

`FileList(names)` keeps rows of files added by URI with
`append_row(uri, check)`, each with an optional expected digest and one
digest column per named function. `check_digests(row, enabled, fmt)`
compares the expected digest with the computed ones (hex without regard
to case, base64 exactly) and returns True, False, or None when there is
nothing to check.

`DigestTable(names, hmac_names)` keeps one row per hash function for a
single file: `toggle` enables or disables a function, `set_hmac` switches
keyable functions to their `HMAC-` labels and clears their digests,
`check(text)` tells whether the text matches any stored digest, and
`load_enabled` / `enabled_names` turn the set of enabled functions into a
list of names and back.

## What it does not do

digestbox is a library only. It has no command-line program and no
graphical interface, it does not read files or walk directories to hash
them, and it stores no preferences: the lists that `enabled_names`
returns are for the caller to save wherever it likes.

## Running the tests

```
pip install digestbox[test]
pytest
```