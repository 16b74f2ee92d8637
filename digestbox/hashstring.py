"""Hash a text string with several hash functions at once."""

from __future__ import annotations

import base64
import enum
from collections.abc import Iterable

from . import algorithms


class DigestFormat(enum.Enum):
    """How a raw digest is written out."""

    HEX_LOWER = "hex-lower"
    HEX_UPPER = "hex-upper"
    BASE64 = "base64"


def format_digest(raw: bytes, fmt: DigestFormat = DigestFormat.HEX_LOWER) -> str:
    """Render ``raw`` digest bytes in the given format."""
    if fmt is DigestFormat.HEX_LOWER:
        return raw.hex()
    if fmt is DigestFormat.HEX_UPPER:
        return raw.hex().upper()
    if fmt is DigestFormat.BASE64:
        return base64.b64encode(raw).decode("ascii")
    raise ValueError(f"invalid digest format: {fmt!r}")


def hash_string(
    names: Iterable[str],
    text: str | bytes,
    fmt: DigestFormat = DigestFormat.HEX_LOWER,
    hmac_key: bytes | None = None,
) -> dict[str, str]:
    """Digest ``text`` with each named function.

    Returns a mapping from function name to formatted digest, ordered as the
    functions are listed by :func:`digestbox.algorithms.all_functions`.
    """
    if text is None:
        raise ValueError("text is required")
    if not isinstance(fmt, DigestFormat):
        raise ValueError(f"invalid digest format: {fmt!r}")
    data = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    wanted = {algorithms.get(name).name for name in names}

    results: dict[str, str] = {}
    for func in algorithms.all_functions():
        if func.name not in wanted:
            continue
        hasher = func.new(hmac_key)
        hasher.update(data)
        results[func.name] = format_digest(hasher.digest(), fmt)
    return results