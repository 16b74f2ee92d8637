"""The table of files queued for hashing, with one digest column per hash function."""

from __future__ import annotations

import posixpath
from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import quote, unquote, urlsplit

from .hashstring import DigestFormat

_PATH_SAFE = "/!$&'()*+,;=:@~"


def _parse_name(uri: str) -> str:
    """Turn a URI into the name shown to the user: a local path for file URIs."""
    parts = urlsplit(uri)
    if parts.scheme == "file" and parts.netloc in ("", "localhost"):
        return unquote(parts.path) or "/"
    return uri


def _uri_from_parse_name(name: str) -> str:
    if name.startswith("/"):
        return "file://" + quote(name, safe=_PATH_SAFE)
    return name


def _basename_of(name: str) -> str:
    path = name if name.startswith("/") else unquote(urlsplit(name).path)
    stripped = path.rstrip("/")
    if not stripped:
        return "/"
    return posixpath.basename(stripped)


@dataclass
class _Row:
    pname: str
    check: str
    digests: dict[str, str | None]
    status: bool | None = None


@dataclass
class FileList:
    """Rows of files, each with a display name, an expected digest and computed digests.

    ``names`` are the hash functions that get a digest column. ``show_status``
    becomes true once any row carries an expected digest to check against.
    """

    names: tuple[str, ...]
    show_status: bool = False
    _rows: list[_Row] = field(default_factory=list, repr=False)

    def __init__(self, names: Iterable[str]) -> None:
        self.names = tuple(names)
        self.show_status = False
        self._rows = []

    def __len__(self) -> int:
        return len(self._rows)

    def _row(self, row: int) -> _Row:
        if row < 0 or row >= len(self._rows):
            raise IndexError(f"no row {row} in a list of {len(self._rows)}")
        return self._rows[row]

    def _column(self, name: str) -> str:
        if name not in self.names:
            raise KeyError(f"no digest column for hash function {name!r}")
        return name

    def append_row(self, uri: str, check: str | None = None) -> None:
        """Add a file by URI, optionally with a digest it is expected to match."""
        if uri is None:
            raise ValueError("a URI is required")
        self._rows.append(
            _Row(
                pname=_parse_name(uri),
                check=check if check is not None else "",
                digests=dict.fromkeys(self.names),
            )
        )
        if check is not None:
            self.show_status = True

    def remove_rows(self, rows: Iterable[int]) -> None:
        """Remove the given row indices; removing every row clears the list."""
        selected = set(rows)
        for row in selected:
            self._row(row)
        if len(selected) == len(self._rows):
            self.clear()
            return
        self._rows = [r for at, r in enumerate(self._rows) if at not in selected]

    def uri(self, row: int) -> str:
        """Return the URI of the file in ``row``."""
        return _uri_from_parse_name(self._row(row).pname)

    def basename(self, row: int) -> str:
        """Return the last path component of the file in ``row``."""
        return _basename_of(self._row(row).pname)

    def set_digest(self, row: int, name: str, digest: str | None) -> None:
        """Store the digest computed by hash function ``name`` for ``row``."""
        self._row(row).digests[self._column(name)] = digest

    def digest(self, row: int, name: str) -> str | None:
        """Return the stored digest, or None if unset or the row does not exist."""
        column = self._column(name)
        if row < 0:
            raise IndexError(f"no row {row} in a list of {len(self._rows)}")
        if row >= len(self._rows):
            return None
        return self._rows[row].digests[column]

    def check_digests(
        self,
        row: int,
        enabled: Iterable[str] | None = None,
        fmt: DigestFormat = DigestFormat.HEX_LOWER,
    ) -> bool | None:
        """Compare the row's expected digest with its digests from ``enabled`` functions.

        Hex formats compare without regard to case, base64 exactly. Returns
        True on a match, False on none, and None when the row has no expected
        digest or does not exist. The result is kept as the row's status.
        """
        if row < 0 or row >= len(self._rows):
            return None
        entry = self._rows[row]
        if not entry.check:
            entry.status = None
            return None
        if not isinstance(fmt, DigestFormat):
            raise ValueError(f"invalid digest format: {fmt!r}")

        wanted = set(self.names if enabled is None else (self._column(n) for n in enabled))
        check = entry.check
        match = False
        for name in self.names:
            if name not in wanted:
                continue
            value = entry.digests[name]
            if value is None:
                continue
            if fmt is DigestFormat.BASE64:
                match = value == check
            else:
                match = value.lower() == check.lower()
            if match:
                break

        entry.status = match
        return match

    def clear_digests(self) -> None:
        """Forget every computed digest, keeping the rows."""
        for entry in self._rows:
            entry.digests = dict.fromkeys(self.names)

    def clear(self) -> None:
        """Remove every row."""
        self._rows.clear()
        self.show_status = False