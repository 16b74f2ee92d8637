"""Per-file table of hash functions, each with an on/off switch and its digest."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

_HMAC_PREFIX = "HMAC-"


@dataclass(frozen=True)
class DigestRow:
    """A snapshot of one table row."""

    name: str
    enabled: bool
    label: str
    digest: str


@dataclass
class _Row:
    name: str
    enabled: bool
    label: str
    digest: str = ""

    def snapshot(self) -> DigestRow:
        return DigestRow(self.name, self.enabled, self.label, self.digest)


class DigestTable:
    """One row per hash function, in the order given.

    ``hmac_names`` are the functions that can be keyed; while HMAC is on,
    their labels read ``HMAC-<name>``. Every function starts disabled with
    an empty digest.
    """

    def __init__(self, names: Iterable[str], hmac_names: Iterable[str] = ()) -> None:
        self._rows: dict[str, _Row] = {}
        for name in names:
            if name in self._rows:
                raise ValueError(f"hash function {name!r} listed twice")
            self._rows[name] = _Row(name=name, enabled=False, label=name)
        self.hmac_names = frozenset(hmac_names)
        self.hmac = False

    def __len__(self) -> int:
        return len(self._rows)

    def _row(self, name: str) -> _Row:
        try:
            return self._rows[name]
        except KeyError:
            raise KeyError(f"no row for hash function {name!r}") from None

    @property
    def rows(self) -> tuple[DigestRow, ...]:
        """Every row, in table order."""
        return tuple(row.snapshot() for row in self._rows.values())

    @property
    def has_enabled(self) -> bool:
        """Whether any function is enabled, so that hashing can start."""
        return any(row.enabled for row in self._rows.values())

    def toggle(self, name: str) -> bool:
        """Flip a function on or off and return its new state.

        Turning a function off clears its digest.
        """
        row = self._row(name)
        row.enabled = not row.enabled
        if not row.enabled:
            row.digest = ""
        return row.enabled

    def set_hmac(self, active: bool) -> None:
        """Switch HMAC labelling on or off.

        Digests of keyable functions are no longer valid and are cleared.
        """
        self.hmac = bool(active)
        for row in self._rows.values():
            if row.name not in self.hmac_names:
                continue
            row.label = f"{_HMAC_PREFIX}{row.name}" if self.hmac else row.name
            row.digest = ""

    def clear_digests(self) -> None:
        """Empty every digest."""
        for row in self._rows.values():
            row.digest = ""

    def set_digest(self, name: str, digest: str) -> None:
        """Store the digest computed by ``name``."""
        self._row(name).digest = digest

    def check(self, text: str) -> bool:
        """Whether ``text`` matches any digest, ignoring ASCII case.

        An empty ``text`` never matches.
        """
        if not text:
            return False
        wanted = text.lower()
        return any(
            row.digest and row.digest.lower() == wanted for row in self._rows.values()
        )

    def selected_digest(self, name: str) -> str | None:
        """Return the digest of ``name``, or None when it is empty."""
        return self._row(name).digest or None

    def visible_rows(self, show_disabled: bool = False) -> tuple[DigestRow, ...]:
        """Rows to display: enabled ones, plus disabled ones when asked for."""
        return tuple(
            row.snapshot()
            for row in self._rows.values()
            if row.enabled or show_disabled
        )

    def load_enabled(self, names: Iterable[str]) -> None:
        """Enable the saved functions; names not in the table are ignored."""
        for name in names:
            row = self._rows.get(name)
            if row is not None:
                row.enabled = True

    def enable_defaults(self, defaults: Iterable[str]) -> None:
        """Enable the default functions that the table holds."""
        self.load_enabled(defaults)

    def enabled_names(self) -> list[str]:
        """Names of the enabled functions, in table order, for saving."""
        return [row.name for row in self._rows.values() if row.enabled]