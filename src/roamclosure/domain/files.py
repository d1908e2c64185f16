"""RoamFile and ReferencedFiles — the values a closure is made of.

org-roam stores every TEXT column as an Emacs Lisp printed string, so a
file path ``/roam/a.org`` sits in the database as ``"/roam/a.org"``
(quotes included, with ``\\`` and ``"`` backslash-escaped).
:class:`RoamFile` keeps the decoded path exactly as org-roam wrote it and
knows how to convert to and from that encoding.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, order=True)
class RoamFile:
    """A note, identified by the path of the file that backs it.

    Equality, hashing and ordering compare the path string. The path is
    never normalized: a value decoded from the store must bind back to
    the same row.
    """

    path: str

    @classmethod
    def of(cls, path: str | os.PathLike[str]) -> RoamFile:
        """Build a RoamFile from a user-supplied path (``~`` expanded, absolute)."""
        return cls(os.path.abspath(os.path.expanduser(os.fspath(path))))

    @classmethod
    def from_sql(cls, value: object) -> RoamFile:
        """Decode a stored elisp string into a RoamFile.

        Raises:
            ValueError: *value* is not a quoted elisp string.
        """
        return cls(decode_elisp_string(value))

    def to_sql(self) -> str:
        """Encode for use as a bound query parameter."""
        return encode_elisp_string(self.path)

    def as_path(self) -> Path:
        return Path(self.path)

    def __str__(self) -> str:
        return self.path


@dataclass
class ReferencedFiles:
    """Notes and assets found by a lookup or a closure.

    Attributes:
        notes: Note files in first-discovery order.
        assets: Resolved asset paths. Unordered; treat as a set.
    """

    notes: list[RoamFile] = field(default_factory=list)
    assets: list[Path] = field(default_factory=list)


def encode_elisp_string(text: str) -> str:
    """Render *text* the way ``prin1`` prints a string.

    Examples:
        >>> encode_elisp_string("/roam/a.org")
        '"/roam/a.org"'
        >>> encode_elisp_string('say "hi"')
        '"say \\\\"hi\\\\""'
    """
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def decode_elisp_string(value: object) -> str:
    """Inverse of :func:`encode_elisp_string`.

    Raises:
        ValueError: *value* is not a str wrapped in double quotes.
    """
    if not isinstance(value, str) or len(value) < 2 or value[0] != '"' or value[-1] != '"':
        msg = f"Not an elisp string: {value!r}"
        raise ValueError(msg)

    out: list[str] = []
    chars = iter(value[1:-1])
    for ch in chars:
        if ch == "\\":
            nxt = next(chars, None)
            if nxt is None:
                msg = f"Dangling escape in elisp string: {value!r}"
                raise ValueError(msg)
            out.append(nxt)
        else:
            out.append(ch)
    return "".join(out)
