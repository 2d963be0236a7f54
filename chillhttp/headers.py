"""HTTP header field parsing."""

from __future__ import annotations

_KEY_SPECIALS = frozenset("!#$%&'*+-.^_`|~")
_CRLF = b"\r\n"


class HeaderError(ValueError):
    """Raised when a header line is malformed."""


def _is_valid_key_char(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch in _KEY_SPECIALS


def _validate_key(key: str) -> None:
    if not all(_is_valid_key_char(ch) for ch in key):
        raise HeaderError("invalid character in header key")


class Headers(dict):
    """A mapping of header names to values.

    Parsed names are stored lower-cased; repeated names are joined with ", ".
    """

    def parse(self, data: bytes) -> tuple[int, bool]:
        """Parse one header line from ``data``.

        Returns ``(consumed, done)``. ``consumed`` is 0 when more data is
        needed; ``done`` is True when the blank line ending the headers
        was read.
        """
        if not data:
            return 0, False
        if data.startswith(_CRLF):
            return 2, True

        end = data.find(_CRLF)
        if end == -1:
            return 0, False

        line = bytes(data[:end]).decode("utf-8", errors="replace")
        raw_key, colon, raw_value = line.partition(":")
        if not colon:
            raise HeaderError("invalid header format: missing colon")
        if not raw_key or raw_key.endswith(" "):
            raise HeaderError("invalid header format: empty key or trailing space")

        key = raw_key.strip()
        value = raw_value.strip()
        _validate_key(key)
        key = key.lower()

        if key in self:
            self[key] = f"{self[key]}, {value}"
        else:
            self[key] = value

        return end + 2, False

    def get(self, key: str, default: str = "") -> str:
        """Look up ``key`` case-insensitively against parsed (lower-case) names."""
        return super().get(key.lower(), default)