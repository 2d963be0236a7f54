"""Writing HTTP/1.1 responses to a stream."""

from __future__ import annotations

import enum
from typing import Any, Callable, Mapping

from chillhttp.headers import Headers

_CRLF = b"\r\n"


class ResponseError(RuntimeError):
    """Raised when response parts are written out of order."""


class StatusCode(enum.IntEnum):
    OK = 200
    BAD_REQUEST = 400
    INTERNAL_SERVER_ERROR = 500


_REASONS = {
    StatusCode.OK: "OK",
    StatusCode.BAD_REQUEST: "Bad Request",
    StatusCode.INTERNAL_SERVER_ERROR: "Internal Server Error",
}


class WriteState(enum.Enum):
    STATUS_LINE = enum.auto()
    HEADERS = enum.auto()
    BODY = enum.auto()
    DONE = enum.auto()


def _writer_function(stream: Any) -> Callable[[bytes], Any]:
    for name in ("write", "sendall"):
        func = getattr(stream, name, None)
        if callable(func):
            return func
    raise TypeError("stream must provide write or sendall")


def _format_fields(headers: Mapping[str, str]) -> bytes:
    return b"".join(f"{key}: {value}\r\n".encode("utf-8") for key, value in headers.items())


def default_headers(content_length: int) -> Headers:
    """Headers sent with a plain-text response of ``content_length`` bytes."""
    headers = Headers()
    headers["Content-Type"] = "text/plain"
    headers["Content-Length"] = str(content_length)
    headers["Connection"] = "close"
    return headers


def default_trailer_headers(content_length: int, sha: str) -> Headers:
    """Trailers describing a chunked body's length and SHA-256 digest."""
    headers = Headers()
    headers["X-Content-Sha256"] = sha
    headers["X-Content-Length"] = str(content_length)
    return headers


class Writer:
    """Writes a response's status line, headers and body in that order."""

    def __init__(self, stream: Any) -> None:
        self.stream = stream
        self.state = WriteState.STATUS_LINE
        self._write = _writer_function(stream)

    def _expect(self, state: WriteState) -> None:
        if self.state is not state:
            raise ResponseError(f"invalid state: expected {state.name}, got {self.state.name}")

    def write_status_line(self, status_code: int) -> None:
        self._expect(WriteState.STATUS_LINE)
        reason = _REASONS.get(status_code)
        if reason is None:
            line = f"HTTP/1.1 {int(status_code)} \r\n"
        else:
            line = f"HTTP/1.1 {int(status_code)} {reason}\r\n"
        self._write(line.encode("ascii"))
        self.state = WriteState.HEADERS

    def write_headers(self, headers: Mapping[str, str]) -> None:
        self._expect(WriteState.HEADERS)
        self._write(_format_fields(headers) + _CRLF)
        self.state = WriteState.BODY

    def write_body(self, data: bytes) -> int:
        self._expect(WriteState.BODY)
        self._write(bytes(data))
        self.state = WriteState.DONE
        return len(data)

    def write_chunked_body(self, data: bytes) -> int:
        """Write one chunk of a chunked transfer-encoded body."""
        self._write(f"{len(data):x}\r\n".encode("ascii"))
        self._write(bytes(data))
        self._write(_CRLF)
        return len(data)

    def write_chunked_body_done(self) -> int:
        """Write the final zero-length chunk."""
        terminator = b"0\r\n"
        self._write(terminator)
        return len(terminator)

    def write_trailers(self, headers: Mapping[str, str]) -> None:
        self._write(_format_fields(headers) + _CRLF)