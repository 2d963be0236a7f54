"""Incremental parsing of HTTP/1.1 requests."""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass, field
from typing import Any, Callable

from chillhttp.headers import HeaderError, Headers

_CRLF = b"\r\n"
_INITIAL_BUFFER_SIZE = 8
_INTEGER = re.compile(r"[+-]?[0-9]+")


class RequestError(ValueError):
    """Raised when a request cannot be parsed."""


class ParserState(enum.Enum):
    INITIALIZED = enum.auto()
    PARSING_HEADERS = enum.auto()
    PARSING_BODY = enum.auto()
    DONE = enum.auto()


@dataclass
class RequestLine:
    method: str = ""
    request_target: str = ""
    http_version: str = ""


def _is_valid_method(method: str) -> bool:
    return all("A" <= ch <= "Z" for ch in method)


def _parse_request_line(data: bytes) -> tuple[int, RequestLine | None]:
    end = data.find(_CRLF)
    if end == -1:
        return 0, None

    parts = bytes(data[:end]).decode("utf-8", errors="replace").split(" ")
    if len(parts) != 3:
        raise RequestError("invalid request line format")

    method, target, version = parts
    if not _is_valid_method(method):
        raise RequestError("invalid method")
    if version != "HTTP/1.1":
        raise RequestError("unsupported HTTP version")

    return end + 2, RequestLine(method=method, request_target=target, http_version="1.1")


@dataclass
class Request:
    """A request being parsed, or fully parsed once ``state`` is DONE."""

    request_line: RequestLine = field(default_factory=RequestLine)
    headers: Headers = field(default_factory=Headers)
    body: bytes = b""
    state: ParserState = ParserState.INITIALIZED
    _body_length_read: int = field(default=0, repr=False)

    def parse(self, data: bytes) -> int:
        """Consume as much of ``data`` as possible; return the bytes consumed."""
        total = 0
        while self.state is not ParserState.DONE:
            n = self._parse_single(data[total:])
            if n == 0:
                break
            total += n
        return total

    def _parse_single(self, data: bytes) -> int:
        if self.state is ParserState.INITIALIZED:
            n, line = _parse_request_line(data)
            if n == 0:
                return 0
            self.request_line = line
            self.state = ParserState.PARSING_HEADERS
            return n

        if self.state is ParserState.PARSING_HEADERS:
            try:
                n, done = self.headers.parse(data)
            except HeaderError as exc:
                raise RequestError(str(exc)) from exc
            if done:
                self.state = ParserState.PARSING_BODY
            return n

        if self.state is ParserState.PARSING_BODY:
            content_length = self.headers.get("Content-Length")
            if not content_length:
                self.state = ParserState.DONE
                return len(data)
            if not _INTEGER.fullmatch(content_length):
                raise RequestError(f"invalid Content-Length value: {content_length!r}")
            expected = int(content_length)

            self.body += bytes(data)
            self._body_length_read += len(data)
            if self._body_length_read > expected:
                raise RequestError("data is larger than shared Content-Length")
            if self._body_length_read == expected:
                self.state = ParserState.DONE
            return len(data)

        raise RequestError("trying to read in completed state")


def _read_function(reader: Any) -> Callable[[int], bytes]:
    for name in ("recv", "read1", "read"):
        func = getattr(reader, name, None)
        if callable(func):
            return func
    raise TypeError("reader must provide recv, read1 or read")


def request_from_reader(reader: Any) -> Request:
    """Read and parse one request from a socket or binary stream.

    An empty read is taken as end of input.
    """
    read = _read_function(reader)
    request = Request()
    pending = bytearray()
    capacity = _INITIAL_BUFFER_SIZE

    while request.state is not ParserState.DONE:
        if len(pending) >= capacity:
            capacity *= 2
        chunk = read(capacity - len(pending))
        if not chunk:
            raise RequestError("incomplete request: missing end of headers")
        pending += chunk

        consumed = request.parse(bytes(pending))
        del pending[:consumed]

    return request