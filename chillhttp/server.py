"""A small threaded HTTP/1.1 server that hands each request to a handler."""

from __future__ import annotations

import contextlib
import socket
import threading
from typing import Any, Callable

from chillhttp.request import Request, RequestError, request_from_reader
from chillhttp.response import StatusCode, Writer, default_headers

Handler = Callable[[Writer, Request], None]

_ACCEPT_POLL_SECONDS = 0.2


class HandlerError(Exception):
    """An error a handler reports as a status code and a plain-text message."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def _raw_writer(stream: Any) -> Callable[[bytes], Any]:
    write = getattr(stream, "write", None)
    if callable(write):
        return write
    return stream.sendall


def write_error(stream: Any, error: HandlerError | None) -> None:
    """Write ``error`` to ``stream`` as a complete plain-text response."""
    if error is None:
        return
    body = error.message.encode("utf-8")
    writer = Writer(stream)
    writer.write_status_line(error.code)
    writer.write_headers(default_headers(len(body)))
    _raw_writer(stream)(body)


class Server:
    """Accepts connections in a background thread and serves one request each."""

    def __init__(self, listener: socket.socket, handler: Handler) -> None:
        self.listener = listener
        self.handler = handler
        self._closed = threading.Event()
        self.listener.settimeout(_ACCEPT_POLL_SECONDS)
        self._thread = threading.Thread(target=self._listen, daemon=True)

    @property
    def port(self) -> int:
        """The port the server is listening on."""
        return self.listener.getsockname()[1]

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def close(self) -> None:
        """Stop accepting connections and close the listening socket."""
        self._closed.set()
        self.listener.close()

    def __enter__(self) -> Server:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _start(self) -> None:
        self._thread.start()

    def _listen(self) -> None:
        while not self.closed:
            try:
                conn, _ = self.listener.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                if self.closed:
                    return
                print(f"Error accepting connection: {exc}")
                continue
            conn.settimeout(None)
            threading.Thread(target=self._handle, args=(conn,), daemon=True).start()

    def _handle(self, conn: socket.socket) -> None:
        if self.closed:
            conn.close()
            return
        with conn:
            try:
                request = request_from_reader(conn)
            except (RequestError, OSError):
                writer = Writer(conn)
                with contextlib.suppress(OSError):
                    writer.write_status_line(StatusCode.BAD_REQUEST)
                    writer.write_headers(default_headers(0))
                return
            with contextlib.suppress(OSError):
                self.handler(Writer(conn), request)


def serve(port: int, handler: Handler) -> Server:
    """Listen on ``port`` on all interfaces and serve requests with ``handler``.

    Raises OSError when the listener cannot be created.
    """
    listener = socket.create_server(("", port))
    server = Server(listener, handler)
    server._start()
    return server