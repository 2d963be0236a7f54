import io
import socket

import pytest

from chillhttp.request import Request
from chillhttp.response import StatusCode, Writer, default_headers
from chillhttp.server import HandlerError, serve, write_error


def _exchange(port, payload, shutdown=False):
    with socket.create_connection(("127.0.0.1", port), timeout=5) as sock:
        sock.sendall(payload)
        if shutdown:
            sock.shutdown(socket.SHUT_WR)
        chunks = []
        while True:
            data = sock.recv(4096)
            if not data:
                break
            chunks.append(data)
    return b"".join(chunks)


def _recording_handler(seen):
    def handler(writer: Writer, request: Request) -> None:
        seen.append(request)
        body = request.request_line.request_target.encode() + request.body
        writer.write_status_line(StatusCode.OK)
        writer.write_headers(default_headers(len(body)))
        writer.write_body(body)

    return handler


def test_write_error_wire_format():
    buf = io.BytesIO()
    write_error(buf, HandlerError(400, "oops"))
    assert buf.getvalue() == (
        b"HTTP/1.1 400 Bad Request\r\n"
        b"Content-Type: text/plain\r\n"
        b"Content-Length: 4\r\n"
        b"Connection: close\r\n"
        b"\r\n"
        b"oops"
    )


def test_write_error_none_writes_nothing():
    buf = io.BytesIO()
    write_error(buf, None)
    assert buf.getvalue() == b""


def test_write_error_unknown_code_has_empty_reason():
    buf = io.BytesIO()
    error = HandlerError(418, "short and stout")
    write_error(buf, error)
    raw = buf.getvalue()
    assert raw.startswith(b"HTTP/1.1 418 \r\n")
    assert raw.endswith(b"\r\n\r\nshort and stout")
    assert error.code == 418
    assert str(error) == "short and stout"


def test_serve_dispatches_request_to_handler():
    seen = []
    with serve(0, _recording_handler(seen)) as server:
        raw = _exchange(server.port, b"GET /coffee HTTP/1.1\r\nHost: localhost:42069\r\n\r\n")
    head, _, body = raw.partition(b"\r\n\r\n")
    assert head.startswith(b"HTTP/1.1 200 OK\r\n")
    assert body == b"/coffee"
    assert len(seen) == 1
    assert seen[0].headers["host"] == "localhost:42069"


def test_serve_reads_body_with_content_length():
    seen = []
    with serve(0, _recording_handler(seen)) as server:
        raw = _exchange(
            server.port,
            b"POST /submit HTTP/1.1\r\nContent-Length: 13\r\n\r\nhello world!\n",
        )
    assert raw.endswith(b"/submithello world!\n")
    assert seen[0].body == b"hello world!\n"


def test_serve_answers_bad_request_for_incomplete_input():
    seen = []
    with serve(0, _recording_handler(seen)) as server:
        raw = _exchange(server.port, b"GET / HTTP/1.1\r\nHost: localhost\r\n", shutdown=True)
    assert raw.startswith(b"HTTP/1.1 400 Bad Request\r\n")
    assert b"Content-Length: 0\r\n" in raw
    assert seen == []


def test_close_stops_accepting():
    server = serve(0, _recording_handler([]))
    port = server.port
    server.close()
    assert server.closed
    with pytest.raises(OSError):
        socket.create_connection(("127.0.0.1", port), timeout=2).close()


def test_serve_on_busy_port_raises():
    with serve(0, _recording_handler([])) as server:
        with pytest.raises(OSError):
            serve(server.port, _recording_handler([]))