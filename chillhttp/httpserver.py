"""The demo HTTP server and its request handlers."""

from __future__ import annotations

import argparse
import hashlib
import logging
import signal
import threading
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, Sequence

from chillhttp.request import Request
from chillhttp.response import (
    ResponseError,
    StatusCode,
    Writer,
    default_headers,
    default_trailer_headers,
)
from chillhttp.server import serve

PORT = 42069
PROXY_ORIGIN = "https://httpbin.org"
VIDEO_PATH = Path("assets/vim.mp4")
_PROXY_READ_SIZE = 1024

_logger = logging.getLogger(__name__)

_OK_BODY = (
    "<html>\n"
    "\t\t<head>\n"
    "\t\t\t<title>200 OK</title>\n"
    "\t\t</head>\n"
    "\t\t<body>\n"
    "\t\t\t<h1>Success!</h1>\n"
    "\t\t\t<p>Your request was an absolute banger.</p>\n"
    "\t\t</body>\n"
    "\t</html>"
).encode()

_SERVER_ERROR_BODY = (
    "<html>\n"
    "\t<head>\n"
    "\t\t<title>500 Internal Server Error</title>\n"
    "\t</head>\n"
    "\t<body>\n"
    "\t\t<h1>Internal Server Error</h1>\n"
    "\t\t<p>Okay, you know what? This one is on me.</p>\n"
    "\t</body>\n"
    "\t</html>"
).encode()

_BAD_REQUEST_BODY = (
    "<html>\n"
    "\t<head>\n"
    "\t\t<title>400 Bad Request</title>\n"
    "\t</head>\n"
    "\t<body>\n"
    "\t\t<h1>Bad Request</h1>\n"
    "\t\t<p>Your request honestly kinda sucked.</p>\n"
    "\t</body>\n"
    "\t</html>"
).encode()


def http_handler(writer: Writer, request: Request) -> None:
    """Route a request to the handler for its target."""
    target = request.request_line.request_target
    if target.startswith("/httpbin/"):
        proxy_handler(writer, request)
    elif target == "/video":
        video_handler(writer, request)
    elif target == "/yourproblem":
        bad_request_handler(writer, request)
    elif target == "/myproblem":
        server_error_handler(writer, request)
    else:
        ok_handler(writer, request)


def proxy_handler(writer: Writer, request: Request) -> None:
    """Relay a request to the proxy origin, streaming the reply as chunks with trailers."""
    path = request.request_line.request_target.removeprefix("/httpbin")
    url = PROXY_ORIGIN + path
    try:
        upstream: Any = urllib.request.urlopen(url)
    except urllib.error.HTTPError as exc:
        upstream = exc
    except (urllib.error.URLError, OSError, ValueError):
        server_error_handler(writer, request)
        return

    with upstream:
        headers = default_headers(0)
        del headers["Content-Length"]
        headers["Transfer-Encoding"] = "chunked"
        headers["Trailer"] = "X-Content-Sha256, X-Content-Length"

        writer.write_status_line(upstream.status)
        writer.write_headers(headers)

        full_body = bytearray()
        while True:
            try:
                chunk = upstream.read(_PROXY_READ_SIZE)
            except OSError:
                break
            if not chunk:
                break
            print("Read bytes:", len(chunk))
            full_body += chunk
            writer.write_chunked_body(chunk)

    writer.write_chunked_body_done()
    digest = hashlib.sha256(full_body).hexdigest()
    writer.write_trailers(default_trailer_headers(len(full_body), digest))


def video_handler(writer: Writer, request: Request) -> None:
    """Serve the video file from the assets directory."""
    headers = default_headers(0)
    headers["Content-Type"] = "video/mp4"
    try:
        video = VIDEO_PATH.read_bytes()
    except OSError:
        server_error_handler(writer, request)
        return

    writer.write_status_line(StatusCode.OK)
    headers["Content-Length"] = str(len(video))
    writer.write_headers(headers)
    writer.write_body(video)


def _html_response(writer: Writer, status: StatusCode, body: bytes) -> None:
    writer.write_status_line(status)
    headers = default_headers(len(body))
    headers["Content-Type"] = "text/html"
    try:
        writer.write_headers(headers)
    except ResponseError as exc:
        print("Error writing headers: ", exc)
        return
    writer.write_body(body)


def ok_handler(writer: Writer, request: Request) -> None:
    _html_response(writer, StatusCode.OK, _OK_BODY)


def server_error_handler(writer: Writer, request: Request) -> None:
    _html_response(writer, StatusCode.INTERNAL_SERVER_ERROR, _SERVER_ERROR_BODY)


def bad_request_handler(writer: Writer, request: Request) -> None:
    _html_response(writer, StatusCode.BAD_REQUEST, _BAD_REQUEST_BODY)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server until SIGINT or SIGTERM."""
    parser = argparse.ArgumentParser(
        prog="chillhttp-server", description=f"Serve the demo HTTP handlers on port {PORT}."
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    try:
        server = serve(PORT, http_handler)
    except OSError as exc:
        print(f"Error starting server: {exc}")
        return 1

    stop = threading.Event()

    def _on_signal(signum: int, frame: Any) -> None:
        stop.set()

    previous = {sig: signal.signal(sig, _on_signal) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        with server:
            print("Server listening on :", PORT)
            while not stop.wait(0.5):
                pass
            _logger.info("Received shutdown signal, shutting down server...")
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
    return 0