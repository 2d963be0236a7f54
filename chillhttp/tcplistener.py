"""A TCP listener that prints each HTTP request it receives."""

from __future__ import annotations

import argparse
import socket
from typing import Sequence

from chillhttp.request import Request, RequestError, request_from_reader

PORT = 42069


def describe_request(request: Request) -> str:
    """Render a parsed request as the listener's report text."""
    line = request.request_line
    lines = [
        "Request line:",
        f"- Method: {line.method}",
        f"- Target: {line.request_target}",
        f"- Version: {line.http_version}",
        "Headers:",
    ]
    lines.extend(f"- {key}: {value}" for key, value in request.headers.items())
    lines.append("Body:")
    lines.append(request.body.decode("utf-8", errors="replace") if request.body else "No body")
    lines.append("Request processing complete")
    return "\n".join(lines)


def main(argv: Sequence[str] | None = None) -> int:
    """Accept connections forever, printing each request."""
    parser = argparse.ArgumentParser(
        prog="chillhttp-tcplistener", description=f"Print HTTP requests received on port {PORT}."
    )
    parser.parse_args(argv)

    try:
        listener = socket.create_server(("", PORT))
    except OSError as exc:
        print(f"Error creating listener: {exc}")
        return 1

    with listener:
        print(f"Server listening on :{PORT}")
        try:
            while True:
                try:
                    conn, _ = listener.accept()
                except OSError as exc:
                    print(f"Error accepting connection: {exc}")
                    continue

                print("Connection accepted")
                with conn:
                    try:
                        request = request_from_reader(conn)
                    except (RequestError, OSError) as exc:
                        print(f"Error reading request: {exc}")
                        continue
                    print(describe_request(request))
                print("Connection closed")
        except KeyboardInterrupt:
            return 0