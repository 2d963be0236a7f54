"""Send lines read from standard input as UDP datagrams."""

from __future__ import annotations

import argparse
import contextlib
import socket
import sys
from typing import Iterable, Iterator, Sequence, TextIO

ADDRESS = ("localhost", 42069)


def send_lines(lines: Iterable[str], address: tuple[str, int]) -> int:
    """Send each line as one datagram to ``address``; return how many were sent.

    Raises socket.gaierror when the address cannot be resolved and OSError
    when the socket cannot be set up. Failures of individual sends are ignored.
    """
    host, port = address
    family, sock_type, proto, _, sockaddr = socket.getaddrinfo(
        host, port, type=socket.SOCK_DGRAM
    )[0]
    sent = 0
    with socket.socket(family, sock_type, proto) as sock:
        sock.connect(sockaddr)
        for line in lines:
            with contextlib.suppress(OSError):
                sock.send(line.encode("utf-8"))
            sent += 1
    return sent


def _prompted_lines(stream: TextIO) -> Iterator[str]:
    while True:
        print(">", end="", flush=True)
        line = stream.readline()
        if not line.endswith("\n"):
            print("Error reading line: EOF")
            return
        yield line


def main(argv: Sequence[str] | None = None) -> int:
    """Prompt for lines and send each one to the local listener."""
    parser = argparse.ArgumentParser(
        prog="chillhttp-udpsender",
        description=f"Send lines from standard input to {ADDRESS[0]}:{ADDRESS[1]} over UDP.",
    )
    parser.parse_args(argv)

    try:
        send_lines(_prompted_lines(sys.stdin), ADDRESS)
    except socket.gaierror as exc:
        print(f"Error resolving address: {exc}")
        return 1
    except OSError as exc:
        print(f"Error creating UDP connection: {exc}")
        return 1
    return 0