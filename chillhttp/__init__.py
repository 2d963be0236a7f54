"""A small HTTP/1.1 server with an incremental request parser, response writer and demo commands."""

__version__ = "0.1.0"
__all__ = ["headers", "request", "response", "server", "httpserver", "tcplistener", "udpsender"]