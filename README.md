# chillhttp

chillhttp is a small HTTP/1.1 server that runs directly on TCP sockets. It uses only the
standard library.

## Modules

- `chillhttp.headers`: the `Headers` dict. `Headers.parse(data)` reads one header line
  at a time and returns `(consumed, done)`. Header names are stored in lower case, and
  repeated names are joined with `", "`. `Headers.get(key, default="")` looks a key up
  without regard to case. Malformed lines raise `HeaderError`.
- `chillhttp.request`: `request_from_reader(reader)` reads a single request from a
  socket or a binary stream, using `recv`, `read1` or `read`. It returns a `Request`
  that holds `request_line` (`method`, `request_target`, `http_version`), `headers` and
  `body`. The only version accepted is `HTTP/1.1`. Methods must consist of upper-case
  letters. A body is read only when `Content-Length` is present; anything that follows
  the headers when it is absent is dropped. A bad or incomplete request raises
  `RequestError`.
- `chillhttp.response`: `Writer(stream)` writes the status line, then the headers, then
  the body, and must be called in that order. A call out of order raises
  `ResponseError`. `write_chunked_body`, `write_chunked_body_done` and `write_trailers`
  write a chunked body with trailers. `default_headers(content_length)` and
  `default_trailer_headers(content_length, sha)` build the standard header sets.
  `StatusCode` holds 200, 400 and 500. Any other code is written with an empty reason
  phrase.
- `chillhttp.server`: `serve(port, handler)` listens on every interface and handles
  each connection in a thread of its own. Each connection is given one request, which
  is passed to `handler(writer, request)`, and is then closed. If a request cannot be
  parsed, the server sends a `400 Bad Request` status line and headers. `Server` works
  as a context manager, `Server.close()` stops it, and `Server.port` gives the port it
  is bound to. `write_error(stream, error)` writes a `HandlerError` as a complete
  plain-text response.
- `chillhttp.httpserver`, `chillhttp.tcplistener` and `chillhttp.udpsender`: the
  commands described below. `tcplistener.describe_request(request)` produces the text
  that the listener prints. `udpsender.send_lines(lines, address)` sends each line as
  one datagram.

## Installation

```
pip install .
```

## Commands

Start the demo HTTP server on port 42069. It stops on SIGINT or SIGTERM:

```
chillhttp-server
```

Routes:

- `/yourproblem` returns 400 Bad Request.
- `/myproblem` returns 500 Internal Server Error.
- `/video` returns `assets/vim.mp4`, read from the working directory. If the file
  cannot be read, the response is 500.
- `/httpbin/...` fetches the same path from httpbin. The reply keeps the upstream
  status code and is streamed back with chunked transfer encoding, followed by the
  `X-Content-Sha256` and `X-Content-Length` trailers. If the upstream cannot be
  reached, the response is 500.
- Every other path returns 200 OK.

Print each parsed request that arrives on port 42069:

```
chillhttp-tcplistener
```

Send lines from standard input as UDP datagrams to `localhost:42069`:

```
chillhttp-udpsender
```

## Library use

```python
from chillhttp.response import StatusCode, default_headers
from chillhttp.server import serve

def handler(writer, request):
    body = b"hello"
    writer.write_status_line(StatusCode.OK)
    writer.write_headers(default_headers(len(body)))
    writer.write_body(body)

with serve(8080, handler):
    input("serving on :8080, press Enter to stop\n")
```

## Limitations

- Each connection serves exactly one request. There is no keep-alive.
- Request bodies are read only by `Content-Length`. Chunked request bodies are not
  decoded.
- The server has no routing, static-file serving or TLS of its own beyond what the
  demo handlers in `chillhttp.httpserver` do.

## Tests

```
pip install .[test]
pytest
```