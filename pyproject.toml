[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "chillhttp"
version = "0.1.0"
description = "A small HTTP/1.1 server built on raw sockets, with an incremental request parser and a stateful response writer"
requires-python = ">=3.10"
dependencies = []
keywords = ["http", "server", "http/1.1", "parser", "chunked", "sockets", "udp"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
chillhttp-server = "chillhttp.httpserver:main"
chillhttp-tcplistener = "chillhttp.tcplistener:main"
chillhttp-udpsender = "chillhttp.udpsender:main"

[tool.hatch.build.targets.wheel]
packages = ["chillhttp"]

[tool.pytest.ini_options]
addopts = "-ra"
