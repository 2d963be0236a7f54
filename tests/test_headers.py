import pytest

from chillhttp.headers import HeaderError, Headers


def test_valid_single_header():
    headers = Headers()
    n, done = headers.parse(b"Host: localhost:42069\r\n\r\n")
    assert headers["host"] == "localhost:42069"
    assert n == 23
    assert done is False


def test_valid_single_header_with_capital_letters():
    headers = Headers()
    n, done = headers.parse(b"Content-Type: application/json\r\n\r\n")
    assert headers["content-type"] == "application/json"
    assert n == 32
    assert done is False


def test_valid_single_header_with_extra_whitespace():
    headers = Headers()
    n, done = headers.parse(b"Host:    localhost:42069    \r\n\r\n")
    assert headers["host"] == "localhost:42069"
    assert n == 30
    assert done is False


def test_valid_two_headers_with_existing_headers():
    headers = Headers()
    headers["existing"] = "value"
    data = b"Host: localhost:42069\r\nContent-Type: application/json\r\n\r\n"

    n, done = headers.parse(data)
    assert headers["host"] == "localhost:42069"
    assert n == 23
    assert done is False

    n, done = headers.parse(data[23:])
    assert headers["content-type"] == "application/json"
    assert n == 32
    assert done is False
    assert headers["existing"] == "value"


def test_valid_done():
    headers = Headers()
    n, done = headers.parse(b"\r\n")
    assert n == 2
    assert done is True


def test_invalid_spacing_header():
    headers = Headers()
    with pytest.raises(HeaderError):
        headers.parse(b"       Host : localhost:42069       \r\n\r\n")
    assert len(headers) == 0


def test_invalid_character_in_header_key():
    headers = Headers()
    with pytest.raises(HeaderError):
        headers.parse("H©st: localhost:42069\r\n\r\n".encode("utf-8"))
    assert len(headers) == 0


def test_valid_special_characters_in_header_key():
    headers = Headers()
    n, done = headers.parse(b"X-Forwarded-For: 127.0.0.1\r\n\r\n")
    assert headers["x-forwarded-for"] == "127.0.0.1"
    assert n == 28
    assert done is False


def test_combine_values_for_same_key():
    headers = Headers()
    headers.parse(b"X-Forwarded-For: 127.0.0.1\r\n\r\n")
    n, done = headers.parse(b"X-Forwarded-For: 125.0.0.12\r\n\r\n")
    assert headers["x-forwarded-for"] == "127.0.0.1, 125.0.0.12"
    assert n == 29
    assert done is False


def test_missing_colon_raises():
    headers = Headers()
    with pytest.raises(HeaderError):
        headers.parse(b"Host localhost:42069\r\n\r\n")


@pytest.mark.parametrize("data", [b"", b"Host: localhost"])
def test_needs_more_data(data):
    headers = Headers()
    assert headers.parse(data) == (0, False)
    assert len(headers) == 0


def test_get_is_case_insensitive():
    headers = Headers()
    headers.parse(b"Content-Length: 13\r\n")
    assert headers.get("CONTENT-LENGTH") == "13"
    assert headers.get("missing") == ""
    assert headers.get("missing", "fallback") == "fallback"