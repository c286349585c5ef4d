"""
Unit tests for request line and pair parsing.
"""

from kvserver.http.request import (
    Request,
    parse_request,
    parse_pairs,
    tokenize,
)


class TestParseRequest:
    """Tests for parse_request()."""

    def test_parse_simple_get(self):
        """Method and route come from the first two tokens."""
        raw = b"GET /set?a=1 HTTP/1.1\r\nHost: localhost\r\n\r\n"
        request = parse_request(raw)

        assert request == Request(method="GET", route="/set?a=1", raw=raw)

    def test_method_not_validated(self):
        """Any first token is accepted as the method."""
        request = parse_request(b"FROBNICATE /get?key=a HTTP/1.1\r\n\r\n")

        assert request.method == "FROBNICATE"
        assert request.route == "/get?key=a"

    def test_request_line_without_version(self):
        """A bare "METHOD ROUTE" line is enough."""
        request = parse_request(b"GET /help")

        assert request.method == "GET"
        assert request.route == "/help"

    def test_route_ends_at_line_break(self):
        """Whitespace splitting stops the route at CRLF too."""
        request = parse_request(b"GET /get?key=a\r\nHost: x\r\n\r\n")

        assert request.route == "/get?key=a"

    def test_empty_buffer(self):
        """Nothing read means no request."""
        assert parse_request(b"") is None

    def test_whitespace_only(self):
        """Only whitespace yields no tokens."""
        assert parse_request(b"  \r\n\r\n") is None

    def test_method_only(self):
        """A truncated request line with no route is dropped."""
        assert parse_request(b"GET") is None
        assert parse_request(b"GET ") is None

    def test_invalid_utf8_is_tolerated(self):
        """Undecodable bytes don't make the parser raise."""
        request = parse_request(b"GET /set?k=\xff\xfe HTTP/1.1\r\n\r\n")

        assert request is not None
        assert request.route.startswith("/set?k=")

    def test_invalid_utf8_round_trips(self):
        """Undecodable bytes encode back to exactly what the client sent."""
        request = parse_request(b"GET /set?k=\xff\xfe HTTP/1.1\r\n\r\n")

        assert request.route.encode("utf-8", "surrogateescape") == b"/set?k=\xff\xfe"


class TestParsePairs:
    """Tests for parse_pairs() and tokenize()."""

    def test_tokenize_skips_empty(self):
        assert tokenize("??a=1???b=2?", "?") == ["a=1", "b=2"]
        assert tokenize("", "?") == []

    def test_multiple_pairs_in_order(self):
        assert list(parse_pairs("?a=1?b=2")) == [("a", "1"), ("b", "2")]

    def test_empty_suffix(self):
        assert list(parse_pairs("")) == []
        assert list(parse_pairs("?")) == []

    def test_pair_without_equals(self):
        """A bare token has no second element."""
        assert list(parse_pairs("?lonely")) == [("lonely", None)]

    def test_pair_with_missing_value(self):
        """Trailing "=" adds nothing: empty tokens are skipped."""
        assert list(parse_pairs("?a=")) == [("a", None)]

    def test_pair_with_missing_key(self):
        """Leading "=" is skipped, so the value becomes the first token."""
        assert list(parse_pairs("?=1")) == [("1", None)]

    def test_repeated_equals_collapse(self):
        assert list(parse_pairs("?a==1")) == [("a", "1")]

    def test_extra_tokens_ignored(self):
        """Only the first two "=" tokens of a pair are used."""
        assert list(parse_pairs("?a=1=2")) == [("a", "1")]

    def test_suffix_without_leading_question_mark(self):
        """The suffix is tokenized as is, so "/settings" gives "tings"."""
        assert list(parse_pairs("tings")) == [("tings", None)]
