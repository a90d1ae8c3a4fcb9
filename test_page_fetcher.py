import json
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch
from urllib.error import HTTPError, URLError

import pytest

from page_fetcher import (
    FetchError,
    PageFetcher,
    build_page_url,
    decode_records,
    parse_total_count,
)


def _response(body, total=None):
    headers = {}
    if total is not None:
        headers["x-total-count"] = total
    data = body if isinstance(body, bytes) else json.dumps(body).encode("utf-8")
    resp = SimpleNamespace(headers=headers, read=lambda: data)
    cm = MagicMock()
    cm.__enter__.return_value = resp
    cm.__exit__.return_value = False
    return cm


@pytest.mark.parametrize(
    "value, expected",
    [
        ("25", 25),
        (" 100 ", 100),
        ("25abc", 25),
        ("abc", 0),
        ("", 0),
        (None, 0),
        ("-4", 0),
    ],
)
def test_parse_total_count(value, expected):
    assert parse_total_count(value) == expected


@pytest.mark.parametrize(
    "endpoint, expected",
    [
        ("https://x.test/posts", "https://x.test/posts?_page=2&_limit=10"),
        ("https://x.test/posts?userId=1", "https://x.test/posts?userId=1&_page=2&_limit=10"),
        ("https://x.test/posts?_page=9&_limit=3", "https://x.test/posts?_page=2&_limit=10"),
    ],
)
def test_build_page_url(endpoint, expected):
    assert build_page_url(endpoint, 2, 10) == expected


class PageFetcherTests(unittest.TestCase):
    def setUp(self):
        self.fetcher = PageFetcher("https://x.test/posts", timeout=3)

    def test_fetch_returns_records_and_total(self):
        body = [{"id": 1, "title": "a"}, {"id": 2, "title": "b"}]
        with patch("page_fetcher.urlopen", return_value=_response(body, "25")) as op:
            result = self.fetcher.fetch(1, 10)

        self.assertEqual(result.records, body)
        self.assertEqual(result.total_count, 25)
        request = op.call_args[0][0]
        self.assertEqual(request.full_url, "https://x.test/posts?_page=1&_limit=10")
        self.assertEqual(op.call_args[1]["timeout"], 3)

    def test_missing_total_header_is_zero(self):
        with patch("page_fetcher.urlopen", return_value=_response([{"id": 1}])):
            result = self.fetcher.fetch(1, 10)
        self.assertEqual(result.total_count, 0)

    def test_transport_error_becomes_fetch_error(self):
        cause = URLError("connection refused")
        with patch("page_fetcher.urlopen", side_effect=cause):
            with self.assertRaises(FetchError) as ctx:
                self.fetcher.fetch(1, 10)
        self.assertIs(ctx.exception.cause, cause)
        self.assertIs(ctx.exception.__cause__, cause)

    def test_http_error_becomes_fetch_error(self):
        err = HTTPError("https://x.test/posts", 500, "boom", {}, None)
        with patch("page_fetcher.urlopen", side_effect=err):
            with self.assertRaises(FetchError) as ctx:
                self.fetcher.fetch(1, 10)
        self.assertIn("500", str(ctx.exception))

    def test_bad_json_becomes_fetch_error(self):
        with patch("page_fetcher.urlopen", return_value=_response(b"<html>", "3")):
            with self.assertRaises(FetchError):
                self.fetcher.fetch(1, 10)

    def test_non_array_body_becomes_fetch_error(self):
        with patch("page_fetcher.urlopen", return_value=_response({"data": []}, "3")):
            with self.assertRaises(FetchError):
                self.fetcher.fetch(1, 10)


class DecodeRecordsTests(unittest.TestCase):
    def test_rejects_non_object_items(self):
        with self.assertRaises(FetchError):
            decode_records([{"a": 1}, 2])

    def test_accepts_empty_array(self):
        self.assertEqual(decode_records([]), [])


if __name__ == "__main__":
    unittest.main()
