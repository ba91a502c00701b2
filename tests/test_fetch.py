"""
Tests for Catalog Fetching

HTTP is mocked; file sources use temporary files.

Run with:
    python -m pytest tests/test_fetch.py -v
"""

import asyncio
import os
import tempfile
import unittest
from unittest import mock

import requests

from spacetrash.fetch import fetch_catalog_text, fetch_url, is_remote, read_file
from tests.helpers import three_le

URL = "https://example.org/trash-data/space-track-full-3le.txt"


def fake_response(status_code=200, content_type="text/plain; charset=utf-8", text=""):
    response = mock.Mock()
    response.status_code = status_code
    response.headers = {"Content-Type": content_type} if content_type is not None else {}
    response.text = text
    return response


class TestFetchUrl(unittest.TestCase):
    """HTTP status and content type checks."""

    @mock.patch("spacetrash.fetch.requests.get")
    def test_success(self, get):
        get.return_value = fake_response(text=three_le("A"))

        result = fetch_url(URL, timeout=5)

        self.assertTrue(result.ok)
        self.assertEqual(result.text, three_le("A"))
        self.assertEqual(result.status_code, 200)
        get.assert_called_once_with(URL, timeout=5)

    @mock.patch("spacetrash.fetch.requests.get")
    def test_non_200(self, get):
        get.return_value = fake_response(status_code=404, text="not found")

        result = fetch_url(URL)

        self.assertFalse(result.ok)
        self.assertIsNone(result.text)
        self.assertEqual(result.status_code, 404)
        self.assertIn("404", result.reason)

    @mock.patch("spacetrash.fetch.requests.get")
    def test_wrong_content_type(self, get):
        get.return_value = fake_response(content_type="application/json", text="{}")

        result = fetch_url(URL)

        self.assertFalse(result.ok)
        self.assertIn("content type", result.reason)

    @mock.patch("spacetrash.fetch.requests.get")
    def test_missing_content_type(self, get):
        get.return_value = fake_response(content_type=None, text=three_le("A"))

        self.assertFalse(fetch_url(URL).ok)

    @mock.patch("spacetrash.fetch.requests.get")
    def test_network_error(self, get):
        get.side_effect = requests.ConnectionError("connection refused")

        result = fetch_url(URL)

        self.assertFalse(result.ok)
        self.assertIn("connection refused", result.reason)


class TestReadFile(unittest.TestCase):

    def test_reads_text(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "catalog.txt")
            with open(path, "w", encoding="utf-8") as f:
                f.write(three_le("A", "B"))

            result = read_file(path)

        self.assertTrue(result.ok)
        self.assertEqual(result.text, three_le("A", "B"))

    def test_missing_file(self):
        result = read_file("/nonexistent/catalog.txt")

        self.assertFalse(result.ok)
        self.assertIn("Cannot read file", result.reason)


class TestFetchCatalogText(unittest.TestCase):
    """The asynchronous entry point dispatches on the source."""

    def test_is_remote(self):
        self.assertTrue(is_remote(URL))
        self.assertTrue(is_remote("http://localhost/x.txt"))
        self.assertFalse(is_remote("./trash-data/space-track-full-3le.txt"))
        self.assertFalse(is_remote("/tmp/catalog.txt"))

    @mock.patch("spacetrash.fetch.requests.get")
    def test_remote_source(self, get):
        get.return_value = fake_response(text=three_le("A"))

        result = asyncio.run(fetch_catalog_text(URL, timeout=3))

        self.assertTrue(result.ok)
        get.assert_called_once_with(URL, timeout=3)

    @mock.patch("spacetrash.fetch.requests.get")
    def test_file_source_never_uses_http(self, get):
        result = asyncio.run(fetch_catalog_text("/nonexistent/catalog.txt"))

        self.assertFalse(result.ok)
        get.assert_not_called()


if __name__ == "__main__":
    unittest.main()
