import asyncio
import unittest
from typing import List

import httpx

import bodydata
from bodydata import (
    BodyData,
    BodyDataResult,
    LegacyRequest,
    MalformedURLError,
    ParseOptions,
    body_data,
)


class TestBodyData(unittest.TestCase):
    def test_params_and_body(self):
        request = LegacyRequest(
            "POST",
            "/users?page=2&page=3",
            {"Content-Type": "application/json"},
            b'{"name": "Alice"}',
        )
        result = asyncio.run(body_data(request))
        self.assertEqual(
            result, BodyDataResult(params={"page": "3"}, body={"name": "Alice"})
        )

    def test_get_request(self):
        request = LegacyRequest("GET", "/search?q=x", {}, b"ignored")
        result = asyncio.run(body_data(request))
        self.assertEqual(result.params, {"q": "x"})
        self.assertEqual(result.body, {})

    def test_standard_request(self):
        request = httpx.Request(
            "PUT",
            "https://example.com/items/1?draft=true",
            data={"title": "Hello"},
        )
        result = asyncio.run(body_data(request))
        self.assertEqual(result.params, {"draft": "true"})
        self.assertEqual(result.body, {"title": "Hello"})

    def test_options(self):
        request = LegacyRequest("POST", "/", {}, b"plain body")
        result = asyncio.run(body_data(request, ParseOptions(raw=True)))
        self.assertEqual(result.body, {"raw": "plain body"})

    def test_malformed_url_propagates(self):
        errors: List[Exception] = []
        request = LegacyRequest("POST", "http://localhost:port/", {}, b"{}")
        with self.assertRaises(MalformedURLError):
            asyncio.run(body_data(request, ParseOptions(on_error=errors.append)))
        self.assertEqual(errors, [])

    def test_body_errors_are_contained(self):
        errors: List[Exception] = []
        request = LegacyRequest(
            "POST", "/?a=1", {"Content-Type": "application/json"}, b"{a:"
        )
        result = asyncio.run(body_data(request, ParseOptions(on_error=errors.append)))
        self.assertEqual(result, BodyDataResult(params={"a": "1"}, body={}))
        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], bodydata.BodyParseError)

    def test_results_are_not_shared(self):
        def request():
            return LegacyRequest(
                "POST",
                "/?a=1",
                {"Content-Type": "application/x-www-form-urlencoded"},
                b"b=2",
            )

        first = asyncio.run(body_data(request()))
        second = asyncio.run(body_data(request()))
        self.assertEqual(first, second)
        self.assertIsNot(first.params, second.params)
        self.assertIsNot(first.body, second.body)

    def test_bound_options(self):
        extract = BodyData(ParseOptions(back_content_type="text/plain"))
        result = asyncio.run(extract(LegacyRequest("POST", "/", {}, b"hi")))
        self.assertEqual(result.body, {"text": "hi"})
