import unittest

import fastapi
import fastapi.testclient

from bodydata import BodyDataResult, ParseOptions
from bodydata.fastapi import BodyData, body_data


def create_app() -> fastapi.FastAPI:
    app = fastapi.FastAPI()

    @app.post("/items")
    async def create_item(data: BodyDataResult = fastapi.Depends(BodyData())):
        return {"params": data.params, "body": data.body}

    @app.post("/raw")
    async def create_raw(
        data: BodyDataResult = fastapi.Depends(BodyData(ParseOptions(raw=True))),
    ):
        return {"params": data.params, "body": data.body}

    @app.api_route("/echo", methods=["GET", "POST"])
    async def echo(request: fastapi.Request):
        data = await body_data(request)
        return {"params": data.params, "body": data.body}

    return app


class TestFastAPI(unittest.TestCase):
    def setUp(self):
        self.client = fastapi.testclient.TestClient(create_app())

    def test_json(self):
        response = self.client.post("/items?a=1&a=2&b=hello", json={"name": "Alice"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(),
            {"params": {"a": "2", "b": "hello"}, "body": {"name": "Alice"}},
        )

    def test_form(self):
        response = self.client.post("/items", data={"a": "1", "b": "two"})
        self.assertEqual(response.json()["body"], {"a": "1", "b": "two"})

    def test_multipart_is_raw(self):
        response = self.client.post("/items", files={"file": ("a.txt", b"hello")})
        body = response.json()["body"]
        self.assertEqual(list(body), ["raw"])
        self.assertIn("hello", body["raw"])

    def test_raw_option(self):
        response = self.client.post(
            "/raw", content=b'{"a":1}', headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.json()["body"], {"raw": '{"a":1}'})

    def test_get(self):
        response = self.client.get("/echo?q=search")
        self.assertEqual(response.json(), {"params": {"q": "search"}, "body": {}})

    def test_malformed_json(self):
        response = self.client.post(
            "/echo",
            content=b"{a:",
            headers={"Content-Type": "application/json"},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["body"], {})
