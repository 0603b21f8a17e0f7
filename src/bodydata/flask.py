"""Integration of bodydata with Flask.

Example:

    from flask import Flask
    from bodydata.flask import body_data

    app = Flask(__name__)

    @app.post("/")
    def create():
        data = body_data()
        return {"params": data.params, "body": data.body}
"""

import asyncio
from typing import Optional

import flask

import bodydata
from bodydata.options import ParseOptions
from bodydata.request import LegacyRequest


def to_legacy_request(request: Optional[flask.Request] = None) -> LegacyRequest:
    """Returns a LegacyRequest reading the body of a Flask request, the
    request of the active context by default."""
    if request is None:
        request = flask.request
    return LegacyRequest(
        method=request.method,
        url=request.url,
        headers=list(request.headers.items()),
        body=request.stream,
    )


def body_data(
    request: Optional[flask.Request] = None,
    options: Optional[ParseOptions] = None,
) -> bodydata.BodyDataResult:
    """Extracts the query parameters and the body of a Flask request.

    The body is read synchronously, blocking until it has been received.
    """
    return asyncio.run(bodydata.body_data(to_legacy_request(request), options))
