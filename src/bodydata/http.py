"""Integration of bodydata with http.server.

Example:

    from http.server import BaseHTTPRequestHandler
    from bodydata.http import body_data

    class Handler(BaseHTTPRequestHandler):
        def do_POST(self):
            data = body_data(self)
            ...
"""

import asyncio
from http.server import BaseHTTPRequestHandler
from typing import BinaryIO, Iterator, Optional

import bodydata
from bodydata.error import BodyReadError
from bodydata.options import ParseOptions
from bodydata.request import CHUNK_SIZE, LegacyRequest


def to_legacy_request(handler: BaseHTTPRequestHandler) -> LegacyRequest:
    """Returns a LegacyRequest for the request being handled.

    The URL is the path of the request line, so it is completed with the
    default origin. The body is limited to the Content-Length of the request.
    """
    return LegacyRequest(
        method=handler.command,
        url=handler.path,
        headers=handler.headers.items(),
        body=read_content(handler.rfile, handler.headers.get("Content-Length")),
    )


def read_content(rfile: BinaryIO, content_length: Optional[str]) -> Iterator[bytes]:
    """Yields the chunks of a body of content_length bytes."""
    length = int(content_length or 0)
    if length < 0:
        raise BodyReadError("content length is negative")

    remaining = length
    while remaining > 0:
        chunk = rfile.read(min(remaining, CHUNK_SIZE))
        if not chunk:
            raise BodyReadError(
                f"request body ended after {length - remaining} of {length} bytes"
            )
        remaining -= len(chunk)
        yield chunk


def body_data(
    handler: BaseHTTPRequestHandler, options: Optional[ParseOptions] = None
) -> bodydata.BodyDataResult:
    """Extracts the query parameters and the body of the request being
    handled."""
    return asyncio.run(bodydata.body_data(to_legacy_request(handler), options))
