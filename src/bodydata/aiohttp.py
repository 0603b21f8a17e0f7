"""Integration of bodydata with aiohttp.

Example:

    from aiohttp import web
    from bodydata.aiohttp import body_data

    async def handle(request: web.Request) -> web.Response:
        data = await body_data(request)
        return web.json_response({"params": data.params, "body": data.body})
"""

from typing import Optional

from aiohttp import web

import bodydata
from bodydata.options import ParseOptions
from bodydata.request import LegacyRequest


def to_legacy_request(request: web.Request) -> LegacyRequest:
    """Returns a LegacyRequest reading the body of an aiohttp request."""
    return LegacyRequest(
        method=request.method,
        url=str(request.url),
        headers=list(request.headers.items()),
        body=request.content.iter_any(),
    )


async def body_data(
    request: web.Request, options: Optional[ParseOptions] = None
) -> bodydata.BodyDataResult:
    """Extracts the query parameters and the body of an aiohttp request."""
    return await bodydata.body_data(to_legacy_request(request), options)
