"""Integration of bodydata with FastAPI.

Example:

    import fastapi
    from bodydata import BodyDataResult
    from bodydata.fastapi import BodyData

    app = fastapi.FastAPI()

    @app.post("/")
    async def create(data: BodyDataResult = fastapi.Depends(BodyData())):
        return data.body
"""

import logging
from typing import Optional

import fastapi

import bodydata
from bodydata.options import ParseOptions
from bodydata.request import LegacyRequest

__all__ = ["BodyData", "body_data", "to_legacy_request"]

logger = logging.getLogger(__name__)


def to_legacy_request(request: fastapi.Request) -> LegacyRequest:
    """Returns a LegacyRequest streaming the body of a FastAPI (Starlette)
    request."""
    return LegacyRequest(
        method=request.method,
        url=str(request.url),
        headers=request.headers.items(),
        body=request.stream(),
    )


async def body_data(
    request: fastapi.Request, options: Optional[ParseOptions] = None
) -> bodydata.BodyDataResult:
    """Extracts the query parameters and the body of a FastAPI request."""
    return await bodydata.body_data(to_legacy_request(request), options)


class BodyData:
    """A FastAPI dependency providing the query parameters and the body of
    the current request.

    A request with a malformed URL is answered with a 400 error.
    """

    def __init__(self, options: Optional[ParseOptions] = None):
        """Initialize the dependency.

        Args:
            options: Options controlling how request bodies are parsed.
        """
        self.options = options

    async def __call__(self, request: fastapi.Request) -> bodydata.BodyDataResult:
        try:
            return await body_data(request, self.options)
        except bodydata.MalformedURLError as e:
            logger.debug("rejecting request: %s", e)
            raise fastapi.HTTPException(status_code=400, detail=str(e))
