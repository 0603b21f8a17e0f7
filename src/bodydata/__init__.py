"""Extract query parameters and body data from HTTP requests.

Example:

    import bodydata

    result = await bodydata.body_data(request)
    result.params  # {"page": "2"}
    result.body    # {"name": "Alice"}

Requests may be httpx.Request objects, bodydata.LegacyRequest values, or
framework requests converted by one of the integration modules.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from bodydata.body import BodyResult, ParsedBody, get_body, read_body
from bodydata.error import (
    BodyDataError,
    BodyParseError,
    BodyReadError,
    DecodeError,
    MalformedURLError,
)
from bodydata.options import ParseOptions
from bodydata.params import get_params
from bodydata.request import AnyRequest, LegacyRequest, to_request

__all__ = [
    "BodyData",
    "BodyDataError",
    "BodyDataResult",
    "BodyParseError",
    "BodyReadError",
    "BodyResult",
    "DecodeError",
    "LegacyRequest",
    "MalformedURLError",
    "ParseOptions",
    "body_data",
    "get_body",
    "get_params",
    "read_body",
    "to_request",
]


@dataclass(frozen=True)
class BodyDataResult:
    """Query parameters and parsed body of a request."""

    params: Dict[str, str]
    body: ParsedBody


async def body_data(
    req: AnyRequest, options: Optional[ParseOptions] = None
) -> BodyDataResult:
    """Extracts both the query parameters and the body of a request.

    Args:
        req: The request, either an httpx.Request or a legacy request.

        options: Options controlling how the body is parsed.

    Returns:
        The query parameters and the parsed body.

    Raises:
        MalformedURLError: If the URL of the request cannot be parsed. Body
            errors are never raised, see get_body.
    """
    request = to_request(req)
    params = get_params(request)
    body = await get_body(request, options)
    return BodyDataResult(params=params, body=body)


class BodyData:
    """The body_data function bound to a set of parse options."""

    def __init__(self, options: Optional[ParseOptions] = None):
        self.options = options

    async def __call__(self, req: AnyRequest) -> BodyDataResult:
        return await body_data(req, self.options)
