"""Normalization of HTTP requests.

Requests reach the library in one of two shapes: an httpx.Request, which is
used as the canonical representation, or a legacy request exposing a method,
a possibly relative URL, a header mapping, and a readable body. Legacy
requests are converted with to_request; framework requests are first turned
into a LegacyRequest by the adapters in bodydata.aiohttp, bodydata.fastapi,
bodydata.flask and bodydata.http.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import (
    Any,
    AsyncIterator,
    Dict,
    Iterable,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import httpx
from typing_extensions import Protocol, TypeAlias

from bodydata.config import DEFAULT_ORIGIN
from bodydata.error import BodyReadError, MalformedURLError

logger = logging.getLogger(__name__)

# Requests with these methods never carry a body.
NO_BODY_METHODS = frozenset(["GET", "HEAD"])

CHUNK_SIZE = 64 * 1024

HeaderValue: TypeAlias = Union[str, bytes, Sequence[Union[str, bytes]]]
Headers: TypeAlias = Union[
    Mapping[str, HeaderValue], Iterable[Tuple[Union[str, bytes], HeaderValue]]
]


@dataclass(frozen=True)
class LegacyRequest:
    """A request received from a streaming server interface.

    Attributes:
        method: The HTTP method, compared case-sensitively against GET and
            HEAD.

        url: The request URL. It may be a bare path (with its query string),
            in which case the default origin is prepended.

        headers: A mapping, or an iterable of (name, value) pairs. Repeated
            names are allowed, the last value wins.

        body: The byte source of the body. It can be None, bytes or str, an
            async iterable of chunks, an object with a read(size) method
            (blocking or coroutine), or an iterable of chunks. It is read
            lazily and at most once.
    """

    method: str
    url: Optional[str]
    headers: Headers = ()
    body: Any = None


class LegacyRequestLike(Protocol):
    """Structural type of objects accepted as legacy requests."""

    @property
    def method(self) -> str: ...

    @property
    def url(self) -> Optional[str]: ...

    @property
    def headers(self) -> Headers: ...

    @property
    def body(self) -> Any: ...


AnyRequest: TypeAlias = Union[httpx.Request, LegacyRequest, LegacyRequestLike]


def to_request(req: AnyRequest) -> httpx.Request:
    """Returns the canonical httpx.Request for a request.

    An httpx.Request is returned as-is. Any other value is treated as a
    legacy request and converted to a new httpx.Request, without reading its
    body and without modifying it.

    Raises:
        MalformedURLError: If the URL of the request cannot be parsed.
    """
    if isinstance(req, httpx.Request):
        return req

    method = req.method
    url = complete_url(req.url)
    headers = flatten_headers(req.headers)

    stream: Union[httpx.ByteStream, LegacyBodyStream]
    extensions: Dict[str, Any] = {}
    if method in NO_BODY_METHODS:
        stream = httpx.ByteStream(b"")
    else:
        stream = LegacyBodyStream(req.body)
        # The body may still be arriving while the request is handled.
        extensions["duplex"] = "half"

    logger.debug("normalizing %s request for %s", method, url)
    try:
        return httpx.Request(
            method,
            url,
            headers={
                name.encode("utf-8"): value.encode("utf-8")
                for name, value in headers.items()
            },
            stream=stream,
            extensions=extensions,
        )
    except httpx.InvalidURL as e:
        raise MalformedURLError(f"invalid request URL {url!r}: {e}") from e


def complete_url(url: Optional[str]) -> str:
    """Returns an absolute URL, prefixing the default origin (taken from the
    BODYDATA_ORIGIN environment variable, http://localhost if unset) to URLs
    that do not start with a scheme."""
    url = url or ""
    if url.startswith("http"):
        return url
    return DEFAULT_ORIGIN.value + url


def flatten_headers(headers: Optional[Headers]) -> Dict[str, str]:
    """Flattens headers to a dict of lower-cased names to values.

    Repeated names collapse to the last value. List values are joined with
    commas, and bytes are decoded as latin-1.
    """
    if headers is None:
        return {}
    items = headers.items() if hasattr(headers, "items") else headers

    flat: Dict[str, str] = {}
    for name, value in items:
        if isinstance(value, (list, tuple)):
            flat[_to_str(name).lower()] = ", ".join(_to_str(v) for v in value)
        else:
            flat[_to_str(name).lower()] = _to_str(value)
    return flat


def _to_str(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("latin-1")
    return str(value)


def _to_bytes(chunk: Any) -> bytes:
    if isinstance(chunk, str):
        return chunk.encode("utf-8")
    return bytes(chunk)


class LegacyBodyStream(httpx.AsyncByteStream):
    """An httpx stream reading lazily from the body of a legacy request.

    Errors raised by the underlying source are reported as BodyReadError.
    """

    def __init__(self, source: Any):
        self._source = source

    async def __aiter__(self) -> AsyncIterator[bytes]:
        try:
            async for chunk in _iter_source(self._source):
                if chunk:
                    yield chunk
        except BodyReadError:
            raise
        except Exception as e:
            raise BodyReadError(f"failed to read request body: {e}") from e


async def _iter_source(source: Any) -> AsyncIterator[bytes]:
    if source is None:
        return
    if isinstance(source, (str, bytes, bytearray, memoryview)):
        yield _to_bytes(source)
    elif hasattr(source, "__aiter__"):
        async for chunk in source:
            yield _to_bytes(chunk)
    elif callable(getattr(source, "read", None)):
        while True:
            chunk = source.read(CHUNK_SIZE)
            if inspect.isawaitable(chunk):
                chunk = await chunk
            if not chunk:
                break
            yield _to_bytes(chunk)
    else:
        for chunk in source:
            yield _to_bytes(chunk)
