"""Parsing of request bodies.

The body is read to completion, decoded to text, then parsed according to
its content type:

    application/json                    decoded JSON value
    application/x-www-form-urlencoded   {"key": "value", ...}
    text/plain                          {"text": text}
    multipart/form-data                 {"raw": text}
    anything else                       {"raw": text}

Body errors are never raised. When the body cannot be read, decoded or
parsed, the error is passed to ParseOptions.on_error and an empty dict is
returned. Only a malformed request URL is raised to the caller.
"""

import codecs
import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

import httpx
from typing_extensions import TypeAlias

from bodydata.error import BodyParseError, BodyReadError, DecodeError
from bodydata.options import DEFAULT_OPTIONS, ParseOptions
from bodydata.params import query_to_dict
from bodydata.request import AnyRequest, to_request

logger = logging.getLogger(__name__)

ParsedBody: TypeAlias = Any


@dataclass(frozen=True)
class BodyResult:
    """The outcome of reading a request body.

    Attributes:
        body: The parsed body, an empty dict if the body was empty or if an
            error occurred.

        error: The error that caused the body to be discarded, if any.
    """

    body: ParsedBody
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def get_body(
    req: AnyRequest, options: Optional[ParseOptions] = None
) -> ParsedBody:
    """Reads and parses the body of a request.

    Args:
        req: The request, either an httpx.Request or a legacy request.

        options: Options controlling decoding and parsing.

    Returns:
        The parsed body. An empty dict is returned if the body is empty, or
        if it could not be read, decoded, or parsed; the error is reported
        to options.on_error when it is set.

    Raises:
        MalformedURLError: If the URL of the request cannot be parsed.
    """
    result = await read_body(req, options)
    return result.body


async def read_body(
    req: AnyRequest, options: Optional[ParseOptions] = None
) -> BodyResult:
    """Reads and parses the body of a request, returning the error that
    occurred (if any) alongside the body instead of raising it.

    Raises:
        MalformedURLError: If the URL of the request cannot be parsed.
    """
    options = options or DEFAULT_OPTIONS
    request = to_request(req)
    try:
        body = await _read_and_parse(request, options)
    except Exception as e:
        logger.debug("discarding request body: %s", e)
        _notify(options, e)
        return BodyResult({}, e)
    return BodyResult(body)


async def _read_and_parse(
    request: httpx.Request, options: ParseOptions
) -> ParsedBody:
    data = await _drain(request)
    logger.debug("read %d byte request body", len(data))

    text = decode(data, options.effective_encoding)
    if not text:
        return {}
    if options.raw:
        return {"raw": text}

    content_type = (
        options.content_type
        or request.headers.get("content-type")
        or options.back_content_type
        or ""
    )
    return parse_text(text, content_type)


async def _drain(request: httpx.Request) -> bytes:
    try:
        if isinstance(request.stream, httpx.AsyncByteStream):
            return await request.aread()
        return request.read()
    except BodyReadError:
        raise
    except Exception as e:
        raise BodyReadError(f"failed to read request body: {e}") from e


def decode(data: bytes, encoding: str) -> str:
    """Decodes a body, replacing invalid byte sequences.

    A leading UTF-8 byte order mark is removed.

    Raises:
        DecodeError: If the encoding is unknown or is not a text encoding.
    """
    try:
        codec = codecs.lookup(encoding)
    except LookupError as e:
        raise DecodeError(f"unknown encoding: {encoding!r}") from e

    name = "utf-8-sig" if codec.name == "utf-8" else codec.name
    try:
        return data.decode(name, errors="replace")
    except (LookupError, UnicodeError) as e:
        raise DecodeError(f"cannot decode body as {encoding!r}: {e}") from e


def parse_text(text: str, content_type: str) -> ParsedBody:
    """Parses decoded body text according to a content type. Only the start
    of the content type is matched, so parameters such as charset are
    ignored."""
    content_type = content_type.strip().lower()
    for prefix, parse in _PARSERS:
        if content_type.startswith(prefix):
            logger.debug("parsing request body as %s", prefix)
            return parse(text)
    return {"raw": text}


def parse_json(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise BodyParseError(f"invalid JSON body: {e}") from e


def parse_urlencoded(text: str) -> Dict[str, str]:
    if text.startswith("?"):
        text = text[1:]
    return query_to_dict(httpx.QueryParams(text))


def parse_plain_text(text: str) -> Dict[str, str]:
    return {"text": text}


def parse_raw(text: str) -> Dict[str, str]:
    return {"raw": text}


def _reject_constant(name: str) -> Any:
    # NaN, Infinity and -Infinity are not valid JSON.
    raise ValueError(f"unexpected constant {name}")


def _notify(options: ParseOptions, error: Exception):
    if options.on_error is None:
        return
    try:
        options.on_error(error)
    except Exception:
        logger.warning("request body error handler failed", exc_info=True)


_PARSERS: Tuple[Tuple[str, Callable[[str], ParsedBody]], ...] = (
    ("application/json", parse_json),
    ("application/x-www-form-urlencoded", parse_urlencoded),
    ("text/plain", parse_plain_text),
    # Multipart bodies are not decoded into fields.
    ("multipart/form-data", parse_raw),
)
