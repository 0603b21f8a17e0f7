class BodyDataError(Exception):
    """Base class for bodydata exceptions."""


class MalformedURLError(BodyDataError, ValueError):
    """The URL of a request could not be parsed.

    Raised to the caller when extracting query parameters, it is never
    contained by the library."""


class BodyReadError(BodyDataError, IOError):
    """The body stream of a request failed or was aborted before it could be
    read to completion."""


class DecodeError(BodyDataError, ValueError):
    """The request body could not be decoded to text, usually because the
    requested encoding does not exist."""


class BodyParseError(BodyDataError, ValueError):
    """The request body did not match its declared content type. The
    underlying error is chained as the __cause__ of the exception."""
