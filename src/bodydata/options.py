from dataclasses import dataclass
from typing import Any, Callable, Optional

from bodydata.config import DEFAULT_ENCODING

ErrorHandler = Callable[[Exception], Any]


@dataclass(frozen=True)
class ParseOptions:
    """Options controlling how a request body is parsed.

    Attributes:
        encoding: Charset used to decode the body. Defaults to the value of
            the BODYDATA_ENCODING environment variable, or "utf-8".

        raw: Return the decoded body as {"raw": text}, skipping content type
            detection entirely.

        content_type: Content type to use instead of the Content-Type header
            of the request.

        back_content_type: Content type to use when neither content_type nor
            the Content-Type header are set.

        on_error: Called with the error when reading or parsing the body
            fails. Its return value is ignored.
    """

    encoding: Optional[str] = None
    raw: bool = False
    content_type: Optional[str] = None
    back_content_type: Optional[str] = None
    on_error: Optional[ErrorHandler] = None

    @property
    def effective_encoding(self) -> str:
        return self.encoding or DEFAULT_ENCODING.value


DEFAULT_OPTIONS = ParseOptions()
