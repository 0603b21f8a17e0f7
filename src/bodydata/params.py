from typing import Dict

import httpx

from bodydata.request import AnyRequest, to_request


def get_params(req: AnyRequest) -> Dict[str, str]:
    """Returns the query parameters of a request as a flat mapping.

    When a key is repeated in the query string, its last value is kept.

    Raises:
        MalformedURLError: If the URL of the request cannot be parsed.
    """
    request = to_request(req)
    return query_to_dict(request.url.params)


def query_to_dict(params: httpx.QueryParams) -> Dict[str, str]:
    return dict(params.multi_items())
