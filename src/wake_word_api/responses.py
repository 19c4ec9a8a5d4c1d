"""Response builders shared by every handler."""
import json
from typing import Any, Dict, Optional, Union

from fastapi import status
from fastapi.responses import JSONResponse

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"


class PrettyJSONResponse(JSONResponse):
    """JSON response rendered with a two-space indent."""

    media_type = JSON_CONTENT_TYPE

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
        ).encode("utf-8")


def cors_headers(allow_methods: str = "PUT") -> Dict[str, str]:
    """Permissive cross-origin headers carried by every response."""
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": allow_methods,
        "Access-Control-Allow-Headers": "Content-Type",
    }


def create_response(
    content: Union[Dict[str, Any], str],
    status_code: int = status.HTTP_400_BAD_REQUEST,
    allow_methods: str = "PUT",
    headers: Optional[Dict[str, str]] = None,
) -> PrettyJSONResponse:
    """
    Build a JSON response with the standard CORS headers.

    :param content: A dict, or a bare string which is encoded as a JSON string.
    :param status_code: Defaults to 400 since most callers report a validation error.
    :param allow_methods: Value of ``Access-Control-Allow-Methods``.
    :param headers: Extra headers merged over the defaults.
    """
    response_headers = cors_headers(allow_methods)
    response_headers["Content-Type"] = JSON_CONTENT_TYPE
    if headers:
        response_headers.update(headers)
    return PrettyJSONResponse(
        content=content,
        status_code=status_code,
        headers=response_headers,
    )
