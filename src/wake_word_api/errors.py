"""Application-level error handling."""
import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from wake_word_api.responses import create_response

logger = logging.getLogger(__name__)


async def handle_broad_exceptions(request: Request, call_next):
    """Turn any exception a handler let through into a generic 500."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception(f"Unhandled error while serving {request.method} {request.url.path}")
        return create_response(
            {"message": "Internal server error"},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


def validation_error_response(exc: pydantic.ValidationError) -> Response:
    errors = exc.errors(include_url=False, include_context=False, include_input=False)
    return create_response(
        {
            "message": "Invalid parameters",
            "errors": [
                {"param": ".".join(str(loc) for loc in error["loc"]), "detail": error["msg"]}
                for error in errors
            ],
        },
        status_code=status.HTTP_400_BAD_REQUEST,
    )


async def handle_http_exceptions(request: Request, exc: StarletteHTTPException) -> Response:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return create_response("Not Found", status_code=status.HTTP_404_NOT_FOUND)
    return create_response({"message": str(exc.detail)}, status_code=exc.status_code)
