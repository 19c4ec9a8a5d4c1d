"""Request dispatch: CORS preflight first, then an exact match on the path."""
import logging

from fastapi import Request, status
from fastapi.responses import Response

from wake_word_api.responses import create_response
from wake_word_api.routers.training_data import ROUTES

logger = logging.getLogger(__name__)


async def dispatch_request(request: Request, call_next) -> Response:
    """
    Answer OPTIONS for any path, otherwise hand the request to the handler
    registered for its path whatever the method.

    Unknown paths fall through to the application, which has no routes of
    its own and answers 404.
    """
    if request.method == "OPTIONS":
        return create_response("ok", status_code=status.HTTP_200_OK)

    handler = ROUTES.get(request.url.path)
    if handler is None:
        return await call_next(request)
    return await handler(request)
