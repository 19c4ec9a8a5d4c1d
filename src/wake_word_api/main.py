import logging
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from wake_word_api.config.settings import Settings, configure_logging
from wake_word_api.dispatcher import dispatch_request
from wake_word_api.errors import handle_broad_exceptions, handle_http_exceptions
from wake_word_api.s3 import get_s3_client

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, s3_client=None) -> FastAPI:
    """Create a FastAPI application."""
    settings = settings or Settings()
    configure_logging(settings.log_level)

    # paths are fixed: no docs routes and no trailing-slash redirects
    app = FastAPI(
        title="Wake Word Training Data API",
        summary="Collect labelled wake word audio samples",
        version="v1",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )

    app.state.settings = settings
    app.state.s3_client = s3_client or get_s3_client(settings)
    logger.info(f"Serving bucket '{settings.s3_bucket_name}' in {settings.deployment_mode} mode")

    app.add_exception_handler(
        exc_class_or_status_code=StarletteHTTPException,
        handler=handle_http_exceptions,
    )
    app.middleware("http")(dispatch_request)
    app.middleware("http")(handle_broad_exceptions)

    return app


if __name__ == "__main__":
    import uvicorn

    app = create_app()
    uvicorn.run(app, host="0.0.0.0", port=8000)
