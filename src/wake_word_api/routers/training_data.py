import asyncio
import logging

import pydantic
from fastapi import Request, status
from fastapi.responses import Response, StreamingResponse

from wake_word_api.config.settings import Settings
from wake_word_api.errors import validation_error_response
from wake_word_api.responses import create_response, cors_headers
from wake_word_api.s3.read_objects import fetch_s3_object, list_s3_objects
from wake_word_api.s3.write_objects import upload_s3_object
from wake_word_api.schemas import (
    ListQuery,
    ListSamplesResponse,
    PutSampleResponse,
    StoredObjectSummary,
)
from wake_word_api.storage_keys import build_storage_key, generate_identifier
from wake_word_api.validation import UploadValidationError, validate_upload

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/assist/wake_word/training_data/upload"
LIST_PATH = "/assist/wake_word/training_data/list"
DOWNLOAD_PATH = "/assist/wake_word/training_data/download"


async def upload_sample(request: Request) -> Response:
    """
    Store one labelled wake word sample.

    The raw audio is the request body; labels come from the query string
    (``wake_word``, ``age``, ``gender``, ``language``, ``accent``).

    Storage errors are not handled here and surface as a generic 500.
    """
    settings: Settings = request.app.state.settings

    try:
        labels = validate_upload(request.method, request.headers, request.query_params)
    except UploadValidationError as e:
        logger.info(f"Rejected upload ({e.status_code}): {e.message}")
        return create_response({"message": e.message}, status_code=e.status_code)

    identifier = generate_identifier(request.headers.get(settings.trace_header))
    key = build_storage_key(labels, identifier)
    logger.info(key)

    file_bytes = await request.body()
    await asyncio.to_thread(
        upload_s3_object,
        bucket_name=settings.s3_bucket_name,
        object_key=key,
        file_content=file_bytes,
        content_type=labels.content_type,
        s3_client=request.app.state.s3_client,
    )

    return create_response(
        PutSampleResponse(message="success", key=key).model_dump(),
        status_code=status.HTTP_201_CREATED,
    )


async def list_samples(request: Request) -> Response:
    """List stored samples, one page at a time."""
    settings: Settings = request.app.state.settings
    try:
        query = ListQuery(**request.query_params)
    except pydantic.ValidationError as e:
        return validation_error_response(e)

    try:
        listed = await asyncio.to_thread(
            list_s3_objects,
            bucket_name=settings.s3_bucket_name,
            prefix=query.prefix,
            max_keys=query.limit,
            cursor=query.cursor,
            s3_client=request.app.state.s3_client,
        )
    except Exception as e:
        logger.error(f"Error listing files: {str(e)}")
        return create_response(
            {"message": "Error listing files", "error": str(e)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    list_response = ListSamplesResponse(
        objects=[StoredObjectSummary.from_object_info(info) for info in listed.objects],
        truncated=listed.truncated,
        cursor=listed.cursor,
        delimitedPrefixes=listed.delimited_prefixes,
    )
    return create_response(
        list_response.model_dump(),
        status_code=status.HTTP_200_OK,
        allow_methods="GET",
    )


async def download_sample(request: Request) -> Response:
    """Stream a stored sample back as an attachment."""
    settings: Settings = request.app.state.settings
    key = request.query_params.get("key")

    if not key:
        return create_response(
            {"message": "Missing required parameter: key"},
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    stored_object = None
    try:
        stored_object = await asyncio.to_thread(
            fetch_s3_object,
            bucket_name=settings.s3_bucket_name,
            object_key=key,
            s3_client=request.app.state.s3_client,
        )
        if stored_object is None:
            return create_response(
                {"message": f"File not found: {key}"},
                status_code=status.HTTP_404_NOT_FOUND,
            )

        headers = cors_headers("GET")
        headers["Content-Disposition"] = f'attachment; filename="{key}"'
        headers["Content-Length"] = str(stored_object.size)
        # header values must be latin-1, so this can fail for unicode keys
        return StreamingResponse(
            content=stored_object.body.iter_chunks(),
            status_code=status.HTTP_200_OK,
            media_type=stored_object.content_type,
            headers=headers,
        )
    except Exception as e:
        if stored_object is not None:
            stored_object.body.close()
        logger.error(f"Error downloading file {key}: {str(e)}")
        return create_response(
            {"message": "Error downloading file", "error": str(e)},
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )


# Exact, case-sensitive paths; every method reaches the handler.
ROUTES = {
    UPLOAD_PATH: upload_sample,
    LIST_PATH: list_samples,
    DOWNLOAD_PATH: download_sample,
}
