"""Functions for writing objects to an S3 bucket--the "C" in CRUD."""

import logging
from typing import TYPE_CHECKING, Optional, Union

import boto3

from wake_word_api.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


@log_execution_time
def upload_s3_object(
    bucket_name: str,
    object_key: str,
    file_content: Union[bytes, bytearray],
    content_type: Optional[str] = None,
    s3_client: Optional["S3Client"] = None,
) -> None:
    """
    Upload a file to an S3 bucket.

    An existing object at the same key is overwritten.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param file_content: The content of the file to upload.
    :param content_type: The MIME type of the file, e.g. "audio/webm".
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    content_type = content_type or "application/octet-stream"
    s3_client = s3_client or boto3.client("s3")
    s3_client.put_object(
        Bucket=bucket_name,
        Key=object_key,
        Body=file_content,
        ContentType=content_type,
    )
    logger.info(f"Stored {len(file_content)} bytes at s3://{bucket_name}/{object_key}")
