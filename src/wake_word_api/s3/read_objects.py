"""Functions for reading objects from an S3 bucket--the "R" in CRUD."""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Any, List, Optional

import boto3
from botocore.exceptions import ClientError

from wake_word_api.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

MISSING_OBJECT_ERROR_CODES = {"NoSuchKey", "404", "NotFound"}
HEAD_OBJECT_WORKERS = 16


@dataclass
class ObjectInfo:
    key: str
    size: int
    last_modified: datetime
    content_type: Optional[str] = None


@dataclass
class ListedObjects:
    """One page of a listing."""
    objects: List[ObjectInfo]
    truncated: bool
    cursor: Optional[str] = None
    delimited_prefixes: List[str] = field(default_factory=list)


@dataclass
class StoredObject:
    """A fetched object; ``body`` is the unread botocore stream."""
    key: str
    size: int
    body: Any
    content_type: Optional[str] = None


def _is_missing_object(error: ClientError) -> bool:
    return error.response.get("Error", {}).get("Code") in MISSING_OBJECT_ERROR_CODES


def fetch_s3_object_content_type(
    bucket_name: str,
    object_key: str,
    s3_client: Optional["S3Client"] = None,
) -> Optional[str]:
    """
    Return the stored ``ContentType`` of an object.

    :return: None if the object has disappeared since it was listed.
    """
    s3_client = s3_client or boto3.client("s3")
    try:
        head_object_response = s3_client.head_object(Bucket=bucket_name, Key=object_key)
    except ClientError as e:
        if _is_missing_object(e):
            return None
        raise
    return head_object_response.get("ContentType")


@log_execution_time
def list_s3_objects(
    bucket_name: str,
    prefix: str = "",
    max_keys: int = 1000,
    cursor: Optional[str] = None,
    s3_client: Optional["S3Client"] = None,
) -> ListedObjects:
    """
    Fetch one page of objects under ``prefix``.

    Listings carry no content type, so every key on the page costs one
    extra ``HeadObject`` call; those run on a small thread pool.

    :param bucket_name: The name of the S3 bucket.
    :param prefix: Only keys starting with this prefix are returned.
    :param max_keys: The maximum number of objects in the page.
    :param cursor: Continuation token returned by a previous page.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or boto3.client("s3")
    list_kwargs = {"Bucket": bucket_name, "Prefix": prefix, "MaxKeys": max_keys}
    if cursor:
        list_kwargs["ContinuationToken"] = cursor
    response = s3_client.list_objects_v2(**list_kwargs)

    contents = response.get("Contents", [])
    content_types = []
    if contents:
        with ThreadPoolExecutor(max_workers=min(HEAD_OBJECT_WORKERS, len(contents))) as executor:
            content_types = list(executor.map(
                lambda item: fetch_s3_object_content_type(bucket_name, item["Key"], s3_client),
                contents,
            ))

    objects = [
        ObjectInfo(
            key=item["Key"],
            size=item["Size"],
            last_modified=item["LastModified"],
            content_type=content_type,
        )
        for item, content_type in zip(contents, content_types)
    ]
    truncated = response.get("IsTruncated", False)
    logger.info(f"Listed {len(objects)} objects under '{prefix}' (truncated={truncated})")
    return ListedObjects(
        objects=objects,
        truncated=truncated,
        cursor=response.get("NextContinuationToken") if truncated else None,
        delimited_prefixes=[item["Prefix"] for item in response.get("CommonPrefixes", [])],
    )


@log_execution_time
def fetch_s3_object(
    bucket_name: str,
    object_key: str,
    s3_client: Optional["S3Client"] = None,
) -> Optional[StoredObject]:
    """
    Fetch an object from an S3 bucket.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    :return: None if there is no object at ``object_key``.
    """
    s3_client = s3_client or boto3.client("s3")
    try:
        get_object_response = s3_client.get_object(Bucket=bucket_name, Key=object_key)
    except ClientError as e:
        if _is_missing_object(e):
            logger.info(f"No object at s3://{bucket_name}/{object_key}")
            return None
        raise
    return StoredObject(
        key=object_key,
        size=get_object_response["ContentLength"],
        body=get_object_response["Body"],
        content_type=get_object_response.get("ContentType"),
    )
