####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from wake_word_api.s3.read_objects import ObjectInfo

DEFAULT_LIST_LIMIT = 1000
MAX_LIST_LIMIT = 1000
DEFAULT_LIST_PREFIX = ""


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision, e.g. ``2024-01-01T00:00:00.000Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class PutSampleResponse(BaseModel):
    """Response model for a successful upload."""
    message: str = Field(description="A message about the operation.")
    key: str = Field(
        description="The storage key of the sample.",
        json_schema_extra={"example": "hey_nexus-en_us-adult-female-8a1b2c3d4e5f6789-AMS.webm"},
    )


class HttpMetadata(BaseModel):
    contentType: Optional[str] = None


class StoredObjectSummary(BaseModel):
    """Summary of one stored sample."""
    key: str
    size: int = Field(description="The size of the sample in bytes.")
    uploaded: str = Field(description="ISO-8601 upload timestamp.")
    httpMetadata: HttpMetadata

    @classmethod
    def from_object_info(cls, info: ObjectInfo) -> "StoredObjectSummary":
        return cls(
            key=info.key,
            size=info.size,
            uploaded=format_timestamp(info.last_modified),
            httpMetadata=HttpMetadata(contentType=info.content_type),
        )


class ListSamplesResponse(BaseModel):
    """Response model for the list route."""
    objects: List[StoredObjectSummary]
    truncated: bool
    cursor: Optional[str] = None
    delimitedPrefixes: List[str] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "objects": [
                    {
                        "key": "negative-hey_texas-do_not_wish_to_say-1718000000000-k3j9x0p2m4q7z.ogg",
                        "size": 48213,
                        "uploaded": "2024-06-10T06:13:20.000Z",
                        "httpMetadata": {"contentType": "audio/ogg"},
                    }
                ],
                "truncated": True,
                "cursor": "next_cursor_example",
                "delimitedPrefixes": [],
            }
        }
    )


class ListQuery(BaseModel):
    """Query parameters of the list route; ``limit`` is capped, never rejected for being large."""
    limit: int = Field(DEFAULT_LIST_LIMIT, ge=1)
    prefix: str = Field(DEFAULT_LIST_PREFIX, description="Only list keys with this prefix.")
    cursor: Optional[str] = Field(None, description="Cursor returned by the previous page.")

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, v: int) -> int:
        return min(v, MAX_LIST_LIMIT)

    @field_validator("cursor", mode="before")
    @classmethod
    def empty_cursor_is_none(cls, v):
        return v or None
