"""
Validation of wake word sample uploads.

Checks run in a fixed order and the first failure wins, so a malformed
request always receives the message of the earliest check it fails.
"""
from dataclasses import dataclass
from typing import Mapping, Optional

from fastapi import status

from wake_word_api.demographics import AGES, GENDERS, LEGACY_ACCENTS

ALLOWED_CONTENT_TYPES = ["audio/webm", "audio/ogg", "audio/mp4", "audio/wav"]
WAKE_WORD_ALLOWED_NAMES = ["hey_nexus"]
# Confusable phrases, collected as negative training samples
NEGATIVE_WAKE_WORD_ALLOWED_NAMES = ["hey_lexus", "hey_texas", "texas"]
MAX_CONTENT_LENGTH = 250 * 1024
DEFAULT_GENDER = "do_not_wish_to_say"


class UploadValidationError(Exception):
    """An upload was rejected before any I/O took place."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class UploadLabels:
    """Validated labels of one upload."""
    wake_word: str
    is_negative: bool
    age: str
    gender: str
    language_accent: Optional[str]
    content_type: str

    @property
    def extension(self) -> str:
        """File extension derived from the content subtype, e.g. ``webm``."""
        return self.content_type.split("/", 1)[1]


def parse_content_type(header_value: Optional[str]) -> Optional[str]:
    """Return the base media type of a Content-Type header, without parameters."""
    if not header_value:
        return None
    return header_value.split(";")[0].strip().lower() or None


def parse_content_length(header_value: Optional[str]) -> Optional[int]:
    """Return the Content-Length as a positive integer, or None if it is not one."""
    if header_value is None:
        return None
    try:
        content_length = int(header_value.strip())
    except ValueError:
        return None
    return content_length if content_length > 0 else None


def _param(query_params: Mapping[str, str], name: str) -> Optional[str]:
    # empty values count as absent
    return query_params.get(name) or None


def validate_upload(
    method: str,
    headers: Mapping[str, str],
    query_params: Mapping[str, str],
) -> UploadLabels:
    """
    Validate an upload request and return its labels.

    :param method: HTTP method of the request.
    :param headers: Request headers (case-insensitive mapping).
    :param query_params: URL query parameters.
    :raises UploadValidationError: On the first failing check.
    """
    if method.upper() != "PUT":
        raise UploadValidationError(status.HTTP_405_METHOD_NOT_ALLOWED, "Invalid method")

    content_type = parse_content_type(headers.get("content-type"))
    if content_type not in ALLOWED_CONTENT_TYPES:
        raise UploadValidationError(
            status.HTTP_415_UNSUPPORTED_MEDIA_TYPE,
            f"Invalid content-type, received: {content_type}, "
            f"allowed: {','.join(ALLOWED_CONTENT_TYPES)}",
        )

    raw_content_length = headers.get("content-length")
    content_length = parse_content_length(raw_content_length)
    if content_length is None or content_length > MAX_CONTENT_LENGTH:
        raise UploadValidationError(
            status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            f"Invalid content-length, received: {raw_content_length}, "
            f"allowed [<{MAX_CONTENT_LENGTH}]",
        )

    wake_word = _param(query_params, "wake_word")
    if wake_word is None:
        raise UploadValidationError(
            status.HTTP_400_BAD_REQUEST, "Invalid parameters: missing wake_word"
        )
    if wake_word not in WAKE_WORD_ALLOWED_NAMES + NEGATIVE_WAKE_WORD_ALLOWED_NAMES:
        raise UploadValidationError(
            status.HTTP_400_BAD_REQUEST, f"Invalid wake word, received: {wake_word}"
        )

    age = _param(query_params, "age") or ""
    if age not in AGES:
        allowed_ages = ", ".join(key for key in AGES if key != "")
        raise UploadValidationError(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid age, received: {age}, allowed: {allowed_ages}",
        )

    gender = _param(query_params, "gender") or DEFAULT_GENDER
    if gender not in GENDERS:
        raise UploadValidationError(
            status.HTTP_400_BAD_REQUEST,
            f"Invalid gender, received: {gender}, allowed: {', '.join(GENDERS)}",
        )

    language = _param(query_params, "language")
    accent = _param(query_params, "accent")
    language_accent = None
    if language or accent:
        if not (language and accent):
            raise UploadValidationError(
                status.HTTP_400_BAD_REQUEST,
                "Both language and accent must be provided together",
            )
        if language not in LEGACY_ACCENTS:
            raise UploadValidationError(
                status.HTTP_400_BAD_REQUEST,
                f"Invalid language, received: {language}, "
                f"allowed: {', '.join(LEGACY_ACCENTS)}",
            )
        accents = LEGACY_ACCENTS[language]
        if accent not in accents:
            raise UploadValidationError(
                status.HTTP_400_BAD_REQUEST,
                f"Invalid accent for language {language}, received: {accent}, "
                f"allowed: {', '.join(accents)}",
            )
        language_accent = f"{language}_{accent}"

    return UploadLabels(
        wake_word=wake_word,
        is_negative=wake_word in NEGATIVE_WAKE_WORD_ALLOWED_NAMES,
        age=age,
        gender=gender,
        language_accent=language_accent,
        content_type=content_type,
    )
