"""Storage key naming for uploaded samples."""
import secrets
import string
import time
from typing import Optional

from wake_word_api.validation import UploadLabels

NEGATIVE_MARKER = "negative"
KEY_SEPARATOR = "-"
RANDOM_FRAGMENT_LENGTH = 13
_BASE36_ALPHABET = string.digits + string.ascii_lowercase


def generate_identifier(trace_id: Optional[str] = None, now: Optional[float] = None) -> str:
    """
    Per-upload identifier: the upstream trace id when there is one,
    otherwise ``{epoch_millis}-{random base36 fragment}``.
    """
    if trace_id:
        return trace_id
    timestamp = int((time.time() if now is None else now) * 1000)
    fragment = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(RANDOM_FRAGMENT_LENGTH))
    return f"{timestamp}-{fragment}"


def build_storage_key(labels: UploadLabels, identifier: str) -> str:
    """
    Assemble ``[negative]-{wake_word}[-{language}_{accent}][-{age}]-{gender}-{identifier}.{ext}``.

    Absent or empty parts are dropped before joining.
    """
    parts = [
        NEGATIVE_MARKER if labels.is_negative else None,
        labels.wake_word,
        labels.language_accent,
        labels.age,
        labels.gender,
        identifier,
    ]
    filename = KEY_SEPARATOR.join(part for part in parts if part)
    return f"{filename}.{labels.extension}"
