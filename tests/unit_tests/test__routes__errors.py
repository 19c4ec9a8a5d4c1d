import pytest
from fastapi import status
from fastapi.testclient import TestClient

from tests.consts import (
    DOWNLOAD_PATH,
    LIST_PATH,
    TEST_AUDIO_CONTENT,
    TEST_BUCKET_NAME,
    UPLOAD_PATH,
)
from wake_word_api.main import create_app
from wake_word_api.routers import training_data
from wake_word_api.s3.read_objects import StoredObject
from wake_word_api.validation import MAX_CONTENT_LENGTH


@pytest.fixture
def client_without_bucket(mocked_aws, settings) -> TestClient:
    """Client pointed at a bucket that does not exist, so every storage call fails."""
    settings = settings.model_copy(update={"s3_bucket_name": "missing-bucket"})
    with TestClient(create_app(settings=settings, s3_client=mocked_aws)) as test_client:
        yield test_client


def _bucket_keys(s3_client) -> list:
    return [item["Key"] for item in s3_client.list_objects_v2(Bucket=TEST_BUCKET_NAME).get("Contents", [])]


@pytest.mark.parametrize("method", ["GET", "POST", "DELETE", "TRACE", "PURGE"])
def test__upload_with_wrong_method(client: TestClient, method: str):
    response = client.request(method, UPLOAD_PATH, params={"wake_word": "hey_nexus"})
    assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
    assert response.json() == {"message": "Invalid method"}
    assert response.headers["Content-Type"] == "application/json;charset=UTF-8"


def test__upload_with_unsupported_content_type(client: TestClient, mocked_aws):
    response = client.put(
        UPLOAD_PATH,
        params={"wake_word": "hey_nexus"},
        content=TEST_AUDIO_CONTENT,
        headers={"Content-Type": "audio/mpeg"},
    )
    assert response.status_code == status.HTTP_415_UNSUPPORTED_MEDIA_TYPE
    assert response.json()["message"].startswith("Invalid content-type, received: audio/mpeg")
    assert _bucket_keys(mocked_aws) == []


def test__upload_too_large(client: TestClient, mocked_aws):
    response = client.put(
        UPLOAD_PATH,
        params={"wake_word": "hey_nexus"},
        content=b"\x00" * (MAX_CONTENT_LENGTH + 1),
        headers={"Content-Type": "audio/wav"},
    )
    assert response.status_code == status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    assert _bucket_keys(mocked_aws) == []


def test__upload_with_only_language(client: TestClient, mocked_aws):
    response = client.put(
        UPLOAD_PATH,
        params={"wake_word": "hey_nexus", "language": "en"},
        content=TEST_AUDIO_CONTENT,
        headers={"Content-Type": "audio/webm"},
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Both language and accent must be provided together"}
    assert _bucket_keys(mocked_aws) == []


def test__upload_storage_error_is_not_handled_by_the_route(client_without_bucket: TestClient):
    response = client_without_bucket.put(
        UPLOAD_PATH,
        params={"wake_word": "hey_nexus"},
        content=TEST_AUDIO_CONTENT,
        headers={"Content-Type": "audio/webm"},
    )
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"message": "Internal server error"}


def test__download_without_key(client: TestClient):
    response = client.get(DOWNLOAD_PATH)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"message": "Missing required parameter: key"}


def test__download_missing_sample(client: TestClient):
    response = client.get(DOWNLOAD_PATH, params={"key": "hey_nexus-nope.webm"})
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"message": "File not found: hey_nexus-nope.webm"}


def test__download_storage_error(client_without_bucket: TestClient):
    response = client_without_bucket.get(DOWNLOAD_PATH, params={"key": "anything.webm"})
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["message"] == "Error downloading file"
    assert "NoSuchBucket" in data["error"]


def test__list_storage_error(client_without_bucket: TestClient):
    response = client_without_bucket.get(LIST_PATH)
    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    data = response.json()
    assert data["message"] == "Error listing files"
    assert "NoSuchBucket" in data["error"]


def test__list_limit_is_capped(client: TestClient, monkeypatch):
    requested_max_keys = []
    list_s3_objects = training_data.list_s3_objects

    def spy(**kwargs):
        requested_max_keys.append(kwargs["max_keys"])
        return list_s3_objects(**kwargs)

    monkeypatch.setattr(training_data, "list_s3_objects", spy)

    response = client.get(LIST_PATH, params={"limit": 5000})

    assert response.status_code == status.HTTP_200_OK
    assert requested_max_keys == [1000]
    assert len(response.json()["objects"]) <= 1000


@pytest.mark.parametrize("limit", ["abc", "0", "-1"])
def test__list_with_invalid_limit(client: TestClient, limit: str):
    response = client.get(LIST_PATH, params={"limit": limit})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    data = response.json()
    assert data["message"] == "Invalid parameters"
    assert data["errors"][0]["param"] == "limit"


def test__unknown_path(client: TestClient):
    response = client.get("/assist/wake_word/training_data/delete")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == "Not Found"
    assert response.headers["Access-Control-Allow-Origin"] == "*"


def test__paths_are_case_sensitive(client: TestClient):
    response = client.get(LIST_PATH.upper())
    assert response.status_code == status.HTTP_404_NOT_FOUND


@pytest.mark.parametrize("path", [
    "/assist/wake_word/training_data/list/",
    "/assist/wake_word/training_data/upload/",
    "/assist/wake_word/training_data/download/",
])
def test__trailing_slash_is_not_found(client: TestClient, path: str):
    response = client.get(path, follow_redirects=False)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == "Not Found"


@pytest.mark.parametrize("method", ["POST", "TRACE", "PURGE"])
def test__list_matches_on_path_alone(client: TestClient, method: str):
    response = client.request(method, LIST_PATH)
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["objects"] == []


def test__download_key_not_usable_as_header(client: TestClient, mocked_aws):
    key = "hey_nexus-ünïcødé-日本.webm"
    mocked_aws.put_object(Bucket=TEST_BUCKET_NAME, Key=key, Body=TEST_AUDIO_CONTENT, ContentType="audio/webm")

    response = client.get(DOWNLOAD_PATH, params={"key": key})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["message"] == "Error downloading file"


class _TrackedBody:
    def __init__(self):
        self.closed = False

    def iter_chunks(self):
        yield TEST_AUDIO_CONTENT

    def close(self):
        self.closed = True


def test__download_error_closes_body(client: TestClient, monkeypatch):
    body = _TrackedBody()
    key = "hey_nexus-日本.webm"

    def fetch(**kwargs):
        return StoredObject(key=key, size=len(TEST_AUDIO_CONTENT), body=body, content_type="audio/webm")

    monkeypatch.setattr(training_data, "fetch_s3_object", fetch)

    response = client.get(DOWNLOAD_PATH, params={"key": key})

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json()["message"] == "Error downloading file"
    assert body.closed is True
