import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from tests.consts import TEST_BUCKET_NAME, TEST_REGION
from wake_word_api.config.settings import Settings
from wake_word_api.main import create_app


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so nothing can reach a real AWS account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)


@pytest.fixture
def mocked_aws(aws_credentials):
    """Mocked S3 with the test bucket already created."""
    with mock_aws():
        s3_client = boto3.client("s3", region_name=TEST_REGION)
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
        yield s3_client


@pytest.fixture
def settings(aws_credentials) -> Settings:
    return Settings(
        deployment_mode="aws-mock",
        aws_region=TEST_REGION,
        aws_endpoint_url=None,
        s3_bucket_name=TEST_BUCKET_NAME,
        trace_header="cf-ray",
    )


@pytest.fixture
def client(mocked_aws, settings) -> TestClient:
    app = create_app(settings=settings, s3_client=mocked_aws)
    with TestClient(app) as test_client:
        yield test_client
