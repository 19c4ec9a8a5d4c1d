from click.testing import CliRunner

from tests.consts import TEST_BUCKET_NAME
from wake_word_api.cli import cli
from wake_word_api.config.settings import get_settings
from wake_word_api.s3.write_objects import upload_s3_object


def test__show_config(aws_credentials, monkeypatch):
    monkeypatch.setenv("S3_BUCKET_NAME", "cli-bucket")
    get_settings.cache_clear()

    result = CliRunner().invoke(cli, ["show-config"])

    get_settings.cache_clear()
    assert result.exit_code == 0
    assert "S3 Bucket: cli-bucket" in result.output


def test__list_samples(mocked_aws, monkeypatch):
    monkeypatch.setenv("S3_BUCKET_NAME", TEST_BUCKET_NAME)
    get_settings.cache_clear()
    for i in range(3):
        upload_s3_object(TEST_BUCKET_NAME, f"hey_nexus-{i}.webm", b"abc", "audio/webm", s3_client=mocked_aws)

    result = CliRunner().invoke(cli, ["list-samples", "--limit", "2"])

    get_settings.cache_clear()
    assert result.exit_code == 0
    assert "hey_nexus-0.webm" in result.output
    assert "hey_nexus-2.webm" not in result.output
    assert "--cursor" in result.output
