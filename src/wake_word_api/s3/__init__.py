"""Thin wrappers around the S3 API for the training data bucket."""
import boto3

from wake_word_api.config.settings import Settings


def get_s3_client(settings: Settings):
    """Create an S3 client for the configured region and endpoint."""
    return boto3.client("s3", **settings.get_s3_client_kwargs())
