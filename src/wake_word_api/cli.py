# cli.py
import logging

import click

from wake_word_api.config.settings import configure_logging, get_settings
from wake_word_api.s3 import get_s3_client
from wake_word_api.s3.read_objects import list_s3_objects
from wake_word_api.schemas import MAX_LIST_LIMIT

logger = logging.getLogger(__name__)


@click.group()
def cli():
    """CLI commands for the Wake Word Training Data API"""
    configure_logging(get_settings().log_level)


@cli.command()
def show_config():
    """Show current configuration"""
    settings = get_settings()

    print("Current Configuration:")
    print(f"  App Name: {settings.app_name}")
    print(f"  Deployment Mode: {settings.deployment_mode}")
    print(f"  AWS Region: {settings.aws_region}")
    print(f"  AWS Endpoint: {settings.aws_endpoint_url}")
    print(f"  S3 Bucket: {settings.s3_bucket_name}")
    print(f"  Trace Header: {settings.trace_header}")
    print(f"  Log Level: {settings.log_level}")


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to bind")
def serve(host, port):
    """Run the API with uvicorn"""
    import uvicorn

    from wake_word_api.main import create_app

    uvicorn.run(create_app(get_settings()), host=host, port=port)


@cli.command()
@click.option("--prefix", default="", help="Only list keys with this prefix")
@click.option("--limit", default=100, show_default=True,
              type=click.IntRange(1, MAX_LIST_LIMIT), help="Maximum number of keys")
@click.option("--cursor", default=None, help="Cursor printed by a previous call")
def list_samples(prefix, limit, cursor):
    """List stored sample keys"""
    settings = get_settings()
    listed = list_s3_objects(
        bucket_name=settings.s3_bucket_name,
        prefix=prefix,
        max_keys=limit,
        cursor=cursor,
        s3_client=get_s3_client(settings),
    )
    for item in listed.objects:
        print(f"{item.size:>10}  {item.last_modified:%Y-%m-%d %H:%M:%S}  {item.key}")
    if listed.truncated:
        print(f"More samples available, continue with --cursor {listed.cursor}")


if __name__ == "__main__":
    cli()
