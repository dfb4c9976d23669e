import logging
from datetime import date
from typing import Any

import boto3
from botocore.config import Config

logger = logging.getLogger(__name__)


def get_s3_client(
    region: str | None = None,
    endpoint_url: str | None = None,
    timeout: float = 30.0,
):
    """Create S3 client with connect and read deadlines on every call."""
    config = Config(connect_timeout=timeout, read_timeout=timeout)
    return boto3.client("s3", region_name=region, endpoint_url=endpoint_url, config=config)


def build_day_prefix(run_date: date, prefix: str = "news") -> str:
    """Build the S3 prefix holding one day's Markdown files."""
    return f"{prefix}/{run_date.isoformat()}/"


def build_news_key(run_date: date, category: str, index: int, prefix: str = "news") -> str:
    """Build the S3 key for one rendered article.

    The key is deterministic, so a retried upload overwrites the same object.
    """
    day = run_date.isoformat()
    return f"{build_day_prefix(run_date, prefix)}{day}_{category}_{index}.md"


class S3Store:
    """Thin bucket-scoped wrapper over a boto3 S3 client."""

    def __init__(self, client: Any, bucket: str):
        self.client = client
        self.bucket = bucket

    def put(self, key: str, body: bytes, content_type: str = "text/markdown") -> None:
        self.client.put_object(
            Bucket=self.bucket,
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    def list_keys(self, prefix: str) -> list[str]:
        """List every key under a prefix, following all result pages."""
        keys = []
        paginator = self.client.get_paginator("list_objects_v2")

        for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                keys.append(obj["Key"])

        logger.info("Listed %d objects under s3://%s/%s", len(keys), self.bucket, prefix)
        return keys

    def get(self, key: str) -> bytes:
        response = self.client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"].read()
