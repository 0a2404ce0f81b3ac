from botocore.config import Config

from docintake.config.settings import Settings


def botocore_config(settings: Settings) -> Config:
    """Client config shared by every boto3 client the worker creates."""
    return Config(
        region_name=settings.aws_region,
        connect_timeout=settings.aws_connect_timeout_seconds,
        read_timeout=settings.aws_read_timeout_seconds,
        retries={"max_attempts": settings.aws_max_attempts, "mode": "adaptive"},
    )
