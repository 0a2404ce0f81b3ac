from pathlib import Path

import boto3

from docintake.config.aws import botocore_config
from docintake.config.settings import Settings
from docintake.storage.base import BaseBlobStore
from docintake.storage.local_blob_store import LocalBlobStore
from docintake.storage.s3_blob_store import S3BlobStore


class BlobStoreFactory:
    """Creates the blob store named by settings.storage_backend."""

    BACKENDS = ("local", "s3")

    @classmethod
    def create(cls, settings: Settings) -> BaseBlobStore:
        backend = settings.storage_backend.lower()
        if backend == "local":
            return LocalBlobStore(files_root=Path(settings.storage_files_root))
        if backend == "s3":
            client = boto3.client("s3", config=botocore_config(settings))
            return S3BlobStore(client=client, bucket=settings.storage_s3_bucket)
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
