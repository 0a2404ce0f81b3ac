from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from docintake.storage.base import BaseBlobStore
from docintake.storage.exceptions import BlobNotFoundError, BlobStoreError

_MISSING_CODES = {"NoSuchKey", "404", "NotFound"}


class S3BlobStore(BaseBlobStore):
    """Reads documents from an S3 bucket; ``path`` is the object key."""

    def __init__(self, client: Any, bucket: str) -> None:
        self._client = client
        self._bucket = bucket

    def download(self, path: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=self._bucket, Key=path)
            return response["Body"].read()
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code in _MISSING_CODES:
                raise BlobNotFoundError(
                    f"Object s3://{self._bucket}/{path} not found"
                ) from exc
            raise BlobStoreError(f"S3 read failed for {path}: {code or exc}") from exc
        except BotoCoreError as exc:
            raise BlobStoreError(f"S3 read failed for {path}: {exc}") from exc
