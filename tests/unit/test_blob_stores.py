from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from docintake.storage.exceptions import BlobNotFoundError, BlobStoreError
from docintake.storage.factory import BlobStoreFactory
from docintake.storage.local_blob_store import LocalBlobStore
from docintake.storage.s3_blob_store import S3BlobStore


def _client_error(code: str) -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, "GetObject")


class TestLocalBlobStore:
    def test_reads_file_under_root(self, tmp_path: Path) -> None:
        (tmp_path / "user-1").mkdir()
        (tmp_path / "user-1" / "scan.png").write_bytes(b"\x89PNG")

        store = LocalBlobStore(files_root=tmp_path)

        assert store.download("user-1/scan.png") == b"\x89PNG"

    def test_leading_slash_is_relative_to_root(self, tmp_path: Path) -> None:
        (tmp_path / "doc.pdf").write_bytes(b"%PDF")
        assert LocalBlobStore(files_root=tmp_path).download("/doc.pdf") == b"%PDF"

    def test_missing_file_raises_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(BlobNotFoundError, match="File not found"):
            LocalBlobStore(files_root=tmp_path).download("nope.pdf")

    def test_rejects_path_traversal(self, tmp_path: Path) -> None:
        root = tmp_path / "files"
        root.mkdir()
        (tmp_path / "secret.txt").write_text("x")

        with pytest.raises(BlobStoreError, match="escapes storage root"):
            LocalBlobStore(files_root=root).download("../secret.txt")

    def test_uses_default_root(self) -> None:
        store = LocalBlobStore()
        assert store._files_root == Path("/app/files")


class TestS3BlobStore:
    def test_returns_body_bytes(self) -> None:
        client = MagicMock()
        client.get_object.return_value = {"Body": MagicMock(read=MagicMock(return_value=b"data"))}

        store = S3BlobStore(client=client, bucket="documents")

        assert store.download("a/b.pdf") == b"data"
        client.get_object.assert_called_once_with(Bucket="documents", Key="a/b.pdf")

    def test_no_such_key_raises_not_found(self) -> None:
        client = MagicMock()
        client.get_object.side_effect = _client_error("NoSuchKey")

        with pytest.raises(BlobNotFoundError, match="not found"):
            S3BlobStore(client=client, bucket="documents").download("missing.pdf")

    def test_access_denied_raises_store_error(self) -> None:
        client = MagicMock()
        client.get_object.side_effect = _client_error("AccessDenied")

        with pytest.raises(BlobStoreError, match="AccessDenied") as exc_info:
            S3BlobStore(client=client, bucket="documents").download("a.pdf")
        assert not isinstance(exc_info.value, BlobNotFoundError)

    def test_connection_failure_raises_store_error(self) -> None:
        client = MagicMock()
        client.get_object.side_effect = EndpointConnectionError(endpoint_url="https://s3")

        with pytest.raises(BlobStoreError):
            S3BlobStore(client=client, bucket="documents").download("a.pdf")


class TestBlobStoreFactory:
    def test_creates_local_store(self) -> None:
        settings = MagicMock(storage_backend="local", storage_files_root="/srv/files")
        store = BlobStoreFactory.create(settings)
        assert isinstance(store, LocalBlobStore)

    def test_creates_s3_store(self) -> None:
        settings = MagicMock(
            storage_backend="S3",
            storage_s3_bucket="uploads",
            aws_region="eu-west-1",
            aws_connect_timeout_seconds=5,
            aws_read_timeout_seconds=30,
            aws_max_attempts=2,
        )
        with patch("docintake.storage.factory.boto3.client") as mock_client:
            store = BlobStoreFactory.create(settings)
        assert isinstance(store, S3BlobStore)
        assert mock_client.call_args[0][0] == "s3"

    def test_raises_for_unknown_backend(self) -> None:
        with pytest.raises(ValueError, match="Unknown storage backend"):
            BlobStoreFactory.create(MagicMock(storage_backend="ftp"))
