"""Where generated QR images end up.

Each storage returns the reference that is saved on the registrant record:
a public S3 URL, a URL served by this app, or an inline ``data:`` URI.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping, Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..core.constants import QR_CONTENT_TYPE, QR_KEY_PREFIX
from ..core.enums import QrStorageKind
from ..core.exceptions import StorageError
from .encoder import to_data_uri

logger = logging.getLogger(__name__)

LOCAL_ROUTE_PREFIX = "/qr"


class ImageStorage(Protocol):
    def save(self, key: str, data: bytes, *, content_type: str = QR_CONTENT_TYPE) -> str:
        raise NotImplementedError


class S3ImageStorage(ImageStorage):
    def __init__(self, client: Any, *, bucket: str, region: str):
        self._client = client
        self._bucket = bucket
        self._region = region

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> "S3ImageStorage":
        client = boto3.client(
            "s3",
            aws_access_key_id=settings.get("AWS_ACCESS_KEY_ID") or None,
            aws_secret_access_key=settings.get("AWS_SECRET_ACCESS_KEY") or None,
            region_name=settings.get("AWS_REGION") or None,
        )
        return cls(client, bucket=str(settings.get("AWS_BUCKET_NAME") or ""), region=str(settings.get("AWS_REGION") or ""))

    def public_url(self, key: str) -> str:
        return f"https://{self._bucket}.s3.{self._region}.amazonaws.com/{key}"

    def save(self, key: str, data: bytes, *, content_type: str = QR_CONTENT_TYPE) -> str:
        try:
            self._client.put_object(Bucket=self._bucket, Key=key, Body=data, ContentType=content_type)
        except (BotoCoreError, ClientError) as e:
            raise StorageError(f"S3 upload failed for {key}") from e
        return self.public_url(key)


class LocalDiskImageStorage(ImageStorage):
    """Writes images under ``directory``; the app serves them at ``/qr/<file>``."""

    def __init__(self, directory: str | Path, *, public_base_url: str):
        self._directory = Path(directory)
        self._public_base_url = public_base_url.rstrip("/")

    @property
    def directory(self) -> Path:
        return self._directory

    def save(self, key: str, data: bytes, *, content_type: str = QR_CONTENT_TYPE) -> str:
        filename = Path(key).name
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            (self._directory / filename).write_bytes(data)
        except OSError as e:
            raise StorageError(f"Could not write {filename}") from e
        return f"{self._public_base_url}{LOCAL_ROUTE_PREFIX}/{filename}"


class InlineImageStorage(ImageStorage):
    """Keeps nothing; the image itself becomes the reference."""

    def save(self, key: str, data: bytes, *, content_type: str = QR_CONTENT_TYPE) -> str:
        return to_data_uri(data, content_type=content_type)


def qr_key(registrant_id: int) -> str:
    return f"{QR_KEY_PREFIX}/{registrant_id}.png"


def build_image_storage(settings: Mapping[str, Any]) -> ImageStorage:
    kind = QrStorageKind(str(settings.get("QR_STORAGE", QrStorageKind.LOCAL.value)).lower())
    logger.info("QR images stored via %s", kind.value)

    if kind is QrStorageKind.S3:
        return S3ImageStorage.from_settings(settings)
    if kind is QrStorageKind.LOCAL:
        return LocalDiskImageStorage(settings.get("QR_LOCAL_DIR", "qr_codes"), public_base_url=str(settings.get("BASE_URL", "")))
    return InlineImageStorage()
