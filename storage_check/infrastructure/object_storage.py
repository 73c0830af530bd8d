from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote, urlparse

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from storage_check.config import Settings
from storage_check.domain.errors import ListError, UploadError
from storage_check.domain.object_storage import Listing, ListingEntry, ObjectStorage

logger = logging.getLogger("storage_check.storage")


def _access_key_id(settings: Settings) -> str:
    if settings.access_key_id:
        return settings.access_key_id
    # Token-authenticated S3 gateways take the project ref (first host label) as key id.
    host = urlparse(settings.endpoint_url).hostname or ""
    return host.split(".", 1)[0] or "anonymous"


def _describe(exc: Exception) -> str:
    if isinstance(exc, ClientError):
        error = exc.response.get("Error", {})
        status = exc.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        return f"{error.get('Code', 'Unknown')} (HTTP {status}): {error.get('Message', str(exc))}"
    return str(exc)


class S3ObjectStorage(ObjectStorage):
    def __init__(self, settings: Settings, client: Any | None = None) -> None:
        self._bucket = settings.bucket
        self._endpoint_url = settings.endpoint_url
        self._public_base_url = settings.public_base_url
        if client is not None:
            self._client = client
            return

        self._client = boto3.client(
            "s3",
            endpoint_url=settings.endpoint_url,
            region_name=settings.region,
            aws_access_key_id=_access_key_id(settings),
            aws_secret_access_key=settings.credential,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": settings.addressing_style},
                connect_timeout=settings.timeout_seconds,
                read_timeout=settings.timeout_seconds,
                retries={"total_max_attempts": 1},
            ),
        )

    @property
    def bucket(self) -> str:
        return self._bucket

    @property
    def client(self) -> Any:
        return self._client

    def upload(self, path: str, data: bytes, content_type: str) -> str:
        try:
            # If-None-Match makes the write fail with 412 instead of overwriting.
            self._client.put_object(
                Bucket=self._bucket,
                Key=path,
                Body=data,
                ContentType=content_type,
                IfNoneMatch="*",
            )
        except (ClientError, BotoCoreError) as exc:
            raise UploadError(f"upload of {path} to bucket {self._bucket} failed: {_describe(exc)}") from exc
        return path

    def list(self, prefix: str, limit: int) -> Listing:
        folder = f"{prefix.strip('/')}/" if prefix.strip("/") else ""
        try:
            # Delimiter keeps nested keys out; they come back as CommonPrefixes.
            response = self._client.list_objects_v2(
                Bucket=self._bucket,
                Prefix=folder,
                Delimiter="/",
                MaxKeys=limit,
            )
        except (ClientError, BotoCoreError) as exc:
            raise ListError(f"listing of {folder or '/'} in bucket {self._bucket} failed: {_describe(exc)}") from exc

        truncated = bool(response.get("IsTruncated"))
        if truncated:
            logger.debug("listing of %s truncated at %d entries", folder or "/", limit)

        entries: list[ListingEntry] = []
        for obj in response.get("Contents", []):
            entries.append(
                ListingEntry(
                    name=obj["Key"][len(folder):],
                    size_bytes=int(obj.get("Size", 0)),
                    created_at=obj.get("LastModified"),
                )
            )
        return Listing(entries=entries, truncated=truncated)

    def public_url(self, path: str) -> str:
        # A configured public base already addresses the bucket (CDN or bucket domain).
        if self._public_base_url:
            return f"{self._public_base_url.rstrip('/')}/{quote(path)}"
        return f"{self._endpoint_url.rstrip('/')}/{self._bucket}/{quote(path)}"
