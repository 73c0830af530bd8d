from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from storage_check.config import Settings
from storage_check.domain.errors import ListError
from storage_check.domain.object_storage import ListingEntry, ObjectStorage
from storage_check.infrastructure.fixture import Fixture, prepare_fixture
from storage_check.infrastructure.public_access import probe_public_access

logger = logging.getLogger("storage_check.check")

CONTENT_TYPE = "text/plain"


@dataclass
class CheckReport:
    remote_path: str
    entries: list[ListingEntry]
    public_url: str
    status_code: int


class BackendHealthCheck:
    """Upload, list, resolve and probe one fixture; the first failure raises."""

    def __init__(
        self,
        settings: Settings,
        storage: ObjectStorage,
        probe: Callable[[str, float], int] = probe_public_access,
        fixture_factory: Callable[[Path], Fixture] = prepare_fixture,
    ) -> None:
        self._settings = settings
        self._storage = storage
        self._probe = probe
        self._fixture_factory = fixture_factory

    def run(self) -> CheckReport:
        settings = self._settings
        if not settings.namespace:
            logger.warning("NAMESPACE_CODE is not set; using the bucket root")

        fixture = self._fixture_factory(settings.scratch_dir)
        logger.info("created fixture %s (%d bytes)", fixture.local_path, len(fixture.content))

        remote_path = settings.remote_path(fixture.name)
        logger.info("uploading to %s/%s", settings.bucket, remote_path)
        stored_path = self._storage.upload(remote_path, fixture.content, CONTENT_TYPE)
        logger.info("uploaded %s", stored_path)

        entries = self._list_folder(fixture.name)

        public_url = self._storage.public_url(stored_path)
        logger.info("public URL: %s", public_url)

        logger.info("probing public access")
        status_code = self._probe(public_url, settings.timeout_seconds)
        logger.info("public access confirmed, HTTP %d", status_code)
        logger.info("storage backend is working")

        return CheckReport(
            remote_path=stored_path,
            entries=entries,
            public_url=public_url,
            status_code=status_code,
        )

    def _list_folder(self, expected_name: str) -> list[ListingEntry]:
        namespace = self._settings.namespace
        limit = self._settings.list_limit
        logger.info("listing %s/", namespace)
        listing = self._storage.list(namespace, limit)
        entries = listing.entries
        for entry in entries:
            created = entry.created_at.isoformat() if entry.created_at else "-"
            logger.info("  - %s (%d bytes, %s)", entry.name, entry.size_bytes, created)

        if any(entry.name == expected_name for entry in entries):
            return entries
        if listing.truncated:
            logger.warning("%s not in the first page of %s/ (limit %d)", expected_name, namespace, limit)
            return entries
        raise ListError(f"uploaded object {expected_name} missing from listing of {namespace}/")
