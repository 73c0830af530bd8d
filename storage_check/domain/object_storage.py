from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ListingEntry:
    name: str
    size_bytes: int
    created_at: datetime | None


@dataclass(frozen=True)
class Listing:
    entries: list[ListingEntry] = field(default_factory=list)
    truncated: bool = False


class ObjectStorage(ABC):
    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str) -> str:
        """Store ``data`` at ``path`` without replacing an existing object.

        Returns the stored path.
        """

    @abstractmethod
    def list(self, prefix: str, limit: int) -> Listing:
        """Return up to ``limit`` objects directly under ``prefix``, in provider order.

        ``truncated`` is set when the provider had more to return.
        """

    @abstractmethod
    def public_url(self, path: str) -> str:
        """Return the unauthenticated URL for ``path``. Never touches the network."""
