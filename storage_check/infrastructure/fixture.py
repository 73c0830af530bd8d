from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from storage_check.domain.errors import FilesystemError

FIXTURE_CONTENT = b"hello from cursor"
FIXTURE_FILENAME = "test.txt"


@dataclass(frozen=True)
class Fixture:
    local_path: Path
    name: str
    content: bytes


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def fixture_name(timestamp_ms: int) -> str:
    return f"{timestamp_ms}-{FIXTURE_FILENAME}"


def prepare_fixture(scratch_dir: Path, clock: Callable[[], int] | None = None) -> Fixture:
    local_path = scratch_dir / FIXTURE_FILENAME
    try:
        scratch_dir.mkdir(parents=True, exist_ok=True)
        local_path.write_bytes(FIXTURE_CONTENT)
    except OSError as exc:
        raise FilesystemError(f"cannot write fixture {local_path}: {exc}") from exc

    return Fixture(local_path=local_path, name=fixture_name((clock or _now_millis)()), content=FIXTURE_CONTENT)
