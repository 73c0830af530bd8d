from __future__ import annotations

import re
from pathlib import Path

import pytest

from storage_check.domain.errors import FilesystemError
from storage_check.infrastructure.fixture import FIXTURE_CONTENT, fixture_name, prepare_fixture


def test_prepare_fixture_writes_content(tmp_path: Path) -> None:
    scratch = tmp_path / 'nested' / 'tmp'

    fixture = prepare_fixture(scratch, clock=lambda: 1700000000123)

    assert fixture.local_path == scratch / 'test.txt'
    assert fixture.local_path.read_bytes() == b'hello from cursor'
    assert fixture.content == FIXTURE_CONTENT
    assert len(fixture.content) == 17
    assert fixture.name == '1700000000123-test.txt'


def test_prepare_fixture_is_idempotent(tmp_path: Path) -> None:
    first = prepare_fixture(tmp_path, clock=lambda: 1)
    second = prepare_fixture(tmp_path, clock=lambda: 2)

    assert first.local_path == second.local_path
    assert second.local_path.read_bytes() == FIXTURE_CONTENT


def test_prepare_fixture_default_clock_uses_milliseconds(tmp_path: Path) -> None:
    fixture = prepare_fixture(tmp_path)

    match = re.fullmatch(r'(\d+)-test\.txt', fixture.name)
    assert match
    assert len(match.group(1)) >= 13


def test_fixture_names_differ_across_timestamps() -> None:
    names = {fixture_name(ts) for ts in range(1700000000000, 1700000000100)}

    assert len(names) == 100


def test_prepare_fixture_reports_filesystem_error(tmp_path: Path) -> None:
    blocker = tmp_path / 'tmp'
    blocker.write_text('not a directory')

    with pytest.raises(FilesystemError):
        prepare_fixture(blocker)
