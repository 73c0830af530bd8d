from __future__ import annotations

from pathlib import Path

import pytest

from storage_check.config import Settings
from storage_check.domain.errors import ConfigurationError


def _env(**overrides: str) -> dict[str, str]:
    env = {
        'ENDPOINT_URL': 'https://storage.example',
        'ACCESS_CREDENTIAL': 'valid-key',
        'NAMESPACE_CODE': 'EVT42',
    }
    env.update(overrides)
    return env


def test_from_env_reads_required_values_and_defaults() -> None:
    settings = Settings.from_env(_env())

    assert settings.endpoint_url == 'https://storage.example'
    assert settings.credential == 'valid-key'
    assert settings.namespace == 'EVT42'
    assert settings.bucket == 'media'
    assert settings.public_base_url is None
    assert settings.timeout_seconds == 10
    assert settings.list_limit == 1000
    assert settings.scratch_dir == Path('tmp')


@pytest.mark.parametrize('missing', ['ENDPOINT_URL', 'ACCESS_CREDENTIAL'])
def test_from_env_requires_endpoint_and_credential(missing: str) -> None:
    env = _env()
    del env[missing]

    with pytest.raises(ConfigurationError):
        Settings.from_env(env)


def test_from_env_treats_blank_required_value_as_missing() -> None:
    with pytest.raises(ConfigurationError):
        Settings.from_env(_env(ACCESS_CREDENTIAL='   '))


def test_from_env_allows_missing_namespace() -> None:
    env = _env()
    del env['NAMESPACE_CODE']

    settings = Settings.from_env(env)

    assert settings.namespace == ''
    assert settings.remote_path('1-test.txt') == '1-test.txt'


def test_from_env_overrides() -> None:
    settings = Settings.from_env(
        _env(
            STORAGE_BUCKET='assets',
            PUBLIC_BASE_URL='https://cdn.example',
            REQUEST_TIMEOUT_SECONDS='3',
            LIST_LIMIT='50',
            SCRATCH_DIR='/var/tmp/check',
        )
    )

    assert settings.bucket == 'assets'
    assert settings.public_base_url == 'https://cdn.example'
    assert settings.timeout_seconds == 3
    assert settings.list_limit == 50
    assert settings.scratch_dir == Path('/var/tmp/check')


@pytest.mark.parametrize('value', ['soon', '0', '-5'])
def test_from_env_rejects_bad_timeout(value: str) -> None:
    with pytest.raises(ConfigurationError):
        Settings.from_env(_env(REQUEST_TIMEOUT_SECONDS=value))


def test_remote_path_joins_namespace_and_name() -> None:
    settings = Settings.from_env(_env(NAMESPACE_CODE='/EVT42/'))

    assert settings.remote_path('1700000000000-test.txt') == 'EVT42/1700000000000-test.txt'


def test_from_env_keeps_credential_opaque() -> None:
    settings = Settings.from_env(_env(ACCESS_CREDENTIAL='eyJhbGciOi.token:with:colons', ACCESS_KEY_ID='AKIA123'))

    assert settings.credential == 'eyJhbGciOi.token:with:colons'
    assert settings.access_key_id == 'AKIA123'
    assert Settings.from_env(_env()).access_key_id is None
