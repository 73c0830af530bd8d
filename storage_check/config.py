from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from storage_check.domain.errors import ConfigurationError


def load_env_file(path: str | Path = ".env") -> bool:
    # Values already present in the process environment win over the file.
    return load_dotenv(Path(path), override=False)


def _int_setting(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class Settings:
    endpoint_url: str
    credential: str
    namespace: str = ""
    access_key_id: str | None = None

    bucket: str = "media"
    public_base_url: str | None = None
    region: str = "us-east-1"
    addressing_style: str = "path"

    timeout_seconds: int = 10
    scratch_dir: Path = Path("tmp")
    list_limit: int = 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        endpoint_url = env.get("ENDPOINT_URL", "").strip()
        credential = env.get("ACCESS_CREDENTIAL", "").strip()
        if not endpoint_url or not credential:
            raise ConfigurationError("ENDPOINT_URL and ACCESS_CREDENTIAL are required")

        return cls(
            endpoint_url=endpoint_url,
            credential=credential,
            namespace=env.get("NAMESPACE_CODE", "").strip().strip("/"),
            access_key_id=env.get("ACCESS_KEY_ID", "").strip() or None,
            bucket=env.get("STORAGE_BUCKET", "media").strip() or "media",
            public_base_url=env.get("PUBLIC_BASE_URL", "").strip() or None,
            region=env.get("STORAGE_REGION", "us-east-1").strip() or "us-east-1",
            addressing_style=env.get("STORAGE_ADDRESSING_STYLE", "path").strip() or "path",
            timeout_seconds=_int_setting(env, "REQUEST_TIMEOUT_SECONDS", 10),
            scratch_dir=Path(env.get("SCRATCH_DIR", "tmp").strip() or "tmp"),
            list_limit=_int_setting(env, "LIST_LIMIT", 1000),
        )

    def remote_path(self, name: str) -> str:
        return f"{self.namespace}/{name}" if self.namespace else name
