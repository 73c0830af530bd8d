from __future__ import annotations

import argparse
import logging
import os

from storage_check.application.backend_health_check import BackendHealthCheck, CheckReport
from storage_check.config import Settings, load_env_file
from storage_check.domain.errors import BackendCheckError, UnexpectedError
from storage_check.infrastructure.object_storage import S3ObjectStorage
from storage_check.infrastructure.public_access import probe_public_access

logger = logging.getLogger("storage_check.cli")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), None)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="storage-check",
        description="Verify an object storage backend accepts uploads, lists them and serves them publicly.",
    )
    parser.add_argument("--env-file", default=".env", help="dotenv file read before the environment (default: .env)")
    parser.add_argument("--log-level", default=None, help="overrides LOG_LEVEL")
    return parser


def run_check() -> CheckReport:
    try:
        settings = Settings.from_env()
        logger.info("starting storage backend check (namespace=%s)", settings.namespace or "-")
        storage = S3ObjectStorage(settings)
        return BackendHealthCheck(settings, storage, probe=probe_public_access).run()
    except BackendCheckError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise UnexpectedError(f"{type(exc).__name__}: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    load_env_file(args.env_file)
    _configure_logging(args.log_level or os.getenv("LOG_LEVEL", "INFO"))

    try:
        run_check()
    except UnexpectedError as exc:
        logger.error("UnexpectedError: %s", exc, exc_info=exc.__cause__)
        return 1
    except BackendCheckError as exc:
        logger.error("%s: %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
