from __future__ import annotations

from storage_check.presentation.cli import main


if __name__ == "__main__":
    raise SystemExit(main())
