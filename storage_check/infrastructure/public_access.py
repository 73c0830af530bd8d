from __future__ import annotations

import requests

from storage_check.domain.errors import AccessError


def probe_public_access(url: str, timeout: float) -> int:
    """Send one HEAD request to ``url`` and return its status code.

    Raises AccessError on a transport failure or any status outside 200-299.
    """
    try:
        response = requests.head(url, timeout=timeout, allow_redirects=True)
    except requests.RequestException as exc:
        raise AccessError(f"HEAD {url} failed: {exc}") from exc

    if not 200 <= response.status_code < 300:
        raise AccessError(
            f"HEAD {url} returned HTTP {response.status_code}",
            status_code=response.status_code,
        )
    return response.status_code
