from __future__ import annotations

import json
import math
from typing import Any, Dict, Optional, Tuple

import requests

from fantasy_admin.core.config import get_settings
from fantasy_admin.core.logging import get_logger

logger = get_logger(__name__)


def is_configured() -> bool:
    return bool(get_settings().store_url)


def _make_url(table: str) -> str:
    base = (get_settings().store_url or "").rstrip("/")
    return f"{base}/rest/v1/{table.strip('/')}"


def _headers() -> Dict[str, str]:
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    key = get_settings().store_api_key
    if key:
        headers["apikey"] = key
        headers["Authorization"] = f"Bearer {key}"
    return headers


def _sanitize_for_json(value: Any) -> Any:
    """Recursively replace NaN/inf with None so json.dumps rejects nothing."""
    if value is None:
        return None
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: _sanitize_for_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_sanitize_for_json(v) for v in value]
    return value


def get(table: str, params: Optional[Dict[str, str]] = None, timeout: Optional[int] = None) -> Optional[Any]:
    """Read rows from ``table``; None when the store is unset or unreachable."""
    if not is_configured():
        return None
    try:
        res = requests.get(
            _make_url(table),
            params=params or {},
            headers=_headers(),
            timeout=timeout or get_settings().store_timeout,
        )
        if res.status_code == 200:
            return res.json()
        logger.warning("Store read of %s returned status %s", table, res.status_code)
        return None
    except Exception as exc:
        logger.warning("Store read of %s failed: %s", table, exc)
        return None


def patch(table: str, match: Dict[str, Any], data: Dict[str, Any], timeout: Optional[int] = None) -> Tuple[bool, int, str]:
    """Update rows matching ``match`` (column -> value); returns (ok, status, detail)."""
    if not is_configured():
        return False, 0, "Store URL is not configured"
    params = {column: f"eq.{value}" for column, value in match.items()}
    try:
        payload = json.dumps(_sanitize_for_json(data), allow_nan=False)
        res = requests.patch(
            _make_url(table),
            params=params,
            data=payload,
            headers={**_headers(), "Prefer": "return=minimal"},
            timeout=timeout or get_settings().store_timeout,
        )
        return (200 <= res.status_code < 300, res.status_code, res.text)
    except ValueError as exc:  # JSON encoding issues (NaN/inf)
        return False, 0, f"JSON encoding error: {exc}"
    except Exception as exc:  # pragma: no cover - network failures
        return False, 0, str(exc)
