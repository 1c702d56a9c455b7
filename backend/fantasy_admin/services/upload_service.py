from __future__ import annotations

import io
import re
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from fantasy_admin.services.scoring_service import IDENTITY_FIELDS, score_batch

# Passed through as read; ids may be codes rather than numbers.
TEXT_COLUMNS = {"sport", "match_name", *IDENTITY_FIELDS}
FLAG_COLUMNS = {"duck", "is_captain", "is_vice_captain", "player_of_match"}
TRUTHY = {"1", "true", "yes", "y", "t", "x"}


def _column_key(name: Any) -> str:
    return re.sub(r"[^0-9a-z]+", "_", str(name).strip().lower()).strip("_")


def _parse_upload(content: bytes, filename: str) -> pd.DataFrame:
    lower = (filename or "").lower()
    if lower.endswith(".csv"):
        return pd.read_csv(io.BytesIO(content))
    if lower.endswith(".xlsx") or lower.endswith(".xls"):
        return pd.read_excel(io.BytesIO(content))
    raise ValueError("Unsupported file type; upload CSV or Excel")


def _to_flag(value: Any) -> Optional[bool]:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return None
    if isinstance(value, (bool, np.bool_, int, float, np.number)):
        return bool(value)
    return str(value).strip().lower() in TRUTHY


def _normalize(df: pd.DataFrame) -> pd.DataFrame:
    df = df.rename(columns=_column_key)
    for col in df.columns:
        if col in TEXT_COLUMNS:
            continue
        if col in FLAG_COLUMNS:
            df[col] = df[col].apply(_to_flag).astype(object)
            continue
        df[col] = pd.to_numeric(df[col], errors="coerce")
    df.replace([np.inf, -np.inf], np.nan, inplace=True)
    return df


def stats_rows(content: bytes, filename: str) -> List[Dict[str, Any]]:
    """Parse a stat sheet into default-fill-ready rows (missing cells become None)."""
    df = _normalize(_parse_upload(content, filename))
    if df.empty:
        raise ValueError("Uploaded sheet has no rows")
    rows = df.astype(object).where(pd.notnull(df), None).to_dict(orient="records")
    # Integral floats from CSV parsing go back to ints so count fields validate.
    return [
        {k: int(v) if isinstance(v, float) and v.is_integer() else v for k, v in row.items()}
        for row in rows
    ]


def score_upload(
    content: bytes,
    filename: str,
    sport: str,
    match_format: Optional[str] = None,
    limit: int = 10,
) -> Dict[str, Any]:
    rows = stats_rows(content, filename)
    payload = score_batch(sport, rows, match_format=match_format, limit=limit)
    payload["rows"] = len(rows)
    return payload
