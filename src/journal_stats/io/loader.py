"""Load journal trades from a JSON or JSON-lines file.

The file must hold trade objects, either as one JSON array or one
object per line.  Rows that are not objects are skipped with a
warning; field-level problems are absorbed by :class:`Trade`'s
validators.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from journal_stats.core.errors import TradeDataError
from journal_stats.core.models import Trade

logger = logging.getLogger(__name__)


def trades_from_records(records: Iterable[Any]) -> list[Trade]:
    """Validate raw records into trades, skipping non-object rows."""
    trades: list[Trade] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            logger.warning("Skipping trade row %d: expected an object, got %s",
                           index, type(record).__name__)
            continue
        trades.append(Trade.model_validate(record))
    return trades


def _parse_json_lines(text: str, path: Path) -> list[Any]:
    rows: list[Any] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            rows.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise TradeDataError(f"{path}:{lineno}: invalid JSON ({exc.msg})") from exc
    return rows


def load_trades(path: str | Path) -> list[Trade]:
    """Read every trade in ``path``.

    Raises:
        TradeDataError: if the file cannot be read, is not JSON, or its
            top-level value is not a list.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TradeDataError(f"Cannot read {path}: {exc}") from exc

    stripped = text.lstrip()
    if not stripped:
        return []
    if stripped.startswith("["):
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError as exc:
            raise TradeDataError(f"{path}: invalid JSON ({exc.msg})") from exc
    elif stripped.startswith("{") and path.suffix in (".jsonl", ".ndjson"):
        data = _parse_json_lines(stripped, path)
    else:
        try:
            data = json.loads(stripped)
        except json.JSONDecodeError:
            data = _parse_json_lines(stripped, path)

    if not isinstance(data, list):
        raise TradeDataError(f"{path}: expected a list of trades, got {type(data).__name__}")

    trades = trades_from_records(data)
    logger.debug("Loaded %d trades from %s", len(trades), path)
    return trades
