"""Trade file loading for the CLI.

Reads journal exports in JSON (a list of rows, or ``{"trades": [...]}``)
or CSV (one row per trade, ``emotional_state`` as a JSON list or a
comma-separated string).
"""

from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

from ..core.errors import TradeLoadError
from .record import TradeRecord

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> list[dict]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except ValueError as exc:
        raise TradeLoadError(str(path), f"invalid JSON ({exc})") from exc

    if isinstance(payload, dict):
        payload = payload.get("trades")
    if not isinstance(payload, list):
        raise TradeLoadError(str(path), "expected a list of trades")
    return [row for row in payload if isinstance(row, dict)]


def _load_csv(path: Path) -> list[dict]:
    try:
        with open(path, newline="", encoding="utf-8") as f:
            return list(csv.DictReader(f))
    except (csv.Error, UnicodeDecodeError) as exc:
        raise TradeLoadError(str(path), f"invalid CSV ({exc})") from exc


def load_trades(path: str | Path) -> list[TradeRecord]:
    """Load and normalise trades from a ``.json`` or ``.csv`` file.

    Raises
    ------
    TradeLoadError
        The file is missing, has an unsupported extension, or cannot be
        decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise TradeLoadError(str(path), "file not found")

    suffix = path.suffix.lower()
    if suffix == ".json":
        rows = _load_json(path)
    elif suffix == ".csv":
        rows = _load_csv(path)
    else:
        raise TradeLoadError(str(path), f"unsupported file type '{suffix}'")

    trades = [TradeRecord.from_row(row) for row in rows]
    logger.info("Loaded %d trades from %s", len(trades), path)
    return trades
