"""Turn free-form sales payloads into canonical sales records."""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

_CUSTOMER_KEYS = ("customer", "account")
_BRAND_KEYS = ("brand", "category")
_SEASON_KEYS = ("season", "quarter", "period")
_STAGE_KEYS = ("stage", "pipelineStage")
_AMOUNT_KEYS = ("amount", "value", "revenue", "total")
_NOTES_KEYS = ("notes", "comment")


@dataclass(slots=True)
class SalesRecord:
    """A sales entry reduced to the fixed field set used for analysis."""

    customer: str = "Unknown Customer"
    brand: str = "Unknown Brand"
    season: str = "Unspecified"
    stage: str = "unspecified"
    amount: float = 0.0
    notes: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class NormalizedSalesData:
    """Raw text handed to the model alongside the parsed records."""

    raw: str = ""
    records: List[SalesRecord] = field(default_factory=list)


def _is_present(value: Any) -> bool:
    """Whether a source field counts as supplied for alias resolution."""
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    return True


def _first_present(item: Mapping[str, Any], keys: Sequence[str]) -> Any:
    for key in keys:
        value = item.get(key)
        if _is_present(value):
            return value
    return None


def _render(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _text(item: Mapping[str, Any], keys: Sequence[str], default: str) -> str:
    value = _first_present(item, keys)
    return default if value is None else _render(value)


def _to_number(value: Any) -> Optional[float]:
    """Coerce a scalar to a finite float, or ``None`` when that is impossible."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        # Digit separators are not part of the accepted number syntax.
        if "_" in value:
            return None
        try:
            number = float(value.strip() or "0")
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def _coerce_amount(item: Mapping[str, Any]) -> Optional[float]:
    value = _first_present(item, _AMOUNT_KEYS)
    if value is not None:
        return _to_number(value)
    # Only an explicit zero survives when nothing else was supplied.
    for key in _AMOUNT_KEYS:
        candidate = item.get(key)
        if candidate is None or candidate == "":
            continue
        if _to_number(candidate) == 0.0:
            return 0.0
    return None


def _to_record(item: Any) -> Optional[SalesRecord]:
    if not isinstance(item, Mapping):
        item = {}
    amount = _coerce_amount(item)
    if amount is None:
        return None
    return SalesRecord(
        customer=_text(item, _CUSTOMER_KEYS, "Unknown Customer"),
        brand=_text(item, _BRAND_KEYS, "Unknown Brand"),
        season=_text(item, _SEASON_KEYS, "Unspecified"),
        stage=_text(item, _STAGE_KEYS, "unspecified"),
        amount=amount,
        notes=_text(item, _NOTES_KEYS, ""),
    )


def _pretty_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def normalize_records(data: Any) -> NormalizedSalesData:
    """
    Normalize a sales payload into canonical records.

    Strings are parsed as JSON, lists are used as-is and a single object is
    treated as a one-record list. Anything unparseable degrades to an empty
    record list instead of raising; records whose amount cannot be coerced
    to a finite number are dropped.
    """
    if data is None:
        return NormalizedSalesData()

    raw = ""
    parsed: Any = []
    if isinstance(data, str):
        raw = data
        try:
            parsed = json.loads(data)
        except (ValueError, RecursionError):
            parsed = []
    elif isinstance(data, list):
        parsed = data
        raw = _pretty_json(data)
    elif isinstance(data, Mapping):
        parsed = [data]
        raw = _pretty_json(data)

    if not isinstance(parsed, list):
        return NormalizedSalesData(raw=raw)

    records = [record for record in map(_to_record, parsed) if record is not None]
    return NormalizedSalesData(raw=raw, records=records)


__all__ = ["NormalizedSalesData", "SalesRecord", "normalize_records"]
