# input_sheet.py — turn a JSON payload or an uploaded sheet into a SpliceConfig
from __future__ import annotations

import io
import json
import logging
import math
import numbers
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd

from sample_data import fallback_sheet, fallback_terminal, sample_addresses, sample_mst
from splice_errors import InputParseError, ValidationError
from splice_settings import MAX_PORTS, UPLOAD_EXTENSIONS
from splice_sheet import (
    DEFAULT_CABLES,
    DEFAULT_MAIN_CABLE,
    DEFAULT_PORTS,
    UNUSED,
    AddressRecord,
    CableBundle,
    SpliceConfig,
)

logger = logging.getLogger(__name__)

# "144F(1)" / "Cable 48f" -> fiber count; digits must touch the F
FIBER_COUNT_RE = re.compile(r"(\d+)F", re.IGNORECASE)
DIGITS_RE = re.compile(r"\d+")

DEFAULT_FIBER_COUNT = 144

# Column positions in an uploaded sheet's data rows
MST_COL, ADDRESS_COL, SHEET_COL, TERMINAL_COL = 4, 5, 6, 7

# =========================
# Value coercion
# =========================
def _is_blank(v: Any) -> bool:
    if v is None:
        return True
    if isinstance(v, float) and math.isnan(v):
        return True
    return isinstance(v, str) and not v.strip()


def _text(v: Any) -> str:
    if _is_blank(v):
        return ""
    if isinstance(v, float) and v.is_integer():
        return str(int(v))
    return str(v).strip()


def _as_int(v: Any, what: str) -> int:
    if isinstance(v, bool):
        raise ValidationError(f"{what} must be an integer, got {v!r}")
    if isinstance(v, numbers.Integral):
        return int(v)
    if isinstance(v, float) and v.is_integer():
        return int(v)
    if isinstance(v, str) and re.fullmatch(r"\s*-?\d+\s*", v):
        return int(v)
    raise ValidationError(f"{what} must be an integer, got {v!r}")


def _pick(d: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    for k in keys:
        if k in d:
            return d[k]
    return default


# =========================
# JSON payload
# =========================
def load_payload(raw: Union[bytes, str]) -> Dict[str, Any]:
    try:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8-sig")
        data = json.loads(raw) if raw.strip() else {}
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise InputParseError(f"Error parsing JSON input: {e}") from e
    if not isinstance(data, dict):
        raise ValidationError("JSON input must be an object")
    return data


def _cable_from_payload(item: Any, n: int) -> CableBundle:
    if not isinstance(item, Mapping):
        raise ValidationError(f"cables[{n}] must be an object with name and fiberCount")
    name = _text(item.get("name"))
    if not name:
        raise ValidationError(f"cables[{n}] is missing a name")
    count = _as_int(_pick(item, "fiberCount", "fiber_count", default=DEFAULT_FIBER_COUNT),
                    f"cables[{n}].fiberCount")
    if count <= 0:
        raise ValidationError(f"cables[{n}].fiberCount must be positive, got {count}")
    return CableBundle(name, count)


def _address_from_payload(item: Any, n: int) -> AddressRecord:
    if not isinstance(item, Mapping):
        raise ValidationError(f"addresses[{n}] must be an object")
    sheet = item.get("sheet")
    if _is_blank(sheet):
        sheet = None
    else:
        sheet = _as_int(sheet, f"addresses[{n}].sheet")
        if sheet <= 0:
            raise ValidationError(f"addresses[{n}].sheet must be positive, got {sheet}")
    return AddressRecord(
        mst=_text(item.get("mst")),
        address=_text(item.get("address")),
        sheet=sheet,
        terminal=_text(item.get("terminal")) or None,
    )


def config_from_payload(payload: Mapping[str, Any]) -> SpliceConfig:
    """
    Build a config from a request body like
      {"ports": 96, "mainCableName": "...", "cables": [{"name": "144F(1)", "fiberCount": 144}],
       "addresses": [{"mst": "...", "address": "...", "sheet": 10, "terminal": "T1"}]}
    snake_case keys are accepted too. Absent fields fall back to the defaults,
    an empty address list to the sample addresses.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("JSON input must be an object")

    ports = _as_int(payload.get("ports", DEFAULT_PORTS), "ports")
    if ports < 0:
        raise ValidationError(f"ports must not be negative, got {ports}")
    if ports > MAX_PORTS:
        raise ValidationError(f"ports must be at most {MAX_PORTS}, got {ports}")

    main_cable = _text(_pick(payload, "mainCableName", "main_cable_name")) or DEFAULT_MAIN_CABLE

    raw_cables = payload.get("cables")
    if raw_cables is None:
        cables = DEFAULT_CABLES
    elif isinstance(raw_cables, list):
        cables = tuple(_cable_from_payload(c, i) for i, c in enumerate(raw_cables))
    else:
        raise ValidationError("cables must be a list")

    raw_addresses = payload.get("addresses") or []
    if not isinstance(raw_addresses, list):
        raise ValidationError("addresses must be a list")
    addresses = tuple(_address_from_payload(a, i) for i, a in enumerate(raw_addresses))

    return SpliceConfig(
        ports=ports,
        main_cable_name=main_cable,
        cables=cables,
        addresses=addresses or sample_addresses(),
    )


# =========================
# Uploaded sheet
# =========================
def read_input_frame(data: bytes, filename: str) -> pd.DataFrame:
    """Read an upload with no header inference; row 0 stays the header row."""
    name = (filename or "").lower()
    if not name.endswith(UPLOAD_EXTENSIONS):
        raise ValidationError(f"Only {', '.join(UPLOAD_EXTENSIONS)} files are allowed")

    bio = io.BytesIO(data)
    if name.endswith((".xlsx", ".xlsm")):
        try:
            return pd.read_excel(bio, engine="openpyxl", header=None)
        except Exception as e:
            raise InputParseError(f"Error parsing input file: {e}") from e

    # CSV: autodetect delimiter + tolerant encodings
    last_err: Optional[Exception] = None
    for enc in ("utf-8", "utf-16", "latin1"):
        try:
            bio.seek(0)
            return pd.read_csv(bio, header=None, sep=None, engine="python",
                               dtype=str, keep_default_na=False, encoding=enc)
        except Exception as e:
            last_err = e
    raise InputParseError(f"Error parsing input file: {last_err}")


def _cell(row: Sequence[Any], i: int) -> Any:
    return row[i] if i < len(row) else None


def _sheet_number(v: Any) -> Optional[int]:
    if isinstance(v, (int, float)) and not _is_blank(v) and not isinstance(v, bool):
        return int(v)
    m = DIGITS_RE.search(_text(v))
    return int(m.group(0)) if m else None


def _cables_from_header(header: Sequence[Any]) -> List[CableBundle]:
    cables: List[CableBundle] = []
    for h in header:
        if not isinstance(h, str) or "cable" not in h.lower():
            continue
        m = FIBER_COUNT_RE.search(h)
        count = int(m.group(1)) if m else DEFAULT_FIBER_COUNT
        if count <= 0:
            raise ValidationError(f"Cable column {h!r} has a non-positive fiber count")
        cables.append(CableBundle(h.strip(), count))
    return cables


def config_from_frame(frame: pd.DataFrame) -> SpliceConfig:
    """
    Best-effort sniffing of an input sheet:
      - header cells mentioning "cable" become cable bundles ("...48F..." -> 48 fibers, else 144)
      - each non-empty data row becomes an address record; columns E..H are
        MST / Address / Sheet / Terminal, blanks are filled from the sample rules
    """
    rows = [list(r) for r in frame.itertuples(index=False, name=None)]
    header = rows[0] if rows else []
    data = [r for r in rows[1:] if any(not _is_blank(v) for v in r)]

    cables = _cables_from_header(header)

    addresses: List[AddressRecord] = []
    for i, row in enumerate(data):
        sheet = _sheet_number(_cell(row, SHEET_COL))
        addresses.append(AddressRecord(
            mst=_text(_cell(row, MST_COL)) or sample_mst(i),
            address=_text(_cell(row, ADDRESS_COL)) or UNUSED,
            sheet=sheet if sheet and sheet > 0 else fallback_sheet(i),
            terminal=_text(_cell(row, TERMINAL_COL)) or fallback_terminal(i),
        ))

    logger.info("Input sheet: %d cable column(s), %d address row(s)", len(cables), len(addresses))
    return SpliceConfig(
        ports=max(DEFAULT_PORTS, len(data)) if data else DEFAULT_PORTS,
        main_cable_name=DEFAULT_MAIN_CABLE,
        cables=tuple(cables) or DEFAULT_CABLES,
        addresses=tuple(addresses) or sample_addresses(),
    )


def config_from_upload(data: bytes, filename: str) -> SpliceConfig:
    return config_from_frame(read_input_frame(data, filename))
