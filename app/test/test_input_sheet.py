# tests/test_input_sheet.py
import io

import pandas as pd
import pytest
from openpyxl import Workbook

from input_sheet import (
    config_from_frame,
    config_from_payload,
    config_from_upload,
    load_payload,
    read_input_frame,
)
from sample_data import fallback_sheet, sample_addresses, sample_mst
from splice_errors import InputParseError, ValidationError
from splice_settings import MAX_PORTS
from splice_sheet import DEFAULT_CABLES, DEFAULT_MAIN_CABLE, AddressRecord, CableBundle

SAMPLE_ROWS = [
    ["Port #", "Main", "144F Cable 1", "Cable 48F", "MST", "Address", "Sheet", "Terminal"],
    [1, "FDH", None, None, "MST_X", "1 ELM ST", 14, "T9"],
    [2, "FDH", None, None, None, None, "SHEET # 22", None],
    [None, None, None, None, None, None, None, None],
]

SAMPLE_CSV = b"""Port,Cable 24F,x,y,MST,Address
1,,,,M1,10 ELM ST
"""


def _xlsx_bytes(rows) -> bytes:
    wb = Workbook()
    ws = wb.active
    for r in rows:
        ws.append(r)
    out = io.BytesIO()
    wb.save(out)
    return out.getvalue()


# ---------- JSON payload ----------
def test_payload_defaults():
    config = config_from_payload({})
    assert config.ports == 96
    assert config.main_cable_name == DEFAULT_MAIN_CABLE
    assert config.cables == DEFAULT_CABLES
    assert config.addresses == sample_addresses()


def test_payload_camel_and_snake_case():
    config = config_from_payload({
        "ports": "8",
        "main_cable_name": "FDH1",
        "cables": [{"name": "8F", "fiberCount": 8}, {"name": "4F", "fiber_count": 4.0}],
        "addresses": [{"mst": "M1", "address": "1 ELM ST", "sheet": "3", "terminal": ""}],
    })
    assert config.ports == 8
    assert config.main_cable_name == "FDH1"
    assert config.cables == (CableBundle("8F", 8), CableBundle("4F", 4))
    assert config.addresses == (AddressRecord("M1", "1 ELM ST", 3, None),)


def test_payload_empty_cable_list_is_kept():
    assert config_from_payload({"cables": []}).cables == ()


@pytest.mark.parametrize("payload", [
    {"ports": -1},
    {"ports": "many"},
    {"ports": True},
    {"cables": [{"name": "x", "fiberCount": 0}]},
    {"cables": [{"fiberCount": 12}]},
    {"cables": ["144F"]},
    {"cables": "144F"},
    {"addresses": [{"mst": "M", "address": "A", "sheet": -2}]},
    {"addresses": ["1 ELM ST"]},
])
def test_payload_validation(payload):
    with pytest.raises(ValidationError):
        config_from_payload(payload)


def test_load_payload():
    assert load_payload(b"") == {}
    assert load_payload('{"ports": 4}') == {"ports": 4}
    with pytest.raises(InputParseError):
        load_payload(b"{not json")
    with pytest.raises(ValidationError):
        load_payload(b"[1, 2]")


# ---------- uploaded sheet ----------
def test_xlsx_upload_sniffs_cables_and_addresses():
    config = config_from_upload(_xlsx_bytes(SAMPLE_ROWS), "hub.xlsx")
    assert config.cables == (CableBundle("144F Cable 1", 144), CableBundle("Cable 48F", 48))
    assert config.ports == 96
    assert config.addresses == (
        AddressRecord("MST_X", "1 ELM ST", 14, "T9"),
        AddressRecord(sample_mst(1), "Unused", 22, "T2"),
    )


def test_csv_upload_fills_blanks_deterministically():
    config = config_from_upload(SAMPLE_CSV, "hub.csv")
    assert config.cables == (CableBundle("Cable 24F", 24),)
    assert config.addresses == (AddressRecord("M1", "10 ELM ST", fallback_sheet(0), "T1"),)
    assert config_from_upload(SAMPLE_CSV, "hub.csv") == config


def test_frame_without_cables_or_rows_uses_defaults():
    config = config_from_frame(pd.DataFrame([["Port #", "Address"]]))
    assert config.cables == DEFAULT_CABLES
    assert config.addresses == sample_addresses()
    assert config.ports == 96


def test_many_rows_raise_port_count():
    rows = [["Port #"]] + [[i] for i in range(1, 121)]
    assert config_from_frame(pd.DataFrame(rows)).ports == 120


def test_rejects_other_extensions():
    with pytest.raises(ValidationError):
        read_input_frame(b"", "hub.pdf")


def test_unreadable_workbook():
    with pytest.raises(InputParseError):
        read_input_frame(b"definitely not a zip file", "hub.xlsx")


def test_fiber_count_needs_digits_next_to_f():
    frame = pd.DataFrame([["Port #", "Main", "Cable 1 FDH 48F", "Cable 2 Feeder", "MST", "Address"]])
    assert [c.fiber_count for c in config_from_frame(frame).cables] == [48, 144]


def test_payload_port_limit():
    assert config_from_payload({"ports": MAX_PORTS}).ports == MAX_PORTS
    with pytest.raises(ValidationError):
        config_from_payload({"ports": MAX_PORTS + 1})
    with pytest.raises(ValidationError):
        config_from_payload({"ports": 1e9})
