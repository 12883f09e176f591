# splice_sheet.py — Build the FDH splice sheet (one header row + one row per port)
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

from fiber_colors import FIBERS_PER_TUBE, resolve_fiber_position

logger = logging.getLogger(__name__)

Cell = Union[int, str]
SpliceTable = List[List[Cell]]

# Blank marker for unused cells (spreadsheet-safe, survives CSV/XLSX round-trips)
BLANK = ""
UNUSED = "Unused"

# Ports per address record before the walk moves on
PORTS_PER_ADDRESS = 4

MAIN_HEADERS = ["Port #", "Main Cable"]
CABLE_HEADERS = ["Port #", "Cable", "B#", "(B)", "F#", "(F)"]
TAIL_HEADERS = ["MST", "Address"]

# =========================
# Data model
# =========================
@dataclass(frozen=True)
class CableBundle:
    name: str
    fiber_count: int


@dataclass(frozen=True)
class AddressRecord:
    mst: str
    address: str
    sheet: Optional[int] = None
    terminal: Optional[str] = None


DEFAULT_PORTS = 96
DEFAULT_MAIN_CABLE = "FDH108_144F_1-96"
DEFAULT_CABLES: Tuple[CableBundle, ...] = (
    CableBundle("144F(1)", 144),
    CableBundle("144F(2)", 144),
    CableBundle("48F(3)", 48),
    CableBundle("48F(4)", 48),
)


@dataclass(frozen=True)
class SpliceConfig:
    ports: int = DEFAULT_PORTS
    main_cable_name: str = DEFAULT_MAIN_CABLE
    cables: Tuple[CableBundle, ...] = DEFAULT_CABLES
    addresses: Tuple[AddressRecord, ...] = ()

    def __post_init__(self):
        # freeze caller-supplied lists so a config value can't change under build()
        object.__setattr__(self, "cables", tuple(self.cables))
        object.__setattr__(self, "addresses", tuple(self.addresses))


@dataclass(frozen=True)
class CableCells:
    port: Cell
    cable: str
    buffer_tube: Cell
    buffer_color: str
    fiber_number: Cell
    fiber_color: str

    @classmethod
    def unused(cls, cable: str) -> "CableCells":
        return cls(BLANK, cable, BLANK, BLANK, BLANK, BLANK)

    def cells(self) -> List[Cell]:
        return [self.port, self.cable, self.buffer_tube, self.buffer_color, self.fiber_number, self.fiber_color]


@dataclass(frozen=True)
class SpliceRow:
    """
    One port of the sheet, kept by field name.
    sheet_label / terminal are optional and only appear in cells() when set,
    so flattened rows can differ in length.
    """
    port: int
    main_cable: str
    cables: Tuple[CableCells, ...]
    mst: str
    address: str
    sheet_label: Optional[str] = None
    terminal: Optional[str] = None

    @property
    def is_unused(self) -> bool:
        return self.address == UNUSED

    def cells(self) -> List[Cell]:
        out: List[Cell] = [self.port, self.main_cable]
        for c in self.cables:
            out.extend(c.cells())
        out.extend([self.mst, self.address])
        if self.sheet_label is not None:
            out.append(self.sheet_label)
        if self.terminal is not None:
            out.append(self.terminal)
        return out


# =========================
# Builder
# =========================
def build_header(cables: Sequence[CableBundle]) -> List[str]:
    header = list(MAIN_HEADERS)
    for _ in cables:
        header.extend(CABLE_HEADERS)
    header.extend(TAIL_HEADERS)
    return header


def sheet_label(sheet: Optional[int]) -> Optional[str]:
    return f"SHEET # {sheet}" if sheet else None


def _cable_cells(port: int, cable: CableBundle) -> CableCells:
    if port > cable.fiber_count:
        return CableCells.unused(cable.name)
    pos = resolve_fiber_position(port, FIBERS_PER_TUBE)
    return CableCells(port, cable.name, pos.buffer_tube, pos.buffer_color, pos.fiber_number, pos.fiber_color)


def _address_fields(record: Optional[AddressRecord]) -> Dict[str, Optional[str]]:
    if record is None:
        return {"mst": BLANK, "address": UNUSED}
    return {
        "mst": record.mst or BLANK,
        "address": record.address or UNUSED,
        "sheet_label": sheet_label(record.sheet),
        "terminal": record.terminal or None,
    }


def build_splice_rows(config: SpliceConfig) -> List[SpliceRow]:
    addresses = config.addresses
    rows: List[SpliceRow] = []
    address_index = 0

    for port in range(1, config.ports + 1):
        cables = tuple(_cable_cells(port, c) for c in config.cables)
        record = addresses[address_index] if address_index < len(addresses) else None
        rows.append(SpliceRow(port=port, main_cable=config.main_cable_name, cables=cables,
                              **_address_fields(record)))

        # the last record keeps every remaining port
        if port % PORTS_PER_ADDRESS == 0 and address_index < len(addresses) - 1:
            address_index += 1

    return rows


def build_splice_table(config: SpliceConfig) -> SpliceTable:
    table: SpliceTable = [build_header(config.cables)]
    table.extend(row.cells() for row in build_splice_rows(config))
    logger.debug("Built splice table: %d ports x %d cables, %d address records",
                 config.ports, len(config.cables), len(config.addresses))
    return table


def table_summary(config: SpliceConfig, table: Iterable[Sequence[Cell]]) -> Dict[str, int]:
    return {
        "totalPorts": config.ports,
        "cables": len(config.cables),
        "addresses": len(config.addresses),
        "rowCount": max(len(list(table)) - 1, 0),
    }
