# sample_data.py — demo addresses so the generator has something to show with no input
from __future__ import annotations

from typing import Optional, Tuple

from splice_sheet import AddressRecord, SpliceConfig

SAMPLE_STREET_ADDRESSES = [
    "2101 MARENGO LK RD", "1245 E COATS AVE", "821 E COATS AVE", "801 E COATS AVE",
    "976 E COATS AVE", "764 E COATS AVE", "268 HIGHLAND CIR", "608 7TH AVE",
    "702 7TH AVE", "302 TUCKER ST", "207 TUCKER ST", "205 TUCKER ST",
    "101 E COATS AVE", "108 E COATS AVE",
]


def sample_mst(index: int) -> str:
    return f"MST_F{1000 + index}ECOATSAVE.21082{index % 10}"


def fallback_sheet(index: int) -> int:
    """Sheet number for row `index` when none is given: three rows per sheet, starting at 10."""
    return index // 3 + 10


def fallback_terminal(index: int) -> Optional[str]:
    return f"T{index + 1}" if index < 2 else None


def sample_addresses() -> Tuple[AddressRecord, ...]:
    return tuple(
        AddressRecord(
            mst=sample_mst(i),
            address=addr,
            sheet=fallback_sheet(i),
            terminal=fallback_terminal(i),
        )
        for i, addr in enumerate(SAMPLE_STREET_ADDRESSES)
    )


def sample_config() -> SpliceConfig:
    return SpliceConfig(addresses=sample_addresses())
