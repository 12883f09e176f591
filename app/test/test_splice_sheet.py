# tests/test_splice_sheet.py
from sample_data import sample_addresses, sample_config, sample_mst
from splice_sheet import (
    DEFAULT_CABLES,
    AddressRecord,
    CableBundle,
    SpliceConfig,
    build_header,
    build_splice_rows,
    build_splice_table,
    table_summary,
)

ONE_CABLE = (CableBundle("48F(1)", 48),)


def test_zero_ports_is_header_only():
    table = build_splice_table(SpliceConfig(ports=0, cables=DEFAULT_CABLES, addresses=sample_addresses()))
    assert table == [build_header(DEFAULT_CABLES)]


def test_header_width():
    for cables in ((), ONE_CABLE, DEFAULT_CABLES):
        header = build_header(cables)
        assert len(header) == 2 + 6 * len(cables) + 2
    assert build_header(ONE_CABLE) == [
        "Port #", "Main Cable", "Port #", "Cable", "B#", "(B)", "F#", "(F)", "MST", "Address",
    ]


def test_single_record_never_advances():
    rec = AddressRecord("MST_A", "1 MAIN ST")
    table = build_splice_table(SpliceConfig(ports=4, cables=(CableBundle("4F", 4),), addresses=[rec]))
    assert len(table) == 5
    assert {tuple(r[-2:]) for r in table[1:]} == {("MST_A", "1 MAIN ST")}


def test_two_records_advance_once_at_port_four():
    recs = [AddressRecord("MST_A", "1 MAIN ST"), AddressRecord("MST_B", "2 MAIN ST")]
    table = build_splice_table(SpliceConfig(ports=8, cables=(CableBundle("8F", 8),), addresses=recs))
    msts = [r[-2] for r in table[1:]]
    assert msts == ["MST_A"] * 4 + ["MST_B"] * 4


def test_last_record_absorbs_remaining_ports():
    recs = [AddressRecord("MST_A", "1 MAIN ST"), AddressRecord("MST_B", "2 MAIN ST")]
    table = build_splice_table(SpliceConfig(ports=20, cables=ONE_CABLE, addresses=recs))
    assert [r[-2] for r in table[1:]].count("MST_B") == 16


def test_cable_cells_in_and_out_of_capacity():
    cables = (CableBundle("144F(1)", 144), CableBundle("12F(2)", 12))
    table = build_splice_table(SpliceConfig(ports=13, cables=cables, addresses=[]))
    row13 = table[13]
    assert row13[:2] == [13, "FDH108_144F_1-96"]
    assert row13[2:8] == [13, "144F(1)", 2, "OR", 1, "bl"]
    assert row13[8:14] == ["", "12F(2)", "", "", "", ""]


def test_every_row_has_all_cable_groups():
    table = build_splice_table(SpliceConfig(ports=60, cables=DEFAULT_CABLES, addresses=[]))
    for row in table[1:]:
        assert len(row) == 2 + 6 * len(DEFAULT_CABLES) + 2


def test_no_addresses_marks_rows_unused():
    table = build_splice_table(SpliceConfig(ports=3, cables=ONE_CABLE, addresses=[]))
    assert all(r[-2:] == ["", "Unused"] for r in table[1:])


def test_sheet_and_terminal_cells_are_conditional():
    recs = [
        AddressRecord("MST_A", "1 MAIN ST", sheet=14, terminal="T1"),
        AddressRecord("MST_B", "", sheet=15),
        AddressRecord("MST_C", "3 MAIN ST"),
    ]
    rows = build_splice_rows(SpliceConfig(ports=12, cables=ONE_CABLE, addresses=recs))
    assert rows[0].cells()[-4:] == ["MST_A", "1 MAIN ST", "SHEET # 14", "T1"]
    assert rows[4].cells()[-3:] == ["MST_B", "Unused", "SHEET # 15"]
    assert rows[4].is_unused
    assert rows[8].cells()[-2:] == ["MST_C", "3 MAIN ST"]
    assert len(rows[8].cells()) == 2 + 6 + 2


def test_sample_config_first_rows():
    table = build_splice_table(sample_config())
    assert len(table) == 97
    first = table[1]
    assert first[-4:] == [sample_mst(0), "2101 MARENGO LK RD", "SHEET # 10", "T1"]
    # port 49 is past the 48F cables
    assert table[49][14:20] == ["", "48F(3)", "", "", "", ""]


def test_build_is_idempotent_and_does_not_mutate_input():
    cables = [CableBundle("24F", 24)]
    addresses = [AddressRecord("MST_A", "1 MAIN ST", sheet=3)]
    config = SpliceConfig(ports=30, cables=cables, addresses=addresses)
    assert build_splice_table(config) == build_splice_table(config)
    cables.append(CableBundle("x", 1))
    assert len(config.cables) == 1


def test_table_summary():
    config = SpliceConfig(ports=5, cables=ONE_CABLE, addresses=sample_addresses())
    table = build_splice_table(config)
    assert table_summary(config, table) == {"totalPorts": 5, "cables": 1, "addresses": 14, "rowCount": 5}
