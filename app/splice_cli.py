# -*- coding: utf-8 -*-
"""
splice_cli.py
Usage:
  python splice_cli.py generate --json hub.json --out FDH108_splice.xlsx
  python splice_cli.py generate --input addresses.xlsx
  python splice_cli.py generate                      (sample data)
  python splice_cli.py standards
  python splice_cli.py serve --port 3000
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import splice_settings
from fiber_colors import fiber_standards
from input_sheet import config_from_payload, config_from_upload, load_payload
from sample_data import sample_config
from splice_errors import SpliceSheetError
from splice_export import table_to_workbook_bytes
from splice_sheet import build_splice_table

logger = logging.getLogger(__name__)


def _load_config(args):
    if args.json:
        return config_from_payload(load_payload(args.json.read_bytes()))
    if args.input:
        return config_from_upload(args.input.read_bytes(), args.input.name)
    return sample_config()


def cmd_generate(args) -> int:
    config = _load_config(args)
    table = build_splice_table(config)
    args.out.write_bytes(table_to_workbook_bytes(table))
    print(f"{args.out} ({len(table) - 1} rows)")
    return 0


def cmd_standards(args) -> int:
    print(json.dumps(fiber_standards(), indent=2))
    return 0


def cmd_serve(args) -> int:
    from splice_api import create_app
    create_app().run(host=args.host, port=args.port)
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="splice-sheet", description="FDH splice sheet generator")
    sub = ap.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Write a splice sheet .xlsx")
    src = g.add_mutually_exclusive_group()
    src.add_argument("--json", type=Path, help="JSON hub description (ports, mainCableName, cables, addresses)")
    src.add_argument("--input", type=Path, help="Input spreadsheet (.xlsx/.xlsm/.csv)")
    g.add_argument("--out", type=Path, default=Path("splice_sheet.xlsx"), help="Output .xlsx path")
    g.set_defaults(func=cmd_generate)

    s = sub.add_parser("standards", help="Print the fiber color standard")
    s.set_defaults(func=cmd_standards)

    v = sub.add_parser("serve", help="Run the HTTP API")
    v.add_argument("--host", default=splice_settings.API_HOST)
    v.add_argument("--port", type=int, default=splice_settings.API_PORT)
    v.set_defaults(func=cmd_serve)
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not logging.getLogger().handlers:
        splice_settings.setup_logging()
    try:
        return args.func(args)
    except (SpliceSheetError, OSError) as e:
        logger.error("%s", e)
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
