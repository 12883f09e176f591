# splice_settings.py
# Project-level settings for the splice sheet generator.
# Environment variables override the defaults, e.g.
#   export SPLICE_OUTPUT_DIR="$HOME/splice_sheets"
#   export SPLICE_LOG_DETAIL=DEBUG
import logging
import os
import sys
from pathlib import Path

# -----------------------------
# Logging configuration toggles
# -----------------------------
# - "DEBUG": verbose with [module:function:lineno] header
# - "INFO":  condensed one-liners
LOG_DETAIL = os.environ.get("SPLICE_LOG_DETAIL", "INFO")
LOG_FILE = os.environ.get("SPLICE_LOG_FILE", "splice_sheet.log")
WRITE_LOG_FILE = os.environ.get("SPLICE_WRITE_LOG_FILE", "").lower() in ("1", "true", "yes")

LOG_LEVEL = logging.DEBUG if str(LOG_DETAIL).upper() == "DEBUG" else logging.INFO


def setup_logging():
    """Configure root logging: console always, file when WRITE_LOG_FILE is on."""
    detail = str(LOG_DETAIL).upper()
    fmt_verbose   = "%(asctime)s %(levelname)-8s [%(name)s:%(funcName)s:%(lineno)d] %(message)s"
    fmt_condensed = "%(asctime)s %(levelname)-8s %(message)s"
    fmt = fmt_verbose if detail == "DEBUG" else fmt_condensed

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    for h in list(root.handlers):
        root.removeHandler(h)

    if WRITE_LOG_FILE:
        fh = logging.FileHandler(LOG_FILE, encoding="utf-8")
        fh.setFormatter(logging.Formatter(fmt))
        root.addHandler(fh)

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(fmt))
    root.addHandler(sh)

    # werkzeug logs every request at INFO
    logging.getLogger("werkzeug").setLevel(logging.WARNING)


# ----------------
# Data directories
# ----------------
if getattr(sys, "frozen", False):
    _base = Path(sys.executable).resolve().parent
else:
    _base = Path(__file__).resolve().parent.parent

OUTPUT_DIR = Path(os.path.expanduser(os.environ.get("SPLICE_OUTPUT_DIR", str(_base / "output")))).resolve()


def ensure_output_dir() -> Path:
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    return OUTPUT_DIR


# --------------------------
# API / upload settings
# --------------------------
API_HOST = os.environ.get("SPLICE_HOST", "0.0.0.0")
API_PORT = int(os.environ.get("PORT", "3000"))
MAX_UPLOAD_MB = int(os.environ.get("SPLICE_MAX_UPLOAD_MB", "16"))
UPLOAD_EXTENSIONS = (".xlsx", ".xlsm", ".csv")
PREVIEW_ROWS = 10
# Upper bound on requested ports (one row each)
MAX_PORTS = int(os.environ.get("SPLICE_MAX_PORTS", "10000"))

XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

# --------------------------
# Spreadsheet column widths
# --------------------------
MAIN_COLUMN_WIDTHS = [8, 20]            # Port #, Main Cable
CABLE_COLUMN_WIDTHS = [8, 15, 6, 6, 6, 6]  # Port #, Cable, B#, (B), F#, (F)
TAIL_COLUMN_WIDTHS = [30, 25, 12, 12]   # MST, Address, Sheet, Terminal
