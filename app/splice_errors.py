# splice_errors.py — failures surfaced by the loading / export layer
from __future__ import annotations


class SpliceSheetError(Exception):
    """Base class; str(exc) is shown to the user as-is."""


class InputParseError(SpliceSheetError):
    """Uploaded spreadsheet or JSON body could not be read."""


class ValidationError(SpliceSheetError):
    """Input was readable but describes an impossible hub (bad ports, fiber counts, records)."""


class OutputError(SpliceSheetError):
    """Generated workbook could not be written or served."""
