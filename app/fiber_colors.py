# fiber_colors.py — TIA-598-C color tables + fiber position resolver
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

# Canonical 1–12 order:
# 1-Blue, 2-Orange, 3-Green, 4-Brown, 5-Slate, 6-White,
# 7-Red, 8-Black, 9-Yellow, 10-Violet, 11-Rose, 12-Aqua
COLOR_NAMES: List[str] = [
    "Blue", "Orange", "Green", "Brown", "Slate", "White",
    "Red", "Black", "Yellow", "Violet", "Rose", "Aqua",
]
BUFFER_COLORS: List[str] = ["BL", "OR", "GR", "BR", "SL", "WH", "RD", "BK", "YL", "VT", "RS", "AQ"]
FIBER_COLORS: List[str] = [c.lower() for c in BUFFER_COLORS]

FIBERS_PER_TUBE = 12
COLOR_STANDARD = "TIA-598-C"

_NAME_BY_CODE: Dict[str, str] = dict(zip(BUFFER_COLORS, COLOR_NAMES))


@dataclass(frozen=True)
class FiberPosition:
    buffer_tube: int
    buffer_color: str
    fiber_number: int
    fiber_color: str


def resolve_fiber_position(index: int, fibers_per_tube: int = FIBERS_PER_TUBE) -> FiberPosition:
    """
    Map a 1-based port/fiber index to its buffer tube and in-tube fiber.
    Examples (12 per tube):
       1 -> tube 1 BL, fiber 1 bl
      13 -> tube 2 OR, fiber 1 bl
     144 -> tube 12 AQ, fiber 12 aq
    Callers are expected to pass index >= 1.
    """
    tube = (index - 1) // fibers_per_tube + 1
    fiber = (index - 1) % fibers_per_tube + 1
    return FiberPosition(
        buffer_tube=tube,
        buffer_color=BUFFER_COLORS[(tube - 1) % len(BUFFER_COLORS)],
        fiber_number=fiber,
        fiber_color=FIBER_COLORS[(fiber - 1) % len(FIBER_COLORS)],
    )


def color_label(code: str) -> str:
    """'BL' / 'bl' -> 'Blue'; unknown codes come back unchanged."""
    return _NAME_BY_CODE.get(str(code or "").strip().upper(), code)


def fiber_standards() -> Dict[str, object]:
    return {
        "bufferColors": list(BUFFER_COLORS),
        "fiberColors": list(FIBER_COLORS),
        "colorNames": list(COLOR_NAMES),
        "standardFibersPerTube": FIBERS_PER_TUBE,
        "colorCodingStandard": COLOR_STANDARD,
    }
