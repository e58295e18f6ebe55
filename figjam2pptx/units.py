"""
units.py: color channel scaling and pixel/EMU conversions.

Shared by the extractors (channel scaling) and the PPTX preview writer
(pixel to EMU placement). Keep all conversion math here.

EMU = English Metric Units (914400 EMUs per inch)
"""

import math

from pptx.util import Emu, Inches

# =============================================================================
# CONSTANTS
# =============================================================================

EMU_PER_INCH = 914400

# FigJam canvas units are CSS pixels
DEFAULT_DPI = 96

CHANNEL_MAX = 255

# Default 16:9 slide
SLIDE_WIDTH_EMU = Inches(13.333)
SLIDE_HEIGHT_EMU = Inches(7.5)


# =============================================================================
# ROUNDING AND COLOR
# =============================================================================

def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero.

    Python's round() rounds ties to even, which would turn 127.5 into 128
    but 126.5 into 126.
    """
    rounded = math.floor(abs(value) + 0.5)
    return int(-rounded if value < 0 else rounded)


def to_channel(value: float) -> int:
    """Scale a 0-1 color channel to a 0-255 integer."""
    return max(0, min(CHANNEL_MAX, round_half_away(value * CHANNEL_MAX)))


# =============================================================================
# UNIT CONVERSIONS
# =============================================================================

def to_emu(pixels: float, dpi: int = DEFAULT_DPI) -> int:
    """Convert canvas pixels to EMUs."""
    return round_half_away(pixels / dpi * EMU_PER_INCH)


def px_to_length(pixels: float, dpi: int = DEFAULT_DPI) -> Emu:
    """Convert canvas pixels to a python-pptx length."""
    return Emu(to_emu(pixels, dpi))
