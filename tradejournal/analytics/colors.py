"""Heat map coloring for P&L buckets."""

import math
from decimal import Decimal
from typing import Union

from tradejournal.models import ColorIntensity

MIN_INTENSITY = 0.2
MAX_INTENSITY = 1.0

# Above this alpha the background is dark enough to need light text.
LIGHT_TEXT_THRESHOLD = 0.6
LIGHT_TEXT_COLOR = "#ffffff"
INHERIT = "inherit"

Amount = Union[Decimal, float, int]


def parse_hex_color(color: str) -> tuple[int, int, int]:
    """Parse ``#rrggbb`` into an (r, g, b) tuple."""
    value = color.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #rrggbb color, got {color!r}")
    return int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16)


def intensity_for_ratio(ratio: float) -> float:
    """Map a 0..1 magnitude ratio to an alpha between 0.2 and 1.0.

    The log10 curve lifts small values so low-P&L cells stay visible next
    to outliers.
    """
    return MIN_INTENSITY + (MAX_INTENSITY - MIN_INTENSITY) * math.log10(1 + ratio * 9)


def pnl_color(
    pnl: Amount,
    max_profit: Amount,
    max_loss: Amount,
    profit_color: str,
    loss_color: str,
    neutral_color: str,
) -> ColorIntensity:
    """Color a bucket by the size of its P&L relative to the series.

    Args:
        pnl: The bucket's P&L.
        max_profit: Largest positive bucket P&L across the whole series.
        max_loss: Largest negative bucket P&L magnitude across the series.
        profit_color: ``#rrggbb`` base color for gains.
        loss_color: ``#rrggbb`` base color for losses.
        neutral_color: Color for empty or break-even buckets.

    Returns:
        ColorIntensity; neutral (no intensity) for zero P&L or when both
        maxima are zero.
    """
    if pnl == 0 or (max_profit == 0 and max_loss == 0):
        return ColorIntensity(background_color=neutral_color, text_color=INHERIT)

    if pnl > 0:
        base_color = profit_color
        ratio = float(pnl) / float(max_profit) if max_profit > 0 else 0.0
    else:
        base_color = loss_color
        ratio = abs(float(pnl)) / float(max_loss) if max_loss > 0 else 0.0

    intensity = intensity_for_ratio(ratio)
    r, g, b = parse_hex_color(base_color)

    return ColorIntensity(
        background_color=f"rgba({r}, {g}, {b}, {intensity:.2f})",
        text_color=LIGHT_TEXT_COLOR if intensity > LIGHT_TEXT_THRESHOLD else INHERIT,
        base_color=base_color,
        intensity=intensity,
    )


def blend_hex(color: ColorIntensity, backdrop: str) -> str:
    """Flatten a colored cell onto an opaque backdrop.

    Terminals cannot draw translucent colors, so the alpha blend is done
    here and returned as ``#rrggbb``. Neutral cells return their
    background unchanged.
    """
    if color.is_neutral:
        return color.background_color

    alpha = min(color.intensity, 1.0)
    fg = parse_hex_color(color.base_color)
    bg = parse_hex_color(backdrop)
    r, g, b = (round(f * alpha + k * (1 - alpha)) for f, k in zip(fg, bg))
    return f"#{r:02x}{g:02x}{b:02x}"
