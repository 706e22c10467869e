"""Label color conversion."""

from typing import NamedTuple


class HSL(NamedTuple):
    """Hue in degrees, saturation and lightness in percent."""

    h: int
    s: int
    l: int  # noqa: E741


def hex_to_hsl(hex_color: str | None) -> HSL | None:
    """Convert a hex RGB color such as ``#1f6feb`` to HSL.

    Args:
        hex_color: Six hex digits, with or without a leading ``#``

    Returns:
        Rounded HSL triple, or None when no color is given

    Raises:
        ValueError: If the color is not six hex digits
    """
    if not hex_color:
        return None

    digits = hex_color.lstrip("#")
    if len(digits) != 6:
        raise ValueError(f"Invalid hex color '{hex_color}'")
    r, g, b = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))

    high = max(r, g, b)
    low = min(r, g, b)
    lightness = (high + low) / 2

    if high == low:
        # achromatic
        hue = saturation = 0.0
    else:
        delta = high - low
        if lightness > 0.5:
            saturation = delta / (2 - high - low)
        else:
            saturation = delta / (high + low)

        if high == r:
            hue = (g - b) / delta + (6 if g < b else 0)
        elif high == g:
            hue = (b - r) / delta + 2
        else:
            hue = (r - g) / delta + 4
        hue /= 6

    return HSL(
        h=round(hue * 360) % 360,
        s=round(saturation * 100),
        l=round(lightness * 100),
    )
