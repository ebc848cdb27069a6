"""Color helpers shared by the serializer and the structurer."""

from __future__ import annotations

from typing import Optional

import webcolors


def to_color_hex(channel: int) -> str:
    """Return a two digit lowercase hex string for one 0-255 channel."""
    return f"{max(0, min(255, channel)):02x}"


def color_hex(red: int, green: int, blue: int) -> str:
    return f"#{to_color_hex(red)}{to_color_hex(green)}{to_color_hex(blue)}"


def hex_to_keyword(hex_value: str) -> Optional[str]:
    """Return the CSS3 color keyword for an exact `#rrggbb` value, if one exists."""
    try:
        return webcolors.hex_to_name(hex_value, spec="css3")
    except ValueError:
        return None


__all__ = ["color_hex", "hex_to_keyword", "to_color_hex"]
