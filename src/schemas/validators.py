"""Reusable field validators shared across request schemas."""
import re

HEX_COLOR_PATTERN = re.compile(r"^#[0-9a-fA-F]{6}$")


def validate_color(value: str | None) -> str | None:
    """Accept None or a #RRGGBB hex color."""
    if value is None:
        return None
    if not HEX_COLOR_PATTERN.match(value):
        raise ValueError("Color must be a hex value like '#1a2b3c'")
    return value


def validate_name(value: str | None) -> str | None:
    """Strip surrounding whitespace and reject names that end up empty."""
    if value is None:
        return None
    stripped = value.strip()
    if not stripped:
        raise ValueError("Name cannot be empty")
    return stripped
