"""Byte count formatting and parsing."""

import re

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB"]

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([KMGT]?B?)\s*$", re.IGNORECASE)


def human_readable_size(size_bytes: int) -> str:
    """
    Format a byte count as a human-readable string.

    Uses binary units (1024) and always two decimal places,
    e.g. 1536 -> "1.50 KB". Values past TB stay in TB.
    """
    size = float(size_bytes)
    unit_index = 0

    while size >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        size /= 1024
        unit_index += 1

    return f"{size:.2f} {SIZE_UNITS[unit_index]}"


def parse_size(text: str) -> int:
    """
    Parse a size such as "4096", "10KB", "1.5 MB" or "2g" into bytes.

    Units are binary (1 KB = 1024 bytes). Fractions need a unit above bytes.

    Raises:
        ValueError: If the text is not a valid size
    """
    match = _SIZE_PATTERN.match(text)
    if not match:
        raise ValueError(f"Invalid size: {text!r}")

    number, unit = match.groups()
    unit = unit.upper()
    if unit and not unit.endswith("B"):
        unit += "B"
    if not unit:
        unit = "B"
    if unit == "B" and "." in number:
        raise ValueError(f"Fractional byte count: {text!r}")

    return int(float(number) * 1024 ** SIZE_UNITS.index(unit))
