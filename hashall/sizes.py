"""Human-readable byte-size parsing for ``--buffer`` style options."""

from __future__ import annotations

import re

SIZE_EXAMPLES = "1M, 1MiB, 1MB, 1Mib, 1m, 65536"

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([a-z]*)\s*$", re.IGNORECASE)

_DECIMAL = {"": 1, "k": 1000, "m": 1000**2, "g": 1000**3, "t": 1000**4}
_BINARY = {"ki": 1024, "mi": 1024**2, "gi": 1024**3, "ti": 1024**4}


def parse_size(text: str) -> int:
    """Parse ``text`` such as ``1M`` or ``64KiB`` into a byte count.

    Plain suffixes (``K``, ``M``, ...) are decimal; ``i`` suffixes are binary.
    A trailing ``b``/``B`` is optional. Raises ``ValueError`` when the value is
    malformed or not positive.
    """
    match = _SIZE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"invalid size: {text!r}")
    number_text, unit = match.groups()
    unit = unit.lower()
    if unit.endswith("b"):
        unit = unit[:-1]

    if unit in _BINARY:
        multiplier = _BINARY[unit]
    elif unit in _DECIMAL:
        multiplier = _DECIMAL[unit]
    else:
        raise ValueError(f"invalid size unit in {text!r}")

    value = int(float(number_text) * multiplier)
    if value <= 0:
        raise ValueError(f"size must be positive: {text!r}")
    return value


__all__ = ["SIZE_EXAMPLES", "parse_size"]
