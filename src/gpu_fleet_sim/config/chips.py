"""Chip types — the closed set of GPU variants a batch can hold."""

from __future__ import annotations

from enum import Enum


class ChipType(str, Enum):
    """GPU variant.  Indexes every per-chip settings map."""

    B200 = "B200"
    B300 = "B300"
    GB300 = "GB300"
    H100 = "H100"
    H200 = "H200"
    MI350X = "MI350X"

    @classmethod
    def parse(cls, value: object) -> "ChipType":
        """Case-insensitive lookup (stored records use ``"b200"`` style keys)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for chip in cls:
            if chip.value == text:
                return chip
        raise ValueError(f"Unknown chip type: {value!r}")
