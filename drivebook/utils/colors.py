"""Calendar color assignment for students."""

from typing import Iterator

from ..core.constants import STUDENT_COLOR_PALETTE


def _utf16_code_units(value: str) -> Iterator[int]:
    data = value.encode("utf-16-le")
    for i in range(0, len(data), 2):
        yield int.from_bytes(data[i : i + 2], "little")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def student_color(student_id: str) -> str:
    """
    Return the calendar color for a student.

    Order-dependent hash (h * 31 + unit, wrapped to a signed 32-bit int)
    over the id's UTF-16 code units, so the mobile client computes the
    same color for the same id.
    """
    h = 0
    for unit in _utf16_code_units(student_id):
        h = _to_int32(h * 31 + unit)
    return STUDENT_COLOR_PALETTE[abs(h) % len(STUDENT_COLOR_PALETTE)]
