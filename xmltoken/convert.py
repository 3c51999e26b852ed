"""Bounded conversion of encoded input to UTF-8 bytes or UTF-16 code units.

Each converter takes the input bytes and an optional limit on the output
size: a number of bytes for UTF-8 output, or a number of code units for
UTF-16 output.  It never splits a character across the limit.  It reports
how much input it consumed and why it stopped.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .chars import utf8_encode

__all__ = [
    "ConvertResult",
    "Conversion",
    "trim_to_complete_utf8",
    "utf8_to_utf8",
    "utf8_to_utf16",
    "latin1_to_utf8",
    "latin1_to_utf16",
    "ascii_to_utf8",
    "utf16_to_utf8",
    "utf16_to_utf16",
]


class ConvertResult(enum.IntEnum):
    """Why a conversion stopped."""

    COMPLETED = 0
    INPUT_INCOMPLETE = 1
    # The output limit was reached; input may remain as well.
    OUTPUT_EXHAUSTED = 2


@dataclass(frozen=True)
class Conversion:
    """Outcome of one conversion call."""

    result: ConvertResult
    consumed: int
    output: bytes | tuple[int, ...]

    @property
    def completed(self) -> bool:
        return self.result is ConvertResult.COMPLETED


def _check_limit(limit: int | None, default: int) -> int:
    if limit is None:
        return default
    if limit < 0:
        raise ValueError(f"output limit must not be negative, got {limit}")
    return limit


def _utf8_lead_length(byte: int) -> int | None:
    """Sequence length announced by a UTF-8 lead byte, or None."""
    if (byte & 0xF8) == 0xF0:
        return 4
    if (byte & 0xF0) == 0xE0:
        return 3
    if (byte & 0xE0) == 0xC0:
        return 2
    return None


def trim_to_complete_utf8(data: bytes) -> bytes:
    """Drop a trailing, incomplete UTF-8 sequence from ``data``."""
    data = bytes(data)
    end = len(data)
    walked = 0
    while end > 0:
        prev = data[end - 1]
        if prev < 0x80:
            break
        size = _utf8_lead_length(prev)
        if size is not None:
            if walked + 1 >= size:
                end += size - 1
                break
            walked = 0
        end -= 1
        walked += 1
    return data[:end]


def utf8_to_utf8(data: bytes, limit: int | None = None) -> Conversion:
    """Copy UTF-8 input, stopping before any partial character."""
    data = bytes(data)
    limit = _check_limit(limit, len(data))
    output_exhausted = len(data) > limit
    window = data[:limit] if output_exhausted else data
    copied = trim_to_complete_utf8(window)
    input_incomplete = len(copied) < len(window)
    if output_exhausted:
        result = ConvertResult.OUTPUT_EXHAUSTED
    elif input_incomplete:
        result = ConvertResult.INPUT_INCOMPLETE
    else:
        result = ConvertResult.COMPLETED
    return Conversion(result, len(copied), copied)


def utf8_to_utf16(data: bytes, limit: int | None = None) -> Conversion:
    """Convert UTF-8 input to UTF-16 code units."""
    data = bytes(data)
    limit = _check_limit(limit, 2 * len(data))
    units: list[int] = []
    pos = 0
    end = len(data)
    while pos < end and len(units) < limit:
        lead = data[pos]
        size = _utf8_lead_length(lead)
        if size == 4 and limit - len(units) < 2:
            return Conversion(ConvertResult.OUTPUT_EXHAUSTED, pos, tuple(units))
        if size is not None and end - pos < size:
            return Conversion(ConvertResult.INPUT_INCOMPLETE, pos, tuple(units))
        if size == 2:
            units.append(((lead & 0x1F) << 6) | (data[pos + 1] & 0x3F))
        elif size == 3:
            units.append(
                ((lead & 0x0F) << 12)
                | ((data[pos + 1] & 0x3F) << 6)
                | (data[pos + 2] & 0x3F)
            )
        elif size == 4:
            code = (
                ((lead & 0x07) << 18)
                | ((data[pos + 1] & 0x3F) << 12)
                | ((data[pos + 2] & 0x3F) << 6)
                | (data[pos + 3] & 0x3F)
            ) - 0x10000
            units.append(((code >> 10) | 0xD800) & 0xFFFF)
            units.append((code & 0x3FF) | 0xDC00)
        else:
            size = 1
            units.append(lead)
        pos += size
    result = ConvertResult.OUTPUT_EXHAUSTED if pos < end else ConvertResult.COMPLETED
    return Conversion(result, pos, tuple(units))


def latin1_to_utf8(data: bytes, limit: int | None = None) -> Conversion:
    """Convert ISO-8859-1 input to UTF-8 bytes."""
    data = bytes(data)
    limit = _check_limit(limit, 2 * len(data))
    out = bytearray()
    for pos, byte in enumerate(data):
        needed = 2 if byte & 0x80 else 1
        if limit - len(out) < needed:
            return Conversion(ConvertResult.OUTPUT_EXHAUSTED, pos, bytes(out))
        if needed == 2:
            out.append((byte >> 6) | 0xC0)
            out.append((byte & 0x3F) | 0x80)
        else:
            out.append(byte)
    return Conversion(ConvertResult.COMPLETED, len(data), bytes(out))


def _copy_limited(data: bytes, limit: int) -> tuple[ConvertResult, int]:
    count = min(len(data), limit)
    if count == limit and count < len(data):
        return ConvertResult.OUTPUT_EXHAUSTED, count
    return ConvertResult.COMPLETED, count


def latin1_to_utf16(data: bytes, limit: int | None = None) -> Conversion:
    """Convert ISO-8859-1 input to UTF-16 code units."""
    data = bytes(data)
    result, count = _copy_limited(data, _check_limit(limit, len(data)))
    return Conversion(result, count, tuple(data[:count]))


def ascii_to_utf8(data: bytes, limit: int | None = None) -> Conversion:
    """Copy US-ASCII input as UTF-8 bytes."""
    data = bytes(data)
    result, count = _copy_limited(data, _check_limit(limit, len(data)))
    return Conversion(result, count, data[:count])


def _unit_bytes(data: bytes, pos: int, big_endian: bool) -> tuple[int, int]:
    """Return the (hi, lo) bytes of the UTF-16 unit at ``pos``."""
    if big_endian:
        return data[pos], data[pos + 1]
    return data[pos + 1], data[pos]


def utf16_to_utf8(
    data: bytes, limit: int | None = None, big_endian: bool = False
) -> Conversion:
    """Convert UTF-16 input of the given byte order to UTF-8 bytes.

    A trailing odd byte is left unconsumed.
    """
    data = bytes(data)
    limit = _check_limit(limit, 2 * len(data))
    end = len(data) - (len(data) % 2)
    out = bytearray()
    pos = 0
    while pos < end:
        hi, lo = _unit_bytes(data, pos, big_endian)
        room = limit - len(out)
        if 0xD8 <= hi <= 0xDB:
            if room < 4:
                return Conversion(ConvertResult.OUTPUT_EXHAUSTED, pos, bytes(out))
            if end - pos < 4:
                return Conversion(ConvertResult.INPUT_INCOMPLETE, pos, bytes(out))
            hi2, lo2 = _unit_bytes(data, pos + 2, big_endian)
            high_bits = ((hi & 0x3) << 8) | lo
            low_bits = ((hi2 & 0x3) << 8) | lo2
            out += utf8_encode(0x10000 + ((high_bits << 10) | low_bits))
            pos += 4
            continue
        code = (hi << 8) | lo
        encoded = utf8_encode(code)
        if room < len(encoded):
            return Conversion(ConvertResult.OUTPUT_EXHAUSTED, pos, bytes(out))
        out += encoded
        pos += 2
    return Conversion(ConvertResult.COMPLETED, pos, bytes(out))


def utf16_to_utf16(
    data: bytes, limit: int | None = None, big_endian: bool = False
) -> Conversion:
    """Read UTF-16 input of the given byte order as code units.

    When the output limit cannot take all input and the input ends in a
    high surrogate, that last unit is held back as incomplete input.
    """
    data = bytes(data)
    end = len(data) - (len(data) % 2)
    limit = _check_limit(limit, end // 2)
    result = ConvertResult.COMPLETED
    if end > 2 * limit and (_unit_bytes(data, end - 2, big_endian)[0] & 0xF8) == 0xD8:
        end -= 2
        result = ConvertResult.INPUT_INCOMPLETE
    count = min(end // 2, limit)
    units = tuple(
        (hi << 8) | lo
        for hi, lo in (_unit_bytes(data, 2 * i, big_endian) for i in range(count))
    )
    consumed = 2 * count
    if count == limit and consumed < end:
        result = ConvertResult.OUTPUT_EXHAUSTED
    return Conversion(result, consumed, units)