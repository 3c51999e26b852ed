"""Character-level helpers: whitespace, character validity and UTF encoders."""

from __future__ import annotations

_SPACE_CODES = frozenset((0x20, 0x0D, 0x0A, 0x09))

# Control characters below 0x20 that XML allows in content.
_ALLOWED_CONTROLS = frozenset((0x09, 0x0A, 0x0D))


def is_space(c: int | str) -> bool:
    """Return True if ``c`` is XML whitespace (space, CR, LF or tab)."""
    if isinstance(c, str):
        if len(c) != 1:
            return False
        c = ord(c)
    return c in _SPACE_CODES


def check_char_ref_number(code: int) -> int:
    """Return ``code`` if it may appear as a character reference.

    Raises ValueError for surrogates, U+FFFE, U+FFFF and the control
    characters that XML forbids.
    """
    high = code >> 8
    if 0xD8 <= high <= 0xDF:
        raise ValueError(f"surrogate code point U+{code:04X} is not a character")
    if high == 0:
        if code < 0x20 and code not in _ALLOWED_CONTROLS:
            raise ValueError(f"code point U+{code:04X} is not an XML character")
    elif high == 0xFF and code in (0xFFFE, 0xFFFF):
        raise ValueError(f"code point U+{code:04X} is not an XML character")
    return code


def _not_continuation(b: int) -> bool:
    return (b & 0x80) == 0 or (b & 0xC0) == 0xC0


def _invalid2(p: bytes) -> bool:
    return p[0] < 0xC2 or _not_continuation(p[1])


def _invalid3(p: bytes) -> bool:
    if (p[2] & 0x80) == 0:
        return True
    if p[0] == 0xEF and p[1] == 0xBF:
        if p[2] > 0xBD:
            return True
    elif (p[2] & 0xC0) == 0xC0:
        return True
    if p[0] == 0xE0:
        return p[1] < 0xA0 or (p[1] & 0xC0) == 0xC0
    if (p[1] & 0x80) == 0:
        return True
    if p[0] == 0xED:
        return p[1] > 0x9F
    return (p[1] & 0xC0) == 0xC0


def _invalid4(p: bytes) -> bool:
    if _not_continuation(p[3]) or _not_continuation(p[2]):
        return True
    if p[0] == 0xF0:
        return p[1] < 0x90 or (p[1] & 0xC0) == 0xC0
    if (p[1] & 0x80) == 0:
        return True
    if p[0] == 0xF4:
        return p[1] > 0x8F
    return (p[1] & 0xC0) == 0xC0


_INVALID_CHECKS = {2: _invalid2, 3: _invalid3, 4: _invalid4}


def is_invalid_utf8(seq: bytes) -> bool:
    """Tell whether a 2, 3 or 4 byte UTF-8 sequence is malformed.

    Overlong forms, surrogates, code points above U+10FFFF and the
    non-characters U+FFFE and U+FFFF count as invalid.
    """
    seq = bytes(seq)
    try:
        check = _INVALID_CHECKS[len(seq)]
    except KeyError:
        raise ValueError(
            f"multi-byte sequence must be 2 to 4 bytes long, got {len(seq)}"
        ) from None
    return check(seq)


def utf8_encode(code: int) -> bytes:
    """Encode a code point as UTF-8 bytes.

    Surrogate code points are encoded like any other value below U+10000.
    Raises ValueError for negative values or values above U+10FFFF.
    """
    if code < 0:
        raise ValueError(f"negative code point: {code}")
    if code < 0x80:
        return bytes((code,))
    if code < 0x800:
        return bytes(((code >> 6) | 0xC0, (code & 0x3F) | 0x80))
    if code < 0x10000:
        return bytes((
            (code >> 12) | 0xE0,
            ((code >> 6) & 0x3F) | 0x80,
            (code & 0x3F) | 0x80,
        ))
    if code < 0x110000:
        return bytes((
            (code >> 18) | 0xF0,
            ((code >> 12) & 0x3F) | 0x80,
            ((code >> 6) & 0x3F) | 0x80,
            (code & 0x3F) | 0x80,
        ))
    raise ValueError(f"code point out of range: {code:#x}")


def utf16_encode(code: int) -> tuple[int, ...]:
    """Encode a code point as a tuple of one or two UTF-16 code units.

    Raises ValueError for negative values or values above U+10FFFF.
    """
    if code < 0:
        raise ValueError(f"negative code point: {code}")
    if code < 0x10000:
        return (code,)
    if code < 0x110000:
        offset = code - 0x10000
        return ((offset >> 10) + 0xD800, (offset & 0x3FF) + 0xDC00)
    raise ValueError(f"code point out of range: {code:#x}")