"""Known document encodings and detection of the encoding from leading bytes."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from .convert import (
    Conversion,
    ascii_to_utf8,
    latin1_to_utf8,
    latin1_to_utf16,
    utf8_to_utf8,
    utf8_to_utf16,
    utf16_to_utf8,
    utf16_to_utf16,
)

__all__ = [
    "KnownEncoding",
    "Encoding",
    "ScanState",
    "DetectOutcome",
    "Detection",
    "encoding_index",
    "lookup_encoding",
    "detect_encoding",
]


class KnownEncoding(enum.IntEnum):
    """Encodings recognised by name; NONE means no encoding was named."""

    ISO_8859_1 = 0
    US_ASCII = 1
    UTF_8 = 2
    UTF_16 = 3
    UTF_16BE = 4
    UTF_16LE = 5
    NONE = 6

    @property
    def label(self) -> str | None:
        """The canonical upper-case name, or None for NONE."""
        return _LABELS.get(self)


_LABELS = {
    KnownEncoding.ISO_8859_1: "ISO-8859-1",
    KnownEncoding.US_ASCII: "US-ASCII",
    KnownEncoding.UTF_8: "UTF-8",
    KnownEncoding.UTF_16: "UTF-16",
    KnownEncoding.UTF_16BE: "UTF-16BE",
    KnownEncoding.UTF_16LE: "UTF-16LE",
}

_BY_LABEL = {label: kind for kind, label in _LABELS.items()}

# Only ASCII letters are folded; other characters must match exactly.
_ASCII_UPPER = str.maketrans(
    "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
)

_UTF16_FAMILY = frozenset(
    (KnownEncoding.UTF_16, KnownEncoding.UTF_16BE, KnownEncoding.UTF_16LE)
)


class ScanState(enum.IntEnum):
    """Where in a document scanning starts."""

    PROLOG = 0
    CONTENT = 1
    CDATA_SECTION = 2
    IGNORE_SECTION = 3


@dataclass(frozen=True)
class Encoding:
    """A concrete byte encoding that can be converted to UTF-8 or UTF-16."""

    kind: KnownEncoding
    name: str
    min_bytes_per_char: int
    is_utf8: bool
    big_endian: bool = False

    def to_utf8(self, data: bytes, limit: int | None = None) -> Conversion:
        """Convert ``data`` to UTF-8 bytes, at most ``limit`` of them."""
        if self.kind is KnownEncoding.ISO_8859_1:
            return latin1_to_utf8(data, limit)
        if self.kind is KnownEncoding.US_ASCII:
            return ascii_to_utf8(data, limit)
        if self.kind is KnownEncoding.UTF_8:
            return utf8_to_utf8(data, limit)
        return utf16_to_utf8(data, limit, self.big_endian)

    def to_utf16(self, data: bytes, limit: int | None = None) -> Conversion:
        """Convert ``data`` to UTF-16 code units, at most ``limit`` of them."""
        if self.kind in (KnownEncoding.ISO_8859_1, KnownEncoding.US_ASCII):
            return latin1_to_utf16(data, limit)
        if self.kind is KnownEncoding.UTF_8:
            return utf8_to_utf16(data, limit)
        return utf16_to_utf16(data, limit, self.big_endian)


_LATIN1 = Encoding(KnownEncoding.ISO_8859_1, "ISO-8859-1", 1, False)
_ASCII = Encoding(KnownEncoding.US_ASCII, "US-ASCII", 1, True)
_UTF8 = Encoding(KnownEncoding.UTF_8, "UTF-8", 1, True)
_UTF16BE = Encoding(KnownEncoding.UTF_16BE, "UTF-16BE", 2, False, big_endian=True)
_UTF16LE = Encoding(KnownEncoding.UTF_16LE, "UTF-16LE", 2, False, big_endian=False)
_UTF16 = Encoding(KnownEncoding.UTF_16, "UTF-16", 2, False, big_endian=True)

_TABLE = {
    KnownEncoding.ISO_8859_1: _LATIN1,
    KnownEncoding.US_ASCII: _ASCII,
    KnownEncoding.UTF_8: _UTF8,
    KnownEncoding.UTF_16: _UTF16,
    KnownEncoding.UTF_16BE: _UTF16BE,
    KnownEncoding.UTF_16LE: _UTF16LE,
    KnownEncoding.NONE: _UTF8,
}


def encoding_index(name: str | None) -> KnownEncoding:
    """Identify an encoding name, ignoring the case of ASCII letters.

    ``None`` yields KnownEncoding.NONE; an unrecognised name raises
    LookupError.
    """
    if name is None:
        return KnownEncoding.NONE
    try:
        return _BY_LABEL[name.translate(_ASCII_UPPER)]
    except KeyError:
        raise LookupError(f"unknown encoding: {name!r}") from None


def lookup_encoding(name: str | None) -> Encoding:
    """Return the Encoding for a name; ``None`` gives the UTF-8 default."""
    return _TABLE[encoding_index(name)]


class DetectOutcome(enum.Enum):
    """What detection found at the start of the input."""

    NONE = "none"  # no input at all
    PARTIAL = "partial"  # more bytes are needed to decide
    BOM = "bom"  # a byte order mark was found
    DETECTED = "detected"  # an encoding was chosen without a byte order mark


@dataclass(frozen=True)
class Detection:
    """Result of encoding detection."""

    outcome: DetectOutcome
    encoding: Encoding | None = None
    bom_length: int = 0


def _as_known(declared: str | KnownEncoding | None) -> KnownEncoding:
    if isinstance(declared, KnownEncoding):
        return declared
    return encoding_index(declared)


def detect_encoding(
    data: bytes,
    declared: str | KnownEncoding | None = None,
    state: ScanState = ScanState.PROLOG,
) -> Detection:
    """Choose the encoding of a document or entity from its first bytes.

    ``declared`` is the externally specified encoding, if any.  ``state``
    is CONTENT for an external parsed entity and PROLOG for a document.
    """
    data = bytes(data)
    index = _as_known(declared)
    content = state is ScanState.CONTENT
    latin1_entity = index is KnownEncoding.ISO_8859_1 and content

    if not data:
        return Detection(DetectOutcome.NONE)

    if len(data) == 1:
        if index in _UTF16_FAMILY:
            return Detection(DetectOutcome.PARTIAL)
        first = data[0]
        if first in (0xFE, 0xFF, 0xEF):
            if not latin1_entity:
                return Detection(DetectOutcome.PARTIAL)
        elif first in (0x00, 0x3C):
            return Detection(DetectOutcome.PARTIAL)
    else:
        pair = (data[0] << 8) | data[1]
        if pair == 0xFEFF:
            if not latin1_entity:
                return Detection(DetectOutcome.BOM, _UTF16BE, 2)
        elif pair == 0x3C00:
            if not (
                content and index in (KnownEncoding.UTF_16BE, KnownEncoding.UTF_16)
            ):
                return Detection(DetectOutcome.DETECTED, _UTF16LE)
        elif pair == 0xFFFE:
            if not latin1_entity:
                return Detection(DetectOutcome.BOM, _UTF16LE, 2)
        elif pair == 0xEFBB:
            # External labels of ISO-8859-1 or UTF-16 make these bytes data.
            skip = content and (
                index is KnownEncoding.ISO_8859_1 or index in _UTF16_FAMILY
            )
            if not skip:
                if len(data) == 2:
                    return Detection(DetectOutcome.PARTIAL)
                if data[2] == 0xBF:
                    return Detection(DetectOutcome.BOM, _UTF8, 3)
        elif data[0] == 0:
            if not (content and index is KnownEncoding.UTF_16LE):
                return Detection(DetectOutcome.DETECTED, _UTF16BE)
        elif data[1] == 0:
            if not content:
                return Detection(DetectOutcome.DETECTED, _UTF16LE)

    return Detection(DetectOutcome.DETECTED, _TABLE[index])