"""Parsing of XML declarations and text declarations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .chars import is_space

__all__ = [
    "XmlDecl",
    "XmlDeclError",
    "parse_pseudo_attribute",
    "parse_xml_decl",
]

_OPEN = "<?xml"
_CLOSE = "?>"

_VALUE_PUNCTUATION = frozenset("._-")


class XmlDeclError(ValueError):
    """A malformed declaration; ``position`` is the offending offset."""

    def __init__(self, position: int, message: str = "malformed XML declaration"):
        super().__init__(f"{message} at offset {position}")
        self.position = position


@dataclass(frozen=True)
class XmlDecl:
    """The pseudo-attributes of an XML or text declaration.

    ``standalone`` is None when the declaration does not mention it.
    """

    version: str | None = None
    encoding: str | None = None
    standalone: bool | None = None


class _Attribute(NamedTuple):
    name: str
    value: str
    name_pos: int
    value_pos: int
    end: int


def _char(text: str, pos: int, end: int) -> str:
    """The ASCII character at ``pos``, or "" past the end or for non-ASCII."""
    if pos >= end:
        return ""
    c = text[pos]
    return c if ord(c) < 0x80 else ""


def _is_value_char(c: str) -> bool:
    return c != "" and (c.isascii() and c.isalnum() or c in _VALUE_PUNCTUATION)


def _skip_space(text: str, pos: int, end: int) -> int:
    while is_space(_char(text, pos, end)):
        pos += 1
    return pos


def _parse_attribute(text: str, pos: int, end: int) -> _Attribute | None:
    if pos == end:
        return None
    if not is_space(_char(text, pos, end)):
        raise XmlDeclError(pos, "expected white space")
    pos = _skip_space(text, pos, end)
    if pos == end:
        return None

    name_pos = pos
    while True:
        c = _char(text, pos, end)
        if c == "":
            raise XmlDeclError(pos, "unexpected character in name")
        if c == "=":
            name_end = pos
            break
        if is_space(c):
            name_end = pos
            pos = _skip_space(text, pos, end)
            if _char(text, pos, end) != "=":
                raise XmlDeclError(pos, "expected '='")
            break
        pos += 1
    if pos == name_pos:
        raise XmlDeclError(pos, "empty name")

    pos = _skip_space(text, pos + 1, end)
    quote = _char(text, pos, end)
    if quote not in ('"', "'") or quote == "":
        raise XmlDeclError(pos, "expected quoted value")
    pos += 1
    value_pos = pos
    while True:
        c = _char(text, pos, end)
        if c == quote:
            break
        if not _is_value_char(c):
            raise XmlDeclError(pos, "invalid character in value")
        pos += 1
    return _Attribute(
        text[name_pos:name_end], text[value_pos:pos], name_pos, value_pos, pos + 1
    )


def parse_pseudo_attribute(text: str, pos: int = 0) -> _Attribute | None:
    """Parse one ``S name = "value"`` pseudo-attribute starting at ``pos``.

    Returns None if only optional white space remains; otherwise a tuple of
    name, value, name position, value position and the offset just past the
    closing quote.  Raises XmlDeclError on malformed input.
    """
    return _parse_attribute(text, pos, len(text))


def parse_xml_decl(text: str, is_general_text_entity: bool = False) -> XmlDecl:
    """Parse a whole ``<?xml ... ?>`` declaration.

    With ``is_general_text_entity`` the text is read as a text declaration:
    the version is optional, the encoding is required and standalone is
    not allowed.
    """
    if not (text.startswith(_OPEN) and text.endswith(_CLOSE)) or len(text) < len(
        _OPEN
    ) + len(_CLOSE):
        raise XmlDeclError(0, "not an XML declaration")
    start = len(_OPEN)
    end = len(text) - len(_CLOSE)

    attr = _parse_attribute(text, start, end)
    if attr is None:
        raise XmlDeclError(start, "empty declaration")

    version: str | None = None
    if attr.name != "version":
        if not is_general_text_entity:
            raise XmlDeclError(attr.name_pos, "expected version")
    else:
        version = attr.value
        previous_end = attr.end
        attr = _parse_attribute(text, attr.end, end)
        if attr is None:
            if is_general_text_entity:
                raise XmlDeclError(previous_end, "text declaration needs an encoding")
            return XmlDecl(version=version)

    encoding: str | None = None
    if attr.name == "encoding":
        first = _char(text, attr.value_pos, end)
        if not (first.isascii() and first.isalpha()):
            raise XmlDeclError(attr.value_pos, "encoding name must start with a letter")
        encoding = attr.value
        attr = _parse_attribute(text, attr.end, end)
        if attr is None:
            return XmlDecl(version=version, encoding=encoding)

    if attr.name != "standalone" or is_general_text_entity:
        raise XmlDeclError(attr.name_pos, "unexpected pseudo-attribute")
    if attr.value == "yes":
        standalone = True
    elif attr.value == "no":
        standalone = False
    else:
        raise XmlDeclError(attr.value_pos, "standalone must be 'yes' or 'no'")

    pos = _skip_space(text, attr.end, end)
    if pos != end:
        raise XmlDeclError(pos, "trailing characters")
    return XmlDecl(version=version, encoding=encoding, standalone=standalone)