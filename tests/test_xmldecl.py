import pytest

from xmltoken.xmldecl import (
    XmlDecl,
    XmlDeclError,
    parse_pseudo_attribute,
    parse_xml_decl,
)


def test_version_only():
    assert parse_xml_decl('<?xml version="1.0"?>') == XmlDecl(version="1.0")


def test_full_declaration():
    decl = parse_xml_decl('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')
    assert decl == XmlDecl(version="1.0", encoding="UTF-8", standalone=True)


def test_standalone_no():
    decl = parse_xml_decl("<?xml version='1.0' standalone='no'?>")
    assert decl.standalone is False
    assert decl.encoding is None


def test_spaces_around_equals_and_trailing_space():
    decl = parse_xml_decl('<?xml version = "1.0"  encoding =\t"ISO-8859-1"  ?>')
    assert decl.version == "1.0"
    assert decl.encoding == "ISO-8859-1"


def test_text_declaration_without_version():
    decl = parse_xml_decl('<?xml encoding="utf-8"?>', is_general_text_entity=True)
    assert decl == XmlDecl(encoding="utf-8")


def test_text_declaration_with_version():
    decl = parse_xml_decl(
        '<?xml version="1.0" encoding="utf-8"?>', is_general_text_entity=True
    )
    assert decl == XmlDecl(version="1.0", encoding="utf-8")


def test_document_declaration_requires_version():
    text = '<?xml encoding="utf-8"?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text)
    assert info.value.position == text.index("encoding")


def test_text_declaration_requires_encoding():
    text = '<?xml version="1.0"?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text, is_general_text_entity=True)
    assert info.value.position == text.index("?>")


def test_text_declaration_rejects_standalone():
    text = '<?xml encoding="utf-8" standalone="yes"?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text, is_general_text_entity=True)
    assert info.value.position == text.index("standalone")


def test_bad_standalone_value():
    text = '<?xml version="1.0" standalone="maybe"?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text)
    assert info.value.position == text.index("maybe")


def test_encoding_must_start_with_letter():
    text = '<?xml version="1.0" encoding="8859"?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text)
    assert info.value.position == text.index("8859")


def test_empty_encoding_rejected():
    text = '<?xml version="1.0" encoding=""?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text)
    assert info.value.position == text.index('""') + 1


def test_empty_declaration():
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl("<?xml?>")
    assert info.value.position == len("<?xml")


def test_missing_space_between_attributes():
    text = '<?xml version="1.0"encoding="utf-8"?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text)
    assert info.value.position == text.index("encoding")


def test_unknown_attribute():
    text = '<?xml version="1.0" foo="bar"?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text)
    assert info.value.position == text.index("foo")


def test_trailing_garbage_after_standalone():
    text = '<?xml version="1.0" standalone="yes" x?>'
    with pytest.raises(XmlDeclError) as info:
        parse_xml_decl(text)
    assert info.value.position == text.index(" x") + 1


def test_not_a_declaration():
    with pytest.raises(XmlDeclError):
        parse_xml_decl('<?pi version="1.0"?>')


def test_pseudo_attribute_basic():
    text = " a='b'"
    attr = parse_pseudo_attribute(text, 0)
    assert attr.name == "a"
    assert attr.value == "b"
    assert attr.name_pos == text.index("a")
    assert attr.value_pos == text.index("b")
    assert attr.end == len(text)


def test_pseudo_attribute_only_space():
    assert parse_pseudo_attribute("   ", 0) is None
    assert parse_pseudo_attribute("", 0) is None


def test_pseudo_attribute_requires_leading_space():
    with pytest.raises(XmlDeclError) as info:
        parse_pseudo_attribute("x='1'", 0)
    assert info.value.position == 0


def test_pseudo_attribute_invalid_value_character():
    text = ' v="1 0"'
    with pytest.raises(XmlDeclError) as info:
        parse_pseudo_attribute(text, 0)
    assert info.value.position == text.index("1 0") + 1


def test_pseudo_attribute_non_ascii_name():
    text = " n\u00e9='1'"
    with pytest.raises(XmlDeclError) as info:
        parse_pseudo_attribute(text, 0)
    assert info.value.position == text.index("\u00e9")


def test_pseudo_attribute_unterminated_value():
    text = ' v="abc'
    with pytest.raises(XmlDeclError) as info:
        parse_pseudo_attribute(text, 0)
    assert info.value.position == len(text)


def test_pseudo_attribute_chain():
    text = ' a="1" b=\'2\''
    first = parse_pseudo_attribute(text, 0)
    second = parse_pseudo_attribute(text, first.end)
    assert (first.name, first.value) == ("a", "1")
    assert (second.name, second.value) == ("b", "2")
    assert parse_pseudo_attribute(text, second.end) is None


def test_error_is_value_error():
    with pytest.raises(ValueError):
        parse_xml_decl('<?xml version=1.0?>')