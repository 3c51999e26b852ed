# xmltoken

Low-level building blocks for reading XML from raw bytes.

- **`xmltoken.chars`**: character classification and encoding of code points
  (`is_space`, `check_char_ref_number`, `is_invalid_utf8`, `utf8_encode`,
  `utf16_encode`).
- **`xmltoken.convert`**: bounded converters from UTF-8, UTF-16 (either byte
  order), ISO-8859-1 and US-ASCII input into UTF-8 bytes or UTF-16 code
  units (`utf8_to_utf8`, `utf8_to_utf16`, `latin1_to_utf8`,
  `latin1_to_utf16`, `ascii_to_utf8`, `utf16_to_utf8`, `utf16_to_utf16`,
  `trim_to_complete_utf8`). Each converter returns a `Conversion` with the
  fields `result`, `consumed` and `output` and a `completed` property. The
  `result` is a `ConvertResult`: `COMPLETED`, `INPUT_INCOMPLETE` (a partial
  character at the end of the input) or `OUTPUT_EXHAUSTED` (the output limit
  was reached). A character is never split across the limit.
- **`xmltoken.encoding`**: the encodings an XML processor must know
  (`KnownEncoding`, `Encoding`, `encoding_index`, `lookup_encoding`) and
  detection of a document's encoding from its first bytes and any externally
  declared encoding (`detect_encoding`, `ScanState`, `DetectOutcome`,
  `Detection`). An `Encoding` converts with `to_utf8` and `to_utf16`.
- **`xmltoken.xmldecl`**: parsing of `<?xml ...?>` declarations and text
  declarations (`parse_xml_decl`, `parse_pseudo_attribute`, `XmlDecl`,
  `XmlDeclError`).

The package has no runtime dependencies.

## Installing

```
pip install .
```

## Examples

Encoding and checking code points:

```python
from xmltoken.chars import utf8_encode, utf16_encode, check_char_ref_number

utf8_encode(0xE9)              # b"\xc3\xa9"
utf16_encode(0x1F600)          # (0xD83D, 0xDE00)
check_char_ref_number(0x41)    # 0x41
check_char_ref_number(0xFFFE)  # raises ValueError
```

Converting with a bounded output:

```python
from xmltoken.convert import utf16_to_utf8, ConvertResult

conv = utf16_to_utf8(b"\x00A\x00B", limit=1, big_endian=True)
conv.result is ConvertResult.OUTPUT_EXHAUSTED  # True
conv.consumed, conv.output                      # (2, b"A")
```

Looking up an encoding by name (ASCII letters are matched without regard to
case; an unknown name raises `LookupError`, and `None` gives UTF-8):

```python
from xmltoken.encoding import lookup_encoding

enc = lookup_encoding("utf-16le")
enc.to_utf8(b"A\x00")  # Conversion(result=COMPLETED, consumed=2, output=b"A")
```

Detecting the encoding of a document:

```python
from xmltoken.encoding import detect_encoding, DetectOutcome, ScanState

detection = detect_encoding(b"\xef\xbb\xbf<doc/>", None, ScanState.PROLOG)
detection.outcome is DetectOutcome.BOM  # True
detection.encoding.name, detection.bom_length  # ("UTF-8", 3)
```

Parsing an XML declaration:

```python
from xmltoken.xmldecl import parse_xml_decl

decl = parse_xml_decl('<?xml version="1.0" encoding="UTF-8" standalone="yes"?>')
decl.version, decl.encoding, decl.standalone  # ("1.0", "UTF-8", True)
```

With `is_general_text_entity=True` the text is read as a text declaration:
the version is optional, the encoding is required and `standalone` is not
allowed. A malformed declaration raises `XmlDeclError`, a `ValueError` whose
`position` attribute is the offset of the offending character.

## What the package does not do

It is not an XML parser. It does not split a document into tags, text,
comments or other tokens, does not build a tree and reports no parsing
events. `ScanState` only tells `detect_encoding` whether it is looking at a
document or an external entity. Encodings other than the six that
`KnownEncoding` names are not supported.

## Running the tests

```
pip install .[test]
pytest
```