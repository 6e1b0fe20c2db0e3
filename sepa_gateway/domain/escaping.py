"""XML escaping for user-supplied free text"""

import re
from typing import Optional
from xml.sax.saxutils import escape

# escape() always handles &, < and > first, so existing entities are never re-escaped
_QUOTE_ENTITIES = {'"': "&quot;", "'": "&#39;"}

# Anything outside the XML 1.0 Char production (control characters, lone surrogates, U+FFFE/U+FFFF)
_INVALID_XML_CHARS = re.compile("[^\u0009\u000a\u000d\u0020-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def strip_invalid_xml_chars(text: str) -> str:
    return _INVALID_XML_CHARS.sub("", text)


def escape_xml_text(text: str, max_length: Optional[int] = None) -> str:
    """
    Escape the five reserved XML characters; apply exactly once per field.

    Characters XML cannot carry are dropped, and max_length (the schema's
    MaxNNText limit) is applied to the raw text before escaping.
    """
    if text is None:
        return ""
    cleaned = strip_invalid_xml_chars(str(text))
    if max_length is not None:
        cleaned = cleaned[:max_length]
    return escape(cleaned, _QUOTE_ENTITIES)
