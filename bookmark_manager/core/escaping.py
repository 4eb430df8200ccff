"""
Markup escaping helpers.

HTML escaping is used for card fragments, XML escaping for OPML output.
Both escape ``&`` first so that existing entities are escaped exactly once.
"""

import re

# Characters XML 1.0 does not allow anywhere in a document
_XML_INVALID_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


def escape_html(text) -> str:
    """
    Escape HTML special characters.

    Args:
        text: Value to escape (converted with ``str``)

    Returns:
        HTML-escaped text
    """
    if text is None:
        return ""

    text = str(text)
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    text = text.replace('"', "&quot;")
    text = text.replace("'", "&#39;")

    return text


def escape_xml(text) -> str:
    """
    Escape the five XML special characters.

    Args:
        text: Value to escape (converted with ``str``)

    Returns:
        Text safe for XML element content and attribute values; characters
        XML cannot represent are removed
    """
    if text is None:
        return ""

    text = strip_invalid_xml_chars(str(text))
    text = text.replace("&", "&amp;")
    text = text.replace("<", "&lt;")
    text = text.replace(">", "&gt;")
    text = text.replace("'", "&apos;")
    text = text.replace('"', "&quot;")

    return text


def escape_xml_attribute(text) -> str:
    """
    Escape a value for a double-quoted XML attribute.

    Tabs and line breaks become character references, so parsers return
    them unchanged instead of normalizing them to spaces.
    """
    text = escape_xml(text)
    text = text.replace("\t", "&#9;")
    text = text.replace("\n", "&#10;")
    text = text.replace("\r", "&#13;")

    return text


def strip_invalid_xml_chars(text: str) -> str:
    """Remove control characters and code points that XML 1.0 forbids."""
    return _XML_INVALID_CHARS.sub("", text)
