# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""Escaping routines for attribute values and character data.

These are the only places where user-provided strings are turned into
markup. Element and attribute *names* are never escaped; they are
expected to already be valid XML names.
"""

from __future__ import annotations

__all__ = [
    "escape_attribute",
    "escape_cdata",
    "escape_text",
    "quote_attribute",
]

import html.entities
import re

ESCAPE_CHARS = r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F{}]"
P_ESCAPE_TEXT = re.compile(ESCAPE_CHARS.format("\r&<>"))
P_ESCAPE_ATTR_DQUOTE = re.compile(ESCAPE_CHARS.format('\t\n\r"&<'))
P_ESCAPE_ATTR_SQUOTE = re.compile(ESCAPE_CHARS.format("\t\n\r'&<"))

CDATA_END = "]]>"


def escape_text(string: str, /) -> str:
    """Escape ``string`` for use as character data.

    ``&``, ``<`` and ``>`` are replaced by their entities, carriage
    returns and control characters by character references. Tabs and
    line feeds are kept as they are.
    """
    return _escape(string, pattern=P_ESCAPE_TEXT)


def escape_attribute(string: str, /, *, quote: str = '"') -> str:
    """Escape ``string`` for use inside an attribute value.

    Whitespace other than the plain space is written as a character
    reference, so that attribute value normalization in the reading
    parser does not change the value.
    """
    if quote == '"':
        pattern = P_ESCAPE_ATTR_DQUOTE
    elif quote == "'":
        pattern = P_ESCAPE_ATTR_SQUOTE
    else:
        raise ValueError(f"Invalid attribute quote character: {quote!r}")
    return _escape(string, pattern=pattern)


def quote_attribute(value: str, /) -> str:
    """Quote and escape an attribute value.

    Double quotes are used, unless the value contains a double quote
    but no single quote. In that case it is wrapped in single quotes,
    which avoids having to escape anything.

    Examples
    --------
    >>> quote_attribute("1")
    '"1"'
    >>> quote_attribute('say "hi"')
    '\\'say "hi"\\''
    >>> quote_attribute("a < b & 'c'")
    '"a &lt; b &amp; \\'c\\'"'
    """
    if '"' in value and "'" not in value:
        quote = "'"
    else:
        quote = '"'
    return "".join((quote, escape_attribute(value, quote=quote), quote))


def escape_cdata(string: str, /) -> str:
    """Split ``]]>`` sequences so that ``string`` fits in a CDATA section."""
    return string.replace(CDATA_END, "]]]]><![CDATA[>")


def _escape(string: str, *, pattern: re.Pattern[str]) -> str:
    return pattern.sub(_escape_char, string)


def _escape_char(
    match: re.Match[str], *, ord_low: int = ord(" "), ord_high: int = ord("~")
) -> str:
    char = match.group(0)
    assert len(char) == 1
    if ord_low <= ord(char) <= ord_high:
        name = html.entities.codepoint2name.get(ord(char))
        if name is not None:
            return f"&{name};"
    return f"&#x{ord(char):X};"
