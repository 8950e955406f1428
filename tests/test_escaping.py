# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0

import pytest

from scopedxml import escaping


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        pytest.param("plain", '"plain"', id="plain"),
        pytest.param("", '""', id="empty"),
        pytest.param("a&b<c>d", '"a&amp;b&lt;c>d"', id="markup"),
        pytest.param('say "hi"', "'say \"hi\"'", id="double-quotes"),
        pytest.param("it's", '"it\'s"', id="single-quote"),
        pytest.param(
            "both \" and '", '"both &quot; and \'"', id="both-quotes"
        ),
        pytest.param("a\tb\nc\rd", '"a&#x9;b&#xA;c&#xD;d"', id="whitespace"),
        pytest.param("\x01", '"&#x1;"', id="control-char"),
    ],
)
def test_quote_attribute(value, expected):
    assert escaping.quote_attribute(value) == expected


def test_escape_attribute_rejects_invalid_quote_characters():
    with pytest.raises(ValueError):
        escaping.escape_attribute("x", quote="`")


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("a < b", "a &lt; b", id="lt"),
        pytest.param("]]> & co", "]]&gt; &amp; co", id="gt-amp"),
        pytest.param('"quoted"', '"quoted"', id="quotes-untouched"),
        pytest.param("line\n\tindented", "line\n\tindented", id="newline"),
        pytest.param("crlf\r\n", "crlf&#xD;\n", id="carriage-return"),
    ],
)
def test_escape_text(text, expected):
    assert escaping.escape_text(text) == expected


def test_escape_cdata_splits_the_end_marker():
    assert escaping.escape_cdata("a]]>b") == "a]]]]><![CDATA[>b"
