# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0

import pytest

from scopedxml import config


def test_defaults():
    options = config.SerializerOptions()

    assert options.encoding == "UTF-8"
    assert options.declaration is False


def test_from_env_without_variables_uses_defaults():
    assert config.SerializerOptions.from_env({}) == config.SerializerOptions()


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        pytest.param("1", True, id="1"),
        pytest.param("Yes", True, id="yes"),
        pytest.param(" on ", True, id="on"),
        pytest.param("false", False, id="false"),
        pytest.param("0", False, id="0"),
        pytest.param("", False, id="empty"),
    ],
)
def test_from_env_reads_the_declaration_switch(value, expected):
    options = config.SerializerOptions.from_env(
        {config.ENV_DECLARATION: value}
    )

    assert options.declaration is expected


def test_from_env_reads_the_encoding():
    options = config.SerializerOptions.from_env(
        {config.ENV_ENCODING: "ISO-8859-1"}
    )

    assert options.encoding == "ISO-8859-1"


def test_from_env_reads_os_environ(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv(config.ENV_DECLARATION, "true")
    monkeypatch.delenv(config.ENV_ENCODING, raising=False)

    options = config.SerializerOptions.from_env()

    assert options == config.SerializerOptions("UTF-8", declaration=True)


def test_from_env_rejects_invalid_booleans():
    with pytest.raises(ValueError, match=config.ENV_DECLARATION):
        config.SerializerOptions.from_env({config.ENV_DECLARATION: "maybe"})


def test_unknown_encodings_are_rejected():
    with pytest.raises(LookupError):
        config.SerializerOptions("no-such-encoding")
