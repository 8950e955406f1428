# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""Serializer options and their environment variable overrides."""

from __future__ import annotations

__all__ = ["DEFAULT_ENCODING", "SerializerOptions"]

import codecs
import dataclasses
import logging
import os
import typing as t

LOGGER = logging.getLogger(__name__)

DEFAULT_ENCODING = "UTF-8"

ENV_ENCODING = "SCOPEDXML_ENCODING"
ENV_DECLARATION = "SCOPEDXML_DECLARATION"

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off", ""})


@dataclasses.dataclass(frozen=True)
class SerializerOptions:
    """How documents are written.

    Attributes
    ----------
    encoding
        The character encoding. It is announced in the XML declaration
        and used to encode output written to byte streams and files.
    declaration
        Whether to start documents with an XML declaration.
    """

    encoding: str = DEFAULT_ENCODING
    declaration: bool = False

    def __post_init__(self) -> None:
        codecs.lookup(self.encoding)

    @classmethod
    def from_env(
        cls, environ: t.Mapping[str, str] | None = None
    ) -> SerializerOptions:
        """Build options from ``SCOPEDXML_*`` environment variables.

        Variables that are not set fall back to the defaults.
        """
        if environ is None:
            environ = os.environ

        encoding = environ.get(ENV_ENCODING) or DEFAULT_ENCODING
        declaration = _parse_bool(
            ENV_DECLARATION, environ.get(ENV_DECLARATION, "0")
        )
        LOGGER.debug(
            "Serializer options from environment: encoding=%s, declaration=%s",
            encoding,
            declaration,
        )
        return cls(encoding=encoding, declaration=declaration)


def _parse_bool(name: str, value: str) -> bool:
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"Invalid boolean value for {name}: {value!r}")
