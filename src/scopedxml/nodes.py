# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""The node tree that :mod:`scopedxml.serializer` writes out.

All node classes are immutable. Namespace scopes are persistent linked
chains: a child element's scope usually is its parent's scope, or a
new link whose ``parent`` is the parent's scope. Chains are never
copied.
"""

from __future__ import annotations

__all__ = [
    "CDATA",
    "EMPTY_SCOPE",
    "Comment",
    "Element",
    "EmptyNamespaceBinding",
    "EntityRef",
    "NamespaceBinding",
    "Node",
    "PrefixedNamespaceBinding",
    "ProcInstr",
    "QName",
    "Text",
    "UnprefixedNamespaceBinding",
]

import collections.abc as cabc
import dataclasses
import types
import typing as t

from scopedxml import escaping


class _BaseBinding:
    """Operations shared by all links of a namespace scope chain."""

    __slots__ = ()

    prefix: str | None
    uri: str
    parent: NamespaceBinding

    def __iter__(self) -> cabc.Iterator[NamespaceBinding]:
        """Iterate over the bindings, innermost first."""
        link: NamespaceBinding = self  # type: ignore[assignment]
        while not isinstance(link, EmptyNamespaceBinding):
            yield link
            link = link.parent

    def find_by_prefix(self, prefix: str | None) -> NamespaceBinding | None:
        """Find the nearest binding for ``prefix``.

        An empty or missing prefix looks up the default namespace. If
        no default namespace is declared anywhere in the chain, the
        :data:`EMPTY_SCOPE` terminator is returned. For a non-empty
        prefix that is not bound at all, the result is None.
        """
        if not prefix:
            for link in self:
                if isinstance(link, UnprefixedNamespaceBinding):
                    return link
            return EMPTY_SCOPE

        for link in self:
            if link.prefix == prefix:
                return link
        return None

    def find_by_uri(self, uri: str) -> NamespaceBinding | None:
        """Find the nearest binding for the namespace ``uri``."""
        for link in self:
            if link.uri == uri:
                return link
        return None

    def to_list(self) -> list[NamespaceBinding]:
        """Return all bindings, from the outermost to the innermost."""
        links = list(self)
        links.reverse()
        return links

    def to_dict(self) -> dict[str | None, str]:
        """Map each visible prefix to its namespace URI.

        The default namespace is stored under the key None, unless it
        is "no namespace".
        """
        result: dict[str | None, str] = {}
        for link in self.to_list():
            result[link.prefix] = link.uri
        if not result.get(None):
            result.pop(None, None)
        return result

    def bind(self, prefix: str | None, uri: str) -> NamespaceBinding:
        """Create a new binding nested inside this scope."""
        parent: NamespaceBinding = self  # type: ignore[assignment]
        if not prefix:
            return UnprefixedNamespaceBinding(uri, parent)
        return PrefixedNamespaceBinding(prefix, uri, parent)


@dataclasses.dataclass(frozen=True, repr=False)
class EmptyNamespaceBinding(_BaseBinding):
    """The end of every scope chain; binds nothing."""

    @property
    def prefix(self) -> None:  # type: ignore[override]
        return None

    @property
    def uri(self) -> str:  # type: ignore[override]
        return ""

    @property
    def parent(self) -> NamespaceBinding:
        raise AttributeError("The empty scope has no parent")

    def __repr__(self) -> str:
        return "EMPTY_SCOPE"


EMPTY_SCOPE = EmptyNamespaceBinding()
"""The shared scope chain terminator."""


@dataclasses.dataclass(frozen=True)
class UnprefixedNamespaceBinding(_BaseBinding):
    """Declares the default namespace.

    An empty ``uri`` resets the default namespace to "no namespace".
    """

    uri: str  # type: ignore[misc]
    parent: NamespaceBinding = EMPTY_SCOPE  # type: ignore[misc]

    @property
    def prefix(self) -> None:  # type: ignore[override]
        return None


@dataclasses.dataclass(frozen=True)
class PrefixedNamespaceBinding(_BaseBinding):
    """Binds ``prefix`` to the namespace ``uri``."""

    prefix: str  # type: ignore[misc]
    uri: str  # type: ignore[misc]
    parent: NamespaceBinding = EMPTY_SCOPE  # type: ignore[misc]

    def __post_init__(self) -> None:
        if not self.prefix:
            raise ValueError("Prefixed bindings need a non-empty prefix")
        if not self.uri:
            raise ValueError(f"Cannot bind prefix {self.prefix!r} to no URI")


NamespaceBinding: t.TypeAlias = (
    EmptyNamespaceBinding
    | UnprefixedNamespaceBinding
    | PrefixedNamespaceBinding
)


@dataclasses.dataclass(frozen=True)
class QName:
    """An attribute name with an optional namespace prefix."""

    prefix: str | None
    name: str

    @property
    def name_for_attribute(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.name}"
        return self.name

    def __str__(self) -> str:
        return self.name_for_attribute


@dataclasses.dataclass(frozen=True)
class Text:
    """Character data, escaped on output."""

    text: str

    def __str__(self) -> str:
        return escaping.escape_text(self.text)


@dataclasses.dataclass(frozen=True)
class CDATA:
    """A CDATA section."""

    text: str

    def __str__(self) -> str:
        return f"<![CDATA[{escaping.escape_cdata(self.text)}]]>"


@dataclasses.dataclass(frozen=True)
class Comment:
    text: str

    def __str__(self) -> str:
        return f"<!--{self.text}-->"


@dataclasses.dataclass(frozen=True)
class ProcInstr:
    target: str
    data: str = ""

    def __str__(self) -> str:
        if self.data:
            return f"<?{self.target} {self.data}?>"
        return f"<?{self.target}?>"


@dataclasses.dataclass(frozen=True)
class EntityRef:
    """A reference to a named entity, like ``&nbsp;``."""

    name: str

    def __str__(self) -> str:
        return f"&{self.name};"


@dataclasses.dataclass(frozen=True)
class Element:
    """An XML element.

    Parameters
    ----------
    prefix
        The namespace prefix used in this element's tag, or None.
    name
        The local name.
    attrs
        The attributes, in output order. Keys are either plain strings,
        which are written verbatim, or :class:`QName` instances.
    scope
        All namespace bindings visible at this element, including the
        ones inherited from its ancestors.
    children
        The child nodes.
    """

    prefix: str | None
    name: str
    attrs: cabc.Mapping[QName | str, str] = dataclasses.field(
        default_factory=dict
    )
    scope: NamespaceBinding = EMPTY_SCOPE
    children: tuple[Node, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))
        for child in self.children:
            if not isinstance(child, NODE_TYPES):
                raise TypeError(
                    f"Invalid child of {self.qname!r}:"
                    f" {type(child).__name__}"
                )
        if not isinstance(self.attrs, types.MappingProxyType):
            object.__setattr__(
                self, "attrs", types.MappingProxyType(dict(self.attrs))
            )

    @property
    def qname(self) -> str:
        """The tag name as written in the source, including the prefix."""
        if self.prefix:
            return f"{self.prefix}:{self.name}"
        return self.name

    @property
    def is_empty(self) -> bool:
        return not self.children


Node: t.TypeAlias = Element | Text | CDATA | Comment | ProcInstr | EntityRef
NODE_TYPES = (Element, Text, CDATA, Comment, ProcInstr, EntityRef)
