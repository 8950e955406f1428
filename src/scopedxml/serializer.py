# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""A namespace-aware XML serializer.

Every :class:`~scopedxml.nodes.Element` knows all namespace bindings
that are visible at its position in the tree. This module writes such
a tree back out, declaring a binding with ``xmlns`` or ``xmlns:prefix``
only where an ancestor has not already declared it. Reading the output
with a conforming XML parser results in the same effective namespaces
on every element.

No whitespace is added or removed: the output contains exactly the
tree's nodes.
"""

from __future__ import annotations

__all__ = [
    "HasWrite",
    "XMLSerializer",
    "serialize",
    "serialize_document",
    "to_bytes",
    "to_string",
    "xml_declaration",
]

import contextlib
import io
import logging
import os
import typing as t

from scopedxml import config, escaping, nodes

LOGGER = logging.getLogger(__name__)


@t.runtime_checkable
class HasWrite(t.Protocol):
    """A simple protocol to check for a writable file-like object."""

    def write(self, chunk: t.Any, /) -> t.Any: ...


Destination: t.TypeAlias = "HasWrite | os.PathLike[str] | str"


class _ScopeStacks:
    """Namespace declarations made by the ancestors of the current element.

    Both stacks hold one entry per open element. ``declared`` holds the
    prefixed bindings that were written on that element.
    ``default_overrides`` holds the default namespace URI if the
    element changed it, or None if it kept its parent's.
    """

    __slots__ = ("declared", "default_overrides")

    def __init__(self) -> None:
        self.declared: list[list[tuple[str, str]]] = []
        self.default_overrides: list[str | None] = []

    @property
    def depth(self) -> int:
        return len(self.declared)

    @property
    def current_default(self) -> str:
        for uri in reversed(self.default_overrides):
            if uri is not None:
                return uri
        return ""

    def is_declared(self, prefix: str, uri: str) -> bool:
        """Check whether ``prefix`` is bound to ``uri`` in the output.

        All ancestors are searched, nearest first. A declaration of the
        same prefix with another URI on a nearer ancestor shadows the
        ones further up.
        """
        for level in reversed(self.declared):
            for declared_prefix, declared_uri in level:
                if declared_prefix == prefix:
                    return declared_uri == uri
        return False

    def push(self, declared: list[tuple[str, str]], default: str | None):
        self.declared.append(declared)
        self.default_overrides.append(default)

    def pop(self) -> None:
        self.declared.pop()
        self.default_overrides.pop()


def serialize(root: nodes.Node, sink: HasWrite, /) -> None:
    """Write ``root`` and its descendants to ``sink``.

    No XML declaration is written, which makes this function suitable
    for embedding fragments into a larger stream.

    Parameters
    ----------
    root
        The node to serialize. Usually an Element, but other nodes are
        accepted as well.
    sink
        A text stream or any other object with a ``write(str)`` method.
        Errors raised by it are propagated unchanged, and output that
        was already written is left as is.
    """
    scopes = _ScopeStacks()
    _serialize_node(sink, root, scopes)
    assert scopes.depth == 0


def _serialize_node(
    sink: HasWrite, node: nodes.Node, scopes: _ScopeStacks
) -> None:
    if isinstance(node, nodes.Element):
        _serialize_element(sink, node, scopes)
    elif isinstance(node, nodes.NODE_TYPES):
        sink.write(str(node))
    else:
        raise TypeError(f"Cannot serialize {type(node).__name__} objects")


def _serialize_element(
    sink: HasWrite, element: nodes.Element, scopes: _ScopeStacks
) -> None:
    binding = element.scope.find_by_prefix(element.prefix)
    if binding is None:
        LOGGER.warning(
            "Prefix %r of element %r is not bound to a namespace",
            element.prefix,
            element.name,
        )
        binding = nodes.EMPTY_SCOPE
    current_default = scopes.current_default

    xmlns = ""
    default: str | None = None
    if isinstance(binding, nodes.PrefixedNamespaceBinding):
        qname = f"{binding.prefix}:{element.name}"
    else:
        qname = element.name
        if binding.uri != current_default:
            default = binding.uri
            xmlns = f' xmlns="{escaping.escape_attribute(binding.uri)}"'

    effective: dict[str, str] = {}
    for link in element.scope.to_list():
        if isinstance(link, nodes.PrefixedNamespaceBinding):
            effective[link.prefix] = link.uri
    new_bindings = [
        (prefix, uri)
        for prefix, uri in effective.items()
        if not scopes.is_declared(prefix, uri)
    ]
    declarations = "".join(
        f' xmlns:{prefix}="{escaping.escape_attribute(uri)}"'
        for prefix, uri in new_bindings
    )

    attributes = " ".join(
        f"{_attribute_name(key)}={escaping.quote_attribute(value)}"
        for key, value in element.attrs.items()
    )
    if attributes:
        attributes = " " + attributes

    scopes.push(new_bindings, default)
    try:
        sink.write(f"<{qname}{xmlns}{declarations}{attributes}")
        if not element.children:
            sink.write("/>")
            return

        sink.write(">")
        for child in element.children:
            _serialize_node(sink, child, scopes)
        sink.write(f"</{qname}>")
    finally:
        scopes.pop()


def _attribute_name(key: nodes.QName | str) -> str:
    if isinstance(key, nodes.QName):
        return key.name_for_attribute
    return key


def xml_declaration(encoding: str = config.DEFAULT_ENCODING) -> str:
    """Build the XML declaration announcing ``encoding``."""
    return f'<?xml version="1.0" encoding="{encoding}" standalone="yes"?>'


def serialize_document(
    root: nodes.Element,
    destination: Destination,
    /,
    *,
    encoding: str = config.DEFAULT_ENCODING,
    declaration: bool = False,
) -> None:
    """Serialize a document into ``destination``.

    Parameters
    ----------
    root
        The root element of the document.
    destination
        One of:

        - A text stream, or any object with a ``write(str)`` method.
          It is the caller's responsibility that the stream's encoding
          matches ``encoding``.
        - A binary stream. The text is encoded with ``encoding``. The
          stream is flushed, but not closed.
        - A path to a file, which will be created or truncated, and
          closed again before this function returns or raises.
    encoding
        The encoding to announce in the XML declaration and to use for
        binary streams and files.
    declaration
        Whether to write an XML declaration before the root element.
    """
    ctx: t.ContextManager[HasWrite]
    if isinstance(destination, str | os.PathLike):
        LOGGER.debug("Writing XML document to file %s", destination)
        ctx = open(  # noqa: SIM115
            destination, "w", encoding=encoding, newline=""
        )
    elif _is_binary(destination):
        LOGGER.debug("Writing XML document to binary stream %r", destination)
        ctx = _text_wrapper(t.cast(t.BinaryIO, destination), encoding)
    elif isinstance(destination, HasWrite):
        ctx = contextlib.nullcontext(destination)
    else:
        raise TypeError(
            f"Cannot write XML to a {type(destination).__name__} object"
        )

    with ctx as sink:
        if declaration:
            sink.write(xml_declaration(encoding))
        serialize(root, sink)


def _is_binary(destination: object) -> bool:
    if isinstance(destination, io.TextIOBase):
        return False
    if isinstance(destination, io.RawIOBase | io.BufferedIOBase):
        return True
    mode = getattr(destination, "mode", None)
    return isinstance(mode, str) and "b" in mode


@contextlib.contextmanager
def _text_wrapper(
    stream: t.BinaryIO, encoding: str
) -> t.Iterator[io.TextIOWrapper]:
    wrapper = io.TextIOWrapper(
        stream,  # type: ignore[arg-type]
        encoding=encoding,
        newline="",
        write_through=True,
    )
    try:
        yield wrapper
    finally:
        wrapper.detach()
        stream.flush()


def to_string(root: nodes.Element, /, *, declaration: bool = False) -> str:
    """Serialize an XML tree as a ``str``.

    Parameters
    ----------
    root
        The root element.
    declaration
        Whether to prepend an XML declaration. It announces UTF-8.
    """
    buffer = io.StringIO()
    serialize_document(root, buffer, declaration=declaration)
    return buffer.getvalue()


def to_bytes(
    root: nodes.Element,
    /,
    *,
    encoding: str = config.DEFAULT_ENCODING,
    declaration: bool = True,
) -> bytes:
    """Serialize an XML tree as ``bytes``.

    At the start of the document, an XML declaration will be inserted
    announcing the used encoding. Pass ``declaration=False`` to inhibit
    this behavior.
    """
    buffer = io.BytesIO()
    serialize_document(
        root, buffer, encoding=encoding, declaration=declaration
    )
    return buffer.getvalue()


class XMLSerializer:
    """Serialize documents with a fixed set of options.

    Examples
    --------
    >>> from scopedxml import nodes
    >>> root = nodes.Element(None, "root")
    >>> XMLSerializer(declaration=True).to_string(root)
    '<?xml version="1.0" encoding="UTF-8" standalone="yes"?><root/>'
    """

    def __init__(
        self,
        encoding: str = config.DEFAULT_ENCODING,
        declaration: bool = False,
    ) -> None:
        self.options = config.SerializerOptions(encoding, declaration)

    @classmethod
    def from_options(cls, options: config.SerializerOptions) -> XMLSerializer:
        return cls(options.encoding, options.declaration)

    @property
    def encoding(self) -> str:
        return self.options.encoding

    @property
    def declaration(self) -> bool:
        return self.options.declaration

    def serialize_document(
        self, root: nodes.Element, destination: Destination
    ) -> None:
        """Write a document, see :func:`serialize_document`."""
        serialize_document(
            root,
            destination,
            encoding=self.encoding,
            declaration=self.declaration,
        )

    def serialize(self, root: nodes.Node, sink: HasWrite) -> None:
        """Write a fragment without declaration, see :func:`serialize`."""
        serialize(root, sink)

    def to_string(self, root: nodes.Element) -> str:
        buffer = io.StringIO()
        self.serialize_document(root, buffer)
        return buffer.getvalue()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(encoding={self.encoding!r},"
            f" declaration={self.declaration!r})"
        )
