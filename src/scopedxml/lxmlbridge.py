# SPDX-FileCopyrightText: Copyright scopedxml contributors
# SPDX-License-Identifier: Apache-2.0
"""Build :mod:`scopedxml.nodes` trees from :mod:`lxml` trees.

lxml keeps the namespace map of every element, which includes the
bindings inherited from its ancestors. The conversion turns these maps
into linked scope chains, where every element only adds the bindings
that differ from its parent's map, and shares the rest of the chain.
"""

from __future__ import annotations

__all__ = [
    "XML_NAMESPACE",
    "effective_namespaces",
    "from_lxml",
    "parse_file",
    "parse_string",
]

import collections.abc as cabc
import logging
import os
import typing as t

from lxml import etree

from scopedxml import nodes

LOGGER = logging.getLogger(__name__)

XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


def from_lxml(
    tree: etree._Element | etree._ElementTree, /
) -> nodes.Element:
    """Convert an lxml element (or element tree) into an Element.

    Comments, processing instructions and text outside of the root
    element are not part of the result.
    """
    if isinstance(tree, etree._ElementTree):
        tree = tree.getroot()
    if not isinstance(tree, etree._Element) or not isinstance(tree.tag, str):
        raise TypeError(f"Expected an XML element, got {tree!r}")
    return _convert_element(tree, nodes.EMPTY_SCOPE, {})


def _convert_element(
    element: etree._Element,
    parent_scope: nodes.NamespaceBinding,
    parent_nsmap: cabc.Mapping[str | None, str],
) -> nodes.Element:
    nsmap = effective_namespaces(element)
    scope = parent_scope
    if None in parent_nsmap and None not in nsmap:
        scope = scope.bind(None, "")
    for prefix, uri in nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            scope = scope.bind(prefix, uri)

    attrs: dict[nodes.QName | str, str] = {}
    for key, value in element.attrib.items():
        attrs[_attribute_key(element, nsmap, key)] = value

    children: list[nodes.Node] = []
    if element.text:
        children.append(nodes.Text(element.text))
    for child in element:
        children.append(_convert_node(child, scope, nsmap))
        if child.tail:
            children.append(nodes.Text(child.tail))

    return nodes.Element(
        element.prefix,
        etree.QName(element).localname,
        attrs,
        scope,
        tuple(children),
    )


def _convert_node(
    node: etree._Element,
    scope: nodes.NamespaceBinding,
    nsmap: cabc.Mapping[str | None, str],
) -> nodes.Node:
    if isinstance(node, etree._Comment):
        return nodes.Comment(node.text or "")
    if isinstance(node, etree._ProcessingInstruction):
        return nodes.ProcInstr(node.target, node.text or "")
    if isinstance(node, etree._Entity):
        return nodes.EntityRef(node.name)
    return _convert_element(node, scope, nsmap)


def _attribute_key(
    element: etree._Element,
    nsmap: cabc.Mapping[str | None, str],
    key: str,
) -> nodes.QName | str:
    name = etree.QName(key)
    if not name.namespace:
        return name.localname
    if name.namespace == XML_NAMESPACE:
        return nodes.QName("xml", name.localname)

    for prefix, uri in nsmap.items():
        if prefix and uri == name.namespace:
            return nodes.QName(prefix, name.localname)
    LOGGER.error(
        "Namespace %r not found on element %r", name.namespace, element.tag
    )
    raise ValueError(f"Namespace not found: {name.namespace!r}")


def effective_namespaces(
    element: etree._Element, /
) -> dict[str | None, str]:
    """Return the namespace bindings in effect at ``element``.

    The default namespace is stored under the key None. It is left out
    if no default namespace applies. For unprefixed elements it is taken
    from the tag, which also covers ``xmlns=""`` undeclarations.
    """
    nsmap = {k: v for k, v in element.nsmap.items() if k is not None and v}
    if element.prefix is None:
        default = etree.QName(element).namespace
    else:
        default = element.nsmap.get(None)
    if default:
        nsmap[None] = default
    return nsmap


def parse_string(text: str | bytes, /) -> nodes.Element:
    """Parse an XML document and convert its root element."""
    if isinstance(text, str):
        text = text.encode("utf-8")
    return from_lxml(etree.fromstring(text))


def parse_file(path: str | os.PathLike[str] | t.BinaryIO, /) -> nodes.Element:
    """Parse an XML file and convert its root element."""
    if isinstance(path, os.PathLike):
        path = os.fspath(path)
    return from_lxml(etree.parse(path))
