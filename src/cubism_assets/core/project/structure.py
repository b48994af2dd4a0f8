from __future__ import annotations

"""
Structural Patching Primitives.

Find-or-create and find-or-set operations over an ElementTree document.
Tags are compared by local name within the parent's namespace, so the same
calls work for namespaced (legacy MSBuild) and namespace-free (SDK-style)
descriptors. Nodes that are not targeted keep their position, attributes
and text.
"""

from typing import Iterator, Sequence
from xml.etree import ElementTree as ET


def local_name(tag: str) -> str:
    """Strip the '{namespace}' prefix from a tag."""
    if tag[:1] == "{":
        return tag.rsplit("}", 1)[1]
    return tag


def namespace_prefix(tag: str) -> str:
    """Return the '{namespace}' part of a tag, or '' when it has none."""
    if tag[:1] == "{":
        return tag.rsplit("}", 1)[0] + "}"
    return ""


def is_element(node: ET.Element) -> bool:
    """Comments and processing instructions carry a callable tag."""
    return isinstance(node.tag, str)


def children_named(parent: ET.Element, name: str) -> Iterator[ET.Element]:
    """Yield the direct element children whose local name is 'name'."""
    for child in parent:
        if is_element(child) and local_name(child.tag) == name:
            yield child


def ensure_child_named(parent: ET.Element, name: str) -> ET.Element:
    """
    Return the first child named 'name', creating and appending it if absent.

    A created child is placed in the parent's namespace, has no value, and
    takes over the indentation of the previous last child.

    Args:
        parent: Node to search.
        name: Local tag name.

    Returns:
        ET.Element: The existing or newly appended child.
    """
    for child in children_named(parent, name):
        return child

    node = ET.Element(namespace_prefix(parent.tag) + name)
    if len(parent):
        last = parent[-1]
        node.tail = last.tail
        last.tail = parent.text
    parent.append(node)
    return node


def set_scalar_value(node: ET.Element, value: str) -> None:
    """Overwrite the node's text value unconditionally."""
    node.text = value


def section_matches(node: ET.Element, markers: Sequence[str]) -> bool:
    """True if the serialized node contains every marker substring."""
    if not is_element(node):
        return False
    serialized = ET.tostring(node, encoding="unicode")
    return all(marker in serialized for marker in markers)
