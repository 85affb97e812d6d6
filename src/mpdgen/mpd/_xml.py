#!/usr/bin/python3

import copy
import dataclasses
import re
import xml.etree.ElementTree as ElementTree
from typing import Iterable

XML_VERSION = "1.0"

# characters outside of the XML 1.0 'Char' production
_RE_ILLEGAL_XML_CHARS = re.compile("[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]")


class XmlNodeError(ValueError):
    """
    Raised when a node cannot be inserted into a document, such as when its text or attribute
    values contain characters that cannot be represented in XML.
    """


def create_element(tag: str, attributes: dict[str, str] | None = None) -> ElementTree.Element:
    element = ElementTree.Element(tag)
    if attributes:
        set_attributes(element, attributes)
    return element


def set_attributes(element: ElementTree.Element, attributes: dict[str, str]) -> None:
    # attributes are written in insertion order, so the order here is the order in the output
    for name, value in attributes.items():
        element.set(name, value)


def set_text(element: ElementTree.Element, text: str) -> None:
    element.text = text


def _find_illegal_content(element: ElementTree.Element) -> str | None:
    for node in element.iter():
        values: Iterable[str | None] = (node.text, node.tail, *node.attrib.values())
        for value in values:
            if value and _RE_ILLEGAL_XML_CHARS.search(value):
                return f"<{node.tag}> contains characters not allowed in XML: {value!r}"
    return None


def add_child(parent: ElementTree.Element, child: ElementTree.Element | None) -> None:
    """
    Appends a child node to the parent, rejecting subtrees that would produce a malformed
    document.  The parent is left untouched if the child is rejected.
    """
    if child is None:
        raise XmlNodeError(f"Cannot append a missing node to <{parent.tag}>")
    reason = _find_illegal_content(child)
    if reason:
        raise XmlNodeError(reason)
    parent.append(child)


@dataclasses.dataclass
class MpdDocument:
    # the comment is placed as a document-level sibling preceding the root element
    root: ElementTree.Element
    comment: str | None = None
    version: str = XML_VERSION

    def to_string(self) -> str:
        """
        Serializes the document as indented UTF-8 XML text, including the XML declaration.
        Indentation is applied to a copy, so the root element is left as-is.
        """
        root = copy.deepcopy(self.root)
        ElementTree.indent(root, space="  ")
        parts = [f'<?xml version="{self.version}" encoding="UTF-8"?>']
        if self.comment is not None:
            parts.append(
                ElementTree.tostring(ElementTree.Comment(self.comment), encoding="unicode")
            )
        parts.append(ElementTree.tostring(root, encoding="unicode"))
        return "\n".join(parts) + "\n"
