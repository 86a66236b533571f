from __future__ import annotations

# Purpose: Provide archive loading and XPath helpers shared by archive queries.
# Date: 2026-10-19
# Related tests: tests/test_common.py

"""Common helper functions for reading TomoTherapy patient archives."""

from collections.abc import Iterable
from pathlib import Path
from typing import Union

from lxml import etree

from .errors import ArchiveParseError, PlanQueryError

ArchiveNode = Union[etree._Element, etree._ElementTree]


def load_archive(xml_file: Path | str) -> etree._ElementTree:
    """Parse a patient archive XML file into an element tree.

    Args:
        xml_file: Path to the patient archive XML document.

    Returns:
        The parsed document tree.

    Raises:
        ArchiveParseError: If the file cannot be read or is malformed.
    """
    xml_path = Path(xml_file)
    try:
        return etree.parse(str(xml_path))
    except (OSError, etree.XMLSyntaxError) as exc:
        raise ArchiveParseError(f"Unable to parse archive {xml_path.name}: {exc}") from exc


def parse_archive_bytes(payload: bytes) -> etree._ElementTree:
    """Parse an in-memory patient archive into an element tree."""
    try:
        root = etree.fromstring(payload)
    except (ValueError, etree.XMLSyntaxError) as exc:
        raise ArchiveParseError(f"Unable to parse archive contents: {exc}") from exc
    return etree.ElementTree(root)


def xpath_elements(node: ArchiveNode, expression: str) -> list[etree._Element]:
    """Return the element nodes selected by an XPath expression.

    Non-element results (strings, numbers, attributes) are ignored.

    Raises:
        PlanQueryError: If ``node`` is not a navigable tree or the expression
            cannot be evaluated.
    """
    if isinstance(node, etree._ElementTree):
        node = node.getroot()
    if not isinstance(node, etree._Element):
        raise PlanQueryError(
            f"Cannot evaluate {expression!r} against {type(node).__name__}"
        )
    try:
        raw = node.xpath(expression)
    except etree.XPathError as exc:
        raise PlanQueryError(f"XPath query {expression!r} failed: {exc}") from exc

    elements: list[etree._Element] = []
    if isinstance(raw, etree._Element):
        elements.append(raw)
    elif isinstance(raw, Iterable) and not isinstance(raw, (str, bytes)):
        for item in raw:
            if isinstance(item, etree._Element):
                elements.append(item)
    return elements


def first_child(node: ArchiveNode, expression: str) -> etree._Element | None:
    """Return the first element matched by ``expression``, or ``None``."""
    for element in xpath_elements(node, expression):
        return element
    return None


def first_child_text(node: ArchiveNode, expression: str) -> str | None:
    """Return the literal text of the first matching element.

    ``None`` means no element matched. An element without a text node yields
    an empty string; whitespace is kept as-is.
    """
    element = first_child(node, expression)
    if element is None:
        return None
    return element.text or ""
