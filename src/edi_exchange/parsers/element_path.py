"""
Path-based construction and lookup over lxml element trees.

An element path is a slash-delimited list of tag names ('Header/Address/City').
Construction semantics:
- Intermediate segments are containers: the FIRST existing child with that
  name is reused, otherwise one is created
- The terminal segment is always a new child, so repeated calls append
  repeated siblings (e.g., several LineItem elements)

Both functions take an explicit cursor element and never keep state between
calls.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from lxml import etree

from edi_exchange.exceptions import InvalidPathError


@dataclass(frozen=True)
class ElementPath:
    """
    Parsed element path.

    Attributes:
        segments: Tag names from outermost to innermost (at least one)

    Example:
        >>> path = ElementPath.parse('Shipment/D/E')
        >>> path.intermediate
        ('Shipment', 'D')
        >>> path.terminal
        'E'
    """
    segments: Tuple[str, ...]

    def __post_init__(self):
        if not self.segments:
            raise InvalidPathError("Element path must contain at least one segment")
        if any(not segment for segment in self.segments):
            raise InvalidPathError(f"Element path contains an empty segment: {self}")
        for segment in self.segments:
            _check_segment(segment)

    @classmethod
    def parse(cls, path: Union[str, 'ElementPath']) -> 'ElementPath':
        """
        Parse a slash-delimited path.

        Raises:
            InvalidPathError: If path is empty or has an empty segment
                ('A//B', '/A', 'A/')
        """
        if isinstance(path, ElementPath):
            return path
        if not path:
            raise InvalidPathError("Element path must not be empty")
        return cls(tuple(path.split('/')))

    @property
    def intermediate(self) -> Tuple[str, ...]:
        return self.segments[:-1]

    @property
    def terminal(self) -> str:
        return self.segments[-1]

    def __str__(self) -> str:
        return '/'.join(self.segments)


_FILTER_CHARS = frozenset('*{}')


def _check_segment(segment: str) -> None:
    """
    Reject segments that are not plain XML element names.

    Wildcards and Clark-notation namespaces ('*', '{ns}X') are tag filters
    for lxml, not names, so they never address a single element.
    """
    if _FILTER_CHARS & set(segment):
        raise InvalidPathError(f"Invalid element name {segment!r}")
    try:
        etree.QName(segment)
    except ValueError as e:
        raise InvalidPathError(f"Invalid element name {segment!r}: {e}") from e


def _first_child(cursor: etree._Element, name: str) -> Optional[etree._Element]:
    """First direct child of cursor whose tag equals name exactly."""
    for child in cursor:
        if child.tag == name:
            return child
    return None


def _new_child(cursor: etree._Element, name: str) -> etree._Element:
    try:
        return etree.SubElement(cursor, name)
    except ValueError as e:
        # lxml rejects names that are not valid XML tag names
        raise InvalidPathError(f"Invalid element name {name!r}: {e}") from e


def add_element(
    cursor: etree._Element,
    path: Union[str, ElementPath],
    value: Optional[str] = None
) -> etree._Element:
    """
    Create the element addressed by path below cursor.

    Args:
        cursor: Element the path is resolved against
        path: Element path ('A/B/C') or a parsed ElementPath
        value: Text for the new terminal element; empty/None leaves it empty

    Returns:
        The newly created terminal element

    Raises:
        InvalidPathError: If the path is empty or a segment is not a valid tag name

    Example:
        >>> root = etree.Element('Test')
        >>> add_element(root, 'Shipment/C', '2').text
        '2'
        >>> etree.tostring(root)
        b'<Test><Shipment><C>2</C></Shipment></Test>'
    """
    element_path = ElementPath.parse(path)

    for segment in element_path.intermediate:
        child = _first_child(cursor, segment)
        cursor = child if child is not None else _new_child(cursor, segment)

    node = _new_child(cursor, element_path.terminal)
    if value:
        node.text = value
    return node


def has_node(cursor: etree._Element, path: Union[str, ElementPath]) -> bool:
    """
    Check whether every segment of path resolves below cursor.

    Never creates elements.

    Raises:
        InvalidPathError: If the path is empty or malformed
    """
    element_path = ElementPath.parse(path)

    for segment in element_path.segments:
        cursor = _first_child(cursor, segment)
        if cursor is None:
            return False
    return True
