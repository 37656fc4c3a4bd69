"""
Base class for documents sent to trading partners.

Outgoing documents start as a single root element and grow only through
add_element(). Every call resolves its path from the root.
"""

from typing import ClassVar, Optional

from lxml import etree

from edi_exchange.documents.tree import DocumentTree
from edi_exchange.parsers import dates
from edi_exchange.parsers.element_path import ElementPath, add_element, has_node


class OutgoingDocument:
    """
    Write-only document built path by path.

    Attributes:
        edi_number: EDI transaction set number (e.g., 856)
        document_type_code: Short type code (e.g., 'SH')
        filename_prefix: Prefix used when naming uploaded files
        root_element_name: Tag of the root element

    Example:
        >>> doc = OutgoingDocument('Test')
        >>> _ = doc.add_element('Shipment')
        >>> doc.add_element('Shipment/C', '2').text
        '2'
        >>> doc.has_node('Shipment/C')
        True
    """

    edi_number: ClassVar[int] = 0
    document_type_code: ClassVar[str] = ''
    filename_prefix: ClassVar[str] = ''
    root_element_name: ClassVar[str] = ''

    DATE_FORMAT = dates.DATE_FORMAT
    TIME_FORMAT = dates.TIME_FORMAT

    def __init__(self, root_element_name: Optional[str] = None):
        name = root_element_name or self.root_element_name
        if not name:
            raise ValueError(f"{type(self).__name__} needs a root element name")
        self._tree = DocumentTree(etree.Element(name))

    @property
    def xml(self) -> etree._Element:
        return self._tree.get()

    def add_element(self, path: str, value: Optional[str] = None) -> etree._Element:
        """
        Append the element addressed by path, resolved from the root.

        Intermediate segments reuse the first existing element of that name;
        the terminal segment is always a new element.

        Args:
            path: Slash-delimited element path (e.g., 'Header/ShipmentHeader/ShipDate')
            value: Optional text for the new element

        Returns:
            The created element

        Raises:
            InvalidPathError: If path is empty or malformed
        """
        return add_element(self._tree.get(), ElementPath.parse(path), value)

    def has_node(self, path: str) -> bool:
        """True if every segment of path resolves from the root."""
        return has_node(self._tree.get(), ElementPath.parse(path))

    def format_date(self, value: str) -> str:
        """Normalize value to YYYY-MM-DD (raises FormatError)."""
        return dates.format_date(value)

    def format_time(self, value: str) -> str:
        """Normalize value to HH:MM:SS+00:00 (raises FormatError)."""
        return dates.format_time(value)

    def serialize(self) -> str:
        return self._tree.serialize()

    def to_bytes(self) -> bytes:
        return self._tree.to_bytes()

    def __str__(self) -> str:
        return self.serialize()
