"""
DocumentTree: the single owned XML tree behind every document.

Lifecycle:
    Unset --set_xml()--> Set --set_xml()--> Set (full replacement)

There is no way back to Unset. Reads on an unset tree raise NotSetError;
a failed set_xml leaves the previous state untouched.
"""

from typing import Any, List, Optional, Union

from lxml import etree

from edi_exchange.exceptions import InvalidPathError, NotSetError, ParseError

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'


def _make_parser() -> etree.XMLParser:
    # Inbound files come from third parties: no entity expansion, no network
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=False)


class DocumentTree:
    """
    Wrapper around one lxml element tree.

    Usage:
        tree = DocumentTree()
        tree.set_xml(b'<Order><Header/></Order>')
        tree.query('//Order/Header')   # [<Element Header>]
        tree.serialize()               # '<?xml version="1.0" ...?>\\n<Order>...'
    """

    def __init__(self, root: Optional[etree._Element] = None):
        self._root = root

    @property
    def is_set(self) -> bool:
        return self._root is not None

    def set_xml(self, raw: Union[bytes, str]) -> None:
        """
        Parse raw XML and replace the current tree.

        Args:
            raw: XML document as bytes or text. Text is encoded as UTF-8
                before parsing so an encoding declaration is allowed.

        Raises:
            ParseError: If raw is not well-formed XML
        """
        if isinstance(raw, str):
            raw = raw.encode('utf-8')
        if not raw or not raw.strip():
            raise ParseError("XML document is empty")
        try:
            root = etree.fromstring(raw, _make_parser())
        except etree.XMLSyntaxError as e:
            raise ParseError(f"Malformed XML: {e}") from e
        if root is None:
            raise ParseError("XML document has no root element")
        self._root = root

    def get(self) -> etree._Element:
        """
        Root element of the tree.

        Raises:
            NotSetError: If no XML has been set
        """
        if self._root is None:
            raise NotSetError("Document XML has not been set")
        return self._root

    @property
    def xml(self) -> etree._Element:
        return self.get()

    def query(self, xpath: str) -> List[Any]:
        """
        Evaluate an XPath expression against the tree.

        Args:
            xpath: XPath expression (e.g., '//Order/Header/Address')

        Returns:
            Matching nodes in document order; empty list when nothing matches.
            Expressions selecting text or attributes yield strings.

        Raises:
            NotSetError: If no XML has been set
            InvalidPathError: If the expression is not valid XPath
        """
        root = self.get()
        try:
            result = root.xpath(xpath)
        except etree.XPathError as e:
            raise InvalidPathError(f"Invalid query {xpath!r}: {e}") from e
        if isinstance(result, list):
            return result
        return [result]

    def serialize(self) -> str:
        """
        Render the tree as XML text with a declaration header.

        Raises:
            NotSetError: If no XML has been set
        """
        body = etree.tostring(self.get(), encoding='unicode')
        return f"{XML_DECLARATION}\n{body}\n"

    def to_bytes(self) -> bytes:
        return self.serialize().encode('utf-8')

    def __str__(self) -> str:
        return self.serialize()
