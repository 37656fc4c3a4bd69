"""
Base class for documents received from trading partners.

Incoming documents are read-only: the tree is set once from remote bytes and
all reads go through XPath queries (scalar_at / elements_at).
"""

from typing import Any, ClassVar, List, Optional, Union

from lxml import etree

from edi_exchange.documents.tree import DocumentTree


class IncomingDocument:
    """
    Read-only document backed by a DocumentTree.

    Subclasses describe one business document type (e.g., PurchaseOrder) and
    set the class attributes below.

    Attributes:
        edi_number: EDI transaction set number (e.g., 850)
        document_type_code: Short type code (e.g., 'PO')
        filename_prefix: Remote filename prefix used by the naming filter

    Example:
        >>> doc = IncomingDocument(b'<Order><Id>7</Id></Order>')
        >>> doc.scalar_at('//Order/Id')
        '7'
        >>> doc.scalar_at('//Order/Missing')
        ''
    """

    edi_number: ClassVar[int] = 0
    document_type_code: ClassVar[str] = ''
    filename_prefix: ClassVar[str] = ''

    def __init__(self, xml: Optional[Union[bytes, str]] = None):
        self._tree = DocumentTree()
        if xml is not None:
            self.set_xml(xml)

    def set_xml(self, raw: Union[bytes, str]) -> None:
        """
        Parse raw XML into this document.

        Raises:
            ParseError: If raw is not well-formed XML
        """
        self._tree.set_xml(raw)

    @property
    def xml(self) -> etree._Element:
        return self._tree.get()

    def scalar_at(self, xpath: str) -> str:
        """
        Text of the first node matching xpath, or '' if nothing matches.

        Raises:
            NotSetError: If no XML has been set
        """
        matches = self._tree.query(xpath)
        if not matches:
            return ''
        return _node_text(matches[0])

    def elements_at(self, xpath: str) -> List[Any]:
        """
        All nodes matching xpath in document order.

        Raises:
            NotSetError: If no XML has been set
        """
        return self._tree.query(xpath)

    def serialize(self) -> str:
        return self._tree.serialize()

    def __str__(self) -> str:
        return self.serialize()


def _node_text(node: Any) -> str:
    if isinstance(node, etree._Element):
        return node.text or ''
    # text(), attribute and scalar XPath results
    return str(node)
