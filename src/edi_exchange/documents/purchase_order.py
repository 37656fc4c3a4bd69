"""
Purchase Order (EDI 850) incoming document.
"""

from datetime import datetime, timedelta
from typing import List, Optional

from edi_exchange.config import get_code_tables
from edi_exchange.documents.incoming import IncomingDocument
from edi_exchange.models import Address, Contact, DateElement, OrderLineItem, PaymentTerms
from edi_exchange.parsers.dates import to_utc

HEADER = '//Order/Header'


class PurchaseOrder(IncomingDocument):
    """
    Purchase order received from a trading partner.

    Remote files are recognized by the 'PR' filename prefix.

    Example:
        >>> po = PurchaseOrder(raw_bytes)
        >>> po.po_number()
        'PO584615'
        >>> po.ship_to_address().city
        'Minneapolis'
    """

    edi_number = 850
    document_type_code = 'PO'
    filename_prefix = 'PR'

    TSET_ORIGINAL = '00'
    TSET_CANCEL = '01'
    TSET_REPLACE = '05'
    TSET_CONFIRMATION = '06'
    TSET_DUPLICATE = '07'

    DATE_FORMAT = '%Y-%m-%d'

    def __init__(self, xml=None):
        self._addresses: Optional[List[Address]] = None
        super().__init__(xml)

    # === Order Header ===

    def po_type(self) -> str:
        return self.scalar_at(f'{HEADER}/OrderHeader/PrimaryPOTypeCode')

    def po_number(self) -> str:
        """Purchase order number without the multi-store suffix ('PO1_2' -> 'PO1')."""
        po = self.scalar_at(f'{HEADER}/OrderHeader/PurchaseOrderNumber')
        return po.split('_', 1)[0]

    def po_date(self) -> str:
        return self.scalar_at(f'{HEADER}/OrderHeader/PurchaseOrderDate')

    def tset_purpose_code(self) -> str:
        return self.scalar_at(f'{HEADER}/OrderHeader/TsetPurposeCode')

    def trading_partner_id(self) -> str:
        return self.scalar_at(f'{HEADER}/OrderHeader/TradingPartnerId')

    def is_multi_store(self) -> bool:
        """Multi-store orders share a PO prefix separated with an underscore."""
        return '_' in self.scalar_at(f'{HEADER}/OrderHeader/PurchaseOrderNumber')

    # === Contacts ===

    def contacts(self) -> List[Contact]:
        return [Contact.from_xml(node) for node in self.elements_at(f'{HEADER}/Contacts')]

    def contact_by_type(self, type_code: str) -> Optional[Contact]:
        for contact in self.contacts():
            if contact.type_code == type_code:
                return contact
        return None

    # === Addresses ===

    def addresses(self) -> List[Address]:
        """
        Header addresses, parsed on first access and cached on this instance.
        """
        if self._addresses is None:
            self._addresses = [
                Address.from_xml(node) for node in self.elements_at(f'{HEADER}/Address')
            ]
        return self._addresses

    def address_by_type(self, type_code: str) -> Optional[Address]:
        for address in self.addresses():
            if address.type_code == type_code:
                return address
        return None

    def _first_address_of(self, *type_codes: str) -> Optional[Address]:
        for type_code in type_codes:
            address = self.address_by_type(type_code)
            if address is not None:
                return address
        return None

    def bill_to_address(self) -> Optional[Address]:
        """Address that best matches the billing address (BT, then BY, then ST)."""
        return self._first_address_of(
            Address.TYPE_BILL_TO, Address.TYPE_BUYING_PARTY, Address.TYPE_SHIP_TO
        )

    def ship_to_address(self) -> Optional[Address]:
        """Address that best matches the ship-to (ST, then BY, then BT)."""
        return self._first_address_of(
            Address.TYPE_SHIP_TO, Address.TYPE_BUYING_PARTY, Address.TYPE_BILL_TO
        )

    # === Terms, Notes, Carrier ===

    def payment_terms(self) -> Optional[PaymentTerms]:
        nodes = self.elements_at(f'{HEADER}/PaymentTerms')
        if not nodes:
            return None
        return PaymentTerms.from_xml(nodes[0])

    def combine_notes(self, separator: str = '\n') -> str:
        """
        All header notes as '<note type>: <note>' joined by separator.

        Unknown note codes are described as 'N/A'.
        """
        tables = get_code_tables()
        notes = [
            f"{tables.describe_note(node.findtext('NoteCode', default=''))}: "
            f"{node.findtext('Note', default='')}"
            for node in self.elements_at(f'{HEADER}/Notes')
        ]
        return separator.join(notes)

    def shipping_description(self) -> str:
        """'<carrier routing> - <service level>' for the first carrier, '' if none."""
        carriers = self.elements_at(f'{HEADER}/CarrierInformation')
        if not carriers:
            return ''
        carrier = carriers[0]
        service = carrier.findtext('ServiceLevelCodes/ServiceLevelCode', default='')
        routing = carrier.findtext('CarrierRouting', default='')
        return f"{routing} - {get_code_tables().describe_service_level(service)}"

    # === Dates ===

    def dates(self) -> List[DateElement]:
        return [DateElement.from_xml(node) for node in self.elements_at(f'{HEADER}/Dates')]

    def date_by_qualifier(self, qualifier: str) -> Optional[DateElement]:
        for date in self.dates():
            if date.qualifier == qualifier:
                return date
        return None

    def requested_ship_date(self, offset: int = 0) -> Optional[str]:
        """
        Requested ship date shifted by offset days.

        Args:
            offset: Days to add (positive) or deduct (negative)

        Returns:
            YYYY-MM-DD if the shifted date lies in the future, otherwise None.
            None as well when the order carries no requested ship date.
        """
        element = self.date_by_qualifier(DateElement.QUALIFIER_REQUESTED_SHIP)
        if element is None:
            return None
        date = to_utc(element.as_datetime()) + timedelta(days=offset)
        # Offset-carrying dates compare against the current UTC time
        if date > datetime.now(date.tzinfo):
            return date.strftime(self.DATE_FORMAT)
        return None

    # === Line Items ===

    def items(self) -> List[OrderLineItem]:
        """
        Order lines in document order.

        Lines without a sequence number are numbered with a running counter
        starting at 1.
        """
        items = []
        lsn = 1
        for node in self.elements_at('//Order/LineItem'):
            item = OrderLineItem.from_xml(node)
            if not item.sequence_number:
                item.sequence_number = lsn
                item.sequence_number_length = len(str(lsn))
                lsn += 1
            items.append(item)
        return items
