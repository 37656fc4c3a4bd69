"""
Advance Ship Notice (EDI 856) outgoing document.
"""

from typing import Optional

from lxml import etree

from edi_exchange.documents.outgoing import OutgoingDocument
from edi_exchange.models import Address

SHIPMENT_HEADER = 'Shipment/Header/ShipmentHeader'


class ShipmentNotice(OutgoingDocument):
    """
    Shipment notice sent to a trading partner after an order ships.

    Usage:
        notice = ShipmentNotice()
        notice.set_header('525GROMM', 'SH12345', '8/12/18', '2018-08-12 22:54:24')
        notice.add_address(ship_from)
        exchange.upload_document(notice, 'SH12345.xml')
    """

    edi_number = 856
    document_type_code = 'SH'
    filename_prefix = 'SH'
    root_element_name = 'Shipments'

    TSET_ORIGINAL = '00'

    def set_header(
        self,
        trading_partner_id: str,
        shipment_id: str,
        ship_date: str,
        ship_time: Optional[str] = None,
        purpose_code: str = TSET_ORIGINAL
    ) -> etree._Element:
        """
        Write the shipment header.

        Dates and times are normalized to the wire formats; ship_time
        defaults to midnight of ship_date.

        Returns:
            The <ShipmentHeader> element

        Raises:
            FormatError: If ship_date or ship_time cannot be parsed
        """
        self.add_element(f'{SHIPMENT_HEADER}/TradingPartnerId', trading_partner_id)
        self.add_element(f'{SHIPMENT_HEADER}/ShipmentIdentification', shipment_id)
        self.add_element(f'{SHIPMENT_HEADER}/ShipDate', self.format_date(ship_date))
        self.add_element(f'{SHIPMENT_HEADER}/TsetPurposeCode', purpose_code)
        self.add_element(
            f'{SHIPMENT_HEADER}/ShipmentTime', self.format_time(ship_time or ship_date)
        )
        return self.xml.find(SHIPMENT_HEADER)

    def add_address(self, address: Address) -> etree._Element:
        """
        Append an <Address> to the shipment header block.

        Raises:
            InvalidElementError: If the address type code is unknown
            RequiredFieldError: If a required address field is empty
        """
        if self.has_node('Shipment/Header'):
            header = self.xml.find('Shipment/Header')
        else:
            header = self.add_element('Shipment/Header')
        return address.to_xml(header)
