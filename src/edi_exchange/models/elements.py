"""
Read-only header and line elements of incoming documents.

Each model is built from one XML node via ``from_xml`` and is otherwise a
plain Pydantic model.
"""

from datetime import datetime
from typing import ClassVar, Optional

from lxml import etree
from pydantic import BaseModel, field_validator

from edi_exchange.parsers.dates import parse_datetime
from edi_exchange.validators import validate_type_code


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class Contact(BaseModel):
    """
    Header contact (<Contacts> node).

    Example:
        >>> Contact.from_xml(node).email
        'alt@example.com'
    """

    type_code: str = ''
    name: str = ''
    phone: str = ''
    email: str = ''

    _normalize_type_code = field_validator('type_code', mode='before')(validate_type_code)

    @classmethod
    def from_xml(cls, root: etree._Element) -> 'Contact':
        return cls(
            type_code=root.findtext('ContactTypeCode', default=''),
            name=root.findtext('ContactName', default=''),
            phone=root.findtext('PrimaryPhone', default=''),
            email=root.findtext('PrimaryEmail', default=''),
        )


class DateElement(BaseModel):
    """
    Qualified header date (<Dates> node).

    Attributes:
        qualifier: What the date means (see QUALIFIER_* constants)
        date: Date as sent by the partner, normally YYYY-MM-DD
    """

    QUALIFIER_CANCEL_AFTER: ClassVar[str] = '001'
    QUALIFIER_DELIVERY_REQUESTED: ClassVar[str] = '002'
    QUALIFIER_REQUESTED_SHIP: ClassVar[str] = '010'
    QUALIFIER_SHIP_NOT_BEFORE: ClassVar[str] = '037'
    QUALIFIER_SHIP_NO_LATER: ClassVar[str] = '038'

    qualifier: str = ''
    date: str = ''

    _normalize_qualifier = field_validator('qualifier', mode='before')(validate_type_code)

    @classmethod
    def from_xml(cls, root: etree._Element) -> 'DateElement':
        return cls(
            qualifier=root.findtext('DateTimeQualifier', default=''),
            date=root.findtext('Date', default=''),
        )

    def as_datetime(self) -> datetime:
        """
        Parse date into a datetime (midnight).

        Raises:
            FormatError: If the date is empty or in an unsupported shape
        """
        return parse_datetime(self.date)


class PaymentTerms(BaseModel):
    """Header payment terms (<PaymentTerms> node)."""

    terms_type: str = ''
    basis_date_code: str = ''
    discount_percentage: Optional[float] = None
    discount_due_days: Optional[int] = None
    net_due_days: Optional[int] = None
    description: str = ''

    _blank_numbers = field_validator(
        'discount_percentage', 'discount_due_days', 'net_due_days', mode='before'
    )(_blank_to_none)

    @classmethod
    def from_xml(cls, root: etree._Element) -> 'PaymentTerms':
        return cls(
            terms_type=root.findtext('TermsType', default=''),
            basis_date_code=root.findtext('TermsBasisDateCode', default=''),
            discount_percentage=root.findtext('TermsDiscountPercentage', default=''),
            discount_due_days=root.findtext('TermsDiscountDueDays', default=''),
            net_due_days=root.findtext('TermsNetDueDays', default=''),
            description=root.findtext('TermsDescription', default=''),
        )


class OrderLineItem(BaseModel):
    """
    Purchase order line (<LineItem> node).

    Attributes:
        sequence_number: Line sequence number; None when the partner omitted it
        sequence_number_length: Number of characters the partner used for the
            sequence number, so it can be echoed back zero-padded
    """

    sequence_number: Optional[int] = None
    sequence_number_length: int = 0
    buyer_part_number: str = ''
    vendor_part_number: str = ''
    consumer_package_code: str = ''
    quantity: Optional[float] = None
    uom: str = ''
    unit_price: Optional[float] = None
    description: str = ''

    _blank_numbers = field_validator(
        'sequence_number', 'quantity', 'unit_price', mode='before'
    )(_blank_to_none)

    @classmethod
    def from_xml(cls, root: etree._Element) -> 'OrderLineItem':
        sequence = (root.findtext('OrderLine/LineSequenceNumber', default='') or '').strip()
        return cls(
            sequence_number=sequence,
            sequence_number_length=len(sequence),
            buyer_part_number=root.findtext('OrderLine/BuyerPartNumber', default=''),
            vendor_part_number=root.findtext('OrderLine/VendorPartNumber', default=''),
            consumer_package_code=root.findtext('OrderLine/ConsumerPackageCode', default=''),
            quantity=root.findtext('OrderLine/OrderQty', default=''),
            uom=root.findtext('OrderLine/OrderQtyUOM', default=''),
            unit_price=root.findtext('OrderLine/PurchasePrice', default=''),
            description=root.findtext('ProductOrItemDescription/ProductDescription', default=''),
        )
