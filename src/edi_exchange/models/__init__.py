"""
Pydantic models for business-document elements.

Elements are imported from (and, for addresses, exported to) XML nodes of
incoming and outgoing documents.
"""

from edi_exchange.models.address import Address
from edi_exchange.models.elements import Contact, DateElement, PaymentTerms, OrderLineItem

__all__ = [
    'Address',
    'Contact',
    'DateElement',
    'PaymentTerms',
    'OrderLineItem',
]
