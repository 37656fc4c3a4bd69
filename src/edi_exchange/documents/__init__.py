"""
Document layer: the XML tree wrapper plus incoming/outgoing document bases
and the concrete business documents built on them.
"""

from edi_exchange.documents.tree import DocumentTree
from edi_exchange.documents.incoming import IncomingDocument
from edi_exchange.documents.outgoing import OutgoingDocument
from edi_exchange.documents.purchase_order import PurchaseOrder
from edi_exchange.documents.shipment_notice import ShipmentNotice

__all__ = [
    'DocumentTree',
    'IncomingDocument',
    'OutgoingDocument',
    'PurchaseOrder',
    'ShipmentNotice',
]
