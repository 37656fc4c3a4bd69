"""
edi-exchange: XML business-document exchange over remote file channels.

Main package exports for user-facing API.
"""

from edi_exchange.documents import (
    DocumentTree,
    IncomingDocument,
    OutgoingDocument,
    PurchaseOrder,
    ShipmentNotice
)
from edi_exchange.services import (
    DocumentExchange,
    RemoteFileChannel,
    InMemoryChannel,
    LocalDirectoryChannel,
    SftpChannel
)
from edi_exchange.exceptions import (
    ExchangeError,
    NotSetError,
    ParseError,
    InvalidPathError,
    FormatError,
    TransferError,
    RequiredFieldError,
    InvalidElementError
)

__all__ = [
    'DocumentTree',
    'IncomingDocument',
    'OutgoingDocument',
    'PurchaseOrder',
    'ShipmentNotice',
    'DocumentExchange',
    'RemoteFileChannel',
    'InMemoryChannel',
    'LocalDirectoryChannel',
    'SftpChannel',
    'ExchangeError',
    'NotSetError',
    'ParseError',
    'InvalidPathError',
    'FormatError',
    'TransferError',
    'RequiredFieldError',
    'InvalidElementError',
]

__version__ = '0.1.0'
