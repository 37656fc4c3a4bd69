"""
Service layer for edi-exchange.

- RemoteFileChannel and its transports (in-memory, local directory, SFTP)
- DocumentExchange: fetch/claim inbound documents, upload outbound documents
"""

from edi_exchange.services.channel import (
    RemoteFileChannel,
    InMemoryChannel,
    LocalDirectoryChannel,
    SftpChannel
)
from edi_exchange.services.exchange import DocumentExchange, matches_prefix

__all__ = [
    'RemoteFileChannel',
    'InMemoryChannel',
    'LocalDirectoryChannel',
    'SftpChannel',
    'DocumentExchange',
    'matches_prefix'
]
