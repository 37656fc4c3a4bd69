"""
Document Exchange Service

Moves raw documents between a remote file channel and the document layer:
- fetch_new_documents: list inbound directory, filter by filename prefix,
  parse each file and claim it by deleting it right after a successful parse
- upload_document: serialize an outgoing document into the outbound directory

Failure handling is fail-fast: the first transport or parse error aborts the
call. Files claimed before the failure stay deleted on the remote side.
"""

import logging
from typing import Dict, Optional, Type, TypeVar

from edi_exchange.config import ExchangeSettings, get_settings
from edi_exchange.documents.incoming import IncomingDocument
from edi_exchange.documents.outgoing import OutgoingDocument
from edi_exchange.exceptions import TransferError
from edi_exchange.services.channel import RemoteFileChannel, SftpChannel
from edi_exchange.validators import validate_filename_prefix, validate_remote_dir

logger = logging.getLogger(__name__)

DocumentT = TypeVar('DocumentT', bound=IncomingDocument)

PSEUDO_ENTRIES = ('.', '..')


def matches_prefix(filename: str, prefix: str) -> bool:
    """
    Naming filter: case-insensitive prefix match, rest of the name ignored.

    Example:
        >>> matches_prefix('pr4321', 'PR')
        True
        >>> matches_prefix('NOTAPO.xml', 'PR')
        False
    """
    return filename.lower().startswith(prefix.lower())


class DocumentExchange:
    """
    Fetch/upload workflow over one RemoteFileChannel.

    One instance owns its channel for the duration of each call; it does no
    locking. Run separate instances (with separate channels) for concurrent
    work against different endpoints.

    Usage:
        >>> with DocumentExchange.from_settings() as exchange:
        ...     orders = exchange.fetch_new_documents(PurchaseOrder)
        ...     for filename, order in orders.items():
        ...         print(filename, order.po_number())
        ...     exchange.upload_document(notice, 'SH12345.xml')
    """

    def __init__(
        self,
        channel: RemoteFileChannel,
        inbound_dir: str = 'in',
        outbound_dir: str = 'out'
    ):
        """
        Args:
            channel: Transport to drive
            inbound_dir: Remote directory polled by fetch_new_documents
            outbound_dir: Remote directory written by upload_document

        Raises:
            ValueError: If a directory is empty
        """
        self.channel = channel
        self.inbound_dir = validate_remote_dir(inbound_dir)
        self.outbound_dir = validate_remote_dir(outbound_dir)

    @classmethod
    def from_settings(cls, settings: Optional[ExchangeSettings] = None) -> 'DocumentExchange':
        """
        Build an exchange over SFTP from ExchangeSettings.

        Priority: explicit settings > get_settings() (environment / .env).
        """
        settings = settings or get_settings()
        channel = SftpChannel(
            host=settings.host,
            port=settings.port,
            username=settings.username,
            password=settings.password,
            timeout=settings.timeout,
            known_hosts=settings.known_hosts
        )
        return cls(channel, settings.inbound_dir, settings.outbound_dir)

    def _open(self, directory: str) -> None:
        if not self.channel.connect():
            logger.error("Remote channel refused the connection")
            raise TransferError("Could not connect to the remote channel")
        if not self.channel.change_directory(directory):
            logger.error(f"Remote channel could not change to {directory}")
            raise TransferError(f"Could not change to remote directory {directory}")
        logger.debug(f"Connected, working in {directory}")

    def fetch_new_documents(
        self,
        document_type: Type[DocumentT],
        prefix: Optional[str] = None
    ) -> Dict[str, DocumentT]:
        """
        Download, parse and claim every new document of one type.

        Args:
            document_type: IncomingDocument subclass to build (e.g., PurchaseOrder)
            prefix: Filename prefix to accept; defaults to
                document_type.filename_prefix

        Returns:
            Parsed documents keyed by remote filename, in listing order

        Raises:
            TransferError: If connect, chdir, list, read or delete fails
            ParseError: If a file is not well-formed XML. Files claimed
                earlier in the same call remain deleted.
            ValueError: If no prefix is given and the type defines none
        """
        prefix = validate_filename_prefix(prefix or document_type.filename_prefix)

        self._open(self.inbound_dir)

        entries = self.channel.list_directory()
        candidates = [
            name for name in entries
            if name not in PSEUDO_ENTRIES and matches_prefix(name, prefix)
        ]
        logger.debug(
            f"{len(candidates)} of {len(entries)} entries in {self.inbound_dir} "
            f"match prefix {prefix!r}"
        )

        documents: Dict[str, DocumentT] = {}
        for filename in candidates:
            raw = self.channel.read(filename)

            document = document_type()
            document.set_xml(raw)

            # Claim immediately so a later call never sees this file again
            if not self.channel.delete(filename):
                logger.error(f"Could not claim {filename} in {self.inbound_dir}")
                raise TransferError(f"Could not delete remote file {filename}")
            logger.debug(f"Claimed {filename} ({len(raw)} bytes)")

            documents[filename] = document

        logger.info(
            f"Fetched {len(documents)} {document_type.__name__} document(s) "
            f"from {self.inbound_dir}"
        )
        return documents

    def upload_document(self, document: OutgoingDocument, filename: str) -> bool:
        """
        Write document to filename in the outbound directory.

        Returns:
            True once the file has been written

        Raises:
            TransferError: If connect, chdir or write fails
        """
        data = document.to_bytes()

        self._open(self.outbound_dir)

        if not self.channel.write(filename, data):
            logger.error(f"Could not write {filename} to {self.outbound_dir}")
            raise TransferError(f"Could not write remote file {filename}")

        logger.info(f"Uploaded {filename} ({len(data)} bytes) to {self.outbound_dir}")
        return True

    def close(self) -> None:
        self.channel.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
