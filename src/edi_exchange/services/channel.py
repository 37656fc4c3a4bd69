"""
Remote file channels.

A channel is the transport that DocumentExchange drives: connect, change
directory, list, read, write, delete. Implementations:
- InMemoryChannel: dict-backed fake for tests and dry runs
- LocalDirectoryChannel: a directory on disk (shared mounts, staging areas)
- SftpChannel: an SFTP server via paramiko

Every native failure is re-raised as TransferError.
"""

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

import paramiko

from edi_exchange.exceptions import TransferError

logger = logging.getLogger(__name__)


class RemoteFileChannel(ABC):
    """
    Abstract transport contract.

    All methods block until the operation completes. Methods returning bool
    return True on success; implementations raise TransferError on failure
    (a False return is treated the same way by DocumentExchange).

    Context Manager:
        >>> with SftpChannel('sftp.example.com', 'user', 'secret') as channel:
        ...     channel.connect()
        ...     channel.list_directory()
    """

    @abstractmethod
    def connect(self) -> bool:
        """
        Open the connection.

        When already connected, the current directory goes back to where the
        session started, so relative change_directory() calls behave the same
        on every connect.
        """

    @abstractmethod
    def change_directory(self, path: str) -> bool:
        """Make path the current remote directory."""

    @abstractmethod
    def list_directory(self, path: str = '.') -> List[str]:
        """Entry names of path, in the order the remote reports them."""

    @abstractmethod
    def read(self, name: str) -> bytes:
        """Full contents of the remote file name."""

    @abstractmethod
    def write(self, name: str, data: bytes) -> bool:
        """Create or overwrite the remote file name with data."""

    @abstractmethod
    def delete(self, name: str) -> bool:
        """Remove the remote file name."""

    def close(self) -> None:
        """Release the connection. Default: nothing to release."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


class InMemoryChannel(RemoteFileChannel):
    """
    Channel over an in-memory directory map.

    Listings include the '.' and '..' pseudo-entries, like a real server
    listing does.

    Usage:
        channel = InMemoryChannel({'in': {'PR1.xml': b'<Order/>'}, 'out': {}})
    """

    def __init__(self, directories: Optional[Dict[str, Dict[str, bytes]]] = None):
        self.directories: Dict[str, Dict[str, bytes]] = directories if directories is not None else {}
        self.current_dir: Optional[str] = None
        self.connected = False

    def _files(self) -> Dict[str, bytes]:
        if self.current_dir is None:
            raise TransferError("No directory selected")
        return self.directories[self.current_dir]

    def connect(self) -> bool:
        self.connected = True
        self.current_dir = None
        return True

    def change_directory(self, path: str) -> bool:
        if path not in self.directories:
            raise TransferError(f"No such directory: {path}")
        self.current_dir = path
        return True

    def list_directory(self, path: str = '.') -> List[str]:
        files = self._files() if path == '.' else self.directories.get(path)
        if files is None:
            raise TransferError(f"No such directory: {path}")
        return ['.', '..'] + list(files)

    def read(self, name: str) -> bytes:
        try:
            return self._files()[name]
        except KeyError:
            raise TransferError(f"No such file: {name}") from None

    def write(self, name: str, data: bytes) -> bool:
        self._files()[name] = data
        return True

    def delete(self, name: str) -> bool:
        try:
            del self._files()[name]
        except KeyError:
            raise TransferError(f"No such file: {name}") from None
        return True

    def close(self) -> None:
        self.connected = False


class LocalDirectoryChannel(RemoteFileChannel):
    """
    Channel over a directory on the local filesystem.

    Directory changes are resolved relative to the current directory and may
    not leave base_dir.

    Usage:
        channel = LocalDirectoryChannel('/srv/edi')
        channel.change_directory('in')
    """

    def __init__(self, base_dir: Union[str, Path]):
        self.base_dir = Path(base_dir).resolve()
        self.current_dir = self.base_dir

    def _resolve(self, name: str) -> Path:
        target = (self.current_dir / name).resolve()
        if target != self.base_dir and self.base_dir not in target.parents:
            raise TransferError(f"Path escapes channel root: {name}")
        return target

    def connect(self) -> bool:
        if not self.base_dir.is_dir():
            logger.error(f"Channel root does not exist: {self.base_dir}")
            raise TransferError(f"Channel root does not exist: {self.base_dir}")
        self.current_dir = self.base_dir
        return True

    def change_directory(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.is_dir():
            raise TransferError(f"No such directory: {path}")
        self.current_dir = target
        return True

    def list_directory(self, path: str = '.') -> List[str]:
        target = self._resolve(path)
        try:
            names = sorted(entry.name for entry in target.iterdir())
        except OSError as e:
            raise TransferError(f"Cannot list {path}: {e}") from e
        return ['.', '..'] + names

    def read(self, name: str) -> bytes:
        try:
            return self._resolve(name).read_bytes()
        except OSError as e:
            raise TransferError(f"Cannot read {name}: {e}") from e

    def write(self, name: str, data: bytes) -> bool:
        try:
            self._resolve(name).write_bytes(data)
        except OSError as e:
            raise TransferError(f"Cannot write {name}: {e}") from e
        return True

    def delete(self, name: str) -> bool:
        try:
            self._resolve(name).unlink()
        except OSError as e:
            raise TransferError(f"Cannot delete {name}: {e}") from e
        return True


class SftpChannel(RemoteFileChannel):
    """
    Channel over SFTP using paramiko.

    Authentication (password login) is entirely paramiko's. The server key is
    verified against host_key, or against the entry for host in a
    known_hosts file. With neither given, paramiko accepts any server key.

    Usage:
        channel = SftpChannel('sftp.example.com', 'user', 'secret',
                              known_hosts='~/.ssh/known_hosts')
        channel.connect()
        channel.change_directory('in')
        names = channel.list_directory()
    """

    def __init__(
        self,
        host: str,
        username: Optional[str] = None,
        password: Optional[str] = None,
        port: int = 22,
        timeout: Optional[float] = None,
        host_key: Optional[paramiko.PKey] = None,
        known_hosts: Optional[Union[str, Path]] = None
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout
        self.host_key = host_key
        self.known_hosts = known_hosts
        self._transport: Optional[paramiko.Transport] = None
        self._sftp: Optional[paramiko.SFTPClient] = None

    @property
    def sftp(self) -> paramiko.SFTPClient:
        if self._sftp is None:
            raise TransferError("SFTP channel is not connected")
        return self._sftp

    def _expected_host_key(self) -> Optional[paramiko.PKey]:
        """
        Server key to verify against, None when verification is off.

        Raises:
            TransferError: If known_hosts cannot be read or has no entry for host
        """
        if self.host_key is not None or self.known_hosts is None:
            return self.host_key

        path = Path(self.known_hosts).expanduser()
        try:
            host_keys = paramiko.HostKeys(str(path))
        except OSError as e:
            raise TransferError(f"Cannot read known_hosts file {path}: {e}") from e

        # known_hosts stores non-default ports as '[host]:port'
        name = self.host if self.port == 22 else f'[{self.host}]:{self.port}'
        entry = host_keys.lookup(name)
        if not entry:
            logger.error(f"No known_hosts entry for {name} in {path}")
            raise TransferError(f"No known_hosts entry for {name}")
        return next(iter(entry.values()))

    def connect(self) -> bool:
        if self._sftp is not None:
            # chdir(None) returns to the login directory
            self.change_directory(None)
            return True

        host_key = self._expected_host_key()

        logger.debug(f"Connecting to sftp://{self.host}:{self.port} as {self.username}")
        try:
            transport = paramiko.Transport((self.host, self.port))
            self._transport = transport
            if self.timeout is not None:
                transport.banner_timeout = self.timeout
                transport.auth_timeout = self.timeout
            transport.connect(
                hostkey=host_key,
                username=self.username,
                password=self.password
            )
            self._sftp = paramiko.SFTPClient.from_transport(transport)
            if self.timeout is not None:
                self._sftp.get_channel().settimeout(self.timeout)
        except (paramiko.SSHException, OSError) as e:
            logger.error(f"SFTP login to {self.host}:{self.port} failed: {e}")
            self.close()
            raise TransferError(f"SFTP login to {self.host} failed: {e}") from e
        return True

    def change_directory(self, path: Optional[str]) -> bool:
        try:
            self.sftp.chdir(path)
        except (paramiko.SSHException, OSError) as e:
            raise TransferError(f"Cannot change directory to {path}: {e}") from e
        return True

    def list_directory(self, path: str = '.') -> List[str]:
        try:
            return self.sftp.listdir(path)
        except (paramiko.SSHException, OSError) as e:
            raise TransferError(f"Cannot list {path}: {e}") from e

    def read(self, name: str) -> bytes:
        buffer = io.BytesIO()
        try:
            self.sftp.getfo(name, buffer)
        except (paramiko.SSHException, OSError) as e:
            raise TransferError(f"Cannot read {name}: {e}") from e
        return buffer.getvalue()

    def write(self, name: str, data: bytes) -> bool:
        try:
            self.sftp.putfo(io.BytesIO(data), name)
        except (paramiko.SSHException, OSError) as e:
            raise TransferError(f"Cannot write {name}: {e}") from e
        return True

    def delete(self, name: str) -> bool:
        try:
            self.sftp.remove(name)
        except (paramiko.SSHException, OSError) as e:
            raise TransferError(f"Cannot delete {name}: {e}") from e
        return True

    def close(self) -> None:
        if self._sftp is not None:
            self._sftp.close()
            self._sftp = None
        if self._transport is not None:
            self._transport.close()
            self._transport = None
