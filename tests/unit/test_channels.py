"""
Unit tests for remote file channels.

InMemoryChannel and LocalDirectoryChannel run for real (tmp_path);
SftpChannel runs against a mocked paramiko transport.
"""

import pytest
from unittest.mock import MagicMock, patch

import paramiko

from edi_exchange.exceptions import TransferError
from edi_exchange.services import InMemoryChannel, LocalDirectoryChannel, SftpChannel


# ============================================================================
# IN-MEMORY CHANNEL
# ============================================================================

class TestInMemoryChannel:
    """Test suite for InMemoryChannel."""

    @pytest.fixture
    def channel(self):
        return InMemoryChannel({'in': {'PR1.xml': b'<Order/>'}, 'out': {}})

    def test_listing_includes_pseudo_entries(self, channel):
        channel.connect()
        channel.change_directory('in')

        assert channel.list_directory() == ['.', '..', 'PR1.xml']

    def test_list_other_directory(self, channel):
        channel.connect()

        assert channel.list_directory('out') == ['.', '..']

    def test_read_write_delete(self, channel):
        channel.connect()
        channel.change_directory('out')

        assert channel.write('SH1.xml', b'<Shipments/>') is True
        assert channel.read('SH1.xml') == b'<Shipments/>'
        assert channel.delete('SH1.xml') is True
        assert channel.directories['out'] == {}

    def test_unknown_directory(self, channel):
        with pytest.raises(TransferError, match='No such directory'):
            channel.change_directory('archive')

    def test_missing_file(self, channel):
        channel.connect()
        channel.change_directory('in')

        with pytest.raises(TransferError):
            channel.read('PR2.xml')
        with pytest.raises(TransferError):
            channel.delete('PR2.xml')

    def test_file_access_requires_directory(self, channel):
        channel.connect()

        with pytest.raises(TransferError, match='No directory selected'):
            channel.read('PR1.xml')

    def test_close(self, channel):
        with channel:
            channel.connect()
            assert channel.connected is True

        assert channel.connected is False


# ============================================================================
# LOCAL DIRECTORY CHANNEL
# ============================================================================

class TestLocalDirectoryChannel:
    """Test suite for LocalDirectoryChannel."""

    @pytest.fixture
    def root(self, tmp_path):
        (tmp_path / 'in').mkdir()
        (tmp_path / 'out').mkdir()
        (tmp_path / 'in' / 'PR2.xml').write_bytes(b'<Order>2</Order>')
        (tmp_path / 'in' / 'PR1.xml').write_bytes(b'<Order>1</Order>')
        return tmp_path

    @pytest.fixture
    def channel(self, root):
        channel = LocalDirectoryChannel(root)
        channel.connect()
        return channel

    def test_sorted_listing_with_pseudo_entries(self, channel):
        channel.change_directory('in')

        assert channel.list_directory() == ['.', '..', 'PR1.xml', 'PR2.xml']

    def test_read(self, channel):
        channel.change_directory('in')

        assert channel.read('PR1.xml') == b'<Order>1</Order>'

    def test_write_and_delete(self, channel, root):
        channel.change_directory('out')

        channel.write('SH1.xml', b'<Shipments/>')
        assert (root / 'out' / 'SH1.xml').read_bytes() == b'<Shipments/>'

        channel.delete('SH1.xml')
        assert not (root / 'out' / 'SH1.xml').exists()

    def test_connect_resets_current_directory(self, channel, root):
        channel.change_directory('in')

        channel.connect()
        channel.change_directory('out')

        assert channel.current_dir == (root / 'out').resolve()

    def test_path_escape_rejected(self, channel):
        with pytest.raises(TransferError, match='escapes channel root'):
            channel.change_directory('..')

    def test_missing_directory(self, channel):
        with pytest.raises(TransferError, match='No such directory'):
            channel.change_directory('archive')

    def test_missing_file(self, channel):
        channel.change_directory('in')

        with pytest.raises(TransferError, match='Cannot read'):
            channel.read('PR9.xml')
        with pytest.raises(TransferError, match='Cannot delete'):
            channel.delete('PR9.xml')

    def test_missing_root(self, tmp_path):
        channel = LocalDirectoryChannel(tmp_path / 'nowhere')

        with pytest.raises(TransferError, match='does not exist'):
            channel.connect()


# ============================================================================
# SFTP CHANNEL
# ============================================================================

class TestSftpChannel:
    """Test suite for SftpChannel with a mocked paramiko."""

    @pytest.fixture
    def paramiko_mocks(self):
        with patch('edi_exchange.services.channel.paramiko.Transport') as mock_transport_cls, \
             patch('edi_exchange.services.channel.paramiko.SFTPClient.from_transport') as mock_from_transport:
            transport = MagicMock()
            sftp = MagicMock()
            mock_transport_cls.return_value = transport
            mock_from_transport.return_value = sftp
            yield mock_transport_cls, transport, mock_from_transport, sftp

    @pytest.fixture
    def channel(self):
        return SftpChannel('sftp.example.com', 'user', 'secret', port=2222, timeout=10.0)

    def test_connect_logs_in(self, channel, paramiko_mocks):
        mock_transport_cls, transport, mock_from_transport, sftp = paramiko_mocks

        assert channel.connect() is True

        mock_transport_cls.assert_called_once_with(('sftp.example.com', 2222))
        transport.connect.assert_called_once_with(hostkey=None, username='user', password='secret')
        mock_from_transport.assert_called_once_with(transport)
        sftp.get_channel.return_value.settimeout.assert_called_once_with(10.0)

    def test_host_key_is_verified(self, paramiko_mocks):
        """An explicit server key is handed to the transport handshake."""
        _, transport, _, _ = paramiko_mocks
        host_key = MagicMock(spec=paramiko.PKey)
        channel = SftpChannel('sftp.example.com', 'user', 'secret', host_key=host_key)

        channel.connect()

        transport.connect.assert_called_once_with(
            hostkey=host_key, username='user', password='secret'
        )

    def test_host_key_from_known_hosts(self, channel, paramiko_mocks):
        """Non-default ports are looked up as '[host]:port'."""
        _, transport, _, _ = paramiko_mocks
        server_key = MagicMock(spec=paramiko.PKey)
        channel.known_hosts = '/etc/edi/known_hosts'

        with patch('edi_exchange.services.channel.paramiko.HostKeys') as mock_host_keys:
            mock_host_keys.return_value.lookup.return_value = {'ssh-ed25519': server_key}
            channel.connect()

        mock_host_keys.assert_called_once_with('/etc/edi/known_hosts')
        mock_host_keys.return_value.lookup.assert_called_once_with('[sftp.example.com]:2222')
        assert transport.connect.call_args.kwargs['hostkey'] is server_key

    def test_unknown_host_refused_before_connecting(self, channel, paramiko_mocks):
        mock_transport_cls, _, _, _ = paramiko_mocks
        channel.known_hosts = '/etc/edi/known_hosts'

        with patch('edi_exchange.services.channel.paramiko.HostKeys') as mock_host_keys:
            mock_host_keys.return_value.lookup.return_value = None
            with pytest.raises(TransferError, match='No known_hosts entry'):
                channel.connect()

        mock_transport_cls.assert_not_called()

    def test_unreadable_known_hosts(self, channel, paramiko_mocks, tmp_path):
        channel.known_hosts = tmp_path / 'missing_known_hosts'

        with pytest.raises(TransferError, match='Cannot read known_hosts'):
            channel.connect()

    def test_reconnect_returns_to_login_directory(self, channel, paramiko_mocks):
        _, _, mock_from_transport, sftp = paramiko_mocks

        channel.connect()
        channel.connect()

        mock_from_transport.assert_called_once()
        sftp.chdir.assert_called_once_with(None)

    def test_login_failure(self, channel, paramiko_mocks):
        _, transport, _, _ = paramiko_mocks
        transport.connect.side_effect = paramiko.AuthenticationException("bad password")

        with pytest.raises(TransferError, match='login'):
            channel.connect()

        transport.close.assert_called_once()

    def test_operations_require_connection(self, channel):
        with pytest.raises(TransferError, match='not connected'):
            channel.list_directory()

    def test_file_operations(self, channel, paramiko_mocks):
        _, _, _, sftp = paramiko_mocks
        sftp.listdir.return_value = ['.', '..', 'PR1.xml']
        sftp.getfo.side_effect = lambda name, buffer: buffer.write(b'<Order/>')
        channel.connect()

        assert channel.change_directory('in') is True
        assert channel.list_directory() == ['.', '..', 'PR1.xml']
        assert channel.read('PR1.xml') == b'<Order/>'
        assert channel.delete('PR1.xml') is True
        assert channel.write('SH1.xml', b'<Shipments/>') is True

        sftp.chdir.assert_called_once_with('in')
        sftp.remove.assert_called_once_with('PR1.xml')
        uploaded, name = sftp.putfo.call_args.args
        assert name == 'SH1.xml'
        assert uploaded.getvalue() == b'<Shipments/>'

    def test_native_errors_become_transfer_errors(self, channel, paramiko_mocks):
        _, _, _, sftp = paramiko_mocks
        sftp.remove.side_effect = IOError("permission denied")
        sftp.listdir.side_effect = paramiko.SSHException("channel closed")
        channel.connect()

        with pytest.raises(TransferError, match='permission denied'):
            channel.delete('PR1.xml')
        with pytest.raises(TransferError, match='channel closed'):
            channel.list_directory()

    def test_close(self, channel, paramiko_mocks):
        _, transport, _, sftp = paramiko_mocks
        channel.connect()

        channel.close()

        sftp.close.assert_called_once()
        transport.close.assert_called_once()
        with pytest.raises(TransferError):
            channel.read('PR1.xml')
