import io
import stat
from unittest import mock

import paramiko
import pytest

from pxlkit.sftp_file import OpenMode, SftpError, SftpFile, SftpUrl, parse_url


def _fake_client(sftp):
    client = mock.MagicMock()
    client.get_transport.return_value.get_remote_server_key.return_value.asbytes.return_value = b"key"
    client.open_sftp.return_value = sftp
    return client


def _reader(content):
    sftp = mock.MagicMock()
    sftp.open.return_value = io.BytesIO(content)
    return sftp


def test_parse_url_source_example():
    url = parse_url("ssh://gmueller@lx3a24:22/.bashrc")
    assert url == SftpUrl(scheme="ssh", username="gmueller", host="lx3a24", port=22, path=".bashrc")


def test_parse_url_without_user_and_port():
    url = parse_url("  sftp://example.com/data/file.pxlio")
    assert url.scheme == "sftp"
    assert url.username == ""
    assert url.host == "example.com"
    assert url.port == 22
    assert url.path == "data/file.pxlio"


def test_parse_url_custom_port():
    assert parse_url("ssh://example.com:2222/x").port == 2222


def test_parse_url_rejects_missing_scheme():
    with pytest.raises(SftpError):
        parse_url("example.com/file")


def test_parse_url_rejects_missing_host():
    with pytest.raises(SftpError):
        parse_url("ssh:///file")


def test_read_peek_ignore_and_eof():
    content = b"abcdef"
    with mock.patch("paramiko.SSHClient") as client_cls:
        client = _fake_client(_reader(content))
        client_cls.return_value = client
        with SftpFile("ssh://user@example.com/f") as remote:
            assert remote.peek() == content[0]
            assert remote.tell() == 0
            assert remote.read(2) == content[:2]
            assert remote.tell() == 2
            remote.ignore(1)
            assert remote.read(100) == content[3:]
            assert remote.peek() is None
            assert remote.is_eof()
        assert remote.closed
        client.close.assert_called_once()


def test_seek_then_read():
    content = b"0123456789"
    with mock.patch("paramiko.SSHClient") as client_cls:
        client_cls.return_value = _fake_client(_reader(content))
        remote = SftpFile("ssh://user@example.com/f")
        remote.seek(4)
        assert remote.read(3) == content[4:7]
        assert not remote.is_eof()
        remote.close()


def test_connect_uses_url_user_host_port():
    with mock.patch("paramiko.SSHClient") as client_cls:
        client = _fake_client(_reader(b"xyz"))
        client_cls.return_value = client
        remote = SftpFile("ssh://user@example.com:2022/dir/f", OpenMode.READ)
        assert remote.read(3) == b"xyz"
        remote.close()
        assert remote.closed
        args, kwargs = client.connect.call_args
        assert args[0] == "example.com"
        assert kwargs["port"] == 2022
        assert kwargs["username"] == "user"
        client.open_sftp.return_value.open.assert_called_once_with("dir/f", "rb")


def test_username_defaults_to_environment(monkeypatch):
    monkeypatch.setenv("USER", "user")
    with mock.patch("paramiko.SSHClient") as client_cls:
        client = _fake_client(_reader(b"data"))
        client_cls.return_value = client
        remote = SftpFile("ssh://example.com/f")
        assert remote.read(4) == b"data"
        remote.close()
        assert client.connect.call_args.kwargs["username"] == "user"


def test_write_creates_missing_file_with_owner_permissions():
    buffer = io.BytesIO()
    sftp = mock.MagicMock()

    def fake_open(path, mode):
        if mode == "r+b":
            raise FileNotFoundError(path)
        return buffer

    sftp.open.side_effect = fake_open
    with mock.patch("paramiko.SSHClient") as client_cls:
        client_cls.return_value = _fake_client(sftp)
        remote = SftpFile("ssh://user@example.com/out", OpenMode.WRITE)
        assert remote.write(b"payload") == len(b"payload")
        assert buffer.getvalue() == b"payload"
        sftp.chmod.assert_called_once_with("out", stat.S_IRWXU)


def test_overwrite_mode_truncates():
    buffer = io.BytesIO()
    sftp = mock.MagicMock()
    sftp.open.return_value = buffer
    with mock.patch("paramiko.SSHClient") as client_cls:
        client_cls.return_value = _fake_client(sftp)
        remote = SftpFile("ssh://user@example.com/out", OpenMode.WRITE | OpenMode.OVERWRITE)
        assert remote.write(b"ab") == 2
        assert buffer.getvalue() == b"ab"
        remote.close()
        sftp.open.assert_called_once_with("out", "wb")


def test_read_error_sets_eof():
    handle = mock.MagicMock()
    handle.read.side_effect = OSError("lost")
    sftp = mock.MagicMock()
    sftp.open.return_value = handle
    with mock.patch("paramiko.SSHClient") as client_cls:
        client_cls.return_value = _fake_client(sftp)
        remote = SftpFile("ssh://user@example.com/f")
        assert remote.read(5) == b""
        assert remote.is_eof()


def test_connect_failure_raises():
    with mock.patch("paramiko.SSHClient") as client_cls:
        client = _fake_client(_reader(b""))
        client.connect.side_effect = paramiko.SSHException("refused")
        client_cls.return_value = client
        with pytest.raises(SftpError):
            SftpFile("ssh://user@example.com/f")
        client.close.assert_called_once()


def test_open_failure_raises():
    sftp = mock.MagicMock()
    sftp.open.side_effect = PermissionError("denied")
    with mock.patch("paramiko.SSHClient") as client_cls:
        client_cls.return_value = _fake_client(sftp)
        with pytest.raises(SftpError):
            SftpFile("ssh://user@example.com/f")
        sftp.close.assert_called_once()


def test_mode_without_read_or_write_rejected():
    with pytest.raises(ValueError):
        SftpFile("ssh://user@example.com/f", OpenMode.OVERWRITE)


def test_operations_on_closed_file_raise():
    remote = SftpFile()
    assert remote.closed
    with pytest.raises(SftpError):
        remote.read(1)