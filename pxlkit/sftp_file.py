"""Random-access files on remote hosts reached over SSH/SFTP."""

from __future__ import annotations

import hashlib
import os
import stat
from dataclasses import dataclass
from enum import IntFlag
from types import TracebackType
from typing import Any

import paramiko

from pxlkit.logs import Logger, LogLevel

_log = Logger("pxlkit.sftp_file")

DEFAULT_PORT = 22
_WHITESPACE = " \t\n\r"


class SftpError(Exception):
    """Raised when a remote file cannot be reached, opened or used."""


class OpenMode(IntFlag):
    """How a remote file is opened."""

    READ = 1
    WRITE = 2
    OVERWRITE = 4


@dataclass(frozen=True)
class SftpUrl:
    """The parts of a ``scheme://[user@]host[:port]/path`` address."""

    scheme: str
    username: str
    host: str
    port: int = DEFAULT_PORT
    path: str = ""


def parse_url(url: str) -> SftpUrl:
    """Split an address such as ``ssh://user@host:22/file`` into its parts.

    The path is taken relative to the login directory: the slash that ends
    the host part is not kept.
    """
    text = url.lstrip(_WHITESPACE)
    scheme, sep, rest = text.partition("://")
    if not sep:
        raise SftpError(f"not a remote file address: {url!r}")
    authority, _, path = rest.partition("/")
    username = ""
    if "@" in authority:
        username, _, authority = authority.partition("@")
    host = authority
    port = DEFAULT_PORT
    if ":" in authority:
        candidate_host, _, port_text = authority.rpartition(":")
        if port_text.isdigit():
            host, port = candidate_host, int(port_text)
    if not host:
        raise SftpError(f"no host in address: {url!r}")
    _log(LogLevel.DEBUG, "URL:", url)
    _log(LogLevel.DEBUG, "Username:", username)
    _log(LogLevel.DEBUG, "Host:", host)
    _log(LogLevel.DEBUG, "Path:", path)
    return SftpUrl(scheme=scheme, username=username, host=host, port=port, path=path)


def _format_fingerprint(digest: bytes) -> str:
    return " ".join(f"{byte:02X}" for byte in digest)


class SftpFile:
    """A remote file opened over SFTP, authenticated through the SSH agent."""

    def __init__(self, filename: str | None = None, mode: OpenMode | int = OpenMode.READ) -> None:
        self._client: Any = None
        self._sftp: Any = None
        self._file: Any = None
        self._eof = False
        self.url: SftpUrl | None = None
        if filename is not None:
            self.open(filename, mode)

    @property
    def closed(self) -> bool:
        return self._file is None

    @property
    def _handle(self) -> Any:
        if self._file is None:
            raise SftpError("remote file is not open")
        return self._file

    def open(self, filename: str, mode: OpenMode | int = OpenMode.READ) -> None:
        """Connect to the host named in ``filename`` and open the file there."""
        self.close()
        target = parse_url(filename)
        mode = OpenMode(mode)
        if not mode & (OpenMode.READ | OpenMode.WRITE):
            raise ValueError("open mode must include READ or WRITE")
        username = target.username or os.environ.get("USER", "")

        client = paramiko.SSHClient()
        client.set_missing_host_key_policy(paramiko.AutoAddPolicy())
        try:
            client.connect(
                target.host,
                port=target.port,
                username=username or None,
                allow_agent=True,
                look_for_keys=False,
            )
        except (paramiko.SSHException, OSError) as exc:
            client.close()
            raise SftpError(
                f"could not connect to host '{target.host}' at port {target.port}: {exc}"
            ) from exc
        _log(LogLevel.INFO, f"Connect to ssh server '{target.host}' at port {target.port}")
        self._log_fingerprint(client)

        try:
            sftp = client.open_sftp()
        except (paramiko.SSHException, OSError) as exc:
            client.close()
            raise SftpError(f"unable to init SFTP session: {exc}") from exc

        try:
            handle = self._open_remote(sftp, target.path, mode)
        except OSError as exc:
            sftp.close()
            client.close()
            _log(LogLevel.ERROR, "Unable to open file with SFTP:", exc)
            raise SftpError(f"unable to open '{target.path}' with SFTP: {exc}") from exc

        self._client, self._sftp, self._file = client, sftp, handle
        self.url = target
        self._eof = False

    @staticmethod
    def _open_remote(sftp: Any, path: str, mode: OpenMode) -> Any:
        if mode & OpenMode.READ:
            return sftp.open(path, "rb")
        if mode & OpenMode.OVERWRITE:
            return sftp.open(path, "wb")
        try:
            return sftp.open(path, "r+b")
        except FileNotFoundError:
            handle = sftp.open(path, "wb")
            sftp.chmod(path, stat.S_IRWXU)
            return handle

    @staticmethod
    def _log_fingerprint(client: Any) -> None:
        transport = client.get_transport()
        if transport is None:
            return
        key = transport.get_remote_server_key()
        digest = hashlib.sha1(key.asbytes()).digest()
        _log(LogLevel.INFO, "Fingerprint:", _format_fingerprint(digest))

    def close(self) -> None:
        """Close the file, the SFTP session and the connection."""
        if self._file is not None:
            self._file.close()
            self._file = None
        if self._sftp is not None:
            self._sftp.close()
            self._sftp = None
        if self._client is not None:
            self._client.close()
            self._client = None
            _log(LogLevel.INFO, "Disconnected")

    def is_eof(self) -> bool:
        """True once a read or peek ran past the end of the file."""
        return self._eof

    def tell(self) -> int:
        """The current position in the file."""
        return self._handle.tell()

    def seek(self, pos: int) -> None:
        """Move to the absolute position ``pos``."""
        self._handle.seek(pos)

    def peek(self) -> int | None:
        """The next byte without consuming it, or None at the end of the file."""
        if self._eof:
            return None
        handle = self._handle
        byte = handle.read(1)
        if byte:
            handle.seek(handle.tell() - 1)
            return byte[0]
        self._eof = True
        return None

    def read(self, count: int) -> bytes:
        """Read up to ``count`` bytes; fewer only at the end of the file."""
        handle = self._handle
        chunks: list[bytes] = []
        remaining = count
        while remaining > 0:
            try:
                chunk = handle.read(remaining)
            except OSError as exc:
                _log(LogLevel.ERROR, "Unable to read file with SFTP:", exc)
                self._eof = True
                return b""
            if not chunk:
                break
            chunks.append(chunk)
            remaining -= len(chunk)
        return b"".join(chunks)

    def write(self, data: bytes) -> int:
        """Write ``data`` and return the number of bytes written."""
        self._handle.write(data)
        return len(data)

    def ignore(self, count: int) -> None:
        """Skip ``count`` bytes forward."""
        handle = self._handle
        handle.seek(handle.tell() + count)

    def __enter__(self) -> "SftpFile":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()