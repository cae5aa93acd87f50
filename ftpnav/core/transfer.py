"""Single round trips against an FTP server.

Every call to :meth:`TransferExecutor.execute` opens its own control
connection, logs in, walks to the directory named by the URL, runs exactly
one verb and disconnects. Nothing survives between calls: the options for a
round trip are an immutable :class:`TransferOptions` built fresh by the
caller, and the executor itself only holds configuration.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .connection import ControlConnectionManager
from .data_connection import DataConnectionManager
from .errors import AuthError, LocalIOError, LocalSourceUnavailable, NetworkError, ProtocolError, TransferError
from .locator import parse_netloc, path_segments, split_locator
from .parser import MessageStructure, Parser

logger = logging.getLogger(__name__)

ANONYMOUS_USER = "anonymous"
ANONYMOUS_PASSWORD = "anonymous@"


class Verb(enum.Enum):
    LIST = "LIST"
    DOWNLOAD = "RETR"
    UPLOAD = "STOR"
    MKDIR = "MKD"
    RMDIR = "RMD"
    DELETE = "DELE"

    @property
    def command(self) -> str:
        return self.value

    @property
    def uses_data_connection(self) -> bool:
        return self in (Verb.LIST, Verb.DOWNLOAD, Verb.UPLOAD)


# --- sinks and sources ----------------------------------------------------------

class BufferSink:
    """Collects received bytes in memory (used for listings)."""

    def __init__(self):
        self._buffer = bytearray()

    def write(self, data: bytes) -> int:
        self._buffer += data
        return len(data)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)

    def text(self, encoding: str = 'utf-8') -> str:
        return self._buffer.decode(encoding, errors='replace')

    def close(self):
        pass


class FileSink:
    """Writes received bytes to a local file.

    The file is only created when the first chunk arrives, so a download that
    fails before any data (or transfers nothing) leaves no file behind. A
    download that fails halfway leaves the partial file where it is.
    """

    def __init__(self, path: str):
        self.path = path
        self.stream = None
        self.bytes_written = 0

    @property
    def opened(self) -> bool:
        return self.stream is not None

    def write(self, data: bytes) -> int:
        if self.stream is None:
            try:
                self.stream = open(self.path, 'wb')
            except OSError as e:
                raise LocalIOError(f"Cannot create local file '{self.path}': {e.strerror or e}") from e
            logger.debug(f"Opened local destination {self.path}")
        try:
            self.stream.write(data)
        except OSError as e:
            raise LocalIOError(f"Cannot write local file '{self.path}': {e.strerror or e}") from e
        self.bytes_written += len(data)
        return len(data)

    def close(self):
        if self.stream is not None:
            self.stream.close()
            self.stream = None


class FileSource:
    """Reads a local file for upload. Use :meth:`open`."""

    def __init__(self, stream, path: str):
        self.stream = stream
        self.path = path

    @classmethod
    def open(cls, path: str) -> "FileSource":
        try:
            stream = open(path, 'rb')
        except OSError as e:
            raise LocalSourceUnavailable(f"Cannot open local file '{path}': {e.strerror or e}") from e
        return cls(stream, path)

    def read(self, size: int) -> bytes:
        try:
            return self.stream.read(size)
        except OSError as e:
            raise LocalIOError(f"Cannot read local file '{self.path}': {e.strerror or e}") from e

    def close(self):
        if self.stream is not None:
            self.stream.close()
            self.stream = None


# --- round trips -------------------------------------------------------------------

@dataclass(frozen=True)
class TransferOptions:
    url: str
    verb: Verb
    sink: Optional[object] = None
    source: Optional[object] = None
    credential: Optional[str] = None


@dataclass(frozen=True)
class TransferResult:
    bytes_transferred: int
    reply: MessageStructure


def split_credential(credential: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """``"user:password"`` -> ``("user", "password")``; empty -> ``(None, None)``."""
    if not credential:
        return None, None
    user, _, password = credential.partition(':')
    return user, password


class TransferExecutor:
    def __init__(self, timeout: Optional[float] = None, chunk_size: int = 4096,
                 skip_pasv_ip: bool = True, parser: Parser = None):
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.skip_pasv_ip = skip_pasv_ip
        self.parser = parser or Parser()

    def execute(self, options: TransferOptions) -> TransferResult:
        """Perform one round trip. Raises a :class:`TransferError` subclass on failure.

        The sink and source in ``options`` are closed before returning, on
        success and on failure alike.
        """
        try:
            return self._execute(options)
        finally:
            for endpoint in (options.sink, options.source):
                if endpoint is not None:
                    endpoint.close()

    def _execute(self, options: TransferOptions) -> TransferResult:
        verb = options.verb
        scheme, netloc, path = split_locator(options.url)
        if scheme != "ftp":
            raise TransferError(f"Unsupported URL scheme '{scheme}' in {options.url}")
        url_user, url_password, host, port = parse_netloc(netloc)
        if not host:
            raise NetworkError(f"No host in URL {options.url}")

        user, password = split_credential(options.credential)
        if user is None:
            user, password = url_user, url_password
        if user is None:
            user, password = ANONYMOUS_USER, ANONYMOUS_PASSWORD

        segments = path_segments(path)
        if verb is Verb.LIST:
            directories, name = segments, None
        else:
            if not segments or path.endswith('/'):
                raise TransferError(f"{verb.command} needs an entry name, got {options.url}")
            directories, name = segments[:-1], segments[-1]

        if verb is Verb.UPLOAD and options.source is None:
            raise LocalSourceUnavailable("No local source to upload")
        if verb in (Verb.LIST, Verb.DOWNLOAD) and options.sink is None:
            raise TransferError(f"{verb.command} needs a sink")

        logger.info(f"{verb.command} {options.url}")
        conn = ControlConnectionManager(host, port, self.timeout)
        try:
            conn.connect()
            greeting = self._reply(conn)
            if not greeting.is_success:
                raise NetworkError(f"Server not ready: {greeting}")
            self._login(conn, user, password)
            self._command(conn, "TYPE A" if verb is Verb.LIST else "TYPE I")
            for directory in directories:
                self._command(conn, f"CWD {directory}")

            if verb.uses_data_connection:
                count, reply = self._transfer(conn, options, name)
            else:
                count, reply = 0, self._command(conn, f"{verb.command} {name}")

            self._quit(conn)
            logger.info(f"{verb.command} {options.url} done: {reply} ({count} bytes)")
            return TransferResult(count, reply)
        finally:
            conn.disconnect()

    # --- protocol steps ----------------------------------------------------------

    def _reply(self, conn: ControlConnectionManager) -> MessageStructure:
        return self.parser.parse_data(conn.receive_response())

    def _command(self, conn: ControlConnectionManager, command: str) -> MessageStructure:
        conn.send_command(command)
        reply = self._reply(conn)
        if not reply.is_success:
            raise ProtocolError(reply.code, f"{command.split()[0]} failed: {reply}")
        return reply

    def _login(self, conn: ControlConnectionManager, user: str, password: Optional[str]):
        conn.send_command(f"USER {user}")
        reply = self._reply(conn)
        if reply.type == 'missing_info':
            conn.send_command(f"PASS {password or ''}")
            reply = self._reply(conn)
        if reply.code == '530':
            raise AuthError(f"Login failed: {reply}")
        if not reply.is_success:
            raise ProtocolError(reply.code, f"Login failed: {reply}")
        logger.debug(f"Logged in as {user}")

    def _transfer(self, conn: ControlConnectionManager, options: TransferOptions, name: Optional[str]):
        verb = options.verb
        pasv = self._command(conn, "PASV")
        try:
            ip, port = self.parser.parse_pasv_response(pasv.message)
        except ValueError:
            raise ProtocolError(pasv.code, f"Unusable PASV reply: {pasv}") from None
        if self.skip_pasv_ip:
            ip = conn.peer_host()

        data = DataConnectionManager(ip, port, self.timeout, self.chunk_size)
        try:
            data.connect()
            command = verb.command if name is None else f"{verb.command} {name}"
            conn.send_command(command)
            reply = self._reply(conn)
            if not (reply.is_preliminary or reply.is_success):
                raise ProtocolError(reply.code, f"{verb.command} failed: {reply}")

            if verb is Verb.UPLOAD:
                count = data.send_from(options.source)
            else:
                count = data.receive_into(options.sink)
        finally:
            data.close()

        if reply.is_preliminary:
            reply = self._reply(conn)
            if not reply.is_success:
                raise ProtocolError(reply.code, f"{verb.command} failed after {count} bytes: {reply}")
        return count, reply

    def _quit(self, conn: ControlConnectionManager):
        try:
            conn.send_command("QUIT")
            self._reply(conn)
        except NetworkError as e:
            logger.debug(f"QUIT not acknowledged: {e}")
