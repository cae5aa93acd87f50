import socket
import logging
from typing import Optional

from .errors import NetworkError

logger = logging.getLogger(__name__)


class ControlConnectionManager:
    def __init__(self, host: str, port: int, timeout: Optional[float] = None, encoding: str = 'utf-8'):
        self.host = host
        self.port = port
        self.socket: socket.socket = None
        self.reader = None
        self.timeout = timeout
        self.encoding = encoding

    def connect(self):
        if self.socket is not None:
            raise RuntimeError("Connection already established.")
        try:
            logger.info(f"Connecting to {self.host}:{self.port} (timeout={self.timeout}s)")
            self.socket = socket.create_connection((self.host, self.port), timeout=self.timeout)
            self.reader = self.socket.makefile('rb')
            logger.info(f"✓ Connected to {self.host}:{self.port}")
        except OSError as e:
            logger.error(f"✗ Failed to connect to {self.host}:{self.port} - {e}")
            self.socket = None
            raise NetworkError(f"Failed to connect to {self.host}:{self.port} - {e}") from e

    def disconnect(self):
        if self.reader:
            self.reader.close()
            self.reader = None
        if self.socket:
            try:
                logger.info(f"Closing connection to {self.host}:{self.port}")
                self.socket.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
            self.socket.close()
            logger.info(f"✓ Disconnected from {self.host}:{self.port}")
        self.socket = None

    def peer_host(self) -> str:
        if self.socket is None:
            raise RuntimeError("No connection established.")
        return self.socket.getpeername()[0]

    def send_command(self, command: str):
        if self.socket is None:
            raise RuntimeError("No connection established.")
        shown = "PASS ****" if command.upper().startswith("PASS ") else command
        if not command.endswith('\r\n'):
            command += '\r\n'
        logger.debug(f"→ SEND: {shown}")
        try:
            self.socket.sendall(command.encode(self.encoding))
        except OSError as e:
            raise NetworkError(f"Lost connection to {self.host}:{self.port} - {e}") from e

    def _read_line(self) -> str:
        try:
            raw = self.reader.readline()
        except OSError as e:
            raise NetworkError(f"Lost connection to {self.host}:{self.port} - {e}") from e
        if not raw:
            raise NetworkError(f"Connection closed by {self.host}:{self.port}")
        return raw.decode(self.encoding, errors='replace').rstrip('\r\n')

    def receive_response(self) -> str:
        """Read one complete reply, following ``ddd-`` continuation lines."""
        if self.socket is None:
            raise RuntimeError("No connection established.")
        line = self._read_line()
        lines = [line]
        if len(line) > 3 and line[:3].isdigit() and line[3] == '-':
            terminator = line[:3] + ' '
            while True:
                line = self._read_line()
                lines.append(line)
                if line.startswith(terminator) or line == terminator.strip():
                    break
        response = '\n'.join(lines)
        logger.debug(f"← RECV: {response}")
        return response
