import socket
import logging
from typing import Optional

from .errors import NetworkError

logger = logging.getLogger(__name__)


class DataConnectionManager:
    def __init__(self, ip: str, port: int, timeout: Optional[float] = None, chunk_size: int = 4096):
        """
        Passive mode data connection for a single transfer.
        """
        self.ip = ip
        self.port = port
        self.timeout = timeout
        self.chunk_size = chunk_size
        self.data_socket: Optional[socket.socket] = None

    def connect(self):
        try:
            self.data_socket = socket.create_connection((self.ip, self.port), timeout=self.timeout)
        except OSError as e:
            raise NetworkError(f"Can't open data connection to {self.ip}:{self.port} - {e}") from e
        logger.debug(f"[DATA] Connected to {self.ip}:{self.port}")

    def close(self):
        if self.data_socket:
            self.data_socket.close()
            self.data_socket = None
            logger.debug(f"[DATA] Disconnected from {self.ip}:{self.port}")

    def receive_into(self, sink) -> int:
        """
        Read until the server closes the data connection, handing every chunk to ``sink``.
        """
        total = 0
        while True:
            try:
                data = self.data_socket.recv(self.chunk_size)
            except OSError as e:
                raise NetworkError(f"Data connection failed after {total} bytes - {e}") from e
            if not data:
                break
            sink.write(data)
            total += len(data)
        logger.debug(f"[DATA] Received {total} bytes")
        return total

    def send_from(self, source) -> int:
        """
        Send ``source`` until it is exhausted, then half-close so the server sees EOF.
        """
        total = 0
        try:
            while chunk := source.read(self.chunk_size):
                self.data_socket.sendall(chunk)
                total += len(chunk)
            self.data_socket.shutdown(socket.SHUT_WR)
        except OSError as e:
            raise NetworkError(f"Data connection failed after {total} bytes - {e}") from e
        logger.debug(f"[DATA] Sent {total} bytes")
        return total
