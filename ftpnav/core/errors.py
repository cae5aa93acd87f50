"""Errors raised by the transfer layer.

RemoteSession catches every one of these and turns it into a failed Outcome,
so they never reach the command dispatcher.
"""


class FtpNavError(Exception):
    """Base class for all ftpnav errors."""

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class TransferError(FtpNavError):
    """A round trip against the server did not complete."""


class NetworkError(TransferError):
    """Transport level failure: DNS, refused, reset, timeout."""


class AuthError(NetworkError):
    """The server rejected the credential."""


class ProtocolError(TransferError):
    """The server answered with a non-success reply code."""

    def __init__(self, code: str, detail: str):
        super().__init__(detail)
        self.code = code


class LocalIOError(TransferError):
    """A local file could not be opened, created or written."""


class LocalSourceUnavailable(LocalIOError):
    """The local file to upload does not exist or cannot be read."""
