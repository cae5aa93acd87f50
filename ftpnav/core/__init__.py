"""
Core FTP client logic.
Includes connection managers, parsers, the transfer executor and the session.
"""

from .connection import ControlConnectionManager
from .data_connection import DataConnectionManager
from .errors import (
    AuthError,
    FtpNavError,
    LocalIOError,
    LocalSourceUnavailable,
    NetworkError,
    ProtocolError,
    TransferError,
)
from .listing import EntryKind, ListingEntry, parse_listing, parse_listing_line
from .local_files import LocalEntry, LocalFileManager
from .parser import MessageStructure, Parser
from .session import Outcome, RemoteSession
from .transfer import BufferSink, FileSink, FileSource, TransferExecutor, TransferOptions, TransferResult, Verb

__all__ = [
    "ControlConnectionManager",
    "DataConnectionManager",
    "Parser",
    "MessageStructure",
    "EntryKind",
    "ListingEntry",
    "parse_listing",
    "parse_listing_line",
    "TransferExecutor",
    "TransferOptions",
    "TransferResult",
    "Verb",
    "BufferSink",
    "FileSink",
    "FileSource",
    "RemoteSession",
    "Outcome",
    "LocalFileManager",
    "LocalEntry",
    "FtpNavError",
    "TransferError",
    "NetworkError",
    "AuthError",
    "ProtocolError",
    "LocalIOError",
    "LocalSourceUnavailable",
]
