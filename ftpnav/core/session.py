"""The remote half of the client: one FTP server, one current directory.

``RemoteSession`` keeps the current locator and the credential and maps each
user verb onto a single round trip through :class:`TransferExecutor`. Verbs
never raise; they return an :class:`Outcome` that the caller presents.
"""

import logging
import os
import posixpath
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional

from .errors import LocalSourceUnavailable, TransferError
from .listing import EntryKind, ListingEntry, parse_listing
from .locator import join, normalize_url, resolve
from .transfer import BufferSink, FileSink, FileSource, TransferExecutor, TransferOptions, Verb

logger = logging.getLogger(__name__)

NOT_CONNECTED = "Not connected. Use: connect <url> [user:password]"


@dataclass
class Outcome:
    ok: bool
    detail: str
    entries: List = field(default_factory=list)
    bytes_transferred: int = 0

    def __bool__(self):
        return self.ok


class RemoteSession:
    def __init__(self, executor: TransferExecutor = None):
        self.executor = executor or TransferExecutor()
        self._locator: Optional[str] = None
        self._credential: Optional[str] = None
        # at most one verb in flight per session
        self._lock = threading.RLock()
        # history as list of dicts: {"time":..., "command":..., "detail":..., "error":bool}
        self.history = []

    # --- state -------------------------------------------------------------------

    @property
    def is_connected(self) -> bool:
        return self._locator is not None

    @property
    def current_locator(self) -> str:
        return self._locator or ""

    def get_current_locator(self) -> str:
        return self.current_locator

    @property
    def has_credential(self) -> bool:
        return self._credential is not None

    # --- verbs ---------------------------------------------------------------------

    def connect(self, url: str, credential: str = "") -> Outcome:
        """Set the base URL and credential. Does not contact the server."""
        with self._lock:
            if not url or not url.strip():
                return self._record("CONNECT", Outcome(False, "No URL given"))
            self._locator = normalize_url(url)
            self._credential = credential or None
            logger.info(f"Base URL set to {self._locator}")
            return self._record(f"CONNECT {self._locator}", Outcome(True, f"Base URL set to {self._locator}"))

    def list(self) -> Outcome:
        def run():
            sink = BufferSink()
            result = self.executor.execute(self._options(self._locator, Verb.LIST, sink=sink))
            entries: List[ListingEntry] = parse_listing(sink.text())
            return Outcome(True, f"{len(entries)} entries in {self._locator}", entries, result.bytes_transferred)
        return self._run("LIST", run)

    def change_directory(self, name: str) -> Outcome:
        """Move the current locator. The server is not asked whether ``name`` exists."""
        def run():
            if not name or not name.strip():
                return Outcome(False, "No directory given")
            self._locator = resolve(self._locator, name)
            return Outcome(True, f"Directory changed to {self._locator}")
        return self._run(f"CD {name}", run)

    def make_directory(self, name: str) -> Outcome:
        def run():
            result = self.executor.execute(self._options(join(self._locator, name), Verb.MKDIR))
            return Outcome(True, f"Remote directory '{name}' created ({result.reply})")
        return self._entry_verb(f"MKDIR {name}", name, run)

    def delete_entry(self, name: str, kind: EntryKind) -> Outcome:
        if not isinstance(kind, EntryKind):
            with self._lock:
                return self._record(f"RM {name}", Outcome(False, f"Unknown entry kind {kind!r}"))
        label = "directory" if kind is EntryKind.DIRECTORY else "file"

        def run():
            verb = Verb.RMDIR if kind is EntryKind.DIRECTORY else Verb.DELETE
            result = self.executor.execute(self._options(join(self._locator, name), verb))
            return Outcome(True, f"Remote {label} '{name}' deleted ({result.reply})")
        return self._entry_verb(f"RM {name} ({label})", name, run)

    def download(self, remote_name: str, local_destination: str = None) -> Outcome:
        local = local_destination or posixpath.basename(remote_name.rstrip('/'))

        def run():
            sink = FileSink(local)
            result = self.executor.execute(self._options(join(self._locator, remote_name), Verb.DOWNLOAD, sink=sink))
            return Outcome(True, f"'{remote_name}' downloaded to '{local}' ({result.bytes_transferred} bytes)",
                           bytes_transferred=result.bytes_transferred)
        return self._entry_verb(f"GET {remote_name} {local}", remote_name, run)

    def upload(self, local_source: str, remote_name: str = None) -> Outcome:
        remote = remote_name or os.path.basename(local_source)

        def run():
            try:
                source = FileSource.open(local_source)
            except LocalSourceUnavailable as e:
                logger.error(e.detail)
                return Outcome(False, e.detail)
            result = self.executor.execute(self._options(join(self._locator, remote), Verb.UPLOAD, source=source))
            return Outcome(True, f"'{local_source}' uploaded as '{remote}' ({result.bytes_transferred} bytes)",
                           bytes_transferred=result.bytes_transferred)
        return self._entry_verb(f"PUT {local_source} {remote}", remote, run)

    # --- history -------------------------------------------------------------------

    def get_history(self):
        """Return a copy of the history list."""
        return list(self.history)

    def clear_history(self):
        self.history.clear()

    # --- helpers ---------------------------------------------------------------------

    def _options(self, url: str, verb: Verb, sink=None, source=None) -> TransferOptions:
        return TransferOptions(url=url, verb=verb, sink=sink, source=source, credential=self._credential)

    def _entry_verb(self, command: str, name: str, fn: Callable[[], Outcome]) -> Outcome:
        def run():
            if not name or not name.strip():
                return Outcome(False, "No name given")
            return fn()
        return self._run(command, run)

    def _run(self, command: str, fn: Callable[[], Outcome]) -> Outcome:
        with self._lock:
            if not self.is_connected:
                return self._record(command, Outcome(False, NOT_CONNECTED))
            try:
                outcome = fn()
            except TransferError as e:
                logger.error(f"{command} failed: {e.detail}")
                outcome = Outcome(False, e.detail)
            return self._record(command, outcome)

    def _record(self, command: str, outcome: Outcome) -> Outcome:
        self.history.append({
            "time": datetime.now(),
            "command": command,
            "detail": outcome.detail,
            "error": not outcome.ok
        })
        return outcome
