"""Line oriented front end: reads commands and dispatches them to the
remote session and the local file manager."""

import logging
import os

from ftpnav.core.listing import EntryKind
from ftpnav.core.local_files import LocalFileManager
from ftpnav.core.locator import basename
from ftpnav.core.session import RemoteSession
from .command import Command
from .formatting import render_listing
from .levenstein import get_suggestion

logger = logging.getLogger(__name__)

HELP_TEXT = """
Remote commands (FTP):
  connect <url> [user:password]  - Set the server URL (e.g. connect ftp://demo.wftpserver.com demo:demo)
  ls / dir                       - List the remote directory
  cd <directory>                 - Change remote directory ('..' goes up)
  pwd                            - Show the remote URL
  mkdir <directory>              - Create a remote directory
  rm <name> [is_dir]             - Delete a remote file, or a directory when is_dir is 1/true
  get <remote_file> [local_file] - Download a file
  put <local_file> [remote_file] - Upload a file
Local commands:
  lls / ldir                     - List the local directory
  lcd <directory>                - Change local directory
  lmkdir <directory>             - Create a local directory
  lrm <path>                     - Remove a local file or empty directory
  lmv <from> <to>                - Move or rename a local file or directory
General:
  help                           - Show this help
  exit / quit                    - Leave
""".strip("\n")

DIRECTORY_FLAGS = ("1", "true", "yes", "d", "dir", "directory")
FILE_FLAGS = ("0", "false", "no", "f", "file")


def parse_kind(flag: str):
    flag = flag.lower()
    if flag in DIRECTORY_FLAGS:
        return EntryKind.DIRECTORY
    if flag in FILE_FLAGS:
        return EntryKind.FILE
    return None


class Shell:
    def __init__(self, session: RemoteSession = None, local: LocalFileManager = None,
                 output=print, color: bool = True):
        self.session = session or RemoteSession()
        self.local = local or LocalFileManager()
        self.output = output
        self.color = color
        self.handlers = {
            "connect": self._connect,
            "ls": self._ls,
            "dir": self._ls,
            "cd": self._cd,
            "pwd": self._pwd,
            "mkdir": self._mkdir,
            "rm": self._rm,
            "get": self._get,
            "put": self._put,
            "lls": self._lls,
            "ldir": self._lls,
            "lcd": self._lcd,
            "lmkdir": self._lmkdir,
            "lrm": self._lrm,
            "lmv": self._lmv,
            "help": self._help,
        }

    def prompt(self) -> str:
        local_name = os.path.basename(self.local.current_path()) or self.local.current_path()
        remote_name = basename(self.session.current_locator) if self.session.is_connected else ""
        return f"\nlocal:{local_name} | remote:{remote_name}> "

    def run(self, input_fn=input):
        self.output("Simple interactive FTP client / file manager")
        self._help(None)
        while True:
            try:
                line = input_fn(self.prompt())
            except (EOFError, KeyboardInterrupt):
                self.output("")
                break
            if not self.execute(line):
                break
        self.output("Goodbye!")

    def execute(self, line: str) -> bool:
        """Run one command line. Returns False when the user asked to leave."""
        try:
            command = Command(line)
        except ValueError as e:
            self.output(f"Cannot parse command: {e}")
            return True

        name = command.get_name()
        if not name:
            return True
        if name in ("exit", "quit"):
            return False

        handler = self.handlers.get(name)
        if handler is None:
            suggestion = get_suggestion(name)
            hint = f" Did you mean '{suggestion}'?" if suggestion else ""
            self.output(f"Unknown command '{name}'.{hint} Type 'help' for the list of commands.")
            return True

        logger.debug(f"Dispatching {command}")
        handler(command)
        return True

    # --- presentation ----------------------------------------------------------------

    def report(self, outcome):
        self.output(outcome.detail if outcome.ok else f"Error: {outcome.detail}")

    def _usage(self, command: Command, allowed, usage: str) -> bool:
        if any(command.require_args(count) for count in allowed):
            return True
        self.output(f"Usage: {usage}")
        return False

    # --- remote ----------------------------------------------------------------------

    def _connect(self, command):
        if self._usage(command, (1, 2), "connect <url> [user:password]"):
            self.report(self.session.connect(command.get_arg(0), command.get_arg(1, "")))

    def _ls(self, command):
        outcome = self.session.list()
        if not outcome.ok:
            self.report(outcome)
            return
        self.output(render_listing(f"Remote directory {self.session.current_locator}",
                                   outcome.entries, self.color))

    def _cd(self, command):
        if self._usage(command, (1,), "cd <directory>"):
            self.report(self.session.change_directory(command.get_arg(0)))

    def _pwd(self, command):
        if self.session.is_connected:
            self.output(self.session.current_locator)
        else:
            self.output("Not connected.")

    def _mkdir(self, command):
        if self._usage(command, (1,), "mkdir <directory>"):
            self.report(self.session.make_directory(command.get_arg(0)))

    def _rm(self, command):
        if not self._usage(command, (1, 2), "rm <name> [is_dir(0|1)]"):
            return
        kind = parse_kind(command.get_arg(1, "0"))
        if kind is None:
            self.output("Usage: rm <name> [is_dir(0|1)]")
            return
        self.report(self.session.delete_entry(command.get_arg(0), kind))

    def _get(self, command):
        if self._usage(command, (1, 2), "get <remote_file> [local_file]"):
            self.report(self.session.download(command.get_arg(0), command.get_arg(1)))

    def _put(self, command):
        if self._usage(command, (1, 2), "put <local_file> [remote_file]"):
            self.report(self.session.upload(command.get_arg(0), command.get_arg(1)))

    # --- local -----------------------------------------------------------------------

    def _lls(self, command):
        path = command.get_arg(0, ".")
        outcome = self.local.list(path)
        if not outcome.ok:
            self.report(outcome)
            return
        self.output(render_listing(f"Local directory {os.path.abspath(path)}", outcome.entries, self.color))

    def _lcd(self, command):
        if self._usage(command, (1,), "lcd <directory>"):
            self.report(self.local.set_current(command.get_arg(0)))

    def _lmkdir(self, command):
        if self._usage(command, (1,), "lmkdir <directory>"):
            self.report(self.local.create(command.get_arg(0)))

    def _lrm(self, command):
        if self._usage(command, (1,), "lrm <path>"):
            self.report(self.local.remove(command.get_arg(0)))

    def _lmv(self, command):
        if self._usage(command, (2,), "lmv <from> <to>"):
            self.report(self.local.rename(command.get_arg(0), command.get_arg(1)))

    def _help(self, command):
        self.output(HELP_TEXT)
