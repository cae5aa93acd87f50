import errno
import logging
import os
from dataclasses import dataclass

from .session import Outcome

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocalEntry:
    name: str
    is_dir: bool
    size: int = 0


class LocalFileManager:
    """Local counterpart of the remote verbs. Every method reports an Outcome."""

    def current_path(self) -> str:
        return os.getcwd()

    def list(self, path: str = ".") -> Outcome:
        try:
            entries = []
            with os.scandir(path) as it:
                for entry in it:
                    is_dir = entry.is_dir()
                    size = entry.stat().st_size if entry.is_file() else 0
                    entries.append(LocalEntry(entry.name, is_dir, size))
        except OSError as e:
            logger.error(f"Local listing of {path} failed: {e}")
            return Outcome(False, f"Cannot list local directory '{path}': {e.strerror or e}")

        # directories first, then by name
        entries.sort(key=lambda e: (not e.is_dir, e.name))
        return Outcome(True, f"{len(entries)} entries in {os.path.abspath(path)}", entries)

    def set_current(self, path: str) -> Outcome:
        try:
            os.chdir(path)
        except OSError as e:
            return Outcome(False, f"Cannot change local directory: {e.strerror or e}")
        return Outcome(True, f"Local directory changed to {os.getcwd()}")

    def create(self, path: str) -> Outcome:
        try:
            os.mkdir(path)
        except FileExistsError:
            return Outcome(False, f"Local directory '{path}' already exists")
        except OSError as e:
            return Outcome(False, f"Cannot create local directory '{path}': {e.strerror or e}")
        return Outcome(True, f"Local directory '{path}' created")

    def remove(self, path: str) -> Outcome:
        try:
            if os.path.isdir(path) and not os.path.islink(path):
                os.rmdir(path)
            else:
                os.remove(path)
        except OSError as e:
            if e.errno == errno.ENOTEMPTY:
                return Outcome(False, f"Cannot remove '{path}': directory not empty")
            return Outcome(False, f"Cannot remove '{path}': {e.strerror or e}")
        return Outcome(True, f"'{path}' removed")

    def rename(self, src: str, dst: str) -> Outcome:
        try:
            os.rename(src, dst)
        except OSError as e:
            return Outcome(False, f"Cannot move '{src}' to '{dst}': {e.strerror or e}")
        return Outcome(True, f"Moved '{src}' to '{dst}'")
