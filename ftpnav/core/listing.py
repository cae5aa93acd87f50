"""Parsing of raw ``LIST`` output into structured entries.

Only the UNIX long format is understood (``ls -l`` style, which is what the
vast majority of servers send). Anything that does not look like that is
kept as a plain file entry named after the whole line, so a listing never
loses lines and never fails because of one odd record.
"""

import enum
import logging
import re
from dataclasses import dataclass
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)


class EntryKind(enum.Enum):
    DIRECTORY = "directory"
    FILE = "file"


@dataclass(frozen=True)
class ListingEntry:
    name: str
    kind: EntryKind
    size: int = 0

    @property
    def is_directory(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


# perms, links, owner, group, size, month, day, time-or-year, name
_UNIX_LINE = re.compile(
    r"(?P<perms>[-a-zA-Z]{10}[.+@]?)\s+"
    r"\d+\s+"
    r"\S+\s+"
    r"\S+\s+"
    r"(?P<size>\d+)\s+"
    r"\S+\s+\S+\s+\S+\s+"
    r"(?P<name>.+)"
)


def parse_unix_line(line: str) -> ListingEntry:
    line = line.rstrip("\r\n")
    match = _UNIX_LINE.fullmatch(line)
    if match is None:
        logger.debug(f"Unrecognised listing line kept as file: {line!r}")
        return ListingEntry(line, EntryKind.FILE, 0)

    kind = EntryKind.DIRECTORY if match.group("perms").startswith("d") else EntryKind.FILE
    return ListingEntry(match.group("name"), kind, int(match.group("size")))


LISTING_PARSERS: Dict[str, Callable[[str], ListingEntry]] = {
    "unix": parse_unix_line,
}


def parse_listing_line(line: str, fmt: str = "unix") -> ListingEntry:
    try:
        parse = LISTING_PARSERS[fmt]
    except KeyError:
        raise ValueError(f"Unknown listing format: {fmt}") from None
    return parse(line)


def parse_listing(text: str, fmt: str = "unix") -> List[ListingEntry]:
    """Parse a whole listing body, keeping server order and skipping blank lines."""
    return [parse_listing_line(line, fmt) for line in text.splitlines() if line.strip()]
