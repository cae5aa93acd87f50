"""Current remote directory tracking.

A locator is an absolute URL such as ``ftp://host/pub/`` that always ends in
a slash. Every locator the session holds is produced by the functions in this
module; nothing else edits locator strings.
"""

import logging
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "ftp"
DEFAULT_PORT = 21
PARENT = ".."
CURRENT = "."


def ensure_trailing_slash(url: str) -> str:
    if not url.endswith('/'):
        url += '/'
    return url


def normalize_url(url: str) -> str:
    """Turn user input into a root locator: add a scheme if missing and a trailing slash."""
    url = url.strip()
    if "://" not in url:
        url = f"{DEFAULT_SCHEME}://{url}"
    return ensure_trailing_slash(url)


def root_boundary(url: str) -> int:
    """Index of the slash that ends ``scheme://netloc``.

    For ``ftp://host`` (no path at all) this is ``len(url)``.
    """
    start = url.find("://")
    start = start + 3 if start != -1 else 0
    slash = url.find('/', start)
    return slash if slash != -1 else len(url)


def root_of(url: str) -> str:
    return url[:root_boundary(url)] + '/'


def parent(current: str) -> str:
    current = ensure_trailing_slash(current)
    last_slash = current.rfind('/', 0, len(current) - 1)
    if last_slash < root_boundary(current):
        # already at the server root
        return current
    return current[:last_slash + 1]


def resolve(current: str, target: str) -> str:
    """Locator reached from ``current`` by changing directory to ``target``."""
    current = ensure_trailing_slash(current)
    target = target.strip()
    if not target.startswith('/'):
        # "../" and "docs/" name the same places as ".." and "docs"
        target = target.rstrip('/')

    if target == PARENT:
        return parent(current)
    if target in ("", CURRENT):
        return current
    if target.startswith('/'):
        current = root_of(current)
        target = target.lstrip('/')
        if not target:
            return current

    return ensure_trailing_slash(current + target.rstrip('/'))


def join(current: str, name: str) -> str:
    """URL of entry ``name`` inside the directory ``current``."""
    name = name.strip().rstrip('/')
    if name.startswith('/'):
        return root_of(current) + name.lstrip('/')
    return ensure_trailing_slash(current) + name


def split_locator(url: str) -> Tuple[str, str, str]:
    """Split into ``(scheme, netloc, path)``; the path keeps its leading slash.

    Entry names may contain characters that are special in URLs (spaces,
    ``#``, ``?``), so this is a plain split rather than URL parsing.
    """
    scheme, sep, rest = url.partition("://")
    if not sep:
        scheme, rest = DEFAULT_SCHEME, url
    netloc, slash, path = rest.partition('/')
    return scheme.lower(), netloc, slash + path if slash else '/'


def parse_netloc(netloc: str) -> Tuple[Optional[str], Optional[str], str, int]:
    """Split ``user:password@host:port`` into its parts."""
    user = password = None
    userinfo, at, hostport = netloc.rpartition('@')
    if at:
        user, colon, pw = userinfo.partition(':')
        password = pw if colon else None
    else:
        hostport = netloc

    host, port = hostport, DEFAULT_PORT
    if hostport.startswith('['):
        # [ipv6]:port
        end = hostport.find(']')
        host = hostport[1:end]
        tail = hostport[end + 1:]
        if tail.startswith(':') and tail[1:].isdigit():
            port = int(tail[1:])
    elif hostport.count(':') == 1:
        name, _, port_text = hostport.partition(':')
        if port_text.isdigit():
            host, port = name, int(port_text)
    return user or None, password, host, port


def path_segments(path: str):
    return [segment for segment in path.split('/') if segment]


def basename(url: str) -> str:
    """Last path component of a locator, or the host name at the root."""
    _, netloc, path = split_locator(url)
    segments = path_segments(path)
    if segments:
        return segments[-1]
    return parse_netloc(netloc)[2]
