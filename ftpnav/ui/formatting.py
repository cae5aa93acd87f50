"""Human readable rendering of listings for the shell."""

COLOR_RESET = "\033[0m"
COLOR_DIR = "\033[1;34m"
COLOR_FILE = "\033[0m"
COLOR_SIZE = "\033[0;36m"

UNITS = ("B", "KB", "MB", "GB", "TB")

TYPE_WIDTH = 6
NAME_WIDTH = 40
SIZE_WIDTH = 15


def format_size_human(size: int) -> str:
    if size == 0:
        return "0 B"
    value = float(size)
    i = 0
    while value >= 1024.0 and i < len(UNITS) - 1:
        value /= 1024.0
        i += 1
    return f"{value:.0f} {UNITS[i]}" if i == 0 else f"{value:.1f} {UNITS[i]}"


def _is_dir(entry) -> bool:
    # remote ListingEntry has is_directory, LocalEntry has is_dir
    return bool(getattr(entry, "is_directory", getattr(entry, "is_dir", False)))


def render_listing(title: str, entries, color: bool = True) -> str:
    def paint(code, text):
        return f"{code}{text}{COLOR_RESET}" if color else text

    lines = [
        f"--- {title} ---",
        f"{'Type':<{TYPE_WIDTH}}{'Name':<{NAME_WIDTH}}{'Size':>{SIZE_WIDTH}}",
        "-" * (TYPE_WIDTH + NAME_WIDTH + SIZE_WIDTH),
    ]
    for entry in entries:
        is_dir = _is_dir(entry)
        head = f"{'DIR' if is_dir else 'FILE':<{TYPE_WIDTH}}{entry.name:<{NAME_WIDTH}}"
        line = paint(COLOR_DIR if is_dir else COLOR_FILE, head)
        if is_dir:
            line += f"{'-':>{SIZE_WIDTH}}"
        else:
            line += paint(COLOR_SIZE, f"{format_size_human(entry.size):>{SIZE_WIDTH}}")
        lines.append(line)
    lines.append("-" * (TYPE_WIDTH + NAME_WIDTH + SIZE_WIDTH))
    return "\n".join(lines)
