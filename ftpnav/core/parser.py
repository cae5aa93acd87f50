import logging
import re

logger = logging.getLogger(__name__)

RESPONSE_TYPES = {
    '1': 'preliminary',
    '2': 'success',
    '3': 'missing_info',
    '4': 'error',
    '5': 'error'
}

_PASV_RE = re.compile(r"(\d+),(\d+),(\d+),(\d+),(\d+),(\d+)")


class MessageStructure:
    def __init__(self, code: str, message: str, type: str):
        self.code = code
        self.message = message
        self.type = type

    @property
    def is_preliminary(self) -> bool:
        return self.type == 'preliminary'

    @property
    def is_success(self) -> bool:
        return self.type == 'success'

    def __str__(self):
        return f"{self.code} {self.message}"

    def __repr__(self):
        return f"MessageStructure(code={self.code!r}, type={self.type!r}, message={self.message!r})"


class Parser:
    def parse_data(self, data: str) -> MessageStructure:
        """Parse a complete (possibly multi-line) FTP reply."""
        data = data.strip()

        # Multi-line replies start with "ddd-" and end with "ddd "; the
        # code comes from the first line, the text is every line joined.
        lines = data.splitlines() or [""]
        code = lines[0][:3]

        if not code.isdigit() or len(code) != 3:
            logger.error(f"Invalid FTP response format: {data} (code={code})")
            return MessageStructure("000", data, "unknown")

        text_lines = []
        for line in lines:
            if line[:3] == code and len(line) > 3 and line[3] in (' ', '-'):
                text_lines.append(line[4:])
            elif line[:3] == code and len(line) == 3:
                text_lines.append("")
            else:
                text_lines.append(line.strip())
        message = "\n".join(text_lines).strip()

        ans = MessageStructure(code, message, RESPONSE_TYPES.get(code[0], 'unknown'))
        logger.debug(f"Parsed response: code={code}, type={ans.type}, message={message[:50]}")
        return ans

    def parse_pasv_response(self, message: str):
        """Parses the PASV response to extract IP and port."""
        match = _PASV_RE.search(message)
        if not match:
            logger.error(f"Failed to parse PASV response: {message}")
            raise ValueError("Invalid PASV response format")
        parts = match.groups()
        ip = '.'.join(parts[:4])
        port = (int(parts[4]) << 8) + int(parts[5])
        logger.debug(f"PASV parsed: {ip}:{port}")
        return ip, port
