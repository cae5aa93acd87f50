"""Runtime settings, read from ``FTPNAV_*`` environment variables."""

import os
from dataclasses import dataclass
from typing import Optional

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUE_VALUES


def _env_float(name: str) -> Optional[float]:
    value = os.getenv(name, '').strip()
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number of seconds, got {value!r}") from None


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, '').strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}") from None


@dataclass
class Settings:
    # None keeps sockets blocking with no timeout
    timeout: Optional[float] = None
    chunk_size: int = 4096
    skip_pasv_ip: bool = True
    log_level: str = 'WARNING'
    color: bool = True
    fast_start: bool = False
    web_host: str = '0.0.0.0'
    web_port: int = 8501

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            timeout=_env_float('FTPNAV_TIMEOUT'),
            chunk_size=_env_int('FTPNAV_CHUNK_SIZE', 4096),
            skip_pasv_ip=_env_flag('FTPNAV_SKIP_PASV_IP', True),
            log_level=os.getenv('FTPNAV_LOG_LEVEL', 'WARNING').upper(),
            color=_env_flag('FTPNAV_COLOR', True),
            fast_start=_env_flag('FTPNAV_FAST_START', False),
            web_host=os.getenv('FTPNAV_WEB_HOST', '0.0.0.0'),
            web_port=_env_int('FTPNAV_WEB_PORT', 8501),
        )
