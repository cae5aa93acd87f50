#!/usr/bin/env python3
"""
Entry point for the ftpnav client.

Starts the interactive shell by default, or the Streamlit web UI with --web.
"""

import argparse
import logging
import os
import subprocess
import sys

from ftpnav.config import Settings
from ftpnav.core.local_files import LocalFileManager
from ftpnav.core.session import RemoteSession
from ftpnav.core.transfer import TransferExecutor
from ftpnav.ui.shell import Shell

logger = logging.getLogger("ftpnav")

APP_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'ui', 'app.py')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ftpnav", description="Interactive FTP client and local file manager")
    parser.add_argument("url", nargs="?", help="Server URL to connect to on startup (e.g. ftp://host/pub)")
    parser.add_argument("credential", nargs="?", default="", help="user:password for the server")
    parser.add_argument("--web", action="store_true", help="Start the Streamlit web UI instead of the shell")
    parser.add_argument("--log-level", help="Logging level (default from FTPNAV_LOG_LEVEL)")
    parser.add_argument("--timeout", type=float, help="Socket timeout in seconds (default: none)")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colours in listings")
    return parser


def setup_logging(level: str):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def verify_dependencies(settings: Settings) -> bool:
    """
    Check that Streamlit is importable before handing the process over to it.
    """
    if settings.fast_start:
        logger.info("FAST_START enabled — skipping dependency verification")
        return True
    try:
        __import__('streamlit')
    except ImportError:
        logger.error("✗ Missing required module: streamlit")
        logger.error("  Install it with: pip install streamlit")
        return False
    logger.info("✓ streamlit available")
    return True


def start_streamlit(settings: Settings):
    logger.info(f"Starting Streamlit UI on {settings.web_host}:{settings.web_port}...")
    cmd = [
        'streamlit',
        'run',
        APP_PATH,
        f'--server.port={settings.web_port}',
        f'--server.address={settings.web_host}',
    ]
    os.environ['STREAMLIT_TELEMETRY_ENABLED'] = 'false'
    # the app reads its settings from the environment
    os.environ['FTPNAV_LOG_LEVEL'] = settings.log_level
    if settings.timeout is not None:
        os.environ['FTPNAV_TIMEOUT'] = str(settings.timeout)
    try:
        os.execvp(cmd[0], cmd)
    except OSError as e:
        logger.error(f"Failed to exec Streamlit: {e}")
        try:
            subprocess.run([sys.executable, '-m'] + cmd, check=True)
        except subprocess.CalledProcessError as e2:
            logger.error(f"Streamlit exited with error code {e2.returncode}")
            sys.exit(e2.returncode)


def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        sys.exit(2)

    if args.log_level:
        settings.log_level = args.log_level.upper()
    if args.timeout is not None:
        settings.timeout = args.timeout
    if args.no_color:
        settings.color = False
    setup_logging(settings.log_level)

    if args.web:
        if not verify_dependencies(settings):
            sys.exit(1)
        start_streamlit(settings)
        return

    executor = TransferExecutor(timeout=settings.timeout, chunk_size=settings.chunk_size,
                                skip_pasv_ip=settings.skip_pasv_ip)
    shell = Shell(RemoteSession(executor), LocalFileManager(), color=settings.color)
    if args.url:
        shell.report(shell.session.connect(args.url, args.credential))
    shell.run()


if __name__ == '__main__':
    main()
