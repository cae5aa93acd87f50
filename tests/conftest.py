import socket

import pytest

from fake_ftp_server import FakeFtpServer, hash_password
from ftpnav.core.session import RemoteSession
from ftpnav.core.transfer import TransferExecutor

USERS = {"alice": hash_password("secret")}


@pytest.fixture
def ftp_root(tmp_path):
    root = tmp_path / "remote"
    root.mkdir()
    (root / "pub").mkdir()
    (root / "pub" / "readme.txt").write_bytes(b"hello from the server\n")
    (root / "pub" / "my notes.txt").write_bytes(b"spaces are fine\n")
    (root / "pub" / "empty").mkdir()
    (root / "pub" / "zero.dat").write_bytes(b"")
    (root / "top.bin").write_bytes(bytes(range(256)) * 40)
    return root


@pytest.fixture
def ftp_server(ftp_root):
    server = FakeFtpServer(str(ftp_root), users=USERS).start()
    yield server
    server.stop()


@pytest.fixture
def executor():
    return TransferExecutor(timeout=5.0)


@pytest.fixture
def session(executor):
    return RemoteSession(executor)


@pytest.fixture
def local_dir(tmp_path, monkeypatch):
    local = tmp_path / "local"
    local.mkdir()
    monkeypatch.chdir(local)
    return local


@pytest.fixture
def closed_port():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(("127.0.0.1", 0))
    port = sock.getsockname()[1]
    sock.close()
    return port
