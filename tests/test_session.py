import pytest

from ftpnav.core.listing import EntryKind
from ftpnav.core.session import NOT_CONNECTED, RemoteSession


def test_connect_normalizes_and_stores_no_credential(session):
    outcome = session.connect("ftp://host", "")
    assert outcome.ok
    assert session.get_current_locator() == "ftp://host/"
    assert not session.has_credential


def test_connect_does_not_touch_the_network(session, ftp_server):
    session.connect(ftp_server.url, "alice:secret")
    assert ftp_server.connections == 0


def test_connect_without_url_fails(session):
    assert not session.connect("  ")
    assert not session.is_connected


def test_verbs_before_connect_fail(session):
    for outcome in (session.list(), session.change_directory("a"), session.make_directory("a"),
                    session.delete_entry("a", EntryKind.FILE), session.download("a"), session.upload("a")):
        assert not outcome.ok
        assert outcome.detail == NOT_CONNECTED


def test_change_directory_scenario(session):
    session.connect("ftp://h/")
    session.change_directory("a")
    session.change_directory("b")
    session.change_directory("..")
    assert session.current_locator == "ftp://h/a/"


def test_change_directory_is_lazy(session, ftp_server):
    session.connect(ftp_server.url)
    assert session.change_directory("does-not-exist").ok
    assert ftp_server.connections == 0

    outcome = session.list()
    assert not outcome.ok
    assert "550" in outcome.detail


def test_list_returns_entries_in_server_order(session, ftp_server):
    ftp_server.listing_override = (
        "-rw-r--r-- 1 ftp ftp 10 Jan 01 00:00 zeta\r\n"
        "drwxr-xr-x 2 ftp ftp 4096 Jan 01 00:00 alpha\r\n"
        "broken line\r\n"
    )
    session.connect(ftp_server.url)
    outcome = session.list()
    assert outcome.ok
    assert [e.name for e in outcome.entries] == ["zeta", "alpha", "broken line"]
    assert outcome.entries[1].is_directory
    assert outcome.entries[2].size == 0


def test_list_real_directory(session, ftp_server):
    session.connect(ftp_server.url)
    session.change_directory("pub")
    outcome = session.list()
    assert outcome.ok
    by_name = {e.name: e for e in outcome.entries}
    assert by_name["empty"].kind is EntryKind.DIRECTORY
    assert by_name["readme.txt"].size == len(b"hello from the server\n")
    assert "my notes.txt" in by_name


def test_list_empty_directory(session, ftp_server):
    session.connect(ftp_server.url)
    session.change_directory("pub")
    session.change_directory("empty")
    outcome = session.list()
    assert outcome.ok
    assert outcome.entries == []


def test_make_and_delete_directory(session, ftp_server, ftp_root):
    session.connect(ftp_server.url)
    assert session.make_directory("fresh").ok
    assert (ftp_root / "fresh").is_dir()
    assert session.delete_entry("fresh", EntryKind.DIRECTORY).ok
    assert not (ftp_root / "fresh").exists()


def test_delete_file(session, ftp_server, ftp_root):
    session.connect(ftp_server.url + "pub")
    assert session.delete_entry("readme.txt", EntryKind.FILE).ok
    assert not (ftp_root / "pub" / "readme.txt").exists()


def test_delete_with_unknown_kind_is_a_failed_outcome(session):
    session.connect("ftp://h/")
    outcome = session.delete_entry("x", True)
    assert not outcome.ok
    assert "Unknown entry kind" in outcome.detail
    assert session.get_history()[-1]["error"]


def test_delete_failure_reports_and_keeps_state(session, ftp_server):
    session.connect(ftp_server.url + "pub", "alice:secret")
    outcome = session.delete_entry("ghost.txt", EntryKind.FILE)
    assert not outcome.ok
    assert "550" in outcome.detail
    assert session.current_locator == ftp_server.url + "pub/"
    assert session.has_credential


def test_download_and_upload_round_trip(session, ftp_server, ftp_root, local_dir):
    session.connect(ftp_server.url)
    session.change_directory("pub")

    outcome = session.download("my notes.txt")
    assert outcome.ok
    assert (local_dir / "my notes.txt").read_bytes() == b"spaces are fine\n"

    (local_dir / "report.csv").write_text("a,b\n1,2\n")
    outcome = session.upload("report.csv", "uploaded.csv")
    assert outcome.ok
    assert outcome.bytes_transferred == len("a,b\n1,2\n")
    assert (ftp_root / "pub" / "uploaded.csv").read_text() == "a,b\n1,2\n"


def test_upload_defaults_remote_name_to_local_basename(session, ftp_server, ftp_root, local_dir):
    sub = local_dir / "sub"
    sub.mkdir()
    (sub / "data.txt").write_bytes(b"x")
    session.connect(ftp_server.url)
    assert session.upload(str(sub / "data.txt")).ok
    assert (ftp_root / "data.txt").read_bytes() == b"x"


def test_upload_missing_local_file_makes_no_network_call(session, ftp_server, local_dir):
    session.connect(ftp_server.url)
    outcome = session.upload("not-here.txt")
    assert not outcome.ok
    assert "not-here.txt" in outcome.detail
    assert ftp_server.connections == 0


def test_failed_download_leaves_no_local_file(session, ftp_server, local_dir):
    session.connect(ftp_server.url)
    outcome = session.download("missing.bin", "missing.bin")
    assert not outcome.ok
    assert not (local_dir / "missing.bin").exists()


def test_bad_credential_is_reported(session, ftp_server):
    session.connect(ftp_server.url, "alice:nope")
    outcome = session.list()
    assert not outcome.ok
    assert "Login failed" in outcome.detail


def test_unreachable_server_is_reported(session, closed_port):
    session.connect(f"ftp://127.0.0.1:{closed_port}")
    outcome = session.list()
    assert not outcome.ok
    assert "Failed to connect" in outcome.detail


def test_history_records_every_verb(session):
    session.connect("ftp://h/")
    session.change_directory("a")
    history = session.get_history()
    assert [h["command"] for h in history] == ["CONNECT ftp://h/", "CD a"]
    assert not any(h["error"] for h in history)
    session.clear_history()
    assert session.get_history() == []


def test_outcome_truthiness():
    session = RemoteSession()
    assert not session.list()
    assert session.connect("ftp://h")


def test_entry_names_with_trailing_slash(session, ftp_server, ftp_root):
    session.connect(ftp_server.url)
    assert session.make_directory("fresh/").ok
    assert (ftp_root / "fresh").is_dir()
    assert session.delete_entry("fresh/", EntryKind.DIRECTORY).ok
    assert not (ftp_root / "fresh").exists()


def test_zero_byte_download_creates_no_file(session, ftp_server, local_dir):
    session.connect(ftp_server.url + "pub")
    outcome = session.download("zero.dat")
    assert outcome.ok
    assert outcome.bytes_transferred == 0
    assert not (local_dir / "zero.dat").exists()


def test_interrupted_download_keeps_partial_file(session, ftp_server, local_dir):
    ftp_server.retr_fail_after = 100
    session.connect(ftp_server.url)
    outcome = session.download("top.bin")
    assert not outcome.ok
    assert "451" in outcome.detail
    partial = local_dir / "top.bin"
    assert partial.exists()
    assert partial.read_bytes() == bytes(range(100))
