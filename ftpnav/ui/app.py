import sys
import os

# Streamlit runs this file as a script; make the project importable from a checkout
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..', '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from datetime import datetime
import tempfile
import threading
import time
import logging

from ftpnav.config import Settings
from ftpnav.core.listing import EntryKind
from ftpnav.core.session import Outcome, RemoteSession
from ftpnav.core.transfer import TransferExecutor
from ftpnav.ui.formatting import format_size_human

import streamlit as st

settings = Settings.from_env()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


st.set_page_config(page_title="ftpnav", layout="wide")

# --- Helpers -----------------------------------------------------------------

def get_session() -> RemoteSession:
    if st.session_state.get("session") is None:
        executor = TransferExecutor(timeout=settings.timeout, chunk_size=settings.chunk_size,
                                    skip_pasv_ip=settings.skip_pasv_ip)
        st.session_state["session"] = RemoteSession(executor)
    return st.session_state["session"]


# Run a blocking verb in a thread while the page shows a spinner
def run_with_spinner(label, fn, *args):
    result = {"value": None, "error": None}

    def target():
        try:
            result["value"] = fn(*args)
        except Exception as e:
            logger.exception(f"[UI] {label} failed")
            result["error"] = e
    t = threading.Thread(target=target)
    t.start()
    with st.spinner(label):
        while t.is_alive():
            time.sleep(0.05)
    if result["error"] is not None:
        return Outcome(False, f"Error: {result['error']}")
    return result["value"]


def show(outcome):
    if outcome.ok:
        st.success(outcome.detail)
    else:
        st.error(outcome.detail)


session = get_session()

# --- UI ----------------------------------------------------------------------
st.title("ftpnav — FTP browser")

with st.sidebar:
    st.header("Connection")
    url = st.text_input("URL", value=session.current_locator or "ftp://")
    credential = st.text_input("user:password", value="", type="password")
    if st.button("Connect"):
        logger.info(f"[UI] Connect button clicked: {url}")
        show(session.connect(url, credential))

if not session.is_connected:
    st.info("Not connected. Enter a server URL in the sidebar.")
    st.stop()

col1, col2 = st.columns([3, 1])

with col1:
    st.subheader(session.current_locator)

    nav1, nav2, nav3 = st.columns([1, 1, 3])
    if nav1.button("Up"):
        show(session.change_directory(".."))
    # any click reruns the script and refetches the listing
    nav2.button("Refresh")
    target = nav3.text_input("Change directory", key="cd_target")
    if nav3.button("Go") and target:
        show(session.change_directory(target))

    outcome = run_with_spinner("Fetching listing...", session.list)
    if outcome.ok:
        rows = [{
            "Type": "DIR" if entry.is_directory else "FILE",
            "Name": entry.name,
            "Size": "-" if entry.is_directory else format_size_human(entry.size),
        } for entry in outcome.entries]
        if rows:
            st.table(rows)
        else:
            st.caption("Empty directory")
    else:
        st.error(outcome.detail)

    with st.expander("Create directory"):
        new_dir = st.text_input("Directory name", key="mkdir_name")
        if st.button("Create") and new_dir:
            show(run_with_spinner("Creating...", session.make_directory, new_dir))

    with st.expander("Delete"):
        victim = st.text_input("Name", key="rm_name")
        is_dir = st.checkbox("Is a directory", key="rm_is_dir")
        if st.button("Delete") and victim:
            kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
            show(run_with_spinner("Deleting...", session.delete_entry, victim, kind))

    with st.expander("Upload"):
        uploaded_file = st.file_uploader("File to upload", key="upload_file")
        remote_name = st.text_input("Remote name (optional)", key="upload_name")
        if st.button("Upload") and uploaded_file is not None:
            with tempfile.TemporaryDirectory() as tmp:
                local_path = os.path.join(tmp, uploaded_file.name)
                with open(local_path, "wb") as f:
                    f.write(uploaded_file.getbuffer())
                show(run_with_spinner("Uploading...", session.upload, local_path, remote_name or uploaded_file.name))

    with st.expander("Download"):
        wanted = st.text_input("Remote file", key="download_name")
        if st.button("Fetch") and wanted:
            with tempfile.TemporaryDirectory() as tmp:
                local_path = os.path.join(tmp, os.path.basename(wanted))
                result = run_with_spinner("Downloading...", session.download, wanted, local_path)
                show(result)
                if result.ok:
                    data = b""
                    if os.path.exists(local_path):
                        with open(local_path, "rb") as f:
                            data = f.read()
                    st.download_button("Save file", data=data, file_name=os.path.basename(wanted))

with col2:
    st.subheader("History")
    if st.button("Clear History"):
        session.clear_history()
        st.rerun()
    for entry in reversed(session.get_history()[-100:]):
        t = entry.get("time")
        time_str = t.isoformat(timespec="seconds") if isinstance(t, datetime) else str(t)
        with st.expander(f"{time_str} — {entry.get('command')}"):
            st.code(entry.get("detail"))
            if entry.get("error"):
                st.error("This entry had an error")


# Footer
st.markdown("---")
st.caption("ftpnav Streamlit UI — remote browsing, transfers and command history.")
