# tests/conftest.py
import os
import sys

import pytest

# path to the repo root (one level up from tests/)
REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# ensure repo root is importable so `import mpdstate.*` works
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)


@pytest.fixture
def fake_sock(mocker):
    """
    A MagicMock socket whose recv_into() hands out the given chunks, one per call.
    Usage: sock = fake_sock("OK MPD 0.23.5\n", "volume: 50\nOK\n")
    """
    def make(*chunks):
        queue = [c.encode("utf-8") if isinstance(c, str) else c for c in chunks]

        def recv_into(buf):
            data = queue.pop(0)
            n = min(len(data), len(buf))
            buf[:n] = data[:n]
            return n

        sock = mocker.MagicMock()
        sock.recv_into.side_effect = recv_into
        return sock
    return make


@pytest.fixture
def fake_conn(mocker):
    """
    A scripted MPD connection: send() returns the given responses in order.
    """
    def make(*responses):
        conn = mocker.MagicMock()
        conn.send.side_effect = list(responses)
        conn.__enter__.return_value = conn
        return conn
    return make
