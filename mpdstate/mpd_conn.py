# mpdstate/mpd_conn.py
import socket

from .errors import ConnectError, TransportError

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600

BUF_SIZE = 16 * 1024   # one recv per response, anything larger is truncated

# ---------- connect ----------

def connect(host: str, port: int) -> socket.socket:
    """
    Resolve host and connect over TCP, trying every address getaddrinfo returns.
    The socket stays blocking with no timeout: 'idle' may wait forever.
    """
    try:
        sock = socket.create_connection((host, port))
    except OSError as e:
        raise ConnectError(f"could not connect to {host}:{port}", e) from e
    sock.settimeout(None)
    return sock

# ---------- request/response ----------

class MPDConnection:
    def __init__(self, sock: socket.socket, bufsize: int = BUF_SIZE):
        self.sock = sock
        # reused by every call, so consume a response before sending again
        self._buf = bytearray(bufsize)

    @classmethod
    def open(cls, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> "MPDConnection":
        conn = cls(connect(host, port))
        conn.read_greeting()
        return conn

    def _recv(self, what: str) -> str:
        try:
            n = self.sock.recv_into(self._buf)
        except OSError as e:
            raise TransportError(f"recv {what}", e) from e
        if n == 0:
            raise TransportError(f"recv {what}", "connection closed by server")
        return bytes(self._buf[:n]).decode("utf-8", errors="replace")

    def read_greeting(self) -> str:
        """
        Read and discard the 'OK MPD x.y.z' banner the server sends on connect.
        """
        return self._recv("greeting")

    def send(self, command: str) -> str:
        """
        Send one command line and return whatever a single read brings back.
        """
        try:
            self.sock.sendall((command + "\n").encode("utf-8"))
        except OSError as e:
            raise TransportError(f"send '{command}'", e) from e
        return self._recv(f"'{command}'")

    def close(self):
        sock, self.sock = self.sock, None
        if sock is not None:
            sock.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

