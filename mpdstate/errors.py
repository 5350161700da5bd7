# mpdstate/errors.py
# Everything here is fatal: the CLI prints one line and exits non-zero.
# Malformed protocol records never get this far, the parsers skip them.


class MPDStateError(Exception):
    """
    Base error. `op` names the operation that failed (e.g. "recv 'idle'"),
    `reason` is the underlying error text or exception.
    """

    def __init__(self, op: str, reason=None):
        super().__init__(op, reason)
        self.op = op
        self.reason = reason

    def __str__(self):
        if self.reason is None:
            return self.op
        text = getattr(self.reason, "strerror", None) or str(self.reason)
        return f"{self.op}: {text}"


class ConnectError(MPDStateError):
    pass


class TransportError(MPDStateError):
    pass


class ProtocolError(MPDStateError):
    pass
