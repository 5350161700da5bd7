# This file is the watch loop
#
# What it does:
# - first pass: ask "status" and "outputs", print everything
# - then "idle" until MPD reports a change
# - re-ask only what the change touched, print only what differs
# - with -1: one pass, optionally stopping at a single property

import enum
import re
import sys
from typing import NamedTuple, Optional

from .errors import ProtocolError
from .protocol import ChangeSet, ack_message, decode_changes, parse_records
from .state import OutputTracker, StateCache, format_output, format_property

_OUTPUT_SELECTOR = re.compile(r"output(\d+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class State(enum.Enum):
    INIT = "init"
    FETCH_STATUS_AND_OUTPUTS = "fetch"
    AWAIT_IDLE = "idle"
    TERMINATED = "terminated"


class Selector(NamedTuple):
    key: Optional[str] = None
    output_id: Optional[int] = None


def parse_selector(text: Optional[str]) -> Optional[Selector]:
    """
    "output3" selects output id 3, anything else is a status key.
    """
    if not text:
        return None
    m = _OUTPUT_SELECTOR.fullmatch(text)
    if m:
        return Selector(output_id=int(m.group(1)))
    return Selector(key=text)


def _to_int(text: str) -> int:
    m = _LEADING_INT.match(text or "")
    return int(m.group(1)) if m else 0


class Watcher:
    def __init__(self, conn, sink=None, once: bool = False, selector: Optional[Selector] = None,
                 cache: Optional[StateCache] = None, outputs: Optional[OutputTracker] = None):
        self.conn = conn
        self.sink = sink if sink is not None else sys.stdout
        self.once = once
        self.selector = selector if once else None
        self.cache = cache if cache is not None else StateCache()
        self.outputs = outputs if outputs is not None else OutputTracker()

        self.state = State.INIT
        self.changes = ChangeSet.NONE
        self.matched = False

    # ---- plumbing ----

    def _query(self, command: str) -> str:
        text = self.conn.send(command)
        ack = ack_message(text)
        if ack:
            raise ProtocolError(f"'{command}'", ack)
        return text

    def _emit(self, line: str):
        self.sink.write(line + "\n")

    def _finish(self, value: str):
        # filtered single-shot: bare value, nothing else
        self._emit(value)
        self.matched = True
        self.state = State.TERMINATED

    # ---- fetch steps ----

    def fetch_status(self) -> bool:
        """
        Ask "status" and print changed properties in server order.
        Returns True when the selected property was found.
        """
        sel = self.selector
        for key, value in parse_records(self._query("status")):
            if not self.cache.update(key, value):
                continue
            if sel is None:
                self._emit(format_property(key, value))
            elif sel.key == key:
                self._finish(value)
                return True
        return False

    def fetch_outputs(self) -> bool:
        """
        Ask "outputs" and print outputs that are new or flipped state.
        Records come as outputid/outputname/outputenabled groups; a group is
        evaluated on its outputenabled line. Returns True on a selector match.
        """
        sel = self.selector
        output_id, name = None, ""
        for key, value in parse_records(self._query("outputs")):
            if key == "outputid":
                output_id, name = _to_int(value), ""
            elif key == "outputname":
                name = value
            elif key == "outputenabled":
                if output_id is None:
                    # no outputid in this group, nothing to attach it to
                    continue
                if sel is not None:
                    if sel.output_id == output_id:
                        self._finish(value)
                        return True
                elif self.outputs.update(output_id, name, bool(_to_int(value))):
                    self._emit(format_output(output_id, name, value))
                output_id, name = None, ""
        return False

    # ---- state machine ----

    def step(self) -> State:
        if self.state is State.INIT:
            self.changes = ChangeSet.ALL
            self.state = State.FETCH_STATUS_AND_OUTPUTS

        elif self.state is State.FETCH_STATUS_AND_OUTPUTS:
            try:
                if self.changes & ChangeSet.STATUS and self.fetch_status():
                    return self.state
                if self.changes & ChangeSet.OUTPUT and self.fetch_outputs():
                    return self.state
            finally:
                self.sink.flush()
            self.state = State.TERMINATED if self.once else State.AWAIT_IDLE

        elif self.state is State.AWAIT_IDLE:
            self.changes = decode_changes(self._query("idle"))
            self.state = State.FETCH_STATUS_AND_OUTPUTS

        return self.state

    def run(self) -> bool:
        """
        Step until terminated. Only returns in single-shot mode; errors propagate.
        """
        while self.state is not State.TERMINATED:
            self.step()
        return self.matched
