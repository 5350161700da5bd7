# This file parses MPD responses
#
# What MPD sends back:
# - "key: value" records, one per line
# - a final "OK" line (or "ACK [err@n] {cmd} message" on failure)
# - idle replies look like "changed: mixer"

import enum
import re
from typing import Iterator, Tuple

OK = "OK"
ACK_PREFIX = "ACK"
SEPARATOR = ": "

_RECORD_SPLIT = re.compile(r"[\r\n]+")
_HEAD_DELIMS = ": "
_TAIL_SPLIT = re.compile(r"[;, ]+")


class ChangeSet(enum.IntFlag):
    """
    Idle subsystems we care about. Bit order follows the idle name list.
    """
    NONE    = 0
    PLAYER  = 1 << 0
    MIXER   = 1 << 1
    OPTIONS = 1 << 2
    OUTPUT  = 1 << 3

    STATUS  = PLAYER | MIXER | OPTIONS
    ALL     = STATUS | OUTPUT


# idle name -> bit
CHANGE_NAMES = {
    "player":  ChangeSet.PLAYER,
    "mixer":   ChangeSet.MIXER,
    "options": ChangeSet.OPTIONS,
    "output":  ChangeSet.OUTPUT,
}


def split_records(text: str) -> Iterator[str]:
    """
    Non-empty lines up to (not including) the terminating OK.
    """
    for rec in _RECORD_SPLIT.split(text):
        if not rec:
            continue
        if rec == OK:
            return
        yield rec


def parse_records(text: str) -> Iterator[Tuple[str, str]]:
    """
    Yield (key, value) for every "key: value" record in a response.
    Lines without ": " are skipped. The value is everything after the first ": ".
    """
    for rec in split_records(text):
        key, sep, value = rec.partition(SEPARATOR)
        if not sep:
            continue
        yield key, value


def ack_message(text: str):
    """
    Return the ACK line if the server rejected the command, else None.
    """
    for rec in split_records(text):
        if rec.startswith(ACK_PREFIX):
            return rec
    return None


def _change_tokens(rec: str):
    # first token ends at ':' or ' ', the rest may hold several names
    head = rec.lstrip(_HEAD_DELIMS)
    cut = len(head)
    for d in _HEAD_DELIMS:
        pos = head.find(d)
        if pos != -1:
            cut = min(cut, pos)
    yield head[:cut]
    for tok in _TAIL_SPLIT.split(head[cut + 1:]):
        if tok:
            yield tok


def decode_changes(text: str) -> ChangeSet:
    """
    Turn an idle reply into a ChangeSet. Starts empty every call, unknown
    subsystem names (database, playlist, ...) are ignored.
    """
    changes = ChangeSet.NONE
    for rec in split_records(text):
        for tok in _change_tokens(rec):
            bit = CHANGE_NAMES.get(tok)
            if bit is not None:
                changes |= bit
    return changes
