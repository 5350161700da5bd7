# This file holds what we've already seen from MPD
#
# - StateCache: last value of every status key
# - OutputTracker: known/enabled bitmasks per output id
#
# Both only ever grow; nothing is dropped while the process lives.

import sys
from typing import Dict, Iterator, Optional

MAX_OUTPUTS = 64


class Slot:
    __slots__ = ("value",)

    def __init__(self, value: str = ""):
        self.value = value

    def __repr__(self):
        return f"Slot({self.value!r})"


class StateCache:
    def __init__(self):
        self._slots: Dict[str, Slot] = {}

    def get_or_create(self, key: str) -> Slot:
        """
        Existing slot for key, or a new one holding "" so a first real value
        always counts as a change.
        """
        slot = self._slots.get(key)
        if slot is None:
            slot = self._slots[key] = Slot()
        return slot

    @staticmethod
    def set_if_changed(slot: Slot, value: str) -> bool:
        if slot.value == value:
            return False
        slot.value = value
        return True

    def update(self, key: str, value: str) -> bool:
        return self.set_if_changed(self.get_or_create(key), value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        slot = self._slots.get(key)
        return default if slot is None else slot.value

    def __contains__(self, key):
        return key in self._slots

    def __len__(self):
        return len(self._slots)

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)


class OutputTracker:
    def __init__(self, capacity: int = MAX_OUTPUTS):
        self.capacity = capacity
        self.known = 0
        self.enabled = 0

    def update(self, output_id: int, name: str, enabled: bool) -> bool:
        """
        Record an output's enabled state and tell whether it should be reported:
        True the first time an id shows up, or when its state flipped.
        Ids outside 0..capacity-1 are logged and ignored.
        """
        if not 0 <= output_id < self.capacity:
            print(f"[outputs] ignoring output {output_id} \"{name}\": "
                  f"only ids 0..{self.capacity - 1} are tracked", file=sys.stderr)
            return False

        bit = 1 << output_id
        state = bit if enabled else 0
        report = bool((~self.known | (self.enabled ^ state)) & bit)

        self.known |= bit
        self.enabled = (self.enabled & ~bit) | state
        return report


def format_property(key: str, value: str) -> str:
    return f"{key}\t{value}"


def format_output(output_id: int, name: str, value: str) -> str:
    return f"output{output_id}:\"{name}\"\t{value}"
