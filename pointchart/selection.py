from __future__ import annotations

from typing import Sequence

from pointchart.entry import Entry


class SelectionController:
    """Enforces the single-selection rule over a shared entry sequence.

    The controller never copies `entries`; it flips the `selected` flag on the
    caller's own objects.
    """

    def __init__(self, entries: Sequence[Entry]) -> None:
        self._entries = entries

    @property
    def selected_index(self) -> int | None:
        for index, entry in enumerate(self._entries):
            if entry.selected:
                return index
        return None

    def apply_selection(self, index: int) -> None:
        """Toggle entry `index` and deselect every other entry."""

        if index < 0 or index >= len(self._entries):
            raise IndexError(f"selection index out of range: {index}")
        for i, entry in enumerate(self._entries):
            if i == index:
                entry.selected = not entry.selected
            else:
                entry.selected = False

    def toggle_entry(self, target: Entry) -> None:
        """Toggle `target` and deselect every other entry.

        `target` is matched by identity. An entry no longer in the sequence
        only clears the others.
        """

        for entry in self._entries:
            if entry is target:
                entry.selected = not entry.selected
            else:
                entry.selected = False

    def clear(self) -> None:
        for entry in self._entries:
            entry.selected = False
