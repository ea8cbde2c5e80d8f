"""Cursor tracking over a display list, anchored on task identity."""

from typing import List, Optional, Sequence


def id_at(display: Sequence[str], position: Optional[int]) -> Optional[str]:
    """Bounds-checked lookup; out-of-range positions count as no selection."""
    if position is None or position < 0 or position >= len(display):
        return None
    return display[position]


def position_of(display: Sequence[str], task_id: Optional[str]) -> Optional[int]:
    if task_id is None:
        return None
    for idx, candidate in enumerate(display):
        if candidate == task_id:
            return idx
    return None


def reanchor(
    old_selection: Optional[int],
    old_list: Sequence[str],
    new_list: Sequence[str],
    auto_select_first: bool = False,
) -> Optional[int]:
    """Recover the selection after a rebuild by searching for the same task id."""
    if old_selection is None:
        if auto_select_first and new_list:
            return 0
        return None
    found = position_of(new_list, id_at(old_list, old_selection))
    if found is not None:
        return found
    return 0 if new_list else None


def next_position(current: Optional[int], total: int) -> Optional[int]:
    if total <= 0:
        return None
    if current is None or current >= total - 1:
        return 0
    return current + 1


def previous_position(current: Optional[int], total: int) -> Optional[int]:
    if total <= 0:
        return None
    if current is None or current >= total:
        return 0
    if current <= 0:
        return total - 1
    return current - 1


class SelectionTracker:
    """Highlighted entry of a display list.

    Stores a position but treats the task id under it as the anchor: call
    :meth:`rebase` with the rebuilt list to keep the same task highlighted.
    """

    def __init__(self, position: Optional[int] = None) -> None:
        self.position = position

    def __repr__(self) -> str:
        return f"SelectionTracker(position={self.position!r})"

    def selected_id(self, display: Sequence[str]) -> Optional[str]:
        return id_at(display, self.position)

    def select(self, position: Optional[int], display: Sequence[str]) -> Optional[int]:
        if position is None or position < 0 or position >= len(display):
            self.position = None
        else:
            self.position = position
        return self.position

    def select_id(self, task_id: Optional[str], display: Sequence[str]) -> Optional[int]:
        self.position = position_of(display, task_id)
        return self.position

    def unselect(self) -> None:
        self.position = None

    def next(self, display: Sequence[str]) -> Optional[int]:
        self.position = next_position(self.position, len(display))
        return self.position

    def previous(self, display: Sequence[str]) -> Optional[int]:
        self.position = previous_position(self.position, len(display))
        return self.position

    def rebase(
        self,
        old_list: Sequence[str],
        new_list: Sequence[str],
        auto_select_first: bool = False,
    ) -> Optional[int]:
        self.position = reanchor(self.position, old_list, new_list, auto_select_first)
        return self.position


__all__: List[str] = [
    "id_at",
    "position_of",
    "reanchor",
    "next_position",
    "previous_position",
    "SelectionTracker",
]
