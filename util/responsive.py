from dataclasses import dataclass
from typing import Dict, List, Optional

FLEX_COLUMNS = ("title",)
MIN_LIMITS = {"prio": 2, "due": 5, "children": 2, "title": 6}


@dataclass
class ColumnLayout:
    """Task table layout for one terminal width band."""

    min_width: int
    columns: List[str]
    prio_w: int = 3
    due_w: int = 12
    children_w: int = 4
    title_min: int = 16

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def _base_widths(self, desired: Optional[Dict[str, int]] = None) -> Dict[str, int]:
        base = {
            "prio": self.prio_w,
            "due": self.due_w,
            "children": self.children_w,
            "title": self.title_min,
        }
        widths: Dict[str, int] = {}
        for col in self.columns:
            width = base.get(col, 8)
            if desired and col in desired and col not in FLEX_COLUMNS:
                width = min(width, max(MIN_LIMITS.get(col, 1), desired[col]))
            widths[col] = max(1, width)
        return widths

    def required_width(self) -> int:
        return sum(self._base_widths().values()) + len(self.columns) - 1

    def calculate_widths(self, term_width: int, desired: Optional[Dict[str, int]] = None) -> Dict[str, int]:
        """Fit columns into ``term_width``; the title absorbs slack and shrinks first."""
        separators = max(0, len(self.columns) - 1)
        usable = max(len(self.columns), term_width - separators)
        widths = self._base_widths(desired)
        total = sum(widths.values())
        if total <= usable:
            widths["title"] = widths.get("title", 0) + usable - total
            return widths

        deficit = total - usable
        for col in ["title"] + [c for c in reversed(self.columns) if c != "title"]:
            reducible = max(0, widths[col] - MIN_LIMITS.get(col, 1))
            take = min(reducible, deficit)
            widths[col] -= take
            deficit -= take
            if deficit == 0:
                break
        return widths


class ResponsiveLayoutManager:
    LAYOUTS = [
        ColumnLayout(min_width=100, columns=["prio", "title", "due", "children"], due_w=16, children_w=5, title_min=30),
        ColumnLayout(min_width=72, columns=["prio", "title", "due", "children"], due_w=12, children_w=4, title_min=20),
        ColumnLayout(min_width=50, columns=["prio", "title", "due"], due_w=10, title_min=16),
        ColumnLayout(min_width=0, columns=["prio", "title"], prio_w=2, title_min=8),
    ]

    @classmethod
    def select_layout(cls, term_width: int) -> ColumnLayout:
        for layout in cls.LAYOUTS:
            if term_width >= max(layout.min_width, layout.required_width()):
                return layout
        return cls.LAYOUTS[-1]


def editor_content_width(term_width: int) -> int:
    """Width of the task editor form for a given terminal width."""
    tw = max(20, term_width)
    if tw < 80:
        base = tw - 4
    elif tw < 120:
        base = tw - 8
    else:
        base = int(tw * 0.8)
    return max(30, min(base, tw - 2, 140))


__all__ = ["ColumnLayout", "ResponsiveLayoutManager", "editor_content_width"]
