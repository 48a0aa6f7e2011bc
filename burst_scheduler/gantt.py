from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def _label(pid: int, width: int) -> str:
    return f"P{pid}".ljust(width)


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart, one character per time unit. Slices shorter than
    their label are widened so the full pid is always shown.
    """
    if not slices:
        return "(no execution)"

    line = "|"
    labels = " "
    time_marks = "0"

    for sl in slices:
        width = max(sl.length, len(f"P{sl.pid}"))
        line += "=" * width
        labels += _label(sl.pid, width)
        time_marks += f"{sl.end_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"

    for sl in slices:
        width = max(sl.length, len(f"P{sl.pid}"))
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(_label(sl.pid, width), style="bold")
        time_marks += f"{sl.end_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
