from __future__ import annotations

from typing import Dict, List, Sequence

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def assign_colors(slices: Sequence[ScheduledSlice]) -> Dict[str, str]:
    """
    Give each PID a fixed color in order of first appearance, so every
    slice of a preempted process is drawn the same way.
    """
    pid_to_color: Dict[str, str] = {}
    for sl in slices:
        if sl.pid not in pid_to_color:
            pid_to_color[sl.pid] = COLORS[len(pid_to_color) % len(COLORS)]
    return pid_to_color


def render_gantt(slices: Sequence[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart. Idle gaps are drawn as dots.
    """
    if not slices:
        return "(no execution)"

    slices = sorted(slices, key=lambda s: (s.start_time, s.end_time))

    line = "|"
    labels = " "
    time_marks = "0"
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = sl.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, sl.duration)
        line += "=" * width
        labels += sl.pid[:width].ljust(width)
        last_time = sl.end_time
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels.rstrip(),
            time_marks,
        ]
    )


def build_rich_gantt(slices: Sequence[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    ordered: List[ScheduledSlice] = sorted(slices, key=lambda s: (s.start_time, s.end_time))
    pid_to_color = assign_colors(ordered)

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for sl in ordered:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = sl.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, sl.duration)

        timeline.append(" " * width, style=f"on {pid_to_color[sl.pid]}")
        labels.append(sl.pid[:width].ljust(width), style="bold")

        last_time = sl.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
