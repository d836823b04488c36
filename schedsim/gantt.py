from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import IDLE, GanttSegment

BLOCK_WIDTH = 8


def append_segment(timeline: List[GanttSegment], label: str, start_time: int, end_time: int) -> None:
    """
    Append ``[start_time, end_time)`` to the timeline, extending the last
    segment instead when it carries the same label and ends at ``start_time``.
    Empty intervals are ignored.
    """
    if end_time <= start_time:
        return
    if timeline:
        last = timeline[-1]
        if last.label == label and last.end_time == start_time:
            last.end_time = end_time
            return
    timeline.append(GanttSegment(label=label, start_time=start_time, end_time=end_time))


def render_gantt(segments: List[GanttSegment]) -> str:
    """
    Plain-text Gantt chart: a row of fixed-width labelled blocks and a row of
    boundary times underneath.
    """
    if not segments:
        return "(no execution)"

    blocks = "".join(f"| {s.label:<{BLOCK_WIDTH - 2}}" for s in segments) + "|"

    marks = [segments[0].start_time] + [s.end_time for s in segments]
    times = "".join(f"{m:<{BLOCK_WIDTH}}" for m in marks).rstrip()

    return "\n".join(["Gantt Chart:", blocks, times])


def build_rich_gantt(segments: List[GanttSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    label_to_color: Dict[str, str] = {}

    def label_color(label: str) -> str:
        if label not in label_to_color:
            idx = len(label_to_color) % len(colors)
            label_to_color[label] = colors[idx]
        return label_to_color[label]

    bars = Text()
    labels = Text()
    time_marks = str(segments[0].start_time)

    for seg in segments:
        # Wide enough for the label and for the end mark plus a separating space.
        width = max(len(seg.label), seg.duration, len(str(seg.end_time)) + 1)
        if seg.label == IDLE:
            bars.append("." * width, style="dim")
            labels.append(seg.label.ljust(width), style="dim")
        else:
            bars.append(" " * width, style=f"on {label_color(seg.label)}")
            labels.append(seg.label.ljust(width), style="bold")
        time_marks += f"{seg.end_time:>{width}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
