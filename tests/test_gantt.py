from rich.panel import Panel

from schedsim.gantt import append_segment, build_rich_gantt, render_gantt
from schedsim.models import IDLE, GanttSegment


def test_append_merges_contiguous_same_label():
    timeline = []
    append_segment(timeline, "P1", 0, 1)
    append_segment(timeline, "P1", 1, 2)
    append_segment(timeline, "P2", 2, 3)
    append_segment(timeline, "P1", 3, 4)
    assert [(s.label, s.start_time, s.end_time) for s in timeline] == [
        ("P1", 0, 2),
        ("P2", 2, 3),
        ("P1", 3, 4),
    ]


def test_append_ignores_empty_interval():
    timeline = []
    append_segment(timeline, IDLE, 0, 0)
    assert timeline == []


def test_render_gantt_plain():
    segments = [
        GanttSegment("P1", 0, 5),
        GanttSegment("P2", 5, 8),
        GanttSegment("P3", 8, 16),
    ]
    assert render_gantt(segments) == "\n".join(
        [
            "Gantt Chart:",
            "| P1    | P2    | P3    |",
            "0       5       8       16",
        ]
    )


def test_render_gantt_shows_idle():
    text = render_gantt([GanttSegment(IDLE, 0, 10), GanttSegment("P1", 10, 13)])
    assert "| IDLE  | P1    |" in text
    assert text.splitlines()[-1] == "0       10      13"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_build_rich_gantt():
    panel, marks = build_rich_gantt([GanttSegment(IDLE, 0, 10), GanttSegment("P1", 10, 13)])
    assert isinstance(panel, Panel)
    assert marks.startswith("0")
    assert marks.split() == ["0", "10", "13"]


def test_build_rich_gantt_empty():
    panel, marks = build_rich_gantt([])
    assert isinstance(panel, Panel)
    assert marks == ""


def test_build_rich_gantt_keeps_wide_marks_apart():
    segments = [
        GanttSegment("P1", 0, 99),
        GanttSegment("P2", 99, 100),
        GanttSegment("P3", 100, 101),
    ]
    _, marks = build_rich_gantt(segments)
    assert marks.split() == ["0", "99", "100", "101"]
