from priority_scheduler.gantt import assign_colors, build_rich_gantt, render_gantt
from priority_scheduler.models import ScheduledSlice


def _timeline():
    return [
        ScheduledSlice("P1", 0, 1),
        ScheduledSlice("P2", 1, 8),
        ScheduledSlice("P3", 8, 12),
        ScheduledSlice("P1", 12, 16),
    ]


def test_render_gantt_plain():
    chart = render_gantt(_timeline())
    lines = chart.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "|" + "=" * 16 + "|"
    assert lines[2] == " PP2     P3  P1"
    assert lines[3] == "0  1  8 12 16"


def test_render_gantt_idle_gap():
    chart = render_gantt([ScheduledSlice("A", 2, 4), ScheduledSlice("B", 7, 8)])
    lines = chart.splitlines()
    assert lines[1] == "|..==...=|"
    assert lines[3] == "0  2  4  7  8"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_preempted_process_keeps_its_color():
    colors = assign_colors(_timeline())
    assert list(colors) == ["P1", "P2", "P3"]
    assert len(set(colors.values())) == 3


def test_build_rich_gantt_time_marks():
    panel, marks = build_rich_gantt(_timeline())
    assert panel.title == "Gantt Chart"
    assert marks == "0  1  8 12 16"


def test_build_rich_gantt_empty():
    _, marks = build_rich_gantt([])
    assert marks == ""
