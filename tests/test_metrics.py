from rich.console import Console

from burst_scheduler.algorithms import run_algorithm
from burst_scheduler.gantt import build_rich_gantt, render_gantt
from burst_scheduler.metrics import summarize_process_metrics
from burst_scheduler.models import ScheduledSlice


def test_fcfs_summary():
    res = run_algorithm("fcfs", [5, 3, 8])
    summary = summarize_process_metrics(res.processes)
    assert summary["avg_waiting"] == (0 + 5 + 8) / 3
    assert summary["avg_turnaround"] == (5 + 8 + 16) / 3
    assert summary["max_waiting"] == 8.0


def test_system_metrics():
    res = run_algorithm("rr", [5, 3, 8], quantum=3)
    sys = res.system
    assert sys.makespan == 16
    assert sys.cpu_busy_time == 16
    assert sys.cpu_utilization == 1.0
    assert sys.throughput == 3 / 16
    # 0,1,2,0,2,2 -> the last two slices of P2 are back to back
    assert sys.context_switches == 4


def test_empty_metrics():
    res = run_algorithm("rr", [], quantum=2)
    assert res.total_time == 0
    assert res.system.makespan == 0
    assert summarize_process_metrics(res.processes)["avg_waiting"] == 0.0


def test_render_gantt():
    res = run_algorithm("fcfs", [2, 3])
    assert render_gantt(res.timeline).splitlines() == [
        "Gantt Chart:",
        "|=====|",
        " P0P1 ",
        "0  2  5",
    ]
    assert render_gantt([]) == "(no execution)"


def test_rich_gantt_renders():
    res = run_algorithm("rr", [5, 3, 8], quantum=3)
    panel, marks = build_rich_gantt(res.timeline)
    assert marks.split() == ["0", "3", "6", "9", "11", "14", "16"]

    console = Console(record=True, width=80)
    console.print(panel)
    assert "Gantt Chart" in console.export_text()

    _, marks = build_rich_gantt([])
    assert marks == ""


def test_render_gantt_keeps_full_label_for_short_slice():
    chart = render_gantt([ScheduledSlice(pid=12, start_time=0, end_time=2)])
    assert chart.splitlines()[1:3] == ["|===|", " P12"]


def test_rich_gantt_keeps_full_label_for_short_slice():
    panel, _ = build_rich_gantt([ScheduledSlice(pid=12, start_time=0, end_time=1)])
    console = Console(record=True, width=80)
    console.print(panel)
    assert "P12" in console.export_text()
