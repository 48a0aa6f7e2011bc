from __future__ import annotations

import argparse
import logging
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .gantt import build_rich_gantt
from .metrics import summarize_process_metrics, turnaround_time
from .models import Process, ScheduleResult
from .workload_io import load_bursts, parse_bursts

DEFAULT_QUANTUM = 2

logger = logging.getLogger(__name__)


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--bursts",
        "-b",
        nargs="+",
        metavar="N",
        help="Burst lengths, in process order (e.g. -b 5 3 8).",
    )
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON, CSV or TXT workload file.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burst-scheduler",
        description="Single-core CPU scheduling simulator (FCFS, RR).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING). DEBUG traces every slice.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=sorted(ALGORITHMS),
        help="Algorithm to use (fcfs, rr).",
    )
    _add_workload_args(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin, ignored by FCFS (default: {DEFAULT_QUANTUM}).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run FCFS and RR on the same workload and compare totals and averages.",
    )
    _add_workload_args(compare_parser)
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum used for RR (default: {DEFAULT_QUANTUM}).",
    )

    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the final state of every process after a run.",
    )
    dump_parser.add_argument("--algorithm", "-a", default="fcfs", choices=sorted(ALGORITHMS))
    _add_workload_args(dump_parser)
    dump_parser.add_argument("--quantum", "-q", type=int, default=DEFAULT_QUANTUM)

    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _read_bursts(args: argparse.Namespace) -> List[int]:
    if args.bursts is not None:
        return parse_bursts(args.bursts)
    return load_bursts(args.workload)


def build_process_table(processes: List[Process], title: str = "Per-process metrics") -> Table:
    proc_table = Table(title=title, box=box.SIMPLE_HEAVY)
    for h in ["PID", "Burst", "Wait", "Turnaround", "Remaining"]:
        proc_table.add_column(h, justify="center" if h == "PID" else "right")

    for p in processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.burst_time),
            str(p.accumulated_wait),
            str(turnaround_time(p)),
            str(p.remaining_burst),
        )
    return proc_table


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")
    console.print(f"[bold]Total time:[/bold] {result.total_time}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()
    console.print(build_process_table(result.processes))
    console.print()

    summary = summarize_process_metrics(result.processes)
    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
        sys_table.add_row("Max waiting", f"{summary['max_waiting']:.0f}")
        sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Context switches", str(sys.context_switches))
        sys_table.add_row("Starvation count", str(sys.starvation_count))

        console.print(sys_table)


def _print_compare(bursts: List[int], quantum: int, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Total time", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for alg in ALGORITHMS:
        result = run_algorithm(alg, bursts, quantum=quantum)
        summary = summarize_process_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            str(result.total_time),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    console = Console()

    try:
        bursts = _read_bursts(args)
        logger.info("Loaded %d burst lengths", len(bursts))

        if args.command == "run":
            _print_result(run_algorithm(args.algorithm, bursts, quantum=args.quantum), console)
            return 0

        if args.command == "compare":
            _print_compare(bursts, args.quantum, console)
            return 0

        if args.command == "dump":
            result = run_algorithm(args.algorithm, bursts, quantum=args.quantum)
            console.print(build_process_table(result.processes, title=f"{result.algorithm} process state"))
            return 0
    except (ValueError, OSError) as exc:
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
