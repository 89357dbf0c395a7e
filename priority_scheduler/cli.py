from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import run_schedule
from .errors import InternalInvariantError, InvalidInputError
from .gantt import build_rich_gantt, render_gantt
from .models import Process, ScheduleRun
from .workload_io import DEFAULT_WORKLOAD, load_workload

EXIT_OK = 0
EXIT_INTERNAL_ERROR = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="priority-scheduler",
        description="Preemptive priority CPU scheduling simulator.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions (preemptions, completions).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Schedule the processes in a workload file.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )

    demo_parser = subparsers.add_parser(
        "demo",
        help="Schedule the built-in three-process example (P1, P2, P3).",
    )

    for sub in (run_parser, demo_parser):
        sub.add_argument(
            "--step",
            action="store_true",
            help="Show a simple time-stepped simulation in the terminal.",
        )
        sub.add_argument(
            "--step-delay",
            type=float,
            default=0.3,
            help="Seconds to wait between steps when --step is used (default: 0.3).",
        )
        sub.add_argument(
            "--plain",
            action="store_true",
            help="Print a plain-text Gantt chart instead of the colored one.",
        )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _format_avg(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.2f}"


def _print_result(run: ScheduleRun, console: Console, plain: bool = False) -> None:
    console.print("[bold]Algorithm:[/bold] Preemptive priority (lower value runs first)")
    console.print()

    if plain:
        console.print(render_gantt(run.result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(run.result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Complete",
        "Turnaround",
        "Wait",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for r in run.report.records:
        proc_table.add_row(
            r.pid,
            str(r.arrival_time),
            str(r.burst_time),
            str(r.priority),
            str(r.completion_time),
            str(r.turnaround_time),
            str(r.waiting_time),
        )

    console.print(proc_table)
    console.print()

    sys_ = run.system
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", _format_avg(run.report.average_waiting_time))
    sys_table.add_row("Avg turnaround", _format_avg(run.report.average_turnaround_time))
    sys_table.add_row("Makespan", str(sys_.makespan))
    sys_table.add_row("Idle time", str(sys_.idle_time))
    sys_table.add_row("Throughput (proc/time)", f"{sys_.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{sys_.cpu_utilization*100:.1f}%")
    sys_table.add_row("Preemptions", str(sys_.preemptions))

    console.print(sys_table)


def _animate_result(run: ScheduleRun, console: Console, delay: float) -> None:
    """
    Simple time-stepped textual simulation using the computed schedule.
    """
    timeline = run.result.timeline
    if not timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    makespan = timeline[-1].end_time
    console.print(f"[bold]Simulating preemptive priority[/bold] (duration {makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(makespan):
        current = next((sl for sl in timeline if sl.start_time <= t < sl.end_time), None)
        if current is None:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            bar = f"[green]{'█' * (t - current.start_time + 1)}[/green]"
            console.print(f"t={t:2d}: {current.pid} {bar}")
        time.sleep(delay)


def _schedule_and_print(processes: Sequence[Process], args: argparse.Namespace, console: Console) -> int:
    run = run_schedule(processes)
    if args.step:
        try:
            _animate_result(run, console, delay=args.step_delay)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_result(run, console, plain=args.plain)
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "run":
            processes = load_workload(Path(args.workload))
            return _schedule_and_print(processes, args, console)

        if args.command == "demo":
            return _schedule_and_print(list(DEFAULT_WORKLOAD), args, console)
    except InvalidInputError as exc:
        console.print(f"[red]Invalid input: {escape(str(exc))}[/red]")
        return EXIT_INVALID_INPUT
    except OSError as exc:
        console.print(f"[red]Cannot read workload: {escape(str(exc))}[/red]")
        return EXIT_INVALID_INPUT
    except InternalInvariantError as exc:
        console.print(f"[red]Internal error: {escape(str(exc))}[/red]")
        return EXIT_INTERNAL_ERROR

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
