from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, MENU_CHOICES, QUANTUM_ALGORITHMS, run_algorithm
from .gantt import build_rich_gantt, render_gantt
from .models import Process, ScheduleResult
from .validation import (
    parse_arrival,
    parse_burst,
    parse_choice,
    parse_count,
    parse_priority,
    parse_quantum,
)
from .workload_io import load_workload

logger = logging.getLogger(__name__)

MENU_LABELS = {
    1: "First Come, First Served (FCFS)",
    2: "Shortest Job First (SJF - Non Preemptive)",
    3: "Priority Scheduling (Non-Preemptive)",
    4: "Shortest Remaining Time First (SRTF - Preemptive SJF)",
    5: "Round Robin (RR)",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Single-CPU scheduling simulator (FCFS, SJF, Priority, SRTF, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions (dispatch, preemption, completion).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser(
        "interactive",
        help="Enter processes at prompts, pick an algorithm and print the result.",
    )

    run_parser = subparsers.add_parser("run", help="Run a scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (ignored by the other algorithms).",
    )
    output = run_parser.add_mutually_exclusive_group()
    output.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of tables.",
    )
    output.add_argument(
        "--plain",
        action="store_true",
        help="Print a plain-text Gantt chart instead of the colored one.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False, soft_wrap=True)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    headers = [
        "PID",
        "Arrival",
        "Burst",
        "Priority",
        "Start",
        "Completion",
        "Turnaround",
        "Waiting",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.label,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.turnaround_time),
            str(p.waiting_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg turnaround", f"{sys.avg_turnaround:.2f}")
        sys_table.add_row("Avg waiting", f"{sys.avg_waiting:.2f}")
        sys_table.add_row("Avg response", f"{sys.avg_response:.2f}")
        sys_table.add_row("CPU idle time", str(sys.idle_time))
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

        console.print(sys_table)


def _run_compare(
    processes: List[Process],
    algorithms: List[str],
    quantum: int,
    console: Console,
    title: str = "Algorithm comparison",
) -> None:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Idle", justify="right")

    for alg in algorithms:
        result = run_algorithm(alg, processes, quantum=quantum)
        sys = result.system
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{sys.avg_turnaround:.2f}",
            f"{sys.avg_waiting:.2f}",
            f"{sys.avg_response:.2f}",
            str(sys.idle_time),
        )

    console.print(summary_table)


def _prompt(text: str) -> Optional[str]:
    try:
        return input(text)
    except EOFError:
        return None


def _interactive(console: Console) -> ScheduleResult:
    """
    Collect processes and an algorithm choice at the terminal.

    Raises a SchedulerInputError subclass on the first invalid answer.
    """
    n = parse_count(_prompt("Enter number of processes: "))

    processes: List[Process] = []
    for i in range(1, n + 1):
        console.print(f"\n[bold]Enter details for P{i}:[/bold]")
        arrival_time = parse_arrival(_prompt("Arrival Time (AT): "))
        burst_time = parse_burst(_prompt("Burst Time (BT): "))
        priority_val = parse_priority(_prompt("Priority (PRI): "))
        processes.append(Process(pid=i, arrival_time=arrival_time, burst_time=burst_time, priority=priority_val))

    console.print("\n[bold]Select Algorithm:[/bold]")
    for idx, label in MENU_LABELS.items():
        console.print(f"  [yellow]{idx}[/yellow]. {label}")
    choice = parse_choice(_prompt("Choice: "))
    alg = MENU_CHOICES[choice]

    quantum = None
    if alg in QUANTUM_ALGORITHMS:
        quantum = parse_quantum(_prompt("Enter Time Quantum for Round Robin: "))

    return run_algorithm(alg, processes, quantum=quantum)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        if args.command == "interactive":
            result = _interactive(console)
            console.print()
            _print_result(result, console)
            return 0

        if args.command == "run":
            processes = load_workload(Path(args.workload))
            result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
            if args.json:
                console.print_json(json.dumps(result.to_dict()))
            else:
                _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            workload_path = Path(args.workload)
            processes = load_workload(workload_path)
            _run_compare(
                processes,
                args.algorithms,
                args.quantum,
                console,
                title=f"Algorithm comparison: {workload_path}",
            )
            return 0
    except (ValueError, OSError) as exc:
        logger.debug("aborting on invalid input", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
