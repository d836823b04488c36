from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, Dict, List, Optional, Tuple

from .errors import InvalidChoice, InvalidQuantum
from .gantt import append_segment
from .metrics import compute_system_metrics, finalize_process
from .models import IDLE, GanttSegment, Process, ScheduleResult

logger = logging.getLogger(__name__)


def _working_copies(processes: List[Process]) -> List[Process]:
    # Each run gets its own records so simulations stay independent.
    return [p.fresh_copy() for p in processes]


def _build_result(
    algorithm: str,
    quantum: Optional[int],
    procs: List[Process],
    timeline: List[GanttSegment],
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=sorted(procs, key=lambda p: p.pid),
        timeline=timeline,
    )
    compute_system_metrics(result)
    return result


def _dispatch(p: Process, time: int) -> None:
    if p.start_time is None:
        p.start_time = time
    logger.debug("t=%d: dispatch %s (remaining %d)", time, p.label, p.remaining)


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in order of arrival, ties broken by pid.
    """
    procs = _working_copies(processes)
    procs_sorted = sorted(procs, key=lambda p: (p.arrival_time, p.pid))

    time = 0
    timeline: List[GanttSegment] = []

    for p in procs_sorted:
        if time < p.arrival_time:
            logger.debug("t=%d: idle until %d", time, p.arrival_time)
            append_segment(timeline, IDLE, time, p.arrival_time)
            time = p.arrival_time

        _dispatch(p, time)
        append_segment(timeline, p.label, time, time + p.burst_time)
        time += p.burst_time
        finalize_process(p, time)
        logger.debug("t=%d: %s completed", time, p.label)

    return _build_result("FCFS", None, procs, timeline)


def _schedule_non_preemptive(
    processes: List[Process],
    key: Callable[[Process], Tuple[int, int, int]],
    algorithm: str,
) -> ScheduleResult:
    """
    Shared loop for the non-preemptive selection policies.

    Whenever the CPU is free, the ready process with the smallest ``key``
    runs to completion. If nothing has arrived, the clock jumps to the next
    arrival.
    """
    procs = _working_copies(processes)

    time = 0
    timeline: List[GanttSegment] = []
    pending = list(procs)

    while pending:
        ready = [p for p in pending if p.arrival_time <= time]

        if not ready:
            next_arrival = min(p.arrival_time for p in pending)
            logger.debug("t=%d: idle until %d", time, next_arrival)
            append_segment(timeline, IDLE, time, next_arrival)
            time = next_arrival
            continue

        p = min(ready, key=key)
        pending = [q for q in pending if q is not p]

        _dispatch(p, time)
        append_segment(timeline, p.label, time, time + p.burst_time)
        time += p.burst_time
        finalize_process(p, time)
        logger.debug("t=%d: %s completed", time, p.label)

    return _build_result(algorithm, None, procs, timeline)


def schedule_sjf_np(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time (tie-breaker:
    earlier arrival, then pid).
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda p: (p.burst_time, p.arrival_time, p.pid),
        algorithm="SJF (non-preemptive)",
    )


def schedule_priority_np(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then pid. A dispatched process is never
    preempted by a later, higher-priority arrival.
    """
    return _schedule_non_preemptive(
        processes,
        key=lambda p: (p.priority, p.arrival_time, p.pid),
        algorithm="Priority (non-preemptive)",
    )


def schedule_srtf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The decision is re-taken every time unit: the ready process with the
    least remaining burst (tie: earlier arrival, then pid) runs for one unit.
    Consecutive units of the same process merge into a single segment.
    """
    procs = _working_copies(processes)

    time = 0
    timeline: List[GanttSegment] = []
    running: Optional[Process] = None

    while any(p.remaining > 0 for p in procs):
        ready = [p for p in procs if p.arrival_time <= time and p.remaining > 0]

        if not ready:
            next_arrival = min(p.arrival_time for p in procs if p.remaining > 0)
            logger.debug("t=%d: idle until %d", time, next_arrival)
            append_segment(timeline, IDLE, time, next_arrival)
            time = next_arrival
            running = None
            continue

        current = min(ready, key=lambda p: (p.remaining, p.arrival_time, p.pid))

        if current is not running:
            if running is not None:
                logger.debug("t=%d: %s preempted by %s", time, running.label, current.label)
            _dispatch(current, time)
            running = current

        append_segment(timeline, current.label, time, time + 1)
        current.remaining -= 1
        time += 1

        if current.remaining == 0:
            finalize_process(current, time)
            logger.debug("t=%d: %s completed", time, current.label)
            running = None

    return _build_result("SRTF", None, procs, timeline)


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Arrivals that happen during (or exactly at the end of) a slice join the
    ready queue before the preempted process is put back at its tail.
    """
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise InvalidQuantum(f"Round Robin requires a positive integer quantum, got {quantum!r}")

    procs = _working_copies(processes)

    # Not yet admitted, in admission order.
    arrivals: Deque[Process] = deque(sorted(procs, key=lambda p: (p.arrival_time, p.pid)))
    ready: Deque[Process] = deque()

    time = 0
    timeline: List[GanttSegment] = []

    def admit_arrivals(current_time: int) -> None:
        while arrivals and arrivals[0].arrival_time <= current_time:
            p = arrivals.popleft()
            logger.debug("t=%d: %s admitted (arrived at %d)", current_time, p.label, p.arrival_time)
            ready.append(p)

    while arrivals or ready:
        admit_arrivals(time)

        if not ready:
            next_arrival = arrivals[0].arrival_time
            logger.debug("t=%d: idle until %d", time, next_arrival)
            append_segment(timeline, IDLE, time, next_arrival)
            time = next_arrival
            continue

        p = ready.popleft()
        _dispatch(p, time)

        run_time = min(quantum, p.remaining)
        append_segment(timeline, p.label, time, time + run_time)
        time += run_time
        p.remaining -= run_time

        admit_arrivals(time)

        if p.remaining > 0:
            logger.debug("t=%d: %s preempted (remaining %d)", time, p.label, p.remaining)
            ready.append(p)
        else:
            finalize_process(p, time)
            logger.debug("t=%d: %s completed", time, p.label)

    return _build_result("Round Robin", quantum, procs, timeline)


ALGORITHMS: Dict[str, Callable[..., ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf_np,
    "priority": schedule_priority_np,
    "srtf": schedule_srtf,
    "rr": schedule_rr,
}

# Numbering used by the interactive prompt.
MENU_CHOICES: Dict[int, str] = {
    1: "fcfs",
    2: "sjf",
    3: "priority",
    4: "srtf",
    5: "rr",
}

QUANTUM_ALGORITHMS = {"rr"}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    key = name.lower()
    if key not in ALGORITHMS:
        raise InvalidChoice(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    logger.debug("running %s on %d processes", key, len(processes))
    func = ALGORITHMS[key]
    return func(processes, quantum=quantum if key in QUANTUM_ALGORITHMS else None)
