from __future__ import annotations

from typing import List

from .models import Process, ScheduleResult, SystemMetrics


def finalize_process(p: Process, completion_time: int) -> None:
    """
    Record completion and derive turnaround, waiting and response times.
    """
    p.remaining = 0
    p.completion_time = completion_time
    p.turnaround_time = completion_time - p.arrival_time
    p.waiting_time = p.turnaround_time - p.burst_time
    if p.start_time is not None:
        p.response_time = p.start_time - p.arrival_time


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute averages, idle time, throughput and CPU utilization from the
    finalized process records and the Gantt timeline.
    """
    summary = summarize_process_metrics(result.processes)

    idle_time = sum(s.duration for s in result.timeline if s.is_idle)
    cpu_busy_time = sum(s.duration for s in result.timeline if not s.is_idle)
    makespan = result.timeline[-1].end_time if result.timeline else 0

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    system = SystemMetrics(
        avg_turnaround=summary["avg_turnaround"],
        avg_waiting=summary["avg_waiting"],
        avg_response=summary["avg_response"],
        idle_time=idle_time,
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
    result.system = system
    return system


def summarize_process_metrics(processes: List[Process]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.waiting_time or 0 for p in processes) / n,
        "avg_turnaround": sum(p.turnaround_time or 0 for p in processes) / n,
        "avg_response": sum(p.response_time or 0 for p in processes) / n,
    }
