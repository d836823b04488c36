"""
Single-CPU scheduling simulator.

Simulates FCFS, non-preemptive SJF, non-preemptive priority, SRTF and
Round Robin over a fixed batch of processes and reports per-process
completion, turnaround and waiting times along with a Gantt chart.
"""

from .algorithms import (
    schedule_fcfs,
    schedule_priority_np,
    schedule_rr,
    schedule_sjf_np,
    schedule_srtf,
)
from .models import IDLE, GanttSegment, Process, ScheduleResult

__all__ = [
    "IDLE",
    "GanttSegment",
    "Process",
    "ScheduleResult",
    "schedule_fcfs",
    "schedule_priority_np",
    "schedule_rr",
    "schedule_sjf_np",
    "schedule_srtf",
]
