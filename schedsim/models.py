from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

IDLE = "IDLE"


@dataclass
class Process:
    """
    One simulated job.

    ``pid``, ``arrival_time``, ``burst_time`` and ``priority`` are inputs; the
    remaining fields are filled in by a scheduler. Lower priority values mean
    higher priority.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    remaining: Optional[int] = None
    start_time: Optional[int] = None
    completion_time: Optional[int] = None
    turnaround_time: Optional[int] = None
    waiting_time: Optional[int] = None
    response_time: Optional[int] = None

    def __post_init__(self) -> None:
        if self.remaining is None:
            self.remaining = self.burst_time

    @property
    def label(self) -> str:
        return f"P{self.pid}"

    def fresh_copy(self) -> Process:
        """Return an unscheduled copy carrying only the input fields."""
        return Process(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            priority=self.priority,
        )

    def to_dict(self) -> dict:
        return {
            "pid": self.pid,
            "arrival": self.arrival_time,
            "burst": self.burst_time,
            "priority": self.priority,
            "start": self.start_time,
            "completion": self.completion_time,
            "turnaround": self.turnaround_time,
            "waiting": self.waiting_time,
            "response": self.response_time,
        }


@dataclass
class GanttSegment:
    """
    One contiguous half-open interval ``[start_time, end_time)`` of CPU
    occupancy, labelled with a process label or IDLE.
    """

    label: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.label == IDLE

    def to_dict(self) -> dict:
        return {"label": self.label, "start": self.start_time, "end": self.end_time}


@dataclass
class SystemMetrics:
    avg_turnaround: float
    avg_waiting: float
    avg_response: float
    idle_time: int
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[Process] = field(default_factory=list)
    timeline: List[GanttSegment] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    def process(self, pid: int) -> Process:
        for p in self.processes:
            if p.pid == pid:
                return p
        raise KeyError(pid)

    def to_dict(self) -> dict:
        system = self.system
        return {
            "algorithm": self.algorithm,
            "quantum": self.quantum,
            "processes": [p.to_dict() for p in self.processes],
            "gantt": [s.to_dict() for s in self.timeline],
            "averages": {
                "tat": system.avg_turnaround if system else 0.0,
                "wt": system.avg_waiting if system else 0.0,
            },
            "idle_time": system.idle_time if system else 0,
        }
