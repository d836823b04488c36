from __future__ import annotations

from typing import Iterable, List, Optional, Union

from .errors import InvalidChoice, InvalidCount, InvalidProcess, InvalidQuantum
from .models import Process

MIN_CHOICE = 1
MAX_CHOICE = 5

IntLike = Union[str, int]


def _to_int(value: Optional[IntLike]) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def parse_count(value: Optional[IntLike]) -> int:
    n = _to_int(value)
    if n is None or n <= 0:
        raise InvalidCount(f"Invalid number of processes: {value!r} (must be a positive integer)")
    return n


def parse_pid(value: Optional[IntLike]) -> int:
    pid = _to_int(value)
    if pid is None or pid <= 0:
        raise InvalidProcess(f"Invalid pid: {value!r} (must be a positive integer)")
    return pid


def parse_arrival(value: Optional[IntLike]) -> int:
    at = _to_int(value)
    if at is None or at < 0:
        raise InvalidProcess(f"Invalid arrival time: {value!r} (must be >= 0)")
    return at


def parse_burst(value: Optional[IntLike]) -> int:
    bt = _to_int(value)
    if bt is None or bt <= 0:
        raise InvalidProcess(f"Invalid burst time: {value!r} (must be > 0)")
    return bt


def parse_priority(value: Optional[IntLike]) -> int:
    pri = _to_int(value)
    if pri is None or pri < 0:
        raise InvalidProcess(f"Invalid priority: {value!r} (must be >= 0)")
    return pri


def parse_process_fields(
    arrival: Optional[IntLike],
    burst: Optional[IntLike],
    priority: Optional[IntLike],
) -> tuple[int, int, int]:
    """
    Convert raw arrival/burst/priority values to validated integers.
    """
    return parse_arrival(arrival), parse_burst(burst), parse_priority(priority)


def validate_process(p: Process) -> Process:
    if isinstance(p.pid, bool) or not isinstance(p.pid, int):
        raise InvalidProcess(f"Invalid pid: {p.pid!r} (must be a positive integer)")
    parse_pid(p.pid)
    parse_process_fields(p.arrival_time, p.burst_time, p.priority)
    return p


def validate_workload(processes: Iterable[Process]) -> List[Process]:
    """
    Validate a whole batch: at least one process, each well-formed, pids unique.
    """
    procs = list(processes)
    if not procs:
        raise InvalidCount("Workload contains no processes")

    seen: set[int] = set()
    for p in procs:
        validate_process(p)
        if p.pid in seen:
            raise InvalidProcess(f"Duplicate pid: {p.pid}")
        seen.add(p.pid)
    return procs


def parse_choice(value: Optional[IntLike]) -> int:
    choice = _to_int(value)
    if choice is None or not MIN_CHOICE <= choice <= MAX_CHOICE:
        raise InvalidChoice(f"Invalid choice: {value!r} (expected {MIN_CHOICE}-{MAX_CHOICE})")
    return choice


def parse_quantum(value: Optional[IntLike]) -> int:
    q = _to_int(value)
    if q is None or q <= 0:
        raise InvalidQuantum(f"Invalid time quantum: {value!r} (must be a positive integer)")
    return q
