from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Mapping

from .errors import InvalidProcess
from .models import Process
from .validation import parse_pid, parse_process_fields, validate_workload

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a validated list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.debug("loaded %d processes from %s", len(processes), path)
    return validate_workload(processes)


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8-sig") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise InvalidProcess("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, index) for index, entry in enumerate(raw, start=1)]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8-sig", newline="") as f:
        reader = csv.DictReader(f)
        return [_process_from_mapping(row, index) for index, row in enumerate(reader, start=1)]


def _field(mapping: Mapping, *names: str):
    for name in names:
        value = mapping.get(name)
        if value not in (None, ""):
            return value
    return None


def _process_from_mapping(mapping, position: int) -> Process:
    if not isinstance(mapping, Mapping):
        raise InvalidProcess(f"Invalid process entry: {mapping!r}")

    pid_val = _field(mapping, "pid")
    pid = parse_pid(pid_val) if pid_val is not None else position

    priority = _field(mapping, "priority")
    arrival_time, burst_time, priority_val = parse_process_fields(
        _field(mapping, "arrival_time", "arrival"),
        _field(mapping, "burst_time", "burst"),
        0 if priority is None else priority,
    )

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority_val,
    )
