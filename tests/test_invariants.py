"""
Properties every schedule must satisfy, checked over a fixed set of
pseudo-random workloads (seeded, so failures are reproducible).
"""

import random
from collections import defaultdict

import pytest

from schedsim.algorithms import run_algorithm
from schedsim.models import Process

QUANTUM = 2
NON_PREEMPTIVE = ["fcfs", "sjf", "priority"]
ALL = NON_PREEMPTIVE + ["srtf", "rr"]


def _random_workload(rng):
    n = rng.randint(1, 6)
    pids = rng.sample(range(1, 50), n)
    return [
        Process(
            pid,
            arrival_time=rng.randint(0, 10),
            burst_time=rng.randint(1, 6),
            priority=rng.randint(0, 3),
        )
        for pid in pids
    ]


WORKLOADS = [_random_workload(random.Random(seed)) for seed in range(40)]


def _by_label(procs):
    return {p.label: p for p in procs}


@pytest.mark.parametrize("name", ALL)
@pytest.mark.parametrize("procs", WORKLOADS)
def test_universal_invariants(name, procs):
    res = run_algorithm(name, procs, quantum=QUANTUM)
    timeline = res.timeline

    assert len(res.processes) == len(procs)
    for p in res.processes:
        assert p.completion_time >= p.arrival_time + p.burst_time
        assert p.waiting_time == p.completion_time - p.arrival_time - p.burst_time
        assert p.waiting_time >= 0
        assert p.turnaround_time == p.waiting_time + p.burst_time
        assert p.remaining == 0

    makespan = max(p.completion_time for p in res.processes)

    # Gapless, starting at 0 and ending at the last completion.
    assert timeline[0].start_time == 0
    assert timeline[-1].end_time == makespan
    for prev, nxt in zip(timeline, timeline[1:]):
        assert prev.end_time == nxt.start_time
        assert prev.label != nxt.label
    assert all(s.start_time < s.end_time for s in timeline)

    run_time = defaultdict(int)
    for s in timeline:
        run_time[s.label] += s.duration
    for p in res.processes:
        assert run_time[p.label] == p.burst_time

    assert sum(s.duration for s in timeline) == makespan
    assert sum(s.duration for s in timeline if not s.is_idle) == sum(p.burst_time for p in procs)
    assert res.system.makespan == makespan
    assert res.system.idle_time == makespan - sum(p.burst_time for p in procs)


@pytest.mark.parametrize("name", NON_PREEMPTIVE)
@pytest.mark.parametrize("procs", WORKLOADS)
def test_non_preemptive_runs_are_contiguous(name, procs):
    res = run_algorithm(name, procs)
    labels = [s.label for s in res.timeline if not s.is_idle]
    assert len(labels) == len(set(labels)) == len(procs)


@pytest.mark.parametrize("procs", WORKLOADS)
def test_fcfs_order(procs):
    res = run_algorithm("fcfs", procs)
    expected = [p.label for p in sorted(procs, key=lambda p: (p.arrival_time, p.pid))]
    assert [s.label for s in res.timeline if not s.is_idle] == expected


@pytest.mark.parametrize(
    "name, key",
    [
        ("sjf", lambda p: (p.burst_time, p.arrival_time, p.pid)),
        ("priority", lambda p: (p.priority, p.arrival_time, p.pid)),
    ],
)
@pytest.mark.parametrize("procs", WORKLOADS)
def test_non_preemptive_dispatches_minimum_key(name, key, procs):
    res = run_algorithm(name, procs)
    records = _by_label(res.processes)
    for s in res.timeline:
        if s.is_idle:
            continue
        t = s.start_time
        candidates = [p for p in res.processes if p.arrival_time <= t and p.start_time >= t]
        assert records[s.label] is min(candidates, key=key)


@pytest.mark.parametrize("procs", WORKLOADS)
def test_srtf_runs_minimum_remaining(procs):
    res = run_algorithm("srtf", procs)
    remaining = {p.label: p.burst_time for p in res.processes}
    records = _by_label(res.processes)
    for s in res.timeline:
        for t in range(s.start_time, s.end_time):
            if not s.is_idle:
                ready = [
                    p for p in res.processes
                    if p.arrival_time <= t and remaining[p.label] > 0
                ]
                chosen = min(ready, key=lambda p: (remaining[p.label], p.arrival_time, p.pid))
                assert chosen is records[s.label]
                remaining[s.label] -= 1


@pytest.mark.parametrize("quantum", [1, 2, 3])
@pytest.mark.parametrize("procs", WORKLOADS)
def test_rr_runs_exceed_quantum_only_when_alone(quantum, procs):
    res = run_algorithm("rr", procs, quantum=quantum)
    for s in res.timeline:
        if s.is_idle or s.duration <= quantum:
            continue
        for boundary in range(s.start_time + quantum, s.end_time, quantum):
            others = [
                p for p in res.processes
                if p.label != s.label
                and p.arrival_time <= boundary
                and p.completion_time > boundary
            ]
            assert others == []
