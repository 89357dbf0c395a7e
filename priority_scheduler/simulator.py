from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Union

from .errors import InternalInvariantError, InvalidInputError
from .models import Process, ScheduledSlice, SimulationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """CPU has no open segment."""


@dataclass(frozen=True)
class Running:
    """
    CPU is executing the process at ``index`` in an open segment that
    started at ``segment_start``.
    """

    index: int
    segment_start: int


CpuState = Union[Idle, Running]

IDLE = Idle()


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject input that has no valid schedule.
    """
    if not processes:
        raise InvalidInputError("Cannot schedule an empty process list")

    seen: set[str] = set()
    for p in processes:
        if p.pid in seen:
            raise InvalidInputError(f"Duplicate process id '{p.pid}'")
        seen.add(p.pid)

        for name in ("arrival_time", "burst_time", "priority"):
            value = getattr(p, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidInputError(f"Process '{p.pid}' has non-integer {name} {value!r}")

        if p.burst_time < 1:
            raise InvalidInputError(
                f"Process '{p.pid}' has burst time {p.burst_time}; it must be at least 1"
            )
        if p.arrival_time < 0:
            raise InvalidInputError(
                f"Process '{p.pid}' has arrival time {p.arrival_time}; it must not be negative"
            )


def _pick_next(processes: Sequence[Process], remaining: List[int], time: int) -> Optional[int]:
    # Strict '<' keeps the earliest input index among equal priorities.
    best: Optional[int] = None
    for i, p in enumerate(processes):
        if p.arrival_time > time or remaining[i] <= 0:
            continue
        if best is None or p.priority < processes[best].priority:
            best = i
    return best


def simulate(processes: Sequence[Process]) -> SimulationResult:
    """
    Preemptive priority scheduling, stepped one time unit at a time.

    At every tick the arrived, unfinished process with the smallest priority
    value runs. A higher-priority arrival preempts the running process, which
    closes its current slice; it gets a new slice when it runs again. Idle
    ticks produce no slice.
    """
    validate_processes(processes)
    processes = list(processes)

    n = len(processes)
    remaining = [p.burst_time for p in processes]
    completion: Dict[int, int] = {}
    timeline: List[ScheduledSlice] = []

    time = 0
    completed = 0
    state: CpuState = IDLE

    max_time = max(p.arrival_time for p in processes) + sum(p.burst_time for p in processes)
    logger.debug("Simulating %d processes (time bound %d)", n, max_time)

    while completed < n and time < max_time:
        idx = _pick_next(processes, remaining, time)

        if idx is None:
            time += 1
            continue

        if isinstance(state, Running) and state.index != idx:
            preempted = processes[state.index]
            timeline.append(ScheduledSlice(pid=preempted.pid, start_time=state.segment_start, end_time=time))
            logger.debug("t=%d: %s preempted by %s", time, preempted.pid, processes[idx].pid)
            state = Running(index=idx, segment_start=time)
        elif isinstance(state, Idle):
            state = Running(index=idx, segment_start=time)

        remaining[idx] -= 1
        time += 1

        if remaining[idx] == 0:
            completed += 1
            completion[idx] = time
            timeline.append(
                ScheduledSlice(pid=processes[idx].pid, start_time=state.segment_start, end_time=time)
            )
            logger.debug("t=%d: %s completed", time, processes[idx].pid)
            state = IDLE

    if completed < n:
        raise InternalInvariantError(
            "Simulation reached its time bound before all processes completed",
            state={
                "time": time,
                "max_time": max_time,
                "completed": completed,
                "remaining": {p.pid: remaining[i] for i, p in enumerate(processes) if remaining[i] > 0},
            },
        )

    completion_times = {p.pid: completion[i] for i, p in enumerate(processes)}
    return SimulationResult(timeline=timeline, completion_times=completion_times)
