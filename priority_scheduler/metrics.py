from __future__ import annotations

import logging
from typing import Mapping, Optional, Sequence

from .errors import InternalInvariantError, InvalidInputError
from .models import MetricsReport, Process, ScheduledProcess, ScheduledSlice, SystemMetrics

logger = logging.getLogger(__name__)


def compute_metrics(processes: Sequence[Process], completion_times: Mapping[str, int]) -> MetricsReport:
    """
    Derive turnaround and waiting time for every process, in input order,
    plus their averages. Averages are None for an empty process list.
    """
    missing = [p.pid for p in processes if p.pid not in completion_times]
    if missing:
        raise InvalidInputError(f"No completion time for process(es): {', '.join(missing)}")

    records = []
    for p in processes:
        completion_time = completion_times[p.pid]
        turnaround_time = completion_time - p.arrival_time
        waiting_time = turnaround_time - p.burst_time

        if waiting_time < 0:
            raise InternalInvariantError(
                f"Negative waiting time for process '{p.pid}'",
                state={
                    "pid": p.pid,
                    "arrival_time": p.arrival_time,
                    "burst_time": p.burst_time,
                    "completion_time": completion_time,
                },
            )

        records.append(
            ScheduledProcess(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                priority=p.priority,
                completion_time=completion_time,
                turnaround_time=turnaround_time,
                waiting_time=waiting_time,
            )
        )

    avg_waiting: Optional[float] = None
    avg_turnaround: Optional[float] = None
    if records:
        n = len(records)
        avg_waiting = sum(r.waiting_time for r in records) / n
        avg_turnaround = sum(r.turnaround_time for r in records) / n

    logger.debug(
        "Metrics for %d processes: avg waiting=%s, avg turnaround=%s",
        len(records),
        avg_waiting,
        avg_turnaround,
    )
    return MetricsReport(
        records=records,
        average_waiting_time=avg_waiting,
        average_turnaround_time=avg_turnaround,
    )


def compute_system_metrics(
    timeline: Sequence[ScheduledSlice],
    records: Sequence[ScheduledProcess],
) -> SystemMetrics:
    """
    Compute throughput, CPU utilization and preemption count for a finished
    schedule.
    """
    if not records:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(r.completion_time for r in records)
    cpu_busy_time = sum(slice_.duration for slice_ in timeline)

    throughput = len(records) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    # A slice that stops before its process finished was cut short by a
    # higher-priority process.
    completion_by_pid = {r.pid: r.completion_time for r in records}
    preemptions = sum(1 for s in timeline if s.end_time < completion_by_pid.get(s.pid, s.end_time))

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        preemptions=preemptions,
    )
