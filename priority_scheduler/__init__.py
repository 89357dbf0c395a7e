"""
Preemptive priority scheduler.

Simulates preemptive priority CPU scheduling over a fixed set of processes
and reports the execution timeline with per-process waiting and turnaround
times.
"""

from __future__ import annotations

from typing import Sequence

from .errors import InternalInvariantError, InvalidInputError, SchedulerError
from .metrics import compute_metrics, compute_system_metrics
from .models import (
    MetricsReport,
    Process,
    ScheduledProcess,
    ScheduledSlice,
    ScheduleRun,
    SimulationResult,
    SystemMetrics,
)
from .simulator import simulate, validate_processes

__all__ = [
    "InternalInvariantError",
    "InvalidInputError",
    "MetricsReport",
    "Process",
    "ScheduleRun",
    "ScheduledProcess",
    "ScheduledSlice",
    "SchedulerError",
    "SimulationResult",
    "SystemMetrics",
    "cli",
    "compute_metrics",
    "compute_system_metrics",
    "run_schedule",
    "simulate",
    "validate_processes",
]


def run_schedule(processes: Sequence[Process]) -> ScheduleRun:
    """
    Simulate ``processes`` and derive all metrics in one call.
    """
    result = simulate(processes)
    report = compute_metrics(processes, result.completion_times)
    system = compute_system_metrics(result.timeline, report.records)
    return ScheduleRun(result=result, report=report, system=system)
