from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One uninterrupted run of a process over [start_time, end_time).
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class SimulationResult:
    timeline: List[ScheduledSlice] = field(default_factory=list)
    completion_times: Dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ScheduledProcess:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    completion_time: int
    turnaround_time: int
    waiting_time: int


@dataclass(frozen=True)
class MetricsReport:
    records: List[ScheduledProcess] = field(default_factory=list)
    # None when there are no records
    average_waiting_time: Optional[float] = None
    average_turnaround_time: Optional[float] = None


@dataclass(frozen=True)
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    preemptions: int = 0


@dataclass(frozen=True)
class ScheduleRun:
    result: SimulationResult
    report: MetricsReport
    system: SystemMetrics
