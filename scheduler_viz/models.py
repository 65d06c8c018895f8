from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int


@dataclass
class ProcessState:
    """
    Working copy of a Process used while a schedule is being simulated.

    The timing fields stay None until the process finishes and are written
    exactly once.
    """

    pid: str
    arrival_time: int
    burst_time: int
    priority: int
    remaining_time: int
    completion_time: Optional[int] = None
    waiting_time: Optional[int] = None
    turnaround_time: Optional[int] = None

    @classmethod
    def from_process(cls, process: Process) -> "ProcessState":
        return cls(
            pid=process.pid,
            arrival_time=process.arrival_time,
            burst_time=process.burst_time,
            priority=process.priority,
            remaining_time=process.burst_time,
        )

    @property
    def finished(self) -> bool:
        return self.remaining_time == 0

    def finish(self, completion_time: int) -> None:
        self.completion_time = completion_time
        self.turnaround_time = completion_time - self.arrival_time
        self.waiting_time = self.turnaround_time - self.burst_time


@dataclass(frozen=True)
class GanttBlock:
    """
    One contiguous interval of uninterrupted execution for a process.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    idle_time: int = 0
    starvation_count: int = 0


@dataclass
class ScheduleResult:
    algorithm: str
    processes: List[ProcessState] = field(default_factory=list)
    timeline: List[GanttBlock] = field(default_factory=list)
    avg_waiting_time: float = 0.0
    avg_turnaround_time: float = 0.0
    system: Optional[SystemMetrics] = None


@dataclass(frozen=True)
class SeekStep:
    """
    A single head movement. ``is_jump`` marks the wraparound to cylinder 0,
    which services no request.
    """

    from_cylinder: int
    to_cylinder: int
    distance: int
    is_jump: bool = False


@dataclass
class SeekResult:
    head: int
    disk_size: int
    requests: List[int] = field(default_factory=list)
    steps: List[SeekStep] = field(default_factory=list)
    total_seek_distance: int = 0

    @property
    def service_order(self) -> List[int]:
        """
        Request cylinders in the order the head services them.
        """
        pending = list(self.requests)
        order: List[int] = []
        for step in self.steps:
            if not step.is_jump and step.to_cylinder in pending:
                pending.remove(step.to_cylinder)
                order.append(step.to_cylinder)
        return order

    @property
    def visited(self) -> List[int]:
        return [self.head] + [step.to_cylinder for step in self.steps]
