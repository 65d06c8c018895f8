from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .errors import InvalidInput
from .metrics import compute_system_metrics, summarize_process_metrics
from .models import GanttBlock, Process, ProcessState, ScheduleResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """CPU has nothing running."""


@dataclass(frozen=True)
class Running:
    pid: str
    block_start: int


RunState = Union[Idle, Running]


@dataclass(frozen=True)
class Tick:
    """
    What happened during the time unit [time, time + 1).

    ``closed`` holds the Gantt blocks that ended during this unit, in order:
    a preempted block (ending at ``time``) and/or a completed block (ending
    at ``time + 1``). ``completed`` is the process that finished, if any.
    """

    time: int
    running_pid: Optional[str]
    closed: Tuple[GanttBlock, ...] = ()
    completed: Optional[ProcessState] = None


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject the whole workload if any record is unusable by the priority engine.
    """
    seen: set[str] = set()
    for p in processes:
        for name in ("arrival_time", "burst_time", "priority"):
            value = getattr(p, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInput(f"Process {p.pid!r}: {name} must be an integer, got {value!r}")
        if p.arrival_time < 0:
            raise InvalidInput(f"Process {p.pid!r}: arrival_time must be >= 0")
        if p.burst_time < 1:
            raise InvalidInput(f"Process {p.pid!r}: burst_time must be >= 1")
        if p.priority < 0:
            raise InvalidInput(f"Process {p.pid!r}: priority must be >= 0")
        if p.pid in seen:
            raise InvalidInput(f"Duplicate process id {p.pid!r}")
        seen.add(p.pid)


def iter_priority_ticks(processes: Sequence[Process]) -> Iterator[Tick]:
    """
    Preemptive priority scheduling, one time unit per yielded Tick.

    Lower numeric priority value means higher priority; ties go to the
    earlier arrival. The input records are copied and never modified, so the
    iterator can be abandoned at any point. Invalid workloads raise
    InvalidInput here, before any tick is produced.
    """
    validate_processes(processes)
    return _priority_ticks([ProcessState.from_process(p) for p in processes])


def _priority_ticks(states: List[ProcessState]) -> Iterator[Tick]:
    if not states:
        return

    n = len(states)
    # Guarantees termination even with long idle gaps.
    max_time = max(s.arrival_time for s in states) + sum(s.burst_time for s in states)

    state: RunState = Idle()
    time = 0
    completed = 0

    while completed < n and time <= max_time:
        available = [s for s in states if s.arrival_time <= time and s.remaining_time > 0]

        if not available:
            closed: Tuple[GanttBlock, ...] = ()
            if isinstance(state, Running):
                closed = (GanttBlock(pid=state.pid, start_time=state.block_start, end_time=time),)
                state = Idle()
            yield Tick(time=time, running_pid=None, closed=closed)
            time += 1
            continue

        # min() keeps the first of equal keys, so input order breaks full ties.
        selected = min(available, key=lambda s: (s.priority, s.arrival_time))

        closed_blocks: List[GanttBlock] = []
        if isinstance(state, Running) and state.pid != selected.pid:
            logger.debug("t=%d: %s preempts %s", time, selected.pid, state.pid)
            closed_blocks.append(GanttBlock(pid=state.pid, start_time=state.block_start, end_time=time))
            state = Running(pid=selected.pid, block_start=time)
        elif isinstance(state, Idle):
            state = Running(pid=selected.pid, block_start=time)

        selected.remaining_time -= 1

        finished: Optional[ProcessState] = None
        if selected.finished:
            selected.finish(time + 1)
            completed += 1
            finished = selected
            logger.debug(
                "t=%d: %s completes (turnaround=%d, waiting=%d)",
                time + 1,
                selected.pid,
                selected.turnaround_time,
                selected.waiting_time,
            )
            closed_blocks.append(GanttBlock(pid=selected.pid, start_time=state.block_start, end_time=time + 1))
            state = Idle()

        yield Tick(time=time, running_pid=selected.pid, closed=tuple(closed_blocks), completed=finished)
        time += 1


def schedule_priority(processes: Sequence[Process]) -> ScheduleResult:
    """
    Preemptive Priority scheduling.

    Runs the unit-step simulation to completion and collects the Gantt
    timeline plus per-process metrics (reported in input order). Idle CPU
    time produces no block; it shows up as gaps between blocks.
    """
    timeline: List[GanttBlock] = []
    finished: Dict[str, ProcessState] = {}

    for tick in iter_priority_ticks(processes):
        timeline.extend(tick.closed)
        if tick.completed is not None:
            finished[tick.completed.pid] = tick.completed

    metrics = [finished[p.pid] for p in processes if p.pid in finished]
    summary = summarize_process_metrics(metrics)
    result = ScheduleResult(
        algorithm="Priority (preemptive)",
        processes=metrics,
        timeline=timeline,
        avg_waiting_time=summary["avg_waiting"],
        avg_turnaround_time=summary["avg_turnaround"],
    )
    compute_system_metrics(result)
    return result


ALGORITHMS = {
    "priority": schedule_priority,
}


def run_algorithm(name: str, processes: List[Process]) -> ScheduleResult:
    """
    Dispatch to the requested CPU scheduling algorithm.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown or unimplemented algorithm '{name}'")

    func = ALGORITHMS[name]
    return func(processes)
