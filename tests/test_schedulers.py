import pytest

from scheduler_viz.algorithms import iter_priority_ticks, run_algorithm, schedule_priority
from scheduler_viz.errors import InvalidInput
from scheduler_viz.models import GanttBlock, Process
from scheduler_viz.workload_io import default_processes


def _procs():
    return [
        Process("P1", arrival_time=0, burst_time=4, priority=2),
        Process("P2", arrival_time=1, burst_time=3, priority=1),
        Process("P3", arrival_time=2, burst_time=5, priority=3),
    ]


def _blocks(res):
    return [(b.pid, b.start_time, b.end_time) for b in res.timeline]


def test_priority_preemption_pattern():
    res = schedule_priority(_procs())
    assert _blocks(res) == [("P1", 0, 1), ("P2", 1, 4), ("P1", 4, 7), ("P3", 7, 12)]

    by_pid = {p.pid: p for p in res.processes}
    assert by_pid["P1"].completion_time == 7
    assert by_pid["P2"].completion_time == 4
    assert by_pid["P3"].completion_time == 12
    assert by_pid["P1"].waiting_time == 3
    assert by_pid["P2"].waiting_time == 0
    assert by_pid["P3"].waiting_time == 5
    assert res.avg_waiting_time == pytest.approx(8 / 3)
    assert res.avg_turnaround_time == pytest.approx(20 / 3)


def test_metrics_reported_in_input_order():
    res = schedule_priority(_procs())
    assert [p.pid for p in res.processes] == ["P1", "P2", "P3"]


def test_default_workload():
    res = schedule_priority(default_processes())
    assert _blocks(res) == [
        ("P1", 0, 1),
        ("P2", 1, 4),
        ("P5", 4, 10),
        ("P1", 10, 13),
        ("P3", 13, 18),
        ("P4", 18, 20),
    ]


def test_cpu_time_is_conserved():
    procs = default_processes() + [Process("P6", arrival_time=30, burst_time=2, priority=0)]
    res = schedule_priority(procs)
    assert sum(b.duration for b in res.timeline) == sum(p.burst_time for p in procs)
    assert res.system.cpu_busy_time == sum(p.burst_time for p in procs)


def test_waiting_and_turnaround_bounds():
    res = schedule_priority(default_processes())
    for p in res.processes:
        assert p.waiting_time >= 0
        assert p.turnaround_time >= p.burst_time
        assert p.turnaround_time == p.completion_time - p.arrival_time
        assert p.waiting_time == p.turnaround_time - p.burst_time
        assert p.remaining_time == 0


def test_equal_priority_runs_in_arrival_order():
    procs = [
        Process("H", arrival_time=0, burst_time=3, priority=0),
        Process("A", arrival_time=2, burst_time=1, priority=5),
        Process("B", arrival_time=1, burst_time=1, priority=5),
    ]
    res = schedule_priority(procs)
    assert _blocks(res) == [("H", 0, 3), ("B", 3, 4), ("A", 4, 5)]


def test_single_late_process_leaves_idle_gap():
    res = schedule_priority([Process("P1", arrival_time=5, burst_time=3, priority=1)])
    assert res.timeline == [GanttBlock("P1", 5, 8)]
    only = res.processes[0]
    assert only.waiting_time == 0
    assert only.turnaround_time == 3
    assert res.system.makespan == 8
    assert res.system.idle_time == 5


def test_arrival_at_completion_instant_is_eligible():
    procs = [
        Process("A", arrival_time=0, burst_time=2, priority=3),
        Process("B", arrival_time=2, burst_time=1, priority=1),
        Process("C", arrival_time=0, burst_time=1, priority=4),
    ]
    res = schedule_priority(procs)
    assert _blocks(res) == [("A", 0, 2), ("B", 2, 3), ("C", 3, 4)]


def test_repeated_runs_are_identical():
    procs = default_processes()
    first = schedule_priority(procs)
    second = schedule_priority(procs)
    assert first == second
    assert procs == default_processes()


def test_empty_workload_is_noop():
    res = schedule_priority([])
    assert res.timeline == []
    assert res.processes == []
    assert res.avg_waiting_time == 0.0
    assert res.system.makespan == 0


@pytest.mark.parametrize(
    "bad",
    [
        Process("X", arrival_time=-1, burst_time=2, priority=1),
        Process("X", arrival_time=0, burst_time=0, priority=1),
        Process("X", arrival_time=0, burst_time=2, priority=-3),
        Process("X", arrival_time=0, burst_time=2, priority=None),
    ],
)
def test_invalid_process_rejects_whole_workload(bad):
    with pytest.raises(InvalidInput):
        schedule_priority(_procs() + [bad])


def test_duplicate_pid_rejected():
    with pytest.raises(InvalidInput):
        schedule_priority(_procs() + [Process("P1", arrival_time=3, burst_time=1, priority=1)])


def test_ticks_cover_every_time_unit():
    ticks = list(iter_priority_ticks([Process("P1", arrival_time=5, burst_time=3, priority=1)]))
    assert [t.time for t in ticks] == list(range(8))
    assert [t.running_pid for t in ticks] == [None] * 5 + ["P1"] * 3
    assert ticks[-1].completed.pid == "P1"
    assert ticks[-1].closed == (GanttBlock("P1", 5, 8),)


def test_preemption_tick_closes_previous_block():
    ticks = list(iter_priority_ticks(_procs()))
    assert ticks[1].running_pid == "P2"
    assert ticks[1].closed == (GanttBlock("P1", 0, 1),)


def test_ticks_can_be_abandoned():
    procs = _procs()
    ticks = iter_priority_ticks(procs)
    next(ticks)
    next(ticks)
    ticks.close()
    assert schedule_priority(procs).timeline[0] == GanttBlock("P1", 0, 1)


def test_run_algorithm_dispatch():
    assert run_algorithm("PRIORITY", _procs()).algorithm == "Priority (preemptive)"
    with pytest.raises(ValueError):
        run_algorithm("fcfs", _procs())


def test_ticks_reject_invalid_workload_at_call():
    with pytest.raises(InvalidInput):
        iter_priority_ticks(_procs() + [Process("X", arrival_time=0, burst_time=0, priority=1)])


def test_ticks_for_empty_workload():
    assert list(iter_priority_ticks([])) == []
