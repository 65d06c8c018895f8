import json
from pathlib import Path

from rich.console import Console

from scheduler_viz.cli import _run_quiz, build_parser, main


def test_parser_defaults():
    args = build_parser().parse_args(["disk"])
    assert args.head == 50
    assert args.size == 200
    assert args.step is False


def test_cpu_default_workload(capsys):
    assert main(["cpu"]) == 0
    out = capsys.readouterr().out
    assert "Priority (preemptive)" in out
    assert "P5" in out
    assert "Avg waiting" in out


def test_cpu_step_animation(capsys, tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text(json.dumps([{"pid": "A", "arrival_time": 2, "burst_time": 2, "priority": 1}]))
    assert main(["cpu", "-w", str(p), "--step", "--step-delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "t= 0: (idle)" in out
    assert "done at 4" in out


def test_cpu_invalid_workload_exits_with_error(capsys, tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,0,1\n")
    assert main(["cpu", "--workload", str(p)]) == 2
    assert "Error" in capsys.readouterr().out


def test_disk_default_requests(capsys):
    assert main(["disk"]) == 0
    out = capsys.readouterr().out
    assert "Total seek distance: 385" in out
    assert "jump" in out


def test_disk_filters_out_of_range_requests(capsys):
    assert main(["disk", "--head", "5", "--size", "10", "--requests", "7, 42, -3, x"]) == 0
    out = capsys.readouterr().out
    assert "Total seek distance: 4" in out


def test_disk_empty_queue(capsys):
    assert main(["disk", "--requests", ""]) == 0
    out = capsys.readouterr().out
    assert "No requests to service." in out
    assert "Total seek distance: 0" in out


def test_disk_head_outside_disk(capsys):
    assert main(["disk", "--head", "300"]) == 2
    assert "outside the disk" in capsys.readouterr().out


def test_quiz_scores_and_retries_bad_input():
    answers = iter(["x", "9", "2", "2", "3", "2", "1"])
    console = Console(record=True)
    score = _run_quiz(console, ask=lambda prompt: next(answers))
    assert score == 4
    text = console.export_text()
    assert "Invalid selection." in text
    assert "Score: 4/5" in text


def _feed(monkeypatch, *answers):
    it = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(it))


def _three_process_workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text(json.dumps([
        {"pid": "P1", "arrival_time": 0, "burst_time": 4, "priority": 2},
        {"pid": "P2", "arrival_time": 1, "burst_time": 3, "priority": 1},
        {"pid": "P3", "arrival_time": 2, "burst_time": 5, "priority": 3},
    ]))
    return p


def test_menu_rejects_invalid_process_and_keeps_workload(monkeypatch, capsys):
    _feed(monkeypatch, "1", "a", "0", "0", "1", "1", "", "", "q")
    assert main(["menu"]) == 0
    out = capsys.readouterr().out
    assert "burst_time must be >= 1; process not added." in out
    assert "Added P6" not in out
    assert "Per-process metrics" in out


def test_menu_remove_then_add_gets_fresh_pid(monkeypatch, capsys, tmp_path: Path):
    workload = _three_process_workload(tmp_path)
    _feed(monkeypatch, "1", "r", "p2", "1", "a", "3", "2", "0", "1", "", "", "q")
    assert main(["menu", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "Removed P2." in out
    assert "Added P4." in out
    assert "Error" not in out
    assert "Per-process metrics" in out


def test_menu_remove_unknown_pid(monkeypatch, capsys):
    _feed(monkeypatch, "1", "r", "P9", "q")
    assert main(["menu"]) == 0
    assert "No process named 'P9'." in capsys.readouterr().out
