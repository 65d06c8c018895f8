from __future__ import annotations

import csv
import json
import logging
import re
from pathlib import Path
from typing import Iterable, List, Sequence

from .models import Process

logger = logging.getLogger(__name__)


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ValueError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ValueError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _process_from_mapping(mapping) -> Process:
    try:
        pid = str(mapping["pid"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid process entry: {mapping!r}") from exc

    try:
        priority = int(mapping["priority"])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Missing or invalid priority in process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )


def default_processes() -> List[Process]:
    """
    The demo workload shown when no workload file is given.
    """
    return [
        Process("P1", arrival_time=0, burst_time=4, priority=2),
        Process("P2", arrival_time=1, burst_time=3, priority=1),
        Process("P3", arrival_time=2, burst_time=5, priority=3),
        Process("P4", arrival_time=3, burst_time=2, priority=4),
        Process("P5", arrival_time=4, burst_time=6, priority=1),
    ]


def next_pid(processes: Sequence[Process]) -> str:
    """
    Name a new process one past the highest existing ``P<n>`` id.
    """
    highest = 0
    for p in processes:
        match = re.fullmatch(r"P(\d+)", p.pid)
        if match:
            highest = max(highest, int(match.group(1)))
    return f"P{highest + 1}"


def parse_int_list(text: str) -> List[int]:
    """
    Parse free text such as ``"98, 183,37 x 122"`` into integers.

    Tokens that are not integers are dropped.
    """
    values: List[int] = []
    for token in re.split(r"[,\s]+", text.strip()):
        if not token:
            continue
        try:
            values.append(int(token))
        except ValueError:
            logger.debug("ignoring non-numeric token %r", token)
    return values


def filter_requests(requests: Iterable[int], disk_size: int) -> List[int]:
    """
    Drop requests that fall outside cylinders 0..disk_size-1.
    """
    kept: List[int] = []
    for r in requests:
        if 0 <= r < disk_size:
            kept.append(r)
        else:
            logger.debug("dropping request %d outside disk of size %d", r, disk_size)
    return kept
