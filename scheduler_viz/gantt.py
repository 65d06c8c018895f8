from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import PROCESS_COLORS
from .models import GanttBlock, SeekResult


def render_gantt(blocks: List[GanttBlock]) -> str:
    """
    Plain-text Gantt chart; idle gaps are drawn as dots.
    """
    if not blocks:
        return "(no execution)"

    blocks = sorted(blocks, key=lambda b: (b.start_time, b.end_time))

    line = "|"
    labels = ""
    time_marks = "0"
    last_time = 0

    for block in blocks:
        idle_gap = block.start_time - last_time
        if idle_gap > 0:
            line += "." * idle_gap
            labels += " " * idle_gap
            last_time = block.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, block.duration)
        line += "=" * width
        labels += block.pid[:width].ljust(width)
        last_time = block.end_time
        time_marks += f"{last_time:>3}"

    line += "|"

    return "\n".join(["Gantt Chart:", line, labels, time_marks])


def build_rich_gantt(blocks: List[GanttBlock]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not blocks:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    blocks = sorted(blocks, key=lambda b: (b.start_time, b.end_time))

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = PROCESS_COLORS[len(pid_to_color) % len(PROCESS_COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for block in blocks:
        idle_gap = block.start_time - last_time
        if idle_gap > 0:
            timeline.append("." * idle_gap, style="dim")
            labels.append(" " * idle_gap)
            last_time = block.start_time
            time_marks += f"{last_time:>3}"

        width = max(1, block.duration)
        timeline.append(" " * width, style=f"on {pid_color(block.pid)}")
        labels.append(block.pid[:width].ljust(width), style="bold")

        last_time = block.end_time
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks


def _track_column(cylinder: int, disk_size: int, width: int) -> int:
    if disk_size <= 1:
        return 0
    return round(cylinder * (width - 1) / (disk_size - 1))


def render_seek_track(result: SeekResult, upto: int | None = None, width: int = 60) -> Text:
    """
    Draw the disk as a horizontal track with one row per seek step.

    Requests are marked on the top row; each following row shows the head
    moving from ``from_cylinder`` to ``to_cylinder``. ``upto`` limits the
    number of steps drawn, for animation.
    """
    steps = result.steps if upto is None else result.steps[:upto]
    text = Text()

    header = [" "] * width
    for r in result.requests:
        header[_track_column(r, result.disk_size, width)] = "*"
    header[_track_column(result.head, result.disk_size, width)] = "H"
    text.append("".join(header), style="yellow")
    text.append(f"  0..{result.disk_size - 1}\n", style="dim")

    for step in steps:
        row = [" "] * width
        a = _track_column(step.from_cylinder, result.disk_size, width)
        b = _track_column(step.to_cylinder, result.disk_size, width)
        lo, hi = min(a, b), max(a, b)
        fill = "-" if step.is_jump else "="
        for col in range(lo, hi + 1):
            row[col] = fill
        row[b] = "<" if step.is_jump else ">"
        style = "magenta" if step.is_jump else "cyan"
        text.append("".join(row), style=style)
        label = f"  {step.from_cylinder} -> {step.to_cylinder} ({step.distance})"
        text.append(label + (" jump" if step.is_jump else "") + "\n")

    return text
