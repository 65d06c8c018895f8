from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Callable, List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import config
from .algorithms import iter_priority_ticks, run_algorithm, validate_processes
from .disk import schedule_cscan
from .errors import InvalidInput
from .gantt import build_rich_gantt, render_seek_track
from .models import Process, ScheduleResult, SeekResult
from .quiz import QUESTIONS, QuizQuestion
from .workload_io import default_processes, filter_requests, load_workload, next_pid, parse_int_list

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scheduler-viz",
        description="Visualize preemptive priority CPU scheduling and C-SCAN disk scheduling.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions (preemptions, completions, jumps).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    cpu_parser = subparsers.add_parser("cpu", help="Run preemptive priority scheduling on a workload.")
    cpu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in five-process demo).",
    )
    cpu_parser.add_argument(
        "--step",
        action="store_true",
        help="Show a time-stepped simulation in the terminal.",
    )
    cpu_parser.add_argument(
        "--step-delay",
        type=float,
        default=config.CPU_STEP_DELAY,
        help=f"Seconds to wait between time units when --step is used (default: {config.CPU_STEP_DELAY}).",
    )

    disk_parser = subparsers.add_parser("disk", help="Run C-SCAN disk scheduling on a request queue.")
    disk_parser.add_argument(
        "--head",
        type=int,
        default=config.DEFAULT_HEAD,
        help=f"Initial head cylinder (default: {config.DEFAULT_HEAD}).",
    )
    disk_parser.add_argument(
        "--size",
        type=int,
        default=config.DEFAULT_DISK_SIZE,
        help=f"Number of cylinders on the disk (default: {config.DEFAULT_DISK_SIZE}).",
    )
    disk_parser.add_argument(
        "--requests",
        "-r",
        default=config.DEFAULT_REQUESTS,
        help=f"Comma separated request cylinders (default: {config.DEFAULT_REQUESTS}).",
    )
    disk_parser.add_argument(
        "--step",
        action="store_true",
        help="Reveal the seek path one move at a time.",
    )
    disk_parser.add_argument(
        "--step-delay",
        type=float,
        default=config.DISK_STEP_DELAY,
        help=f"Seconds to wait between moves when --step is used (default: {config.DISK_STEP_DELAY}).",
    )

    subparsers.add_parser("quiz", help="Answer a short quiz on priority scheduling and C-SCAN.")

    menu_parser = subparsers.add_parser(
        "menu",
        help="Interactive menu to switch between the CPU, disk and quiz views.",
    )
    menu_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Workload to start the CPU view with (default: built-in five-process demo).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=config.LOG_FORMAT,
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()

    headers = ["PID", "Arrive", "Burst", "Priority", "Complete", "Wait", "Turnaround"]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
        )

    console.print(proc_table)
    console.print()

    if result.system:
        sys = result.system
        sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
        sys_table.add_column("Metric")
        sys_table.add_column("Value", justify="right")

        sys_table.add_row("Avg waiting", f"{result.avg_waiting_time:.2f}")
        sys_table.add_row("Avg turnaround", f"{result.avg_turnaround_time:.2f}")
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Idle time", str(sys.idle_time))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")
        sys_table.add_row("Starvation count", str(sys.starvation_count))

        console.print(sys_table)


def _animate_cpu(processes: List[Process], delay: float, console: Console) -> None:
    """
    Time-stepped textual simulation fed by the engine's tick stream.
    """
    console.print("[bold]Simulating Priority (preemptive)[/bold]")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    run_length = 0
    last_pid: Optional[str] = None
    for tick in iter_priority_ticks(processes):
        if tick.running_pid is None:
            run_length = 0
            console.print(f"t={tick.time:2d}: [dim](idle)[/dim]")
        else:
            run_length = run_length + 1 if tick.running_pid == last_pid else 1
            bar = f"[green]{'█' * run_length}[/green]"
            msg = f"t={tick.time:2d}: {tick.running_pid} {bar}"
            if tick.completed is not None:
                msg += f" [bold]done at {tick.completed.completion_time}[/bold]"
            console.print(msg)
        last_pid = None if tick.completed is not None else tick.running_pid
        time.sleep(delay)


def _print_seek_result(result: SeekResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] C-SCAN  [bold]Head:[/bold] {result.head}  "
                  f"[bold]Cylinders:[/bold] 0-{result.disk_size - 1}")
    console.print()

    if not result.steps:
        console.print("[yellow]No requests to service.[/yellow]")
    else:
        console.print(render_seek_track(result))

        step_table = Table(title="Seek steps", box=box.SIMPLE_HEAVY)
        step_table.add_column("#", justify="right")
        step_table.add_column("From", justify="right")
        step_table.add_column("To", justify="right")
        step_table.add_column("Distance", justify="right")
        step_table.add_column("Move", justify="center")
        for idx, step in enumerate(result.steps, start=1):
            step_table.add_row(
                str(idx),
                str(step.from_cylinder),
                str(step.to_cylinder),
                str(step.distance),
                "[magenta]jump[/magenta]" if step.is_jump else "seek",
            )
        console.print(step_table)
        console.print(f"[bold]Service order:[/bold] {' -> '.join(str(r) for r in result.service_order)}")

    console.print(f"[bold]Total seek distance:[/bold] {result.total_seek_distance}")


def _animate_disk(result: SeekResult, delay: float, console: Console) -> None:
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")
    running_total = 0
    for idx, step in enumerate(result.steps, start=1):
        running_total += step.distance
        style = "magenta" if step.is_jump else "cyan"
        kind = "jump" if step.is_jump else "seek"
        console.print(
            f"[{style}]{idx:2d}. {kind} {step.from_cylinder:>4} -> {step.to_cylinder:<4}[/{style}]"
            f" +{step.distance} (total {running_total})"
        )
        time.sleep(config.DISK_JUMP_DELAY if step.is_jump else delay)


def _run_cpu(processes: List[Process], step: bool, delay: float, console: Console) -> None:
    if not processes:
        console.print("[yellow]No processes to schedule.[/yellow]")
        return
    result = run_algorithm("priority", processes)
    if step:
        try:
            _animate_cpu(processes, delay, console)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_result(result, console)


def _run_disk(head: int, size: int, request_text: str, step: bool, delay: float, console: Console) -> SeekResult:
    requests = filter_requests(parse_int_list(request_text), size)
    result = schedule_cscan(head, size, requests)
    if step and result.steps:
        try:
            _animate_disk(result, delay, console)
        except KeyboardInterrupt:
            console.print("[yellow]Animation skipped.[/yellow]")
    _print_seek_result(result, console)
    return result


def _ask_question(question: QuizQuestion, number: int, console: Console, ask: Callable[[str], str]) -> bool:
    console.print(f"\n[bold cyan]Question {number}/{len(QUESTIONS)}[/bold cyan]")
    console.print(question.question)
    for idx, option in enumerate(question.options, start=1):
        console.print(f"  [yellow]{idx}[/yellow]. {option}")

    while True:
        choice = ask(f"Answer [1-{len(question.options)}]: ").strip()
        try:
            answer = question.option_for(int(choice))
            break
        except ValueError:
            console.print("[red]Invalid selection.[/red]")

    correct = question.is_correct(answer)
    if correct:
        console.print("[green]Correct![/green]")
    else:
        console.print(f"[red]Incorrect.[/red] Answer: {question.correct_answer}")
    console.print(f"[dim]{question.explanation}[/dim]")
    return correct


def _run_quiz(console: Console, ask: Optional[Callable[[str], str]] = None) -> int:
    ask = ask or input
    score = 0
    for number, question in enumerate(QUESTIONS, start=1):
        if _ask_question(question, number, console, ask):
            score += 1
    console.print(f"\n[bold]Score:[/bold] {score}/{len(QUESTIONS)}")
    return score


def _add_process(processes: List[Process], console: Console) -> None:
    """
    Prompt for arrival, burst and priority; append a new P<n> process.

    The list is left unchanged if the new record would make the workload
    unschedulable.
    """
    try:
        arrival = int(input("Arrival time: ").strip())
        burst = int(input("Burst time: ").strip())
        priority = int(input("Priority: ").strip())
    except ValueError:
        console.print("[red]All fields must be integers; process not added.[/red]")
        return
    process = Process(next_pid(processes), arrival_time=arrival, burst_time=burst, priority=priority)
    try:
        validate_processes(processes + [process])
    except InvalidInput as exc:
        console.print(f"[red]Error: {exc}; process not added.[/red]")
        return
    processes.append(process)
    console.print(f"Added [bold]{process.pid}[/bold].")


def _remove_process(processes: List[Process], console: Console) -> None:
    pid = input("PID to remove: ").strip()
    for idx, p in enumerate(processes):
        if p.pid.lower() == pid.lower():
            del processes[idx]
            console.print(f"Removed [bold]{p.pid}[/bold].")
            return
    console.print(f"[red]No process named {pid!r}.[/red]")


def _interactive_menu(default_workload: Optional[str]) -> None:
    console = Console()
    processes = load_workload(default_workload) if default_workload else default_processes()
    head, size, request_text = config.DEFAULT_HEAD, config.DEFAULT_DISK_SIZE, config.DEFAULT_REQUESTS

    while True:
        console.print("\n[bold cyan]Scheduler Visualizer[/bold cyan] [dim](q to quit)[/dim]")
        console.print("  [yellow]1[/yellow]. CPU scheduler (preemptive priority)")
        console.print("  [yellow]2[/yellow]. Disk controller (C-SCAN)")
        console.print("  [yellow]3[/yellow]. Quiz")

        choice = input("Choice [1-3 or q]: ").strip().lower()
        if choice in {"q", "quit", "exit"}:
            return

        try:
            if choice == "1":
                console.print(f"[bold]Processes:[/bold] {', '.join(p.pid for p in processes) or '(none)'}")
                action = input("Enter=run, a=add process, r=remove process, c=clear: ").strip().lower()
                if action == "a":
                    _add_process(processes, console)
                    continue
                if action == "r":
                    _remove_process(processes, console)
                    continue
                if action == "c":
                    processes = []
                    continue
                animate = input("Animate this run? [Enter=no, y=yes]: ").strip().lower() == "y"
                _run_cpu(list(processes), animate, config.CPU_STEP_DELAY, console)
            elif choice == "2":
                head_in = input(f"Head position [{head}]: ").strip()
                size_in = input(f"Disk size [{size}]: ").strip()
                req_in = input(f"Requests [{request_text}]: ").strip()
                head = int(head_in) if head_in else head
                size = int(size_in) if size_in else size
                request_text = req_in or request_text
                animate = input("Animate this run? [Enter=no, y=yes]: ").strip().lower() == "y"
                _run_disk(head, size, request_text, animate, config.DISK_STEP_DELAY, console)
            elif choice == "3":
                _run_quiz(console)
            else:
                console.print("[red]Invalid selection.[/red]")
        except ValueError as exc:
            console.print(f"[red]Error: {exc}[/red]")


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    console = Console()

    try:
        if args.command == "cpu":
            processes = load_workload(Path(args.workload)) if args.workload else default_processes()
            _run_cpu(processes, args.step, args.step_delay, console)
            return 0

        if args.command == "disk":
            _run_disk(args.head, args.size, args.requests, args.step, args.step_delay, console)
            return 0

        if args.command == "quiz":
            _run_quiz(console)
            return 0

        if args.command == "menu":
            _interactive_menu(args.workload)
            return 0
    except (OSError, ValueError) as exc:
        logger.debug("command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
