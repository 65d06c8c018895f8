from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple


@dataclass(frozen=True)
class QuizQuestion:
    question: str
    options: Tuple[str, ...]
    correct_answer: str
    explanation: str

    def is_correct(self, answer: str) -> bool:
        return answer == self.correct_answer

    def option_for(self, choice: int) -> str:
        """
        Map a 1-based menu choice to its option text.
        """
        if not 1 <= choice <= len(self.options):
            raise ValueError(f"Choice must be between 1 and {len(self.options)}")
        return self.options[choice - 1]


QUESTIONS: List[QuizQuestion] = [
    QuizQuestion(
        question="What is the primary disadvantage of Priority Scheduling, and which technique is used to resolve it?",
        options=(
            "Deadlock; resolved by Banking Algorithm",
            "Starvation; resolved by Aging",
            "Thrashing; resolved by Swapping",
            "Fragmentation; resolved by Compaction",
        ),
        correct_answer="Starvation; resolved by Aging",
        explanation=(
            "In Priority Scheduling, low-priority processes may wait indefinitely (Starvation) if "
            "high-priority processes keep arriving. Aging solves this by gradually increasing the "
            "priority of waiting processes over time."
        ),
    ),
    QuizQuestion(
        question=(
            "In Preemptive Priority Scheduling, what happens if a newly arriving process has a higher "
            "priority than the currently running process?"
        ),
        options=(
            "The new process waits in the queue.",
            "The current process is paused (preempted) and the CPU is given to the new process immediately.",
            "Both processes run simultaneously.",
            "The new process is discarded.",
        ),
        correct_answer="The current process is paused (preempted) and the CPU is given to the new process immediately.",
        explanation=(
            "Preemptive scheduling allows the OS to interrupt the currently executing task to run a "
            "higher-priority task immediately."
        ),
    ),
    QuizQuestion(
        question="In standard Priority Scheduling, how is a tie broken when two processes have the exact same priority?",
        options=(
            "Shortest Job First (SJF)",
            "Round Robin (RR)",
            "First-Come-First-Serve (FCFS)",
            "Random Selection",
        ),
        correct_answer="First-Come-First-Serve (FCFS)",
        explanation="When priorities are identical, the OS typically defaults to arrival order (FCFS).",
    ),
    QuizQuestion(
        question="What is the primary advantage of C-SCAN over the standard SCAN algorithm?",
        options=(
            "Minimizes seek time perfectly.",
            "Provides a more uniform wait time (fairness) for all cylinders.",
            "Requires less memory.",
            "Services requests in both directions.",
        ),
        correct_answer="Provides a more uniform wait time (fairness) for all cylinders.",
        explanation=(
            "C-SCAN services requests in only one direction, ensuring that innermost and outermost "
            "tracks have equal wait times."
        ),
    ),
    QuizQuestion(
        question="In C-SCAN, what does the disk arm do when it reaches the end of the disk?",
        options=(
            "Reverses direction servicing requests.",
            "Stops and waits.",
            "Jumps to the beginning (0) without servicing requests.",
            "Jumps to the middle.",
        ),
        correct_answer="Jumps to the beginning (0) without servicing requests.",
        explanation=(
            "It performs a 'flyback' to the start to maintain the scan direction, treating the disk "
            "as a circular loop."
        ),
    ),
]


def score_answers(answers: Sequence[str], questions: Sequence[QuizQuestion] = QUESTIONS) -> int:
    """
    Count correct answers; unanswered questions score nothing.
    """
    return sum(1 for q, a in zip(questions, answers) if q.is_correct(a))
