"""
Scheduler visualizer package.

Simulates preemptive priority CPU scheduling and C-SCAN disk scheduling,
with a command-line interface that renders and animates the results.
"""

__all__ = ["cli"]
