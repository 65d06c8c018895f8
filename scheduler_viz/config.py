"""
Default values shared by the CLI and the interactive menu.
"""

# Disk view defaults
DEFAULT_HEAD = 50
DEFAULT_DISK_SIZE = 200
DEFAULT_REQUESTS = "98,183,37,122,14,124,65,67"

# Animation pacing (seconds)
CPU_STEP_DELAY = 0.1
DISK_STEP_DELAY = 0.5
DISK_JUMP_DELAY = 0.3

# Gantt colors, assigned to pids in order of first appearance
PROCESS_COLORS = ["cyan", "magenta", "purple", "green", "dark_orange", "red", "blue", "dark_cyan"]

LOG_FORMAT = "%(message)s"
