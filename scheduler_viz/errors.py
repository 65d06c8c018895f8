from __future__ import annotations


class InvalidInput(ValueError):
    """
    Raised when a simulation is asked to run on malformed or out-of-range
    input. Nothing is simulated when this is raised.
    """
