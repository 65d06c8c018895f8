"""
C-SCAN (circular SCAN) disk scheduling.

The arm only services requests while moving towards higher cylinders. It
sweeps up from the head to the last cylinder, then flies back to cylinder 0
without servicing anything and sweeps up again through the requests that
were behind the head.
"""

from __future__ import annotations

import logging
from typing import Iterable, Iterator, List

from .errors import InvalidInput
from .models import SeekResult, SeekStep

logger = logging.getLogger(__name__)


def _require_int(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")


def validate_disk_input(head: int, disk_size: int, requests: Iterable[int]) -> List[int]:
    """
    Check the disk geometry and every request; return the requests as a list.

    Out-of-range requests are rejected here, never clamped. Callers that want
    the lenient behaviour should run ``workload_io.filter_requests`` first.
    """
    _require_int("disk_size", disk_size)
    _require_int("head", head)
    if disk_size <= 0:
        raise InvalidInput(f"disk_size must be positive, got {disk_size}")
    if not 0 <= head < disk_size:
        raise InvalidInput(f"head {head} is outside the disk (0..{disk_size - 1})")

    checked: List[int] = []
    for r in requests:
        _require_int("request", r)
        if not 0 <= r < disk_size:
            raise InvalidInput(f"request {r} is outside the disk (0..{disk_size - 1})")
        checked.append(r)
    return checked


def _move(from_cylinder: int, to_cylinder: int, is_jump: bool = False) -> SeekStep:
    return SeekStep(
        from_cylinder=from_cylinder,
        to_cylinder=to_cylinder,
        distance=abs(to_cylinder - from_cylinder),
        is_jump=is_jump,
    )


def iter_cscan_steps(head: int, disk_size: int, requests: Iterable[int]) -> Iterator[SeekStep]:
    """
    Yield the C-SCAN seek path one head movement at a time.

    Requests equal to the head belong to the upward sweep. The move to the
    last cylinder happens whenever the arm is not already there; the jump
    back to 0 only happens if requests remain behind the head. Invalid input
    raises InvalidInput here, before any step is produced.
    """
    pending = validate_disk_input(head, disk_size, requests)
    return _cscan_steps(head, disk_size, pending)


def _cscan_steps(head: int, disk_size: int, pending: List[int]) -> Iterator[SeekStep]:
    if not pending:
        return

    right = sorted(r for r in pending if r >= head)
    left = sorted(r for r in pending if r < head)

    position = head
    for r in right:
        yield _move(position, r)
        position = r

    last = disk_size - 1
    if position < last:
        yield _move(position, last)
        position = last

    if left:
        logger.debug("jumping from %d back to 0 with %d requests left", position, len(left))
        yield _move(position, 0, is_jump=True)
        position = 0
        for r in left:
            yield _move(position, r)
            position = r


def schedule_cscan(head: int, disk_size: int, requests: Iterable[int]) -> SeekResult:
    """
    Run C-SCAN to completion and return the full seek path.

    The total includes the distance of the wraparound jump.
    """
    requests = list(requests)
    steps = list(iter_cscan_steps(head, disk_size, requests))
    total = sum(step.distance for step in steps)
    logger.debug("C-SCAN from %d on %d cylinders: %d steps, total seek %d", head, disk_size, len(steps), total)
    return SeekResult(
        head=head,
        disk_size=disk_size,
        requests=requests,
        steps=steps,
        total_seek_distance=total,
    )
