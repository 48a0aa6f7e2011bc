from __future__ import annotations

import logging
from typing import Iterable, Optional

from .metrics import compute_system_metrics
from .models import ContractViolation, ProcessTable, ScheduleResult

logger = logging.getLogger(__name__)


def fcfs_run(table: ProcessTable) -> int:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Runs every process to completion in table order and returns the total
    elapsed time.
    """
    current_time = 0
    for idx, p in enumerate(table):
        burst = p.remaining_burst
        if burst == 0:
            continue
        table.advance(idx, burst)
        current_time += burst

    logger.info("FCFS finished %d processes in %d", len(table), current_time)
    return current_time


def rr_next(table: ProcessTable, current: int) -> Optional[int]:
    """
    Pick the next process for round-robin, circularly after ``current``.

    Returns None once every process is complete. The scan covers the whole
    table, so a lone live process at ``current`` is picked again.
    """
    n = len(table)
    if n == 0:
        return None
    if not 0 <= current < n:
        raise ContractViolation(f"process index {current} out of range for table of {n}")

    start = (current + 1) % n
    for offset in range(n):
        idx = (start + offset) % n
        if table[idx].remaining_burst > 0:
            return idx
    return None


def _check_quantum(quantum) -> int:
    if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
        raise ContractViolation(f"Round Robin requires a positive integer quantum, got {quantum!r}")
    return quantum


def rr_run(table: ProcessTable, quantum: int) -> int:
    """
    Round Robin scheduling with a fixed time quantum.
    """
    _check_quantum(quantum)
    if len(table) == 0:
        return 0

    current_time = 0
    current: Optional[int] = 0

    while current is not None:
        p = table[current]
        # A zero-length burst at index 0 is skipped without taking time.
        if p.remaining_burst > 0:
            amount = min(quantum, p.remaining_burst)
            table.advance(current, amount)
            current_time += amount

        current = rr_next(table, current)

    logger.info("RR (q=%d) finished %d processes in %d", quantum, len(table), current_time)
    return current_time


def schedule_fcfs(bursts: Iterable[int], quantum: Optional[int] = None) -> ScheduleResult:
    table = ProcessTable.from_bursts(bursts)
    total = fcfs_run(table)
    result = ScheduleResult(
        algorithm="FCFS",
        quantum=None,
        total_time=total,
        processes=table.processes,
        timeline=list(table.timeline),
    )
    compute_system_metrics(result)
    return result


def schedule_rr(bursts: Iterable[int], quantum: Optional[int] = None) -> ScheduleResult:
    if quantum is None:
        raise ContractViolation("Round Robin requires a positive quantum (use --quantum)")
    _check_quantum(quantum)

    table = ProcessTable.from_bursts(bursts)
    total = rr_run(table, quantum)
    result = ScheduleResult(
        algorithm="Round Robin",
        quantum=quantum,
        total_time=total,
        processes=table.processes,
        timeline=list(table.timeline),
    )
    compute_system_metrics(result)
    return result


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "rr": schedule_rr,
}


def run_algorithm(name: str, bursts: Iterable[int], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is ignored by FCFS.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(bursts, quantum=quantum)
