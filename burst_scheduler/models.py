from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)


class ContractViolation(ValueError):
    """
    Raised when a caller breaks a precondition of the scheduling core
    (negative burst, bad index, over-long advance, non-positive quantum).
    """


class AllocationError(MemoryError):
    """Raised when storage for a process table cannot be obtained."""


@dataclass
class Process:
    pid: int
    burst_time: int
    remaining_burst: int
    accumulated_wait: int = 0

    @property
    def is_complete(self) -> bool:
        return self.remaining_burst == 0


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def length(self) -> int:
        return self.end_time - self.start_time


def _check_int(value, what: str) -> int:
    # bool is an int subclass; True is not a burst length
    if isinstance(value, bool) or not isinstance(value, int):
        raise ContractViolation(f"{what} must be an integer, got {value!r}")
    return value


class ProcessTable:
    """
    Fixed-length, index-addressable set of processes mutated in place by a
    scheduler.

    Every call to :meth:`advance` is also recorded as a ScheduledSlice so the
    run can be drawn afterwards; ``clock`` is the sum of all advanced time.
    """

    def __init__(self, processes: List[Process]):
        for idx, p in enumerate(processes):
            if p.pid != idx:
                raise ContractViolation(f"process #{idx} has pid {p.pid}, expected {idx}")
            _check_int(p.burst_time, f"P{idx} burst_time")
            _check_int(p.remaining_burst, f"P{idx} remaining_burst")
            _check_int(p.accumulated_wait, f"P{idx} accumulated_wait")
            if not 0 <= p.remaining_burst <= p.burst_time:
                raise ContractViolation(
                    f"P{idx} remaining_burst {p.remaining_burst} outside 0..{p.burst_time}"
                )
            if p.accumulated_wait < 0:
                raise ContractViolation(f"P{idx} accumulated_wait must be >= 0, got {p.accumulated_wait}")
        self._processes = list(processes)
        self._clock = 0
        self.timeline: List[ScheduledSlice] = []

    @classmethod
    def from_bursts(cls, bursts: Iterable[int]) -> "ProcessTable":
        values = list(bursts)
        for idx, burst in enumerate(values):
            _check_int(burst, f"burst #{idx}")
            if burst < 0:
                raise ContractViolation(f"burst #{idx} must be >= 0, got {burst}")

        try:
            processes = [
                Process(pid=idx, burst_time=burst, remaining_burst=burst)
                for idx, burst in enumerate(values)
            ]
        except MemoryError as exc:
            raise AllocationError(f"cannot allocate {len(values)} processes") from exc

        logger.debug("Created process table with %d processes", len(processes))
        return cls(processes)

    def __len__(self) -> int:
        return len(self._processes)

    def __getitem__(self, index: int) -> Process:
        return self._processes[self._check_index(index)]

    def __iter__(self) -> Iterator[Process]:
        return iter(self._processes)

    def __repr__(self) -> str:
        return f"ProcessTable({self._processes!r})"

    @property
    def clock(self) -> int:
        return self._clock

    @property
    def processes(self) -> List[Process]:
        return list(self._processes)

    def all_complete(self) -> bool:
        return all(p.is_complete for p in self._processes)

    def _check_index(self, index: int) -> int:
        _check_int(index, "process index")
        if not 0 <= index < len(self._processes):
            raise ContractViolation(
                f"process index {index} out of range for table of {len(self._processes)}"
            )
        return index

    def advance(self, index: int, amount: int) -> None:
        """
        Run process ``index`` for ``amount`` time units.

        Every other process that still has burst left waits for the same
        amount. Finished processes do not accrue wait.
        """
        target = self._processes[self._check_index(index)]
        _check_int(amount, "amount")
        if amount < 1:
            raise ContractViolation(f"amount must be >= 1, got {amount}")
        if amount > target.remaining_burst:
            raise ContractViolation(
                f"cannot run P{target.pid} for {amount}: only {target.remaining_burst} left"
            )

        target.remaining_burst -= amount
        for i, p in enumerate(self._processes):
            if i != index and p.remaining_burst > 0:
                p.accumulated_wait += amount

        start = self._clock
        self._clock += amount
        self.timeline.append(ScheduledSlice(pid=target.pid, start_time=start, end_time=self._clock))
        logger.debug("P%d ran %d..%d (remaining %d)", target.pid, start, self._clock, target.remaining_burst)


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    context_switches: int = 0
    starvation_count: int = 0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    total_time: int
    processes: List[Process] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
