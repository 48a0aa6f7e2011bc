"""
Burst scheduler package.

Simulates single-core CPU scheduling (FCFS and Round Robin) over processes
that each need one CPU burst, tracking total elapsed time and per-process
wait time.
"""

from .algorithms import fcfs_run, rr_next, rr_run, run_algorithm
from .models import AllocationError, ContractViolation, Process, ProcessTable

__all__ = [
    "AllocationError",
    "ContractViolation",
    "Process",
    "ProcessTable",
    "cli",
    "fcfs_run",
    "rr_next",
    "rr_run",
    "run_algorithm",
]
