from __future__ import annotations

from typing import List

from .models import Process, ScheduleResult, SystemMetrics


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given a finished run's processes
    and timeline slices.
    """
    if not result.processes:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    cpu_busy_time = sum(slice_.length for slice_ in result.timeline)
    makespan = max((slice_.end_time for slice_ in result.timeline), default=0)

    throughput = len(result.processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    context_switches = sum(
        1 for prev, cur in zip(result.timeline, result.timeline[1:]) if prev.pid != cur.pid
    )

    # Count processes whose waiting time is more than 2x the average.
    avg_wait = sum(p.accumulated_wait for p in result.processes) / len(result.processes)
    starvation_count = sum(1 for p in result.processes if p.accumulated_wait > 2 * avg_wait)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        context_switches=context_switches,
        starvation_count=starvation_count,
    )
    result.system = system
    return system


def turnaround_time(p: Process) -> int:
    # Everything is ready at t=0, so completion == turnaround.
    return p.accumulated_wait + p.burst_time


def summarize_process_metrics(processes: List[Process]) -> dict:
    """
    Return averages of the key per-process metrics for quick comparison.
    """
    if not processes:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "max_waiting": 0.0}

    n = len(processes)
    return {
        "avg_waiting": sum(p.accumulated_wait for p in processes) / n,
        "avg_turnaround": sum(turnaround_time(p) for p in processes) / n,
        "max_waiting": float(max(p.accumulated_wait for p in processes)),
    }
