import pytest

from burst_scheduler.models import AllocationError, ContractViolation, Process, ProcessTable, ScheduledSlice


def test_from_bursts_assigns_ids_in_order():
    table = ProcessTable.from_bursts([5, 3, 8])
    assert len(table) == 3
    assert [p.pid for p in table] == [0, 1, 2]
    assert [p.remaining_burst for p in table] == [5, 3, 8]
    assert [p.burst_time for p in table] == [5, 3, 8]
    assert all(p.accumulated_wait == 0 for p in table)


def test_empty_table():
    table = ProcessTable.from_bursts([])
    assert len(table) == 0
    assert table.all_complete()
    assert table.clock == 0


def test_from_bursts_rejects_negative_and_non_int():
    with pytest.raises(ContractViolation):
        ProcessTable.from_bursts([3, -1])
    with pytest.raises(ContractViolation):
        ProcessTable.from_bursts([3, 2.5])
    with pytest.raises(ContractViolation):
        ProcessTable.from_bursts([True])


def test_from_bursts_wraps_memory_error(monkeypatch):
    import burst_scheduler.models as models

    def boom(**kwargs):
        raise MemoryError

    monkeypatch.setattr(models, "Process", boom)
    with pytest.raises(AllocationError):
        ProcessTable.from_bursts([1, 2])


def test_advance_charges_wait_to_live_peers_only():
    table = ProcessTable.from_bursts([2, 4, 0])
    table.advance(0, 2)
    assert table[0].remaining_burst == 0
    assert table[1].accumulated_wait == 2
    assert table[2].accumulated_wait == 0  # zero burst never waits

    table.advance(1, 3)
    assert table[0].accumulated_wait == 0  # finished, no more wait
    assert table[1].remaining_burst == 1


def test_advance_records_timeline():
    table = ProcessTable.from_bursts([2, 4])
    table.advance(1, 3)
    table.advance(0, 2)
    assert table.timeline == [
        ScheduledSlice(pid=1, start_time=0, end_time=3),
        ScheduledSlice(pid=0, start_time=3, end_time=5),
    ]
    assert table.clock == 5


@pytest.mark.parametrize(
    "index, amount",
    [
        (3, 1),    # past the end
        (-1, 1),   # negative indices are not wrapped
        (0, 0),    # zero-length run
        (0, 6),    # more than remaining
    ],
)
def test_advance_contract_violations_leave_state_untouched(index, amount):
    table = ProcessTable.from_bursts([5, 3, 8])
    with pytest.raises(ContractViolation):
        table.advance(index, amount)
    assert [p.remaining_burst for p in table] == [5, 3, 8]
    assert [p.accumulated_wait for p in table] == [0, 0, 0]
    assert table.timeline == []


def test_getitem_out_of_range():
    table = ProcessTable.from_bursts([1])
    with pytest.raises(ContractViolation):
        table[1]


def test_contract_violation_is_value_error():
    assert issubclass(ContractViolation, ValueError)
    assert issubclass(AllocationError, MemoryError)


@pytest.mark.parametrize(
    "processes",
    [
        [Process(pid=0, burst_time=-1, remaining_burst=-1)],
        [Process(pid=0, burst_time=3, remaining_burst=4)],
        [Process(pid=0, burst_time=3, remaining_burst=3, accumulated_wait=-2)],
        [Process(pid=1, burst_time=3, remaining_burst=3)],
        [Process(pid=0, burst_time=2.5, remaining_burst=2)],
    ],
)
def test_constructor_enforces_process_invariants(processes):
    with pytest.raises(ContractViolation):
        ProcessTable(processes)


def test_constructor_accepts_valid_processes():
    table = ProcessTable([Process(pid=0, burst_time=3, remaining_burst=1, accumulated_wait=2)])
    assert table[0].remaining_burst == 1
    assert table.clock == 0
