from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

from querywarnings import QueryWarning, TestingWarningCollector, WarningCode, create_test_warning


def _run_together(workers: int, fn) -> list:
    barrier = threading.Barrier(workers)

    def task(index: int):
        barrier.wait()
        return fn(index)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(task, range(workers)))


def test_parallel_adds_with_distinct_codes_are_all_kept() -> None:
    workers = 32
    collector = TestingWarningCollector.from_values(workers)

    _run_together(workers, lambda i: collector.add(create_test_warning(i + 1)))

    codes = [w.code for w in collector.get_warnings()]
    assert sorted(codes) == list(range(1, workers + 1))


def test_parallel_adds_of_same_code_store_one_record() -> None:
    workers = 16
    collector = TestingWarningCollector.from_values(100)

    _run_together(
        workers,
        lambda i: collector.add(QueryWarning(WarningCode(7, "01507"), f"from thread {i}")),
    )

    warnings = collector.get_warnings()
    assert len(warnings) == 1
    assert warnings[0].code == 7


def test_parallel_adds_never_exceed_capacity() -> None:
    workers = 24
    collector = TestingWarningCollector.from_values(5)

    _run_together(workers, lambda i: collector.add(create_test_warning(i + 1)))

    assert len(collector.get_warnings()) == 5


def test_parallel_injected_reads_use_distinct_codes() -> None:
    workers = 20
    collector = TestingWarningCollector.from_values(1000, injection_enabled=True)

    snapshots = _run_together(workers, lambda i: collector.get_warnings())

    assert sorted(len(s) for s in snapshots) == list(range(1, workers + 1))
    final = [w.code for w in max(snapshots, key=len)]
    assert final == list(range(1, workers + 1))
