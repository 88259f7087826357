# tests/pipeline/parallel/test_parallel_executor.py
import pytest

from liftform.pipeline.parallel.executor import ParallelExecutor
from liftform.pipeline.parallel.types import ParallelKind


def square(item: int) -> int:
    # 模拟 CPU 任务
    x = 0
    for _ in range(10_000):
        x += 1
    return item * item


def worker_maybe_fail(item: str) -> str:
    if item == "bad":
        raise RuntimeError("boom")
    return item


def test_empty_items():
    assert ParallelExecutor.run(kind=ParallelKind.FOLD, items=[], handler=square) == []


def test_results_in_item_order_sequential():
    out = ParallelExecutor.run(
        kind=ParallelKind.FOLD, items=range(5), handler=square, max_workers=1
    )
    assert out == [0, 1, 4, 9, 16]


def test_results_in_item_order_pool():
    out = ParallelExecutor.run(
        kind=ParallelKind.FOLD, items=range(8), handler=square, max_workers=2
    )
    assert out == [i * i for i in range(8)]


def test_resolve_workers():
    items = list(range(3))

    assert ParallelExecutor._resolve_workers(items, 8) == 3
    assert ParallelExecutor._resolve_workers(items, 0) == 1
    assert ParallelExecutor._resolve_workers(items, 2) == 2
    assert 1 <= ParallelExecutor._resolve_workers(items, None) <= 3


@pytest.mark.parametrize("workers", [1, 2])
def test_worker_exception_propagates(workers):
    with pytest.raises(RuntimeError, match="boom"):
        ParallelExecutor.run(
            kind=ParallelKind.FOLD,
            items=["ok1", "bad", "ok2"],
            handler=worker_maybe_fail,
            max_workers=workers,
        )


@pytest.mark.parametrize("workers", [1, 2])
def test_on_result_called_in_item_order(workers):
    seen = []

    out = ParallelExecutor.run(
        kind=ParallelKind.FOLD,
        items=range(6),
        handler=square,
        max_workers=workers,
        on_result=seen.append,
    )

    assert seen == out == [i * i for i in range(6)]
