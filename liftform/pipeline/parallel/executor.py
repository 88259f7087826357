# liftform/pipeline/parallel/executor.py
from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Callable, Iterable

from liftform import logs
from liftform.pipeline.parallel.types import ParallelKind


class ParallelExecutor:
    """
    ParallelExecutor

    - one ProcessPoolExecutor per call, closed before returning
      (also when a task raises)
    - results come back in item order
    - default pool size = cpu_count - 1 (one core left for the coordinator)
    - handler must be a module-level function (picklable)
    - on_result runs in the calling process, once per result, in item order
    """

    @staticmethod
    def run(
            *,
            kind: ParallelKind,
            items: Iterable[Any],
            handler: Callable[[Any], Any],
            max_workers: int | None = None,
            on_result: Callable[[Any], None] | None = None,
    ) -> list[Any]:
        items = list(items)
        if not items:
            logs.info("[ParallelExecutor] no items to process")
            return []

        workers = ParallelExecutor._resolve_workers(items, max_workers)

        logs.info(
            f"[ParallelExecutor] start "
            f"kind={kind.value} total={len(items)} workers={workers}"
        )

        if workers == 1:
            return ParallelExecutor._run_sequential(items, handler, on_result)
        return ParallelExecutor._run_parallel(items, handler, workers, on_result)

    # ---------------- internal ----------------

    @staticmethod
    def _resolve_workers(items: list[Any], max_workers: int | None) -> int:
        if max_workers is None:
            cpu = os.cpu_count() or 1
            max_workers = cpu - 1
        return max(1, min(max_workers, len(items)))

    @staticmethod
    def _run_sequential(
            items: list[Any],
            handler: Callable[[Any], Any],
            on_result: Callable[[Any], None] | None,
    ) -> list[Any]:
        results = []
        for item in items:
            result = handler(item)
            if on_result is not None:
                on_result(result)
            results.append(result)
        return results

    @staticmethod
    def _run_parallel(
            items: list[Any],
            handler: Callable[[Any], Any],
            workers: int,
            on_result: Callable[[Any], None] | None,
    ) -> list[Any]:
        with ProcessPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(handler, item) for item in items]
            results = []
            try:
                for fut in futures:
                    result = fut.result()
                    if on_result is not None:
                        on_result(result)
                    results.append(result)
            except Exception:
                for fut in futures:
                    fut.cancel()
                raise
            return results
