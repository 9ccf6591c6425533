# censored/prediction/parallel.py
from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Callable, Iterable

from censored import logs


class PathExecutor:
    """
    PathExecutor

    - runs one handler per strength of a regularization path
    - threads: fitted models and the registry are read-only, nothing is copied
    - results come back in input order
    """

    @staticmethod
    def run(
        *,
        items: Iterable[float],
        handler: Callable[[float], Any],
        max_workers: int | None = 1,
    ) -> list[Any]:
        items = list(items)
        if not items:
            logs.debug("[PathExecutor] no items to process")
            return []

        workers = PathExecutor._resolve_workers(items, max_workers)
        logs.debug(f"[PathExecutor] start total={len(items)} workers={workers}")

        if workers == 1:
            return PathExecutor._run_sequential(items, handler)
        return PathExecutor._run_parallel(items, handler, workers)

    # ---------------- internal ----------------

    @staticmethod
    def _resolve_workers(items: list, max_workers: int | None) -> int:
        cpu = os.cpu_count() or 1
        if max_workers is None:
            return min(cpu, len(items))
        return max(1, min(max_workers, len(items)))

    @staticmethod
    def _run_sequential(items: list, handler: Callable[[float], Any]) -> list[Any]:
        return [handler(item) for item in items]

    @staticmethod
    def _run_parallel(
        items: list,
        handler: Callable[[float], Any],
        workers: int,
    ) -> list[Any]:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            # map keeps input order and re-raises the first failure
            return list(pool.map(handler, items))
