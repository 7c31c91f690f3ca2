"""
Order-preserving batch execution.

Runs a function over a bounded in-memory collection and merges results back
into input order. A cancellation signal is polled between items so long
batches (e.g. large heatmap grids) can be aborted.

The default pool is threads. Per-item work in this engine is pure Python
(haversine scans, factor sums), so the global interpreter lock keeps a
thread pool on one core: threads give ordering and cancellation, not
speedup. ``use_processes=True`` spreads chunks over a process pool instead.
That requires ``func`` and the items to be picklable (a module-level
function, not a lambda or bound closure), and the signal is then only
checked between chunks, in the parent.
"""
from concurrent.futures import Executor, ProcessPoolExecutor, ThreadPoolExecutor
from typing import Callable, List, Optional, Protocol, Sequence, TypeVar, Union

from config.settings import settings
from src.leasegis.models.geo import Cancelled
from src.leasegis.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class CancellationSignal(Protocol):
    """Anything with ``is_set()``, e.g. ``threading.Event``."""

    def is_set(self) -> bool:
        ...


def _is_cancelled(cancel: Optional[CancellationSignal]) -> bool:
    return cancel is not None and cancel.is_set()


def _apply_chunk(func: Callable[[T], R], chunk: List[T]) -> List[R]:
    return [func(item) for item in chunk]


def ordered_map(
    func: Callable[[T], R],
    items: Sequence[T],
    max_workers: Optional[int] = None,
    cancel: Optional[CancellationSignal] = None,
    chunk_size: Optional[int] = None,
    operation: str = "batch",
    use_processes: bool = False,
) -> Union[List[R], Cancelled]:
    """
    Apply ``func`` to every item, returning results in input order.

    Items are split into contiguous chunks; each worker writes its results
    into a pre-sized buffer by index, so completion order never affects the
    output.

    Args:
        func: Function applied to each item
        items: Input collection
        max_workers: Pool size (settings.max_workers when None; 1 runs inline)
        cancel: Optional cancellation signal checked between items
        chunk_size: Items per task (settings.batch_chunk_size when None)
        operation: Name used in log events
        use_processes: Run chunks on a process pool; ``func`` must be picklable

    Returns:
        List of results, or a Cancelled value if the signal fired before
        every item finished
    """
    items = list(items)
    total = len(items)
    workers = max_workers if max_workers is not None else settings.max_workers
    size = max(1, chunk_size or settings.batch_chunk_size)

    results: List[Optional[R]] = [None] * total
    chunks = [range(start, min(start + size, total)) for start in range(0, total, size)]

    def run_chunk(indices: range) -> int:
        done = 0
        for idx in indices:
            if _is_cancelled(cancel):
                break
            results[idx] = func(items[idx])
            done += 1
        return done

    if workers == 1 or len(chunks) <= 1:
        completed = sum(run_chunk(chunk) for chunk in chunks)
    elif use_processes:
        with ProcessPoolExecutor(max_workers=workers) as executor:
            completed = _run_in_processes(executor, func, items, chunks, results, cancel)
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            completed = sum(executor.map(run_chunk, chunks))

    if completed < total or _is_cancelled(cancel):
        logger.warning(
            "batch_cancelled",
            operation=operation,
            completed=completed,
            total=total
        )
        return Cancelled(operation=operation, completed=completed, total=total)

    return results


def _run_in_processes(
    executor: Executor,
    func: Callable[[T], R],
    items: List[T],
    chunks: List[range],
    results: List[Optional[R]],
    cancel: Optional[CancellationSignal],
) -> int:
    """Collect chunk results in order; pending chunks are dropped once cancelled."""
    futures = [
        executor.submit(_apply_chunk, func, [items[idx] for idx in chunk])
        for chunk in chunks
    ]
    completed = 0
    for chunk, future in zip(chunks, futures):
        if _is_cancelled(cancel):
            for pending in futures:
                pending.cancel()
            break
        for idx, value in zip(chunk, future.result()):
            results[idx] = value
        completed += len(chunk)
    return completed
