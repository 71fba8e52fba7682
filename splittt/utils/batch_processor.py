"""
Utility functions for running per-chunk jobs.
"""

from concurrent.futures import ThreadPoolExecutor, as_completed
from tqdm import tqdm
from typing import Any, Callable, Generator, List
from splittt.utils.logger import setup_logger

logger = setup_logger("splittt.batch_processor")


def process_jobs(
    jobs: List[Any],
    process_function: Callable,
    workers: int = 1,
    description: str = "Processing jobs",
    show_progress: bool = True,
    **kwargs,
) -> Generator[Any, None, None]:
    """
    Run ``process_function(job, job_idx, **kwargs)`` for every job and yield
    the results in job order.

    Args:
        jobs: Items to process
        process_function: Function to process one job
        workers: Number of worker threads, 1 runs the jobs inline
        description: Description for progress bar
        show_progress: Display a tqdm progress bar
        **kwargs: Additional arguments to pass to process_function

    Yields:
        Results from each job, in the order of ``jobs``

    The first exception stops the run: no further job is started and the
    exception propagates to the caller.
    """
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    logger.info(f"Found {len(jobs)} jobs to process with {workers} worker(s)")

    with tqdm(total=len(jobs), desc=description, disable=not show_progress) as bar:
        if workers == 1 or len(jobs) <= 1:
            for job_idx, job in enumerate(jobs):
                result = process_function(job, job_idx, **kwargs)
                bar.update(1)
                yield result
            return

        yield from _process_in_pool(jobs, process_function, workers, bar, **kwargs)


def _process_in_pool(jobs, process_function, workers, bar, **kwargs):
    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = {
            executor.submit(process_function, job, job_idx, **kwargs): job_idx
            for job_idx, job in enumerate(jobs)
        }
        finished = {}
        next_idx = 0
        for future in as_completed(futures):
            # result() re-raises the job's exception
            finished[futures[future]] = future.result()
            bar.update(1)
            while next_idx in finished:
                yield finished.pop(next_idx)
                next_idx += 1
    finally:
        # Jobs already running finish, queued ones are dropped
        executor.shutdown(wait=True, cancel_futures=True)
