"""Worker-pool sizing shared by the splitter and the CLI."""

from __future__ import annotations

import os


def get_worker_count(requested: int, num_tasks: int, min_tasks: int = 2) -> int:
    """Determine the optimal number of workers.

    Args:
        requested: Requested workers (0=auto, 1=sequential)
        num_tasks: Number of independent tasks
        min_tasks: Fewer tasks than this always run sequentially

    Returns:
        Number of worker processes, 1 meaning run in-process
    """
    if requested == 1 or num_tasks < min_tasks:
        return 1
    cpu_count = os.cpu_count() or 4
    if requested > 0:
        return min(requested, cpu_count, num_tasks)
    return max(1, min(cpu_count - 1, num_tasks))
