"""Tests for worker-pool sizing."""

import os

from biosym.utils.parallel import get_worker_count


class TestGetWorkerCount:
    """Tests for get_worker_count."""

    def test_sequential_request(self) -> None:
        """Test that one requested worker always runs in-process."""
        assert get_worker_count(1, 100) == 1

    def test_small_batches(self) -> None:
        """Test that batches below the cutoff run sequentially."""
        assert get_worker_count(4, 1) == 1
        assert get_worker_count(4, 9, min_tasks=10) == 1

    def test_explicit_workers(self) -> None:
        """Test that requested workers are capped by CPUs and tasks."""
        cpu_count = os.cpu_count() or 4

        assert get_worker_count(2, 12, min_tasks=10) == min(2, cpu_count)
        assert get_worker_count(64, 3) == min(3, cpu_count)

    def test_auto(self) -> None:
        """Test automatic sizing stays within the task count."""
        count = get_worker_count(0, 5)

        assert 1 <= count <= 5
