"""Tests for the audio worker thread."""

import asyncio
import threading
import time

import pytest
from soundcatalog.concurrency.worker import BackendWorker


def test_worker_start_stop():
    """Test worker thread start and stop."""
    worker = BackendWorker()

    worker.start()
    assert worker.is_running

    worker.stop()
    assert not worker.is_running


def test_initializer_runs_in_worker_thread():
    """Test that the initializer runs on the worker thread."""
    seen = []
    worker = BackendWorker(initializer=lambda: seen.append(threading.current_thread().name))

    worker.start()
    worker.stop()

    assert seen == ["soundcatalog-audio"]


def test_initializer_error_stops_worker():
    """Test that a failing initializer is reported and the thread stops."""

    def failing_initializer():
        raise OSError("no device")

    worker = BackendWorker(initializer=failing_initializer)

    with pytest.raises(OSError, match="no device"):
        worker.start()
    assert not worker.is_running


def test_worker_execute():
    """Test executing commands in worker thread."""
    worker = BackendWorker()
    worker.start()

    assert worker.execute(lambda: 42) == 42
    assert worker.execute(lambda: threading.current_thread().name) == "soundcatalog-audio"

    worker.stop()


def test_worker_execute_with_error():
    """Test error handling in worker thread."""
    worker = BackendWorker()
    worker.start()

    def failing_function():
        raise ValueError("Test error")

    with pytest.raises(ValueError, match="Test error"):
        worker.execute(failing_function)

    worker.stop()


def test_worker_execute_timeout():
    """Test command execution timeout."""
    worker = BackendWorker()
    worker.start()

    with pytest.raises(TimeoutError):
        worker.execute(lambda: time.sleep(0.5), timeout=0.05)

    worker.stop()


def test_worker_not_running():
    """Test executing before worker is started."""
    worker = BackendWorker()

    with pytest.raises(RuntimeError, match="not running"):
        worker.execute(lambda: 42)


def test_worker_run_from_event_loop():
    """Test awaiting a command from a coroutine."""
    worker = BackendWorker()
    worker.start()

    async def main():
        return await asyncio.gather(worker.run(lambda: 1), worker.run(lambda: 2))

    assert asyncio.run(main()) == [1, 2]
    worker.stop()


def test_concurrent_executions():
    """Test concurrent command executions."""
    worker = BackendWorker()
    worker.start()

    results = []
    errors = []

    def run_task(value):
        try:
            results.append(worker.execute(lambda: value * 2))
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=run_task, args=(i,)) for i in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert sorted(results) == [i * 2 for i in range(10)]

    worker.stop()


def test_worker_submit():
    """Test queuing a command without waiting for it."""
    worker = BackendWorker()
    worker.start()
    done = threading.Event()
    names = []

    def record():
        names.append(threading.current_thread().name)
        done.set()

    assert worker.submit(lambda: 1 / 0)
    assert worker.submit(record)
    assert done.wait(timeout=1.0)
    assert names == ["soundcatalog-audio"]

    worker.stop()
    assert not worker.submit(record)
