"""Worker thread for audio device commands."""

import asyncio
import queue
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class Command:
    """Command to execute in worker thread."""

    id: str
    func: Callable[[], Any]
    result_event: threading.Event
    result: Optional[Any] = None
    error: Optional[BaseException] = None


class BackendWorker:
    """
    Worker thread that owns the audio device.

    Decoding and every output-stream call run here, one at a time, so the
    event loop never blocks on the device and the device is only touched
    from a single thread.
    """

    def __init__(
        self,
        initializer: Optional[Callable[[], None]] = None,
        name: str = "soundcatalog-audio",
    ):
        """
        Initialize the worker.

        Args:
            initializer: Called first inside the worker thread.
            name: Thread name.
        """
        self._initializer = initializer
        self._name = name
        self._queue: "queue.Queue[Optional[Command]]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._running = False

    def start(self) -> None:
        """
        Start the worker thread and run the initializer in it.

        Raises:
            Exception: Anything the initializer raises; the thread is stopped again.
        """
        if self._thread is not None and self._thread.is_alive():
            return

        # Daemon thread so a forgotten stop() does not block interpreter exit
        self._thread = threading.Thread(target=self._worker_loop, name=self._name, daemon=True)
        self._running = True
        self._thread.start()

        if self._initializer is not None:
            try:
                self.execute(self._initializer)
            except Exception:
                self.stop()
                raise
        logger.info("Audio worker thread started")

    def stop(self, timeout: float = 5.0) -> None:
        """Stop the worker thread (blocks until done)."""
        if self._thread is None:
            self._running = False
            return

        logger.info("Stopping audio worker thread...")
        # Stop accepting commands, then wake the loop with a sentinel
        self._running = False
        self._queue.put(None)
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning("Worker thread did not stop gracefully within timeout")
        else:
            logger.info("Audio worker thread stopped")
        self._thread = None

    def execute(self, func: Callable[[], T], timeout: Optional[float] = None) -> T:
        """
        Execute a function in the worker thread and return result.

        Args:
            func: Function to execute (no arguments).
            timeout: Maximum time to wait for result (None = infinite).

        Returns:
            Result of function execution.

        Raises:
            RuntimeError: If worker thread is not running.
            TimeoutError: If timeout is exceeded.
            Exception: Any exception raised by the function.
        """
        if not self._running:
            raise RuntimeError("Worker thread not running")

        if threading.current_thread() is self._thread:
            return func()

        cmd = Command(id=str(uuid.uuid4()), func=func, result_event=threading.Event())
        self._queue.put(cmd)

        if not cmd.result_event.wait(timeout=timeout):
            raise TimeoutError(f"Command execution timeout after {timeout}s")

        if cmd.error is not None:
            raise cmd.error

        return cmd.result

    def submit(self, func: Callable[[], Any]) -> bool:
        """
        Queue a function for the worker thread without waiting for it.

        Safe to call from audio callback threads. Errors are logged.

        Returns:
            False if the worker is not running and the function was dropped.
        """
        if not self._running:
            logger.debug("Worker not running, dropping submitted command")
            return False

        def logged() -> None:
            try:
                func()
            except Exception as e:
                logger.warning(f"Submitted command failed: {e}")

        self._queue.put(
            Command(id=str(uuid.uuid4()), func=logged, result_event=threading.Event())
        )
        return True

    async def run(self, func: Callable[[], T]) -> T:
        """Execute a function in the worker thread without blocking the event loop."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.execute, func)

    @property
    def is_running(self) -> bool:
        return self._running and self._thread is not None and self._thread.is_alive()

    def _worker_loop(self) -> None:
        """Main worker loop."""
        logger.debug("Worker thread started")
        while True:
            cmd = self._queue.get()
            if cmd is None:  # Sentinel
                logger.debug("Received sentinel, exiting worker loop")
                break
            try:
                cmd.result = cmd.func()
            except Exception as e:
                logger.debug(f"Command {cmd.id} raised {e!r}")
                cmd.error = e
            finally:
                cmd.result_event.set()
                self._queue.task_done()
        logger.debug("Worker thread exiting")
