"""Audio engine that plays clips on the default output device."""

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import numpy as np
import sounddevice as sd

from soundcatalog.concurrency.worker import BackendWorker
from soundcatalog.core.exceptions import ClipLoadError, EngineUnavailableError
from soundcatalog.core.interfaces import IAudioEngine
from soundcatalog.core.models import ClipData, LoadResult
from soundcatalog.formats import load_clip
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)


class DeviceBuffer:
    """A decoded clip and the output stream currently playing it."""

    def __init__(
        self,
        clip: ClipData,
        locator: str,
        schedule: Optional[Callable[[Callable[[], None]], Any]] = None,
    ):
        """
        Initialize the buffer.

        Args:
            clip: Decoded 16-bit PCM clip.
            locator: Where the clip came from (for logging).
            schedule: Runs a function on the device thread without waiting.
                Finished streams are closed through it; without one they
                stay open until stop().
        """
        samples = np.frombuffer(clip.data, dtype=np.int16).astype(np.float32) / 32768.0
        self.frames = samples.reshape(-1, clip.format.channels)
        self.sample_rate = clip.format.sample_rate
        self.channels = clip.format.channels
        self.locator = locator
        self._schedule = schedule
        self._stream: Optional[sd.OutputStream] = None
        self._position = 0

    def start(self, device=None) -> None:
        """Play from the first frame, replacing any stream already running."""
        self.stop()
        self._position = 0
        stream = sd.OutputStream(
            samplerate=self.sample_rate,
            channels=self.channels,
            dtype="float32",
            device=device,
            callback=self._callback,
            finished_callback=lambda: self._finished(stream),
        )
        self._stream = stream
        stream.start()

    def stop(self) -> None:
        if self._stream is None:
            return
        try:
            self._stream.stop()
            self._stream.close()
        finally:
            self._stream = None

    def is_playing(self) -> bool:
        return self._stream is not None and self._stream.active

    def release(self, stream: sd.OutputStream) -> None:
        """Close a stream that played to its end, unless it was replaced."""
        if self._stream is not stream:
            return
        self._stream = None
        stream.close()
        logger.debug(f"{self.locator}: finished, stream closed")

    def _finished(self, stream: sd.OutputStream) -> None:
        # PortAudio thread; a stream cannot be closed from its own callbacks
        if self._schedule is not None:
            self._schedule(lambda: self.release(stream))

    def _callback(self, outdata, frames, time_info, status) -> None:
        if status:
            logger.debug(f"{self.locator}: {status}")
        chunk = self.frames[self._position:self._position + frames]
        count = len(chunk)
        outdata[:count] = chunk
        self._position += count
        if count < frames:
            outdata[count:] = 0
            raise sd.CallbackStop


class DeviceAudioEngine(IAudioEngine):
    """
    Engine backed by pydub decoding and sounddevice output.

    Decoding and stream control happen on a BackendWorker thread. Each
    loaded clip is its own DeviceBuffer, so a later batch never replaces
    the buffers of an earlier one.
    """

    def __init__(
        self,
        base_dir: Optional[Union[str, Path]] = None,
        device: Optional[Union[int, str]] = None,
        worker: Optional[BackendWorker] = None,
    ):
        """
        Initialize the engine.

        Args:
            base_dir: Directory relative locators are resolved against.
            device: sounddevice output device (None = system default).
            worker: Optional worker implementation (for testing).
        """
        self._base_dir = Path(base_dir) if base_dir is not None else None
        self._device = device
        self._worker = worker
        self._active = False
        self._buffers: List[DeviceBuffer] = []

    async def activate(self) -> None:
        """
        Open the output device on the worker thread.

        Raises:
            EngineUnavailableError: If no output device can be used.
        """
        if self._active:
            return
        if self._worker is None:
            self._worker = BackendWorker(initializer=self._open_device)

        loop = asyncio.get_running_loop()
        try:
            await loop.run_in_executor(None, self._worker.start)
        except (sd.PortAudioError, ValueError) as e:
            raise EngineUnavailableError(f"No usable audio output device: {e}") from e
        self._active = True
        logger.info("DeviceAudioEngine activated")

    def is_subsystem_active(self) -> bool:
        return self._active

    async def batch_load(self, locators: Mapping[str, str]) -> Dict[str, LoadResult]:
        """Decode a batch of clips on the worker thread."""
        worker = self._require_worker()
        items = dict(locators)
        return await worker.run(
            lambda: {sound_id: self._decode(locator) for sound_id, locator in items.items()}
        )

    async def load_one(self, locator: str) -> LoadResult:
        """Decode one clip on the worker thread."""
        worker = self._require_worker()
        return await worker.run(lambda: self._decode(locator))

    def start(self, handle: DeviceBuffer) -> None:
        self._require_worker().execute(lambda: handle.start(self._device))

    def stop(self, handle: DeviceBuffer) -> None:
        self._require_worker().execute(handle.stop)

    def is_playing(self, handle: DeviceBuffer) -> bool:
        return self._require_worker().execute(handle.is_playing)

    def shutdown(self) -> None:
        """Stop every stream and the worker thread."""
        if self._worker is None:
            return

        logger.info("Shutting down DeviceAudioEngine...")
        for buffer in self._buffers:
            try:
                self._worker.execute(buffer.stop)
            except Exception as e:
                logger.warning(f"Error stopping {buffer.locator}: {e}")
        self._buffers.clear()
        self._worker.stop()
        self._worker = None
        self._active = False
        logger.info("DeviceAudioEngine shut down")

    def _open_device(self) -> None:
        info = sd.query_devices(self._device, kind="output")
        logger.info(f"Using output device {info['name']!r}")

    def _resolve(self, locator: str) -> Path:
        path = Path(locator)
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        return path

    def _decode(self, locator: str) -> LoadResult:
        try:
            clip = load_clip(str(self._resolve(locator)))
            buffer = DeviceBuffer(clip, locator, schedule=self._schedule)
        except (ClipLoadError, OSError, ValueError) as e:
            logger.warning(f"Could not load {locator}: {e}")
            return LoadResult.failed(str(e))
        self._buffers.append(buffer)
        return LoadResult.ready(buffer)

    def _require_worker(self) -> BackendWorker:
        if not self._active or self._worker is None:
            raise EngineUnavailableError("Audio subsystem is not active")
        return self._worker

    def _schedule(self, func: Callable[[], None]) -> None:
        worker = self._worker
        if worker is not None:
            worker.submit(func)
