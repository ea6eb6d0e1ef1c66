"""Null audio engine for testing (no actual audio output)."""

from typing import Dict, Iterable, List, Mapping, Optional, Set

from soundcatalog.core.exceptions import EngineUnavailableError
from soundcatalog.core.interfaces import IAudioEngine, ILocatorStore
from soundcatalog.core.models import LoadResult
from soundcatalog.utils.log import get_logger

logger = get_logger(__name__)


class NullBuffer:
    """Null buffer implementation for testing."""

    def __init__(self, buffer_id: str, locator: str):
        self.buffer_id = buffer_id
        self.locator = locator
        self.playing = False
        self.start_count = 0
        self.destroyed = False

    def start(self) -> None:
        """Start (or restart) playback."""
        self.playing = True
        self.start_count += 1
        logger.debug(f"NullBuffer {self.buffer_id}: started")

    def stop(self) -> None:
        """Stop playback."""
        self.playing = False
        logger.debug(f"NullBuffer {self.buffer_id}: stopped")

    def finish(self) -> None:
        """Simulate the clip reaching its end."""
        self.playing = False

    def destroy(self) -> None:
        """Destroy buffer."""
        self.playing = False
        self.destroyed = True
        logger.debug(f"NullBuffer {self.buffer_id}: destroyed")


class NullAudioEngine(IAudioEngine):
    """
    Null engine implementation for testing.

    Like the device engine, loads need an active subsystem. They succeed
    unless the locator is listed in failing_locators.
    """

    def __init__(
        self,
        active: bool = False,
        failing_locators: Optional[Iterable[str]] = None,
        fail_batches: bool = False,
        fail_activation: bool = False,
    ):
        """
        Initialize the null engine.

        Args:
            active: Start with the audio subsystem already active.
            failing_locators: Locators that fail to load.
            fail_batches: Make batch_load raise instead of returning results.
            fail_activation: Make activate() raise EngineUnavailableError.
        """
        self._active = active
        self.failing_locators: Set[str] = set(failing_locators or ())
        self.fail_batches = fail_batches
        self.fail_activation = fail_activation
        self._buffers: Dict[str, NullBuffer] = {}
        self._next_buffer_id = 0
        self.batches: List[Dict[str, str]] = []
        self.single_loads: List[str] = []

    async def activate(self) -> None:
        """Activate the subsystem."""
        if self.fail_activation:
            raise EngineUnavailableError("NullAudioEngine activation refused")
        self._active = True
        logger.info("NullAudioEngine activated")

    def is_subsystem_active(self) -> bool:
        return self._active

    async def batch_load(self, locators: Mapping[str, str]) -> Dict[str, LoadResult]:
        """Load a batch of locators."""
        self._require_active()
        self.batches.append(dict(locators))
        if self.fail_batches:
            raise RuntimeError("NullAudioEngine batch failure")
        return {sound_id: self._load(locator) for sound_id, locator in locators.items()}

    async def load_one(self, locator: str) -> LoadResult:
        """Load a single locator."""
        self._require_active()
        self.single_loads.append(locator)
        return self._load(locator)

    def start(self, handle: NullBuffer) -> None:
        handle.start()

    def stop(self, handle: NullBuffer) -> None:
        handle.stop()

    def is_playing(self, handle: NullBuffer) -> bool:
        return handle.playing

    def shutdown(self) -> None:
        """Shutdown engine."""
        for buffer in self._buffers.values():
            buffer.destroy()
        self._buffers.clear()
        self._active = False
        logger.info("NullAudioEngine shut down")

    @property
    def buffers(self) -> List[NullBuffer]:
        return list(self._buffers.values())

    def _require_active(self) -> None:
        if not self._active:
            raise EngineUnavailableError("Audio subsystem is not active")

    def _load(self, locator: str) -> LoadResult:
        if locator in self.failing_locators:
            return LoadResult.failed(f"cannot decode {locator}")
        buffer_id = f"null_{self._next_buffer_id}"
        self._next_buffer_id += 1
        buffer = NullBuffer(buffer_id, locator)
        self._buffers[buffer_id] = buffer
        logger.debug(f"Created NullBuffer {buffer_id} for {locator}")
        return LoadResult.ready(buffer)


class NullLocatorStore(ILocatorStore):
    """Locator store that remembers what was revoked."""

    def __init__(self):
        self._next = 0
        self.issued: List[str] = []
        self.revoked: List[str] = []

    def create(self, file_name: str) -> str:
        """Issue a fake blob locator for a file."""
        locator = f"blob:null/{self._next}/{file_name}"
        self._next += 1
        self.issued.append(locator)
        return locator

    def revoke(self, locator: str) -> None:
        self.revoked.append(locator)
        logger.debug(f"Revoked {locator}")
