"""Services layer for soundboard orchestration."""

from soundcatalog.services.activation import AudioActivationService
from soundcatalog.services.load_pipeline import LoadPipeline
from soundcatalog.services.playback import PlaybackController
from soundcatalog.services.projection import SoundTile, project, to_tiles

__all__ = [
    "AudioActivationService",
    "LoadPipeline",
    "PlaybackController",
    "SoundTile",
    "project",
    "to_tiles",
]
