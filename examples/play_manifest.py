"""Example: load a manifest of OGG clips and play them on the default device."""

import asyncio
import sys
from pathlib import Path

from soundcatalog import CatalogConfig, Soundboard
from soundcatalog.backends.device_backend import DeviceAudioEngine


async def main(sounds_dir: Path) -> None:
    config = CatalogConfig(
        sounds_dir=str(sounds_dir),
        manifest_path=str(sounds_dir / "sounds.json"),
    )
    board = Soundboard(config=config, engine=DeviceAudioEngine())

    try:
        await board.startup()
        if not await board.activate_audio():
            print(board.audio_prompt)
            return
        print(board.status().message)

        for sound in board.view():
            if not sound.is_ready:
                print(f"Skipping {sound.name} ({sound.load_state.value})")
                continue
            print(f"Playing {sound.name}...")
            board.play(sound.id)
            while board.is_playing(sound.id):
                await asyncio.sleep(0.1)
            await asyncio.sleep(0.2)
    finally:
        board.shutdown()
        print("Engine shut down")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python play_manifest.py <sounds_dir>")
        sys.exit(1)

    directory = Path(sys.argv[1])
    if not (directory / "sounds.json").exists():
        print(f"Error: no sounds.json in {directory}")
        sys.exit(1)

    asyncio.run(main(directory))
