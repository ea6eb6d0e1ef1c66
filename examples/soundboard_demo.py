"""Example: drive a soundboard session without audio hardware."""

import asyncio

from soundcatalog import CatalogEvent, SortMode, Soundboard, UploadFile
from soundcatalog.backends.null_backend import NullAudioEngine, NullLocatorStore


def print_view(board: Soundboard) -> None:
    tiles = board.tiles()
    if not tiles:
        print("  No sounds to display for current filter.")
    for tile in tiles:
        flag = " (disabled)" if tile.disabled else ""
        print(f"  [{tile.color:>6}] {tile.name:<16} {tile.category_name}{flag}")


async def main() -> None:
    store = NullLocatorStore()
    engine = NullAudioEngine(failing_locators={"sounds/broken_clip.ogg"})
    board = Soundboard(engine=engine, locator_store=store)
    board.subscribe(lambda event, payload: print(f"event: {event.value}"))

    await board.startup(["--Air-Horn.ogg", "boo_sound.ogg", "sad-trombone.ogg", "broken_clip.ogg"])
    print(board.audio_prompt)

    # First user gesture
    await board.activate_audio()
    print(board.status().message)

    report = await board.upload(
        [
            UploadFile("rimshot.ogg", "audio/ogg", store.create("rimshot.ogg")),
            UploadFile("beep.wav", "audio/wav", store.create("beep.wav")),
        ]
    )
    for warning in report.warnings:
        print(f"warning: {warning}")

    sfx = board.create_category("SFX")
    for sound in board.sounds[:2]:
        board.update_sound(sound.id, category_id=sfx.id)

    board.set_criteria(sort_mode=SortMode.CATEGORY_THEN_NAME)
    print("All sounds, by category:")
    print_view(board)

    board.set_criteria(search_term="horn")
    print("Search 'horn':")
    print_view(board)

    board.play(board.view()[0].id)
    print(board.stop_all_message(board.stop_all()))

    board.delete_category(sfx.id)
    board.set_criteria(search_term="")
    print("After deleting SFX:")
    print_view(board)


if __name__ == "__main__":
    asyncio.run(main())
