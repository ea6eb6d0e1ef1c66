"""Tests for the load pipeline (using NullAudioEngine)."""

import asyncio

from soundcatalog.backends.null_backend import NullAudioEngine, NullLocatorStore
from soundcatalog.core.context import CatalogContext
from soundcatalog.core.events import CatalogEvent
from soundcatalog.core.exceptions import EngineUnavailableError
from soundcatalog.core.models import LoadResult, LoadState, UploadFile
from soundcatalog.services.load_pipeline import LoadPipeline


def create_pipeline(engine=None, store=None, files=("a.ogg", "b.ogg", "c.ogg")):
    """Create a context with provisioned sounds and a pipeline over it."""
    context = CatalogContext.create()
    for file_name in files:
        context.catalog.register_provisioned(file_name)
    engine = engine or NullAudioEngine(active=True)
    return context, engine, LoadPipeline(context, engine, store)


def assert_consistent(context):
    """Check that the player handle matches the load state for every sound."""
    for sound in context.catalog:
        assert (sound.player is not None) == (sound.load_state is LoadState.READY)


def test_batch_load_all_ready():
    """Test loading every pending provisioned sound in one batch."""
    context, engine, pipeline = create_pipeline()

    status = asyncio.run(pipeline.load_provisioned())

    assert len(engine.batches) == 1
    assert sorted(engine.batches[0].values()) == ["sounds/a.ogg", "sounds/b.ogg", "sounds/c.ogg"]
    assert all(s.load_state is LoadState.READY for s in context.catalog)
    assert (status.ready, status.total, status.failed) == (3, 3, 0)
    assert_consistent(context)


def test_partial_failure_isolated():
    """Test that one failing clip does not fail the rest of the batch."""
    engine = NullAudioEngine(active=True, failing_locators={"sounds/b.ogg"})
    context, engine, pipeline = create_pipeline(engine)

    status = asyncio.run(pipeline.load_provisioned())

    states = [s.load_state for s in context.catalog]
    assert states == [LoadState.READY, LoadState.FAILED, LoadState.READY]
    assert status.message == "Some sounds failed. 2/3 ready. Check console."
    assert_consistent(context)


def test_engine_batch_failure_fails_whole_batch():
    """Test that an engine-level exception fails every sound in the batch."""
    engine = NullAudioEngine(active=True, fail_batches=True)
    context, engine, pipeline = create_pipeline(engine)

    status = asyncio.run(pipeline.load_provisioned())

    assert all(s.load_state is LoadState.FAILED for s in context.catalog)
    assert status.failed == 3
    assert_consistent(context)


def test_missing_result_counts_as_failed():
    """Test that ids absent from the engine result are failed."""

    class ForgetfulEngine(NullAudioEngine):
        async def batch_load(self, locators):
            results = await super().batch_load(locators)
            results.pop(next(iter(results)))
            return results

    context, engine, pipeline = create_pipeline(ForgetfulEngine(active=True))

    asyncio.run(pipeline.load_provisioned())

    states = [s.load_state for s in context.catalog]
    assert states.count(LoadState.FAILED) == 1
    assert states.count(LoadState.READY) == 2


def test_failed_sounds_are_not_retried():
    """Test that a second pass leaves failed and ready sounds alone."""
    engine = NullAudioEngine(active=True, failing_locators={"sounds/a.ogg"})
    context, engine, pipeline = create_pipeline(engine)
    asyncio.run(pipeline.load_provisioned())
    engine.failing_locators.clear()

    asyncio.run(pipeline.load_provisioned())

    assert len(engine.batches) == 1
    assert context.catalog.sounds[0].load_state is LoadState.FAILED


def test_new_sounds_get_their_own_batch():
    """Test that sounds registered later are loaded by the next pass only."""
    context, engine, pipeline = create_pipeline(files=("a.ogg",))
    asyncio.run(pipeline.load_provisioned())
    first = context.catalog.sounds[0].player
    late = context.catalog.register_provisioned("late.ogg")

    asyncio.run(pipeline.load_provisioned())

    assert list(engine.batches[1].values()) == ["sounds/late.ogg"]
    assert late.load_state is LoadState.READY
    assert context.catalog.sounds[0].player is first


def test_concurrent_passes_do_not_reselect():
    """Test that an in-flight sound is never put in a second batch."""

    class SlowEngine(NullAudioEngine):
        async def batch_load(self, locators):
            await asyncio.sleep(0.01)
            return await super().batch_load(locators)

    context, engine, pipeline = create_pipeline(SlowEngine(active=True))

    async def run_both():
        return await asyncio.gather(pipeline.load_provisioned(), pipeline.load_provisioned())

    asyncio.run(run_both())

    assert len(engine.batches) == 1
    assert all(s.load_state is LoadState.READY for s in context.catalog)


def test_sounds_without_locator_stay_not_loaded():
    """Test that a sound with no locator is never claimed."""
    context = CatalogContext.create()
    context.config.sounds_dir = ""
    empty = context.catalog.register_provisioned("")
    engine = NullAudioEngine(active=True)
    pipeline = LoadPipeline(context, engine)

    asyncio.run(pipeline.load_provisioned())

    assert empty.load_state is LoadState.NOT_LOADED
    assert engine.batches == []


def test_uploads_loaded_individually():
    """Test that uploads are loaded one at a time."""
    store = NullLocatorStore()
    context, engine, pipeline = create_pipeline(store=store, files=())
    uploads = [
        context.catalog.register_uploaded(UploadFile(name, "audio/ogg", store.create(name)))
        for name in ("x.ogg", "y.ogg")
    ]

    status = asyncio.run(pipeline.load_uploaded(uploads))

    assert engine.batches == []
    assert engine.single_loads == [u.locator for u in uploads]
    assert all(u.load_state is LoadState.READY for u in uploads)
    assert status.ready == 2
    assert store.revoked == []


def test_failed_upload_is_revoked():
    """Test that a failed upload releases its locator."""
    store = NullLocatorStore()
    engine = NullAudioEngine(active=True)
    context, engine, pipeline = create_pipeline(engine, store, files=())
    good = context.catalog.register_uploaded(UploadFile("good.ogg", "audio/ogg", store.create("good.ogg")))
    bad = context.catalog.register_uploaded(UploadFile("bad.ogg", "audio/ogg", store.create("bad.ogg")))
    engine.failing_locators.add(bad.locator)

    asyncio.run(pipeline.load_uploaded([good, bad]))

    assert good.load_state is LoadState.READY
    assert bad.load_state is LoadState.FAILED
    assert store.revoked == [bad.locator]
    assert_consistent(context)


def test_upload_engine_exception_is_contained():
    """Test that an exception from load_one fails only that upload."""

    class ExplodingEngine(NullAudioEngine):
        async def load_one(self, locator):
            if "boom" in locator:
                raise OSError("device lost")
            return await super().load_one(locator)

    store = NullLocatorStore()
    context, engine, pipeline = create_pipeline(ExplodingEngine(active=True), store, files=())
    boom = context.catalog.register_uploaded(UploadFile("boom.ogg", "audio/ogg", "blob:boom"))
    fine = context.catalog.register_uploaded(UploadFile("fine.ogg", "audio/ogg", "blob:fine"))

    asyncio.run(pipeline.load_uploaded([boom, fine]))

    assert boom.load_state is LoadState.FAILED
    assert fine.load_state is LoadState.READY
    assert store.revoked == ["blob:boom"]


def test_load_dispatches_on_provenance():
    """Test that load() batches provisioned sounds and loads uploads singly."""
    context, engine, pipeline = create_pipeline(files=("a.ogg",))
    upload = context.catalog.register_uploaded(UploadFile("u.ogg", "audio/ogg", "blob:u"))

    asyncio.run(pipeline.load(context.catalog.sounds))

    assert list(engine.batches[0].values()) == ["sounds/a.ogg"]
    assert engine.single_loads == ["blob:u"]
    assert upload.load_state is LoadState.READY


def test_events_published():
    """Test load events around a batch."""
    context, engine, pipeline = create_pipeline()
    seen = []
    context.events.subscribe(lambda event, payload: seen.append((event, payload)))

    asyncio.run(pipeline.load_provisioned())

    assert [event for event, _ in seen] == [CatalogEvent.LOAD_STARTED, CatalogEvent.LOAD_FINISHED]
    assert len(seen[0][1]) == 3
    assert seen[1][1].ready == 3


def test_load_result_helpers():
    """Test LoadResult constructors."""
    assert LoadResult.ready("h").ok
    assert not LoadResult.failed("nope").ok
    assert not LoadResult.ready(None).ok


def test_inactive_engine_leaves_provisioned_unloaded():
    """Test that a batch is not claimed while audio is inactive."""
    context, engine, pipeline = create_pipeline(NullAudioEngine(active=False))

    asyncio.run(pipeline.load_provisioned())

    assert engine.batches == []
    assert all(s.load_state is LoadState.NOT_LOADED for s in context.catalog)


def test_upload_waits_while_engine_unavailable():
    """Test that an engine refusing loads parks uploads instead of failing them."""

    class LostDeviceEngine(NullAudioEngine):
        device_lost = True

        async def load_one(self, locator):
            if self.device_lost:
                raise EngineUnavailableError("output device went away")
            return await super().load_one(locator)

    store = NullLocatorStore()
    engine = LostDeviceEngine(active=True)
    context, engine, pipeline = create_pipeline(engine, store, files=())
    kick = context.catalog.register_uploaded(UploadFile("kick.ogg", "audio/ogg", "blob:kick"))

    asyncio.run(pipeline.load_uploaded([kick]))

    assert kick.load_state is LoadState.LOADING
    assert pipeline.waiting() == [kick]
    assert store.revoked == []

    engine.device_lost = False
    status = asyncio.run(pipeline.resume())

    assert kick.load_state is LoadState.READY
    assert pipeline.waiting() == []
    assert status.ready == 1
    assert_consistent(context)
