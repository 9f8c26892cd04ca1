import pytest

from eulens.core.exceptions import FetchError

from conftest import FakeEmbeddingService, FakeVectorDB

GDPR_URL = "http://data.europa.eu/eli/reg/2016/679"
THREE_SENTENCES = "First sentence here. Second sentence here. Third sentence here."


async def test_small_document_becomes_one_vector(make_pipeline, registry):
    vector_db = FakeVectorDB()
    content = "GDPR protects personal data. It applies in the EU. Fines can be high."
    pipeline = make_pipeline(content, vector_db=vector_db)

    report = await pipeline.ingest(GDPR_URL, "GDPR")

    assert report.total_chunks == 1
    assert report.upserted == [0]
    assert list(vector_db.vectors) == ["GDPR-0"]
    chunk = vector_db.vectors["GDPR-0"].metadata
    assert chunk.chunk_index == 0
    assert chunk.total_chunks == 1
    assert chunk.text == content
    assert chunk.source_url == GDPR_URL
    assert registry.get(GDPR_URL).name == "GDPR"


async def test_embedding_failure_skips_only_that_chunk(make_pipeline, registry):
    vector_db = FakeVectorDB()
    pipeline = make_pipeline(
        THREE_SENTENCES,
        chunk_size=25,
        embedding_service=FakeEmbeddingService(fail_on_calls=[2]),
        vector_db=vector_db,
    )

    report = await pipeline.ingest(GDPR_URL, "Doc")

    assert report.total_chunks == 3
    assert sorted(vector_db.vectors) == ["Doc-0", "Doc-2"]
    assert report.upserted == [0, 2]
    assert report.failed == [1]
    assert report.registry_entry is not None
    assert registry.get(GDPR_URL) == report.registry_entry


async def test_upsert_failure_skips_only_that_chunk(make_pipeline):
    vector_db = FakeVectorDB(fail_ids=["Doc-0"])
    pipeline = make_pipeline(THREE_SENTENCES, chunk_size=25, vector_db=vector_db)

    report = await pipeline.ingest(GDPR_URL, "Doc")

    assert sorted(vector_db.vectors) == ["Doc-1", "Doc-2"]
    assert report.failed == [0]


async def test_unreachable_document_aborts_ingestion(make_pipeline, registry):
    vector_db = FakeVectorDB()
    pipeline = make_pipeline("", vector_db=vector_db, unreachable=True)

    with pytest.raises(FetchError):
        await pipeline.ingest(GDPR_URL, "GDPR")

    assert vector_db.vectors == {}
    assert registry.load() == []


async def test_reingestion_overwrites_vectors_and_registry(make_pipeline, registry):
    vector_db = FakeVectorDB()
    pipeline = make_pipeline(THREE_SENTENCES, chunk_size=25, vector_db=vector_db)

    first = await pipeline.ingest(GDPR_URL, "Doc")
    second = await pipeline.ingest(GDPR_URL, "Doc", force=True)

    assert sorted(vector_db.vectors) == ["Doc-0", "Doc-1", "Doc-2"]
    assert len(registry.load()) == 1
    assert second.registry_entry.added_at == first.registry_entry.added_at
    assert second.registry_entry.last_updated >= first.registry_entry.last_updated


async def test_empty_document_still_registered(make_pipeline, registry):
    vector_db = FakeVectorDB()
    pipeline = make_pipeline("", vector_db=vector_db)

    report = await pipeline.ingest(GDPR_URL, "Empty")

    assert report.total_chunks == 0
    assert vector_db.vectors == {}
    assert registry.get(GDPR_URL).name == "Empty"
