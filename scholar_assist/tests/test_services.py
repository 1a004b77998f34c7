import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from scholar_assist.core.errors import InvalidInputError
from scholar_assist.models import KnowledgeEntry, Resource, Scholarship
from scholar_assist.schemas.facts import ResourceCreate, ScholarshipCreate, ScholarshipRecord
from scholar_assist.services.facts_service import FactsService
from scholar_assist.services.ingestion_service import IngestionService
from scholar_assist.services.knowledge_store import PROBE_CONTENT, KnowledgeStore


class FailingStore:
    """Store whose inserts fail for the chunk indexes listed in `fail_on`."""

    def __init__(self, fail_on=None):
        self.fail_on = fail_on
        self.calls = 0
        self.inner = KnowledgeStore()

    async def insert(self, content, metadata):
        index = self.calls
        self.calls += 1
        if self.fail_on is None or index in self.fail_on:
            raise ConnectionError(f"insert {index} rejected")
        return await self.inner.insert(content, metadata)


class TestKnowledgeStore:
    async def test_insert_and_query_round_trip(self):
        store = KnowledgeStore()
        entry = await store.insert("Some content.", {"source": "x"})

        results = await store.query(10)

        assert [r.id for r in results] == [entry.id]
        assert results[0].metadata == {"source": "x"}

    async def test_query_respects_limit(self):
        store = KnowledgeStore()
        for i in range(5):
            await store.insert(f"Chunk {i}.", {})

        assert len(await store.query(3)) == 3

    async def test_delete(self):
        store = KnowledgeStore()
        entry = await store.insert("Delete me.", {})

        assert await store.delete(entry.id) is True
        assert await store.delete(entry.id) is False
        assert await store.count() == 0

    async def test_verify_leaves_no_residue(self):
        store = KnowledgeStore()

        result = await store.verify()

        assert result.success is True
        assert result.error is None
        assert await KnowledgeEntry.filter(content=PROBE_CONTENT).count() == 0

    async def test_verify_reports_insert_failure(self):
        store = KnowledgeStore()
        with patch.object(KnowledgeStore, "insert", new_callable=AsyncMock, side_effect=RuntimeError("no table")):
            result = await store.verify()

        assert result.success is False
        assert result.error == "no table"

    async def test_verify_reports_delete_failure(self):
        store = KnowledgeStore()
        with patch.object(KnowledgeStore, "delete", new_callable=AsyncMock, side_effect=RuntimeError("read only")):
            result = await store.verify()

        assert result.success is False
        assert "could not be removed" in result.message


class TestIngestionService:
    async def test_ingest_single_chunk(self):
        service = IngestionService(KnowledgeStore(), max_chunk_size=1000)

        report = await service.ingest("A. B. C.")

        assert report.chunks_processed == 1
        assert report.chunks_stored == 1
        assert report.success is True
        assert report.errors == []
        assert report.stored[0].content == "A. B. C."

    async def test_ingest_multiple_chunks_with_metadata(self):
        service = IngestionService(KnowledgeStore(), max_chunk_size=40)
        content = "The Gates Scholarship pays $20,000. Essays are due 2025-09-15. Bring questions to the meeting."

        report = await service.ingest(content, {"source": "admin"})

        assert report.chunks_processed == 3
        assert report.chunks_stored == 3
        first, second, third = report.stored
        assert first.metadata["source"] == "admin"
        assert first.metadata["scholarships"] == ["The Gates Scholarship"]
        assert first.metadata["amounts"] == ["$20,000"]
        assert first.metadata["chunk_index"] == 0
        assert first.metadata["chunk_size"] == len(first.content)
        assert "ingested_at" in first.metadata
        assert second.metadata["date"] == "2025-09-15"
        assert second.metadata["topics"] == ["Essay"]
        assert second.metadata["chunk_index"] == 1
        assert third.metadata["chunk_index"] == 2
        assert "topics" not in third.metadata

    async def test_caller_metadata_survives_round_trip(self):
        store = KnowledgeStore()
        service = IngestionService(store)

        await service.ingest("Leadership matters for the STEM award.", {"source": "x"})

        [entry] = await store.query(1)
        assert entry.metadata["source"] == "x"
        assert entry.metadata["topics"] == ["STEM", "Leadership"]

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    async def test_ingest_rejects_blank_content(self, content):
        service = IngestionService(KnowledgeStore())

        with pytest.raises(InvalidInputError, match="Content is required"):
            await service.ingest(content)

    async def test_partial_failure_continues_with_later_chunks(self):
        service = IngestionService(FailingStore(fail_on={1}), max_chunk_size=10)

        report = await service.ingest("One one. Two two. Three 3.")

        assert report.chunks_processed == 3
        assert report.chunks_stored == 2
        assert report.success is True
        assert [f.chunk_index for f in report.errors] == [1]
        assert report.errors[0].error == "insert 1 rejected"
        assert [e.content for e in report.stored] == ["One one.", "Three 3."]

    async def test_total_failure_is_reported_not_raised(self):
        service = IngestionService(FailingStore(), max_chunk_size=10)

        report = await service.ingest("One one. Two two. Three 3.")

        assert report.chunks_stored == 0
        assert report.success is False
        assert len(report.errors) == report.chunks_processed == 3


class TestFactsService:
    async def test_lists_scholarships_as_records(self):
        await Scholarship.create(name="Fraser Essay Contest", deadline="June 1, 2025", amount="$1,500")

        records = await FactsService().list_scholarships()

        assert len(records) == 1
        assert isinstance(records[0], ScholarshipRecord)
        assert records[0].name == "Fraser Essay Contest"
        assert records[0].eligibility is None

    async def test_empty_collections(self):
        service = FactsService()
        assert await service.list_scholarships() == []
        assert await service.list_resources() == []

    async def test_create_and_delete_resource(self):
        service = FactsService()
        resource = await service.create_resource(
            ResourceCreate(title="Founders Worksheet", type="worksheet", link="https://example.com/worksheet")
        )

        [record] = await service.list_resources()
        assert record.title == "Founders Worksheet"

        assert await service.delete_resource(resource.id) is True
        assert await Resource.all().count() == 0

    async def test_create_and_delete_scholarship(self):
        service = FactsService()
        scholarship = await service.create_scholarship(ScholarshipCreate(name="ExploraVision", amount="$10,000"))

        assert await service.delete_scholarship(scholarship.id) is True
        assert await service.delete_scholarship(uuid.uuid4()) is False


class TestScholarshipRecord:
    def test_requirements_fills_eligibility(self):
        record = ScholarshipRecord.model_validate({"name": "Oratorical Contest", "requirements": "Under 19"})
        assert record.eligibility == "Under 19"

    def test_eligibility_wins_over_requirements(self):
        record = ScholarshipRecord.model_validate(
            {"name": "Oratorical Contest", "eligibility": "Students", "requirements": "Under 19"}
        )
        assert record.eligibility == "Students"

    def test_requirements_fills_eligibility_from_attributes(self):
        row = SimpleNamespace(id=uuid.uuid4(), name="Oratorical Contest", eligibility=None, requirements="Under 19")

        record = ScholarshipRecord.model_validate(row)

        assert record.eligibility == "Under 19"
        assert record.name == "Oratorical Contest"
        assert record.deadline is None

    async def test_orm_row_keeps_its_eligibility(self):
        scholarship = await Scholarship.create(name="Gates Scholarship", eligibility="Pell-eligible seniors")

        record = ScholarshipRecord.model_validate(scholarship)

        assert record.eligibility == "Pell-eligible seniors"
