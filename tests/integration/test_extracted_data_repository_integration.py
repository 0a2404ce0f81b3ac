import pytest

from docintake.database.repositories.extracted_data_repository import ExtractedDataRepository
from docintake.extraction.models import ExtractedField


@pytest.mark.integration
class TestExtractedDataRepository:
    def test_insert_and_read_back(self, seed_document: str) -> None:
        repo = ExtractedDataRepository()
        fields = [
            ExtractedField("last_name", "DOE", 0.95, "personal"),
            ExtractedField(
                "passport_number", "A1234567", 0.8, "identification", validation_status="flagged"
            ),
        ]

        assert repo.insert_fields(seed_document, fields) == 2

        rows = repo.find_by_document(seed_document)
        assert {r.field_name for r in rows} == {"last_name", "passport_number"}
        assert {r.field_name: r.validation_status for r in rows} == {
            "last_name": "pending",
            "passport_number": "flagged",
        }
        assert {r.confidence_score for r in rows} == {0.95, 0.8}

    def test_empty_list_writes_nothing(self, seed_document: str) -> None:
        repo = ExtractedDataRepository()
        assert repo.insert_fields(seed_document, []) == 0
        assert repo.find_by_document(seed_document) == []
