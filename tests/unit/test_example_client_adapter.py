import json

from docintake.extraction.client_base import CompletionRequest
from docintake.extraction.example_client_adapter import (
    ExampleClientAdapter,
    extract_labelled_fields,
)
from docintake.extraction.extractor import Extractor
from docintake.extraction.models import ExtractionContext


def _context(text: str) -> ExtractionContext:
    return ExtractionContext(
        document_category="passport",
        document_text=text,
        file_type="application/pdf",
        filename="f.pdf",
        user_id="u",
        document_id="d",
    )


class TestExtractLabelledFields:
    def test_values_run_to_next_label(self) -> None:
        fields = extract_labelled_fields("Surname: DOE Given Names: JANE MARY")

        assert [(f["field_name"], f["field_value"]) for f in fields] == [
            ("last_name", "DOE"),
            ("first_name", "JANE MARY"),
        ]

    def test_values_stop_at_line_end(self) -> None:
        fields = extract_labelled_fields("Passport No: A1234567\nIssued in Lisbon")
        assert fields[0]["field_value"] == "A1234567"
        assert fields[0]["field_category"] == "identification"

    def test_unlabelled_text_gives_nothing(self) -> None:
        assert extract_labelled_fields("UNITED STATES OF AMERICA") == []


class TestExampleClientAdapter:
    def test_no_document_text_section_gives_no_fields(self) -> None:
        raw = ExampleClientAdapter().complete(
            CompletionRequest(model="example", system_prompt="s", user_prompt="u")
        )
        assert json.loads(raw)["extracted_fields"] == []

    def test_response_passes_extractor_validation(self) -> None:
        extractor = Extractor(client=ExampleClientAdapter(), model="example", max_attempts=1)

        result = extractor.extract(_context("Surname: DOE Given Names: JANE"))

        assert result.document_type == "Passport"
        assert {f.field_name: f.field_value for f in result.extracted_fields} == {
            "last_name": "DOE",
            "first_name": "JANE",
        }
        assert result.confidence_summary.low_confidence == 2
