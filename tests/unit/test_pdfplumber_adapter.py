import pytest

from docintake.pdf.exceptions import PdfExtractionError
from docintake.pdf.pdfplumber_adapter import PdfPlumberAdapter


class TestPdfPlumberAdapter:
    def test_extract_returns_text(self, sample_pdf_bytes: bytes) -> None:
        result = PdfPlumberAdapter().extract(sample_pdf_bytes)
        assert "Surname: DOE" in result

    def test_extract_multi_page(self, multi_page_pdf_bytes: bytes) -> None:
        result = PdfPlumberAdapter().extract(multi_page_pdf_bytes)
        assert result.index("Page one content") < result.index("Page three content")

    def test_blank_pdf_returns_empty_string(self, empty_pdf_bytes: bytes) -> None:
        assert PdfPlumberAdapter().extract(empty_pdf_bytes) == ""

    def test_raises_on_invalid_bytes(self) -> None:
        with pytest.raises(PdfExtractionError):
            PdfPlumberAdapter().extract(b"not a pdf")
