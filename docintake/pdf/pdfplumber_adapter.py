import io

import pdfplumber

from docintake.pdf.base import BasePdfExtractor
from docintake.pdf.exceptions import PdfExtractionError


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads the PDF text layer using pdfplumber."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber text layer read failed: {exc}") from exc
        return "\n".join(pages).strip()
