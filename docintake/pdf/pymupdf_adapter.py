import pymupdf

from docintake.pdf.base import BasePdfExtractor, BasePdfPageUtils
from docintake.pdf.exceptions import PdfExtractionError, PdfPageError


def _open(pdf_bytes: bytes) -> pymupdf.Document:
    return pymupdf.open(stream=pdf_bytes, filetype="pdf")  # type: ignore[no-untyped-call]


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads the PDF text layer using PyMuPDF."""

    def extract(self, pdf_bytes: bytes) -> str:
        try:
            with _open(pdf_bytes) as doc:
                pages = [page.get_text() for page in doc]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf text layer read failed: {exc}") from exc
        return "\n".join(pages).strip()


class PyMuPdfPageUtils(BasePdfPageUtils):
    """Counts pages and copies single pages out of a PDF using PyMuPDF."""

    def page_count(self, pdf_bytes: bytes) -> int:
        try:
            with _open(pdf_bytes) as doc:
                return doc.page_count
        except Exception as exc:
            raise PdfPageError(f"Cannot open PDF: {exc}") from exc

    def extract_page(self, pdf_bytes: bytes, index: int) -> bytes:
        try:
            with _open(pdf_bytes) as source:
                if index < 0 or index >= source.page_count:
                    raise PdfPageError(
                        f"Page index {index} out of range (0..{source.page_count - 1})"
                    )
                with pymupdf.open() as single:  # type: ignore[no-untyped-call]
                    single.insert_pdf(source, from_page=index, to_page=index)
                    return single.tobytes()
        except PdfPageError:
            raise
        except Exception as exc:
            raise PdfPageError(f"Cannot extract page {index}: {exc}") from exc
