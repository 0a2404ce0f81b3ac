from docintake.config.settings import Settings
from docintake.pdf.base import BasePdfExtractor, BasePdfPageUtils
from docintake.pdf.pdfplumber_adapter import PdfPlumberAdapter
from docintake.pdf.pymupdf_adapter import PyMuPdfAdapter, PyMuPdfPageUtils

# Disables the text-layer shortcut; scanned and text PDFs both go through OCR.
NO_TEXT_ENGINE = "none"


class PdfExtractorFactory:
    """Creates the PDF text-layer extractor and page utilities based on settings."""

    ADAPTERS: dict[str, type[BasePdfExtractor]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    PAGE_UTILS: dict[str, type[BasePdfPageUtils]] = {
        "pymupdf": PyMuPdfPageUtils,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfExtractor | None:
        engine = settings.pdf_text_engine.lower()
        if engine == NO_TEXT_ENGINE:
            return None
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF text engine '{engine}'. "
                f"Choose from: {[*cls.ADAPTERS, NO_TEXT_ENGINE]}"
            )
        return adapter_cls()

    @classmethod
    def create_page_utils(cls, settings: Settings) -> BasePdfPageUtils:
        engine = settings.pdf_page_engine.lower()
        utils_cls = cls.PAGE_UTILS.get(engine)
        if utils_cls is None:
            raise ValueError(
                f"Unknown PDF page engine '{engine}'. Choose from: {list(cls.PAGE_UTILS)}"
            )
        return utils_cls()
