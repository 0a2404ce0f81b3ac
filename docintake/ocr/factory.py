import boto3

from docintake.config.aws import botocore_config
from docintake.config.settings import Settings
from docintake.ocr.backend_base import BaseOcrBackend
from docintake.ocr.engine import OcrEngine
from docintake.ocr.page_splitter import PageSplitter
from docintake.ocr.service import OcrService
from docintake.ocr.textract_backend import TextractBackend
from docintake.pdf.factory import PdfExtractorFactory


class OcrServiceFactory:
    """Creates the OCR backend and wires the engine and page splitter around it."""

    BACKENDS = ("textract",)

    @classmethod
    def create_backend(cls, settings: Settings) -> BaseOcrBackend:
        backend = settings.ocr_backend.lower()
        if backend == "textract":
            client = boto3.client("textract", config=botocore_config(settings))
            return TextractBackend(
                client=client,
                feature_types=settings.ocr_feature_types,
                max_document_bytes=settings.ocr_max_document_bytes,
            )
        raise ValueError(f"Unknown OCR backend '{backend}'. Choose from: {list(cls.BACKENDS)}")

    @classmethod
    def create(cls, settings: Settings) -> OcrService:
        backend = cls.create_backend(settings)
        engine = OcrEngine.with_default_strategies(backend)
        page_splitter = PageSplitter(
            engine=engine,
            backend=backend,
            page_utils=PdfExtractorFactory.create_page_utils(settings),
            text_extractor=PdfExtractorFactory.create(settings),
        )
        return OcrService(engine=engine, page_splitter=page_splitter)
