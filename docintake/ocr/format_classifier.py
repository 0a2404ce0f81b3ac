from docintake.ocr.exceptions import UnsupportedFormatError


class DocumentFormat:
    RASTER_IMAGE = "raster_image"
    PDF = "pdf"
    UNSUPPORTED = "unsupported"


SUPPORTED_MEDIA_TYPES: dict[str, str] = {
    "application/pdf": DocumentFormat.PDF,
    "image/jpeg": DocumentFormat.RASTER_IMAGE,
    "image/jpg": DocumentFormat.RASTER_IMAGE,
    "image/png": DocumentFormat.RASTER_IMAGE,
    "image/tiff": DocumentFormat.RASTER_IMAGE,
    "image/tif": DocumentFormat.RASTER_IMAGE,
}


def classify_media_type(media_type: str | None) -> str:
    """Map a declared media type to a processing path.

    PDFs are not split into text-native and scanned here; that is decided
    by trying text extraction first.
    """
    if not media_type:
        return DocumentFormat.UNSUPPORTED
    return SUPPORTED_MEDIA_TYPES.get(media_type.strip().lower(), DocumentFormat.UNSUPPORTED)


def require_supported_format(media_type: str | None) -> str:
    """Classify or raise UnsupportedFormatError naming the rejected type."""
    document_format = classify_media_type(media_type)
    if document_format == DocumentFormat.UNSUPPORTED:
        raise UnsupportedFormatError(
            f"Unsupported file format: {media_type}. Supported formats: PDF, JPEG, PNG, TIFF."
        )
    return document_format
