import fitz  # PyMuPDF

from signage.config import PDF_DPI

MAX_PAGE_COUNT = 1000


class RasterizeError(Exception):
    pass


def rasterize(pdf_bytes: bytes, dpi: int = PDF_DPI) -> list[bytes]:
    """Render every page of a PDF to PNG bytes, in page order."""
    try:
        doc = fitz.open(stream=pdf_bytes, filetype="pdf")
    except Exception as exc:
        raise RasterizeError(f"Invalid or corrupted PDF file: {exc}") from exc
    try:
        if doc.page_count == 0:
            raise RasterizeError("PDF has no pages")
        if doc.page_count > MAX_PAGE_COUNT:
            raise RasterizeError(f"PDF has {doc.page_count} pages, limit is {MAX_PAGE_COUNT}")
        return [page.get_pixmap(dpi=dpi).tobytes("png") for page in doc]
    finally:
        doc.close()
