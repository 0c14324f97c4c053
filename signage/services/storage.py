import logging
import os
import uuid

from fastapi import UploadFile

from signage.config import MAX_UPLOAD_BYTES, STORAGE_DIR, UPLOAD_DIR
from signage.services.pdf import rasterize

logger = logging.getLogger(__name__)

PDF_EXTENSION = ".pdf"


def ensure_storage() -> None:
    os.makedirs(UPLOAD_DIR, exist_ok=True)


def _public_url(path: str) -> str:
    relative = os.path.relpath(path, STORAGE_DIR).replace("\\", "/")
    return f"/storage/{relative}"


def _write(filename: str, content: bytes) -> str:
    path = os.path.join(UPLOAD_DIR, filename)
    with open(path, "wb") as f:
        f.write(content)
    return _public_url(path)


def _discard(urls: list[str]) -> None:
    for url in urls:
        path = os.path.join(STORAGE_DIR, url[len("/storage/"):])
        try:
            os.remove(path)
        except OSError:
            logger.warning("Could not remove partial page image %s", path, exc_info=True)


def _is_pdf(file: UploadFile, ext: str) -> bool:
    return ext == PDF_EXTENSION or (file.content_type or "").lower() == "application/pdf"


def save_upload(file: UploadFile) -> dict:
    """Store an uploaded file and, for PDFs, one PNG per page.

    A PDF whose pages cannot be rendered is still stored; the result then has
    no page images and carries ``rasterize_error``.
    """
    ensure_storage()
    content = file.file.read()
    if not content:
        raise ValueError("Empty files cannot be uploaded.")
    if len(content) > MAX_UPLOAD_BYTES:
        raise ValueError(f"File exceeds the {MAX_UPLOAD_BYTES // (1024 * 1024)} MB upload limit.")

    filename = os.path.basename((file.filename or "upload.bin").strip()) or "upload.bin"
    _, ext = os.path.splitext(filename.lower())
    stem = str(uuid.uuid4())
    url = _write(f"{stem}{ext}", content)
    result = {"success": True, "url": url}
    if not _is_pdf(file, ext):
        return result

    result["page_image_urls"] = []
    result["rasterize_error"] = None
    page_urls: list[str] = []
    try:
        for number, image in enumerate(rasterize(content), start=1):
            page_urls.append(_write(f"{stem}-page-{number}.png", image))
    except Exception as exc:
        logger.exception("Rasterizing %s failed", filename)
        _discard(page_urls)
        result["rasterize_error"] = str(exc) or exc.__class__.__name__
        return result
    result["page_image_urls"] = page_urls
    logger.info("Stored %s with %d page image(s)", url, len(page_urls))
    return result
