import logging

from fastapi import APIRouter, File, HTTPException, UploadFile
from fastapi.responses import JSONResponse

from signage.services.storage import save_upload

router = APIRouter(prefix="/upload", tags=["upload"])
logger = logging.getLogger(__name__)


@router.post("")
def upload_file(file: UploadFile = File(...)):
    try:
        return save_upload(file)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except OSError:
        logger.exception("Saving upload %s failed", file.filename)
        return JSONResponse({"success": False, "error": "Failed to save file."}, status_code=500)
