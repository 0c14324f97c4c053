import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from signage.api import content, dashboard, device, display, playlist, upload
from signage.config import LOG_LEVEL, QUIET_ACCESS_LOG, STORAGE_DIR
from signage.db import Base, engine
from signage.errors import SignageError
from signage.services.storage import ensure_storage

logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

if QUIET_ACCESS_LOG:
    # Display clients poll constantly; keep warnings and errors only.
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

Base.metadata.create_all(bind=engine)
ensure_storage()

app = FastAPI(title="Firefly Signage")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SignageError)
async def signage_error_handler(request: Request, exc: SignageError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse({"detail": exc.message}, status_code=exc.status_code)


@app.get("/")
def root():
    return {
        "ok": True,
        "service": "signage-api",
        "time_utc": datetime.now(timezone.utc).isoformat(),
        "docs": "/docs",
    }


@app.get("/healthz")
def healthz():
    return {"ok": True}


app.include_router(content.router)
app.include_router(playlist.router)
app.include_router(device.router)
app.include_router(display.router)
app.include_router(upload.router)
app.include_router(dashboard.router)

app.mount("/storage", StaticFiles(directory=STORAGE_DIR), name="storage")
