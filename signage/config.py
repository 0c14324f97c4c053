import os

DATABASE_URL = os.getenv("SIGNAGE_DATABASE_URL", "sqlite:///./signage.db")
STORAGE_DIR = os.getenv("SIGNAGE_STORAGE_DIR", "storage")
UPLOAD_DIR = os.path.join(STORAGE_DIR, "uploads")
HEARTBEAT_TIMEOUT_SEC = int(os.getenv("SIGNAGE_HEARTBEAT_TIMEOUT_SEC", "180"))
DISPLAY_TIMEZONE = (os.getenv("SIGNAGE_DISPLAY_TIMEZONE", "") or "").strip()
MAX_UPLOAD_BYTES = int(os.getenv("SIGNAGE_MAX_UPLOAD_BYTES", str(250 * 1024 * 1024)))
PDF_DPI = int(os.getenv("SIGNAGE_PDF_DPI", "150"))
LOG_LEVEL = (os.getenv("SIGNAGE_LOG_LEVEL", "INFO") or "INFO").strip().upper()
QUIET_ACCESS_LOG = os.getenv("SIGNAGE_QUIET_ACCESS_LOG", "1").strip().lower() in {"1", "true", "yes", "on"}
