from datetime import datetime, timedelta

from signage.config import HEARTBEAT_TIMEOUT_SEC

ONLINE = "online"
UNRESPONSIVE = "unresponsive"
OFFLINE = "offline"

DEFAULT_TIMEOUT = timedelta(seconds=HEARTBEAT_TIMEOUT_SEC)


def effective_status(
    status: str,
    last_seen: datetime | None,
    now: datetime,
    timeout: timedelta = DEFAULT_TIMEOUT,
) -> str:
    """Classify a device as online, unresponsive or offline for the admin UI.

    ``offline`` always wins. An ``online`` device whose last heartbeat is older
    than ``timeout`` is reported as unresponsive.
    """
    if status != ONLINE:
        return OFFLINE
    if last_seen is None or now - last_seen > timeout:
        return UNRESPONSIVE
    return ONLINE
