import logging
from dataclasses import dataclass
from datetime import datetime, time
from zoneinfo import ZoneInfo

from signage.config import DISPLAY_TIMEZONE
from signage.errors import NotFoundError
from signage.schemas.playlist import PlaylistOut
from signage.services.device_store import parse_hhmm
from signage.services.playlist_store import PlaylistStore

logger = logging.getLogger(__name__)

try:
    _DISPLAY_TZ = ZoneInfo(DISPLAY_TIMEZONE) if DISPLAY_TIMEZONE else None
except Exception:
    logger.warning("Unknown SIGNAGE_DISPLAY_TIMEZONE %r, using server local time", DISPLAY_TIMEZONE)
    _DISPLAY_TZ = None


def display_now() -> datetime:
    if _DISPLAY_TZ is None:
        return datetime.now()
    # Schedules carry no zone, so compare against the naive wall clock.
    return datetime.now(_DISPLAY_TZ).replace(tzinfo=None)


def to_display_clock(at: datetime) -> datetime:
    """Express ``at`` as the naive wall clock schedules are compared against.

    Naive values are already device-local. Aware values are converted to the
    display timezone, or to server local time when none is configured.
    """
    if at.tzinfo is None:
        return at
    return at.astimezone(_DISPLAY_TZ).replace(tzinfo=None)


@dataclass(frozen=True)
class Resolution:
    playlist_id: str | None
    source: str  # "schedule", "fallback" or "none"
    schedule_entry_id: str | None = None


def day_of_week(at: datetime) -> int:
    """Sunday-based day index (Sunday == 0), unlike ``datetime.weekday``."""
    return (at.weekday() + 1) % 7


def _clock(value: str) -> time | None:
    parsed = parse_hhmm(value)
    if parsed is None:
        return None
    return time(parsed[0], parsed[1])


def matching_entries(schedule: list[dict] | None, at: datetime) -> list[dict]:
    today = day_of_week(at)
    now = at.time()
    matches = []
    for entry in schedule or []:
        if today not in (entry.get("days_of_week") or []):
            continue
        start = _clock(entry.get("start_time", ""))
        end = _clock(entry.get("end_time", ""))
        if start is None or end is None:
            continue
        if start <= now < end:
            matches.append(entry)
    return matches


def _precedence(entry: dict) -> tuple:
    # Latest start wins, then the window that closes first, then the smaller id.
    start = parse_hhmm(entry.get("start_time", "")) or (0, 0)
    end = parse_hhmm(entry.get("end_time", "")) or (0, 0)
    return (-(start[0] * 60 + start[1]), end[0] * 60 + end[1], str(entry.get("id", "")))


def resolve_playlist_id(device, at: datetime) -> Resolution:
    matches = matching_entries(device.schedule, at)
    if matches:
        winner = min(matches, key=_precedence)
        return Resolution(winner.get("playlist_id"), "schedule", winner.get("id"))
    if device.current_playlist_id:
        return Resolution(device.current_playlist_id, "fallback")
    return Resolution(None, "none")


def resolve_playback(device, at: datetime, playlists: PlaylistStore) -> tuple[Resolution, PlaylistOut | None]:
    """Pick the playlist a device should show at ``at`` and load its items.

    Matching schedule entries are tried in precedence order; one whose
    playlist no longer exists gives way to the next, then to the device
    fallback. If none resolves the device has nothing to play.
    """
    matches = sorted(matching_entries(device.schedule, at), key=_precedence)
    candidates = [Resolution(entry.get("playlist_id"), "schedule", entry.get("id")) for entry in matches]
    if device.current_playlist_id:
        candidates.append(Resolution(device.current_playlist_id, "fallback"))

    for candidate in candidates:
        if not candidate.playlist_id:
            continue
        try:
            return candidate, playlists.get(candidate.playlist_id)
        except NotFoundError:
            logger.warning(
                "Device %s references missing playlist %s (%s)",
                device.id,
                candidate.playlist_id,
                candidate.source,
            )
    return Resolution(None, "none"), None
