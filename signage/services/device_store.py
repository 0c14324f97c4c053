from __future__ import annotations

import logging
import re
import uuid

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from signage.errors import ConflictError, NotFoundError, StorageUnavailableError, ValidationError
from signage.models.device import Device
from signage.schemas.device import DeviceUpdate, ScheduleEntryIn
from signage.services.store import Store

logger = logging.getLogger(__name__)

DEVICE_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")
MIN_DEVICE_ID_LENGTH = 3
MIN_NAME_LENGTH = 3
# What the device edit form posts for "no fallback playlist".
NO_PLAYLIST = "none"


def parse_hhmm(value: str) -> tuple[int, int] | None:
    raw = (value or "").strip()
    parts = raw.split(":")
    if len(parts) != 2 or not all(part.isdigit() for part in parts):
        return None
    hour, minute = int(parts[0]), int(parts[1])
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def normalize_playlist_ref(value: str | None) -> str | None:
    ref = (value or "").strip()
    if not ref or ref.lower() == NO_PLAYLIST:
        return None
    return ref


def normalize_schedule(entries: list[ScheduleEntryIn]) -> list[dict]:
    normalized: list[dict] = []
    seen_ids: set[str] = set()
    for index, entry in enumerate(entries):
        entry_id = (entry.id or "").strip() or str(uuid.uuid4())
        if entry_id in seen_ids:
            raise ValidationError(f"schedule[{index}] duplicates entry id {entry_id}")
        seen_ids.add(entry_id)

        playlist_id = (entry.playlist_id or "").strip()
        if not playlist_id:
            raise ValidationError(f"schedule[{index}].playlist_id is required")

        start = parse_hhmm(entry.start_time)
        end = parse_hhmm(entry.end_time)
        if start is None or end is None:
            raise ValidationError(f"schedule[{index}] times must use 24-hour HH:MM")
        if start >= end:
            raise ValidationError(
                f"schedule[{index}] must start before it ends; entries spanning midnight are not supported"
            )

        days = sorted(set(entry.days_of_week))
        if not days:
            raise ValidationError(f"schedule[{index}] needs at least one day of week")
        if any(day < 0 or day > 6 for day in days):
            raise ValidationError(f"schedule[{index}].days_of_week must be within 0 (Sunday) to 6 (Saturday)")

        normalized.append(
            {
                "id": entry_id,
                "playlist_id": playlist_id,
                "start_time": f"{start[0]:02d}:{start[1]:02d}",
                "end_time": f"{end[0]:02d}:{end[1]:02d}",
                "days_of_week": days,
            }
        )
    return normalized


class DeviceStore(Store):
    def list(self) -> list[Device]:
        return self._list(Device, Device.name.asc(), Device.id.asc())

    def get(self, device_id: str) -> Device:
        device = self._get(Device, device_id)
        if not device:
            raise NotFoundError("Device not found")
        return device

    def register(self, device_id: str, name: str) -> Device:
        device_id = (device_id or "").strip()
        name = (name or "").strip()
        if len(device_id) < MIN_DEVICE_ID_LENGTH:
            raise ValidationError("Device ID must be at least 3 characters.")
        if not DEVICE_ID_PATTERN.match(device_id):
            raise ValidationError("Device ID can only contain letters, numbers, hyphens, and underscores.")
        if len(name) < MIN_NAME_LENGTH:
            raise ValidationError("Device name must be at least 3 characters.")
        if self._get(Device, device_id) is not None:
            raise ConflictError("Device with ID already exists")

        device = Device(
            id=device_id,
            name=name,
            status="offline",
            last_seen=self.clock(),
            current_playlist_id=None,
            schedule=[],
        )
        self.db.add(device)
        try:
            self.db.commit()
        except IntegrityError as exc:
            self._rollback()
            raise ConflictError("Device with ID already exists") from exc
        except SQLAlchemyError as exc:
            self._rollback()
            raise StorageUnavailableError("Storage is unavailable") from exc
        self.db.refresh(device)
        logger.info("Registered device %s", device_id)
        return device

    def update(self, device_id: str, partial: DeviceUpdate) -> Device:
        device = self.get(device_id)
        provided = partial.model_fields_set
        if "name" in provided:
            name = (partial.name or "").strip()
            if len(name) < MIN_NAME_LENGTH:
                raise ValidationError("Device name must be at least 3 characters.")
            device.name = name
        if "current_playlist_id" in provided:
            device.current_playlist_id = normalize_playlist_ref(partial.current_playlist_id)
        if "schedule" in provided:
            device.schedule = normalize_schedule(partial.schedule or [])
        self._commit()
        self.db.refresh(device)
        logger.info("Updated device %s", device_id)
        return device

    def heartbeat(self, device_id: str) -> bool:
        """Mark a device online. Never raises; returns whether it was recorded.

        Display clients call this from their polling loop, so storage hiccups
        are logged and reported as ``False`` instead of propagated.
        """
        try:
            device = self.db.get(Device, device_id)
            if device is None:
                logger.warning("Heartbeat from unknown device %s", device_id)
                return False
            now = self.clock()
            if device.last_seen is None or now > device.last_seen:
                device.last_seen = now
            device.status = "online"
            self.db.commit()
        except SQLAlchemyError:
            logger.warning("Heartbeat for device %s was not recorded", device_id, exc_info=True)
            self._rollback()
            return False
        return True

    def delete(self, device_id: str) -> None:
        device = self.get(device_id)
        self.db.delete(device)
        self._commit()
        logger.info("Deleted device %s", device_id)
