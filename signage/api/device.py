from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from signage.db import get_db, utcnow
from signage.models.device import Device
from signage.schemas.device import DeviceOut, DeviceRegisterIn, DeviceUpdate, ScheduleEntryOut
from signage.services.device_store import DeviceStore
from signage.services.liveness import effective_status

router = APIRouter(prefix="/devices", tags=["devices"])


def get_store(db: Session = Depends(get_db)) -> DeviceStore:
    return DeviceStore(db)


def device_payload(device: Device, now: datetime | None = None) -> DeviceOut:
    current_time = now or utcnow()
    return DeviceOut(
        id=str(device.id),
        name=device.name,
        status=device.status,
        effective_status=effective_status(device.status, device.last_seen, current_time),
        last_seen=device.last_seen,
        current_playlist_id=device.current_playlist_id,
        schedule=[ScheduleEntryOut(**entry) for entry in (device.schedule or [])],
    )


@router.get("", response_model=list[DeviceOut])
def list_devices(store: DeviceStore = Depends(get_store)):
    now = utcnow()
    return [device_payload(device, now) for device in store.list()]


@router.post("/register", response_model=DeviceOut)
def register_device(payload: DeviceRegisterIn, store: DeviceStore = Depends(get_store)):
    return device_payload(store.register(payload.id, payload.name))


@router.get("/{device_id}", response_model=DeviceOut)
def get_device(device_id: str, store: DeviceStore = Depends(get_store)):
    return device_payload(store.get(device_id))


@router.put("/{device_id}", response_model=DeviceOut)
def update_device(device_id: str, payload: DeviceUpdate, store: DeviceStore = Depends(get_store)):
    return device_payload(store.update(device_id, payload))


@router.post("/{device_id}/heartbeat")
def heartbeat(device_id: str, store: DeviceStore = Depends(get_store)):
    return {"ok": store.heartbeat(device_id)}


@router.delete("/{device_id}")
def delete_device(device_id: str, store: DeviceStore = Depends(get_store)):
    store.delete(device_id)
    return {"ok": True}
