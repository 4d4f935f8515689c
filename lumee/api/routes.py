from __future__ import annotations

import logging
from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from ..core.config import settings
from ..core.timeutil import now_local, to_local_date
from ..domain.frame import to_indicator_frame
from ..domain.models import FetchOutcome, PollenObservation
from ..domain.rules import classify
from ..domain.schedule import find_all_entries_for_date, find_entry_for_date
from ..services.environment import Assessment, EnvironmentService, evaluate
from .schemas import (
    BluetoothRequest,
    EnvironmentRequest,
    LedStatusRequest,
    ScheduleQuery,
    signal_out,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# --- Dependency getters ---
# main.py wires the real ones through app.dependency_overrides.
def get_environment() -> EnvironmentService:  # overridden in main
    raise RuntimeError("Environment service dependency not configured")


def _pollen_out(p: Optional[PollenObservation]) -> Optional[dict[str, Any]]:
    if p is None:
        return None
    return {
        "type": p.type,
        "displayName": p.display_name,
        "value": p.value,
        "category": p.category,
        "risk": p.category,
        "inSeason": p.in_season,
        "time": p.observed_at.isoformat(),
    }


def _iso(value: object) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _outcome_out(o: FetchOutcome) -> dict[str, Any]:
    return {
        "status": o.status.value,
        "source": o.source,
        "attempts": list(o.attempts),
        "error": o.error,
    }


@router.get("/live")
async def get_live(svc: EnvironmentService = Depends(get_environment)):
    live = svc.live
    return {
        "app": settings.app_name,
        "now_local": now_local().isoformat(),
        "last_updated_utc": live.last_updated_utc.isoformat() if live.last_updated_utc else None,
        "ledStatus": signal_out(live.last_signal) if live.last_signal else None,
        "reading": asdict(live.last_reading) if live.last_reading else None,
        "delivered": live.last_delivered,
        "sources": live.source_status,
    }


@router.post("/led/status")
async def led_status(req: LedStatusRequest):
    profile = req.user_profile.to_profile() if req.user_profile else None
    signal = evaluate(req.weather_data.to_reading(), profile)
    return {
        "success": True,
        "ledStatus": signal_out(signal),
        "weatherData": req.weather_data.model_dump(by_alias=True),
    }


@router.post("/led/bluetooth")
async def led_bluetooth(req: BluetoothRequest):
    signal = classify(req.weather_data.to_reading())
    return {
        "success": True,
        "bluetoothData": to_indicator_frame(signal),
        "message": signal.message,
    }


@router.get("/environment")
async def environment(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    push: bool = True,
    svc: EnvironmentService = Depends(get_environment),
):
    return _assessment_out(await svc.assess(lat, lon, push=push))


@router.post("/environment")
async def environment_for_user(
    req: EnvironmentRequest,
    svc: EnvironmentService = Depends(get_environment),
):
    profile = req.user_profile.to_profile() if req.user_profile else None
    return _assessment_out(await svc.assess(req.lat, req.lon, profile=profile, push=req.push))


def _assessment_out(result: Assessment) -> dict[str, Any]:
    return {
        "reading": asdict(result.reading),
        "ledStatus": signal_out(result.signal),
        "bluetoothData": to_indicator_frame(result.signal),
        "delivered": result.delivered,
        "air": {"pm25": result.air.value.pm25, "pm10": result.air.value.pm10} if result.air.value else None,
        "pollen": _pollen_out(result.pollen.value),
        "sources": {
            "weather": _outcome_out(result.weather),
            "air": _outcome_out(result.air),
            "pollen": _outcome_out(result.pollen),
        },
    }


@router.get("/air-quality")
async def air_quality(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    svc: EnvironmentService = Depends(get_environment),
):
    air = await svc.air_quality(lat, lon)
    if air is None:
        return None
    return {"pm25": air.pm25, "pm10": air.pm10}


@router.get("/pollen")
async def pollen(
    lat: float = Query(ge=-90, le=90),
    lon: float = Query(ge=-180, le=180),
    svc: EnvironmentService = Depends(get_environment),
):
    return _pollen_out(await svc.pollen(lat, lon))


@router.post("/schedule/location")
async def schedule_location(req: ScheduleQuery):
    profile = req.profile.to_profile()
    target = to_local_date(req.requested)
    entry = find_entry_for_date(profile, req.requested)
    return {
        "date": target.isoformat() if target else None,
        "location": entry.best_location if entry else None,
        "entry": {"id": entry.id, "title": entry.title, "start": _iso(entry.start)} if entry else None,
    }


@router.post("/schedule/entries")
async def schedule_entries(req: ScheduleQuery):
    profile = req.profile.to_profile()
    target = to_local_date(req.requested)
    return {
        "date": target.isoformat() if target else None,
        "entries": [
            {"title": s.title, "resolvedLocation": s.location, "start": _iso(s.start)}
            for s in find_all_entries_for_date(profile, req.requested)
        ],
    }
