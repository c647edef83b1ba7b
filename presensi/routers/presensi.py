from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from datetime import datetime, date
from decimal import Decimal
from typing import Optional
import pytz

from presensi.database import get_db
from presensi.core.config import Settings, get_settings
from presensi.core.geofence import GeofenceValidator, GeoPoint, ValidationResult
from presensi.core.activity_log import log_activity
from presensi.models.models import Presensi
from presensi.routers.auth import get_current_karyawan
from presensi.routers.validation import get_geofence_validator, office_rule_or_error
from presensi.schemas.auth import CurrentKaryawan
from presensi.schemas.presensi import (
    LocationRequest, PresensiResponse, PresensiHistoryResponse, AttendanceStatusResponse,
)

router = APIRouter(
    prefix="/api/attendance",
    tags=["Attendance"],
    responses={404: {"description": "Not found"}},
)


def now_local(settings: Settings) -> datetime:
    return datetime.now(pytz.timezone(settings.TIMEZONE))


def work_duration_minutes(tanggal: date, jam_masuk, jam_keluar) -> Optional[int]:
    if not jam_masuk or not jam_keluar:
        return None
    delta = datetime.combine(tanggal, jam_keluar) - datetime.combine(tanggal, jam_masuk)
    return max(0, int(delta.total_seconds() // 60))


def find_today_presensi(db: Session, id_karyawan: int, today: date) -> Optional[Presensi]:
    return db.query(Presensi).filter(Presensi.id_karyawan == id_karyawan, Presensi.tanggal == today).first()


def presensi_to_dict(p: Presensi) -> dict:
    return {
        "id": p.id,
        "tanggal": p.tanggal.strftime("%Y-%m-%d"),
        "jam_masuk": p.jam_masuk.strftime("%H:%M:%S") if p.jam_masuk else None,
        "jam_keluar": p.jam_keluar.strftime("%H:%M:%S") if p.jam_keluar else None,
        "status": p.status,
        "distance_in": float(p.distance_in) if p.distance_in is not None else None,
        "distance_out": float(p.distance_out) if p.distance_out is not None else None,
        "work_duration_minutes": work_duration_minutes(p.tanggal, p.jam_masuk, p.jam_keluar),
    }


def ensure_inside_office(
    request: LocationRequest,
    validator: GeofenceValidator,
    db: Session
) -> ValidationResult:
    rule = office_rule_or_error(db)
    result = validator.validate(GeoPoint(request.latitude, request.longitude), rule)
    if not result.is_valid:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "LOCATION_INVALID",
                "message": "Location is outside allowed area",
                "data": {
                    "distance": result.distance_meters,
                    "allowedRadius": result.allowed_radius_meters,
                },
            },
        )
    return result


def already_checked_in() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"code": "ALREADY_CHECKED_IN", "message": "Anda sudah absen masuk hari ini."},
    )


@router.post("/checkin", response_model=PresensiResponse)
async def checkin(
    request: LocationRequest,
    current: CurrentKaryawan = Depends(get_current_karyawan),
    validator: GeofenceValidator = Depends(get_geofence_validator),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    now = now_local(settings)
    today = now.date()

    try:
        location = ensure_inside_office(request, validator, db)
    except HTTPException:
        log_activity("attendance", "Clock In", {
            "nik": current.nik,
            "location": f"{request.latitude}, {request.longitude}",
        }, success=False)
        raise

    if find_today_presensi(db, current.id, today):
        raise already_checked_in()

    presensi = Presensi(
        id_karyawan=current.id,
        tanggal=today,
        jam_masuk=now.time().replace(microsecond=0),
        lat_masuk=Decimal(str(request.latitude)),
        long_masuk=Decimal(str(request.longitude)),
        distance_in=Decimal(location.distance_meters),
        status='hadir',
    )
    db.add(presensi)
    try:
        db.commit()
    except IntegrityError:
        # Check-in paralel untuk hari yang sama: unique_employee_date
        db.rollback()
        log_activity("attendance", "Clock In", {"nik": current.nik, "reason": "ALREADY_CHECKED_IN"}, success=False)
        raise already_checked_in()
    db.refresh(presensi)

    log_activity("attendance", "Clock In", {
        "nik": current.nik,
        "location": f"{request.latitude}, {request.longitude}",
        "locationValid": location.is_valid,
        "distance": f"{location.distance_meters}m",
    })

    return {
        "status": True,
        "message": "Berhasil Absen Masuk",
        "data": presensi_to_dict(presensi),
    }


@router.post("/checkout", response_model=PresensiResponse)
async def checkout(
    request: LocationRequest,
    current: CurrentKaryawan = Depends(get_current_karyawan),
    validator: GeofenceValidator = Depends(get_geofence_validator),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    now = now_local(settings)
    today = now.date()

    try:
        location = ensure_inside_office(request, validator, db)
    except HTTPException:
        log_activity("attendance", "Clock Out", {
            "nik": current.nik,
            "location": f"{request.latitude}, {request.longitude}",
        }, success=False)
        raise

    presensi = find_today_presensi(db, current.id, today)
    if not presensi or not presensi.jam_masuk:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "NOT_CHECKED_IN", "message": "Belum absen masuk, tidak bisa absen pulang."},
        )
    if presensi.jam_keluar:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "ALREADY_CHECKED_OUT", "message": "Anda sudah absen pulang sebelumnya."},
        )

    presensi.jam_keluar = now.time().replace(microsecond=0)
    presensi.lat_keluar = Decimal(str(request.latitude))
    presensi.long_keluar = Decimal(str(request.longitude))
    presensi.distance_out = Decimal(location.distance_meters)
    db.commit()
    db.refresh(presensi)

    data = presensi_to_dict(presensi)
    log_activity("attendance", "Clock Out", {
        "nik": current.nik,
        "location": f"{request.latitude}, {request.longitude}",
        "locationValid": location.is_valid,
        "distance": f"{location.distance_meters}m",
        "workDuration": data["work_duration_minutes"],
    })

    return {
        "status": True,
        "message": "Berhasil Absen Pulang",
        "data": data,
    }


@router.get("/today", response_model=PresensiResponse)
async def today_attendance(
    current: CurrentKaryawan = Depends(get_current_karyawan),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    today = now_local(settings).date()
    presensi = find_today_presensi(db, current.id, today)

    return {
        "status": True,
        "message": "Data Presensi Hari Ini",
        "data": presensi_to_dict(presensi) if presensi else None,
    }


@router.get("/history", response_model=PresensiHistoryResponse)
async def history(
    limit: int = Query(30, ge=1, le=100),
    current: CurrentKaryawan = Depends(get_current_karyawan),
    db: Session = Depends(get_db)
):
    rows = (
        db.query(Presensi)
        .filter(Presensi.id_karyawan == current.id)
        .order_by(Presensi.tanggal.desc())
        .limit(limit)
        .all()
    )
    return {
        "status": True,
        "message": "Riwayat Presensi",
        "data": [presensi_to_dict(p) for p in rows],
    }


@router.get("/status/{id_karyawan}", response_model=AttendanceStatusResponse)
async def attendance_status(
    id_karyawan: int,
    current: CurrentKaryawan = Depends(get_current_karyawan),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Status presensi hari ini + tombol mana yang boleh aktif di aplikasi."""
    if id_karyawan != current.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "ACCESS_DENIED", "message": "Access denied"},
        )

    today = now_local(settings).date()
    presensi = find_today_presensi(db, current.id, today)
    checked_in = bool(presensi and presensi.jam_masuk)
    checked_out = bool(presensi and presensi.jam_keluar)

    return {
        "status": True,
        "message": "Status Presensi Hari Ini",
        "data": {
            "tanggal": today.strftime("%Y-%m-%d"),
            "presensi": presensi_to_dict(presensi) if presensi else None,
            "canCheckIn": not checked_in,
            "canCheckOut": checked_in and not checked_out,
        },
    }
