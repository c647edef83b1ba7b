from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from datetime import datetime, timezone

from presensi.database import get_db
from presensi.core.security import PIN_LENGTH, hash_pin, verify_pin, is_valid_pin_format
from presensi.core.activity_log import log_activity
from presensi.models.models import Karyawan
from presensi.routers.auth import get_current_karyawan, _employee_data
from presensi.schemas.auth import (
    CurrentKaryawan, SetPinRequest, SetPinResponse, ChangePinRequest, ChangePinResponse,
)

router = APIRouter(
    prefix="/api",
    tags=["PIN"],
    responses={404: {"description": "Not found"}},
)


def _pin_error(code: str, message: str, status_code: int = status.HTTP_400_BAD_REQUEST) -> HTTPException:
    return HTTPException(status_code=status_code, detail={"code": code, "message": message})


@router.post("/activation/set-pin", response_model=SetPinResponse)
async def set_pin(request: SetPinRequest, db: Session = Depends(get_db)):
    """
    Aktivasi akun: buat PIN pertama kali.
    Tanpa token (login butuh PIN), hanya untuk karyawan yang belum punya PIN.
    """
    if not request.pin or not request.confirmPin:
        raise _pin_error("MISSING_PIN", "PIN and confirm PIN are required")

    if request.pin != request.confirmPin:
        raise _pin_error("PIN_MISMATCH", "PIN and confirm PIN do not match")

    if not is_valid_pin_format(request.pin):
        raise _pin_error("INVALID_PIN_FORMAT", f"PIN must be exactly {PIN_LENGTH} digits")

    karyawan = db.query(Karyawan).filter(Karyawan.nik == request.nik).first()
    if not karyawan:
        raise _pin_error("NIK_NOT_FOUND", "NIK not found")

    if karyawan.pin:
        log_activity("auth", "Set PIN", {"nik": karyawan.nik, "reason": "PIN_ALREADY_SET"}, success=False)
        raise _pin_error("PIN_ALREADY_SET", "PIN is already set")

    karyawan.pin = hash_pin(request.pin)
    karyawan.is_activated = True
    db.commit()
    db.refresh(karyawan)

    log_activity("auth", "Set PIN", {"nik": karyawan.nik})

    return {
        "status": True,
        "message": "PIN set successfully",
        "data": _employee_data(karyawan),
    }


@router.post("/pin/change", response_model=ChangePinResponse)
async def change_pin(
    request: ChangePinRequest,
    current: CurrentKaryawan = Depends(get_current_karyawan),
    db: Session = Depends(get_db)
):
    if not request.current_pin or not request.new_pin:
        raise _pin_error("MISSING_PIN", "Current PIN and new PIN are required")

    if not is_valid_pin_format(request.new_pin):
        raise _pin_error("INVALID_PIN_FORMAT", f"New PIN must be exactly {PIN_LENGTH} digits")

    karyawan = db.query(Karyawan).filter(Karyawan.id == current.id).first()

    if not verify_pin(request.current_pin, karyawan.pin):
        log_activity("auth", "Change PIN", {"nik": current.nik, "reason": "INVALID_CURRENT_PIN"}, success=False)
        raise _pin_error("INVALID_CURRENT_PIN", "Current PIN is incorrect", status.HTTP_401_UNAUTHORIZED)

    karyawan.pin = hash_pin(request.new_pin)
    db.commit()

    log_activity("auth", "Change PIN", {"nik": current.nik})

    return {
        "status": True,
        "message": "PIN changed successfully",
        "data": {"changed_at": datetime.now(timezone.utc).isoformat()},
    }
