from fastapi import APIRouter, Depends, HTTPException, status, Header
from sqlalchemy.orm import Session
from typing import Optional

from presensi.database import get_db
from presensi.core.config import Settings, get_settings
from presensi.core.security import TokenService, TokenError, TOKEN_TYPE_ACCESS, TOKEN_TYPE_REFRESH, verify_pin
from presensi.core.activity_log import log_activity
from presensi.models.models import Karyawan
from presensi.schemas.auth import (
    LoginRequest, LoginResponse, RefreshRequest, RefreshResponse,
    ProfileResponse, CurrentKaryawan, EmployeeData,
    CheckNikRequest, CheckNikResponse, MessageResponse,
)

router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"],
    responses={404: {"description": "Not found"}},
)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService(settings)


def get_current_karyawan(
    authorization: Optional[str] = Header(None),
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db)
) -> CurrentKaryawan:
    """
    Auth dependency: Bearer access token -> karyawan aktif.
    401 jika token tidak dikirim, 403 jika token tidak valid/expired.
    """
    token = None
    if authorization and authorization.startswith("Bearer "):
        token = authorization.split(" ", 1)[1].strip()

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "TOKEN_REQUIRED", "message": "Access token required"},
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        claims = tokens.verify_token(token, expected_type=TOKEN_TYPE_ACCESS)
    except TokenError:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "TOKEN_INVALID", "message": "Invalid or expired token"},
        )

    karyawan = db.query(Karyawan).filter(Karyawan.id == claims.get("id")).first()
    if not karyawan:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail={"code": "TOKEN_INVALID", "message": "Karyawan tidak ditemukan"},
        )

    return CurrentKaryawan(id=karyawan.id, nik=karyawan.nik, nama=karyawan.nama)


def _employee_data(karyawan: Karyawan) -> EmployeeData:
    return EmployeeData(
        id=karyawan.id,
        nik=karyawan.nik,
        nama=karyawan.nama,
        email=karyawan.email,
        phone=karyawan.phone,
        is_activated=bool(karyawan.is_activated),
    )


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    tokens: TokenService = Depends(get_token_service),
    db: Session = Depends(get_db)
):
    # 1. Cari karyawan by NIK
    karyawan = db.query(Karyawan).filter(Karyawan.nik == request.nik).first()
    if not karyawan:
        log_activity("auth", "Login attempt", {"nik": request.nik, "reason": "NIK_NOT_FOUND"}, success=False)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "NIK_NOT_FOUND", "message": "NIK not found"},
        )

    # 2. Belum aktivasi (PIN belum dibuat)
    if not karyawan.pin:
        log_activity("auth", "Login attempt", {"nik": request.nik, "reason": "NOT_ACTIVATED"}, success=False)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "NOT_ACTIVATED", "message": "Akun belum diaktivasi"},
        )

    # 3. Verify PIN (bcrypt)
    if not verify_pin(request.pin, karyawan.pin):
        log_activity("auth", "Login attempt", {"nik": request.nik, "reason": "INVALID_PIN"}, success=False)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "INVALID_PIN", "message": "Invalid PIN"},
        )

    payload = {"id": karyawan.id, "nik": karyawan.nik}
    access_token = tokens.create_access_token(payload)
    refresh_token = tokens.create_refresh_token(payload)

    log_activity("auth", "Login attempt", {"nik": karyawan.nik})

    return {
        "status": True,
        "message": "Login successful",
        "data": {
            "accessToken": access_token,
            "refreshToken": refresh_token,
            "employee": _employee_data(karyawan),
        },
    }


@router.post("/refresh", response_model=RefreshResponse)
async def refresh(
    request: RefreshRequest,
    tokens: TokenService = Depends(get_token_service)
):
    try:
        decoded = tokens.verify_token(request.refreshToken, expected_type=TOKEN_TYPE_REFRESH)
    except TokenError as e:
        log_activity("auth", "Refresh token", {"error": str(e)}, success=False)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "INVALID_REFRESH_TOKEN", "message": "Invalid refresh token"},
        )

    payload = {"id": decoded.get("id"), "nik": decoded.get("nik")}
    return {
        "status": True,
        "data": {
            "accessToken": tokens.create_access_token(payload),
            "refreshToken": tokens.create_refresh_token(payload),
        },
    }


@router.get("/profile", response_model=ProfileResponse)
async def profile(
    current: CurrentKaryawan = Depends(get_current_karyawan),
    db: Session = Depends(get_db)
):
    karyawan = db.query(Karyawan).filter(Karyawan.id == current.id).first()
    return {"status": True, "data": _employee_data(karyawan)}


@router.post("/check-nik", response_model=CheckNikResponse)
async def check_nik(request: CheckNikRequest, db: Session = Depends(get_db)):
    """Cek NIK sebelum login/aktivasi: terdaftar? sudah punya PIN?"""
    if not request.nik:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "MISSING_NIK", "message": "NIK is required"},
        )

    karyawan = db.query(Karyawan).filter(Karyawan.nik == request.nik).first()
    if not karyawan:
        return {
            "status": True,
            "message": "NIK not found",
            "data": {"exists": False, "is_activated": False, "employee": None},
        }

    return {
        "status": True,
        "message": "NIK found",
        "data": {
            "exists": True,
            "is_activated": bool(karyawan.is_activated),
            "employee": {"id": karyawan.id, "nik": karyawan.nik, "nama": karyawan.nama},
        },
    }


@router.post("/logout", response_model=MessageResponse)
async def logout(current: CurrentKaryawan = Depends(get_current_karyawan)):
    # Token stateless: client cukup membuang token
    log_activity("auth", "Logout", {"nik": current.nik})
    return {"status": True, "message": "Logout successful"}
