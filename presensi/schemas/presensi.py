from pydantic import BaseModel, Field
from typing import Optional, List


class LocationRequest(BaseModel):
    latitude: float = Field(..., ge=-90, le=90, description="Latitude lokasi user")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude lokasi user")


class OfficeLocation(BaseModel):
    latitude: float
    longitude: float


class LocationValidationData(BaseModel):
    isValid: bool
    distance: int
    allowedRadius: float
    officeLocation: OfficeLocation


class LocationValidationResponse(BaseModel):
    status: bool
    data: LocationValidationData


class OfficeLocationData(BaseModel):
    latitude: float
    longitude: float
    radiusMeters: float
    address: Optional[str] = None


class OfficeLocationResponse(BaseModel):
    status: bool
    message: str
    data: OfficeLocationData


class PresensiData(BaseModel):
    id: int
    tanggal: str
    jam_masuk: Optional[str] = None
    jam_keluar: Optional[str] = None
    status: str
    distance_in: Optional[float] = None
    distance_out: Optional[float] = None
    work_duration_minutes: Optional[int] = None


class PresensiResponse(BaseModel):
    status: bool
    message: str
    data: Optional[PresensiData] = None


class PresensiHistoryResponse(BaseModel):
    status: bool
    message: str
    data: List[PresensiData]


class AttendanceStatusData(BaseModel):
    tanggal: str
    presensi: Optional[PresensiData] = None
    canCheckIn: bool
    canCheckOut: bool


class AttendanceStatusResponse(BaseModel):
    status: bool
    message: str
    data: AttendanceStatusData
