from pydantic import BaseModel, Field
from typing import Optional


class LoginRequest(BaseModel):
    nik: str = Field(..., min_length=1, max_length=16)
    pin: str = Field(..., min_length=1)


class RefreshRequest(BaseModel):
    refreshToken: str


class EmployeeData(BaseModel):
    id: int
    nik: str
    nama: str
    email: Optional[str] = None
    phone: Optional[str] = None
    is_activated: bool


class TokenPair(BaseModel):
    accessToken: str
    refreshToken: str


class LoginData(TokenPair):
    employee: EmployeeData


class LoginResponse(BaseModel):
    status: bool
    message: str
    data: LoginData


class RefreshResponse(BaseModel):
    status: bool
    data: TokenPair


class ProfileResponse(BaseModel):
    status: bool
    data: EmployeeData


class CurrentKaryawan(BaseModel):
    id: int
    nik: str
    nama: str


class CheckNikRequest(BaseModel):
    nik: Optional[str] = None


class CheckNikEmployee(BaseModel):
    id: int
    nik: str
    nama: str


class CheckNikData(BaseModel):
    exists: bool
    is_activated: bool
    employee: Optional[CheckNikEmployee] = None


class CheckNikResponse(BaseModel):
    status: bool
    message: str
    data: CheckNikData


class SetPinRequest(BaseModel):
    nik: str = Field(..., min_length=1, max_length=16)
    pin: Optional[str] = None
    confirmPin: Optional[str] = None


class SetPinResponse(BaseModel):
    status: bool
    message: str
    data: EmployeeData


class ChangePinRequest(BaseModel):
    current_pin: Optional[str] = None
    new_pin: Optional[str] = None


class ChangePinData(BaseModel):
    changed_at: str


class ChangePinResponse(BaseModel):
    status: bool
    message: str
    data: ChangePinData


class MessageResponse(BaseModel):
    status: bool
    message: str
