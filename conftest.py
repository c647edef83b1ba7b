import os

# Harus di-set sebelum presensi.* di-import (engine dibuat saat import)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-presensi"
os.environ.setdefault("TIMEZONE", "Asia/Jakarta")

import pytest
from fastapi.testclient import TestClient

from presensi.core.config import Settings, get_settings
from presensi.core.security import TokenService, hash_pin
from presensi.database import Base, engine, SessionLocal
from presensi.main import app_fastapi
from presensi.models.models import Pengaturan, Karyawan

# Kantor contoh (Karangasem, Bali)
OFFICE_LAT = -8.4000271
OFFICE_LONG = 115.5430133
OFFICE_RADIUS = 100


@pytest.fixture
def settings():
    return Settings(DATABASE_URL="sqlite://", JWT_SECRET="test-secret-presensi")


@pytest.fixture
def db():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def kantor(db):
    setting = Pengaturan(lat_kantor=OFFICE_LAT, long_kantor=OFFICE_LONG, radius_meter=OFFICE_RADIUS)
    db.add(setting)
    db.commit()
    return setting


@pytest.fixture
def karyawan(db):
    k = Karyawan(nik="3201010101010001", nama="Shakira", pin=hash_pin("123456"), is_activated=True)
    db.add(k)
    db.commit()
    db.refresh(k)
    return k


@pytest.fixture
def client(settings):
    app_fastapi.dependency_overrides[get_settings] = lambda: settings
    with TestClient(app_fastapi) as c:
        yield c
    app_fastapi.dependency_overrides.clear()


@pytest.fixture
def auth_headers(settings, karyawan):
    token = TokenService(settings).create_access_token({"id": karyawan.id, "nik": karyawan.nik})
    return {"Authorization": f"Bearer {token}"}
