"""
Migration: Create Core Tables
Membuat tabel pengaturan, karyawan, presensi (idempotent: aman dijalankan ulang).
Jika tabel pengaturan kosong, isi lokasi kantor default dari Settings.
"""
from presensi.core.config import get_settings
from presensi.database import engine, Base, SessionLocal
from presensi.models.models import Pengaturan, Karyawan, Presensi

settings = get_settings()

print("Running migration: Create Core Tables")

# Create table if not exists
Base.metadata.create_all(bind=engine, tables=[Pengaturan.__table__, Karyawan.__table__, Presensi.__table__])
print("✓ Pengaturan, Karyawan, Presensi table created/verified")

# Seed office location
db = SessionLocal()
try:
    if not db.query(Pengaturan).first():
        db.add(Pengaturan(
            lat_kantor=settings.DEFAULT_OFFICE_LAT,
            long_kantor=settings.DEFAULT_OFFICE_LONG,
            radius_meter=settings.DEFAULT_RADIUS_METERS,
        ))
        db.commit()
        print(f"✓ Office location seeded: {settings.DEFAULT_OFFICE_LAT}, {settings.DEFAULT_OFFICE_LONG} "
              f"(radius {settings.DEFAULT_RADIUS_METERS}m)")
    else:
        print("Pengaturan already has data.")
finally:
    db.close()

print("Migration completed: Create Core Tables")
