import sys
from presensi.database import SessionLocal
from presensi.models.models import Karyawan
from presensi.core.security import hash_pin

if len(sys.argv) < 4:
    print("Usage: python seed_karyawan.py <nik> <nama> <pin>")
    sys.exit(1)

nik, nama, pin = sys.argv[1], sys.argv[2], sys.argv[3]

db = SessionLocal()
try:
    karyawan = db.query(Karyawan).filter(Karyawan.nik == nik).first()
    if karyawan:
        karyawan.nama = nama
        karyawan.pin = hash_pin(pin)
        karyawan.is_activated = True
        print(f"Updated karyawan {nik} ({nama})")
    else:
        db.add(Karyawan(nik=nik, nama=nama, pin=hash_pin(pin), is_activated=True))
        print(f"Created karyawan {nik} ({nama})")
    db.commit()
finally:
    db.close()
