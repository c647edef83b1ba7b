import sys
import pytz
from datetime import datetime

from presensi.core.config import get_settings
from presensi.database import SessionLocal
from presensi.models.models import Karyawan, Presensi

settings = get_settings()
db = SessionLocal()
today = datetime.now(pytz.timezone(settings.TIMEZONE)).date()
nik = sys.argv[1] if len(sys.argv) > 1 else None

print(f"=== CHECKING ATTENDANCE DATA ({today}) ===\n")

query = db.query(Presensi, Karyawan).join(Karyawan, Presensi.id_karyawan == Karyawan.id).filter(Presensi.tanggal == today)
if nik:
    query = query.filter(Karyawan.nik == nik)
rows = query.order_by(Presensi.jam_masuk).all()

if not rows:
    print("❌ No attendance record found for today")

for p, k in rows:
    print(f"{k.nik} {k.nama}")
    print(f"  Masuk : {p.jam_masuk} (jarak {p.distance_in}m)")
    print(f"  Keluar: {p.jam_keluar or '-'} (jarak {p.distance_out if p.distance_out is not None else '-'}m)")
    print(f"  Status: {p.status}")

db.close()
