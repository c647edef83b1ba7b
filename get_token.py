import sys
from presensi.core.config import get_settings
from presensi.core.security import TokenService
from presensi.database import SessionLocal
from presensi.models.models import Karyawan

db = SessionLocal()
query = db.query(Karyawan)
if len(sys.argv) > 1:
    query = query.filter(Karyawan.nik == sys.argv[1])
# get any karyawan if NIK not given
karyawan = query.order_by(Karyawan.id).first()
if karyawan:
    token = TokenService(get_settings()).create_access_token({"id": karyawan.id, "nik": karyawan.nik})
    print(token)
else:
    print("Karyawan not found")
db.close()
