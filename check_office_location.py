from presensi.database import SessionLocal
from presensi.models.models import Pengaturan

db = SessionLocal()

print("Checking office location settings...\n")

rows = db.query(Pengaturan).order_by(Pengaturan.id).all()
print(f"Found {len(rows)} rows in pengaturan table:\n")

for i, row in enumerate(rows, start=1):
    print(f"Row {i}:")
    print(f"  ID: {row.id}")
    print(f"  Lokasi Kantor: {row.lat_kantor}, {row.long_kantor}")
    print(f"  Radius: {row.radius_meter}m")
    print(f"  Alamat: {row.alamat_kantor}")
    print("")

# Yang dipakai API = baris pertama
if rows:
    active = rows[0]
    print("Currently active setting (LIMIT 1):")
    print(f"  ID: {active.id}")
    print(f"  Lokasi: {active.lat_kantor}, {active.long_kantor}")
    print(f"  Radius: {active.radius_meter}m")

db.close()
