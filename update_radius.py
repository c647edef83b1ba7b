"""
Update radius lokasi kantor (default 300 meter).
Usage: python update_radius.py [meter]
"""
import sys
from presensi.database import SessionLocal
from presensi.services.office_location import get_active_pengaturan

radius = int(sys.argv[1]) if len(sys.argv) > 1 else 300
if radius < 0:
    print("Radius tidak boleh negatif")
    sys.exit(1)

db = SessionLocal()
try:
    setting = get_active_pengaturan(db)
    if not setting:
        print("Tabel pengaturan kosong. Jalankan create_core_tables.py dulu.")
        sys.exit(1)

    print(f"Updating radius to {radius} meters...")
    setting.radius_meter = radius
    db.commit()
    db.refresh(setting)

    print("─────────────────────────────────────")
    print(f"Latitude:  {setting.lat_kantor}")
    print(f"Longitude: {setting.long_kantor}")
    print(f"Radius:    {setting.radius_meter} meters")
    print("─────────────────────────────────────")
    print("✓ Radius update completed")
finally:
    db.close()
