import sys
from presensi.database import SessionLocal
from presensi.models.models import Pengaturan
from presensi.services.office_location import get_active_pengaturan
from presensi.core.geofence import GeoPoint, GeofenceInputError, check_ranges

if len(sys.argv) < 3:
    print("Usage: python update_office_location.py <lat> <long> [radius]")
    sys.exit(1)

lat, lng = float(sys.argv[1]), float(sys.argv[2])
radius = int(sys.argv[3]) if len(sys.argv) > 3 else None

try:
    check_ranges(GeoPoint(lat, lng), radius)
except GeofenceInputError as e:
    print(f"Input tidak valid: {', '.join(e.fields)}")
    sys.exit(1)

db = SessionLocal()
try:
    setting = get_active_pengaturan(db)
    if not setting:
        setting = Pengaturan()
        db.add(setting)
        print("Pengaturan kosong, membuat baris baru")

    setting.lat_kantor = lat
    setting.long_kantor = lng
    if radius is not None:
        setting.radius_meter = radius
    db.commit()
    db.refresh(setting)

    print(f"✓ Office location updated: {setting.lat_kantor}, {setting.long_kantor} (radius {setting.radius_meter}m)")
finally:
    db.close()
