import sys
from presensi.database import SessionLocal
from presensi.core.geofence import GeoPoint, GeofenceValidator, GeofenceInputError, check_ranges
from presensi.services.office_location import load_office_rule, OfficeLocationNotConfigured

if len(sys.argv) < 3:
    print("Usage: python check_location.py <lat> <long>")
    sys.exit(1)

point = GeoPoint(float(sys.argv[1]), float(sys.argv[2]))
try:
    check_ranges(point)
except GeofenceInputError as e:
    print(f"Koordinat tidak valid: {', '.join(e.fields)}")
    sys.exit(1)

db = SessionLocal()
try:
    rule = load_office_rule(db)
except OfficeLocationNotConfigured:
    print("Office location not configured")
    sys.exit(1)
finally:
    db.close()

result = GeofenceValidator().validate(point, rule)

print(f"Kantor : {rule.center.latitude}, {rule.center.longitude} (radius {rule.radius_meters}m)")
print(f"User   : {point.latitude}, {point.longitude}")
print(f"Jarak  : {result.distance_meters}m")
print(f"Valid? {'✅ YES' if result.is_valid else '❌ NO'}")
