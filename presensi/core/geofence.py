"""
Geofence: Validasi Lokasi Presensi
====================================
Menghitung jarak great-circle (Haversine) antara posisi karyawan dan titik
kantor, lalu memutuskan apakah posisi tersebut masih di dalam radius yang
diizinkan.

Semua fungsi di sini murni (tanpa I/O). Satu-satunya efek samping adalah
baris log diagnostik pada validate(), lewat logger yang bisa di-inject.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

EARTH_RADIUS_METERS = 6_371_000

logger = logging.getLogger("geofence")


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class GeofenceRule:
    center: GeoPoint
    radius_meters: float


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    distance_meters: int
    allowed_radius_meters: float

    def to_dict(self) -> dict:
        return {
            "isValid": self.is_valid,
            "distance": self.distance_meters,
            "allowedRadius": self.allowed_radius_meters,
        }


class GeofenceInputError(ValueError):
    """Koordinat atau radius di luar rentang yang sah."""

    def __init__(self, fields: List[str]):
        self.fields = fields
        super().__init__(f"Nilai di luar rentang: {', '.join(fields)}")


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_distance(a: GeoPoint, b: GeoPoint) -> int:
    """Jarak Haversine dalam meter, dibulatkan ke meter terdekat (half-up)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    delta_phi = math.radians(b.latitude - a.latitude)
    delta_lambda = math.radians(b.longitude - a.longitude)

    h = math.sin(delta_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(delta_lambda / 2) ** 2
    # h secara matematis di [0, 1]; floating point bisa sedikit lewat (titik antipodal)
    h = min(1.0, max(0.0, h))

    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return _round_half_up(EARTH_RADIUS_METERS * c)


def check_ranges(point: GeoPoint, radius_meters: Optional[float] = None) -> None:
    """
    Raise GeofenceInputError berisi semua field yang tidak sah.
    Tidak dipanggil oleh compute_distance/validate; dipakai oleh lapisan pemanggil.
    """
    bad = []
    if not -90 <= point.latitude <= 90:
        bad.append("latitude")
    if not -180 <= point.longitude <= 180:
        bad.append("longitude")
    if radius_meters is not None and radius_meters < 0:
        bad.append("radius_meters")
    if bad:
        raise GeofenceInputError(bad)


class GeofenceValidator:
    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

    def compute_distance(self, a: GeoPoint, b: GeoPoint) -> int:
        return compute_distance(a, b)

    def validate(self, user_position: GeoPoint, rule: GeofenceRule) -> ValidationResult:
        distance = compute_distance(user_position, rule.center)
        is_valid = distance <= rule.radius_meters

        self.log.info(
            f"Location validation: distance={distance}m, "
            f"radius={rule.radius_meters}m, isValid={is_valid}"
        )

        return ValidationResult(
            is_valid=is_valid,
            distance_meters=distance,
            allowed_radius_meters=rule.radius_meters,
        )


def validate(user_position: GeoPoint, rule: GeofenceRule, log: Optional[logging.Logger] = None) -> ValidationResult:
    return GeofenceValidator(log).validate(user_position, rule)
