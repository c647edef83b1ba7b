"""
Office Location: Loader Aturan Geofence
=========================================
Baca lokasi & radius kantor dari tabel `pengaturan` (baris pertama = aktif)
dan ubah menjadi GeofenceRule untuk validator.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from presensi.core.geofence import GeofenceRule, GeoPoint, check_ranges
from presensi.models.models import Pengaturan

logger = logging.getLogger("office_location")


class OfficeLocationNotConfigured(Exception):
    pass


def get_active_pengaturan(db: Session) -> Optional[Pengaturan]:
    return db.query(Pengaturan).order_by(Pengaturan.id).first()


def load_office_rule(db: Session) -> GeofenceRule:
    """Raise OfficeLocationNotConfigured jika tabel kosong, GeofenceInputError jika data rusak."""
    setting = get_active_pengaturan(db)
    if not setting:
        logger.error("Office location not configured (tabel pengaturan kosong)")
        raise OfficeLocationNotConfigured("Office location not configured")

    center = GeoPoint(latitude=float(setting.lat_kantor), longitude=float(setting.long_kantor))
    radius = float(setting.radius_meter)
    check_ranges(center, radius)

    return GeofenceRule(center=center, radius_meters=radius)
